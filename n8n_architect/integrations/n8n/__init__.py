"""n8n REST API integration."""

from n8n_architect.integrations.n8n.client import API_KEY_HEADER, N8nApiClient
from n8n_architect.integrations.n8n.payload import build_submission_payload, default_workflow_name

__all__ = ["API_KEY_HEADER", "N8nApiClient", "build_submission_payload", "default_workflow_name"]
