"""Pydantic models for n8n Architect.

All models are organized by domain:
- connection: n8n instance URL + API key
- workflow: Node/connection graph exchanged with n8n and produced by the assistant
- assistant: Chat turns and the assistant reply contract
- validation: Results of calls to the n8n REST API
"""

# Connection models
from n8n_architect.models.connection import (
    ConnectionConfig,
    normalize_base_url,
)

# Workflow models
from n8n_architect.models.workflow import (
    ConnectionTarget,
    NodeConnections,
    WorkflowDocument,
    WorkflowNode,
)

# Assistant models
from n8n_architect.models.assistant import (
    AssistantResult,
    AssistantTurn,
    RawAssistantReply,
    Role,
)

# Result models
from n8n_architect.models.validation import (
    SaveStatus,
    SubmissionResult,
    ValidationOutcome,
)

__all__ = [
    # Connection
    "ConnectionConfig",
    "normalize_base_url",
    # Workflow
    "ConnectionTarget",
    "NodeConnections",
    "WorkflowDocument",
    "WorkflowNode",
    # Assistant
    "AssistantResult",
    "AssistantTurn",
    "RawAssistantReply",
    "Role",
    # Results
    "SaveStatus",
    "SubmissionResult",
    "ValidationOutcome",
]
