"""Session module for n8n Architect.

Provides the session orchestrator and the persisted connection config store.
"""

from n8n_architect.core.session.config_store import STORAGE_KEY, ConfigStore
from n8n_architect.core.session.orchestrator import SessionOrchestrator

__all__ = ["ConfigStore", "STORAGE_KEY", "SessionOrchestrator"]
