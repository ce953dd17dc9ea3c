"""Submission payload builder for the n8n public API."""

from datetime import datetime
from typing import Any, Dict, Optional

from n8n_architect.models.workflow import WorkflowDocument

DEFAULT_NAME_PREFIX = "AI Generated Workflow"


def default_workflow_name(now: Optional[datetime] = None) -> str:
    """Name used when the generated workflow carries none.

    Example:
        >>> default_workflow_name(datetime(2024, 5, 1, 9, 30))
        'AI Generated Workflow - Wed May  1 09:30:00 2024'
    """
    now = now or datetime.now()
    return f"{DEFAULT_NAME_PREFIX} - {now.strftime('%c')}"


def default_settings() -> Dict[str, Any]:
    return {
        "saveManualExecutions": True,
        "callers": [],
    }


def build_submission_payload(
    document: WorkflowDocument, now: Optional[datetime] = None
) -> Dict[str, Any]:
    """Build the body for POST /api/v1/workflows.

    Nodes and connections are sent exactly as parsed. Keys in document.meta are
    spread at the top level last, so they override the defaults (name, settings).

    Args:
        document: Workflow to submit
        now: Clock override for the synthesized name

    Returns:
        JSON-ready payload dict
    """
    wire = document.to_wire()
    payload: Dict[str, Any] = {
        "name": document.name or default_workflow_name(now),
        "nodes": wire["nodes"],
        "connections": wire["connections"],
        "settings": default_settings(),
    }
    if document.meta:
        payload.update(document.meta)
    return payload
