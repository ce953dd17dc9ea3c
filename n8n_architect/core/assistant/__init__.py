"""Assistant module for n8n Architect.

Provides the reply contract (prompt + schema), its parser and the service running a turn.
"""

from n8n_architect.core.assistant.parser import (
    parse_assistant_reply,
    parse_workflow_json,
    strip_code_fences,
)
from n8n_architect.core.assistant.prompts import RESPONSE_SCHEMA, SYSTEM_INSTRUCTION
from n8n_architect.core.assistant.service import AssistantService

__all__ = [
    "AssistantService",
    "RESPONSE_SCHEMA",
    "SYSTEM_INSTRUCTION",
    "parse_assistant_reply",
    "parse_workflow_json",
    "strip_code_fences",
]
