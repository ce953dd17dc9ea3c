"""Assistant reply parser for n8n Architect.

Two-stage parse: the outer reply object, then the workflow embedded in it as a
JSON string. Only the outer stage is allowed to fail the turn.
"""

import json
import re
from typing import Optional

from pydantic import ValidationError

from n8n_architect.core.errors import MalformedResponseError
from n8n_architect.core.logging import logger
from n8n_architect.models.assistant import AssistantResult, RawAssistantReply
from n8n_architect.models.workflow import WorkflowDocument

_OPENING_FENCE = re.compile(r"^```(?:json)?", re.IGNORECASE)
_CLOSING_FENCE = re.compile(r"```$")


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ```json ... ``` (or bare ```) fence.

    Example:
        >>> strip_code_fences('```json\\n{"a": 1}\\n```')
        '{"a": 1}'
    """
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = _OPENING_FENCE.sub("", cleaned, count=1)
        cleaned = _CLOSING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def parse_workflow_json(workflow_json: Optional[str]) -> Optional[WorkflowDocument]:
    """Parse the embedded workflow string.

    Returns None when the string is empty or does not hold a valid workflow; the
    failure is logged, not raised.
    """
    if not workflow_json or not workflow_json.strip():
        return None

    try:
        return WorkflowDocument.model_validate_json(strip_code_fences(workflow_json))
    except ValidationError as e:
        logger.warning(
            "workflow_json_parse_failed",
            error=str(e),
            error_count=e.error_count(),
            workflow_json_preview=workflow_json[:200],
        )
        return None


def parse_assistant_reply(text: str) -> AssistantResult:
    """Parse raw assistant reply text into an AssistantResult.

    Args:
        text: Reply text, optionally wrapped in a code fence

    Returns:
        AssistantResult; workflow is None when absent or unparseable

    Raises:
        MalformedResponseError: If the outer object is not valid JSON or lacks explanation
    """
    cleaned = strip_code_fences(text)

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"Assistant reply is not valid JSON ({e.msg})") from e

    if not isinstance(data, dict):
        raise MalformedResponseError("Assistant reply is not a JSON object")

    try:
        raw = RawAssistantReply.model_validate(data)
    except ValidationError as e:
        fields = ", ".join(".".join(str(part) for part in err["loc"]) for err in e.errors())
        raise MalformedResponseError(f"Assistant reply has invalid fields: {fields}") from e

    return AssistantResult(
        explanation=raw.explanation,
        workflow=parse_workflow_json(raw.workflowJson),
        required_credentials=raw.requiredCredentials,
        tips=raw.tips,
    )
