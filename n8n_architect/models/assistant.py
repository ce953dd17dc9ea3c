"""Conversation and assistant reply models for n8n Architect.

The raw reply keeps Gemini's camelCase field names; AssistantResult is what the
rest of the package consumes.
"""

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from n8n_architect.core.errors import ErrorKind
from n8n_architect.models.workflow import WorkflowDocument


class Role(str, Enum):
    """Author of a conversation turn."""

    USER = "user"
    ASSISTANT = "assistant"


class AssistantTurn(BaseModel):
    """One message in the chat history."""

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str = Field(..., description="Markdown display text")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class RawAssistantReply(BaseModel):
    """Outer JSON object the assistant must return.

    workflowJson is a JSON-encoded string, not a nested object: it needs a second parse.
    """

    model_config = ConfigDict(extra="ignore")

    explanation: str
    workflowJson: Optional[str] = None
    requiredCredentials: List[str] = Field(default_factory=list)
    tips: List[str] = Field(default_factory=list)

    @field_validator("workflowJson", mode="before")
    @classmethod
    def _encode_inline_object(cls, value: Any) -> Any:
        # Tolerate a workflow sent as an object instead of a string
        if isinstance(value, dict):
            return json.dumps(value)
        return value

    @field_validator("requiredCredentials", "tips", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class AssistantResult(BaseModel):
    """Parsed assistant turn: explanation plus optional workflow."""

    explanation: str
    workflow: Optional[WorkflowDocument] = None
    required_credentials: List[str] = Field(default_factory=list)
    tips: List[str] = Field(default_factory=list)
    error_kind: Optional[ErrorKind] = None

    @property
    def failed(self) -> bool:
        return self.error_kind is not None
