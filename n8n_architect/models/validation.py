"""Result models for calls to the n8n REST API."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from n8n_architect.core.errors import ErrorKind


class ValidationOutcome(BaseModel):
    """Normalized result of testing a connection to an n8n instance."""

    success: bool
    kind: Optional[ErrorKind] = None
    message: Optional[str] = None
    status_code: Optional[int] = None
    status_text: Optional[str] = None

    @classmethod
    def ok(cls) -> "ValidationOutcome":
        return cls(success=True)

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        message: str,
        status_code: Optional[int] = None,
        status_text: Optional[str] = None,
    ) -> "ValidationOutcome":
        return cls(
            success=False,
            kind=kind,
            message=message,
            status_code=status_code,
            status_text=status_text,
        )


class SubmissionResult(BaseModel):
    """Acknowledgement returned by n8n after creating a workflow."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value


class SaveStatus(BaseModel):
    """User-facing status line shown after a save attempt."""

    success: bool
    message: str
    workflow_id: Optional[str] = None
