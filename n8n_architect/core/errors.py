"""Error taxonomy for n8n Architect.

One enum classifies every failure the clients can observe; the exceptions
below are the few that are allowed to cross a component boundary.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Failure categories surfaced to callers.

    - NETWORK_UNREACHABLE: No response reached us (DNS, refused, CORS-style block)
    - INVALID_CREDENTIALS: Remote answered 401/403
    - SERVER_ERROR: Remote answered any other non-success status
    - NOT_A_TARGET_API: Success status but not a JSON API (e.g. a parking page)
    - MALFORMED_RESPONSE: Assistant reply could not be parsed
    - UPSTREAM_CONFIGURATION_MISSING: Gemini API key not configured
    - UPSTREAM_UNAVAILABLE: Gemini call failed (transport or API error)
    """

    NETWORK_UNREACHABLE = "network_unreachable"
    INVALID_CREDENTIALS = "invalid_credentials"
    SERVER_ERROR = "server_error"
    NOT_A_TARGET_API = "not_a_target_api"
    MALFORMED_RESPONSE = "malformed_response"
    UPSTREAM_CONFIGURATION_MISSING = "upstream_configuration_missing"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"


class ArchitectError(Exception):
    """Base class for n8n Architect errors."""

    kind: Optional[ErrorKind] = None


class WorkflowSubmissionError(ArchitectError):
    """Raised when the n8n instance refuses or never receives a workflow."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        kind: ErrorKind = ErrorKind.SERVER_ERROR,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.kind = kind


class MalformedResponseError(ArchitectError):
    """Raised when the assistant reply is not the agreed JSON object."""

    kind = ErrorKind.MALFORMED_RESPONSE


class UpstreamConfigurationError(ArchitectError):
    """Raised when the Gemini client cannot be built for lack of credentials."""

    kind = ErrorKind.UPSTREAM_CONFIGURATION_MISSING


class SessionBusyError(ArchitectError):
    """Raised when an action is triggered while the same kind of call is in flight."""


class NotConnectedError(ArchitectError):
    """Raised when a remote action needs a connection config and none is set."""


class NoWorkflowError(ArchitectError):
    """Raised when there is no current workflow to submit or export."""
