"""n8n REST API client for n8n Architect.

Validates a connection to a user's n8n instance and creates workflows on it.
"""

from typing import Optional

import httpx

from n8n_architect.config import Config
from n8n_architect.core.error_classifier import TransportErrorClassifier
from n8n_architect.core.errors import ErrorKind, WorkflowSubmissionError
from n8n_architect.core.logging import logger
from n8n_architect.integrations.n8n.payload import build_submission_payload
from n8n_architect.models.connection import ConnectionConfig
from n8n_architect.models.validation import SubmissionResult, ValidationOutcome
from n8n_architect.models.workflow import WorkflowDocument

API_KEY_HEADER = "X-N8N-API-KEY"
WORKFLOWS_PATH = "/api/v1/workflows"


class N8nApiClient:
    """Thin client for the n8n public REST API.

    One attempt per call, no retries: the caller decides whether to try again.
    Follows Dependency Inversion Principle: the httpx transport can be injected.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize N8nApiClient.

        Args:
            timeout: Request timeout in seconds (uses config if not provided)
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        self.timeout = timeout if timeout is not None else Config.http_timeout()
        self.transport = transport

    def _http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    @staticmethod
    def _headers(config: ConnectionConfig) -> dict:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            API_KEY_HEADER: config.api_key,
        }

    async def validate_connection(self, config: ConnectionConfig) -> ValidationOutcome:
        """Check that the URL is an n8n API and the key is accepted.

        Reads the first page of workflows (limit=1). Never raises for remote or
        transport conditions; every failure becomes a ValidationOutcome.

        Args:
            config: Connection to test

        Returns:
            ValidationOutcome with success flag and, on failure, kind + message
        """
        endpoint = f"{config.base_url}{WORKFLOWS_PATH}"

        try:
            async with self._http_client() as client:
                response = await client.get(
                    endpoint, params={"limit": 1}, headers=self._headers(config)
                )
        except Exception as e:
            logger.warning(
                "n8n_validation_transport_error",
                base_url=config.base_url,
                error=str(e),
                error_type=type(e).__name__,
            )
            return ValidationOutcome.failure(
                ErrorKind.NETWORK_UNREACHABLE, TransportErrorClassifier.describe(e)
            )

        if response.status_code in (401, 403):
            logger.info("n8n_validation_rejected", base_url=config.base_url, status_code=response.status_code)
            return ValidationOutcome.failure(
                ErrorKind.INVALID_CREDENTIALS,
                f"Invalid API key (error {response.status_code}).",
                status_code=response.status_code,
                status_text=response.reason_phrase,
            )

        if not response.is_success:
            logger.info("n8n_validation_server_error", base_url=config.base_url, status_code=response.status_code)
            return ValidationOutcome.failure(
                ErrorKind.SERVER_ERROR,
                f"Server error: {response.status_code} {response.reason_phrase}".rstrip(),
                status_code=response.status_code,
                status_text=response.reason_phrase,
            )

        # A parking page or proxy landing page answers 200 with HTML
        content_type = response.headers.get("content-type", "")
        if "application/json" not in content_type.lower():
            logger.info("n8n_validation_not_json", base_url=config.base_url, content_type=content_type)
            return ValidationOutcome.failure(
                ErrorKind.NOT_A_TARGET_API,
                "The URL does not look like an n8n API (it did not return JSON).",
                status_code=response.status_code,
                status_text=response.reason_phrase,
            )

        logger.info("n8n_validation_succeeded", base_url=config.base_url)
        return ValidationOutcome.ok()

    async def submit_workflow(
        self, config: ConnectionConfig, document: WorkflowDocument
    ) -> SubmissionResult:
        """Create a workflow on the n8n instance.

        Args:
            config: Connection to use
            document: Workflow to create (a default name is synthesized if absent)

        Returns:
            SubmissionResult with the id and name echoed by n8n

        Raises:
            WorkflowSubmissionError: On transport failure or any non-success status
        """
        endpoint = f"{config.base_url}{WORKFLOWS_PATH}"
        payload = build_submission_payload(document)

        try:
            async with self._http_client() as client:
                response = await client.post(endpoint, json=payload, headers=self._headers(config))
        except httpx.HTTPError as e:
            logger.error(
                "n8n_submission_transport_error",
                base_url=config.base_url,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise WorkflowSubmissionError(
                TransportErrorClassifier.describe(e), kind=ErrorKind.NETWORK_UNREACHABLE
            ) from e

        if not response.is_success:
            message = self._error_message(response)
            logger.error(
                "n8n_submission_failed",
                base_url=config.base_url,
                status_code=response.status_code,
                error=message,
            )
            kind = (
                ErrorKind.INVALID_CREDENTIALS
                if response.status_code in (401, 403)
                else ErrorKind.SERVER_ERROR
            )
            raise WorkflowSubmissionError(message, status_code=response.status_code, kind=kind)

        try:
            result = SubmissionResult.model_validate(response.json())
        except ValueError as e:
            raise WorkflowSubmissionError(
                f"Unexpected response from n8n: {str(e)}",
                status_code=response.status_code,
                kind=ErrorKind.MALFORMED_RESPONSE,
            ) from e

        logger.info(
            "n8n_workflow_submitted",
            base_url=config.base_url,
            workflow_id=result.id,
            workflow_name=result.name,
            node_count=len(document.nodes),
        )
        return result

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Extract the error message n8n put in the body, falling back to the status line."""
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return response.reason_phrase or f"Error {response.status_code}"
