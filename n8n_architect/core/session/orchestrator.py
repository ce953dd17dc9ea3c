"""Session orchestrator for n8n Architect.

Holds what the chat screen shows (history, current workflow, connection) and
wires user actions to the assistant and the n8n client.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional, Tuple

from n8n_architect.core.assistant import AssistantService
from n8n_architect.core.errors import (
    NoWorkflowError,
    NotConnectedError,
    SessionBusyError,
    WorkflowSubmissionError,
)
from n8n_architect.core.logging import logger
from n8n_architect.core.session.config_store import ConfigStore
from n8n_architect.integrations.n8n import N8nApiClient
from n8n_architect.models.assistant import AssistantResult, AssistantTurn, Role
from n8n_architect.models.connection import ConnectionConfig
from n8n_architect.models.validation import SaveStatus, ValidationOutcome
from n8n_architect.models.workflow import WorkflowDocument


class SessionOrchestrator:
    """State and actions of one chat session.

    At most one assistant request and one n8n request may be in flight at a
    time; a second trigger raises SessionBusyError instead of queueing.
    """

    def __init__(
        self,
        assistant: Optional[AssistantService] = None,
        n8n_client: Optional[N8nApiClient] = None,
        config_store: Optional[ConfigStore] = None,
    ):
        self.assistant = assistant or AssistantService()
        self.n8n_client = n8n_client or N8nApiClient()
        self.config_store = config_store or ConfigStore()

        self._history: List[AssistantTurn] = []
        self.current_workflow: Optional[WorkflowDocument] = None
        self.required_credentials: List[str] = []
        self.tips: List[str] = []

        self._assistant_busy = False
        self._remote_busy = False

        self.config: Optional[ConnectionConfig] = self.config_store.load()

    @property
    def history(self) -> Tuple[AssistantTurn, ...]:
        return tuple(self._history)

    @property
    def is_connected(self) -> bool:
        return self.config is not None

    @property
    def is_busy(self) -> bool:
        return self._assistant_busy or self._remote_busy

    # Chat

    async def send_message(self, text: str) -> AssistantResult:
        """Send a user message and record both turns.

        The current workflow is replaced only when the reply carries one.

        Raises:
            ValueError: If text is blank
            SessionBusyError: If an assistant request is already in flight
        """
        if not text or not text.strip():
            raise ValueError("Message must not be empty")
        if self._assistant_busy:
            raise SessionBusyError("An assistant request is already in progress")

        self._assistant_busy = True
        try:
            user_turn = AssistantTurn(role=Role.USER, content=text)

            result = await self.assistant.send_message(list(self._history), text)

            # History only grows by complete user/assistant pairs
            self._history.append(user_turn)
            self._history.append(AssistantTurn(role=Role.ASSISTANT, content=result.explanation))
            if result.workflow is not None:
                self.current_workflow = result.workflow
                self.required_credentials = list(result.required_credentials)
                self.tips = list(result.tips)
            return result
        finally:
            self._assistant_busy = False

    def reset_conversation(self) -> None:
        """Drop history and the current workflow; the connection is kept."""
        self._history = []
        self.current_workflow = None
        self.required_credentials = []
        self.tips = []

    def export_workflow_json(self) -> str:
        """Current workflow as pretty JSON, for copying into n8n by hand.

        Raises:
            NoWorkflowError: If no workflow has been generated yet
        """
        if self.current_workflow is None:
            raise NoWorkflowError("No workflow has been generated yet")
        return self.current_workflow.to_export_json()

    # Connection

    async def login(self, base_url: str, api_key: str) -> ValidationOutcome:
        """Validate a connection and save it when n8n accepts it.

        Raises:
            ValueError: If base_url or api_key is empty or base_url is not a URL
            SessionBusyError: If an n8n request is already in flight
        """
        if not base_url or not base_url.strip() or not api_key or not api_key.strip():
            raise ValueError("Both the n8n URL and the API key are required")

        candidate = ConnectionConfig(base_url=base_url, api_key=api_key)

        async with self._remote_call():
            outcome = await self.n8n_client.validate_connection(candidate)

        if outcome.success:
            self.save_config(candidate)
        else:
            logger.info("login_rejected", base_url=candidate.base_url, kind=outcome.kind)
        return outcome

    def save_config(self, config: ConnectionConfig) -> None:
        """Replace and persist the connection config (no validation)."""
        self.config = config
        self.config_store.save(config)

    def logout(self) -> None:
        """Forget the connection config."""
        self.config = None
        self.config_store.clear()

    # Submission

    async def submit_current_workflow(self) -> SaveStatus:
        """Push the current workflow to n8n and describe the outcome.

        Raises:
            NoWorkflowError: If there is no current workflow
            NotConnectedError: If no connection is configured
            SessionBusyError: If an n8n request is already in flight
        """
        if self.current_workflow is None:
            raise NoWorkflowError("No workflow has been generated yet")
        if self.config is None:
            raise NotConnectedError("Configure the n8n connection first")

        try:
            async with self._remote_call():
                result = await self.n8n_client.submit_workflow(self.config, self.current_workflow)
        except WorkflowSubmissionError as e:
            return SaveStatus(
                success=False,
                message=f"Error saving: {e.message}. Check CORS and credentials.",
            )

        return SaveStatus(
            success=True,
            message=f'Workflow "{result.name}" saved successfully! (ID: {result.id})',
            workflow_id=result.id,
        )

    @asynccontextmanager
    async def _remote_call(self) -> AsyncIterator[None]:
        if self._remote_busy:
            raise SessionBusyError("An n8n request is already in progress")
        self._remote_busy = True
        try:
            yield
        finally:
            self._remote_busy = False
