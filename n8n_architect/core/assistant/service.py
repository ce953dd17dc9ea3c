"""Assistant service for n8n Architect.

Generates workflows from chat messages using Gemini.
"""

from typing import Callable, List, Optional

from n8n_architect.core.assistant.parser import parse_assistant_reply
from n8n_architect.core.assistant.prompts import RESPONSE_SCHEMA, SYSTEM_INSTRUCTION
from n8n_architect.core.errors import ErrorKind, MalformedResponseError, UpstreamConfigurationError
from n8n_architect.core.logging import logger
from n8n_architect.integrations.gemini import GeminiChatClient
from n8n_architect.models.assistant import AssistantResult, AssistantTurn

CONFIGURATION_MESSAGE = "⚠️ The assistant is not configured: {error}"
APOLOGY_MESSAGE = "⚠️ Sorry, I ran into an error while processing your request: {error}. Please try again."


class AssistantService:
    """Runs one assistant turn and always answers with an AssistantResult.

    Failures become assistant-authored explanations so the transcript stays
    consistent; nothing is raised to the caller.
    Follows Dependency Inversion Principle: the Gemini client factory can be injected.
    """

    def __init__(
        self,
        client: Optional[GeminiChatClient] = None,
        client_factory: Callable[[], GeminiChatClient] = GeminiChatClient,
        temperature: Optional[float] = None,
    ):
        """Initialize AssistantService.

        Args:
            client: Ready Gemini client (built lazily from client_factory if omitted)
            client_factory: Callable building a GeminiChatClient from environment config
            temperature: Generation temperature override
        """
        self.client = client
        self.client_factory = client_factory
        self.temperature = temperature

    def _get_client(self) -> GeminiChatClient:
        if self.client is None:
            self.client = self.client_factory()
        return self.client

    async def send_message(self, history: List[AssistantTurn], message: str) -> AssistantResult:
        """Ask the assistant for the next turn.

        Args:
            history: Conversation so far, oldest first, not including message
            message: New user message

        Returns:
            AssistantResult (error_kind set when the turn failed)
        """
        try:
            client = self._get_client()
        except UpstreamConfigurationError as e:
            logger.error("assistant_not_configured", error=str(e))
            return AssistantResult(
                explanation=CONFIGURATION_MESSAGE.format(error=str(e)),
                error_kind=ErrorKind.UPSTREAM_CONFIGURATION_MISSING,
            )

        try:
            text = await client.send_chat(
                history,
                message,
                system_instruction=SYSTEM_INSTRUCTION,
                response_schema=RESPONSE_SCHEMA,
                temperature=self.temperature,
            )
            result = parse_assistant_reply(text)
        except MalformedResponseError as e:
            logger.error("assistant_reply_malformed", error=str(e), history_length=len(history))
            return AssistantResult(
                explanation=APOLOGY_MESSAGE.format(error=str(e)),
                error_kind=ErrorKind.MALFORMED_RESPONSE,
            )
        except Exception as e:
            logger.error(
                "assistant_call_failed",
                error=str(e),
                error_type=type(e).__name__,
                history_length=len(history),
            )
            return AssistantResult(
                explanation=APOLOGY_MESSAGE.format(error=str(e)),
                error_kind=ErrorKind.UPSTREAM_UNAVAILABLE,
            )

        logger.info(
            "assistant_turn_completed",
            history_length=len(history),
            has_workflow=result.workflow is not None,
            node_count=len(result.workflow.nodes) if result.workflow else 0,
            credential_count=len(result.required_credentials),
        )
        return result
