"""Gemini AI client for n8n Architect.

Runs one chat turn with the full conversation replayed as history.
"""

from typing import Any, List, Optional

from google import genai
from google.genai import types

from n8n_architect.config import Config
from n8n_architect.core.errors import UpstreamConfigurationError
from n8n_architect.models.assistant import AssistantTurn, Role

# Gemini calls the assistant side of a conversation "model"
_GEMINI_ROLES = {
    Role.USER: "user",
    Role.ASSISTANT: "model",
}


def to_gemini_history(history: List[AssistantTurn]) -> List[types.Content]:
    """Convert chat turns to Gemini Content objects."""
    return [
        types.Content(role=_GEMINI_ROLES[turn.role], parts=[types.Part(text=turn.content)])
        for turn in history
    ]


class GeminiChatClient:
    """Gemini chat client with structured (JSON schema) output.

    Uses the google.genai SDK with lazy client initialization.
    Follows Dependency Inversion Principle: model_name can be injected.
    """

    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None):
        """Initialize Gemini client.

        Args:
            api_key: Optional API key. If not provided, reads from environment.
            model_name: Gemini model to use (default from config: gemini-2.5-flash)

        Raises:
            UpstreamConfigurationError: If API key not found in environment
        """
        if api_key is None:
            api_key = Config.gemini_api_key()

        if not api_key:
            raise UpstreamConfigurationError(
                "Gemini API key not found. Set GOOGLE_GENERATIVE_AI_API_KEY or GEMINI_API_KEY environment variable."
            )

        self.api_key = api_key
        self.model_name = model_name or Config.gemini_model()
        self.client: Optional[genai.Client] = None  # Lazy initialization

    def _init_client(self) -> None:
        """Initialize Gemini client (lazy loading)."""
        if self.client is not None:
            return

        try:
            self.client = genai.Client(api_key=self.api_key)
        except Exception as e:
            raise RuntimeError(f"Failed to initialize Gemini client: {str(e)}")

    async def send_chat(
        self,
        history: List[AssistantTurn],
        message: str,
        system_instruction: str,
        response_schema: Any,
        temperature: Optional[float] = None,
    ) -> str:
        """Send one message in a chat seeded with the given history.

        Args:
            history: Previous turns, oldest first (replayed in full)
            message: New user message
            system_instruction: System prompt
            response_schema: Schema the JSON reply must follow
            temperature: Generation temperature (uses config if not provided)

        Returns:
            Raw reply text

        Raises:
            RuntimeError: If generation fails or returns no text
        """
        self._init_client()
        assert self.client is not None  # Guaranteed by _init_client()

        generation_config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            response_mime_type="application/json",
            response_schema=response_schema,
            temperature=temperature if temperature is not None else Config.gemini_temperature(),
        )

        try:
            chat = self.client.aio.chats.create(
                model=self.model_name,
                config=generation_config,
                history=to_gemini_history(history),
            )
            response = await chat.send_message(message)
        except Exception as e:
            raise RuntimeError(f"Gemini generation failed: {str(e)}")

        if not response.text:
            raise RuntimeError("No response from Gemini")
        return response.text
