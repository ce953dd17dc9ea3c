"""Unit tests for AssistantService and the Gemini history conversion."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from n8n_architect.core.assistant import RESPONSE_SCHEMA, SYSTEM_INSTRUCTION, AssistantService
from n8n_architect.core.errors import ErrorKind
from n8n_architect.integrations.gemini import GeminiChatClient, to_gemini_history
from n8n_architect.models.assistant import AssistantTurn, Role


def make_service(reply=None, error=None) -> AssistantService:
    client = MagicMock(spec=GeminiChatClient)
    client.send_chat = AsyncMock(return_value=reply, side_effect=error)
    return AssistantService(client=client)


class TestSendMessage:
    """Test AssistantService.send_message."""

    @pytest.mark.asyncio
    async def test_replays_history_with_contract(self, assistant_reply):
        """Test the full history, system instruction and schema are passed to Gemini."""
        service = make_service(reply=assistant_reply)
        history = [
            AssistantTurn(role=Role.USER, content="hi"),
            AssistantTurn(role=Role.ASSISTANT, content="hello"),
        ]

        result = await service.send_message(history, "create a webhook")

        assert result.workflow is not None
        call = service.client.send_chat.await_args
        assert call.args == (history, "create a webhook")
        assert call.kwargs["system_instruction"] == SYSTEM_INSTRUCTION
        assert call.kwargs["response_schema"] is RESPONSE_SCHEMA

    @pytest.mark.asyncio
    async def test_upstream_failure_becomes_apology(self):
        """Test an API error is turned into an assistant explanation."""
        service = make_service(error=RuntimeError("Gemini generation failed: 503 UNAVAILABLE"))

        result = await service.send_message([], "create a webhook")

        assert result.workflow is None
        assert result.error_kind == ErrorKind.UPSTREAM_UNAVAILABLE
        assert "Sorry" in result.explanation
        assert "503 UNAVAILABLE" in result.explanation

    @pytest.mark.asyncio
    async def test_malformed_reply_becomes_apology(self):
        """Test an unparseable reply is turned into an assistant explanation."""
        service = make_service(reply="definitely not json")

        result = await service.send_message([], "create a webhook")

        assert result.workflow is None
        assert result.error_kind == ErrorKind.MALFORMED_RESPONSE
        assert "not valid JSON" in result.explanation

    @pytest.mark.asyncio
    async def test_missing_api_key_reported(self, monkeypatch):
        """Test a missing Gemini key is explained instead of raised."""
        for name in ("GOOGLE_GENERATIVE_AI_API_KEY", "GEMINI_API_KEY", "API_KEY"):
            monkeypatch.delenv(name, raising=False)
        service = AssistantService()

        result = await service.send_message([], "create a webhook")

        assert result.error_kind == ErrorKind.UPSTREAM_CONFIGURATION_MISSING
        assert "GEMINI_API_KEY" in result.explanation
        assert result.workflow is None


class TestGeminiHistory:
    """Test conversion of chat turns to Gemini contents."""

    def test_roles_mapped(self):
        """Test assistant turns are sent with Gemini's 'model' role."""
        contents = to_gemini_history(
            [
                AssistantTurn(role=Role.USER, content="hi"),
                AssistantTurn(role=Role.ASSISTANT, content="hello"),
            ]
        )

        assert [content.role for content in contents] == ["user", "model"]
        assert contents[1].parts[0].text == "hello"

    def test_client_requires_api_key(self, monkeypatch):
        """Test GeminiChatClient refuses to build without a key."""
        for name in ("GOOGLE_GENERATIVE_AI_API_KEY", "GEMINI_API_KEY", "API_KEY"):
            monkeypatch.delenv(name, raising=False)

        with pytest.raises(Exception, match="Gemini API key not found"):
            GeminiChatClient()

    def test_client_uses_configured_model(self, monkeypatch):
        """Test the model name falls back to config."""
        monkeypatch.setenv("N8N_ARCHITECT_MODEL", "gemini-2.5-pro")

        assert GeminiChatClient(api_key="key").model_name == "gemini-2.5-pro"


def make_gemini_client(response_text="{}", error=None):
    """GeminiChatClient with the SDK client replaced by mocks."""
    gemini = GeminiChatClient(api_key="key", model_name="gemini-2.5-flash")
    chat = MagicMock()
    chat.send_message = AsyncMock(return_value=MagicMock(text=response_text), side_effect=error)
    gemini.client = MagicMock()
    gemini.client.aio.chats.create.return_value = chat
    return gemini, chat


class TestGeminiSendChat:
    """Test GeminiChatClient.send_chat against a mocked SDK."""

    @pytest.mark.asyncio
    async def test_request_carries_contract(self, monkeypatch):
        """Test model, config, history and message are passed to the SDK."""
        monkeypatch.delenv("N8N_ARCHITECT_TEMPERATURE", raising=False)
        gemini, chat = make_gemini_client(response_text='{"explanation": "ok"}')
        history = [
            AssistantTurn(role=Role.USER, content="hi"),
            AssistantTurn(role=Role.ASSISTANT, content="hello"),
        ]

        text = await gemini.send_chat(
            history,
            "create a webhook",
            system_instruction=SYSTEM_INSTRUCTION,
            response_schema=RESPONSE_SCHEMA,
        )

        assert text == '{"explanation": "ok"}'
        kwargs = gemini.client.aio.chats.create.call_args.kwargs
        assert kwargs["model"] == "gemini-2.5-flash"
        config = kwargs["config"]
        assert config.response_mime_type == "application/json"
        assert config.response_schema == RESPONSE_SCHEMA
        assert config.system_instruction == SYSTEM_INSTRUCTION
        assert config.temperature == 0.4
        assert [content.role for content in kwargs["history"]] == ["user", "model"]
        assert [content.parts[0].text for content in kwargs["history"]] == ["hi", "hello"]
        chat.send_message.assert_awaited_once_with("create a webhook")

    @pytest.mark.asyncio
    async def test_explicit_temperature(self):
        """Test a temperature argument overrides the configured one."""
        gemini, _ = make_gemini_client()

        await gemini.send_chat([], "x", system_instruction="s", response_schema=RESPONSE_SCHEMA, temperature=0.1)

        assert gemini.client.aio.chats.create.call_args.kwargs["config"].temperature == 0.1

    @pytest.mark.asyncio
    async def test_sdk_error_wrapped(self):
        """Test SDK exceptions surface as RuntimeError with the cause text."""
        gemini, _ = make_gemini_client(error=ValueError("429 RESOURCE_EXHAUSTED"))

        with pytest.raises(RuntimeError, match="Gemini generation failed: 429 RESOURCE_EXHAUSTED"):
            await gemini.send_chat([], "x", system_instruction="s", response_schema=RESPONSE_SCHEMA)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("response_text", ["", None])
    async def test_empty_reply_raises(self, response_text):
        """Test an empty reply is reported instead of returned."""
        gemini, _ = make_gemini_client(response_text=response_text)

        with pytest.raises(RuntimeError, match="No response from Gemini"):
            await gemini.send_chat([], "x", system_instruction="s", response_schema=RESPONSE_SCHEMA)
