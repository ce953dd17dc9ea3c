"""Gemini AI integration."""

from n8n_architect.integrations.gemini.client import GeminiChatClient, to_gemini_history

__all__ = ["GeminiChatClient", "to_gemini_history"]
