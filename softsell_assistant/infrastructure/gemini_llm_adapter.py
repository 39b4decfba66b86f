from typing import List

from google import genai
from google.genai import types

from softsell_assistant.application.ports import LLMServicePort
from softsell_assistant.config import AppSettings
from softsell_assistant.domain.message import Role
from softsell_assistant.domain.prompt_strategy import PromptTurn
from softsell_assistant.errors import ApiKeyNotConfiguredError


def _to_gemini_content(turn: PromptTurn) -> types.Content:
    # Gemini names the assistant side "model".
    role = "user" if turn.role is Role.USER else "model"
    return types.Content(role=role, parts=[types.Part(text=turn.content)])


class GeminiLLMAdapter(LLMServicePort):
    """Google Gemini backend through the google-genai SDK."""

    def __init__(self, app_settings: AppSettings):
        self.settings = app_settings

        if not self.settings.GEMINI_API_KEY:
            raise ApiKeyNotConfiguredError("GEMINI_API_KEY not found in settings.")

        self._client = genai.Client(
            api_key=self.settings.GEMINI_API_KEY,
            http_options=types.HttpOptions(timeout=self.settings.ASSISTANT_TIMEOUT * 1000),
        )

    async def generate_reply(self, history: List[PromptTurn], utterance: str, max_output_tokens: int, model: str) -> str:
        """Starts a chat seeded with `history` and sends `utterance` once.

        Returns:
            The reply text exactly as generated. May be empty when the
            candidate was blocked; the gateway decides what to do with that.
        """
        chat = self._client.aio.chats.create(
            model=model,
            history=[_to_gemini_content(turn) for turn in history],
            config=types.GenerateContentConfig(max_output_tokens=max_output_tokens),
        )
        response = await chat.send_message(utterance)
        return response.text or ""
