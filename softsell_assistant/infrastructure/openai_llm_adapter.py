from typing import Dict, List, Tuple

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from langchain_openai import ChatOpenAI

from softsell_assistant.application.ports import LLMServicePort
from softsell_assistant.config import AppSettings
from softsell_assistant.domain.message import Role
from softsell_assistant.domain.prompt_strategy import PromptTurn
from softsell_assistant.errors import ApiKeyNotConfiguredError


# Helper to convert a preamble turn to LangChain BaseMessage
def _to_langchain_message(turn: PromptTurn) -> BaseMessage:
    if turn.role is Role.USER:
        return HumanMessage(content=turn.content)
    return AIMessage(content=turn.content)


class OpenAILLMAdapter(LLMServicePort):
    def __init__(self, app_settings: AppSettings):
        self.settings = app_settings

        if not self.settings.OPENAI_API_KEY:
            raise ApiKeyNotConfiguredError("OPENAI_API_KEY not found in settings.")

        self._llms: Dict[Tuple[str, int], ChatOpenAI] = {}

    def get_llm(self, model: str, max_output_tokens: int) -> ChatOpenAI:
        key = (model, max_output_tokens)
        if key not in self._llms:
            self._llms[key] = ChatOpenAI(
                model=model,
                max_tokens=max_output_tokens,
                api_key=self.settings.OPENAI_API_KEY,
                timeout=self.settings.ASSISTANT_TIMEOUT,
                max_retries=0,
            )
        return self._llms[key]

    async def generate_reply(self, history: List[PromptTurn], utterance: str, max_output_tokens: int, model: str) -> str:
        """Invokes the chat model with the preamble followed by the utterance.

        Args:
            history: Preamble turns seeding the exchange.
            utterance: The visitor's trimmed message.
            max_output_tokens: Upper bound on generated tokens.
            model: OpenAI model identifier.

        Returns:
            The text content of the returned AIMessage.
        """
        messages = [_to_langchain_message(turn) for turn in history]
        messages.append(HumanMessage(content=utterance))

        response = await self.get_llm(model, max_output_tokens).ainvoke(messages)
        return response.content
