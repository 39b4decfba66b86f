from abc import ABC, abstractmethod
from typing import Any, ContextManager, Dict, List, Optional

from softsell_assistant.domain.prompt_strategy import PromptTurn


class LLMServicePort(ABC):
    @abstractmethod
    async def generate_reply(
        self,
        history: List[PromptTurn],
        utterance: str,
        max_output_tokens: int,
        model: str,
    ) -> str:
        """Runs one exchange seeded with `history` and returns the reply text."""
        pass


class TracerPort(ABC):
    @abstractmethod
    def trace(self, name: str, metadata: Optional[Dict[str, Any]] = None) -> ContextManager[Any]:
        pass

    @abstractmethod
    def span(self, name: str, metadata: Optional[Dict[str, Any]] = None) -> ContextManager[Any]:
        pass
