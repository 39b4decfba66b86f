from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

from softsell_assistant.domain.message import Role


@dataclass(frozen=True)
class PromptTurn:
    """A preamble turn sent to the backend ahead of the visitor's utterance."""

    role: Role
    content: str


class PromptStrategy(ABC):
    """
    Interface for the context handed to the generation backend.
    This allows swapping persona or business facts without touching the gateway.
    """

    @abstractmethod
    def get_system_prompt(self) -> str:
        """Returns the business-context description."""
        pass

    @abstractmethod
    def build_preamble(self) -> List[PromptTurn]:
        """Returns the turns that seed every exchange."""
        pass


class BusinessContextPromptStrategy(PromptStrategy):
    ACKNOWLEDGEMENT = (
        "I understand. I'll act as SoftSell's customer service assistant within these guidelines."
    )

    def get_system_prompt(self) -> str:
        return (
            "You are a helpful customer service assistant for SoftSell, a company that helps "
            "businesses resell their unused software licenses. SoftSell's process involves: "
            "1) Uploading license details, 2) Receiving a valuation within 24 hours, and "
            "3) Getting paid within 48 hours after accepting the offer.\n"
            "SoftSell ensures all transactions are legally compliant and secure.\n"
            "Be friendly, helpful, and concise in your responses. If you don't know something "
            "specific about SoftSell's processes, suggest the user contact the team directly "
            "through the contact form."
        )

    def build_preamble(self) -> List[PromptTurn]:
        # The backend takes no system role here, so the context rides on a user turn.
        return [
            PromptTurn(role=Role.USER, content=self.get_system_prompt()),
            PromptTurn(role=Role.ASSISTANT, content=self.ACKNOWLEDGEMENT),
        ]
