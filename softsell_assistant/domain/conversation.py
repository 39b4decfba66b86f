import itertools
from enum import Enum
from typing import List, Optional, Tuple

from softsell_assistant.domain.message import Message, Role

GREETING = (
    "Hi there! I'm SoftSell Assistant. "
    "How can I help you with software license reselling today?"
)

# Suggested questions are offered until the first exchange has completed.
SUGGESTIONS_VISIBLE_UP_TO = 2


class PendingState(Enum):
    IDLE = "idle"
    AWAITING_REPLY = "awaiting-reply"


class Conversation:
    """
    Represents a conversation, acting as an Aggregate Root.
    It owns the ordered transcript and the pending/idle status that the
    widget renders from. The transcript is append-only and always starts
    with the assistant greeting.
    """

    def __init__(self, greeting: str = GREETING):
        self._ids = itertools.count(1)
        self._messages: List[Message] = []
        self.state: PendingState = PendingState.IDLE
        self.append_message(Message(id=self.next_message_id(), role=Role.ASSISTANT, content=greeting))

    def next_message_id(self) -> int:
        return next(self._ids)

    def append_message(self, message: Message) -> None:
        if not isinstance(message.content, str):
            raise TypeError(f"Message content must be a string, got {type(message.content).__name__}")
        self._messages.append(message)

    def set_state(self, state: PendingState) -> None:
        self.state = state

    @property
    def messages(self) -> Tuple[Message, ...]:
        return tuple(self._messages)

    @property
    def last_message(self) -> Optional[Message]:
        return self._messages[-1] if self._messages else None

    @property
    def is_awaiting_reply(self) -> bool:
        return self.state is PendingState.AWAITING_REPLY

    @property
    def shows_suggestions(self) -> bool:
        return len(self._messages) <= SUGGESTIONS_VISIBLE_UP_TO

    def __len__(self) -> int:
        return len(self._messages)
