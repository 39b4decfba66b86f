import logging
from typing import Any, Optional

from softsell_assistant.application.assistant_gateway import AssistantGateway
from softsell_assistant.application.ports import TracerPort
from softsell_assistant.application.tracing import observe
from softsell_assistant.domain.conversation import Conversation, PendingState
from softsell_assistant.domain.message import Message, Role

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_REPLY = (
    "I'm sorry, something went wrong. "
    "Please try again or reach out to our team through the contact form."
)


class ChatSession:
    """Wires widget events to the conversation and the assistant gateway.

    A session is Idle until a non-empty utterance is submitted; it then
    records the user message, awaits the gateway and records the reply
    before returning to Idle. Submissions arriving while a reply is awaited
    are rejected.
    """

    def __init__(self,
                 gateway: AssistantGateway,
                 conversation: Optional[Conversation] = None,
                 tracer: Optional[TracerPort] = None):
        self.gateway = gateway
        self.conversation = conversation or Conversation()
        self.tracer = tracer

    @property
    def state(self) -> PendingState:
        return self.conversation.state

    def _append(self, role: Role, content: str) -> Message:
        message = Message(id=self.conversation.next_message_id(), role=role, content=content)
        self.conversation.append_message(message)
        return message

    async def submit(self, utterance: Any) -> bool:
        """Runs one conversational turn. Returns False when the submission was ignored."""
        text = utterance.strip() if isinstance(utterance, str) else ""
        if not text:
            logger.debug("Ignoring empty submission.")
            return False
        if self.conversation.is_awaiting_reply:
            logger.warning("Submission rejected: a reply is still pending.")
            return False

        with observe(self.tracer, "chat_turn", {"turn.utterance_length": len(text)}, kind="trace"):
            await self._run_turn(text)
        return True

    async def select_suggestion(self, text: str) -> bool:
        return await self.submit(text)

    async def _run_turn(self, text: str) -> None:
        logger.info(f"▶ {text}")
        self._append(Role.USER, text)
        self.conversation.set_state(PendingState.AWAITING_REPLY)
        try:
            try:
                reply = await self.gateway.reply_to(text)
            except Exception as e:
                logger.exception(f"❌ Assistant gateway raised: {e}")
                reply = UNEXPECTED_ERROR_REPLY
            self._append(Role.ASSISTANT, reply)
        finally:
            self.conversation.set_state(PendingState.IDLE)
