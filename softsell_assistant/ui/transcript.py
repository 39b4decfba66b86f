from typing import Dict, List

from softsell_assistant.domain.conversation import Conversation

TYPING_INDICATOR = "…"


def to_chatbot_messages(conversation: Conversation, typing_indicator: str = TYPING_INDICATOR) -> List[Dict[str, str]]:
    """Render the transcript as Gradio "messages" dicts, in append order.

    While a reply is pending a placeholder assistant bubble is appended.
    """
    rendered = [
        {"role": message.role.value, "content": message.content}
        for message in conversation.messages
    ]
    if conversation.is_awaiting_reply:
        rendered.append({"role": "assistant", "content": typing_indicator})
    return rendered
