import asyncio
import logging
from enum import Enum
from typing import Callable, Optional

import gradio as gr

from softsell_assistant.application.chat_session import ChatSession
from softsell_assistant.domain.conversation import Conversation
from softsell_assistant.domain.suggestions import SUGGESTED_QUESTIONS
from softsell_assistant.ui.transcript import to_chatbot_messages

logger = logging.getLogger(__name__)


class Theme(Enum):
    LIGHT = "light"
    DARK = "dark"


_FORCE_DARK_JS = "() => { document.body.classList.add('dark'); }"


def _render(session: ChatSession):
    conversation = session.conversation
    pending = conversation.is_awaiting_reply
    return (
        session,
        to_chatbot_messages(conversation),
        gr.update(value="", interactive=not pending),
        gr.update(interactive=not pending),
        gr.update(visible=conversation.shows_suggestions and not pending),
    )


async def run_turn(session: Optional[ChatSession], utterance: str,
                   session_factory: Callable[[], ChatSession]):
    """Submit one utterance, yielding the widget state while pending and once settled."""
    session = session or session_factory()
    turn = asyncio.ensure_future(session.submit(utterance))
    # let submit record the user message before the first redraw
    await asyncio.sleep(0)
    yield _render(session)
    await turn
    yield _render(session)


def build_chat_widget(session_factory: Callable[[], ChatSession], theme: Theme = Theme.LIGHT) -> gr.Blocks:
    """Build the assistant widget.

    The widget only reads the session's conversation and calls its
    submission entry points. Each browser session gets its own ChatSession
    from `session_factory`.
    """

    async def on_submit(session: Optional[ChatSession], utterance: str):
        async for update in run_turn(session, utterance, session_factory):
            yield update

    def suggestion_handler(question: str):
        async def handler(session: Optional[ChatSession]):
            async for update in run_turn(session, question, session_factory):
                yield update
        return handler

    with gr.Blocks(
        title="SoftSell Assistant",
        theme=gr.themes.Soft(primary_hue="blue"),
        js=_FORCE_DARK_JS if theme is Theme.DARK else None,
    ) as widget:
        session_state = gr.State(None)

        with gr.Accordion("Chat with us", open=True):
            gr.Markdown("### SoftSell Assistant\nAsk us anything about selling software licenses")
            chatbot = gr.Chatbot(
                value=to_chatbot_messages(Conversation()),
                type="messages",
                height=400,
                show_label=False,
            )

            with gr.Column(visible=True) as suggestions:
                gr.Markdown("**SUGGESTED QUESTIONS**")
                with gr.Row():
                    suggestion_buttons = [gr.Button(question, size="sm") for question in SUGGESTED_QUESTIONS]

            with gr.Row():
                textbox = gr.Textbox(placeholder="Type your message...", show_label=False, scale=4)
                send_button = gr.Button("Send", variant="primary", scale=1)

        outputs = [session_state, chatbot, textbox, send_button, suggestions]
        textbox.submit(fn=on_submit, inputs=[session_state, textbox], outputs=outputs)
        send_button.click(fn=on_submit, inputs=[session_state, textbox], outputs=outputs)
        for question, button in zip(SUGGESTED_QUESTIONS, suggestion_buttons):
            button.click(fn=suggestion_handler(question), inputs=[session_state], outputs=outputs)

    logger.info(f"Chat widget built with {theme.value} theme")
    return widget
