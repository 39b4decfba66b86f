from __future__ import annotations

import asyncio

import pytest

from softsell_assistant.application.assistant_gateway import FALLBACK_REPLY, AssistantGateway
from softsell_assistant.application.chat_session import UNEXPECTED_ERROR_REPLY, ChatSession
from softsell_assistant.domain.conversation import GREETING, PendingState
from softsell_assistant.domain.message import Role
from softsell_assistant.domain.suggestions import SUGGESTED_QUESTIONS
from tests.fakes import BrokenTracer, FakeLLMService


def _transcript(session: ChatSession):
    return [(message.role, message.content) for message in session.conversation.messages]


def test_initial_state_is_greeting_and_idle(make_session) -> None:
    session = make_session()

    assert _transcript(session) == [(Role.ASSISTANT, GREETING)]
    assert session.state is PendingState.IDLE


@pytest.mark.asyncio
async def test_successful_turn_appends_user_then_assistant(make_session) -> None:
    session = make_session("Upload your license details...")

    accepted = await session.submit("How do I sell my software license?")

    assert accepted is True
    assert _transcript(session) == [
        (Role.ASSISTANT, GREETING),
        (Role.USER, "How do I sell my software license?"),
        (Role.ASSISTANT, "Upload your license details..."),
    ]
    assert session.state is PendingState.IDLE


@pytest.mark.asyncio
async def test_failed_backend_appends_fallback(make_session) -> None:
    session = make_session(RuntimeError("backend unavailable"))

    await session.submit("test")

    assert _transcript(session) == [
        (Role.ASSISTANT, GREETING),
        (Role.USER, "test"),
        (Role.ASSISTANT, FALLBACK_REPLY),
    ]
    assert session.state is PendingState.IDLE


@pytest.mark.asyncio
@pytest.mark.parametrize("utterance", ["", "   ", "\n\t", None])
async def test_blank_submission_is_a_no_op(make_session, utterance) -> None:
    session = make_session()

    accepted = await session.submit(utterance)

    assert accepted is False
    assert len(session.conversation) == 1
    assert session.state is PendingState.IDLE


@pytest.mark.asyncio
async def test_user_content_is_trimmed(make_session) -> None:
    session = make_session("reply")

    await session.submit("  hello there \n")

    assert session.conversation.messages[1].content == "hello there"
    assert session.gateway.llm_service.calls[0]["utterance"] == "hello there"


@pytest.mark.asyncio
async def test_repeated_failures_always_append_same_fallback(make_session) -> None:
    session = make_session(ConnectionError("offline"))

    for attempt in range(3):
        await session.submit(f"question {attempt}")

    replies = [m.content for m in session.conversation.messages if m.role is Role.ASSISTANT][1:]
    assert replies == [FALLBACK_REPLY] * 3
    assert len(session.conversation) == 7


@pytest.mark.asyncio
async def test_ids_increase_in_append_order(make_session) -> None:
    session = make_session("a", "b")

    await session.submit("one")
    await session.submit("two")

    ids = [message.id for message in session.conversation.messages]
    assert ids == sorted(ids)
    assert len(set(ids)) == 5


@pytest.mark.asyncio
async def test_suggestion_is_the_same_as_submit(make_session) -> None:
    question = "What types of licenses can I sell?"
    assert question in SUGGESTED_QUESTIONS
    via_suggestion = make_session("Most commercial licenses.")
    via_submit = make_session("Most commercial licenses.")

    await via_suggestion.select_suggestion(question)
    await via_submit.submit(question)

    assert _transcript(via_suggestion) == _transcript(via_submit)
    assert via_suggestion.gateway.llm_service.calls[0]["utterance"] == question


@pytest.mark.asyncio
async def test_submission_while_awaiting_is_rejected(make_session) -> None:
    gate = asyncio.Event()
    session = make_session("first reply", gate=gate)

    first = asyncio.ensure_future(session.submit("first"))
    await asyncio.sleep(0)
    assert session.state is PendingState.AWAITING_REPLY

    second = await session.submit("second")
    assert second is False
    assert len(session.conversation) == 2

    gate.set()
    assert await first is True
    assert _transcript(session)[1:] == [(Role.USER, "first"), (Role.ASSISTANT, "first reply")]
    assert session.state is PendingState.IDLE
    assert len(session.gateway.llm_service.calls) == 1


@pytest.mark.asyncio
async def test_gateway_that_raises_still_returns_to_idle(make_session) -> None:
    session = make_session()

    async def broken(utterance: str) -> str:
        raise RuntimeError("contract broken")

    session.gateway.reply_to = broken

    assert await session.submit("hello") is True
    assert session.conversation.last_message.content == UNEXPECTED_ERROR_REPLY
    assert session.state is PendingState.IDLE


@pytest.mark.asyncio
async def test_cancelled_turn_resets_to_idle(make_session) -> None:
    session = make_session(gate=asyncio.Event())

    turn = asyncio.ensure_future(session.submit("hello"))
    await asyncio.sleep(0)
    turn.cancel()
    with pytest.raises(asyncio.CancelledError):
        await turn

    assert session.state is PendingState.IDLE
    assert session.conversation.last_message.role is Role.USER


@pytest.mark.asyncio
@pytest.mark.parametrize("fail_on_exit", [False, True])
async def test_tracer_failure_does_not_escape_submit(fail_on_exit) -> None:
    tracer = BrokenTracer(fail_on_exit=fail_on_exit)
    gateway = AssistantGateway(llm_service=FakeLLMService("hello back"), model="m", tracer=tracer)
    session = ChatSession(gateway=gateway, tracer=tracer)

    assert await session.submit("hello") is True
    assert _transcript(session)[1:] == [(Role.USER, "hello"), (Role.ASSISTANT, "hello back")]
    assert session.state is PendingState.IDLE
