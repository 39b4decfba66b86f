"""Pytest configuration and shared fixtures."""
from __future__ import annotations

import asyncio
from typing import Any, Optional

import pytest

from softsell_assistant.application.assistant_gateway import AssistantGateway
from softsell_assistant.application.chat_session import ChatSession
from softsell_assistant.config import AppSettings
from tests.fakes import FakeLLMService


@pytest.fixture
def make_session():
    def _make(*outcomes: Any, gate: Optional[asyncio.Event] = None, **gateway_kwargs: Any) -> ChatSession:
        llm = FakeLLMService(*outcomes, gate=gate)
        gateway = AssistantGateway(llm_service=llm, model="test-model", **gateway_kwargs)
        return ChatSession(gateway=gateway)

    return _make


@pytest.fixture
def app_settings() -> AppSettings:
    return AppSettings(
        _env_file=None,
        GEMINI_API_KEY=None,
        OPENAI_API_KEY=None,
        LLM_PROVIDER="gemini",
        TELEMETRY_PROVIDER="none",
    )
