import logging
import sys

import gradio as gr

from softsell_assistant.config import AppSettings, settings
from softsell_assistant.errors import ConfigurationError

# Application - orchestration
from softsell_assistant.application.assistant_gateway import AssistantGateway
from softsell_assistant.application.chat_session import ChatSession

# Infrastructure - Adapters
from softsell_assistant.infrastructure.env_config import initialize_environment
from softsell_assistant.infrastructure.llm_factory import create_llm_adapter
from softsell_assistant.infrastructure.telemetry_factory import get_tracer_adapter

# Presentation
from softsell_assistant.ui.chat_widget import Theme, build_chat_widget

logger = logging.getLogger(__name__)


def create_app(app_settings: AppSettings) -> gr.Blocks:
    """Wire adapters, gateway and widget. Raises ConfigurationError on bad settings."""
    # 1. Instantiate Adapters, passing the settings object
    tracer = get_tracer_adapter(app_settings)
    llm_service_adapter = create_llm_adapter(app_settings)

    # 2. One gateway is shared; every browser session gets its own conversation
    gateway = AssistantGateway(
        llm_service=llm_service_adapter,
        model=app_settings.active_model_name,
        tracer=tracer,
        max_output_tokens=app_settings.ASSISTANT_MAX_OUTPUT_TOKENS,
        max_attempts=app_settings.ASSISTANT_MAX_ATTEMPTS,
        retry_backoff=app_settings.ASSISTANT_RETRY_BACKOFF,
    )

    def session_factory() -> ChatSession:
        return ChatSession(gateway=gateway, tracer=tracer)

    logger.info("Chat session wiring initialized successfully.")
    return build_chat_widget(session_factory, theme=Theme(app_settings.UI_THEME))


if __name__ == "__main__":
    initialize_environment(settings)

    print("\n" + "-"*30 + " SoftSell Assistant Starting " + "-"*30)
    print(f"ℹ️  Provider: {settings.LLM_PROVIDER}, model: {settings.active_model_name}")
    print("-"*(60 + len(" SoftSell Assistant Starting ")) + "\n")

    try:
        demo = create_app(settings)
    except ConfigurationError as e:
        logger.error(f"❌ Configuration error, refusing to start: {e}")
        sys.exit(1)

    demo.queue().launch(server_name=settings.SERVER_NAME, server_port=settings.SERVER_PORT, share=False)
