import logging

from softsell_assistant.application.ports import LLMServicePort
from softsell_assistant.config import AppSettings
from softsell_assistant.errors import UnknownProviderError
from softsell_assistant.infrastructure.gemini_llm_adapter import GeminiLLMAdapter
from softsell_assistant.infrastructure.openai_llm_adapter import OpenAILLMAdapter

logger = logging.getLogger(__name__)

_ADAPTERS = {
    "gemini": GeminiLLMAdapter,
    "openai": OpenAILLMAdapter,
}


def create_llm_adapter(app_settings: AppSettings) -> LLMServicePort:
    """
    Build the generation backend adapter named by LLM_PROVIDER.

    Raises:
        UnknownProviderError: no adapter exists for the provider.
        ApiKeyNotConfiguredError: the provider's API key is missing.
    """
    provider = app_settings.LLM_PROVIDER.lower()
    adapter_cls = _ADAPTERS.get(provider)
    if adapter_cls is None:
        raise UnknownProviderError(f"Unknown LLM provider: {app_settings.LLM_PROVIDER}")

    logger.info(f"Initializing {provider} adapter with model {app_settings.active_model_name}")
    return adapter_cls(app_settings=app_settings)
