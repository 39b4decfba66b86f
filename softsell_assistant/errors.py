"""Exception types raised by the assistant."""


class AssistantError(Exception):
    """Base exception for the SoftSell assistant."""


class ConfigurationError(AssistantError):
    """Raised when startup configuration is missing or invalid."""


class ApiKeyNotConfiguredError(ConfigurationError):
    """Raised when the selected provider has no API key configured."""


class UnknownProviderError(ConfigurationError):
    """Raised when LLM_PROVIDER names a backend we have no adapter for."""


class MalformedReplyError(AssistantError):
    """Raised when the generation backend answers without usable text."""
