from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, Literal


class AppSettings(BaseSettings):
    # env_prefix can be used if your env variables have a common prefix e.g. MYAPP_
    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')

    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    # Generation backend. Keys have no default: a missing key stops startup.
    LLM_PROVIDER: Literal["gemini", "openai"] = "gemini"
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL_NAME: str = "gemini-2.5-flash"
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL_NAME: str = "gpt-4o-mini"

    # Assistant exchange
    ASSISTANT_MAX_OUTPUT_TOKENS: int = Field(default=200, gt=0)
    ASSISTANT_TIMEOUT: int = 30  # seconds, applied by the provider client
    ASSISTANT_MAX_ATTEMPTS: int = Field(default=1, ge=1)
    ASSISTANT_RETRY_BACKOFF: float = Field(default=0.0, ge=0.0)

    # Telemetry settings
    TELEMETRY_PROVIDER: Literal["langfuse", "none"] = "none"

    # Langfuse settings
    LANGFUSE_PUBLIC_KEY: Optional[str] = None
    LANGFUSE_SECRET_KEY: Optional[str] = None
    LANGFUSE_HOST: str = "https://cloud.langfuse.com"
    LANGFUSE_DEBUG: bool = False

    # Widget
    UI_THEME: Literal["light", "dark"] = "light"
    SERVER_NAME: str = "127.0.0.1"
    SERVER_PORT: int = 7860

    @property
    def active_model_name(self) -> str:
        """Model identifier for the selected provider."""
        if self.LLM_PROVIDER == "openai":
            return self.OPENAI_MODEL_NAME
        return self.GEMINI_MODEL_NAME


# Create a single instance to be used throughout the application
settings = AppSettings()
