import os
import logging

from dotenv import find_dotenv, load_dotenv

from softsell_assistant.config import AppSettings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(app_settings: AppSettings) -> None:
    """Configure the root logger with console and file handlers."""
    os.makedirs(app_settings.LOG_DIR, exist_ok=True)

    # Get log level from settings, default to INFO if not valid
    log_level_str = app_settings.LOG_LEVEL.upper()
    numeric_log_level = getattr(logging, log_level_str, logging.INFO)

    logging.basicConfig(
        level=numeric_log_level,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(),  # Console handler
            logging.FileHandler(os.path.join(app_settings.LOG_DIR, "app.log"))  # File handler
        ]
    )


def initialize_environment(app_settings: AppSettings) -> None:
    """Set up environment variables and logging for the application"""
    # AppSettings reads .env itself; this exports it to os.environ for SDKs
    # that read their own variables (LANGFUSE_*, GOOGLE_API_KEY, OPENAI_*).
    load_dotenv(find_dotenv(usecwd=True))
    configure_logging(app_settings)

    logger = logging.getLogger(__name__)
    logger.info(f"Application starting with log level: {app_settings.LOG_LEVEL.upper()}")
    logger.info(f"LLM provider: {app_settings.LLM_PROVIDER}, model: {app_settings.active_model_name}")
    logger.info(f"Telemetry provider: {app_settings.TELEMETRY_PROVIDER}")
