import logging
from contextlib import contextmanager
from typing import Any, Dict, Optional

from softsell_assistant.application.ports import TracerPort
from softsell_assistant.config import AppSettings, settings
from softsell_assistant.infrastructure.langfuse_tracer_adapter import LangfuseTracerAdapter

logger = logging.getLogger(__name__)

# Singleton pattern for tracer instance
_tracer_instance: Optional[TracerPort] = None


def get_tracer_adapter(app_settings: Optional[AppSettings] = None) -> TracerPort:
    """
    Factory function to get the appropriate tracer implementation.
    Uses a singleton pattern to ensure only one tracer instance exists.

    Returns:
        TracerPort: A tracer implementation that conforms to the TracerPort interface
    """
    global _tracer_instance

    if _tracer_instance is not None:
        return _tracer_instance

    app_settings = app_settings or settings
    tracer_type = app_settings.TELEMETRY_PROVIDER.lower()

    if tracer_type == "langfuse":
        logger.info("Initializing Langfuse tracer")
        _tracer_instance = LangfuseTracerAdapter(app_settings)
    else:
        logger.info(f"Telemetry provider '{tracer_type}', using NullTracerAdapter")
        _tracer_instance = NullTracerAdapter()

    return _tracer_instance


def reset_tracer_adapter() -> None:
    global _tracer_instance
    _tracer_instance = None


class NullTracerAdapter(TracerPort):
    """
    Null implementation of TracerPort that does nothing.
    Used as a no-op tracer.
    """

    @contextmanager
    def trace(self, name: str, metadata: Optional[Dict[str, Any]] = None):
        """Do-nothing implementation of trace."""
        yield

    @contextmanager
    def span(self, name: str, metadata: Optional[Dict[str, Any]] = None):
        """Do-nothing implementation of span."""
        yield
