import logging
import contextlib
from typing import Any, Dict, Generator, Optional

from langfuse import Langfuse

from softsell_assistant.application.ports import TracerPort
from softsell_assistant.config import AppSettings

logger = logging.getLogger(__name__)


class LangfuseTracerAdapter(TracerPort):
    """Langfuse-based implementation of TracerPort"""

    def __init__(self, app_settings: AppSettings):
        self._client = None
        if not (app_settings.LANGFUSE_PUBLIC_KEY and app_settings.LANGFUSE_SECRET_KEY):
            logger.warning("Langfuse credentials not provided. Tracing disabled.")
            return
        try:
            self._client = Langfuse(
                public_key=app_settings.LANGFUSE_PUBLIC_KEY,
                secret_key=app_settings.LANGFUSE_SECRET_KEY,
                host=app_settings.LANGFUSE_HOST,
                debug=app_settings.LANGFUSE_DEBUG,
            )
            logger.info("Langfuse initialized")
        except Exception as e:
            logger.warning(f"Langfuse init failed: {e}")

    @property
    def enabled(self) -> bool:
        return self._client is not None

    @contextlib.contextmanager
    def _observation(self, name: str, metadata: Optional[Dict[str, Any]]) -> Generator[Any, None, None]:
        if not self.enabled:
            yield None
            return

        # metadata is updated in place by the caller while the block runs
        metadata = metadata if metadata is not None else {}
        with self._client.start_as_current_span(name=name, metadata=dict(metadata)) as span:
            try:
                yield span
            except Exception as e:
                span.update(metadata={**metadata, "error": str(e)})
                raise
            else:
                span.update(metadata={**metadata, "status": "finished"})

    def trace(self, name: str, metadata: Optional[Dict[str, Any]] = None):
        return self._observation(name, metadata)

    def span(self, name: str, metadata: Optional[Dict[str, Any]] = None):
        return self._observation(name, metadata)

    def flush(self) -> None:
        if self.enabled:
            self._client.flush()
