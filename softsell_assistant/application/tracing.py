import contextlib
import logging
from typing import Any, Dict, Iterator, Optional

from softsell_assistant.application.ports import TracerPort

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def observe(tracer: Optional[TracerPort], name: str, metadata: Optional[Dict[str, Any]] = None,
            kind: str = "span") -> Iterator[None]:
    """Run the block inside a tracer observation that can never fail the block.

    Errors raised by the tracer on enter or exit are logged and dropped;
    errors raised by the block itself propagate unchanged.
    """
    stack = contextlib.ExitStack()
    if tracer is not None:
        try:
            stack.enter_context(getattr(tracer, kind)(name=name, metadata=metadata))
        except Exception as e:
            logger.warning(f"Tracing unavailable for '{name}': {e}")
    try:
        yield
    finally:
        try:
            stack.close()
        except Exception as e:
            logger.warning(f"Closing trace '{name}' failed: {e}")
