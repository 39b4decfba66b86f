import asyncio
import logging
from typing import Optional

from softsell_assistant.application.ports import LLMServicePort, TracerPort
from softsell_assistant.application.tracing import observe
from softsell_assistant.domain.prompt_strategy import BusinessContextPromptStrategy, PromptStrategy
from softsell_assistant.errors import MalformedReplyError

logger = logging.getLogger(__name__)

FALLBACK_REPLY = (
    "I'm sorry, I'm having trouble connecting right now. "
    "Please try again or contact our team through the contact form."
)
DEFAULT_MAX_OUTPUT_TOKENS = 200


class AssistantGateway:
    """Turns a visitor utterance into a reply from the generation backend.

    Every exchange is seeded with the prompt strategy's preamble. Any failure
    of the exchange resolves to ``fallback_reply``; ``reply_to`` never raises.
    Retrying is opt-in: with ``max_attempts=1`` the backend is called once.
    """

    def __init__(self,
                 llm_service: LLMServicePort,
                 model: str,
                 tracer: Optional[TracerPort] = None,
                 prompt_strategy: Optional[PromptStrategy] = None,
                 max_output_tokens: int = DEFAULT_MAX_OUTPUT_TOKENS,
                 max_attempts: int = 1,
                 retry_backoff: float = 0.0,
                 fallback_reply: str = FALLBACK_REPLY):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.llm_service = llm_service
        self.model = model
        self.tracer = tracer
        self.prompt_strategy = prompt_strategy or BusinessContextPromptStrategy()
        self.max_output_tokens = max_output_tokens
        self.max_attempts = max_attempts
        self.retry_backoff = retry_backoff
        self.fallback_reply = fallback_reply

    async def _exchange(self, utterance: str) -> str:
        reply = await self.llm_service.generate_reply(
            history=self.prompt_strategy.build_preamble(),
            utterance=utterance,
            max_output_tokens=self.max_output_tokens,
            model=self.model,
        )
        if not isinstance(reply, str) or not reply.strip():
            raise MalformedReplyError(f"Backend returned no usable text: {reply!r}")
        return reply

    async def reply_to(self, utterance: str) -> str:
        metadata = {
            "assistant.model": self.model,
            "assistant.utterance_length": len(utterance),
            "assistant.success": False,
        }
        with observe(self.tracer, "assistant_gateway.reply", metadata):
            return await self._reply_with_policy(utterance, metadata)

    async def _reply_with_policy(self, utterance: str, metadata: dict) -> str:
        for attempt in range(1, self.max_attempts + 1):
            try:
                reply = await self._exchange(utterance)
                logger.info(f"Assistant reply generated on attempt {attempt}: {reply[:100]}...")
                metadata["assistant.success"] = True
                metadata["assistant.attempts"] = attempt
                return reply
            except Exception as e:
                metadata["assistant.error"] = str(e)
                if attempt < self.max_attempts:
                    logger.warning(f"Assistant exchange failed (attempt {attempt}/{self.max_attempts}): {e}")
                    if self.retry_backoff:
                        await asyncio.sleep(self.retry_backoff * attempt)
                else:
                    logger.exception(f"❌ Assistant exchange failed, answering with fallback: {e}")
        metadata["assistant.attempts"] = self.max_attempts
        return self.fallback_reply
