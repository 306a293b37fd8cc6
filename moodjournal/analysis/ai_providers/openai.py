from __future__ import annotations

import logging
from typing import Any, List, Optional

import openai
from openai import OpenAI

from moodjournal.core.config import Settings
from moodjournal.analysis.errors import (
    ConfigurationError,
    GatewayError,
    RateLimitedError,
    UsageLimitError,
)

logger = logging.getLogger(__name__)

# Reflective / empathetic text vs. deterministic extraction
REFLECTION_TEMPERATURE = 0.7
OUTREACH_TEMPERATURE = 0.8
CONFLICT_TEMPERATURE = 0.3
EXTRACTION_TEMPERATURE = 0.2


class ChatGateway:
    """Facade around the OpenAI-compatible AI gateway's chat completions.

    The credential is checked on every call rather than at construction so
    that paths which never reach the model (crisis short-circuit, empty
    weekly summaries) keep working on an unconfigured deployment.
    """

    def __init__(self, settings: Settings, client: Optional[OpenAI] = None):
        self.model = settings.ai_gateway_model
        self._settings = settings
        self._client = client

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            self._client = OpenAI(
                api_key=self._settings.ai_gateway_api_key,
                base_url=self._settings.ai_gateway_base_url,
                timeout=self._settings.ai_gateway_timeout_seconds,
                max_retries=0,  # 429/402 go straight back to the caller
            )
        return self._client

    def complete(self, messages: List[dict[str, Any]], *, temperature: float) -> str:
        """Run one chat completion and return the raw text of the first choice.

        Raises:
            ConfigurationError: No gateway credential is configured.
            RateLimitedError: Upstream answered 429.
            UsageLimitError: Upstream answered 402.
            GatewayError: Any other upstream or transport failure, or an empty reply.
        """
        if not self._settings.ai_gateway_api_key:
            raise ConfigurationError("AI_GATEWAY_API_KEY is not configured")

        try:
            resp = self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=temperature,
            )
        except openai.RateLimitError as e:
            logger.warning(f"AI gateway rate limited the request: {e}")
            raise RateLimitedError() from e
        except openai.APIStatusError as e:
            logger.error(f"AI gateway error: {e.status_code} {e.message}")
            if e.status_code == 402:
                raise UsageLimitError() from e
            raise GatewayError(f"AI gateway error: {e.status_code}") from e
        except openai.APIError as e:
            logger.error(f"AI gateway request failed: {e}")
            raise GatewayError(f"AI gateway error: {e}") from e

        content = resp.choices[0].message.content if resp.choices else None
        if not content or not content.strip():
            raise GatewayError("No response from AI")
        logger.debug(f"Raw AI response: {content}")
        return content
