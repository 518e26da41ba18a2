"""Thin wrapper around the OpenAI client used for reconciliation diagnoses."""

from typing import Optional
import logging
import os

from openai import OpenAI, OpenAIError

from ..config import AnalysisConfig
from ..utils.exceptions import AnalysisError

logger = logging.getLogger(__name__)


class AIClient:
    """Explicitly constructed chat client; nothing is cached at module level."""

    def __init__(self, config: AnalysisConfig, api_key: str):
        self.config = config
        self._client = OpenAI(
            api_key=api_key,
            base_url=config.base_url,
            timeout=config.timeout,
            max_retries=config.max_retries,
        )

    @property
    def model(self) -> str:
        return self.config.model

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        """
        Send one system + user exchange and return the reply text.

        Raises:
            AnalysisError: If the provider call fails
        """
        try:
            completion = self._client.chat.completions.create(
                model=self.config.model,
                temperature=self.config.temperature,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except OpenAIError as e:
            raise AnalysisError(f"Reasoning service call failed: {e}") from e

        if not completion.choices:
            return ""
        content = completion.choices[0].message.content or ""
        return content.strip()


def build_ai_client(
    config: AnalysisConfig, api_key: Optional[str] = None
) -> Optional[AIClient]:
    """
    Build an AIClient, or None when analysis is disabled or no key is set.

    Args:
        config: Analysis configuration
        api_key: Explicit key; read from config.api_key_env when omitted
    """
    if not config.enabled:
        return None

    api_key = api_key or os.environ.get(config.api_key_env)
    if not api_key:
        logger.warning(f"{config.api_key_env} is not set; analysis disabled")
        return None

    return AIClient(config, api_key)
