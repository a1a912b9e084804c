from __future__ import annotations

import logging
from dataclasses import dataclass

from openai import AsyncOpenAI, OpenAIError

from valueadd.errors import GenerationError


logger = logging.getLogger(__name__)


@dataclass
class BasicLLMConfig:
    base_url: str | None
    api_key: str | None
    model: str
    timeout_seconds: int
    max_completion_tokens: int | None = None


class BasicLLMClient:
    """Chat-completions text generator for report content."""

    def __init__(self, cfg: BasicLLMConfig, client: AsyncOpenAI | None = None):
        self.cfg = cfg
        self._client: AsyncOpenAI | None = client

    @property
    def configured(self) -> bool:
        return bool(self.cfg.api_key) or self._client is not None

    def client(self) -> AsyncOpenAI:
        if not self.configured:
            raise GenerationError('LLM client is not configured')
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self.cfg.api_key,
                base_url=self.cfg.base_url,
                timeout=max(30, int(self.cfg.timeout_seconds)),
            )
        return self._client

    async def generate(self, prompt: str, system_instructions: str) -> str:
        params: dict = {
            'model': self.cfg.model,
            'messages': [
                {'role': 'system', 'content': system_instructions},
                {'role': 'user', 'content': prompt},
            ],
        }
        if self.cfg.max_completion_tokens:
            params['max_completion_tokens'] = int(self.cfg.max_completion_tokens)

        try:
            response = await self.client().chat.completions.create(**params)
        except OpenAIError as exc:
            logger.error('Error generating content with %s: %s', self.cfg.model, exc)
            raise GenerationError('Failed to generate report content') from exc

        choices = getattr(response, 'choices', None) or []
        content = choices[0].message.content if choices else None
        text = str(content or '').strip()
        if not text:
            raise GenerationError('Language model returned an empty report')
        logger.info('Generated %s characters of report content with %s', len(text), self.cfg.model)
        return text
