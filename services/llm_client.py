"""Thin wrapper around the OpenAI chat completions API.

Two call shapes are supported: `generate_object` asks for a JSON object and
validates it against a pydantic model, `generate_text` returns the reply as
plain text. Provider failures and malformed replies surface as
`AIServiceError`; nothing is retried or repaired.
"""

import json
from typing import Optional, Type, TypeVar

from openai import OpenAI, OpenAIError
from pydantic import BaseModel, ValidationError as PydanticValidationError

from core import config
from core.exceptions import AIServiceError, ConfigurationError
from core.logger import get_logger

logger = get_logger("services.llm_client")

M = TypeVar("M", bound=BaseModel)

SCHEMA_INSTRUCTIONS = """

Respond with a single JSON object only, no markdown fences or commentary.
The object must validate against this JSON Schema:
{schema}"""


class LLMClient:
    """Synchronous client for the configured chat model."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = config.OPENAI_MODEL,
        timeout: float = config.AI_TIMEOUT_SECONDS,
        client: Optional[OpenAI] = None,
    ):
        self.api_key = api_key if api_key is not None else config.OPENAI_API_KEY
        self.model = model
        self.timeout = timeout
        self._client = client

    @property
    def configured(self) -> bool:
        return bool(self.api_key) or self._client is not None

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            if not self.api_key:
                raise ConfigurationError("OPENAI_API_KEY is not set", config_key="OPENAI_API_KEY")
            self._client = OpenAI(api_key=self.api_key, timeout=self.timeout, max_retries=0)
        return self._client

    def _complete(self, system: str, prompt: str, temperature: float, max_tokens: int, json_mode: bool) -> str:
        kwargs = {}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        try:
            resp = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": prompt},
                ],
                temperature=temperature,
                max_tokens=max_tokens,
                **kwargs,
            )
        except OpenAIError as exc:
            logger.error("LLM request failed: %s", exc)
            raise AIServiceError(f"AI provider error: {exc}", operation="chat.completions") from exc

        choice = resp.choices[0] if resp.choices else None
        content = choice.message.content if choice and choice.message else None
        if not content:
            raise AIServiceError("AI provider returned an empty response", operation="chat.completions")
        if json_mode and choice.finish_reason == "length":
            raise AIServiceError("AI response was truncated at the token limit", operation="chat.completions")
        return content

    def generate_object(
        self,
        system: str,
        prompt: str,
        schema: Type[M],
        temperature: float = config.AI_TEMPERATURE,
        max_tokens: int = config.AI_MAX_TOKENS,
    ) -> M:
        """Request a JSON object and validate it as `schema`.

        Raises:
            AIServiceError: On provider failure or if the reply is not valid JSON
                for the schema.
        """
        full_prompt = prompt + SCHEMA_INSTRUCTIONS.format(schema=json.dumps(schema.model_json_schema()))
        content = self._complete(system, full_prompt, temperature, max_tokens, json_mode=True)
        try:
            return schema.model_validate_json(content)
        except PydanticValidationError as exc:
            logger.error("LLM response did not match %s: %s", schema.__name__, exc.error_count())
            raise AIServiceError(
                f"AI response did not match the {schema.__name__} schema: {exc.error_count()} error(s)",
                operation="generate_object",
            ) from exc

    def generate_text(self, system: str, prompt: str, temperature: float, max_tokens: int) -> str:
        """Request a free-text completion."""
        return self._complete(system, prompt, temperature, max_tokens, json_mode=False).strip()

    def ping(self, timeout: float = config.AI_HEALTH_TIMEOUT_SECONDS) -> bool:
        """Return True when the provider answers a cheap authenticated request."""
        try:
            self.client.with_options(timeout=timeout).models.list()
            return True
        except (OpenAIError, ConfigurationError) as exc:
            logger.warning("AI health check failed: %s", exc)
            return False
