"""Async Claude backend used by the analysis and proposal steps."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import anthropic
from tenacity import retry, stop_after_attempt, wait_exponential

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-haiku-4-5-20251001"

JSON_MODE_INSTRUCTION = (
    "Respond with a single JSON object and nothing else. "
    "Do not wrap it in markdown code fences."
)


@dataclass
class LLMResponse:
    """Text of one completion plus its token counts."""

    text: str
    input_tokens: int
    output_tokens: int


def build_system_prompt(system: str, json_mode: bool) -> str:
    """Fold the JSON-only instruction into the system prompt.

    The Messages API has no response-format switch, so structured output
    is requested in the instructions themselves.
    """
    if not json_mode:
        return system
    return f"{system}\n\n{JSON_MODE_INSTRUCTION}" if system else JSON_MODE_INSTRUCTION


def build_request(
    prompt: str,
    *,
    system: str,
    model: str,
    temperature: float,
    max_tokens: int,
) -> dict:
    """Keyword arguments for a single-turn ``messages.create`` call."""
    params = {
        "model": model,
        "max_tokens": max_tokens,
        "temperature": temperature,
        "messages": [{"role": "user", "content": prompt}],
    }
    if system:
        params["system"] = system
    return params


class LLMClient:
    """Single-turn Claude completions with exponential-backoff retries.

    Every call is recorded as ``(model, input_tokens, output_tokens)`` so the
    CLI can report usage. Failures that outlast the retries propagate.
    """

    def __init__(self, api_key: str | None = None, timeout: float | None = None):
        options = {
            key: value
            for key, value in (("api_key", api_key), ("timeout", timeout))
            if value is not None
        }
        self.client = anthropic.AsyncAnthropic(**options)
        self._token_log: list[tuple[str, int, int]] = []

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(min=1, max=10),
        reraise=True,
    )
    async def _call_api(self, params: dict) -> anthropic.types.Message:
        return await self.client.messages.create(**params)

    async def generate(
        self,
        prompt: str,
        system: str = "",
        model: str = DEFAULT_MODEL,
        temperature: float = 0.0,
        max_tokens: int = 1024,
        json_mode: bool = False,
    ) -> LLMResponse:
        """Complete ``prompt`` once and return the first text block."""
        params = build_request(
            prompt,
            system=build_system_prompt(system, json_mode),
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        logger.debug("Claude request: model=%s temperature=%s json=%s", model, temperature, json_mode)
        try:
            message = await self._call_api(params)
        except Exception:
            logger.error("Claude request to %s failed after retries", model, exc_info=True)
            raise

        usage = message.usage
        self._token_log.append((model, usage.input_tokens, usage.output_tokens))
        logger.debug("Claude usage: %d in / %d out", usage.input_tokens, usage.output_tokens)
        text = message.content[0].text if message.content else ""
        return LLMResponse(text=text, input_tokens=usage.input_tokens, output_tokens=usage.output_tokens)

    def get_token_summary(self) -> dict:
        """Totals plus per-call records since the last summary; clears the log."""
        calls, self._token_log = self._token_log, []
        return {
            "input": sum(entry[1] for entry in calls),
            "output": sum(entry[2] for entry in calls),
            "calls": calls,
        }
