"""Adapter around the OpenAI chat-completions API.

This is the only module that talks to the language model. Each call is a
single user-role message with no history and no streaming.
"""

from __future__ import annotations

import logging

from openai import OpenAI

logger = logging.getLogger(__name__)

EMPTY_COMPLETION = "No response"
UNKNOWN_ERROR = "Unknown error"


class CompletionProvider:
    def __init__(self, api_key: str | None, model: str) -> None:
        self.api_key = api_key
        self.model = model

    def _client(self) -> OpenAI:
        # Built per call: a missing key fails here and is handled by the caller.
        return OpenAI(api_key=self.api_key)

    def complete(self, prompt: str) -> str:
        response = self._client().chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
        )
        content = response.choices[0].message.content
        if not content:
            logger.warning("Completion from %s had no content", self.model)
            return EMPTY_COMPLETION
        return content


def error_message(exc: BaseException) -> str:
    """Best-effort human-readable message for a provider failure."""
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    text = str(exc)
    return text or UNKNOWN_ERROR
