"""The two outbound calls a session makes.

Both return ``(Outcome, text)`` and never raise for transport, HTTP status or
body-parsing problems: every failure becomes display text.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from code_explainer.client.state import Outcome
from code_explainer.models.schemas import ExecutionRequest

logger = logging.getLogger(__name__)

NETWORK_ERROR = "Network error occurred"
INVALID_RESPONSE_PREFIX = "Invalid server response:\n\n"
EMPTY_EXPLANATION = "Something went wrong."
NO_OUTPUT = "No output."
RUN_FAILED_PREFIX = "Failed to run code: "


def _field(body: Any, name: str) -> Any:
    return body.get(name) if isinstance(body, dict) else None


async def fetch_explanation(
    http: httpx.AsyncClient, url: str, code: str, language: str
) -> tuple[Outcome, str]:
    try:
        res = await http.post(url, json={"code": code, "language": language})
    except httpx.HTTPError as exc:
        logger.warning("Explanation request failed: %s", exc)
        return Outcome.FAILURE, NETWORK_ERROR

    raw = res.text
    try:
        body = res.json()
    except ValueError:
        return Outcome.FAILURE, INVALID_RESPONSE_PREFIX + raw

    if not res.is_success:
        return Outcome.FAILURE, "Error: " + str(_field(body, "error") or raw)

    explanation = _field(body, "explanation")
    if not explanation:
        return Outcome.FAILURE, EMPTY_EXPLANATION
    return Outcome.SUCCESS, str(explanation)


async def run_code(
    http: httpx.AsyncClient, url: str, code: str, language: str
) -> tuple[Outcome, str]:
    payload = ExecutionRequest.for_snippet(code, language).model_dump()
    try:
        res = await http.post(url, json=payload)
        body = res.json()
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("Execution request failed: %s", exc)
        return Outcome.FAILURE, RUN_FAILED_PREFIX + (str(exc) or type(exc).__name__)

    output = _field(_field(body, "run"), "output")
    if output:
        outcome = Outcome.SUCCESS if res.is_success else Outcome.FAILURE
        return outcome, str(output)

    message = _field(body, "message")
    if message:
        return Outcome.FAILURE, str(message)

    return (Outcome.SUCCESS if res.is_success else Outcome.FAILURE), NO_OUTPUT
