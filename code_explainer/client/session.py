"""Client-side orchestration of the two result panes.

A ``CodeExplainerSession`` holds the editor text, the selected language and
one ``PaneState`` per pane. A view binds its "Analyze" and "Run" controls to
``can_analyze``/``can_run`` and the ``analyze()``/``run()`` coroutines, and
renders ``explanation_text``/``execution_text``.

The panes never wait on each other::

    async with CodeExplainerSession() as session:
        session.code = "print('hi')"
        session.language = "python"
        await asyncio.gather(session.analyze(), session.run())

A session that created its own HTTP client must be closed with ``aclose()``
or used through ``async with``. The client is only opened on the first
request, so a session that never sends one holds nothing to close.
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Awaitable, Callable

import httpx

from code_explainer.client.state import (
    Outcome,
    PaneState,
    Started,
    display_text,
    settle,
    transition,
)
from code_explainer.client.transport import fetch_explanation, run_code
from code_explainer.core.config import Settings, get_settings
from code_explainer.models.schemas import DEFAULT_LANGUAGE, LANGUAGES

logger = logging.getLogger(__name__)

ANALYZING_LABEL = "Analyzing..."
RUNNING_LABEL = "Running..."

Call = Callable[[httpx.AsyncClient, str, str, str], Awaitable[tuple[Outcome, str]]]


class CodeExplainerSession:
    def __init__(
        self,
        settings: Settings | None = None,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._owns_http = http is None
        self._http = http
        self.code: str = ""
        self._language: str = DEFAULT_LANGUAGE
        self.explanation = PaneState()
        self.execution = PaneState()

    async def __aenter__(self) -> "CodeExplainerSession":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http and self._http is not None:
            await self._http.aclose()
            self._http = None

    def _client(self) -> httpx.AsyncClient:
        if self._http is None:
            # No timeout: a hung service keeps its pane pending.
            self._http = httpx.AsyncClient(timeout=None)
        return self._http

    @property
    def language(self) -> str:
        return self._language

    @language.setter
    def language(self, value: str) -> None:
        if value not in LANGUAGES:
            raise ValueError(f"unsupported language {value!r}; expected one of {LANGUAGES}")
        self._language = value

    @property
    def has_code(self) -> bool:
        return bool(self.code.strip())

    @property
    def can_analyze(self) -> bool:
        return self.has_code and not self.explanation.is_pending

    @property
    def can_run(self) -> bool:
        return self.has_code and not self.execution.is_pending

    @property
    def explanation_text(self) -> str:
        return display_text(self.explanation, ANALYZING_LABEL)

    @property
    def execution_text(self) -> str:
        return display_text(self.execution, RUNNING_LABEL)

    async def analyze(self) -> PaneState:
        """Request an explanation for the current snippet."""
        if not self.can_analyze:
            return self.explanation
        self.explanation = transition(self.explanation, Started())
        generation = self.explanation.generation
        outcome, text = await self._call(fetch_explanation, self.settings.explainer_url)
        self.explanation = transition(self.explanation, settle(outcome, text, generation))
        logger.debug("Explanation pane settled: %s", self.explanation.outcome)
        return self.explanation

    async def run(self) -> PaneState:
        """Send the current snippet to the execution service."""
        if not self.can_run:
            return self.execution
        self.execution = transition(self.execution, Started())
        generation = self.execution.generation
        outcome, text = await self._call(run_code, self.settings.execution_url)
        self.execution = transition(self.execution, settle(outcome, text, generation))
        logger.debug("Execution pane settled: %s", self.execution.outcome)
        return self.execution

    async def _call(self, call: Call, url: str) -> tuple[Outcome, str]:
        # Snapshot before the await; later edits do not affect this request.
        code, language = self.code, self.language
        return await call(self._client(), url, code, language)
