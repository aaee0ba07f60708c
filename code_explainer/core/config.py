from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


def _optional_from_env(name: str) -> str | None:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return None
    return raw.strip()


def _str_from_env(name: str, default: str) -> str:
    value = _optional_from_env(name)
    return default if value is None else value


@dataclass(frozen=True, slots=True)
class Settings:
    openai_api_key: str | None = None
    openai_model: str = "gpt-4.1"
    execution_url: str = "https://emkc.org/api/v2/piston/execute"
    explainer_url: str = "http://127.0.0.1:8000/api/code-explainer"
    log_level: str = "INFO"

    @property
    def has_api_key(self) -> bool:
        return bool(self.openai_api_key)

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            openai_api_key=_optional_from_env("OPENAI_API_KEY"),
            openai_model=_str_from_env("OPENAI_MODEL", "gpt-4.1"),
            execution_url=_str_from_env(
                "PISTON_EXECUTE_URL", "https://emkc.org/api/v2/piston/execute"
            ),
            explainer_url=_str_from_env(
                "CODE_EXPLAINER_URL", "http://127.0.0.1:8000/api/code-explainer"
            ),
            log_level=_str_from_env("LOG_LEVEL", "INFO").upper(),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
