from __future__ import annotations

from typing import Final, Literal

from pydantic import BaseModel, Field, StrictStr

LANGUAGES: Final[tuple[str, ...]] = (
    "javascript",
    "typescript",
    "python",
    "java",
    "c",
    "cpp",
)
DEFAULT_LANGUAGE: Final[str] = "javascript"

# Prompt label used when a request carries no language.
DEFAULT_LANGUAGE_LABEL: Final[str] = "general programming"


class ExplainRequest(BaseModel):
    code: StrictStr | None = Field(None, description="Source code to explain.")
    language: StrictStr | None = Field(
        None, description="Language tag; defaults to a generic label when omitted."
    )


class ExplainResponse(BaseModel):
    explanation: StrictStr


class ErrorResponse(BaseModel):
    error: StrictStr


class ExecutionFile(BaseModel):
    name: StrictStr
    content: StrictStr


class ExecutionRequest(BaseModel):
    """Request body understood by the Piston ``/execute`` endpoint."""

    language: StrictStr
    version: Literal["*"] = "*"
    files: list[ExecutionFile]

    @classmethod
    def for_snippet(cls, code: str, language: str) -> "ExecutionRequest":
        return cls(language=language, files=[ExecutionFile(name="main", content=code)])
