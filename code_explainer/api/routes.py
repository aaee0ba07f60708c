from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from code_explainer.core.config import get_settings
from code_explainer.models.schemas import ErrorResponse, ExplainRequest, ExplainResponse
from code_explainer.services.completion import CompletionProvider, error_message
from code_explainer.services.prompt import build_prompt

logger = logging.getLogger(__name__)

router = APIRouter()


def get_completion_provider() -> CompletionProvider:
    settings = get_settings()
    return CompletionProvider(api_key=settings.openai_api_key, model=settings.openai_model)


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content=ErrorResponse(error=message).model_dump()
    )


@router.post(
    "/code-explainer",
    response_model=ExplainResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
def explain(
    req: ExplainRequest,
    provider: CompletionProvider = Depends(get_completion_provider),
) -> ExplainResponse | JSONResponse:
    """Ask the completion provider to explain, critique and refactor a snippet.

    The provider's text is returned verbatim. Provider failures of any kind are
    reported as a 500 with a derived message and never propagate.
    """
    logger.debug("API key loaded: %s", "yes" if get_settings().has_api_key else "no")

    if req.code is None or not req.code.strip():
        return error_response("No code provided", status.HTTP_400_BAD_REQUEST)

    prompt = build_prompt(req.code, req.language)

    try:
        content = provider.complete(prompt)
    except Exception as exc:
        logger.exception("Completion provider call failed")
        return error_response(error_message(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)

    return ExplainResponse(explanation=content)
