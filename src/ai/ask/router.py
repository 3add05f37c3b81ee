"""FastAPI router for the ask-anything endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.ai.ask.dependencies import get_ask_service
from src.ai.ask.schemas import AskRequest, AskResponse, ErrorResponse
from src.ai.ask.service import AskService
from src.utils.logger import logger

router = APIRouter(tags=["Ask"])


@router.post(
    "/ask-anything",
    response_model=AskResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Question missing"},
        500: {"model": ErrorResponse, "description": "Answer could not be generated"},
    },
)
async def ask_anything(
    request: AskRequest,
    ask_service: Annotated[AskService, Depends(get_ask_service)],
) -> AskResponse:
    """
    Answer a question about Re:cinq using the knowledge base.

    Args:
        request: Question and optional session id
        ask_service: Ask service dependency

    Returns:
        AskResponse: Answer, cited sources and session id
    """
    logger.info("[USER_INPUT]", session_id=request.session_id, input=request.question)
    response = await ask_service.handle(request.question, request.session_id)
    logger.info(
        "[AGENT_OUTPUT]",
        session_id=response.session_id,
        output=response.answer,
        sources=[source.id for source in response.sources],
    )
    return response
