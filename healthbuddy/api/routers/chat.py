# healthbuddy/api/routers/chat.py
import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from healthbuddy.core.security import get_current_user
from healthbuddy.models.user_auth import UserAuth
from healthbuddy.schemas.chat import ChatRequest, ChatResponse, ChatErrorResponse
from healthbuddy.services.chat import chat_service
from healthbuddy.services.completion_client import (
    CompletionClient,
    CompletionError,
    get_completion_client,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Chat"])


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={
        400: {"model": ChatErrorResponse},
        403: {"model": ChatErrorResponse},
        500: {"model": ChatErrorResponse},
    },
    summary="Ask the health buddy",
)
def chat(
    request: ChatRequest,
    current_user: UserAuth = Depends(get_current_user),
    completion_client: CompletionClient = Depends(get_completion_client),
):
    """
    Forward a message plus context to the completion API.

    The prompt is always: system prompt, formatted context, user message.
    Upstream failures answer 500 with `error` and `details`.
    """
    if not request.message or not request.message.strip():
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Missing required fields"},
        )

    if request.user_id is not None and request.user_id != current_user.id:
        logger.warning(f"Chat userId {request.user_id} does not match token user {current_user.id}")
        return JSONResponse(
            status_code=status.HTTP_403_FORBIDDEN,
            content={"error": "userId does not match the signed-in user"},
        )

    try:
        reply = chat_service.reply(request, completion_client)
    except CompletionError as e:
        logger.error(f"Chat endpoint error for user {current_user.id}: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to process chat request", "details": str(e)},
        )

    return ChatResponse(message=reply)
