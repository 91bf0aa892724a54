"""Chat assistant endpoint."""

from fastapi import APIRouter, HTTPException, status

from carecompanion.api.deps import Assistant
from carecompanion.schemas.chat import ChatRequest, ChatResponse

router = APIRouter()


@router.post(
    "",
    response_model=ChatResponse,
)
async def chat(request: ChatRequest, assistant: Assistant) -> ChatResponse:
    """Send a message to the health assistant.

    Always answers: when the model is unreachable the reply comes from the
    offline keyword table.
    """
    try:
        reply = await assistant.reply(request.message)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return ChatResponse(response=reply.response)
