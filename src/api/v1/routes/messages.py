"""Message API routes."""

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies.auth import CurrentProfile
from api.dependencies.services import get_messaging_service
from api.v1.schemas.message import (
    ConversationListResponse,
    ConversationResponse,
    MessageCreate,
    MessageDetailResponse,
    MessageListResponse,
    MessageResponse,
)
from core.rate_limit import limiter
from domain.services.messaging_service import MessagingService

router = APIRouter(prefix="/messages", tags=["messages"])


@router.get(
    "",
    response_model=MessageListResponse | ConversationListResponse,
    summary="List conversations or one thread",
)
@limiter.limit("60/minute")  # type: ignore[untyped-decorator]
async def list_messages(
    request: Request,
    profile: CurrentProfile,
    other_user_id: int | None = Query(
        None, alias="otherUserId", description="Counterpart profile ID"
    ),
    service: MessagingService = Depends(get_messaging_service),
) -> MessageListResponse | ConversationListResponse:
    """Without `otherUserId`, list conversations (latest first).

    With it, return the full thread with that profile, oldest first.
    """
    if other_user_id is not None:
        messages = await service.list_messages(profile.id, other_user_id)  # type: ignore[arg-type]
        return MessageListResponse(
            data=[MessageResponse.model_validate(m) for m in messages]
        )

    conversations = await service.list_conversations(profile.id)  # type: ignore[arg-type]
    return ConversationListResponse(
        data=[ConversationResponse.from_entity(c) for c in conversations]
    )


@router.post(
    "",
    response_model=MessageDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Send a message",
    responses={
        400: {"description": "Messaging yourself"},
        404: {"description": "Receiver not found"},
    },
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def send_message(
    request: Request,
    body: MessageCreate,
    profile: CurrentProfile,
    service: MessagingService = Depends(get_messaging_service),
) -> MessageDetailResponse:
    """Send a message; the receiver gets a notification when possible."""
    message = await service.send_message(profile, body.receiver_id, body.content)
    return MessageDetailResponse(data=MessageResponse.model_validate(message))


@router.delete(
    "/conversation/{other_user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a conversation",
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_conversation(
    request: Request,
    other_user_id: int,
    profile: CurrentProfile,
    service: MessagingService = Depends(get_messaging_service),
) -> None:
    """Delete every message between the caller and another profile, both directions."""
    await service.delete_conversation(profile.id, other_user_id)  # type: ignore[arg-type]


@router.delete(
    "/{message_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a message",
    responses={
        401: {"description": "Not a participant"},
        404: {"description": "Message not found"},
    },
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def delete_message(
    request: Request,
    message_id: int,
    profile: CurrentProfile,
    service: MessagingService = Depends(get_messaging_service),
) -> None:
    """Delete a message the caller sent or received."""
    await service.delete_message(profile.id, message_id)  # type: ignore[arg-type]
