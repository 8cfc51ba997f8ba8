"""Pydantic schemas for Message API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from api.v1.schemas.profile import ProfileResponse
from domain.entities.message import Conversation


class MessageCreate(BaseModel):
    """Schema for sending a message."""

    receiver_id: int
    content: str = Field(..., min_length=1, max_length=5000)

    @field_validator("content")
    @classmethod
    def reject_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("content must not be blank")
        return v


class MessageResponse(BaseModel):
    """A single message."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    sender_id: int
    receiver_id: int
    content: str
    created_at: datetime


class MessageDetailResponse(BaseModel):
    data: MessageResponse


class MessageListResponse(BaseModel):
    """Thread between the caller and one counterpart, oldest first."""

    data: list[MessageResponse]


class ConversationResponse(BaseModel):
    """Latest message with one counterpart."""

    other_profile_id: int
    other_profile: ProfileResponse | None = None
    last_message: MessageResponse

    @classmethod
    def from_entity(cls, conversation: Conversation) -> "ConversationResponse":
        other = conversation.other_profile
        return cls(
            other_profile_id=conversation.other_profile_id,
            other_profile=ProfileResponse.from_entity(other) if other else None,
            last_message=MessageResponse.model_validate(conversation.last_message),
        )


class ConversationListResponse(BaseModel):
    """Conversations, most recent first."""

    data: list[ConversationResponse]
