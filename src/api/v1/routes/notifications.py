"""Notification API routes."""

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentProfile
from api.dependencies.services import get_notification_service
from api.v1.schemas.notification import (
    NotificationListResponse,
    NotificationResponse,
    UnreadCountResponse,
)
from core.rate_limit import limiter
from domain.services.notification_service import NotificationService

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get(
    "",
    response_model=NotificationListResponse,
    summary="List my notifications",
)
@limiter.limit("60/minute")  # type: ignore[untyped-decorator]
async def list_notifications(
    request: Request,
    profile: CurrentProfile,
    service: NotificationService = Depends(get_notification_service),
) -> NotificationListResponse:
    """Get the caller's notifications, newest first."""
    notifications = await service.list_for_profile(profile.id)  # type: ignore[arg-type]
    return NotificationListResponse(
        data=[NotificationResponse.model_validate(n) for n in notifications]
    )


@router.get(
    "/unread-count",
    response_model=UnreadCountResponse,
    summary="Get unread notification count",
)
@limiter.limit("120/minute")  # type: ignore[untyped-decorator]
async def get_unread_count(
    request: Request,
    profile: CurrentProfile,
    service: NotificationService = Depends(get_notification_service),
) -> UnreadCountResponse:
    """Count the caller's unread notifications."""
    count = await service.get_unread_count(profile.id)  # type: ignore[arg-type]
    return UnreadCountResponse(count=count)


@router.put(
    "/{notification_id}/read",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Mark notification as read",
    responses={
        401: {"description": "Not the owner"},
        404: {"description": "Notification not found"},
    },
)
@limiter.limit("60/minute")  # type: ignore[untyped-decorator]
async def mark_notification_read(
    request: Request,
    notification_id: int,
    profile: CurrentProfile,
    service: NotificationService = Depends(get_notification_service),
) -> None:
    """Mark one of the caller's notifications as read. Idempotent."""
    await service.mark_read(profile.id, notification_id)  # type: ignore[arg-type]


@router.delete(
    "/{notification_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete notification",
    responses={
        401: {"description": "Not the owner"},
        404: {"description": "Notification not found"},
    },
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def delete_notification(
    request: Request,
    notification_id: int,
    profile: CurrentProfile,
    service: NotificationService = Depends(get_notification_service),
) -> None:
    """Delete one of the caller's notifications."""
    await service.delete(profile.id, notification_id)  # type: ignore[arg-type]


@router.delete(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Clear all notifications",
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def clear_notifications(
    request: Request,
    profile: CurrentProfile,
    service: NotificationService = Depends(get_notification_service),
) -> None:
    """Delete all of the caller's notifications."""
    await service.clear_all(profile.id)  # type: ignore[arg-type]
