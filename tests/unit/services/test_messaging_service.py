"""Unit tests for MessagingService."""

from unittest.mock import AsyncMock

import pytest

from core.exceptions import (
    MessageNotFoundError,
    NotPermittedError,
    ProfileNotFoundError,
    SelfMessageError,
)
from domain.entities.message import Message
from domain.entities.notification import NotificationTypes
from domain.entities.profile import Profile
from domain.services.messaging_service import MessagingService
from domain.services.notification_service import NotificationService
from tests.unit.conftest import FakeUnitOfWork, make_profile


@pytest.fixture
def notification_service(uow: FakeUnitOfWork) -> NotificationService:
    return NotificationService(lambda: uow)


@pytest.fixture
def service(uow: FakeUnitOfWork, notification_service: NotificationService) -> MessagingService:
    return MessagingService(lambda: uow, notification_service=notification_service)


class TestSendMessage:
    @pytest.mark.asyncio
    async def test_persists_and_notifies_receiver(
        self,
        service: MessagingService,
        uow: FakeUnitOfWork,
        client_profile: Profile,
        provider_profile: Profile,
    ):
        uow.profiles.get.return_value = provider_profile
        uow.messages.create.side_effect = lambda m: Message(
            id=11, sender_id=m.sender_id, receiver_id=m.receiver_id, content=m.content
        )
        uow.notifications.create.side_effect = lambda n: n

        result = await service.send_message(client_profile, 2, "hi")

        assert result.id == 11
        uow.notifications.create.assert_called_once()
        notification = uow.notifications.create.call_args[0][0]
        assert notification.profile_id == 2
        assert notification.type == NotificationTypes.MESSAGE
        assert notification.title == "New Message"
        assert notification.content == "clara sent you a message"
        assert notification.link == "/messages"
        assert uow.committed

    @pytest.mark.asyncio
    async def test_notification_failure_does_not_fail_send(
        self,
        service: MessagingService,
        uow: FakeUnitOfWork,
        client_profile: Profile,
        provider_profile: Profile,
    ):
        uow.profiles.get.return_value = provider_profile
        uow.messages.create.side_effect = lambda m: m
        uow.notifications.create.side_effect = RuntimeError("store down")

        result = await service.send_message(client_profile, 2, "hi")

        assert result.content == "hi"
        uow.messages.create.assert_called_once()

    @pytest.mark.asyncio
    async def test_works_without_notification_service(
        self, uow: FakeUnitOfWork, client_profile: Profile, provider_profile: Profile
    ):
        service = MessagingService(lambda: uow)
        uow.profiles.get.return_value = provider_profile
        uow.messages.create.side_effect = lambda m: m

        await service.send_message(client_profile, 2, "hi")

        uow.notifications.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_self_message_rejected(
        self, service: MessagingService, uow: FakeUnitOfWork, client_profile: Profile
    ):
        with pytest.raises(SelfMessageError) as exc_info:
            await service.send_message(client_profile, 1, "hi")

        assert exc_info.value.status_code == 400
        uow.messages.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_receiver_is_not_found(
        self, service: MessagingService, uow: FakeUnitOfWork, client_profile: Profile
    ):
        uow.profiles.get.return_value = None

        with pytest.raises(ProfileNotFoundError):
            await service.send_message(client_profile, 99, "hi")

        uow.messages.create.assert_not_called()


class TestConversations:
    @pytest.mark.asyncio
    async def test_one_entry_per_counterpart(
        self, service: MessagingService, uow: FakeUnitOfWork
    ):
        latest = [
            Message(id=9, sender_id=3, receiver_id=1, content="newest"),
            Message(id=5, sender_id=1, receiver_id=2, content="older"),
        ]
        uow.messages.list_latest_per_counterpart.return_value = latest
        uow.profiles.get_many.return_value = {2: make_profile(2, "amy"), 3: make_profile(3, "bo")}

        result = await service.list_conversations(1)

        uow.profiles.get_many.assert_called_once_with([3, 2])
        assert [c.other_profile_id for c in result] == [3, 2]
        assert result[0].other_profile.username == "bo"
        assert result[1].last_message.content == "older"

    @pytest.mark.asyncio
    async def test_missing_counterpart_profile_yields_none(
        self, service: MessagingService, uow: FakeUnitOfWork
    ):
        uow.messages.list_latest_per_counterpart.return_value = [
            Message(id=1, sender_id=1, receiver_id=4, content="hello")
        ]
        uow.profiles.get_many.return_value = {}

        result = await service.list_conversations(1)

        assert result[0].other_profile is None
        assert result[0].other_profile_id == 4


class TestDelete:
    @pytest.mark.asyncio
    async def test_receiver_can_delete(self, service: MessagingService, uow: FakeUnitOfWork):
        uow.messages.get.return_value = Message(id=4, sender_id=1, receiver_id=2, content="x")

        await service.delete_message(requester_id=2, message_id=4)

        uow.messages.delete.assert_called_once_with(4)
        assert uow.committed

    @pytest.mark.asyncio
    async def test_outsider_is_rejected(self, service: MessagingService, uow: FakeUnitOfWork):
        uow.messages.get.return_value = Message(id=4, sender_id=1, receiver_id=2, content="x")

        with pytest.raises(NotPermittedError) as exc_info:
            await service.delete_message(requester_id=3, message_id=4)

        assert exc_info.value.status_code == 401

        uow.messages.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_message_is_not_found(
        self, service: MessagingService, uow: FakeUnitOfWork
    ):
        uow.messages.get.return_value = None

        with pytest.raises(MessageNotFoundError):
            await service.delete_message(requester_id=1, message_id=4)

    @pytest.mark.asyncio
    async def test_delete_conversation_returns_count(
        self, service: MessagingService, uow: FakeUnitOfWork
    ):
        uow.messages.delete_between = AsyncMock(return_value=3)

        assert await service.delete_conversation(1, 2) == 3
        uow.messages.delete_between.assert_called_once_with(1, 2)
        assert uow.committed
