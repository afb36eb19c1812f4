"""
Unit tests for ContactService.submit_contact().
"""

import pytest
from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError

from exceptions import ServerError, ValidationError
from models.contact_message import ContactMessage
from repositories.contact_message import ContactMessageRepository
from services.contact import ContactService


async def count_messages(session) -> int:
    result = await session.execute(select(func.count(ContactMessage.id)))
    return result.scalar_one()


class TestSubmitContact:

    @pytest.mark.asyncio
    async def test_message_stored_trimmed(self, test_session_maker):
        async with test_session_maker() as session:
            message_id = await ContactService.submit_contact(
                " Alice ", "alice@mailbox.org ", " 555-0100", " Where is my parcel? ", session
            )

        async with test_session_maker() as session:
            stored = await session.get(ContactMessage, message_id)
            assert (stored.name, stored.email, stored.number, stored.message) == (
                "Alice", "alice@mailbox.org", "555-0100", "Where is my parcel?"
            )
            assert stored.created_at is not None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name, email, number, message", [
        ("", "alice@mailbox.org", "555-0100", "Hello"),
        ("Alice", "", "555-0100", "Hello"),
        ("Alice", "alice@mailbox.org", "   ", "Hello"),
        ("Alice", "alice@mailbox.org", "555-0100", ""),
    ])
    async def test_missing_field(self, test_session_maker, name, email, number, message):
        async with test_session_maker() as session:
            with pytest.raises(ValidationError) as exc_info:
                await ContactService.submit_contact(name, email, number, message, session)
            assert exc_info.value.message == "Name, email, number, and message are required fields."
            assert await count_messages(session) == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("email", ["not-an-email", "alice@", "@mailbox.org", "alice example@test.com"])
    async def test_invalid_email(self, test_session_maker, email):
        async with test_session_maker() as session:
            with pytest.raises(ValidationError) as exc_info:
                await ContactService.submit_contact("Alice", email, "555-0100", "Hello", session)
            assert exc_info.value.message == "Invalid email format."
            assert await count_messages(session) == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("email", ["bob@shop.local", "ops@intranet.lan", "qa@staging.test"])
    async def test_private_domain_accepted(self, test_session_maker, email):
        async with test_session_maker() as session:
            message_id = await ContactService.submit_contact("Bob", email, "555-0100", "Hello", session)

        async with test_session_maker() as session:
            assert (await session.get(ContactMessage, message_id)).email == email

    @pytest.mark.asyncio
    async def test_store_failure_returns_generic_message(self, test_session_maker, monkeypatch):
        async def failing_create(contact_message_dto, session):
            raise SQLAlchemyError("disk I/O error at /var/lib/shop.db")

        monkeypatch.setattr(ContactMessageRepository, "create", staticmethod(failing_create))

        async with test_session_maker() as session:
            with pytest.raises(ServerError) as exc_info:
                await ContactService.submit_contact("Alice", "alice@mailbox.org", "555-0100", "Hello", session)
            assert exc_info.value.message == "Failed to send message. Please try again later."
            assert "disk I/O error" in exc_info.value.details["store_error"]
            assert await count_messages(session) == 0
