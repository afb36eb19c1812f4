from sqlalchemy.ext.asyncio import AsyncSession

from db import session_flush
from models.contact_message import ContactMessage, ContactMessageDTO


class ContactMessageRepository:
    @staticmethod
    async def create(contact_message_dto: ContactMessageDTO, session: AsyncSession) -> int:
        contact_message = ContactMessage(**contact_message_dto.model_dump(exclude_none=True))
        session.add(contact_message)
        await session_flush(session)
        return contact_message.id
