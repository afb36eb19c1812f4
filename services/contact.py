import logging

from email_validator import validate_email, EmailNotValidError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from db import session_commit, session_rollback
from exceptions import ServerError, ValidationError
from models.contact_message import ContactMessageDTO
from repositories.contact_message import ContactMessageRepository

logger = logging.getLogger(__name__)


class ContactService:

    @staticmethod
    async def submit_contact(name: str, email: str, number: str, message: str, session: AsyncSession) -> int:
        """
        Store a contact form message.

        All fields are trimmed and required; the email must be a
        syntactically valid address. No DNS lookup is made and private
        domains such as shop.local are accepted.

        Raises:
            ValidationError: missing field or malformed email
            ServerError: the message could not be stored
        """
        name, email, number, message = (
            (name or '').strip(), (email or '').strip(), (number or '').strip(), (message or '').strip()
        )
        if not name or not email or not number or not message:
            raise ValidationError("Name, email, number, and message are required fields.")

        try:
            validate_email(email, check_deliverability=False, globally_deliverable=False)
        except EmailNotValidError:
            raise ValidationError("Invalid email format.", field="email")

        try:
            message_id = await ContactMessageRepository.create(
                ContactMessageDTO(name=name, email=email, number=number, message=message),
                session
            )
            await session_commit(session)
        except SQLAlchemyError as e:
            await session_rollback(session)
            logger.error(f"Contact form insertion failed: {e}")
            raise ServerError("Failed to send message. Please try again later.", details={'store_error': str(e)})

        logger.info(f"Contact message {message_id} stored")
        return message_id
