import logging
from functools import lru_cache

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from db import session_commit, session_rollback
from exceptions import AuthError, ConflictError, ServerError, ValidationError
from models.user import UserDTO, PublicUserDTO, SessionUser
from repositories.user import UserRepository
from services.session_store import SessionStore
from utils.password_hasher import hash_password, verify_password

logger = logging.getLogger(__name__)

# Same text for unknown username and wrong password
INVALID_CREDENTIALS_MESSAGE = "Invalid username or password."


@lru_cache(maxsize=1)
def _dummy_password_hash() -> str:
    # Verified against when the username is unknown so both failure
    # paths cost one PBKDF2 run
    return hash_password("dummy-password-for-timing")


class AuthService:

    @staticmethod
    async def register(username: str, email: str, password: str, session: AsyncSession) -> int:
        """
        Create an account. Does not sign the user in.

        Uniqueness is left to the database: the insert either succeeds or
        trips the unique index, with no window between check and write.

        Returns:
            New user ID

        Raises:
            ValidationError: a field is empty
            ConflictError: username or email already taken
            ServerError: any other storage failure
        """
        if not username or not email or not password:
            raise ValidationError("All fields are required.")

        user_dto = UserDTO(username=username, email=email, password_hash=hash_password(password))
        try:
            user_id = await UserRepository.create(user_dto, session)
            await session_commit(session)
        except IntegrityError as e:
            await session_rollback(session)
            logger.info("Registration rejected: username or email already exists")
            raise ConflictError(details={'store_error': str(e.orig)})
        except SQLAlchemyError as e:
            await session_rollback(session)
            logger.error(f"Registration error: {e}")
            raise ServerError("Registration failed due to a server error.", details={'store_error': str(e)})

        logger.info(f"✅ User {user_id} registered")
        return user_id

    @staticmethod
    async def login(username: str, password: str,
                    session: AsyncSession, session_store: SessionStore) -> tuple[PublicUserDTO, str]:
        """
        Check credentials and open a session.

        Returns:
            Tuple of (public user record, session token)

        Raises:
            ValidationError: username or password empty
            AuthError: unknown username or wrong password (same message)
        """
        if not username or not password:
            raise ValidationError("Username and password are required.")

        user = await UserRepository.get_by_username(username, session)
        if user is None:
            verify_password(password, _dummy_password_hash())
            raise AuthError(INVALID_CREDENTIALS_MESSAGE)
        if not verify_password(password, user.password_hash):
            raise AuthError(INVALID_CREDENTIALS_MESSAGE)

        token = await session_store.create(SessionUser(id=user.id, username=user.username))
        return PublicUserDTO(id=user.id, username=user.username, email=user.email), token

    @staticmethod
    async def logout(token: str | None, session_store: SessionStore) -> None:
        await session_store.destroy(token)

    @staticmethod
    def get_session(current_user: SessionUser | None) -> SessionUser | None:
        """Current user if signed in, otherwise None. Never raises."""
        return current_user
