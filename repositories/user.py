from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from db import session_execute, session_flush
from models.user import UserDTO, User


class UserRepository:
    @staticmethod
    async def get_by_username(username: str, session: AsyncSession) -> UserDTO | None:
        stmt = select(User).where(User.username == username)
        user = await session_execute(stmt, session)
        user = user.scalar()
        if user is not None:
            return UserDTO.model_validate(user, from_attributes=True)
        else:
            return user

    @staticmethod
    async def create(user_dto: UserDTO, session: AsyncSession) -> int:
        """
        Insert a user and flush so uniqueness is checked immediately.

        Raises:
            sqlalchemy.exc.IntegrityError: username or email already taken
        """
        user = User(**user_dto.model_dump(exclude_none=True))
        session.add(user)
        await session_flush(session)
        return user.id

    @staticmethod
    async def get_all_count(session: AsyncSession) -> int:
        stmt = select(func.count(User.id))
        users_count = await session_execute(stmt, session)
        return users_count.scalar_one()
