from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from db import session_execute, session_flush
from models.order import Order, OrderDTO


class OrderRepository:
    @staticmethod
    async def create(order_dto: OrderDTO, session: AsyncSession) -> int:
        order = Order(**order_dto.model_dump(exclude_none=True))
        session.add(order)
        await session_flush(session)
        return order.id

    @staticmethod
    async def get_by_id(order_id: int, session: AsyncSession) -> OrderDTO | None:
        stmt = select(Order).where(Order.id == order_id)
        order = await session_execute(stmt, session)
        order = order.scalar()
        if order is None:
            return None
        return OrderDTO.model_validate(order, from_attributes=True)

    @staticmethod
    async def get_all_count(session: AsyncSession) -> int:
        stmt = select(func.count(Order.id))
        orders_count = await session_execute(stmt, session)
        return orders_count.scalar_one()
