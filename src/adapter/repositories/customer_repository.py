"""SQLAlchemy implementation of CustomerRepository"""

from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.errors import StoreUnavailableError
from src.domain.customer import Customer, CustomerStatus


class SqlAlchemyCustomerRepository(CustomerRepository):
    """
    SQLAlchemy implementation of CustomerRepository

    Soft-deleted (inactive) customers are treated as absent.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_active(self, customer_id: str, company_id: str) -> Optional[Customer]:
        stmt = (
            select(Customer)
            .where(Customer.id == customer_id)
            .where(Customer.company_id == company_id)
            .where(Customer.status == CustomerStatus.ACTIVE)
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise StoreUnavailableError("customer lookup", str(e)) from e
        return result.scalar_one_or_none()
