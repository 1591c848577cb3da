"""Customer Repository Interface

Defines the read contract the balance engine needs from customer master data.
"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.customer import Customer


class CustomerRepository(ABC):
    """
    Repository interface for Customer reads

    All lookups are scoped to a company; a customer id from another
    company must never resolve.
    """

    @abstractmethod
    async def get_active(self, customer_id: str, company_id: str) -> Optional[Customer]:
        """
        Retrieve an active customer within a company

        Args:
            customer_id: Customer identifier
            company_id: Company (tenant) identifier

        Returns:
            Customer if found and active, None otherwise

        Raises:
            StoreUnavailableError: If the backing store cannot be queried
        """
        pass
