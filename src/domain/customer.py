"""Customer Domain Entity

Master data for a customer of a company (tenant). The balance engine reads
the opening balance and credit limit; everything else is owned by master
data management.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from sqlmodel import Field, Column, Index
from sqlalchemy import CheckConstraint, Numeric, String
from src.domain.base import BaseModel, generate_uuid, utc_now


class BalanceType(str, Enum):
    """Direction of an opening balance"""
    DEBIT = "debit"      # Customer owes the business
    CREDIT = "credit"    # Business owes the customer


class CustomerStatus(str, Enum):
    """Customer lifecycle status (soft delete sets INACTIVE)"""
    ACTIVE = "active"
    INACTIVE = "inactive"


class Customer(BaseModel, table=True):
    """
    Customer - Tenant-scoped customer master record

    Domain Rules:
    - Every customer belongs to exactly one company (tenant partition)
    - opening_balance is non-negative; its sign comes from opening_balance_type
    - credit_limit is non-negative; 0 means unlimited credit
    - Customers are soft-deleted (status=inactive), never hard-deleted
      while ledger entries reference them
    """

    __tablename__ = "customers"
    __table_args__ = (
        CheckConstraint('opening_balance >= 0', name='opening_balance_non_negative'),
        CheckConstraint('credit_limit >= 0', name='credit_limit_non_negative'),
        Index('ix_customers_company_id', 'company_id'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique customer identifier (UUID)"
    )

    company_id: str = Field(
        description="Company (tenant) the customer belongs to"
    )

    name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Customer display name"
    )

    opening_balance: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False, default=0),
        description="Balance at onboarding (non-negative, precision: 18,2)"
    )

    opening_balance_type: BalanceType = Field(
        default=BalanceType.DEBIT,
        description="Whether the opening balance is owed by (debit) or to (credit) the customer"
    )

    credit_limit: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False, default=0),
        description="Credit limit (0 = unlimited)"
    )

    status: CustomerStatus = Field(
        default=CustomerStatus.ACTIVE,
        description="Lifecycle status (active, inactive)"
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        description="Customer creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=utc_now,
        description="Last update timestamp"
    )

    @property
    def signed_opening_balance(self) -> Decimal:
        """Opening balance as a signed amount (positive = customer owes us)"""
        amount = Decimal(self.opening_balance or 0)
        if self.opening_balance_type == BalanceType.CREDIT:
            return -amount
        return amount

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": "5b0d3a52-9f0e-4d55-9a55-0d5c1f4c2f11",
                "company_id": "company_abc123",
                "name": "Sharma Traders",
                "opening_balance": "200.00",
                "opening_balance_type": "debit",
                "credit_limit": "1000.00",
                "status": "active",
                "created_at": "2024-01-01T00:00:00Z",
                "updated_at": "2024-01-01T00:00:00Z"
            }
        }
