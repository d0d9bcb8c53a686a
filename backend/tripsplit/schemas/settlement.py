"""
Pydantic schemas for balances and settlements.
"""
from pydantic import Field, field_serializer, field_validator
from typing import List, Union
from decimal import Decimal
from tripsplit.core.exceptions import ValidationError
from tripsplit.core.money import format_amount, to_decimal
from tripsplit.schemas.base import CamelModel, FrozenCamelModel

BoundaryAmount = Union[Decimal, float, int, str, None]


class UserBalance(CamelModel):
    """Net position of one member on a trip (positive = is owed money)."""
    user_id: str = Field(min_length=1)
    user_name: str = ""
    balance: Decimal = Decimal("0")

    @field_validator("balance", mode="before")
    @classmethod
    def parse_balance(cls, v):
        """Parse string balances from decimal columns; null counts as zero."""
        try:
            return to_decimal(v, "balance")
        except ValidationError as e:
            raise ValueError(e.message)

    @field_validator("user_name", mode="before")
    @classmethod
    def default_user_name(cls, v):
        return "" if v is None else v


class SettlementParty(FrozenCamelModel):
    """One side of a settlement transaction."""
    user_id: str
    user_name: str


class SettlementTransaction(FrozenCamelModel):
    """Directed payment instruction: ``from_`` pays ``to`` the given amount."""
    from_: SettlementParty = Field(alias="from")
    to: SettlementParty
    amount: Decimal

    @field_serializer("amount")
    def serialize_amount(self, amount: Decimal) -> str:
        return format_amount(amount)


class SettlementSummary(FrozenCamelModel):
    """Derived totals over a list of settlement transactions."""
    total_transactions: int
    total_amount: Decimal

    @field_serializer("total_amount")
    def serialize_total_amount(self, total_amount: Decimal) -> str:
        return format_amount(total_amount)


class SettlementResult(FrozenCamelModel):
    """Settlement transactions plus their summary."""
    settlements: List[SettlementTransaction]
    summary: SettlementSummary


class SettlementRequest(CamelModel):
    """Request body for a settlement calculation."""
    balances: List[UserBalance] = []


class TripBalanceInput(CamelModel):
    """Aggregated paid/owed totals for one member, as read from the database."""
    user_id: str = Field(min_length=1)
    user_name: str = ""
    total_paid: BoundaryAmount = None
    total_owed: BoundaryAmount = None


class BalancesRequest(CamelModel):
    """Request body for turning paid/owed totals into balances."""
    members: List[TripBalanceInput] = []


class UserBalanceResponse(FrozenCamelModel):
    """Balance line with fixed two-decimal string amounts."""
    user_id: str
    user_name: str
    total_paid: Decimal
    total_owed: Decimal
    balance: Decimal

    @field_serializer("total_paid", "total_owed", "balance")
    def serialize_money(self, value: Decimal) -> str:
        return format_amount(value)
