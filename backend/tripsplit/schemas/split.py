"""
Pydantic schemas for expense splits.
"""
from pydantic import Field, field_serializer, model_validator
from typing import List, Optional
from decimal import Decimal
import enum
from tripsplit.schemas.base import CamelModel, FrozenCamelModel

# Tolerance used when checking that custom amounts and percentages add up.
SUM_TOLERANCE = Decimal("0.01")


class SplitType(str, enum.Enum):
    """Expense split policy."""
    EQUAL = "EQUAL"
    PERCENTAGE = "PERCENTAGE"
    CUSTOM = "CUSTOM"


class SplitResult(FrozenCamelModel):
    """One participant's share of a single expense."""
    participant_id: str
    amount: Decimal

    @field_serializer("amount")
    def serialize_amount(self, amount: Decimal) -> float:
        return float(amount)


class PercentageShare(CamelModel):
    """Percentage allocation (0-100) for one participant."""
    participant_id: str
    percentage: Decimal


class CustomShare(CamelModel):
    """Caller-supplied absolute amount for one participant."""
    participant_id: str
    amount: Decimal


class EqualSplitRequest(CamelModel):
    """Request body for an equal split."""
    amount: Decimal
    participant_ids: List[str] = []


class PercentageSplitRequest(CamelModel):
    """Request body for a percentage split."""
    amount: Decimal
    shares: List[PercentageShare] = []


class ExpenseSplitRequest(CamelModel):
    """
    Split configuration for a single expense.

    Enforces the cross-field rules the calculators do not check themselves:
    each policy needs its own participant list, custom amounts must add up
    to the expense amount and percentages must add up to 100.
    """
    amount: Decimal = Field(gt=0, decimal_places=2)
    split_type: SplitType = SplitType.EQUAL
    split_with: Optional[List[str]] = None
    custom_splits: Optional[List[CustomShare]] = None
    percentage_splits: Optional[List[PercentageShare]] = None

    @model_validator(mode="after")
    def check_split_configuration(self):
        """Validate the split data against the chosen split type."""
        if self.split_type == SplitType.EQUAL:
            if not self.split_with:
                raise ValueError("splitWith is required for EQUAL split type")

        elif self.split_type == SplitType.CUSTOM:
            if not self.custom_splits:
                raise ValueError("customSplits is required for CUSTOM split type")
            for share in self.custom_splits:
                if share.amount <= 0:
                    raise ValueError(f"Custom amount for {share.participant_id} must be positive")
            total = sum((s.amount for s in self.custom_splits), Decimal("0"))
            if abs(total - self.amount) >= SUM_TOLERANCE:
                raise ValueError("Sum of custom splits must equal total amount")

        elif self.split_type == SplitType.PERCENTAGE:
            if not self.percentage_splits:
                raise ValueError("percentageSplits is required for PERCENTAGE split type")
            for share in self.percentage_splits:
                if share.percentage <= 0 or share.percentage > 100:
                    raise ValueError(
                        f"Percentage for {share.participant_id} must be greater than 0 and at most 100"
                    )
            total = sum((s.percentage for s in self.percentage_splits), Decimal("0"))
            if abs(total - 100) >= SUM_TOLERANCE:
                raise ValueError("Sum of percentages must equal 100")

        return self
