"""
Expense split calculation routes.
"""
from fastapi import APIRouter
from typing import List
from tripsplit.schemas.split import (
    EqualSplitRequest, ExpenseSplitRequest, PercentageSplitRequest, SplitResult
)
from tripsplit.services import split_service

router = APIRouter(prefix="/splits", tags=["splits"])


@router.post("/equal", response_model=List[SplitResult])
async def calculate_equal_split(request: EqualSplitRequest):
    """Split an amount evenly; the last participant absorbs the remainder."""
    return split_service.equal_split(request.amount, request.participant_ids)


@router.post("/percentage", response_model=List[SplitResult])
async def calculate_percentage_split(request: PercentageSplitRequest):
    """Split an amount by percentage; the largest share absorbs rounding drift."""
    return split_service.percentage_split(request.amount, request.shares)


@router.post("/calculate", response_model=List[SplitResult])
async def calculate_expense_splits(request: ExpenseSplitRequest):
    """Validate an expense split configuration and compute its shares."""
    return split_service.calculate_splits(request)
