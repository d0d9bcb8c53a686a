"""
Settlement calculation routes.
"""
from fastapi import APIRouter
from typing import List
from tripsplit.schemas.settlement import (
    BalancesRequest, SettlementRequest, SettlementResult, UserBalanceResponse
)
from tripsplit.services import settlement_service

router = APIRouter(prefix="/settlements", tags=["settlements"])


@router.post("/calculate", response_model=SettlementResult)
async def calculate_settlement(request: SettlementRequest):
    """Compute who pays whom to bring every balance to zero."""
    return settlement_service.settle(request.balances)


@router.post("/balances", response_model=List[UserBalanceResponse])
async def calculate_balances(request: BalancesRequest):
    """Turn aggregated paid/owed totals into net balances."""
    return settlement_service.balances_from_totals(request.members)
