"""
Settlement service for turning net balances into payment instructions.
"""
from typing import Iterable, List, Mapping, Optional, Tuple, Union
from decimal import Decimal
import logging
from tripsplit.core.config import settings
from tripsplit.core.exceptions import InvariantViolation, ValidationError
from tripsplit.core.money import ZERO, Numeric, is_settled, quantize, to_decimal
from tripsplit.schemas.settlement import (
    SettlementParty, SettlementResult, SettlementSummary, SettlementTransaction,
    TripBalanceInput, UserBalance, UserBalanceResponse
)

logger = logging.getLogger(__name__)

BalanceInput = Union[UserBalance, Mapping]


class _Position:
    """Working copy of one creditor's or debtor's outstanding magnitude."""
    def __init__(self, party: SettlementParty, amount: Decimal):
        self.party = party
        self.amount = amount


def _check_tolerance(tolerance: Optional[Numeric]) -> Decimal:
    if tolerance is None:
        tolerance = settings.SETTLEMENT_TOLERANCE
    try:
        value = to_decimal(tolerance, "tolerance")
    except ValidationError as e:
        raise InvariantViolation(f"Invalid settlement tolerance: {e.message}")
    if value < 0:
        raise InvariantViolation(f"Settlement tolerance must not be negative, got {value}")
    return value


def _coerce_balance(entry: BalanceInput) -> Tuple[SettlementParty, Decimal]:
    """Normalize a UserBalance or a plain mapping into (party, balance)."""
    if isinstance(entry, UserBalance):
        return SettlementParty(user_id=entry.user_id, user_name=entry.user_name), entry.balance

    if not isinstance(entry, Mapping):
        raise ValidationError(f"Malformed balance entry: {entry!r}")

    user_id = entry.get("user_id", entry.get("userId"))
    if user_id is None or str(user_id) == "":
        raise ValidationError(f"Balance entry is missing userId: {entry!r}")
    user_name = entry.get("user_name", entry.get("userName")) or ""
    balance = to_decimal(entry.get("balance"), "balance")
    return SettlementParty(user_id=str(user_id), user_name=str(user_name)), balance


def minimize_transfers(
    balances: Iterable[BalanceInput],
    tolerance: Optional[Numeric] = None
) -> List[SettlementTransaction]:
    """
    Reduce net balances to a short list of payments using a greedy algorithm.

    The largest remaining debtor pays the largest remaining creditor the
    smaller of the two outstanding amounts; whoever is drained drops out and
    the other side is matched against the next party. Ties in magnitude keep
    the input order. This is a deterministic heuristic, not a guarantee of
    the minimum number of transfers.

    Balances within ``tolerance`` of zero are treated as settled and never
    appear in the output.

    Raises:
        InvariantViolation: if ``tolerance`` is negative
        ValidationError: if a balance entry is malformed
    """
    tolerance = _check_tolerance(tolerance)
    parsed = [_coerce_balance(entry) for entry in balances]

    # Separate creditors (positive balance) and debtors (negative balance),
    # working in whole cents so every match drains at least one side
    creditors = [_Position(party, quantize(bal)) for party, bal in parsed if bal > tolerance]
    debtors = [_Position(party, quantize(-bal)) for party, bal in parsed if bal < -tolerance]

    # Sort in descending order; sort is stable so equal amounts keep input order
    creditors.sort(key=lambda p: p.amount, reverse=True)
    debtors.sort(key=lambda p: p.amount, reverse=True)

    transfers = []
    cred_idx = 0
    debt_idx = 0

    while cred_idx < len(creditors) and debt_idx < len(debtors):
        creditor = creditors[cred_idx]
        debtor = debtors[debt_idx]

        # Transfer the minimum of what's owed and what's needed
        transfer_amount = quantize(min(creditor.amount, debtor.amount))
        if transfer_amount > tolerance:
            transfers.append(SettlementTransaction(
                from_=debtor.party,
                to=creditor.party,
                amount=transfer_amount
            ))

        creditor.amount -= transfer_amount
        debtor.amount -= transfer_amount

        if is_settled(creditor.amount, tolerance):
            cred_idx += 1
        if is_settled(debtor.amount, tolerance):
            debt_idx += 1

    unmatched = creditors[cred_idx:] + debtors[debt_idx:]
    if unmatched:
        leftover = ", ".join(f"{p.party.user_id}={p.amount}" for p in unmatched)
        logger.warning(f"Balances do not net to zero; dropping unmatched remainder: {leftover}")

    return transfers


def build_summary(transactions: List[SettlementTransaction]) -> SettlementSummary:
    """Derive the transaction count and total amount from a settlement list."""
    total = sum((t.amount for t in transactions), ZERO)
    return SettlementSummary(
        total_transactions=len(transactions),
        total_amount=quantize(total)
    )


def settle(
    balances: Iterable[BalanceInput],
    tolerance: Optional[Numeric] = None
) -> SettlementResult:
    """
    Calculate the settlement for a set of member balances.

    Returns the payment list together with its summary. Empty input, or
    input where every balance is within tolerance, yields no settlements and
    a ``0`` / ``"0.00"`` summary.
    """
    balances = list(balances)
    check_conservation(balances, tolerance)
    transfers = minimize_transfers(balances, tolerance)
    summary = build_summary(transfers)
    logger.info(
        f"Settled {len(balances)} balances with {summary.total_transactions} "
        f"transfers totalling {summary.total_amount}"
    )
    return SettlementResult(settlements=transfers, summary=summary)


def check_conservation(
    balances: Iterable[BalanceInput],
    tolerance: Optional[Numeric] = None
) -> Decimal:
    """
    Return the signed sum of all balances.

    Money is conserved across a trip, so the sum should be within tolerance
    of zero. A larger drift is logged but not raised; settle() still runs
    and drops whatever cannot be matched.
    """
    tolerance = _check_tolerance(tolerance)
    total = sum((bal for _, bal in map(_coerce_balance, balances)), ZERO)
    if not is_settled(total, tolerance):
        logger.warning(f"Balances sum to {total}, expected zero within {tolerance}")
    return total


def compute_balance(total_paid: Numeric, total_owed: Numeric) -> Decimal:
    """
    Net balance from aggregated totals: ``total_paid - total_owed``.

    Either side may be a decimal string as returned by a SUM() over a
    decimal column; null or blank counts as zero.
    """
    paid = to_decimal(total_paid, "total_paid")
    owed = to_decimal(total_owed, "total_owed")
    return quantize(paid - owed)


def balances_from_totals(rows: Iterable[TripBalanceInput]) -> List[UserBalanceResponse]:
    """Build per-member balance lines from paid/owed totals."""
    result = []
    for row in rows:
        result.append(UserBalanceResponse(
            user_id=row.user_id,
            user_name=row.user_name,
            total_paid=quantize(to_decimal(row.total_paid, "total_paid")),
            total_owed=quantize(to_decimal(row.total_owed, "total_owed")),
            balance=compute_balance(row.total_paid, row.total_owed)
        ))
    return result
