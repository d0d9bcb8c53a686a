"""
Split service for dividing an expense among participants.

Every policy guarantees that the returned shares add up exactly to the
expense total rounded to the cent; any rounding leftover is absorbed by a
single participant.
"""
from typing import Iterable, List, Mapping, Sequence, Union
from decimal import Decimal
import logging
from tripsplit.core.exceptions import ValidationError
from tripsplit.core.money import (
    Numeric, ZERO, floor_to_cent, quantize, require_non_negative, to_decimal
)
from tripsplit.schemas.split import (
    CustomShare, ExpenseSplitRequest, PercentageShare, SplitResult, SplitType
)

logger = logging.getLogger(__name__)

ShareInput = Union[PercentageShare, CustomShare, Mapping]


def _parse_total(total: Numeric) -> Decimal:
    return require_non_negative(quantize(to_decimal(total, "total")), "total")


def _participant_id(entry: ShareInput) -> str:
    if isinstance(entry, Mapping):
        participant_id = entry.get("participant_id", entry.get("participantId"))
    else:
        participant_id = entry.participant_id
    if participant_id is None or participant_id == "":
        raise ValidationError("participant_id is required for every split entry")
    return str(participant_id)


def _entry_value(entry: ShareInput, field: str) -> Decimal:
    value = entry.get(field) if isinstance(entry, Mapping) else getattr(entry, field)
    return to_decimal(value, field)


def equal_split(total: Numeric, participant_ids: Sequence[str]) -> List[SplitResult]:
    """
    Split ``total`` evenly among ``participant_ids``.

    Everyone but the last participant receives the per-head amount truncated
    to the cent; the last participant receives whatever is left, so
    $100 over three people becomes 33.33, 33.33, 33.34. Output order follows
    input order.

    Raises:
        ValidationError: if ``total`` is negative or not a number
    """
    amount = _parse_total(total)
    if not participant_ids:
        return []

    count = len(participant_ids)
    base = floor_to_cent(amount / count)
    remainder = amount - base * (count - 1)

    results = [
        SplitResult(participant_id=str(pid), amount=base)
        for pid in participant_ids[:-1]
    ]
    results.append(SplitResult(participant_id=str(participant_ids[-1]), amount=remainder))
    return results


def percentage_split(total: Numeric, shares: Iterable[ShareInput]) -> List[SplitResult]:
    """
    Split ``total`` by percentage (0-100 per entry).

    Each share is rounded half-up to the cent. The difference between the
    total and the sum of rounded shares goes to the entry with the largest
    percentage (first one wins a tie). Percentages are not required to sum
    to 100 here; that check belongs to ExpenseSplitRequest.

    Raises:
        ValidationError: on a negative total or a negative percentage
    """
    amount = _parse_total(total)
    entries = list(shares)
    if not entries:
        return []

    ids = []
    percentages = []
    for entry in entries:
        ids.append(_participant_id(entry))
        percentages.append(
            require_non_negative(_entry_value(entry, "percentage"), "percentage")
        )

    amounts = [quantize(amount * pct / 100) for pct in percentages]
    drift = amount - sum(amounts, ZERO)

    if drift != 0:
        # max() returns the first maximal element, so ties go to input order
        largest = max(range(len(percentages)), key=lambda i: percentages[i])
        amounts[largest] += drift
        if amounts[largest] < 0:
            raise ValidationError(
                f"Percentages leave a negative share for {ids[largest]}; they must not exceed 100 in total"
            )
        logger.debug(f"Assigned rounding drift {drift} to participant {ids[largest]}")

    return [
        SplitResult(participant_id=pid, amount=share)
        for pid, share in zip(ids, amounts)
    ]


def custom_split(shares: Iterable[ShareInput]) -> List[SplitResult]:
    """
    Return caller-supplied amounts unchanged apart from cent quantization.

    Whether the amounts add up to the expense total is checked by
    ExpenseSplitRequest, not here.
    """
    results = []
    for entry in shares:
        share = require_non_negative(quantize(_entry_value(entry, "amount")), "amount")
        results.append(SplitResult(participant_id=_participant_id(entry), amount=share))
    return results


def calculate_splits(request: ExpenseSplitRequest) -> List[SplitResult]:
    """Compute the splits for an expense according to its split type."""
    if request.split_type == SplitType.EQUAL:
        return equal_split(request.amount, request.split_with or [])
    if request.split_type == SplitType.PERCENTAGE:
        return percentage_split(request.amount, request.percentage_splits or [])
    if request.split_type == SplitType.CUSTOM:
        return custom_split(request.custom_splits or [])
    raise ValidationError(f"Unsupported split type: {request.split_type}")
