"""Trip settlement engine - who owes whom after shared expenses"""

from decimal import Decimal, localcontext
from typing import Dict, List, Sequence
from wealth_core.domain.models import Trip, TripExpense, Transfer, SettlementResult
from wealth_core.domain.exceptions import (
    InvalidInputError,
    UnknownParticipantError,
    ArithmeticDegenerateError,
)
from wealth_core.utils.money import to_decimal

# Currency rounding tolerance: balances and transfers at or below this are settled
EPSILON = Decimal("0.01")

# Significant digits for balance arithmetic; keeps the equal-split drift far below EPSILON
WORKING_PRECISION = 50


def _validate(participants: Sequence[str], expenses: Sequence[TripExpense]) -> None:
    if not participants:
        raise InvalidInputError("Trip has no participants")

    seen = set()
    for participant in participants:
        if not participant or not participant.strip():
            raise InvalidInputError("Participant name must not be blank")
        if participant in seen:
            raise InvalidInputError(f"Duplicate participant: {participant!r}")
        seen.add(participant)

    for expense in expenses:
        if to_decimal(expense.amount) <= 0:
            raise InvalidInputError(f"Expense {expense.id!r} amount must be positive")
        if expense.paid_by not in seen:
            raise UnknownParticipantError(expense.paid_by)


def compute_balances(
    participants: Sequence[str], expenses: Sequence[TripExpense]
) -> tuple[Decimal, Decimal, Dict[str, Decimal]]:
    """
    Net balance per participant under an equal split.

    Everyone starts owing per_person_share, then each payer is credited with
    what they paid. Assumes inputs are already validated.

    Returns: (total_expense, per_person_share, balances)
    """
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, WORKING_PRECISION)
        total_expense = sum((to_decimal(e.amount) for e in expenses), Decimal(0))
        per_person_share = total_expense / len(participants)

        balances: Dict[str, Decimal] = {p: -per_person_share for p in participants}
        for expense in expenses:
            balances[expense.paid_by] += to_decimal(expense.amount)

    return total_expense, per_person_share, balances


def compute_settlement(
    participants: Sequence[str],
    expenses: Sequence[TripExpense],
    epsilon: Decimal = EPSILON,
) -> SettlementResult:
    """
    Compute net balances and the transfers that settle them.

    Requirements:
    - Equal split: every participant owes total / n regardless of who paid
    - Creditors (balance > epsilon) sorted largest first, debtors
      (balance < -epsilon) most negative first
    - Greedy two-pointer match of largest creditor against largest debtor;
      transfers at or below epsilon are dropped
    - Inputs are never mutated; the sweep works on local [name, remaining] pairs

    The greedy match is deterministic but not guaranteed to produce the
    theoretical minimum number of transfers.

    Example:
        participants A, B, C; A paid 300
        share = 100 → A = +200, B = -100, C = -100
        transfers: B → A 100, C → A 100

    Raises:
        InvalidInputError: Empty/duplicate participants or non-positive amount
        UnknownParticipantError: Expense paid by someone outside the trip
        ArithmeticDegenerateError: Balances fail to sum to ~0
    """
    _validate(participants, expenses)

    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, WORKING_PRECISION)
        total_expense, per_person_share, balances = compute_balances(participants, expenses)

        # Conservation: what was paid in equals what is owed out
        drift = sum(balances.values(), Decimal(0))
        if not drift.is_finite() or abs(drift) > epsilon:
            raise ArithmeticDegenerateError(f"Balances do not net to zero (drift {drift})")

        # Stable sorts keep participant order for equal balances
        creditors = sorted(
            ([name, balance] for name, balance in balances.items() if balance > epsilon),
            key=lambda entry: entry[1],
            reverse=True,
        )
        debtors = sorted(
            ([name, balance] for name, balance in balances.items() if balance < -epsilon),
            key=lambda entry: entry[1],
        )

        transfers: List[Transfer] = []
        i = j = 0
        while i < len(creditors) and j < len(debtors):
            creditor, credit = creditors[i]
            debtor, debt = debtors[j]

            amount = min(credit, abs(debt))
            if amount > epsilon:
                transfers.append(Transfer(from_participant=debtor, to_participant=creditor, amount=amount))

            creditors[i][1] = credit - amount
            debtors[j][1] = debt + amount

            if abs(creditors[i][1]) < epsilon:
                i += 1
            if abs(debtors[j][1]) < epsilon:
                j += 1

    return SettlementResult(
        total_expense=total_expense,
        per_person_share=per_person_share,
        balances=balances,
        transfers=transfers,
    )


def settle_trip(trip: Trip, expenses: Sequence[TripExpense], epsilon: Decimal = EPSILON) -> SettlementResult:
    """Settle a stored trip; every expense must belong to it"""
    for expense in expenses:
        if expense.trip_id != trip.id:
            raise InvalidInputError(f"Expense {expense.id!r} belongs to trip {expense.trip_id!r}, not {trip.id!r}")

    return compute_settlement(trip.participants, expenses, epsilon)
