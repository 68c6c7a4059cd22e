"""Deposit accrual engine - FD/RD maturity projections and RD installment schedules"""

import decimal
from datetime import date
from decimal import Decimal, ROUND_CEILING
from typing import Iterable, List, Tuple
from wealth_core.domain.models import (
    Deposit,
    DepositProjection,
    DepositType,
    Installment,
    InstallmentStatus,
    MonthlyEvent,
)
from wealth_core.domain.exceptions import InvalidInputError, ArithmeticDegenerateError
from wealth_core.utils.date_utils import add_months, as_date, month_range, month_start, months_between
from wealth_core.utils.money import to_decimal

DAYS_PER_YEAR = Decimal(365)
MONTHS_PER_QUARTER = 3
ONE = Decimal(1)
HUNDRED = Decimal(100)


def _validate(deposit: Deposit) -> None:
    if to_decimal(deposit.amount) <= 0:
        raise InvalidInputError(f"Deposit {deposit.id!r} amount must be positive")
    if to_decimal(deposit.interest_rate) < 0:
        raise InvalidInputError(f"Deposit {deposit.id!r} interest rate must not be negative")
    if not isinstance(deposit.maturity_date, date) or not isinstance(deposit.opened_on, date):
        raise InvalidInputError(f"Deposit {deposit.id!r} has malformed dates")
    try:
        DepositType(deposit.deposit_type)
    except ValueError as e:
        raise InvalidInputError(f"Unknown deposit type: {deposit.deposit_type!r}") from e


def _term_bounds(deposit: Deposit) -> Tuple[date, date]:
    return as_date(deposit.opened_on), as_date(deposit.maturity_date)


def _finite(value: Decimal, what: str) -> Decimal:
    if not value.is_finite():
        raise ArithmeticDegenerateError(f"{what} is not finite: {value}")
    return value


def term_years(deposit: Deposit) -> Decimal:
    """Term in 365-day years from opening to maturity (negative if maturity precedes opening)"""
    opened, maturity = _term_bounds(deposit)
    days = (maturity - opened).days
    return Decimal(days) / DAYS_PER_YEAR


def total_months(deposit: Deposit) -> int:
    """RD tenure in calendar months, at least 1"""
    return max(1, months_between(deposit.opened_on, deposit.maturity_date))


def months_elapsed(deposit: Deposit, now: date) -> int:
    """Calendar months since opening, counting the opening month, at least 1"""
    return max(1, months_between(deposit.opened_on, now) + 1)


def project_maturity(deposit: Deposit) -> Decimal:
    """
    Projected value at maturity.

    FD: annual compounding with a fractional-year exponent
        amount * (1 + rate/100) ** years

    RD: standard bank recurring-deposit formula, compounded quarterly
        quarters = ceil(years * 4), q = rate / 400
        amount * ((1 + q) ** quarters - 1) / (1 - (1 + q) ** (-1/3))
        With a zero rate this degenerates to amount * quarters * 3.

    Example:
        FD 100000 at 8% for 365 days → 108000
        RD 5000/month at 0% for 4 quarters → 60000
    """
    _validate(deposit)
    amount = to_decimal(deposit.amount)
    rate = to_decimal(deposit.interest_rate)
    years = term_years(deposit)

    try:
        if DepositType(deposit.deposit_type) == DepositType.FD:
            maturity = amount * (ONE + rate / HUNDRED) ** years
            return _finite(maturity, "FD maturity amount")

        years = max(years, Decimal(0))
        quarters = int((years * 4).to_integral_value(rounding=ROUND_CEILING))
        quarterly_rate = rate / Decimal(400)

        if quarterly_rate == 0:
            return amount * quarters * MONTHS_PER_QUARTER

        growth = ONE + quarterly_rate
        compound_factor = growth**quarters
        # Monthly installments inside a quarter: cube-root discount term
        denominator = ONE - growth ** (Decimal(-1) / Decimal(3))
        if denominator == 0:
            raise ArithmeticDegenerateError("RD denominator collapsed to zero")

        maturity = amount * (compound_factor - ONE) / denominator
        return _finite(maturity, "RD maturity amount")

    except (decimal.Overflow, decimal.InvalidOperation, decimal.DivisionByZero) as e:
        raise ArithmeticDegenerateError(f"Maturity projection failed for deposit {deposit.id!r}: {e!r}") from e


def current_accrued(deposit: Deposit, now: date) -> Decimal:
    """
    Amount deposited so far.

    FD principal stays unchanged until maturity. RD counts whole calendar
    months since opening (inclusive), capped at the tenure so a matured RD
    never over-reports.
    """
    _validate(deposit)
    amount = to_decimal(deposit.amount)

    if DepositType(deposit.deposit_type) == DepositType.FD:
        return amount

    return amount * min(months_elapsed(deposit, now), total_months(deposit))


def installment_schedule(deposit: Deposit, now: date) -> List[Installment]:
    """
    Monthly RD installments from the opening month up to (not including) maturity.

    An installment is paid once the first day of its month is on or before now.
    """
    _validate(deposit)
    if DepositType(deposit.deposit_type) != DepositType.RD:
        raise InvalidInputError(f"Deposit {deposit.id!r} is not a recurring deposit")

    amount = to_decimal(deposit.amount)
    opened, maturity = _term_bounds(deposit)
    now = as_date(now)
    first_month = month_start(opened)

    installments = []
    current = first_month
    while current < maturity:
        status = InstallmentStatus.PAID if current <= now else InstallmentStatus.PENDING
        installments.append(
            Installment(
                sequence_number=len(installments) + 1,
                month=current,
                amount=amount,
                status=status,
            )
        )
        current = add_months(current, 1)

    return installments


def total_principal(deposit: Deposit) -> Decimal:
    """Money put in over the full term"""
    _validate(deposit)
    amount = to_decimal(deposit.amount)
    if DepositType(deposit.deposit_type) == DepositType.RD:
        return amount * total_months(deposit)
    return amount


def progress_percent(deposit: Deposit, now: date) -> Decimal:
    """Share of the term already elapsed, 0-100"""
    _validate(deposit)
    opened, maturity = _term_bounds(deposit)
    total_days = max(1, (maturity - opened).days)
    elapsed_days = max(0, (as_date(now) - opened).days)
    return min(HUNDRED, Decimal(elapsed_days) / Decimal(total_days) * HUNDRED)


def project_deposit(deposit: Deposit, now: date) -> DepositProjection:
    """Full dashboard view of one deposit"""
    maturity = project_maturity(deposit)
    principal = total_principal(deposit)
    is_recurring = DepositType(deposit.deposit_type) == DepositType.RD

    return DepositProjection(
        deposit_id=deposit.id,
        deposit_type=DepositType(deposit.deposit_type),
        maturity_amount=maturity,
        current_accrued=current_accrued(deposit, now),
        total_principal=principal,
        interest_earned=maturity - principal,
        progress_percent=progress_percent(deposit, now),
        installments=installment_schedule(deposit, now) if is_recurring else [],
    )


def total_deposit_value(deposits: Iterable[Deposit], now: date) -> Decimal:
    """Deposits asset total: FD principal plus RD installments paid in so far"""
    return sum((current_accrued(d, now) for d in deposits), Decimal(0))


def deposit_contribution_events(deposit: Deposit, now: date) -> List[MonthlyEvent]:
    """
    Money-in events for trend charts.

    RD: one installment per month from the opening month through
    min(maturity, now). FD: the principal once, on the creation date.
    """
    _validate(deposit)
    amount = to_decimal(deposit.amount)

    if DepositType(deposit.deposit_type) == DepositType.FD:
        return [MonthlyEvent(date=deposit.created_at, amount=amount)]

    opened, maturity = _term_bounds(deposit)
    end = min(maturity, as_date(now))
    return [MonthlyEvent(date=month, amount=amount) for month in month_range(opened, end)]
