"""
grants/services/repayment_schedule.py

Build, edit, persist and read back the installment plan of a grant.

Plans are edited in memory as lists of Installment values and
only touch the database through save_repayment_schedule().
"""

import calendar
import logging
import uuid
from dataclasses import dataclass, replace
from datetime import date
from decimal import ROUND_FLOOR, Decimal, InvalidOperation

from django.db import DatabaseError, transaction
from django.utils import timezone

from grants.models import RepaymentInstallment
from notifications.exceptions import InvalidArgument, StorageError

logger = logging.getLogger(__name__)


PENDING = RepaymentInstallment.Status.PENDING
OVERDUE = RepaymentInstallment.Status.OVERDUE

EDITABLE_FIELDS = ("due_date", "amount", "status", "paid_amount", "paid_date")


@dataclass(frozen=True)
class Installment:
    id: str
    due_date: date | None
    amount: Decimal
    status: str = PENDING
    paid_amount: Decimal | None = None
    paid_date: date | None = None


@dataclass(frozen=True)
class ScheduleBalance:
    total: Decimal
    scheduled: Decimal
    difference: Decimal

    @property
    def state(self):
        if self.difference == 0:
            return "balanced"
        if self.difference > 0:
            return "unscheduled"
        return "overscheduled"


# ============================================================
# HELPERS
# ============================================================

def _to_decimal(value, field):
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise InvalidArgument(f"{field} must be a number, got {value!r}")


def add_months(start, months):
    """
    Shift a date by whole months, clamping the day to the
    last day of the target month (31 Jan + 1 month -> 28/29 Feb).
    """
    index = start.month - 1 + months
    year = start.year + index // 12
    month = index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


# ============================================================
# EQUAL MODE
# ============================================================

def generate_equal_installments(
    total_amount,
    number_of_installments,
    start_date,
    interval_months=3,
):
    """
    Split total_amount into equal whole-unit installments.

    Every installment but the last gets floor(total / n); the last
    absorbs the remainder so the plan always sums to the total.
    Due dates are start_date + k * interval_months (k = 0..n-1),
    each computed from start_date so clamped days do not drift.

    Always returns a new list: regenerating replaces a plan.
    """

    total = _to_decimal(total_amount, "total_amount")

    if total < 0:
        raise InvalidArgument("total_amount cannot be negative")

    if start_date is None:
        raise InvalidArgument("start_date is required")

    if not isinstance(number_of_installments, int) or number_of_installments < 1:
        raise InvalidArgument("number_of_installments must be at least 1")

    if not isinstance(interval_months, int) or interval_months < 1:
        raise InvalidArgument("interval_months must be at least 1")

    n = number_of_installments
    per_installment = (total / n).to_integral_value(rounding=ROUND_FLOOR)
    last_amount = total - per_installment * (n - 1)

    return [
        Installment(
            id=f"auto-{k + 1}",
            due_date=add_months(start_date, k * interval_months),
            amount=last_amount if k == n - 1 else per_installment,
        )
        for k in range(n)
    ]


# ============================================================
# MANUAL MODE
# ============================================================

def add_installment(installments, *, due_date=None, amount=0):
    """Append a blank installment; nothing is recalculated."""
    installment = Installment(
        id=f"manual-{uuid.uuid4().hex[:12]}",
        due_date=due_date,
        amount=_to_decimal(amount, "amount"),
    )
    return [*installments, installment]


def update_installment(installments, installment_id, **changes):
    unknown = set(changes) - set(EDITABLE_FIELDS)
    if unknown:
        raise InvalidArgument(
            f"Cannot update installment field(s): {', '.join(sorted(unknown))}"
        )

    if "amount" in changes:
        changes["amount"] = _to_decimal(changes["amount"], "amount")

    return [
        replace(item, **changes) if item.id == installment_id else item
        for item in installments
    ]


def remove_installment(installments, installment_id):
    return [item for item in installments if item.id != installment_id]


def schedule_balance(total_amount, installments):
    """
    Compare a plan against the grant total. Advisory only:
    an unbalanced plan can still be saved.
    """
    total = _to_decimal(total_amount, "total_amount")
    scheduled = sum((item.amount for item in installments), Decimal("0"))

    return ScheduleBalance(
        total=total,
        scheduled=scheduled,
        difference=total - scheduled,
    )


# ============================================================
# PERSISTENCE
# ============================================================

def save_repayment_schedule(grant, installments):
    """
    Replace every stored installment of a grant with the given plan.
    Returns the number of rows written.
    """

    missing = [item.id for item in installments if item.due_date is None]
    if missing:
        raise InvalidArgument(
            f"Installments without a due date: {', '.join(missing)}"
        )

    rows = [
        RepaymentInstallment(
            grant=grant,
            due_date=item.due_date,
            expected_amount=item.amount,
            status=item.status,
            paid_amount=item.paid_amount,
            paid_date=item.paid_date,
        )
        for item in installments
    ]

    try:
        with transaction.atomic():
            deleted, _ = RepaymentInstallment.objects.filter(grant=grant).delete()
            RepaymentInstallment.objects.bulk_create(rows)
    except DatabaseError as exc:
        logger.error("Failed to save repayment schedule for grant %s: %s", grant.pk, exc)
        raise StorageError(f"Could not save repayment schedule: {exc}") from exc

    logger.info(
        "Repayment schedule for grant %s replaced (%s removed, %s created)",
        grant.pk, deleted, len(rows),
    )
    return len(rows)


def load_repayment_schedule(grant, today=None):
    """
    Stored installments ordered by due date. Pending rows whose due
    date has passed are reported as overdue; the rows are not updated.
    """

    today = today or timezone.localdate()

    try:
        rows = list(
            RepaymentInstallment.objects
            .filter(grant=grant)
            .order_by("due_date", "id")
        )
    except DatabaseError as exc:
        logger.error("Failed to load repayment schedule for grant %s: %s", grant.pk, exc)
        raise StorageError(f"Could not load repayment schedule: {exc}") from exc

    return [
        Installment(
            id=str(row.pk),
            due_date=row.due_date,
            amount=row.expected_amount,
            status=(
                OVERDUE
                if row.status == PENDING and row.due_date < today
                else row.status
            ),
            paid_amount=row.paid_amount,
            paid_date=row.paid_date,
        )
        for row in rows
    ]
