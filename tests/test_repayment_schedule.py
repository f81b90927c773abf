from datetime import date
from decimal import Decimal

import pytest

from grants.models import Grant, RepaymentInstallment
from grants.services import (
    Installment,
    add_installment,
    generate_equal_installments,
    load_repayment_schedule,
    remove_installment,
    save_repayment_schedule,
    schedule_balance,
    update_installment,
)
from grants.services.repayment_schedule import add_months
from notifications.exceptions import InvalidArgument


# ============================================================
# Equal mode
# ============================================================

def test_equal_split_puts_remainder_on_last_installment():
    plan = generate_equal_installments(100000, 3, date(2026, 1, 15))

    assert [item.amount for item in plan] == [
        Decimal("33333"),
        Decimal("33333"),
        Decimal("33334"),
    ]
    assert sum(item.amount for item in plan) == Decimal("100000")


def test_equal_split_dates_step_by_interval():
    plan = generate_equal_installments(90000, 3, date(2026, 1, 15))

    assert [item.due_date for item in plan] == [
        date(2026, 1, 15),
        date(2026, 4, 15),
        date(2026, 7, 15),
    ]


def test_equal_split_clamps_to_month_end():
    plan = generate_equal_installments(
        3000, 4, date(2026, 1, 31), interval_months=1
    )

    assert [item.due_date for item in plan] == [
        date(2026, 1, 31),
        date(2026, 2, 28),
        date(2026, 3, 31),
        date(2026, 4, 30),
    ]


def test_add_months_handles_leap_years_and_year_rollover():
    assert add_months(date(2028, 1, 31), 1) == date(2028, 2, 29)
    assert add_months(date(2026, 11, 30), 3) == date(2027, 2, 28)
    assert add_months(date(2026, 5, 10), 0) == date(2026, 5, 10)


def test_equal_split_ids_and_status():
    plan = generate_equal_installments(1000, 2, date(2026, 1, 1))

    assert [item.id for item in plan] == ["auto-1", "auto-2"]
    assert all(item.status == "pending" for item in plan)


def test_equal_split_with_cents():
    plan = generate_equal_installments("1000.50", 2, date(2026, 1, 1))

    assert [item.amount for item in plan] == [Decimal("500"), Decimal("500.50")]


def test_single_installment_carries_the_total():
    plan = generate_equal_installments(2500, 1, date(2026, 6, 1))

    assert len(plan) == 1
    assert plan[0].amount == Decimal("2500")


def test_regenerating_replaces_the_plan():
    first = generate_equal_installments(100000, 6, date(2026, 1, 1))
    second = generate_equal_installments(100000, 4, date(2026, 1, 1))

    assert len(first) == 6
    assert len(second) == 4
    assert sum(item.amount for item in second) == Decimal("100000")


@pytest.mark.parametrize(
    "kwargs",
    [
        {"number_of_installments": 0},
        {"number_of_installments": -2},
        {"interval_months": 0},
        {"start_date": None},
        {"total_amount": "abc"},
        {"total_amount": -1},
    ],
)
def test_equal_split_rejects_bad_input(kwargs):
    params = {
        "total_amount": 1000,
        "number_of_installments": 2,
        "start_date": date(2026, 1, 1),
    }
    params.update(kwargs)

    with pytest.raises(InvalidArgument):
        generate_equal_installments(**params)


# ============================================================
# Manual mode
# ============================================================

def test_manual_edits_return_new_lists():
    plan = generate_equal_installments(1000, 2, date(2026, 1, 1))

    added = add_installment(plan)
    assert len(plan) == 2
    assert len(added) == 3

    blank = added[-1]
    assert blank.due_date is None
    assert blank.amount == Decimal("0")
    assert blank.status == "pending"

    updated = update_installment(
        added, blank.id, amount="250", due_date=date(2026, 9, 1)
    )
    assert updated[-1].amount == Decimal("250")
    assert updated[-1].due_date == date(2026, 9, 1)
    assert added[-1].amount == Decimal("0")

    # Amounts of the other installments are untouched.
    assert [item.amount for item in updated[:2]] == [Decimal("500"), Decimal("500")]

    removed = remove_installment(updated, "auto-1")
    assert [item.id for item in removed] == ["auto-2", blank.id]


def test_added_installments_get_distinct_ids():
    plan = add_installment(add_installment([]))

    assert plan[0].id != plan[1].id


def test_update_rejects_unknown_fields():
    plan = generate_equal_installments(1000, 2, date(2026, 1, 1))

    with pytest.raises(InvalidArgument):
        update_installment(plan, "auto-1", id="other")


def test_schedule_balance_states():
    plan = generate_equal_installments(1000, 2, date(2026, 1, 1))

    balanced = schedule_balance(1000, plan)
    assert balanced.state == "balanced"
    assert balanced.difference == Decimal("0")

    short = schedule_balance(1000, remove_installment(plan, "auto-2"))
    assert short.state == "unscheduled"
    assert short.difference == Decimal("500")

    over = schedule_balance(1000, add_installment(plan, amount=10))
    assert over.state == "overscheduled"
    assert over.difference == Decimal("-10")


def test_schedule_balance_of_empty_plan():
    balance = schedule_balance(750, [])

    assert balance.scheduled == Decimal("0")
    assert balance.state == "unscheduled"


# ============================================================
# Persistence
# ============================================================

@pytest.fixture
def grant(db, user):
    return Grant.objects.create(
        title="Seed Fund",
        total_amount=Decimal("100000.00"),
        status=Grant.Status.ACTIVE,
        managed_by=user,
    )


def test_save_replaces_existing_schedule(grant):
    first = generate_equal_installments(grant.total_amount, 4, date(2026, 1, 1))
    assert save_repayment_schedule(grant, first) == 4

    second = generate_equal_installments(grant.total_amount, 2, date(2026, 1, 1))
    assert save_repayment_schedule(grant, second) == 2

    rows = list(grant.installments.order_by("due_date"))
    assert len(rows) == 2
    assert [row.expected_amount for row in rows] == [
        Decimal("50000.00"),
        Decimal("50000.00"),
    ]


def test_save_empty_schedule_clears_rows(grant):
    save_repayment_schedule(
        grant, generate_equal_installments(1000, 2, date(2026, 1, 1))
    )

    assert save_repayment_schedule(grant, []) == 0
    assert not grant.installments.exists()


def test_save_rejects_installments_without_due_date(grant):
    plan = add_installment([], amount=100)

    with pytest.raises(InvalidArgument):
        save_repayment_schedule(grant, plan)

    assert not grant.installments.exists()


def test_load_reports_past_due_pending_as_overdue(grant):
    save_repayment_schedule(
        grant,
        [
            Installment(id="a", due_date=date(2026, 3, 1), amount=Decimal("100")),
            Installment(
                id="b",
                due_date=date(2026, 1, 1),
                amount=Decimal("100"),
                status=RepaymentInstallment.Status.PAID,
                paid_amount=Decimal("100"),
                paid_date=date(2026, 1, 1),
            ),
            Installment(id="c", due_date=date(2026, 6, 1), amount=Decimal("100")),
        ],
    )

    plan = load_repayment_schedule(grant, today=date(2026, 4, 1))

    assert [item.due_date for item in plan] == [
        date(2026, 1, 1),
        date(2026, 3, 1),
        date(2026, 6, 1),
    ]
    assert [item.status for item in plan] == ["paid", "overdue", "pending"]
    assert plan[0].paid_amount == Decimal("100")

    # Reporting does not rewrite stored rows.
    assert grant.installments.filter(status="overdue").count() == 0


def test_load_is_scoped_to_the_grant(grant):
    other = Grant.objects.create(title="Other", total_amount=Decimal("10"))
    save_repayment_schedule(
        other, generate_equal_installments(10, 1, date(2026, 1, 1))
    )

    assert load_repayment_schedule(grant, today=date(2026, 1, 1)) == []
