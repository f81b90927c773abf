import json
from datetime import date, timedelta
from decimal import Decimal

import pytest
from django.urls import reverse
from django.utils import timezone

from grants.models import Grant, RepaymentInstallment

pytestmark = pytest.mark.django_db


@pytest.fixture
def grant(user):
    return Grant.objects.create(title="Seed Fund", total_amount=Decimal("1000.00"))


@pytest.fixture
def api(client, user):
    client.force_login(user)
    return client


def schedule_url(grant):
    return reverse("grants:repayment-schedule", args=[grant.pk])


def post_schedule(client, grant, installments):
    return client.post(
        schedule_url(grant),
        data=json.dumps({"installments": installments}),
        content_type="application/json",
    )


def test_schedule_requires_login(client, grant):
    assert client.get(schedule_url(grant)).status_code == 302


def test_unknown_grant_is_404(api):
    response = api.get(reverse("grants:repayment-schedule", args=[999999]))

    assert response.status_code == 404


def test_post_replaces_schedule(api, grant):
    post_schedule(api, grant, [{"due_date": "2026-01-15", "amount": "1000"}])

    response = post_schedule(
        api,
        grant,
        [
            {"due_date": "2026-01-15", "amount": "500"},
            {"due_date": "2026-04-15", "amount": "500.00"},
        ],
    )

    assert response.status_code == 200
    assert response.json() == {"message": "Repayment schedule created", "count": 2}
    assert list(
        grant.installments.order_by("due_date").values_list("expected_amount", flat=True)
    ) == [Decimal("500.00"), Decimal("500.00")]


def test_post_empty_schedule(api, grant):
    response = post_schedule(api, grant, [])

    assert response.json() == {"message": "No installments provided", "count": 0}


@pytest.mark.parametrize(
    "installments",
    [
        "nope",
        [{"amount": "100"}],
        [{"due_date": "15/01/2026", "amount": "100"}],
        [{"due_date": "2026-02-30", "amount": "100"}],
        [{"due_date": "2026-01-15", "amount": "lots"}],
    ],
)
def test_post_rejects_malformed_installments(api, grant, installments):
    RepaymentInstallment.objects.create(
        grant=grant, due_date=date(2026, 1, 1), expected_amount=Decimal("10")
    )

    response = post_schedule(api, grant, installments)

    assert response.status_code == 400
    assert grant.installments.count() == 1


def test_get_lists_schedule_with_overdue_status(api, grant):
    today = timezone.localdate()
    RepaymentInstallment.objects.create(
        grant=grant, due_date=today - timedelta(days=10), expected_amount=Decimal("400")
    )
    RepaymentInstallment.objects.create(
        grant=grant, due_date=today + timedelta(days=80), expected_amount=Decimal("600")
    )

    body = api.get(schedule_url(grant)).json()

    assert body["count"] == 2
    assert [item["status"] for item in body["installments"]] == ["overdue", "pending"]
    assert body["installments"][0]["amount"] == "400.00"
