import json

from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.utils.dateparse import parse_date
from django.views.decorators.http import require_http_methods

from notifications.exceptions import InvalidArgument

from .models import Grant
from .services import (
    add_installment,
    load_repayment_schedule,
    save_repayment_schedule,
)


def serialize_installment(installment):
    return {
        "id": installment.id,
        "due_date": installment.due_date.isoformat() if installment.due_date else None,
        "amount": str(installment.amount),
        "status": installment.status,
        "paid_amount": (
            str(installment.paid_amount) if installment.paid_amount is not None else None
        ),
        "paid_date": installment.paid_date.isoformat() if installment.paid_date else None,
    }


def _read_installments(request):
    """
    Body: {"installments": [{"due_date": "YYYY-MM-DD", "amount": "1000"}, ...]}
    Raises InvalidArgument on anything malformed.
    """
    try:
        payload = json.loads(request.body or b"{}")
    except ValueError:
        raise InvalidArgument("Invalid JSON body")

    items = payload.get("installments") if isinstance(payload, dict) else None
    if not isinstance(items, list):
        raise InvalidArgument("installments must be a list")

    plan = []
    for item in items:
        if not isinstance(item, dict):
            raise InvalidArgument("Each installment must be an object")

        try:
            due_date = parse_date(str(item.get("due_date") or ""))
        except ValueError:
            due_date = None
        if due_date is None:
            raise InvalidArgument("Each installment needs a valid due_date")

        plan = add_installment(plan, due_date=due_date, amount=item.get("amount", 0))

    return plan


# ============================================================
# REPAYMENT SCHEDULE
# ============================================================

@login_required
@require_http_methods(["GET", "POST"])
def repayment_schedule(request, pk):
    grant = get_object_or_404(Grant, pk=pk)

    if request.method == "GET":
        installments = load_repayment_schedule(grant)
        return JsonResponse({
            "installments": [serialize_installment(i) for i in installments],
            "count": len(installments),
        })

    # POST replaces the whole schedule.
    try:
        plan = _read_installments(request)
    except InvalidArgument as exc:
        return JsonResponse({"error": str(exc)}, status=400)

    count = save_repayment_schedule(grant, plan)

    message = "Repayment schedule created" if count else "No installments provided"
    return JsonResponse({"message": message, "count": count})
