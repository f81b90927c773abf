import json

from django.contrib.auth.decorators import login_required
from django.core.paginator import Paginator
from django.forms.models import model_to_dict
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_GET, require_POST, require_http_methods

from .forms import NotificationSettingForm
from .models import Notification
from .services import get_user_settings


# ============================================================
# HELPERS
# ============================================================

def _read_json(request):
    if not request.body:
        return {}
    try:
        payload = json.loads(request.body)
    except ValueError:
        return None
    return payload if isinstance(payload, dict) else None


def _read_ids(payload):
    ids = payload.get("ids")
    if not isinstance(ids, list) or not ids:
        return None
    # JSON true/false would otherwise pass as 1/0.
    if any(isinstance(value, bool) for value in ids):
        return None
    try:
        return [int(value) for value in ids]
    except (TypeError, ValueError):
        return None


def _bad_request(message):
    return JsonResponse({"error": message}, status=400)


def serialize_notification(notification):
    task = notification.task
    sender = notification.sender

    return {
        "id": notification.id,
        "type": notification.type,
        "title": notification.title,
        "message": notification.message,
        "is_read": notification.is_read,
        "read_at": notification.read_at.isoformat() if notification.read_at else None,
        "recipient_id": notification.recipient_id,
        "sender": (
            {"id": sender.id, "name": sender.display_name} if sender else None
        ),
        "related_entity_id": notification.related_entity_id,
        "related_entity_type": notification.related_entity_type,
        "task": (
            {
                "id": task.id,
                "title": task.title,
                "status": task.status,
                "priority": task.priority,
                "due_date": task.due_date.isoformat() if task.due_date else None,
            }
            if task else None
        ),
        "created_at": notification.created_at.isoformat(),
        "expires_at": (
            notification.expires_at.isoformat() if notification.expires_at else None
        ),
    }


def serialize_settings(user_settings):
    data = model_to_dict(user_settings, fields=NotificationSettingForm.Meta.fields)
    data["user_id"] = user_settings.user_id
    return data


# ============================================================
# INBOX
# ============================================================

@login_required
@require_GET
def notification_list(request):
    unread_only = request.GET.get("unread") == "true"

    try:
        limit = int(request.GET.get("limit", 10))
    except ValueError:
        return _bad_request("limit must be an integer")
    limit = max(1, min(limit, 100))

    qs = (
        Notification.objects
        .filter(recipient=request.user)
        .select_related("sender", "task")
        .order_by("-created_at", "-id")
    )

    if unread_only:
        qs = qs.filter(is_read=False)

    paginator = Paginator(qs, limit)
    page_obj = paginator.get_page(request.GET.get("page"))

    return JsonResponse({
        "notifications": [serialize_notification(n) for n in page_obj],
        "pagination": {
            "total": paginator.count,
            "page": page_obj.number,
            "limit": limit,
            "total_pages": paginator.num_pages,
        },
    })


@login_required
@require_http_methods(["GET", "DELETE"])
def notification_detail(request, pk):
    notification = get_object_or_404(
        Notification.objects.select_related("sender", "task"),
        pk=pk,
    )

    if notification.recipient_id != request.user.id:
        return JsonResponse({"error": "Forbidden"}, status=403)

    if request.method == "DELETE":
        notification.delete()
        return JsonResponse({"message": "Notification deleted successfully"})

    return JsonResponse(serialize_notification(notification))


@login_required
@require_POST
def notification_mark_read(request, pk):
    notification = get_object_or_404(
        Notification,
        pk=pk,
        recipient=request.user,
    )
    notification.mark_as_read()

    return JsonResponse(serialize_notification(notification))


@login_required
@require_POST
def notifications_mark_read(request):
    """
    Body: {"all": true} or {"ids": [1, 2, 3]}.
    """
    payload = _read_json(request)
    if payload is None:
        return _bad_request("Invalid JSON body")

    if payload.get("all") is True:
        updated = Notification.mark_all_as_read(request.user)
        return JsonResponse({"message": "All notifications marked as read", "updated": updated})

    ids = _read_ids(payload)
    if ids is None:
        return _bad_request("Invalid notification IDs")

    updated = Notification.mark_all_as_read(request.user, ids=ids)
    return JsonResponse({"message": "Notifications marked as read", "updated": updated})


@login_required
@require_POST
def notifications_delete(request):
    payload = _read_json(request)
    if payload is None:
        return _bad_request("Invalid JSON body")

    ids = _read_ids(payload)
    if ids is None:
        return _bad_request("Invalid notification IDs")

    deleted, _ = (
        Notification.objects
        .filter(recipient=request.user, id__in=ids)
        .delete()
    )

    return JsonResponse({"message": "Notifications deleted successfully", "deleted": deleted})


# ============================================================
# SETTINGS
# ============================================================

@login_required
@require_http_methods(["GET", "PUT"])
def notification_settings(request):
    user_settings = get_user_settings(request.user.id)

    if request.method == "GET":
        return JsonResponse(serialize_settings(user_settings))

    payload = _read_json(request)
    if payload is None:
        return _bad_request("Invalid JSON body")

    # Fields missing from the body keep their stored value.
    data = model_to_dict(user_settings, fields=NotificationSettingForm.Meta.fields)
    data.update(payload)

    form = NotificationSettingForm(data, instance=user_settings)
    if not form.is_valid():
        return JsonResponse({"error": form.errors.get_json_data()}, status=400)

    user_settings = form.save()
    return JsonResponse(serialize_settings(user_settings))
