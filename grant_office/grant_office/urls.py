from django.contrib import admin
from django.urls import path, include


urlpatterns = [
    # DJANGO ADMIN (STAFF ONLY)
    path("admin/", admin.site.urls),

    # NOTIFICATION INBOX + SETTINGS (JSON)
    path("notifications/", include("notifications.urls")),

    # REPAYMENT SCHEDULES (JSON)
    path("grants/", include("grants.urls")),
]
