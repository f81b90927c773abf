from django.urls import path

from . import views

app_name = "notifications"

urlpatterns = [
    path("", views.notification_list, name="list"),
    path("read/", views.notifications_mark_read, name="mark-read"),
    path("delete/", views.notifications_delete, name="delete"),
    path("settings/", views.notification_settings, name="settings"),
    path("<int:pk>/", views.notification_detail, name="detail"),
    path("<int:pk>/read/", views.notification_mark_read, name="mark-one-read"),
]
