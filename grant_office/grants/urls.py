from django.urls import path

from . import views

app_name = "grants"

urlpatterns = [
    path(
        "<int:pk>/repayment-schedule/",
        views.repayment_schedule,
        name="repayment-schedule",
    ),
]
