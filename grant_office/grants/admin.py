from django.contrib import admin

from .models import Grant, RepaymentInstallment


class RepaymentInstallmentInline(admin.TabularInline):
    model = RepaymentInstallment
    extra = 0
    fields = ("due_date", "expected_amount", "status", "paid_amount", "paid_date")


@admin.register(Grant)
class GrantAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "title",
        "total_amount",
        "status",
        "managed_by",
        "created_at",
    )

    list_filter = ("status",)
    search_fields = ("title",)
    inlines = (RepaymentInstallmentInline,)
