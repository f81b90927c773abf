from django.contrib import admin

from .models import Task


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "title",
        "status",
        "priority",
        "due_date",
        "assignee",
        "created_by",
    )

    list_filter = (
        "status",
        "priority",
        "due_date",
    )

    search_fields = (
        "title",
        "description",
        "assignee__username",
    )

    ordering = ("due_date",)
    list_per_page = 25
