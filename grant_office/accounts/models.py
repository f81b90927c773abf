from django.db import models
from django.contrib.auth.models import AbstractUser


class User(AbstractUser):
    position_title = models.CharField(max_length=150, blank=True)

    role = models.CharField(
        max_length=50,
        choices=[
            ("super_admin", "Super Admin"),
            ("program_manager", "Program Manager"),
            ("staff", "Staff"),
        ],
        default="staff",
    )

    contact_number = models.CharField(max_length=20, blank=True)

    @property
    def display_name(self):
        return self.get_full_name() or self.username

    def __str__(self):
        full = self.get_full_name()
        return f"{full} ({self.username})" if full else self.username


def get_display_name(user_id):
    """
    Resolve a user's display name from the directory.
    Returns None when the user does not exist.
    """
    if user_id is None:
        return None

    user = (
        User.objects
        .filter(pk=user_id)
        .only("username", "first_name", "last_name")
        .first()
    )
    if user is None:
        return None

    return user.display_name
