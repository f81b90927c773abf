import itertools

import pytest
from django.utils import timezone

from accounts.models import User
from notifications.models import NotificationSetting
from tasks.models import Task


@pytest.fixture(autouse=True)
def _no_scheduler(settings):
    settings.ENABLE_SCHEDULER = False


@pytest.fixture
def now():
    return timezone.now()


@pytest.fixture
def make_user(db):
    counter = itertools.count(1)

    def _make_user(**kwargs):
        n = next(counter)
        kwargs.setdefault("username", f"officer{n}")
        kwargs.setdefault("email", f"officer{n}@example.com")
        return User.objects.create_user(password="secret", **kwargs)

    return _make_user


@pytest.fixture
def user(make_user):
    return make_user(first_name="Ana", last_name="Cruz")


@pytest.fixture
def other_user(make_user):
    return make_user(first_name="Ben", last_name="Reyes")


@pytest.fixture
def make_task(db, user):
    def _make_task(**kwargs):
        kwargs.setdefault("title", "Quarterly report")
        kwargs.setdefault("assignee", user)
        return Task.objects.create(**kwargs)

    return _make_task


@pytest.fixture
def set_preferences(db):
    def _set_preferences(user, **values):
        NotificationSetting.objects.update_or_create(user=user, defaults=values)

    return _set_preferences


@pytest.fixture
def opted_in(user, set_preferences):
    """The default user with a saved (default) settings row."""
    set_preferences(user)
    return user
