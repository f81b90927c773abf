import pytest

from accounts.models import get_display_name

pytestmark = pytest.mark.django_db


def test_display_name_prefers_full_name(user):
    assert user.display_name == "Ana Cruz"
    assert get_display_name(user.pk) == "Ana Cruz"


def test_display_name_falls_back_to_username(make_user):
    bare = make_user(username="jdoe")

    assert get_display_name(bare.pk) == "jdoe"
    assert str(bare) == "jdoe"


def test_display_name_for_unknown_user():
    assert get_display_name(None) is None
    assert get_display_name(987654) is None
