from unittest import mock

import pytest

from apps.users import services
from apps.users.domain.policy import Actor, Role
from apps.users.models import User


@pytest.mark.django_db
def test_profile_update_writes_only_submitted_fields():
    user = User.objects.create_user(email="erin@example.com", name="Erin", password="ErinPass1")
    original_get = services._get_user
    locked = []

    def get_then_role_changes(user_id, *, lock=False):
        locked.append(lock)
        found = original_get(user_id, lock=lock)
        # An admin promotes the user after the row was read
        User.objects.filter(pk=user_id).update(role=User.RoleChoices.ADMIN)
        return found

    with mock.patch.object(services, "_get_user", side_effect=get_then_role_changes):
        services.update_user(Actor(id=user.pk, role=Role.CUSTOMER), user.pk, {"name": "Erin Brock"})

    assert locked == [True]
    user.refresh_from_db()
    assert user.name == "Erin Brock"
    assert user.role == User.RoleChoices.ADMIN
