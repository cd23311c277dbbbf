import pytest

from users.forms import UserAdminCreationForm
from users.models import User


@pytest.mark.django_db
class TestUserAdminCreationForm:
    def test_creates_staff_with_hashed_password(self):
        form = UserAdminCreationForm(data={
            'email': 'chef@bistro.test',
            'role': User.Role.KITCHEN_STAFF,
            'password1': 'mise-en-place-42',
            'password2': 'mise-en-place-42',
        })

        assert form.is_valid(), form.errors
        staff = form.save()
        assert staff.check_password('mise-en-place-42')
        assert staff.role == User.Role.KITCHEN_STAFF

    def test_mismatched_passwords(self):
        form = UserAdminCreationForm(data={
            'email': 'chef@bistro.test',
            'role': User.Role.KITCHEN_STAFF,
            'password1': 'mise-en-place-42',
            'password2': 'mise-en-place-43',
        })

        assert not form.is_valid()
        assert 'password2' in form.errors
