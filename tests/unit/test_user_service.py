import pytest

from iglesia360.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from iglesia360.models import UserRole, UserStatus
from iglesia360.services.user_service import (
    ROLE_PERMISSIONS,
    authenticate,
    create_user,
    delete_user,
    get_user,
    list_users,
    permissions_for,
    update_user,
)


def test_create_user_defaults(blank_store):
    user = create_user(blank_store, "nuevo@iglesia360.com", " Lucía Torres ")
    assert user.id == 7
    assert user.name == "Lucía Torres"
    assert user.roles == [UserRole.USUARIO]
    assert user.status == UserStatus.ACTIVE


def test_create_user_duplicate_email_is_case_insensitive(blank_store):
    with pytest.raises(ConflictError):
        create_user(blank_store, "TESORERO@iglesia360.com", "Otra Persona")
    assert blank_store.users.count() == 6


@pytest.mark.parametrize("email, name", [(None, "X"), ("x@iglesia360.com", ""), ("", None)])
def test_create_user_requires_email_and_name(blank_store, email, name):
    with pytest.raises(ValidationError) as exc:
        create_user(blank_store, email, name)
    assert exc.value.message == "Email and name are required"


def test_update_user_partial(blank_store):
    user = update_user(blank_store, 5, status=UserStatus.SUSPENDED, roles=[UserRole.PASTOR_RED])
    assert user.name == "Pedro Sánchez"
    assert user.status == UserStatus.SUSPENDED
    assert get_user(blank_store, 5).roles == [UserRole.PASTOR_RED]


def test_update_and_delete_unknown_user(blank_store):
    with pytest.raises(NotFoundError):
        update_user(blank_store, 99, name="Nadie")
    with pytest.raises(NotFoundError):
        delete_user(blank_store, 99)


def test_delete_user(blank_store):
    delete_user(blank_store, 6)
    with pytest.raises(NotFoundError):
        get_user(blank_store, 6)


def test_deleted_user_id_is_not_reused(blank_store):
    delete_user(blank_store, 6)
    user = create_user(blank_store, "nuevo@iglesia360.com", "Lucía Torres")
    assert user.id == 7


def test_list_users_filters(blank_store):
    rows, total = list_users(blank_store, role=UserRole.TESORERO)
    assert [u.id for u in rows] == [2]
    assert total == 1

    rows, total = list_users(blank_store, page=2, page_size=4)
    assert [u.id for u in rows] == [5, 6]
    assert total == 6


def test_authenticate_success_sets_last_login(blank_store):
    before = get_user(blank_store, 1).last_login
    user = authenticate(blank_store, "admin@iglesia360.com", "password")
    assert user.id == 1
    assert get_user(blank_store, 1).last_login >= before


@pytest.mark.parametrize(
    "email, password",
    [("admin@iglesia360.com", "wrong"), ("nadie@iglesia360.com", "password")],
)
def test_authenticate_bad_credentials(blank_store, email, password):
    with pytest.raises(AuthenticationError):
        authenticate(blank_store, email, password)


def test_authenticate_inactive_user(blank_store):
    update_user(blank_store, 3, status=UserStatus.INACTIVE)
    with pytest.raises(AuthenticationError):
        authenticate(blank_store, "pastor@iglesia360.com", "password")


def test_authenticate_missing_fields(blank_store):
    with pytest.raises(ValidationError):
        authenticate(blank_store, "admin@iglesia360.com", "")


def test_role_permissions():
    assert "users.delete" in ROLE_PERMISSIONS[UserRole.ADMIN]
    assert "solicitudes.mark_paid" in ROLE_PERMISSIONS[UserRole.TESORERO]
    assert "solicitudes.approve" not in ROLE_PERMISSIONS[UserRole.USUARIO]

    merged = permissions_for([UserRole.PASTOR_RED, UserRole.USUARIO])
    assert merged == [
        "solicitudes.view",
        "solicitudes.approve",
        "solicitudes.create",
        "solicitudes.edit",
    ]
