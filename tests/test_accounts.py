"""Authentication and secret changes on the account store."""

import pytest

from facility_monitor.core.errors import (
    InvalidInputError,
    NotFoundError,
    PermissionDeniedError,
)
from facility_monitor.domain.models import Account, Role


@pytest.fixture
def populated(account_store):
    account_store.add(Account(number=20000, nif="22222222", secret="alice", role=Role.EMPLOYEE))
    account_store.add(Account(number=20001, nif="33333333", secret="bob", role=Role.EMPLOYEE))
    return account_store


class TestLogin:
    def test_default_admin_credentials(self, account_store):
        account = account_store.login(10000, "00000000", "admin")
        assert account is not None
        assert account.is_admin

    def test_wrong_secret(self, populated):
        assert populated.login(20000, "22222222", "nope") is None

    def test_wrong_nif(self, populated):
        assert populated.login(20000, "99999999", "alice") is None

    def test_unknown_account(self, populated):
        assert populated.login(55555, "22222222", "alice") is None


class TestChangeSecret:
    def test_admin_changes_other_without_current(self, populated):
        admin = populated.find_by_id(10000)
        assert populated.change_secret(admin, 20000, "fresh")
        assert populated.login(20000, "22222222", "fresh") is not None

    def test_employee_cannot_change_other(self, populated):
        alice = populated.find_by_id(20000)
        result = populated.change_secret(alice, 20001, "hijack")
        assert isinstance(result.error, PermissionDeniedError)
        assert populated.find_by_id(20001).secret == "bob"

    def test_self_change_needs_current_secret(self, populated):
        alice = populated.find_by_id(20000)
        result = populated.change_secret(alice, 20000, "fresh", current_secret="wrong")
        assert isinstance(result.error, PermissionDeniedError)
        assert populated.change_secret(alice, 20000, "fresh", current_secret="alice")
        assert populated.find_by_id(20000).secret == "fresh"

    def test_unknown_target(self, populated):
        admin = populated.find_by_id(10000)
        result = populated.change_secret(admin, 55555, "x")
        assert isinstance(result.error, NotFoundError)

    def test_empty_secret_is_invalid(self, populated):
        admin = populated.find_by_id(10000)
        with pytest.raises(InvalidInputError):
            populated.change_secret(admin, 20000, "")


class TestAccountModel:
    def test_empty_nif_rejected(self):
        with pytest.raises(InvalidInputError):
            Account(number=20000, nif="", secret="x")

    def test_unknown_role_rejected(self):
        with pytest.raises(InvalidInputError):
            Account(number=20000, nif="n", secret="x", role=5)

    def test_ordering_by_number(self):
        a = Account(number=20001, nif="n", secret="x")
        b = Account(number=20000, nif="n", secret="x")
        assert sorted([a, b]) == [b, a]
