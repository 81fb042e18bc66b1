from __future__ import annotations

import logging
from typing import Optional

from ..core.config import settings
from ..core.errors import (
    InvalidInputError,
    NotFoundError,
    PermissionDeniedError,
    ProtectedEntityError,
)
from ..domain.models import DEFAULT_ADMIN_ID, Account, Role, StoreResult
from .codec import AccountCodec, account_codec
from .store import EntityStore, PathLike

logger = logging.getLogger(__name__)


class AccountStore(EntityStore[Account]):
    """Accounts file with the mandatory elevated account #10000."""

    codec: AccountCodec = account_codec
    label = "account"

    def __init__(
        self,
        path: PathLike = settings.accounts_file,
        autosave: Optional[bool] = None,
        admin_nif: Optional[str] = None,
        admin_secret: Optional[str] = None,
    ) -> None:
        super().__init__(path, autosave=autosave)
        self.admin_nif = admin_nif or settings.default_admin_nif
        self.admin_secret = admin_secret or settings.default_admin_secret
        self.bootstrap()

    def ensure_primaries(self) -> None:
        if self.find_by_id(DEFAULT_ADMIN_ID) is None:
            self._items.append(Account(
                number=DEFAULT_ADMIN_ID,
                nif=self.admin_nif,
                secret=self.admin_secret,
                role=Role.ADMIN,
            ))
            logger.info("Created default administrator #%d", DEFAULT_ADMIN_ID)

    def is_protected(self, entity: Account) -> bool:
        return entity.number == DEFAULT_ADMIN_ID

    def check_update(self, current: Account, replacement: Account) -> None:
        if self.is_protected(current) and replacement.role is not Role.ADMIN:
            raise ProtectedEntityError(
                "The default administrator must keep the ADMIN role", current.number
            )

    def login(self, number: int, nif: str, secret: str) -> Optional[Account]:
        account = self.find_by_id(number)
        if account is None:
            return None
        if account.nif == nif and account.secret == secret:
            return account
        return None

    def change_secret(
        self,
        actor: Account,
        target_number: int,
        new_secret: str,
        current_secret: Optional[str] = None,
    ) -> StoreResult:
        """Replace the secret of account ``target_number`` on behalf of ``actor``.

        Admins may change anyone's secret; other accounts only their own. Whoever
        changes their own secret must also present the current one.
        """
        if actor is None:
            raise InvalidInputError("Cannot change a secret without an acting account")
        if not new_secret:
            raise InvalidInputError("Secret cannot be empty", target_number)

        target = self.find_by_id(target_number)
        if target is None:
            return StoreResult.failure(
                NotFoundError(f"Account {target_number} not found", target_number)
            )
        if not (actor.is_admin or actor.number == target.number):
            return StoreResult.failure(PermissionDeniedError(
                f"Account {actor.number} may not change the secret of {target.number}",
                target.number,
            ))
        if actor.number == target.number and current_secret != target.secret:
            return StoreResult.failure(
                PermissionDeniedError("Current secret is incorrect", target.number)
            )

        target.secret = new_secret
        self._autosave()
        logger.info("Secret changed for account #%d by #%d", target.number, actor.number)
        return StoreResult.success()
