"""Account repository (file persistence)."""
import logging
from pathlib import Path
from typing import Optional

from catering.domain.Account import Account
from catering.domain.errors import PersistenceError, ValidationError
from catering.infra.json_store import JsonListStore
from catering.infra.paths import ACCOUNTS_FILENAME, data_file

logger = logging.getLogger(__name__)


class AccountRepository:
    def __init__(self, path: Optional[Path] = None):
        self.store = JsonListStore(path or data_file(ACCOUNTS_FILENAME))

    def find_by_email(self, email: str) -> Optional[Account]:
        for row in self.store.load():
            if row.get('email') == email:
                return self._to_account(row)
        return None

    def get(self, account_id: str) -> Optional[Account]:
        for row in self.store.load():
            if row.get('id') == account_id:
                return self._to_account(row)
        return None

    def add(self, account: Account) -> Account:
        with self.store.lock:
            rows = self.store.load()
            if any(r.get('email') == account.email for r in rows):
                raise ValidationError("Account already exists", {"email": "An account with this email already exists"})
            rows.append(account.to_dict())
            self.store.save(rows)
        return account

    def _to_account(self, row) -> Account:
        try:
            return Account.from_dict(row)
        except (TypeError, ValueError) as e:
            logger.error("Malformed account record in %s: %s", self.store.path, e)
            raise PersistenceError() from e
