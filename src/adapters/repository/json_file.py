"""
JSON file repository adapter - Implements UserRepository protocol.

Accounts live in memory and are written to a single JSON file as an
array of {"email", "password", "name"} objects. Every successful signup
rewrites the whole file.

Known limitation: the rewrite is not atomic. A crash mid-write can
leave a truncated file, which the next load() treats as empty.
"""

import json
import logging
from pathlib import Path

from src.domain.exceptions import PersistenceError
from src.domain.ports import Account

logger = logging.getLogger(__name__)


class JsonUserRepository:
    """
    Implements UserRepository protocol over a JSON file.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Not synchronized: AuthService serializes access with its lock.
    """

    def __init__(self, path: str | Path) -> None:
        """
        Initialize repository for a storage file.

        Args:
            path: Location of the JSON user file (need not exist yet)
        """
        self._path = Path(path)
        self._accounts: dict[str, Account] = {}

    def load(self) -> None:
        """
        Replace in-memory accounts with the file's content.

        A missing, unreadable or malformed file yields an empty store.
        Records without an email are skipped.
        """
        self._accounts = {}

        if not self._path.exists():
            logger.info("User store %s not found, starting empty", self._path)
            return

        try:
            records = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Could not read user store %s, starting empty: %s", self._path, e)
            return

        if not isinstance(records, list):
            logger.warning("User store %s is not a JSON array, starting empty", self._path)
            return

        for record in records:
            if not isinstance(record, dict) or not record.get("email"):
                continue
            account = Account(
                email=str(record["email"]),
                password=str(record.get("password", "")),
                name=str(record.get("name", "")),
            )
            self._accounts[account.email] = account

        logger.info("Loaded %d account(s) from %s", len(self._accounts), self._path)

    def find(self, email: str) -> Account | None:
        return self._accounts.get(email)

    def insert(self, account: Account) -> None:
        self._accounts[account.email] = account

    def remove(self, email: str) -> None:
        self._accounts.pop(email, None)

    def persist_all(self) -> None:
        """
        Overwrite the file with every in-memory account.

        Raises:
            PersistenceError: If the file cannot be written
        """
        records = [
            {"email": a.email, "password": a.password, "name": a.name}
            for a in self._accounts.values()
        ]
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(records, indent=2), encoding="utf-8")
        except OSError as e:
            logger.error("Failed to write user store %s: %s", self._path, e)
            raise PersistenceError() from e

    def accounts(self) -> list[Account]:
        return list(self._accounts.values())

    def __len__(self) -> int:
        return len(self._accounts)
