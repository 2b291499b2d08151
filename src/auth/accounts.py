"""
Account Directory

Static in-memory set of known accounts. Identifiers are kept exactly as
they were registered, including stray whitespace and mixed case.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator


@dataclass(frozen=True)
class Account:
    """A known account. Never mutated after startup."""
    id: int
    identifier: str
    secret: str
    contact: str


# Seeded at process start. Several identifiers carry casing or whitespace
# that users do not expect when typing them.
DEFAULT_ACCOUNTS: tuple[Account, ...] = (
    Account(id=1, identifier="alice", secret="password123", contact="alice@example.com"),
    Account(id=2, identifier="bob", secret="securepass", contact="bob@example.com"),
    Account(id=3, identifier="Charlie", secret="charlie456", contact="charlie@example.com"),
    Account(id=4, identifier="david ", secret="david789", contact="david@example.com"),
    Account(id=5, identifier=" emma", secret="emma321", contact="emma@example.com"),
)


class AccountDirectory:
    """
    Read-only, ordered collection of accounts scanned linearly.

    Lookups go through this interface so a real store can replace the
    in-memory list without changing the matcher.
    """

    def __init__(self, accounts: Iterable[Account] = DEFAULT_ACCOUNTS):
        self._accounts: tuple[Account, ...] = tuple(accounts)

        ids = [account.id for account in self._accounts]
        if len(ids) != len(set(ids)):
            raise ValueError("Account ids must be unique")

    def __iter__(self) -> Iterator[Account]:
        return iter(self._accounts)

    def __len__(self) -> int:
        return len(self._accounts)

