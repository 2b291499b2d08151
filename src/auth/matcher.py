"""
Credential Matcher

Decides whether a submitted (identifier, secret) pair authenticates.

Matching is exact: no trimming, no case-folding. When the exact match
fails, a second, looser scan (trimmed and case-folded identifiers) runs
purely to explain the failure in the logs. A loose hit is still a failed
login.
"""

from dataclasses import dataclass
from typing import Union

from .accounts import Account, AccountDirectory


@dataclass(frozen=True)
class MatchSuccess:
    account: Account


@dataclass(frozen=True)
class IdentifierUnknown:
    """No account matches the identifier, not even loosely."""


@dataclass(frozen=True)
class IdentifierMismatch:
    """
    An account matches once casing and surrounding whitespace are ignored,
    but the exact identifier or the secret differs.
    """
    stored_identifier: str
    stored_length: int
    provided_length: int


MatchResult = Union[MatchSuccess, IdentifierUnknown, IdentifierMismatch]


def _loose(identifier: str) -> str:
    return identifier.strip().casefold()


class CredentialMatcher:
    """Matches credentials against an account directory."""

    def __init__(self, directory: AccountDirectory):
        self._directory = directory

    def match(self, identifier: str, secret: str) -> MatchResult:
        for account in self._directory:
            if account.identifier == identifier and account.secret == secret:
                return MatchSuccess(account)

        # Diagnostics only, the decision above is final
        wanted = _loose(identifier)
        for account in self._directory:
            if _loose(account.identifier) == wanted:
                return IdentifierMismatch(
                    stored_identifier=account.identifier,
                    stored_length=len(account.identifier),
                    provided_length=len(identifier),
                )

        return IdentifierUnknown()
