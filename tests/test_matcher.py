"""Tests for exact credential matching and its near-miss diagnostics."""

import pytest
from hypothesis import assume, given, strategies as st

from auth import (
    DEFAULT_ACCOUNTS,
    Account,
    AccountDirectory,
    CredentialMatcher,
    IdentifierMismatch,
    IdentifierUnknown,
    MatchSuccess,
)


@pytest.fixture
def matcher(directory):
    return CredentialMatcher(directory)


@pytest.mark.parametrize(
    "identifier, secret, account_id",
    [
        ("alice", "password123", 1),
        ("bob", "securepass", 2),
        ("Charlie", "charlie456", 3),
        ("david ", "david789", 4),
        (" emma", "emma321", 5),
    ],
)
def test_exact_credentials_match(matcher, identifier, secret, account_id):
    result = matcher.match(identifier, secret)

    assert isinstance(result, MatchSuccess)
    assert result.account.id == account_id


def test_different_case_is_not_a_match(matcher):
    result = matcher.match("charlie", "charlie456")

    assert isinstance(result, IdentifierMismatch)
    assert result.stored_identifier == "Charlie"


def test_missing_trailing_space_is_not_a_match(matcher):
    result = matcher.match("david", "david789")

    assert isinstance(result, IdentifierMismatch)
    assert result.stored_identifier == "david "
    assert result.stored_length == 6
    assert result.provided_length == 5


def test_missing_leading_space_is_not_a_match(matcher):
    result = matcher.match("emma", "emma321")

    assert isinstance(result, IdentifierMismatch)
    assert result.stored_identifier == " emma"


def test_wrong_secret_for_exact_identifier_is_a_mismatch(matcher):
    result = matcher.match("alice", "wrong")

    assert isinstance(result, IdentifierMismatch)
    assert result.stored_length == result.provided_length == 5


def test_unknown_identifier(matcher):
    assert isinstance(matcher.match("mallory", "password123"), IdentifierUnknown)


def test_secret_comparison_is_exact(matcher):
    assert not isinstance(matcher.match("alice", "password123 "), MatchSuccess)
    assert not isinstance(matcher.match("alice", "PASSWORD123"), MatchSuccess)


def test_directory_rejects_duplicate_ids():
    with pytest.raises(ValueError):
        AccountDirectory([
            Account(id=1, identifier="a", secret="x", contact="a@example.com"),
            Account(id=1, identifier="b", secret="y", contact="b@example.com"),
        ])


def test_directory_preserves_seed_order(directory):
    assert [account.id for account in directory] == [1, 2, 3, 4, 5]
    assert len(directory) == len(DEFAULT_ACCOUNTS)


@given(identifier=st.text(max_size=20))
def test_only_exact_identifiers_authenticate(identifier):
    """
    Property: with the right password, any identifier other than the
    stored one fails, however close it is.
    """
    assume(identifier != "Charlie")
    matcher = CredentialMatcher(AccountDirectory())

    assert not isinstance(matcher.match(identifier, "charlie456"), MatchSuccess)
