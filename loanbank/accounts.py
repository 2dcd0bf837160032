"""User accounts: details file, credential file, sign-up and log-in."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

MAX_PASSWORD_LENGTH = 8
MAX_NAME_LENGTH = 99
MAX_EMAIL_LENGTH = 199

_CREDENTIAL = re.compile(r"\s*NID\s*-->\s*([-+]?\d+)\s*PASS\s*-->\s*(\S+)")
_USER = re.compile(
    r"\s*NID\s*-->\s*([-+]?\d+)\s*Name\s*-->\s*([^\t\n]{1,99})\s*Email\s*-->\s*([^\n]{1,199})"
)


class AccountError(Exception):
    """An account could not be created or checked."""


@dataclass(frozen=True)
class User:
    nid: int
    name: str
    email: str


def validate_password(password: str) -> str:
    """Return the password if it is usable, else raise AccountError."""
    if not password:
        raise AccountError("Password must not be empty.")
    if any(ch.isspace() for ch in password):
        raise AccountError("Password must not contain spaces.")
    if len(password) > MAX_PASSWORD_LENGTH:
        raise AccountError(
            f"Password exceeds limit! It must be {MAX_PASSWORD_LENGTH} characters or less."
        )
    return password


def _check_field(label: str, value: str, limit: int) -> None:
    if not value.strip():
        raise AccountError(f"{label} must not be empty.")
    if "\t" in value or "\n" in value:
        raise AccountError(f"{label} must not contain tabs or line breaks.")
    if len(value) > limit:
        raise AccountError(f"{label} must be {limit} characters or less.")


class AccountStore:
    """Accounts kept in a user-details file and a credential file."""

    def __init__(self, user_file, credential_file) -> None:
        self.user_file = Path(user_file)
        self.credential_file = Path(credential_file)

    def _credentials(self) -> Iterator[tuple[int, str]]:
        with self.credential_file.open(encoding="utf-8") as handle:
            for line in handle:
                match = _CREDENTIAL.match(line)
                if match:
                    yield int(match.group(1)), match.group(2)

    def nid_taken(self, nid: int) -> bool:
        """Whether an account with this NID already exists."""
        try:
            return any(stored == nid for stored, _ in self._credentials())
        except FileNotFoundError:
            return False

    def find_user(self, nid: int) -> Optional[User]:
        """The details of the user with this NID, or None."""
        try:
            with self.user_file.open(encoding="utf-8") as handle:
                for line in handle:
                    match = _USER.match(line)
                    if match and int(match.group(1)) == nid:
                        return User(nid, match.group(2).rstrip(), match.group(3).rstrip())
        except FileNotFoundError:
            return None
        return None

    def create(self, nid: int, name: str, email: str, password: str) -> User:
        """Register a new account and return its user."""
        _check_field("Name", name, MAX_NAME_LENGTH)
        _check_field("Email", email, MAX_EMAIL_LENGTH)
        validate_password(password)
        if self.nid_taken(nid):
            raise AccountError("This NID already exists!!")
        with self.user_file.open("a", encoding="utf-8") as handle:
            handle.write(f"NID --> {nid}\t\tName --> {name}\t\tEmail --> {email}\n")
        with self.credential_file.open("a", encoding="utf-8") as handle:
            handle.write(f"NID --> {nid}\t\tPASS --> {password}\n")
        return User(nid, name, email)

    def authenticate(self, nid: int, password: str) -> bool:
        """Whether the NID and password match a stored account."""
        try:
            return any(
                stored == nid and stored_password == password
                for stored, stored_password in self._credentials()
            )
        except FileNotFoundError:
            raise AccountError("No accounts have been registered yet.") from None