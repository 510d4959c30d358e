"""Normalize and validate a parsed candidate into a UserRecord."""

from dataclasses import dataclass
from enum import Enum

from email_validator import EmailNotValidError, validate_email


@dataclass(frozen=True)
class UserRecord:
    name: str
    surname: str
    email: str

    def as_row(self) -> tuple[str, str, str]:
        """Values in the order of USERS_COLUMNS."""
        return (self.email, self.name, self.surname)

    def summary(self) -> str:
        return f"{self.name} {self.surname} <{self.email}>"


class RejectReason(str, Enum):
    MISSING_EMAIL = "missing email"
    INVALID_EMAIL = "invalid email syntax"


@dataclass(frozen=True)
class Rejection:
    reason: RejectReason
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.reason.value}: {self.detail}"
        return self.reason.value


def capitalize_name(value: str) -> str:
    """Lowercase, then upper-case the first character only.

    Internal capitals are lost ("McDonald" -> "Mcdonald") and multi-word
    values are not title-cased ("mary ann" -> "Mary ann").
    """
    value = value.strip().lower()
    return value[:1].upper() + value[1:]


def normalize_email(value: str) -> str:
    return value.strip().lower()


def is_valid_email(email: str) -> tuple[bool, str]:
    """Check address syntax only; no DNS or deliverability lookups."""
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError as e:
        return False, str(e)
    return True, ""


def normalize_record(fields: tuple[str, ...] | list[str]) -> UserRecord | Rejection:
    """Turn (given-name, surname, email) into a UserRecord or a Rejection.

    Expects exactly three fields; the parser guarantees this.
    """
    name = capitalize_name(fields[0])
    surname = capitalize_name(fields[1])
    email = normalize_email(fields[2])

    if not email:
        return Rejection(RejectReason.MISSING_EMAIL)

    valid, detail = is_valid_email(email)
    if not valid:
        return Rejection(RejectReason.INVALID_EMAIL, detail)

    return UserRecord(name=name, surname=surname, email=email)
