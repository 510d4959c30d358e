"""Tests for record normalization and validation."""

import pytest

from userimport.ingestion.validator import (
    RejectReason,
    Rejection,
    UserRecord,
    capitalize_name,
    normalize_record,
)


class TestCapitalizeName:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("john", "John"),
            ("JOHN", "John"),
            ("  sMiTh ", "Smith"),
            ("McDonald", "Mcdonald"),
            ("mary ann", "Mary ann"),
            ("o'NEIL", "O'neil"),
            ("", ""),
        ],
    )
    def test_capitalize(self, raw, expected):
        assert capitalize_name(raw) == expected


class TestNormalizeRecord:
    def test_accepts_and_normalizes(self):
        result = normalize_record(("John", "Smith", "JOHN.SMITH@Example.com"))
        assert result == UserRecord(name="John", surname="Smith", email="john.smith@example.com")

    def test_trims_all_fields(self):
        result = normalize_record(("  jane ", " DOE", "  Jane@Example.com  "))
        assert result == UserRecord(name="Jane", surname="Doe", email="jane@example.com")

    def test_invalid_email(self):
        result = normalize_record(("John", "Smith", "not-an-email"))
        assert isinstance(result, Rejection)
        assert result.reason is RejectReason.INVALID_EMAIL
        assert str(result).startswith("invalid email syntax")

    @pytest.mark.parametrize("email", ["", "   "])
    def test_missing_email(self, email):
        result = normalize_record(("John", "Smith", email))
        assert result == Rejection(RejectReason.MISSING_EMAIL)
        assert str(result) == "missing email"

    @pytest.mark.parametrize("email", ["john@", "@example.com", "john smith@example.com", "a@@b.com"])
    def test_rejects_bad_syntax(self, email):
        result = normalize_record(("John", "Smith", email))
        assert isinstance(result, Rejection)
        assert result.reason is RejectReason.INVALID_EMAIL

    def test_case_variants_yield_same_email(self):
        variants = ["john.smith@example.com", "JOHN.SMITH@EXAMPLE.COM", "John.Smith@Example.Com"]
        emails = {normalize_record(("John", "Smith", v)).email for v in variants}
        assert emails == {"john.smith@example.com"}

    def test_idempotent(self):
        first = normalize_record(("mARY", "o'brien", "Mary.OBrien@Example.org"))
        second = normalize_record((first.name, first.surname, first.email))
        assert second == first

    def test_record_is_immutable(self):
        record = normalize_record(("John", "Smith", "john@example.com"))
        with pytest.raises(AttributeError):
            record.email = "other@example.com"

    def test_row_order_matches_columns(self):
        record = UserRecord(name="John", surname="Smith", email="john@example.com")
        assert record.as_row() == ("john@example.com", "John", "Smith")
        assert record.summary() == "John Smith <john@example.com>"
