"""Record ingestion pipeline: parse, validate, provision, import."""

from userimport.ingestion.importer import Importer
from userimport.ingestion.parser import ParseResult, ParseStatus, parse_line
from userimport.ingestion.report import ImportReport
from userimport.ingestion.schema import provision_users_table
from userimport.ingestion.validator import (
    RejectReason,
    Rejection,
    UserRecord,
    normalize_record,
)

__all__ = [
    "Importer",
    "ImportReport",
    "ParseResult",
    "ParseStatus",
    "RejectReason",
    "Rejection",
    "UserRecord",
    "normalize_record",
    "parse_line",
    "provision_users_table",
]
