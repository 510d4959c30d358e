"""Split one line of the source file into candidate fields.

The format is a plain comma-separated line with no quoting: a field that
itself contains a comma cannot be represented.
"""

from dataclasses import dataclass
from enum import Enum

DELIMITER = ","
FIELD_COUNT = 3


class ParseStatus(Enum):
    OK = "ok"
    SKIP = "skip"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing one line.

    ``fields`` holds the (given-name, surname, email) candidate when status is
    OK, and the raw split fields when status is MALFORMED, for diagnostics.
    """

    status: ParseStatus
    fields: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.status is ParseStatus.OK


def parse_line(line: str) -> ParseResult:
    """Parse a raw line into a candidate, a skip, or a malformed outcome."""
    text = line.strip()
    if not text:
        return ParseResult(ParseStatus.SKIP)

    fields = tuple(text.split(DELIMITER))
    if len(fields) != FIELD_COUNT:
        return ParseResult(ParseStatus.MALFORMED, fields)
    return ParseResult(ParseStatus.OK, fields)
