"""Single-pass import of a users file into the users table."""

import logging
from pathlib import Path
from typing import BinaryIO, Iterator, TextIO

from userimport.errors import SourceFileError, StoreError
from userimport.ingestion.parser import ParseStatus, parse_line
from userimport.ingestion.report import ImportReport
from userimport.ingestion.schema import (
    USERS_COLUMNS,
    USERS_CONFLICT_COLUMNS,
    USERS_TABLE,
    provision_users_table,
)
from userimport.ingestion.validator import Rejection, UserRecord, normalize_record
from userimport.service import DatabaseService

logger = logging.getLogger(__name__)

SOURCE_ENCODING = "utf-8"


class Importer:
    """Drives one run: provision, skip the header, stream records.

    The service is connected at the start of run() and closed before it
    returns, on every path. With dry_run no service is needed and nothing is
    written; with table_only the body of the file is never read.
    """

    def __init__(
        self,
        path: str | Path | None,
        service: DatabaseService | None = None,
        *,
        table_only: bool = False,
        dry_run: bool = False,
        replace_duplicates: bool = False,
        out: TextIO | None = None,
    ):
        if dry_run and table_only:
            raise ValueError("table_only and dry_run are mutually exclusive")
        if not dry_run and service is None:
            raise ValueError("A database service is required unless dry_run is set")
        if not table_only and path is None:
            raise ValueError("A source path is required unless table_only is set")
        self._path = Path(path) if path is not None else None
        self._service = service
        self._table_only = table_only
        self._dry_run = dry_run
        self._replace_duplicates = replace_duplicates
        self._out = out

    def run(self) -> ImportReport:
        report = ImportReport()
        if self._dry_run:
            self._import_file(report)
            return report

        self._service.connect()
        try:
            provision_users_table(self._service)
            if self._table_only:
                logger.info("Table-only mode: source file not read")
                return report
            self._import_file(report)
        finally:
            self._service.close()
        return report

    def _import_file(self, report: ImportReport) -> None:
        try:
            with open(self._path, "rb") as f:
                for line_no, line in _lines_after_header(f, self._path):
                    report.lines_read += 1
                    self._process_line(line_no, line, report)
        except OSError as e:
            raise SourceFileError(f"Cannot read {self._path}: {e}") from e

        logger.info(
            "Import complete: %d accepted, %d inserted, %d skipped, %d rejected, %d failed",
            report.accepted,
            report.inserted,
            report.skipped,
            report.rejected,
            report.failed,
        )

    def _process_line(self, line_no: int, raw: bytes, report: ImportReport) -> None:
        try:
            line = raw.decode(SOURCE_ENCODING)
        except UnicodeDecodeError as e:
            reason = "invalid encoding"
            logger.warning("Line %d: %s (%s) %r", line_no, reason, e.reason, raw.rstrip(b"\r\n"))
            report.rejected += 1
            report.add_error(line_no, reason)
            return

        parsed = parse_line(line)
        if parsed.status is ParseStatus.SKIP:
            logger.debug("Line %d: blank, skipped", line_no)
            report.skipped += 1
            return
        if parsed.status is ParseStatus.MALFORMED:
            reason = f"malformed record: expected 3 fields, got {len(parsed.fields)}"
            logger.warning("Line %d: %s %s", line_no, reason, list(parsed.fields))
            report.rejected += 1
            report.add_error(line_no, reason)
            return

        outcome = normalize_record(parsed.fields)
        if isinstance(outcome, Rejection):
            logger.warning("Line %d: %s (%s)", line_no, outcome, line.strip())
            report.rejected += 1
            report.add_error(line_no, outcome.reason.value)
            return

        report.accepted += 1
        print(outcome.summary(), file=self._out)
        if not self._dry_run:
            self._persist(line_no, outcome, report)

    def _persist(self, line_no: int, record: UserRecord, report: ImportReport) -> None:
        try:
            with self._service.transaction():
                if self._replace_duplicates:
                    self._service.upsert(
                        USERS_TABLE, USERS_COLUMNS, [record.as_row()], USERS_CONFLICT_COLUMNS
                    )
                else:
                    self._service.insert(USERS_TABLE, USERS_COLUMNS, record.as_row())
        except StoreError as e:
            logger.warning("Line %d: insert failed for %s: %s", line_no, record.email, e)
            report.failed += 1
            report.add_error(line_no, f"insert failed: {e}")
            return
        report.inserted += 1


def _lines_after_header(f: BinaryIO, path: Path) -> Iterator[tuple[int, bytes]]:
    """Discard the header line, then yield (line number, line) pairs."""
    header = f.readline()
    if not header:
        raise SourceFileError(f"No header line in {path}")
    yield from enumerate(f, start=2)
