"""Structured result of an import run."""

from dataclasses import dataclass, field


@dataclass
class ImportReport:
    lines_read: int = 0
    accepted: int = 0
    inserted: int = 0
    skipped: int = 0
    rejected: int = 0
    failed: int = 0
    errors: list[dict] = field(default_factory=list)  # [{line, reason}]

    def add_error(self, line: int, reason: str) -> None:
        self.errors.append({"line": line, "reason": reason})

    def to_dict(self) -> dict:
        return {
            "lines_read": self.lines_read,
            "accepted": self.accepted,
            "inserted": self.inserted,
            "skipped": self.skipped,
            "rejected": self.rejected,
            "failed": self.failed,
            "errors": self.errors,
        }
