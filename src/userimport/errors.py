"""Exception hierarchy for the user importer.

Everything here is fatal to a run. Per-record problems are reported as
outcome values by the parser and validator, never raised.
"""


class UserImportError(Exception):
    """Base exception for all importer failures."""


class ConfigError(UserImportError):
    """Raised for invalid command-line flags or environment values."""


class SourceFileError(UserImportError):
    """Raised when the source file or its header cannot be read."""


class StoreError(UserImportError):
    """Raised for any database driver failure."""


class StoreConnectionError(StoreError):
    """Raised when the database connection cannot be opened."""


class SchemaError(UserImportError):
    """Raised when the users table cannot be provisioned."""
