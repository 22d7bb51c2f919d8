"""Exception hierarchy for component extraction."""


class ExtractionError(RuntimeError):
    """Base exception for unrecoverable extraction failures."""


class DocumentError(ExtractionError):
    """The document cannot hold a component registry (or could not be read)."""


class NameCollisionError(ExtractionError):
    """Two structurally different schemas were given the same canonical name."""

    def __init__(self, name: str, message: str) -> None:
        super().__init__(message)
        self.name = name


class LedgerInconsistencyError(ExtractionError):
    """A known fingerprint has no usage ledger entry."""


class FingerprintCollisionError(ExtractionError):
    """Two different canonical serializations hashed to the same fingerprint."""
