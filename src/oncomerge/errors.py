"""Exception hierarchy for OncoMerge."""


class OncoMergeError(Exception):
    """Base class for all OncoMerge errors."""

    pass


class InvalidRecordError(OncoMergeError, ValueError):
    """Raised when a mutation lacks a field needed to compute its identity.

    Grouping aborts on the first invalid record instead of skipping it, so a
    partial result never hides a missed duplicate.
    """

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class UnresolvedCollectionError(OncoMergeError):
    """Raised when a mutation collection is still pending or failed to load."""

    pass


class EnrichmentFetchError(OncoMergeError):
    """Raised when an enrichment lookup (COSMIC counts, OncoKB) fails."""

    pass
