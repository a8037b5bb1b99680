"""Resolved mutation collections.

A `MutationCollection` is the boundary between asynchronous fetching and the
merge engine: it records whether a fetch completed, failed or is still
pending, and carries the fetched records. The merge engine only ever reads
`result`; resolving pending or failed collections is the caller's job.
"""

from enum import Enum
from typing import Iterable

from pydantic import BaseModel, Field

from oncomerge.errors import UnresolvedCollectionError
from oncomerge.models.mutation import Mutation


class CollectionStatus(str, Enum):
    """Lifecycle state of a fetched collection."""

    PENDING = "pending"
    COMPLETE = "complete"
    ERROR = "error"


class MutationCollection(BaseModel):
    """A fetched list of mutations plus its load state."""

    status: CollectionStatus = CollectionStatus.COMPLETE
    result: list[Mutation] = Field(default_factory=list)
    error: str | None = Field(None, description="Error message when status is ERROR")

    @property
    def is_pending(self) -> bool:
        return self.status == CollectionStatus.PENDING

    @property
    def is_complete(self) -> bool:
        return self.status == CollectionStatus.COMPLETE

    @property
    def is_error(self) -> bool:
        return self.status == CollectionStatus.ERROR

    @classmethod
    def complete(cls, records: Iterable[Mutation] = ()) -> "MutationCollection":
        return cls(status=CollectionStatus.COMPLETE, result=list(records))

    @classmethod
    def pending(cls) -> "MutationCollection":
        return cls(status=CollectionStatus.PENDING)

    @classmethod
    def errored(cls, exc: BaseException | str) -> "MutationCollection":
        return cls(status=CollectionStatus.ERROR, error=str(exc))

    def __len__(self) -> int:
        return len(self.result)


def ensure_complete(*collections: MutationCollection) -> None:
    """Check that every collection has finished loading.

    Raises:
        UnresolvedCollectionError: If any collection is pending or failed
    """
    for index, collection in enumerate(collections):
        if collection.is_pending:
            raise UnresolvedCollectionError(f"Collection {index} is still pending")
        if collection.is_error:
            raise UnresolvedCollectionError(
                f"Collection {index} failed to load: {collection.error}"
            )
