"""Merge called and uncalled mutations into one grouped view.

ARCHITECTURE:
    called + uncalled → concat_mutations → group_mutations → list of groups

Called records always precede uncalled ones, so the first member of a group
comes from the called set whenever the event was called at all.
"""

from typing import Sequence

from oncomerge.grouping import group_mutations
from oncomerge.models.collection import MutationCollection
from oncomerge.models.mutation import Mutation

MutationSource = MutationCollection | Sequence[Mutation]


def mutation_records(source: MutationSource) -> Sequence[Mutation]:
    """Records of a collection, or the sequence itself."""
    if isinstance(source, MutationCollection):
        return source.result
    return source


def concat_mutations(called: MutationSource, uncalled: MutationSource) -> list[Mutation]:
    """Return a new flat list: called records first, then uncalled records."""
    return [*mutation_records(called), *mutation_records(uncalled)]


def merge_mutations_including_uncalled(
    called: MutationSource,
    uncalled: MutationSource,
) -> list[list[Mutation]]:
    """Group called and uncalled mutations by gene-scoped identity.

    Both collections must already be loaded; see `ensure_complete`. An empty
    collection on either side simply yields the grouping of the other.

    Args:
        called: Called mutations (collection or plain sequence)
        uncalled: Uncalled mutations (collection or plain sequence)

    Returns:
        Groups of mutations representing the same event in the same gene

    Raises:
        InvalidRecordError: If any record cannot be identified
    """
    return group_mutations(concat_mutations(called, uncalled))
