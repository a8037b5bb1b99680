"""Group mutation records into equivalence classes."""

from typing import Callable, Hashable, Iterable, TypeVar

from oncomerge.config.debug import get_logger
from oncomerge.identity import generate_mutation_id_by_gene_and_protein_change_and_event
from oncomerge.models.mutation import Mutation

logger = get_logger(__name__)

T = TypeVar("T")


def group_mutations_by(
    items: Iterable[T],
    key_fn: Callable[[T], Hashable],
) -> list[list[T]]:
    """Bucket items by key, keeping first-seen group order and input order within groups.

    Keys are computed for every item before any group is built, so a key
    error aborts the whole call without a partial result.
    """
    keyed = [(key_fn(item), item) for item in items]

    index: dict[Hashable, int] = {}
    groups: list[list[T]] = []
    for key, item in keyed:
        position = index.get(key)
        if position is None:
            index[key] = len(groups)
            groups.append([item])
        else:
            groups[position].append(item)
    return groups


def group_mutations(mutations: Iterable[Mutation]) -> list[list[Mutation]]:
    """Group mutations that share a gene-scoped identity.

    Args:
        mutations: Mutation records in input order

    Returns:
        One list per distinct gene-scoped id, in order of first appearance

    Raises:
        InvalidRecordError: If any record lacks a gene symbol or protein change
    """
    groups = group_mutations_by(mutations, generate_mutation_id_by_gene_and_protein_change_and_event)
    logger.debug(
        f"Grouped {sum(len(g) for g in groups)} mutations into {len(groups)} groups"
    )
    return groups
