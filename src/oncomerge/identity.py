"""Identity keys for mutation records.

Two granularities:
- event id: the physical genomic event, regardless of which gene the record
  was filed under. Point mutations use chromosome, coordinates, alleles and
  protein change; fusions use the protein change string alone.
- gene-scoped id: gene symbol plus event id. This is the grouping key, and it
  keeps the two partner records of one fusion (e.g. ERG and TMPRSS2 for
  "TMPRSS2-ERG fusion") in separate groups.

Missing identity fields raise InvalidRecordError rather than collapsing to an
empty key.
"""

from oncomerge.config.constants import IDENTITY_DELIMITER
from oncomerge.errors import InvalidRecordError
from oncomerge.models.mutation import Mutation


def _join(parts: tuple[str, ...]) -> str:
    return IDENTITY_DELIMITER.join(parts)


def event_identity_parts(mutation: Mutation) -> tuple[str, ...]:
    """Return the ordered fields that identify the mutation's event.

    Raises:
        InvalidRecordError: If protein_change is missing or a field contains
            the identity delimiter
    """
    return mutation.to_variant().identity_parts()


def generate_mutation_id_by_event(mutation: Mutation) -> str:
    """Build the event id for a mutation, ignoring its gene symbol.

    Args:
        mutation: Mutation record

    Returns:
        Delimiter-joined identity string

    Raises:
        InvalidRecordError: If the record cannot be identified
    """
    return _join(event_identity_parts(mutation))


def generate_mutation_id_by_gene_and_protein_change_and_event(mutation: Mutation) -> str:
    """Build the gene-scoped id: gene symbol followed by the event id.

    Raises:
        InvalidRecordError: If gene_symbol or protein_change is missing
    """
    gene = mutation.gene_symbol
    if not gene:
        raise InvalidRecordError(
            f"Mutation {mutation.protein_change!r} has no gene symbol",
            field="gene_symbol",
        )
    if IDENTITY_DELIMITER in gene:
        raise InvalidRecordError(
            f"Field 'gene_symbol' contains the reserved identity delimiter: {gene!r}",
            field="gene_symbol",
        )
    return _join((gene, *event_identity_parts(mutation)))
