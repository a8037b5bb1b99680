"""OncoMerge - canonical grouping of called and uncalled cancer mutations.

Public API:
    >>> from oncomerge import merge_mutations_including_uncalled
    >>> groups = merge_mutations_including_uncalled(called, uncalled)

Enrichment gates (async, client injected):
    >>> counts = await fetch_cosmic_data(called, uncalled, cbioportal_client)
"""

__version__ = "0.1.0"

from oncomerge.errors import (
    EnrichmentFetchError,
    InvalidRecordError,
    OncoMergeError,
    UnresolvedCollectionError,
)
from oncomerge.gates import fetch_cosmic_data, fetch_oncokb_data
from oncomerge.grouping import group_mutations
from oncomerge.identity import (
    generate_mutation_id_by_event,
    generate_mutation_id_by_gene_and_protein_change_and_event,
)
from oncomerge.merge import concat_mutations, merge_mutations_including_uncalled
from oncomerge.models import CancerStudy, CosmicCount, Mutation, MutationCollection
from oncomerge.studies import make_study_to_cancer_type_map

__all__ = [
    # Version
    "__version__",
    # Identity and grouping
    "generate_mutation_id_by_event",
    "generate_mutation_id_by_gene_and_protein_change_and_event",
    "group_mutations",
    "concat_mutations",
    "merge_mutations_including_uncalled",
    # Gates
    "fetch_cosmic_data",
    "fetch_oncokb_data",
    # Lookups
    "make_study_to_cancer_type_map",
    # Models
    "Mutation",
    "MutationCollection",
    "CosmicCount",
    "CancerStudy",
    # Errors
    "OncoMergeError",
    "InvalidRecordError",
    "UnresolvedCollectionError",
    "EnrichmentFetchError",
]
