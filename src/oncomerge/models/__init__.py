"""Data models for OncoMerge."""

from oncomerge.models.collection import CollectionStatus, MutationCollection, ensure_complete
from oncomerge.models.cosmic import CosmicCount
from oncomerge.models.mutation import DescriptiveVariant, Mutation, PositionalVariant, Variant
from oncomerge.models.oncokb import OncoKbData, OncoKbQuery
from oncomerge.models.study import CancerStudy, CancerType

__all__ = [
    "Mutation",
    "PositionalVariant",
    "DescriptiveVariant",
    "Variant",
    "MutationCollection",
    "CollectionStatus",
    "ensure_complete",
    "CosmicCount",
    "CancerStudy",
    "CancerType",
    "OncoKbData",
    "OncoKbQuery",
]
