"""Pytest configuration and fixtures."""

import pytest

from oncomerge.models.collection import MutationCollection
from oncomerge.models.mutation import Mutation


@pytest.fixture
def fusions():
    """Fusion calls: two partners of one fusion plus an unrelated fusion."""
    return [
        # fusion for ERG
        Mutation.model_validate({"gene": {"hugoGeneSymbol": "ERG"}, "proteinChange": "TMPRSS2-ERG fusion"}),
        # same fusion for TMPRSS2
        Mutation.model_validate({"gene": {"hugoGeneSymbol": "TMPRSS2"}, "proteinChange": "TMPRSS2-ERG fusion"}),
        # different fusion
        Mutation.model_validate({"gene": {"hugoGeneSymbol": "FOXP1"}, "proteinChange": "FOXP1-intragenic"}),
    ]


@pytest.fixture
def point_mutations():
    """Two TP53 calls of the same event plus one PTEN call."""
    return [
        Mutation.model_validate({
            "gene": {"chromosome": "X", "hugoGeneSymbol": "TP53"},
            "proteinChange": "mutated",
            "startPosition": 100,
            "endPosition": 100,
            "referenceAllele": "A",
            "variantAllele": "T",
        }),
        # another call with the same mutation event
        Mutation.model_validate({
            "gene": {"chromosome": "X", "hugoGeneSymbol": "TP53"},
            "proteinChange": "mutated",
            "startPosition": 100,
            "endPosition": 100,
            "referenceAllele": "A",
            "variantAllele": "T",
        }),
        # different mutation event
        Mutation.model_validate({
            "gene": {"chromosome": "Y", "hugoGeneSymbol": "PTEN"},
            "proteinChange": "mutated",
            "startPosition": 111,
            "endPosition": 112,
            "referenceAllele": "T",
            "variantAllele": "A",
        }),
    ]


@pytest.fixture
def empty_collection():
    """Loaded collection with no records."""
    return MutationCollection.complete()


@pytest.fixture
def collection_without_keywords():
    """Loaded collection whose records carry no keyword."""
    return MutationCollection.complete([Mutation(), Mutation()])


@pytest.fixture
def collection_with_keywords():
    """Loaded collection with one keyword-bearing record."""
    return MutationCollection.complete([Mutation(keyword="one")])


@pytest.fixture
def sample_mutation_json():
    """A cBioPortal mutation as returned by the DETAILED projection."""
    return {
        "uniqueSampleKey": "VENHQS1BMi1BMDRQOmJyY2FfdGNnYQ",
        "molecularProfileId": "brca_tcga_mutations",
        "sampleId": "TCGA-A2-A04P-01",
        "patientId": "TCGA-A2-A04P",
        "entrezGeneId": 673,
        "studyId": "brca_tcga",
        "chr": "7",
        "startPosition": 140453136,
        "endPosition": 140453136,
        "referenceAllele": "A",
        "variantAllele": "T",
        "proteinChange": "V600E",
        "mutationType": "Missense_Mutation",
        "mutationStatus": "Somatic",
        "keyword": "BRAF V600 missense",
        "gene": {"entrezGeneId": 673, "hugoGeneSymbol": "BRAF", "type": "protein-coding"},
    }
