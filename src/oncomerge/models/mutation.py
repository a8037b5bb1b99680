"""Mutation record models.

A cBioPortal mutation comes in two shapes:
- Point mutations carry full positional data (chromosome, start/end, alleles)
  plus a short protein change such as "V600E".
- Structural fusions carry only a gene symbol and a descriptive protein change
  such as "TMPRSS2-ERG fusion".

`Mutation` parses either shape from cBioPortal JSON. `to_variant()` turns it
into one of two explicit variant kinds, each of which knows its own identity
parts, so identity derivation never has to null-check fields one by one.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from oncomerge.config.constants import IDENTITY_DELIMITER, POSITIONAL_FIELDS
from oncomerge.errors import InvalidRecordError


VariantKind = Literal["positional", "descriptive"]


def _checked(value: str, field: str) -> str:
    if IDENTITY_DELIMITER in value:
        raise InvalidRecordError(
            f"Field '{field}' contains the reserved identity delimiter: {value!r}",
            field=field,
        )
    return value


@dataclass(frozen=True)
class PositionalVariant:
    """A point mutation located by genomic coordinates and alleles."""

    chromosome: str
    start_position: int
    end_position: int
    reference_allele: str
    variant_allele: str
    protein_change: str

    kind: ClassVar[VariantKind] = "positional"

    def identity_parts(self) -> tuple[str, ...]:
        return (
            _checked(self.chromosome, "chromosome"),
            str(self.start_position),
            str(self.end_position),
            _checked(self.reference_allele, "reference_allele"),
            _checked(self.variant_allele, "variant_allele"),
            _checked(self.protein_change, "protein_change"),
        )


@dataclass(frozen=True)
class DescriptiveVariant:
    """A fusion-like event identified only by its protein change string."""

    protein_change: str

    kind: ClassVar[VariantKind] = "descriptive"

    def identity_parts(self) -> tuple[str, ...]:
        return (_checked(self.protein_change, "protein_change"),)


Variant = PositionalVariant | DescriptiveVariant


class Mutation(BaseModel):
    """One reported mutation or fusion call.

    Field names follow Python conventions; the camelCase cBioPortal names are
    accepted as aliases. Only `gene_symbol` and `protein_change` are needed for
    identity; the remaining fields are optional and their absence is
    meaningful (fusions have no coordinates).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    gene_symbol: str | None = Field(None, alias="hugoGeneSymbol", description="HUGO gene symbol")
    chromosome: str | None = Field(None, alias="chr", description="Chromosome (absent for fusions)")
    start_position: int | None = Field(None, alias="startPosition")
    end_position: int | None = Field(None, alias="endPosition")
    reference_allele: str | None = Field(None, alias="referenceAllele")
    variant_allele: str | None = Field(None, alias="variantAllele")
    protein_change: str | None = Field(
        None, alias="proteinChange", description="Amino-acid change, or event description for fusions"
    )
    keyword: str | None = Field(None, description="COSMIC lookup keyword, e.g. 'BRAF V600 missense'")

    # Provenance and context, carried through but never part of identity
    sample_id: str | None = Field(None, alias="sampleId")
    patient_id: str | None = Field(None, alias="patientId")
    study_id: str | None = Field(None, alias="studyId")
    molecular_profile_id: str | None = Field(None, alias="molecularProfileId")
    entrez_gene_id: int | None = Field(None, alias="entrezGeneId")
    mutation_type: str | None = Field(None, alias="mutationType")
    mutation_status: str | None = Field(None, alias="mutationStatus")

    @model_validator(mode="before")
    @classmethod
    def _lift_nested_gene(cls, data: Any) -> Any:
        """Flatten cBioPortal's nested `gene` object onto the record."""
        if not isinstance(data, dict):
            return data
        gene = data.get("gene")
        if not isinstance(gene, dict):
            return data

        data = {k: v for k, v in data.items() if k != "gene"}
        if data.get("hugoGeneSymbol") is None and data.get("gene_symbol") is None:
            data["hugoGeneSymbol"] = gene.get("hugoGeneSymbol")
        if data.get("chr") is None and data.get("chromosome") is None and gene.get("chromosome"):
            data["chr"] = gene["chromosome"]
        if data.get("entrezGeneId") is None and data.get("entrez_gene_id") is None:
            data["entrezGeneId"] = gene.get("entrezGeneId")
        return data

    @property
    def is_positional(self) -> bool:
        """True if any positional field is set."""
        return any(getattr(self, name) is not None for name in POSITIONAL_FIELDS)

    @property
    def has_keyword(self) -> bool:
        """True if the record carries a non-empty COSMIC keyword."""
        return bool(self.keyword)

    def to_variant(self) -> Variant:
        """Build the explicit variant kind used for identity.

        A record is positional only when all five positional fields are set;
        a partially-located record falls back to the descriptive rule.

        Raises:
            InvalidRecordError: If protein_change is missing or empty
        """
        if not self.protein_change:
            raise InvalidRecordError(
                f"Mutation for gene {self.gene_symbol!r} has no protein change",
                field="protein_change",
            )

        if all(getattr(self, name) is not None for name in POSITIONAL_FIELDS):
            return PositionalVariant(
                chromosome=self.chromosome,
                start_position=self.start_position,
                end_position=self.end_position,
                reference_allele=self.reference_allele,
                variant_allele=self.variant_allele,
                protein_change=self.protein_change,
            )
        return DescriptiveVariant(protein_change=self.protein_change)

    def label(self) -> str:
        """Short human-readable label, e.g. 'BRAF V600E'."""
        return f"{self.gene_symbol or '?'} {self.protein_change or '?'}"
