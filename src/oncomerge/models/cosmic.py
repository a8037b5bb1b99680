from pydantic import BaseModel, ConfigDict, Field


class CosmicCount(BaseModel):
    """Occurrence count for a COSMIC mutation matched by keyword."""

    model_config = ConfigDict(populate_by_name=True)

    cosmic_mutation_id: str | None = Field(None, alias="cosmicMutationId")
    count: int = 0
    keyword: str | None = None
    protein_change: str | None = Field(None, alias="proteinChange")
    hugo_gene_symbol: str | None = Field(None, alias="hugoGeneSymbol")
