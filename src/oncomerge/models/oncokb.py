"""OncoKB annotation payloads."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class OncoKbQuery(BaseModel):
    """One protein-change annotation query sent to OncoKB."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    hugo_symbol: str = Field(..., alias="hugoSymbol")
    alteration: str
    tumor_type: str = Field(..., alias="tumorType")

    def to_request(self) -> dict[str, Any]:
        """Serialise to the OncoKB request body shape."""
        return {
            "id": self.id,
            "gene": {"hugoSymbol": self.hugo_symbol},
            "alteration": self.alteration,
            "tumorType": self.tumor_type,
        }


class OncoKbData(BaseModel):
    """Annotation results keyed by query id, plus the tumor map used to build them."""

    sample_to_tumor_map: dict[str, str] = Field(default_factory=dict)
    indicator_map: dict[str, dict[str, Any]] = Field(default_factory=dict)
