"""Cancer study metadata models."""

from pydantic import BaseModel, ConfigDict, Field


class CancerType(BaseModel):
    """OncoTree cancer type attached to a study."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    cancer_type_id: str | None = Field(None, alias="cancerTypeId")


class CancerStudy(BaseModel):
    """A cBioPortal study, e.g. "skcm_tcga_pan_can_atlas_2018"."""

    model_config = ConfigDict(populate_by_name=True)

    study_id: str = Field(..., alias="studyId")
    name: str | None = None
    cancer_type: CancerType | None = Field(None, alias="cancerType")
