"""Study metadata lookups."""

from typing import Any, Iterable

from oncomerge.config.debug import get_logger
from oncomerge.models.study import CancerStudy

logger = get_logger(__name__)


def make_study_to_cancer_type_map(
    studies: Iterable[CancerStudy | dict[str, Any]],
) -> dict[str, str]:
    """Map study id to cancer type name.

    Later studies with a repeated id overwrite earlier ones; a later study
    without a cancer type removes the earlier mapping. Raw dicts in
    cBioPortal's JSON shape are accepted as well as CancerStudy models.
    """
    study_map: dict[str, str] = {}
    for study in studies:
        if not isinstance(study, CancerStudy):
            study = CancerStudy.model_validate(study)
        if study.cancer_type is None:
            logger.debug(f"Study {study.study_id} has no cancer type, skipping")
            study_map.pop(study.study_id, None)
            continue
        study_map[study.study_id] = study.cancer_type.name
    return study_map
