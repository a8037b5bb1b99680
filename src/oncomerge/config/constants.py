"""Shared constants for OncoMerge.

Endpoints, timeouts and identity key settings used across the package.
"""

# =============================================================================
# IDENTITY KEYS
# =============================================================================

# ASCII unit separator; field values containing it are rejected so joined
# identity keys cannot collide.
IDENTITY_DELIMITER = "\x1f"

# Fields that make a mutation positional. All five must be present for the
# positional identity rule to apply.
POSITIONAL_FIELDS: tuple[str, ...] = (
    "chromosome",
    "start_position",
    "end_position",
    "reference_allele",
    "variant_allele",
)


# =============================================================================
# CBIOPORTAL
# =============================================================================

CBIOPORTAL_API_URL = "https://www.cbioportal.org/api"
CBIOPORTAL_API_URL_ENV_VAR = "CBIOPORTAL_API_URL"
CBIOPORTAL_TIMEOUT = 30.0

# Molecular profile naming in cBioPortal studies
CALLED_PROFILE_SUFFIX = "_mutations"
UNCALLED_PROFILE_SUFFIX = "_mutations_uncalled"


# =============================================================================
# ONCOKB
# =============================================================================

ONCOKB_API_URL = "https://www.oncokb.org/api/v1"
ONCOKB_API_TOKEN_ENV_VAR = "ONCOKB_API_TOKEN"
ONCOKB_TIMEOUT = 30.0

# Tumor type sent to OncoKB when the sample has no known cancer type
DEFAULT_TUMOR_TYPE = "Cancer of Unknown Primary"


# =============================================================================
# RETRIES
# =============================================================================

MAX_RETRIES = 3
RETRY_WAIT_MIN = 2
RETRY_WAIT_MAX = 10
