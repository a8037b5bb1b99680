"""API clients for external data sources."""

from oncomerge.api.cbioportal import CBioPortalClient, CBioPortalError, load_collection
from oncomerge.api.oncokb import OncoKbAPIError, OncoKbClient

__all__ = ["CBioPortalClient", "CBioPortalError", "load_collection", "OncoKbClient", "OncoKbAPIError"]
