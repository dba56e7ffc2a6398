# ==============================================
# FILTERS (platform boundary)
# ==============================================
#
# Modules:
# --------
# - identifiers.py      → GraphQL global id detection / decoding
# - metadata_client.py  → customFilters query params and HTTP client
#
# ==============================================

from .identifiers import decode_id, encode_id, is_base64_encoded, resolve_plan_id
from .metadata_client import FilterMetadataClient, build_custom_filter_params

__all__ = [
    "decode_id",
    "encode_id",
    "is_base64_encoded",
    "resolve_plan_id",
    "FilterMetadataClient",
    "build_custom_filter_params"
]
