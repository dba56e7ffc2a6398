# ==============================================
# FilterMetadataClient
# ==============================================
#
# PURPOSE:
#   Ask the platform which fields and comparators can be used to build
#   criteria for a benefit plan (the `customFilters` GraphQL query).
#
#   The store never interprets the answer: field and comparator names
#   only flow into FilterCriterion as opaque strings.
#
# FUNCTIONS / CLASSES:
# --------------------
# - build_custom_filter_params(module_name, object_type_name,
#                              uuid_of_object=None, additional_params=None)
#       -> list[str]  GraphQL argument fragments.
#       additional_params is JSON encoded TWICE: the GraphQL argument is
#       a string literal whose content is JSON.
#
# - FilterMetadataClient
#     - fetch(params) -> list[dict]
#         [{"type": ..., "code": ..., "possibleFilters": [{field, filter, type}]}]
#
# ==============================================

import json
from typing import Any, Dict, List, Optional

import requests

from eligibility_criteria.config import FilterServiceConfig
from eligibility_criteria.errors import FilterMetadataError
from eligibility_criteria.logging_config import get_logger


logger = get_logger(__name__)

CUSTOM_FILTERS_QUERY = """
{{
  customFilters({params}) {{
    type
    code
    possibleFilters {{
      field
      filter
      type
    }}
  }}
}}
"""


def build_custom_filter_params(
    module_name: str,
    object_type_name: str,
    uuid_of_object: Optional[str] = None,
    additional_params: Optional[Dict[str, Any]] = None
) -> List[str]:
    params = [
        f'moduleName: "{module_name}"',
        f'objectTypeName: "{object_type_name}"',
    ]
    if uuid_of_object:
        params.append(f'uuidOfObject: "{uuid_of_object}"')
    if additional_params:
        params.append(f"additionalParams: {json.dumps(json.dumps(additional_params, separators=(',', ':')))}")
    return params


class FilterMetadataClient:
    """Thin HTTP client for the custom filter metadata service."""

    def __init__(
        self,
        graphql_url: str,
        auth_token: Optional[str] = None,
        timeout_seconds: float = 10.0,
        session: Optional[requests.Session] = None
    ):
        self.graphql_url = graphql_url
        self.auth_token = auth_token
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config: FilterServiceConfig) -> "FilterMetadataClient":
        return cls(
            graphql_url=config.graphql_url,
            auth_token=config.auth_token,
            timeout_seconds=config.timeout_seconds
        )

    def fetch(self, params: List[str]) -> List[Dict[str, Any]]:
        """
        Run the customFilters query.

        Args:
            params: Fragments from build_custom_filter_params()

        Returns:
            List of filter descriptors

        Raises:
            FilterMetadataError: On transport errors or GraphQL errors
        """
        query = CUSTOM_FILTERS_QUERY.format(params=", ".join(params))
        headers = {"Content-Type": "application/json"}
        if self.auth_token:
            headers["Authorization"] = f"Bearer {self.auth_token}"

        try:
            response = self.session.post(
                self.graphql_url,
                json={"query": query},
                headers=headers,
                timeout=self.timeout_seconds
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            raise FilterMetadataError(
                f"Custom filter request to {self.graphql_url} failed",
                {"error": str(e)}
            ) from e
        except ValueError as e:
            raise FilterMetadataError("Custom filter response is not JSON", {"error": str(e)}) from e

        if payload.get("errors"):
            raise FilterMetadataError(
                "Custom filter query returned errors",
                {"errors": payload["errors"]}
            )

        filters = (payload.get("data") or {}).get("customFilters") or []
        logger.debug("custom_filters_fetched", count=len(filters))
        return filters
