# ==============================================
# Errors
# ==============================================
#
# PURPOSE:
#   One exception hierarchy for the whole package. Every error carries
#   a machine readable code, a message and a details dict so the CLI
#   and callers can report them uniformly.
#
# RULES:
# ------
#   - Anomalies in PERSISTED data never raise (they degrade to empty).
#   - Anomalies in CALLER-CONSTRUCTED data raise one of these.
#   - Library errors (pymysql, requests, OSError) are wrapped with
#     `raise ... from err` so the original cause is kept.
#
# ==============================================

from typing import Any, Dict, Optional


class CriteriaStoreError(Exception):
    """Base exception for the eligibility criteria store."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for reporting."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


class MalformedCriterionError(CriteriaStoreError, ValueError):
    """A composite criterion string does not match field__comparator__type=value."""

    def __init__(self, raw: Any, reason: str):
        super().__init__(
            "MALFORMED_CRITERION",
            f"Malformed criterion {raw!r}: {reason}",
            {"raw": raw, "reason": reason}
        )
        self.raw = raw


class IndexOutOfRangeError(CriteriaStoreError, IndexError):
    """An edit addressed a position outside the bucket."""

    def __init__(self, index: int, size: int):
        super().__init__(
            "INDEX_OUT_OF_RANGE",
            f"Criterion index {index} out of range for bucket of size {size}",
            {"index": index, "size": size}
        )
        self.index = index
        self.size = size


class ConfigurationError(CriteriaStoreError):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("CONFIGURATION_ERROR", message, details)


class RepositoryError(CriteriaStoreError):
    """Reading or writing benefit plans failed."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("REPOSITORY_ERROR", message, details)


class PlanNotFoundError(RepositoryError):
    def __init__(self, plan_id: str):
        super().__init__(f"Benefit plan {plan_id!r} not found", {"plan_id": plan_id})
        self.code = "PLAN_NOT_FOUND"
        self.plan_id = plan_id


class FilterMetadataError(CriteriaStoreError):
    """The custom filter metadata service failed or returned errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("FILTER_METADATA_ERROR", message, details)
