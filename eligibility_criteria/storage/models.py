# ==============================================
# Models (Data Classes)
# ==============================================
#
# PURPOSE:
#   Data classes that flow in and out of the CriteriaStore.
#
# CLASSES:
# --------
# - BenefitPlan (frozen dataclass)
#     Snapshot of the host record. The store never mutates a snapshot;
#     it returns a new one (dataclasses.replace) when json_ext changes.
#
#     Attributes:
#     -----------
#     - id: str                  → Plan id, possibly transport encoded
#     - extension: str | None    → Raw json_ext
#     - attributes: dict         → Other columns (code, name, ...), opaque here
#
#     Methods:
#     --------
#     - with_extension(extension) -> BenefitPlan
#     - to_dict() / from_dict(plan_id, data)
#
# - LoadResult (dataclass)
#     - document: dict           → Parsed json_ext at load time
#     - bucket: list[FilterCriterion] → Criteria of the requested status
#
# ==============================================

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

from eligibility_criteria.criteria.criterion_codec import FilterCriterion


@dataclass(frozen=True)
class BenefitPlan:
    """Immutable snapshot of a benefit plan record."""
    id: str
    extension: Optional[str] = None
    attributes: Dict[str, Any] = field(default_factory=dict, compare=False)

    def with_extension(self, extension: Optional[str]) -> "BenefitPlan":
        """Copy of this snapshot with a new json_ext."""
        return replace(self, extension=extension)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization"""
        return {
            "extension": self.extension,
            "attributes": dict(self.attributes)
        }

    @staticmethod
    def from_dict(plan_id: str, data: dict) -> "BenefitPlan":
        """Create from dictionary (deserialization)"""
        return BenefitPlan(
            id=plan_id,
            extension=data.get("extension"),
            attributes=dict(data.get("attributes") or {})
        )


@dataclass
class LoadResult:
    """What CriteriaStore.load() hands to the editor."""
    document: Dict[str, Any]
    bucket: List[FilterCriterion] = field(default_factory=list)
