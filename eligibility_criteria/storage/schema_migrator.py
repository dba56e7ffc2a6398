# ==============================================
# LegacySchemaMigrator
# ==============================================
#
# PURPOSE:
#   Normalize every historical shape of `advanced_criteria` into the
#   current status-keyed shape.
#
# WHY THIS CLASS EXISTS:
#   Criteria used to be stored as one flat list per benefit plan:
#
#       {"advanced_criteria": ["age__gt__int=18"]}
#
#   They are now partitioned by beneficiary status:
#
#       {"advanced_criteria": {"POTENTIAL": ["age__gt__int=18"]}}
#
#   Plans written before the change still exist, so every read goes
#   through this class. The flat list belongs to the default status,
#   the only status that existed before partitioning.
#
# SHAPES (tagged variant, resolved once by classify()):
# -------
#   ABSENT       → key missing / null           → {}
#   LEGACY       → list                         → {default_status: list}
#   PARTITIONED  → dict                         → copy of dict
#   MALFORMED    → anything else                → {}
#
#   Migration never raises. Individual criteria are NOT decoded here.
#
# CLASS: LegacySchemaMigrator
# ---------------------------
#   Methods:
#   --------
#   - classify(value) -> CriteriaShape
#   - normalize(value) -> dict[str, list]
#   - migrate_document(document: dict) -> MigrationResult
#       Rewrite a whole json_ext document into the current shape.
#
# ==============================================

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List

from eligibility_criteria.config import DEFAULT_STATUS
from eligibility_criteria.logging_config import get_logger


ADVANCED_CRITERIA_KEY = "advanced_criteria"

logger = get_logger(__name__)


class CriteriaShape(Enum):
    """Which representation `advanced_criteria` was found in."""
    ABSENT = "absent"
    LEGACY = "legacy"
    PARTITIONED = "partitioned"
    MALFORMED = "malformed"


@dataclass
class MigrationResult:
    """Outcome of migrating one json_ext document."""
    shape: CriteriaShape
    document: Dict[str, Any]
    migrated: bool = False
    statuses: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for reporting."""
        return {
            "shape": self.shape.value,
            "migrated": self.migrated,
            "statuses": self.statuses
        }


class LegacySchemaMigrator:
    """Brings `advanced_criteria` into the status-partitioned shape."""

    def __init__(self, default_status: str = DEFAULT_STATUS):
        """
        Args:
            default_status: Status that owns criteria stored in the legacy list shape
        """
        self.default_status = default_status

    def classify(self, value: Any) -> CriteriaShape:
        if value is None:
            return CriteriaShape.ABSENT
        if isinstance(value, list):
            return CriteriaShape.LEGACY
        if isinstance(value, dict):
            return CriteriaShape.PARTITIONED
        return CriteriaShape.MALFORMED

    def normalize(self, value: Any) -> Dict[str, Any]:
        """
        Return the status -> bucket mapping for a raw `advanced_criteria` value.

        Args:
            value: Whatever was stored under `advanced_criteria`

        Returns:
            A new dict; never the input object itself
        """
        shape = self.classify(value)

        if shape is CriteriaShape.LEGACY:
            # An empty legacy list carries nothing worth a status key
            if not value:
                return {}
            return {self.default_status: list(value)}
        if shape is CriteriaShape.PARTITIONED:
            return dict(value)
        if shape is CriteriaShape.MALFORMED:
            logger.warning(
                "malformed_advanced_criteria",
                value_type=type(value).__name__
            )
        return {}

    def migrate_document(self, document: Dict[str, Any]) -> MigrationResult:
        """
        Rewrite a legacy document into the current shape.

        Other keys keep their position. Documents that are already
        partitioned (or carry no criteria) are returned untouched.

        Args:
            document: Parsed json_ext

        Returns:
            MigrationResult; `document` is a new dict when migrated
        """
        value = document.get(ADVANCED_CRITERIA_KEY)
        shape = self.classify(value)

        if shape is CriteriaShape.ABSENT:
            return MigrationResult(shape=shape, document=document)

        if shape is CriteriaShape.PARTITIONED:
            return MigrationResult(shape=shape, document=document, statuses=list(value))

        mapping = self.normalize(value)

        migrated = dict(document)
        migrated[ADVANCED_CRITERIA_KEY] = mapping
        return MigrationResult(
            shape=shape,
            document=migrated,
            migrated=True,
            statuses=list(mapping)
        )
