# ==============================================
# CriteriaStore
# ==============================================
#
# PURPOSE:
#   Own the status -> criteria mapping stored under `advanced_criteria`
#   in a benefit plan's json_ext, and merge edited buckets back into it.
#
# WHY THIS CLASS EXISTS:
#   json_ext is shared: other modules keep their own keys next to
#   `advanced_criteria`. The store must therefore
#     1. never touch, drop or reorder sibling keys,
#     2. always re-read json_ext from the snapshot it is given (a cached
#        parse could overwrite someone else's concurrent edit),
#     3. return the SAME snapshot when nothing changed, so a caller that
#        reloads on every snapshot change does not loop forever.
#
# CLASS: CriteriaStore
# --------------------
#   Holds no mutable state. All state lives in the BenefitPlan
#   snapshots passed in and returned.
#
#   Methods:
#   --------
#   - load(plan, status) -> LoadResult
#       Never raises; malformed json_ext reads as empty.
#
#   - save(plan, status, bucket) -> BenefitPlan
#       1. parse json_ext fresh
#       2. migrate `advanced_criteria`
#       3. mapping[status] = bucket
#       4. drop mapping[status] if bucket is empty or its FIRST
#          criterion has no field (the "add filter" placeholder)
#       5. unchanged document → same plan object
#       6. otherwise → new snapshot with serialized json_ext
#       Raises MalformedCriterionError only when step 4 has to decode
#       a malformed first criterion.
#
#   - criteria_by_status(plan) -> dict[str, list[FilterCriterion]]
#
# ==============================================

from typing import Any, Dict, List, Optional, Sequence, Union

from eligibility_criteria.config import DEFAULT_STATUS
from eligibility_criteria.criteria.criterion_codec import CriterionCodec, FilterCriterion
from eligibility_criteria.errors import MalformedCriterionError
from eligibility_criteria.logging_config import get_logger
from eligibility_criteria.storage.extension_document import parse_extension, serialize_document
from eligibility_criteria.storage.models import BenefitPlan, LoadResult
from eligibility_criteria.storage.schema_migrator import ADVANCED_CRITERIA_KEY, LegacySchemaMigrator


logger = get_logger(__name__)

BucketEntry = Union[FilterCriterion, str]


class CriteriaStore:
    """Reads and writes status-partitioned criteria in a plan's json_ext."""

    def __init__(
        self,
        default_status: str = DEFAULT_STATUS,
        migrator: Optional[LegacySchemaMigrator] = None,
        codec: Optional[CriterionCodec] = None
    ):
        """
        Args:
            default_status: Status that owns legacy (unpartitioned) criteria
            migrator: Schema migrator; built from default_status if omitted
            codec: Criterion codec
        """
        self._migrator = migrator or LegacySchemaMigrator(default_status)
        self._codec = codec or CriterionCodec()

    @property
    def default_status(self) -> str:
        return self._migrator.default_status

    def load(self, plan: BenefitPlan, status: Optional[str]) -> LoadResult:
        """
        Read the criteria bucket of one status.

        Args:
            plan: Benefit plan snapshot
            status: Active status key; None yields an empty bucket

        Returns:
            LoadResult with the parsed document and the (possibly empty) bucket
        """
        document = parse_extension(plan.extension)
        mapping = self._migrator.normalize(document.get(ADVANCED_CRITERIA_KEY))

        if status is None:
            return LoadResult(document=document, bucket=[])

        bucket = self._to_bucket(mapping.get(status), status)
        return LoadResult(document=document, bucket=bucket)

    def criteria_by_status(self, plan: BenefitPlan) -> Dict[str, List[FilterCriterion]]:
        """All buckets of a plan, keyed by status."""
        document = parse_extension(plan.extension)
        mapping = self._migrator.normalize(document.get(ADVANCED_CRITERIA_KEY))
        return {
            status: self._to_bucket(stored, status)
            for status, stored in mapping.items()
        }

    def save(self, plan: BenefitPlan, status: str, bucket: Sequence[BucketEntry]) -> BenefitPlan:
        """
        Merge a bucket into the plan's json_ext.

        Args:
            plan: Latest benefit plan snapshot (re-parsed, never cached)
            status: Status key the bucket belongs to
            bucket: Ordered criteria

        Returns:
            `plan` itself when the document is unchanged, else a new snapshot

        Raises:
            MalformedCriterionError: If the first criterion must be decoded and is malformed
        """
        criteria = [self._as_criterion(entry) for entry in bucket]

        original = parse_extension(plan.extension)
        mapping = self._migrator.normalize(original.get(ADVANCED_CRITERIA_KEY))

        if self._is_cleared(criteria):
            mapping.pop(status, None)
        else:
            mapping[status] = [criterion.raw for criterion in criteria]

        document = dict(original)
        # Do not introduce an empty `advanced_criteria` into a plan that never had one
        if mapping or ADVANCED_CRITERIA_KEY in original:
            document[ADVANCED_CRITERIA_KEY] = mapping

        if document == original:
            return plan

        logger.debug(
            "criteria_saved",
            plan_id=plan.id,
            status=status,
            criteria_count=len(mapping.get(status, []))
        )
        return plan.with_extension(serialize_document(document))

    def _is_cleared(self, criteria: List[FilterCriterion]) -> bool:
        # Only the first criterion is inspected
        if not criteria:
            return True
        return not criteria[0].decoded().field

    def _as_criterion(self, entry: Any) -> FilterCriterion:
        if isinstance(entry, FilterCriterion):
            return entry
        criterion = self._codec.from_stored(entry)
        if criterion is None:
            raise MalformedCriterionError(entry, "unsupported criterion entry")
        return criterion

    def _to_bucket(self, stored: Any, status: str) -> List[FilterCriterion]:
        if stored is None:
            return []
        if not isinstance(stored, list):
            logger.warning("criteria_bucket_not_a_list", status=status, value_type=type(stored).__name__)
            return []

        bucket = []
        for position, entry in enumerate(stored):
            criterion = self._codec.from_stored(entry)
            if criterion is None:
                logger.warning("unreadable_criterion_skipped", status=status, position=position)
                continue
            bucket.append(criterion)
        return bucket
