# ==============================================
# CriteriaCollectionEditor
# ==============================================
#
# PURPOSE:
#   Pure edits over a criteria bucket. The caller builds the new
#   bucket with these, then hands it to CriteriaStore.save().
#
#   Every method returns a NEW list; the input is never mutated,
#   so a bucket that was just loaded can be compared to the edited
#   one.
#
# ==============================================

from typing import List, Sequence

from eligibility_criteria.criteria.criterion_codec import FilterCriterion
from eligibility_criteria.errors import IndexOutOfRangeError


class CriteriaCollectionEditor:
    """Stateless add / clear / replace / remove operations on a bucket."""

    def append(self, bucket: Sequence[FilterCriterion], criterion: FilterCriterion) -> List[FilterCriterion]:
        """Add a filter at the end."""
        return [*bucket, criterion]

    def clear(self, bucket: Sequence[FilterCriterion]) -> List[FilterCriterion]:
        """Clear all filters."""
        return []

    def replace_at(
        self,
        bucket: Sequence[FilterCriterion],
        index: int,
        criterion: FilterCriterion
    ) -> List[FilterCriterion]:
        """
        Replace the criterion at index.

        Raises:
            IndexOutOfRangeError: If index is not a position in bucket
        """
        self._check_index(bucket, index)
        edited = list(bucket)
        edited[index] = criterion
        return edited

    def remove_at(self, bucket: Sequence[FilterCriterion], index: int) -> List[FilterCriterion]:
        """
        Remove the criterion at index.

        Raises:
            IndexOutOfRangeError: If index is not a position in bucket
        """
        self._check_index(bucket, index)
        return [criterion for position, criterion in enumerate(bucket) if position != index]

    def _check_index(self, bucket: Sequence[FilterCriterion], index: int) -> None:
        # Negative indexes are rejected, not wrapped
        if not 0 <= index < len(bucket):
            raise IndexOutOfRangeError(index, len(bucket))
