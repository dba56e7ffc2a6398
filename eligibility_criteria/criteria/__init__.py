# ==============================================
# TOPIC 1: CRITERIA
# ==============================================
#
# This package handles single filter criteria and the ordered
# buckets they live in.
#
# Modules:
# --------
# - criterion_codec.py    → field__comparator__type=value <-> FilterCriterion
# - collection_editor.py  → append / clear / replace / remove on a bucket
#
# ==============================================

from .criterion_codec import CLEARED_CRITERION, CriterionCodec, FilterCriterion
from .collection_editor import CriteriaCollectionEditor

__all__ = [
    "CLEARED_CRITERION",
    "CriterionCodec",
    "FilterCriterion",
    "CriteriaCollectionEditor"
]
