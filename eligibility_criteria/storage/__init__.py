# ==============================================
# TOPIC 3: STORAGE (json_ext criteria)
# ==============================================
#
# This package reads and writes the `advanced_criteria` key of a
# benefit plan's json_ext.
#
# Modules:
# --------
# - extension_document.py → Forgiving json_ext parse, compact serialize
# - schema_migrator.py    → Legacy list shape -> status-keyed mapping
# - models.py             → BenefitPlan snapshot, LoadResult
# - criteria_store.py     → load / save with change detection
#
# ==============================================

from .models import BenefitPlan, LoadResult
from .schema_migrator import ADVANCED_CRITERIA_KEY, CriteriaShape, LegacySchemaMigrator, MigrationResult
from .criteria_store import CriteriaStore

__all__ = [
    "ADVANCED_CRITERIA_KEY",
    "BenefitPlan",
    "CriteriaShape",
    "CriteriaStore",
    "LegacySchemaMigrator",
    "LoadResult",
    "MigrationResult"
]
