# ==============================================
# TOPIC 4: PERSISTENCE (Benefit plan snapshots)
# ==============================================
#
# This package loads benefit plans and persists the new snapshots
# the criteria store returns.
#
# Modules:
# --------
# - plan_file_store.py   → Plans kept in one JSON file (CLI, fixtures)
# - mysql_repository.py  → Plans in the benefit plan table (json_ext column)
#
# ==============================================

from .plan_file_store import PlanFileStore
from .mysql_repository import MySQLPlanRepository

__all__ = ["PlanFileStore", "MySQLPlanRepository"]
