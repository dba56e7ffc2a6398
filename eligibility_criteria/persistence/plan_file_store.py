import json
from pathlib import Path
from typing import Dict, List, Union

from eligibility_criteria.errors import PlanNotFoundError, RepositoryError
from eligibility_criteria.logging_config import get_logger
from eligibility_criteria.storage.models import BenefitPlan


logger = get_logger(__name__)


# ==============================================
# PlanFileStore
# ==============================================
#
# PURPOSE:
#   Keep benefit plan snapshots in a single JSON file so criteria can
#   be inspected and edited offline (CLI, fixtures, exports).
#
# FILE STRUCTURE:
# ---------------
#   benefit_plans.json
#   {
#     "<plan id>": {
#       "extension": "<json_ext string or null>",
#       "attributes": {"code": "...", "name": "..."}
#     }
#   }
#
#   json_ext stays a STRING inside the file, exactly as the database
#   column holds it, so round trips never reformat it.
#
# CLASS: PlanFileStore
# --------------------
#   Stateful - holds the path of the plans file.
#
#   Constructor:
#   ------------
#   - __init__(path: str = "data/benefit_plans.json")
#       Create the parent directory if it doesn't exist.
#
class PlanFileStore:
    """
    File-backed repository of BenefitPlan snapshots.

    A missing file is an empty store; it is created on first put().
    """

    def __init__(self, path: Union[str, Path] = "data/benefit_plans.json"):
        """
        Initialize the plan store.

        Args:
            path: JSON file holding the plans
        """
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
#   Methods:
#   --------
#   READING:
#   - get(plan_id) -> BenefitPlan          (PlanNotFoundError if absent)
#   - all() -> dict[str, BenefitPlan]
#   - list_ids() -> list[str]
#
    def get(self, plan_id: str) -> BenefitPlan:
        """
        Load one benefit plan.

        Args:
            plan_id: Plan id as stored in the file

        Returns:
            BenefitPlan snapshot

        Raises:
            PlanNotFoundError: If the file has no such plan
        """
        plans = self._read()
        if plan_id not in plans:
            raise PlanNotFoundError(plan_id)
        return BenefitPlan.from_dict(plan_id, plans[plan_id])

    def all(self) -> Dict[str, BenefitPlan]:
        return {
            plan_id: BenefitPlan.from_dict(plan_id, data)
            for plan_id, data in self._read().items()
        }

    def list_ids(self) -> List[str]:
        return list(self._read())
#   WRITING:
#   - put(plan) -> None
#       Insert or replace one plan, keeping the order of the others.
#   - put_all(plans) -> None
#
    def put(self, plan: BenefitPlan) -> None:
        """
        Save one benefit plan to disk.

        Args:
            plan: Snapshot to store
        """
        plans = self._read()
        plans[plan.id] = plan.to_dict()
        self._write(plans)
        logger.debug("plan_saved", plan_id=plan.id, path=str(self.path))

    def put_all(self, plans: List[BenefitPlan]) -> None:
        stored = self._read()
        for plan in plans:
            stored[plan.id] = plan.to_dict()
        self._write(stored)
        logger.info("plans_saved", count=len(plans), path=str(self.path))
#   UTILITY:
#   - exists() -> bool
#   - clear() -> None
#
    def exists(self) -> bool:
        return self.path.exists()

    def clear(self) -> None:
        """
        Delete the plans file (for testing or reset).
        """
        if self.path.exists():
            self.path.unlink()
            logger.info("plans_file_deleted", path=str(self.path))

    def _read(self) -> Dict[str, dict]:
        if not self.path.exists():
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                plans = json.load(f)
        except (OSError, ValueError) as e:
            raise RepositoryError(f"Cannot read plans file {self.path}", {"error": str(e)}) from e

        if not isinstance(plans, dict):
            raise RepositoryError(f"Plans file {self.path} must hold a JSON object")
        return plans

    def _write(self, plans: Dict[str, dict]) -> None:
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(plans, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise RepositoryError(f"Cannot write plans file {self.path}", {"error": str(e)}) from e
