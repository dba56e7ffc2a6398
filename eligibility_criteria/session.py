# ==============================================
# EligibilityCriteriaSession - Final Orchestrator
# ==============================================
#
# PURPOSE:
#   This is the MAIN CLASS an editor (web view, CLI) talks to while a
#   user edits the eligibility criteria of ONE benefit plan on ONE tab.
#
# HOW IT CONNECTS THE TOPICS:
#
#   ┌──────────────────────────────────────────────────────────┐
#   │               EligibilityCriteriaSession                 │
#   │                                                          │
#   │  active tab ──► StatusResolver ──► status | None         │
#   │                                      │                   │
#   │  BenefitPlan ──► CriteriaStore.load ─┘──► filters        │
#   │                                           │              │
#   │        add / clear / replace / remove     ▼              │
#   │             CriteriaCollectionEditor ──► filters'        │
#   │                                           │              │
#   │              CriteriaStore.save ◄─────────┘              │
#   │                     │                                    │
#   │         same plan? ─┴─ no ──► on_entity_changed(plan')   │
#   └──────────────────────────────────────────────────────────┘
#
# WHY A SESSION:
#   The two triggers are independent: the status or plan id changes
#   (reload), and the filters change (save). save() always re-reads the
#   plan snapshot the session currently holds, and the callback fires
#   only when a NEW snapshot was produced, so pushing the snapshot
#   back into the session (entity_changed) does not cause another save.
#
# CLASS: EligibilityCriteriaSession
# ---------------------------------
#
#   Constructor:
#   ------------
#   - __init__(plan, active_tab, statuses=None, default_status=None,
#              on_entity_changed=None, store=None, config=None)
#
#   Public Methods:
#   ---------------
#   - add_filter(criterion=None) / clear_filters()
#   - replace_filter(index, criterion) / remove_filter(index)
#   - set_filters(criteria)
#   - sync() -> BenefitPlan
#   - switch_tab(active_tab) -> None
#   - entity_changed(plan) -> None
#   - custom_filter_params() -> list[str]
#
#   Attributes:
#   -----------
#   - plan: BenefitPlan           (latest snapshot)
#   - status: str | None          (resolved from the tab)
#   - filters: list[FilterCriterion]
#
# ==============================================

from typing import Callable, Iterable, List, Optional

from eligibility_criteria.config import AppConfig, get_config
from eligibility_criteria.criteria.collection_editor import CriteriaCollectionEditor
from eligibility_criteria.criteria.criterion_codec import CLEARED_CRITERION, FilterCriterion
from eligibility_criteria.errors import CriteriaStoreError
from eligibility_criteria.filters.identifiers import resolve_plan_id
from eligibility_criteria.filters.metadata_client import build_custom_filter_params
from eligibility_criteria.logging_config import get_logger
from eligibility_criteria.status.status_resolver import StatusResolver
from eligibility_criteria.storage.criteria_store import CriteriaStore
from eligibility_criteria.storage.models import BenefitPlan


logger = get_logger(__name__)

EntityChangedCallback = Callable[[BenefitPlan], None]


class EligibilityCriteriaSession:
    """
    Editing state for the criteria of one benefit plan on one tab.
    """

    def __init__(
        self,
        plan: BenefitPlan,
        active_tab: str,
        statuses: Optional[Iterable[str]] = None,
        default_status: Optional[str] = None,
        on_entity_changed: Optional[EntityChangedCallback] = None,
        store: Optional[CriteriaStore] = None,
        config: Optional[AppConfig] = None
    ):
        """
        Args:
            plan: Benefit plan snapshot being edited
            active_tab: Tab identifier, e.g. "benefitPlanActiveTab"
            statuses: Status enumeration; from config if omitted
            default_status: Owner of legacy criteria; from config if omitted
            on_entity_changed: Called with every new snapshot
            store: CriteriaStore to use; built from default_status if omitted
            config: Application configuration, only read when the
                statuses or default status are not passed in
        """
        if statuses is None or (store is None and default_status is None):
            config = config or get_config()
            if statuses is None:
                statuses = config.status.statuses
            if default_status is None:
                default_status = config.status.default_status

        self._config = config
        self._statuses = tuple(statuses)
        self._store = store or CriteriaStore(default_status)
        self._resolver = StatusResolver()
        self._editor = CriteriaCollectionEditor()
        self._on_entity_changed = on_entity_changed

        self.plan = plan
        self.active_tab = active_tab
        self.status: Optional[str] = None
        self.filters: List[FilterCriterion] = []
        self._resolve_and_load()

    @property
    def visible(self) -> bool:
        """False when the active tab maps to no status (panel hidden)."""
        return self.status is not None

    @property
    def label_key(self) -> str:
        return self._resolver.label_key(self.active_tab)

    # --- edits -------------------------------------------------------

    def add_filter(self, criterion: Optional[FilterCriterion] = None) -> BenefitPlan:
        """Append a criterion (the blank placeholder if none is given)."""
        self._require_visible()
        return self._apply(self._editor.append(self.filters, criterion or CLEARED_CRITERION))

    def clear_filters(self) -> BenefitPlan:
        self._require_visible()
        return self._apply(self._editor.clear(self.filters))

    def replace_filter(self, index: int, criterion: FilterCriterion) -> BenefitPlan:
        self._require_visible()
        return self._apply(self._editor.replace_at(self.filters, index, criterion))

    def remove_filter(self, index: int) -> BenefitPlan:
        self._require_visible()
        return self._apply(self._editor.remove_at(self.filters, index))

    def set_filters(self, criteria: Iterable[FilterCriterion]) -> BenefitPlan:
        self._require_visible()
        return self._apply(list(criteria))

    # --- synchronization ---------------------------------------------

    def sync(self) -> BenefitPlan:
        """
        Merge the current filters into the plan.

        Returns:
            The current plan snapshot (new only if json_ext changed)
        """
        if not self.visible:
            return self.plan

        updated = self._store.save(self.plan, self.status, self.filters)
        if updated is not self.plan:
            self.plan = updated
            logger.debug("plan_snapshot_changed", plan_id=updated.id, status=self.status)
            if self._on_entity_changed is not None:
                self._on_entity_changed(updated)
        return self.plan

    def switch_tab(self, active_tab: str) -> None:
        """Re-resolve the status for a new tab and reload its filters."""
        self.active_tab = active_tab
        self._resolve_and_load()

    def entity_changed(self, plan: BenefitPlan) -> None:
        """
        Accept a snapshot updated outside the session.

        Filters are reloaded only when a different plan is being edited;
        a transport-encoded id and its decoded form name the same plan.
        """
        previous_id = resolve_plan_id(self.plan.id)
        self.plan = plan
        if resolve_plan_id(plan.id) != previous_id:
            self._load()

    def custom_filter_params(self) -> List[str]:
        """Arguments of the customFilters query for this plan."""
        config = (self._config or get_config()).filter_service
        return build_custom_filter_params(
            config.module_name,
            config.object_type_name,
            resolve_plan_id(self.plan.id),
            {"benefitPlan": f"{self.plan.id}"}
        )

    # --- internals ---------------------------------------------------

    def _apply(self, filters: List[FilterCriterion]) -> BenefitPlan:
        self.filters = filters
        return self.sync()

    def _resolve_and_load(self) -> None:
        self.status = self._resolver.resolve_active_status(self.active_tab, self._statuses)
        self._load()

    def _load(self) -> None:
        result = self._store.load(self.plan, self.status)
        self.filters = result.bucket

    def _require_visible(self) -> None:
        if not self.visible:
            raise CriteriaStoreError(
                "NO_ACTIVE_STATUS",
                f"Tab {self.active_tab!r} has no beneficiary status; criteria cannot be edited",
                {"active_tab": self.active_tab}
            )
