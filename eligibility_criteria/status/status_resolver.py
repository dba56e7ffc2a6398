# ==============================================
# StatusResolver
# ==============================================
#
# PURPOSE:
#   Map the benefit plan tab the user is looking at to the beneficiary
#   status whose criteria should be edited.
#
#     "benefitPlanActiveTab"    → "ACTIVE"
#     "benefitPlanPotentialTab" → "POTENTIAL"
#     "benefitPlanProjectsTab"  → None  (no criteria on that tab)
#
#   None is not an error: it means the criteria panel is hidden for
#   that tab.
#
# CLASS: StatusResolver
# ---------------------
#   Stateless utility class.
#
#   Methods:
#   --------
#   - resolve_active_status(tab_id, statuses) -> str | None
#   - display_label(tab_id) -> str
#   - label_key(tab_id) -> str
#
# ==============================================

from typing import Iterable, Optional

TAB_SUFFIX = "Tab"
LABEL_KEY_TEMPLATE = "benefitPlan.{}.label"


class StatusResolver:
    """Resolves tab identifiers to beneficiary status keys."""

    def resolve_active_status(self, tab_id: str, statuses: Iterable[str]) -> Optional[str]:
        """
        Find the status whose name appears in the tab id.

        Args:
            tab_id: Tab/context identifier, e.g. "benefitPlanActiveTab"
            statuses: Status enumeration. Ordered sequences are searched in
                order, sets in sorted order.

        Returns:
            The first matching status, or None
        """
        if not tab_id:
            return None

        if isinstance(statuses, (set, frozenset)):
            statuses = sorted(statuses)

        context = tab_id.upper()
        for status in statuses:
            if status in context:
                return status
        return None

    def display_label(self, tab_id: str) -> str:
        """Drop the first "Tab" token: "benefitPlanActiveTab" -> "benefitPlanActive"."""
        return tab_id.replace(TAB_SUFFIX, "", 1)

    def label_key(self, tab_id: str) -> str:
        """Translation key for the human readable status label."""
        return LABEL_KEY_TEMPLATE.format(self.display_label(tab_id))
