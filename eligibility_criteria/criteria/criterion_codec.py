# ==============================================
# CriterionCodec
# ==============================================
#
# PURPOSE:
#   Convert a single filter criterion to and from its compact
#   composite string form:
#
#       field__comparator__type=value      e.g. "age__gt__int=18"
#
# WHY THIS CLASS EXISTS:
#   Criteria are persisted inside the benefit plan json_ext as plain
#   strings. Every consumer of that field (eligibility evaluator,
#   filter editor, reports) agrees on this one encoding, so the split
#   rules must be exact:
#     - split on "__" must give exactly 3 parts
#     - the last part splits on the FIRST "=" only (values may hold "=")
#
# CLASSES:
# --------
# - FilterCriterion (frozen dataclass)
#     raw is the source of truth; field/comparator/type/value are
#     derived from it. Equality and hashing use raw only.
#     Criteria read from storage are held by raw and decoded lazily.
#
# - CriterionCodec
#     Stateless utility class.
#
#   Methods:
#   --------
#   - decode(raw: str) -> FilterCriterion
#   - encode(criterion: FilterCriterion) -> str
#   - build(field, comparator, type, value) -> FilterCriterion
#   - from_stored(entry: Any) -> FilterCriterion | None
#   - decode_all(entries: list) -> list[FilterCriterion]
#
# ==============================================

from dataclasses import dataclass, field as dc_field
from typing import Any, Iterable, List, Optional

from eligibility_criteria.errors import MalformedCriterionError


DELIMITER = "__"
TYPE_VALUE_SEPARATOR = "="

# Key used by consumers that store criteria as objects instead of strings
CONDITION_KEY = "custom_filter_condition"


@dataclass(frozen=True)
class FilterCriterion:
    """One eligibility filter rule, identified by its composite string."""
    raw: str
    field: Optional[str] = dc_field(default=None, compare=False)
    comparator: Optional[str] = dc_field(default=None, compare=False)
    type: Optional[str] = dc_field(default=None, compare=False)
    value: Optional[str] = dc_field(default=None, compare=False)

    @property
    def is_decoded(self) -> bool:
        return self.field is not None

    def decoded(self) -> "FilterCriterion":
        """Return this criterion with its parts filled in (raises if malformed)."""
        if self.is_decoded:
            return self
        return CriterionCodec().decode(self.raw)

    def to_dict(self) -> dict:
        """Convert to the row shape used by the filter editor."""
        criterion = self.decoded()
        return {
            "field": criterion.field,
            "filter": criterion.comparator,
            "type": criterion.type,
            "value": criterion.value,
            CONDITION_KEY: criterion.raw
        }


class CriterionCodec:
    """Encodes and decodes composite criterion strings."""

    def decode(self, raw: str) -> FilterCriterion:
        """
        Split a composite string into its parts.

        Args:
            raw: Composite string, e.g. "age__gt__int=18"

        Returns:
            FilterCriterion with all parts set and raw unchanged

        Raises:
            MalformedCriterionError: If raw is not field__comparator__type=value
        """
        if not isinstance(raw, str):
            raise MalformedCriterionError(raw, "criterion must be a string")

        parts = raw.split(DELIMITER)
        if len(parts) != 3:
            raise MalformedCriterionError(
                raw, f"expected 3 parts separated by '{DELIMITER}', got {len(parts)}"
            )
        field_name, comparator, type_value = parts

        value_type, separator, value = type_value.partition(TYPE_VALUE_SEPARATOR)
        if not separator:
            raise MalformedCriterionError(raw, f"missing '{TYPE_VALUE_SEPARATOR}' between type and value")

        return FilterCriterion(
            raw=raw,
            field=field_name,
            comparator=comparator,
            type=value_type,
            value=value
        )

    def encode(self, criterion: FilterCriterion) -> str:
        """
        Inverse of decode.

        Args:
            criterion: A decoded criterion (an undecoded one is decoded first)

        Returns:
            The composite string
        """
        if not criterion.is_decoded:
            criterion = self.decode(criterion.raw)
        return (
            f"{criterion.field}{DELIMITER}{criterion.comparator}{DELIMITER}"
            f"{criterion.type}{TYPE_VALUE_SEPARATOR}{criterion.value}"
        )

    def build(self, field: str, comparator: str, type: str, value: Any) -> FilterCriterion:
        """Create a criterion from its parts (value is stringified)."""
        value = "" if value is None else str(value)
        raw = f"{field}{DELIMITER}{comparator}{DELIMITER}{type}{TYPE_VALUE_SEPARATOR}{value}"
        return FilterCriterion(raw=raw, field=field, comparator=comparator, type=type, value=value)

    def from_stored(self, entry: Any) -> Optional[FilterCriterion]:
        """
        Turn one persisted bucket entry into a criterion without decoding it.

        Accepted shapes:
            "age__gt__int=18"
            {"custom_filter_condition": "age__gt__int=18"}
            {"field": "age", "filter": "gt", "type": "int", "value": "18"}

        Returns:
            FilterCriterion, or None if the entry has none of these shapes
        """
        if isinstance(entry, str):
            return FilterCriterion(raw=entry)

        if isinstance(entry, dict):
            condition = entry.get(CONDITION_KEY)
            if isinstance(condition, str):
                return FilterCriterion(raw=condition)
            if "field" in entry:
                return self.build(
                    entry.get("field") or "",
                    entry.get("filter") or "",
                    entry.get("type") or "",
                    entry.get("value")
                )

        return None

    def decode_all(self, entries: Iterable[Any]) -> List[FilterCriterion]:
        """
        Decode every entry, all or nothing.

        Read-only views render either the full list of applied filters
        or none of them.

        Returns:
            Decoded criteria in order, or [] if any entry is unreadable
        """
        decoded = []
        try:
            for entry in entries:
                criterion = self.from_stored(entry)
                if criterion is None:
                    return []
                decoded.append(criterion.decoded())
        except (MalformedCriterionError, TypeError):
            return []
        return decoded


# Placeholder appended by "add filter" before the user picks a field.
CLEARED_CRITERION = CriterionCodec().build("", "", "", "")
