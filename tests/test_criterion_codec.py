# ==============================================
# Tests for CriterionCodec
# ==============================================

import pytest

from eligibility_criteria.criteria.criterion_codec import (
    CLEARED_CRITERION,
    CriterionCodec,
    FilterCriterion,
)
from eligibility_criteria.errors import MalformedCriterionError


class TestDecode:
    """field__comparator__type=value -> FilterCriterion"""

    def test_decode_splits_all_parts(self, codec):
        criterion = codec.decode("age__gt__int=18")
        assert criterion.field == "age"
        assert criterion.comparator == "gt"
        assert criterion.type == "int"
        assert criterion.value == "18"
        assert criterion.raw == "age__gt__int=18"

    def test_value_keeps_later_equals_signs(self, codec):
        """Only the first '=' separates type from value."""
        criterion = codec.decode("note__eq__str=a=b")
        assert criterion.type == "str"
        assert criterion.value == "a=b"

    def test_empty_value(self, codec):
        criterion = codec.decode("name__isnull__boolean=")
        assert criterion.value == ""

    @pytest.mark.parametrize("raw", [
        "age_gt_int=18",
        "age__gt",
        "a__b__c__int=1",
        "",
    ])
    def test_wrong_part_count_raises(self, codec, raw):
        with pytest.raises(MalformedCriterionError):
            codec.decode(raw)

    def test_missing_type_value_separator_raises(self, codec):
        with pytest.raises(MalformedCriterionError) as exc_info:
            codec.decode("age__gt__int18")
        assert exc_info.value.code == "MALFORMED_CRITERION"
        assert exc_info.value.raw == "age__gt__int18"

    def test_malformed_is_a_value_error(self, codec):
        with pytest.raises(ValueError):
            codec.decode("nope")

    def test_non_string_raises(self, codec):
        with pytest.raises(MalformedCriterionError):
            codec.decode(None)


class TestEncode:
    """FilterCriterion -> composite string"""

    @pytest.mark.parametrize("raw", [
        "age__gt__int=18",
        "gender__exact__str=F",
        "note__icontains__str=x=y",
        "____=",
    ])
    def test_encode_inverts_decode(self, codec, raw):
        assert codec.encode(codec.decode(raw)) == raw

    def test_build_stringifies_value(self, codec):
        criterion = codec.build("household_size", "gte", "integer", 4)
        assert criterion.raw == "household_size__gte__integer=4"
        assert codec.encode(criterion) == criterion.raw

    def test_encode_undecoded_criterion(self, codec):
        assert codec.encode(FilterCriterion(raw="age__lt__int=60")) == "age__lt__int=60"


class TestFilterCriterion:

    def test_equality_uses_raw_only(self, codec):
        lazy = FilterCriterion(raw="age__gt__int=18")
        assert lazy == codec.decode("age__gt__int=18")
        assert hash(lazy) == hash(codec.decode("age__gt__int=18"))

    def test_lazy_criterion_decodes_on_demand(self):
        lazy = FilterCriterion(raw="age__gt__int=18")
        assert not lazy.is_decoded
        assert lazy.decoded().field == "age"

    def test_to_dict_row_shape(self, codec):
        assert codec.decode("age__gt__int=18").to_dict() == {
            "field": "age",
            "filter": "gt",
            "type": "int",
            "value": "18",
            "custom_filter_condition": "age__gt__int=18",
        }

    def test_cleared_criterion_has_no_field(self):
        assert CLEARED_CRITERION.raw == "____="
        assert CLEARED_CRITERION.field == ""


class TestFromStored:
    """Persisted bucket entries -> lazily decoded criteria"""

    def test_string_entry(self, codec):
        criterion = codec.from_stored("age__gt__int=18")
        assert criterion.raw == "age__gt__int=18"
        assert not criterion.is_decoded

    def test_condition_object_entry(self, codec):
        criterion = codec.from_stored({"custom_filter_condition": "age__gt__int=18"})
        assert criterion.raw == "age__gt__int=18"

    def test_row_object_entry(self, codec):
        criterion = codec.from_stored({"field": "age", "filter": "gt", "type": "int", "value": 18})
        assert criterion.raw == "age__gt__int=18"

    def test_malformed_string_is_not_decoded_yet(self, codec):
        criterion = codec.from_stored("garbage")
        assert criterion.raw == "garbage"
        with pytest.raises(MalformedCriterionError):
            criterion.decoded()

    @pytest.mark.parametrize("entry", [42, None, ["a"], {"other": 1}])
    def test_unknown_entry_shapes(self, codec, entry):
        assert codec.from_stored(entry) is None


class TestDecodeAll:

    def test_decodes_in_order(self, codec):
        decoded = codec.decode_all(["b__eq__str=1", {"custom_filter_condition": "a__eq__str=2"}])
        assert [c.field for c in decoded] == ["b", "a"]

    def test_any_malformed_entry_gives_empty(self, codec):
        assert codec.decode_all(["a__eq__str=1", "broken"]) == []

    def test_not_iterable_gives_empty(self, codec):
        assert codec.decode_all(None) == []
