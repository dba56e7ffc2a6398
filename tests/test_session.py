# ==============================================
# Tests for EligibilityCriteriaSession
# ==============================================
#
# The session plays the role of the criteria panel: it resolves the
# status from the tab, loads the bucket, applies edits and pushes new
# snapshots to on_entity_changed.
# ==============================================

import json

import pytest

from eligibility_criteria.config import AppConfig
from eligibility_criteria.errors import CriteriaStoreError, IndexOutOfRangeError
from eligibility_criteria.filters.identifiers import encode_id
from eligibility_criteria.session import EligibilityCriteriaSession


@pytest.fixture
def changes():
    return []


@pytest.fixture
def make_session(statuses, changes):
    def _make(plan, tab="benefitPlanActiveTab"):
        return EligibilityCriteriaSession(
            plan,
            tab,
            statuses=statuses,
            default_status="POTENTIAL",
            on_entity_changed=changes.append
        )
    return _make


class TestLoading:

    def test_status_from_tab(self, make_session, make_plan):
        session = make_session(make_plan(None), "benefitPlanSuspendedTab")
        assert session.status == "SUSPENDED"
        assert session.visible
        assert session.label_key == "benefitPlan.benefitPlanSuspended.label"

    def test_hidden_on_tab_without_status(self, make_session, make_plan):
        session = make_session(make_plan(None), "benefitPlanProjectsTab")
        assert session.status is None
        assert not session.visible
        assert session.filters == []

    def test_filters_loaded_for_status(self, make_session, make_plan):
        plan = make_plan({"advanced_criteria": {"ACTIVE": ["a__eq__str=1"]}})
        assert [c.raw for c in make_session(plan).filters] == ["a__eq__str=1"]

    def test_legacy_filters_on_potential_tab(self, make_session, make_plan):
        plan = make_plan({"advanced_criteria": ["x__eq__str=y"]})
        assert make_session(plan, "benefitPlanActiveTab").filters == []
        assert [c.raw for c in make_session(plan, "benefitPlanPotentialTab").filters] == ["x__eq__str=y"]

    def test_loading_does_not_emit(self, make_session, make_plan, changes):
        make_session(make_plan({"advanced_criteria": {"ACTIVE": ["a__eq__str=1"]}}))
        assert changes == []

    def test_statuses_from_config(self, make_plan):
        session = EligibilityCriteriaSession(make_plan(None), "benefitPlanGraduatedTab", config=AppConfig())
        assert session.status == "GRADUATED"


class TestEditing:

    def test_add_filter_emits_new_snapshot(self, make_session, make_plan, changes, codec):
        session = make_session(make_plan(None))
        plan = session.add_filter(codec.decode("age__gt__int=18"))
        assert changes == [plan]
        assert session.plan is plan
        assert plan.extension == '{"advanced_criteria":{"ACTIVE":["age__gt__int=18"]}}'

    def test_add_placeholder_does_not_emit(self, make_session, make_plan, changes):
        """The blank row added by "add filter" has no field yet."""
        session = make_session(make_plan(None))
        session.add_filter()
        assert len(session.filters) == 1
        assert changes == []

    def test_placeholder_then_replace(self, make_session, make_plan, changes, codec):
        session = make_session(make_plan(None))
        session.add_filter()
        session.replace_filter(0, codec.decode("age__gt__int=18"))
        assert len(changes) == 1
        assert json.loads(session.plan.extension)["advanced_criteria"] == {"ACTIVE": ["age__gt__int=18"]}

    def test_clear_filters_removes_status(self, make_session, make_plan, changes):
        plan = make_plan({"advanced_criteria": {"ACTIVE": ["a__eq__str=1"], "POTENTIAL": ["p__eq__str=1"]}, "foo": 1})
        session = make_session(plan)
        session.clear_filters()
        assert session.filters == []
        assert json.loads(changes[-1].extension) == {
            "advanced_criteria": {"POTENTIAL": ["p__eq__str=1"]},
            "foo": 1,
        }

    def test_remove_filter(self, make_session, make_plan):
        plan = make_plan({"advanced_criteria": {"ACTIVE": ["a__eq__str=1", "b__eq__str=2"]}})
        session = make_session(plan)
        session.remove_filter(0)
        assert json.loads(session.plan.extension)["advanced_criteria"] == {"ACTIVE": ["b__eq__str=2"]}

    def test_replace_out_of_range(self, make_session, make_plan, codec):
        session = make_session(make_plan(None))
        with pytest.raises(IndexOutOfRangeError):
            session.replace_filter(0, codec.decode("a__eq__str=1"))

    def test_set_filters(self, make_session, make_plan, codec):
        session = make_session(make_plan(None))
        session.set_filters([codec.decode("a__eq__str=1"), codec.decode("b__eq__str=2")])
        assert json.loads(session.plan.extension)["advanced_criteria"]["ACTIVE"] == ["a__eq__str=1", "b__eq__str=2"]

    def test_edit_on_hidden_session_raises(self, make_session, make_plan, codec):
        session = make_session(make_plan(None), "benefitPlanProjectsTab")
        with pytest.raises(CriteriaStoreError) as exc_info:
            session.add_filter(codec.decode("a__eq__str=1"))
        assert exc_info.value.code == "NO_ACTIVE_STATUS"

    def test_sync_on_hidden_session_returns_plan(self, make_session, make_plan):
        plan = make_plan(None)
        assert make_session(plan, "benefitPlanProjectsTab").sync() is plan


class TestFeedback:
    """Pushing the emitted snapshot back must not start another update."""

    def test_entity_changed_round_trip_is_quiet(self, make_session, make_plan, changes, codec):
        session = make_session(make_plan(None))
        session.add_filter(codec.decode("a__eq__str=1"))
        session.entity_changed(changes[-1])
        session.sync()
        assert len(changes) == 1

    def test_entity_changed_keeps_filters_for_same_plan(self, make_session, make_plan, codec):
        session = make_session(make_plan(None))
        session.add_filter(codec.decode("a__eq__str=1"))
        external = session.plan.with_extension('{"advanced_criteria": {}, "foo": 1}')
        session.entity_changed(external)
        assert [c.raw for c in session.filters] == ["a__eq__str=1"]
        assert json.loads(session.sync().extension) == {
            "advanced_criteria": {"ACTIVE": ["a__eq__str=1"]},
            "foo": 1,
        }

    def test_entity_changed_with_encoded_id_is_same_plan(self, make_session, make_plan, codec):
        """The global id and the uuid of one plan do not trigger a reload."""
        plan_uuid = "6d0e6f4a-0000-4000-8000-000000000001"
        session = make_session(make_plan(None, plan_id=plan_uuid))
        session.add_filter(codec.decode("a__eq__str=1"))
        external = make_plan({"foo": 1}, plan_id=encode_id("BenefitPlanGQLType", plan_uuid))
        session.entity_changed(external)
        assert [c.raw for c in session.filters] == ["a__eq__str=1"]

    def test_entity_changed_reloads_for_other_plan(self, make_session, make_plan):
        session = make_session(make_plan(None))
        other = make_plan({"advanced_criteria": {"ACTIVE": ["o__eq__str=1"]}}, plan_id="plan-2")
        session.entity_changed(other)
        assert [c.raw for c in session.filters] == ["o__eq__str=1"]

    def test_switch_tab_reloads(self, make_session, make_plan, changes):
        plan = make_plan({"advanced_criteria": {"ACTIVE": ["a__eq__str=1"], "SUSPENDED": ["s__eq__str=1"]}})
        session = make_session(plan)
        session.switch_tab("benefitPlanSuspendedTab")
        assert session.status == "SUSPENDED"
        assert [c.raw for c in session.filters] == ["s__eq__str=1"]
        assert changes == []


class TestCustomFilterParams:

    def test_params_use_decoded_plan_id(self, make_session, make_plan):
        global_id = encode_id("BenefitPlanGQLType", "6d0e6f4a-0000-4000-8000-000000000001")
        session = make_session(make_plan(None, plan_id=global_id))
        params = session.custom_filter_params()
        assert params[0] == 'moduleName: "individual"'
        assert params[1] == 'objectTypeName: "Individual"'
        assert params[2] == 'uuidOfObject: "6d0e6f4a-0000-4000-8000-000000000001"'
        assert params[3] == 'additionalParams: "{\\"benefitPlan\\":\\"' + global_id + '\\"}"'
