# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# This file contains shared fixtures for all tests.
#
# FIXTURES:
# ---------
# - fresh_config      (autouse) reset the config singleton around each test
# - statuses          the default beneficiary status enumeration
# - codec / store     CriterionCodec, CriteriaStore(default "POTENTIAL")
# - make_plan         factory: make_plan(extension=None, plan_id="plan-1")
# - plan_file_store   PlanFileStore in tmp_path
#
# ==============================================

import json

import pytest

from eligibility_criteria.config import DEFAULT_STATUSES, reset_config
from eligibility_criteria.criteria.criterion_codec import CriterionCodec
from eligibility_criteria.persistence.plan_file_store import PlanFileStore
from eligibility_criteria.storage.criteria_store import CriteriaStore
from eligibility_criteria.storage.models import BenefitPlan


ENV_VARS = (
    "BENEFICIARY_STATUSES",
    "DEFAULT_BENEFICIARY_STATUS",
    "PLANS_FILE",
    "LOG_LEVEL",
    "FILTER_MODULE_NAME",
    "FILTER_OBJECT_TYPE_NAME",
)


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Every test starts from the built-in defaults."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def statuses():
    return DEFAULT_STATUSES


@pytest.fixture
def codec():
    return CriterionCodec()


@pytest.fixture
def store():
    return CriteriaStore("POTENTIAL")


@pytest.fixture
def make_plan():
    """Build a BenefitPlan; dict extensions are JSON encoded."""
    def _make(extension=None, plan_id="plan-1", **attributes):
        if isinstance(extension, dict):
            extension = json.dumps(extension)
        return BenefitPlan(id=plan_id, extension=extension, attributes=attributes)
    return _make


@pytest.fixture
def plan_file_store(tmp_path):
    return PlanFileStore(tmp_path / "plans" / "benefit_plans.json")
