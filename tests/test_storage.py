"""Tests for the data-access functions in services/."""
from datetime import datetime

import pytest

from models.schemas import (
    RiskRegistryCreate,
    RiskRegistryUpdate,
    RegistryAssessmentCreate,
    RiskAssessmentCreate,
    UserCreate,
)
from services.registry_assessment import (
    create_registry_assessment,
    get_all_registry_assessments,
    get_registry_assessment_by_id,
    get_registry_assessments_by_risk_id,
    compare_with_prior,
)
from services.risk_assessment import create_risk_assessment, get_all_risk_assessments, get_risk_assessment_by_id
from services.risk_registry import (
    create_risk_registry,
    get_all_risk_registry,
    get_risk_registry_by_id,
    update_risk_registry,
    delete_risk_registry,
    RiskLevelMismatch,
)
from services.users import create_user, get_user, get_user_by_username


@pytest.fixture
def add_entry(session, registry_payload):
    def _add(**overrides):
        return create_risk_registry(session, RiskRegistryCreate(**registry_payload(**overrides)))
    return _add


@pytest.fixture
def assess(session, assessment_payload):
    def _assess(risk_id, **overrides):
        data = RegistryAssessmentCreate(**assessment_payload(risk_id, **overrides))
        return create_registry_assessment(session, data)
    return _assess


class TestRiskRegistryStorage:
    def test_create_assigns_id_and_levels(self, add_entry):
        entry = add_entry()
        assert entry.id is not None
        assert entry.unit_risk_level == 12
        assert entry.responsible_risk_level == 8
        assert entry.created_at is not None

    def test_get_all_ordered_by_id(self, session, add_entry):
        first = add_entry(riskScenario="first")
        second = add_entry(riskScenario="second")
        assert [e.id for e in get_all_risk_registry(session)] == [first.id, second.id]

    def test_get_missing_returns_none(self, session):
        assert get_risk_registry_by_id(session, 999) is None

    def test_partial_update_keeps_other_fields(self, session, add_entry):
        entry = add_entry()
        updated = update_risk_registry(session, entry.id, RiskRegistryUpdate(notes="reviewed"))
        assert updated.notes == "reviewed"
        assert updated.risk_scenario == "勒索軟體加密核心系統導致營運中斷"
        assert updated.unit_risk_level == 12

    def test_update_rederives_level(self, session, add_entry):
        entry = add_entry()
        updated = update_risk_registry(session, entry.id, RiskRegistryUpdate(responsibleImpact=5))
        assert updated.responsible_risk_level == 10

    def test_update_rejects_level_that_disagrees_with_stored_scores(self, session, add_entry):
        entry = add_entry()
        with pytest.raises(RiskLevelMismatch):
            update_risk_registry(session, entry.id, RiskRegistryUpdate(unitRiskLevel=20))
        assert get_risk_registry_by_id(session, entry.id).unit_risk_level == 12

    def test_clearing_a_score_clears_its_level(self, session, add_entry):
        entry = add_entry()
        updated = update_risk_registry(session, entry.id, RiskRegistryUpdate(unitImpact=None))
        assert updated.unit_risk_level is None
        assert updated.unit_possibility == 3

    def test_update_refreshes_updated_at(self, session, add_entry):
        entry = add_entry()
        entry.updated_at = datetime(2020, 1, 1)
        session.commit()

        updated = update_risk_registry(session, entry.id, RiskRegistryUpdate(notes="x"))
        assert updated.updated_at > datetime(2020, 1, 1)

    def test_update_missing_returns_none(self, session):
        assert update_risk_registry(session, 42, RiskRegistryUpdate(notes="x")) is None

    def test_delete(self, session, add_entry):
        entry = add_entry()
        assert delete_risk_registry(session, entry.id) is True
        assert get_risk_registry_by_id(session, entry.id) is None
        assert delete_risk_registry(session, entry.id) is False


class TestRegistryAssessmentStorage:
    def test_create_and_fetch(self, session, add_entry, assess):
        created = assess(add_entry().id)
        assert created.risk_level == 16
        assert get_registry_assessment_by_id(session, created.id).assessor_email == "a@b.com"

    def test_filter_by_risk(self, session, add_entry, assess):
        a = add_entry()
        b = add_entry(riskScenario="other")
        assess(a.id)
        assess(b.id)
        assess(a.id, currentImpact=2)

        assert len(get_all_registry_assessments(session)) == 3
        assert [x.risk_level for x in get_registry_assessments_by_risk_id(session, a.id)] == [16, 8]

    def test_unknown_risk_id_is_accepted(self, assess):
        assert assess(12345).id is not None

    def test_comparison_against_registry_level(self, session, add_entry, assess):
        assessment = assess(add_entry().id)
        result = compare_with_prior(session, assessment)
        assert result["prior_risk_level"] == 8
        assert result["delta"] == 8
        assert result["direction"] == "increased"
        assert result["has_prior"] is True

    def test_comparison_without_registry_entry(self, session, assess):
        result = compare_with_prior(session, assess(777), lang="zh")
        assert result["prior_risk_level"] is None
        assert result["has_prior"] is False
        assert result["direction_label"] == "上升"


class TestQuestionnaireAndUsers:
    def test_questionnaire_round_trip(self, session):
        data = RiskAssessmentCreate(
            email="staff@adata.com.tw",
            name="Lin",
            department="Finance",
            acknowledgement=True,
            creditImpact=3,
            creditLikelihood=2,
        )
        saved = create_risk_assessment(session, data)
        fetched = get_risk_assessment_by_id(session, saved.id)
        assert fetched.credit_impact == 3
        assert fetched.competition_impact is None
        assert len(get_all_risk_assessments(session)) == 1

    def test_users(self, session):
        user = create_user(session, UserCreate(username="auditor", email="auditor@adata.com.tw"))
        assert get_user(session, user.id).username == "auditor"
        assert get_user_by_username(session, "auditor").id == user.id
        assert get_user_by_username(session, "nobody") is None

    def test_every_questionnaire_item_has_a_score_pair(self):
        from models.risk_assessment import QUESTIONNAIRE_ITEMS, RiskAssessment

        items = [item for group in QUESTIONNAIRE_ITEMS.values() for item in group]
        assert len(items) == 12
        for item in items:
            assert hasattr(RiskAssessment, f"{item}_impact")
            assert hasattr(RiskAssessment, f"{item}_likelihood")
