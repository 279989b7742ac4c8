from pydantic import BaseModel, ConfigDict, EmailStr, Field, computed_field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from typing import Annotated, Optional, List
from datetime import datetime
from decimal import Decimal

from services.scoring import RiskBand, BAND_LABELS, calculate_risk_level, classify_risk_level


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


Score = Annotated[int, Field(ge=1, le=5)]
Level = Annotated[int, Field(ge=1, le=25)]
RequiredText = Annotated[str, Field(min_length=1)]
Year = Annotated[int, Field(ge=2000, le=2100)]


def _derive_level(model, impact_field, likelihood_field, level_field):
    """Fill in or check ``level_field`` against impact x likelihood."""
    impact = getattr(model, impact_field)
    likelihood = getattr(model, likelihood_field)
    level = getattr(model, level_field)
    if impact is None or likelihood is None:
        return

    expected = calculate_risk_level(impact, likelihood)
    if level is None:
        setattr(model, level_field, expected)
    elif level != expected:
        raise ValueError(
            f"{to_camel(level_field)} must equal {to_camel(impact_field)} x "
            f"{to_camel(likelihood_field)} ({expected}), got {level}"
        )


# ---------------------------------------------------------------- users

class UserCreate(CamelModel):
    username: RequiredText
    email: EmailStr

class UserOut(CamelModel):
    id: int
    username: str
    email: str
    created_at: Optional[datetime] = None


# ---------------------------------------------------------------- risk registry

REGISTRY_REQUIRED_TEXT = [
    "strategic_objective",
    "sub_objective",
    "responsible_department",
    "risk_owner",
    "operational_target",
    "seed_member",
    "risk_category",
    "level1_index",
    "risk_event_source",
    "level2_index",
    "risk_scenario",
    "existing_measures",
]


class RiskRegistryUpdate(CamelModel):
    strategic_objective: Optional[RequiredText] = None
    sub_objective: Optional[RequiredText] = None
    responsible_department: Optional[RequiredText] = None
    risk_owner: Optional[RequiredText] = None
    operational_target: Optional[RequiredText] = None
    seed_member: Optional[RequiredText] = None
    risk_category: Optional[RequiredText] = None
    level1_index: Optional[RequiredText] = None
    risk_event_source: Optional[RequiredText] = None
    level2_index: Optional[RequiredText] = None
    risk_scenario: Optional[RequiredText] = None
    existing_measures: Optional[RequiredText] = None

    warning_indicator: Optional[str] = None
    action_indicator: Optional[str] = None
    stakeholders: Optional[str] = None

    unit_possibility: Optional[Score] = None
    unit_impact: Optional[Score] = None
    unit_risk_level: Optional[Level] = None

    responsible_possibility: Optional[Score] = None
    responsible_impact: Optional[Score] = None
    responsible_risk_level: Optional[Level] = None

    response_strategy: Optional[str] = None
    new_risk_measures: Optional[str] = None
    responsible_unit: Optional[str] = None
    new_warning_indicator: Optional[str] = None
    new_action_indicator: Optional[str] = None

    optimization_suggestion: Optional[str] = None
    notes: Optional[str] = None
    weighted_risk_level: Optional[Decimal] = Field(None, max_digits=10, decimal_places=2)
    assessment_optimization: Optional[str] = None

    @model_validator(mode="after")
    def check_risk_levels(self):
        for field in REGISTRY_REQUIRED_TEXT:
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{to_camel(field)} cannot be null")

        _derive_level(self, "unit_impact", "unit_possibility", "unit_risk_level")
        _derive_level(self, "responsible_impact", "responsible_possibility", "responsible_risk_level")
        return self


class RiskRegistryCreate(RiskRegistryUpdate):
    strategic_objective: RequiredText
    sub_objective: RequiredText
    responsible_department: RequiredText
    risk_owner: RequiredText
    operational_target: RequiredText
    seed_member: RequiredText
    risk_category: RequiredText
    level1_index: RequiredText
    risk_event_source: RequiredText
    level2_index: RequiredText
    risk_scenario: RequiredText
    existing_measures: RequiredText


class RiskRegistryOut(CamelModel):
    id: int

    strategic_objective: str
    sub_objective: str
    responsible_department: str
    risk_owner: str
    operational_target: str
    seed_member: str
    risk_category: str
    level1_index: str
    risk_event_source: str
    level2_index: str
    risk_scenario: str
    existing_measures: str

    warning_indicator: Optional[str] = None
    action_indicator: Optional[str] = None
    stakeholders: Optional[str] = None

    unit_possibility: Optional[int] = None
    unit_impact: Optional[int] = None
    unit_risk_level: Optional[int] = None

    responsible_possibility: Optional[int] = None
    responsible_impact: Optional[int] = None
    responsible_risk_level: Optional[int] = None

    response_strategy: Optional[str] = None
    new_risk_measures: Optional[str] = None
    responsible_unit: Optional[str] = None
    new_warning_indicator: Optional[str] = None
    new_action_indicator: Optional[str] = None

    optimization_suggestion: Optional[str] = None
    notes: Optional[str] = None
    weighted_risk_level: Optional[Decimal] = None
    assessment_optimization: Optional[str] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @computed_field(alias="unitRiskBand")
    @property
    def unit_risk_band(self) -> RiskBand:
        return classify_risk_level(self.unit_risk_level)

    @computed_field(alias="responsibleRiskBand")
    @property
    def responsible_risk_band(self) -> RiskBand:
        return classify_risk_level(self.responsible_risk_level)


# ---------------------------------------------------------------- registry assessments

class RegistryAssessmentCreate(CamelModel):
    risk_registry_id: int

    assessor_email: EmailStr
    assessor_name: RequiredText
    assessor_department: RequiredText

    real_assessor_email: Optional[EmailStr] = None
    real_assessor_name: Optional[str] = None
    real_assessor_department: Optional[str] = None

    current_impact: Score
    current_likelihood: Score
    risk_level: Optional[Level] = None

    target_impact: Optional[Score] = None
    target_likelihood: Optional[Score] = None
    target_risk_level: Optional[Level] = None

    assessment_notes: Optional[str] = None
    mitigation_actions: Optional[str] = None

    @model_validator(mode="after")
    def check_risk_levels(self):
        _derive_level(self, "current_impact", "current_likelihood", "risk_level")

        if (self.target_impact is None) != (self.target_likelihood is None):
            raise ValueError("targetImpact and targetLikelihood must be provided together")
        if self.target_impact is None and self.target_risk_level is not None:
            raise ValueError("targetRiskLevel requires targetImpact and targetLikelihood")
        _derive_level(self, "target_impact", "target_likelihood", "target_risk_level")
        return self


class RegistryAssessmentOut(CamelModel):
    id: int
    risk_registry_id: int

    assessor_email: str
    assessor_name: str
    assessor_department: str

    real_assessor_email: Optional[str] = None
    real_assessor_name: Optional[str] = None
    real_assessor_department: Optional[str] = None

    current_impact: int
    current_likelihood: int
    risk_level: int

    target_impact: Optional[int] = None
    target_likelihood: Optional[int] = None
    target_risk_level: Optional[int] = None

    assessment_notes: Optional[str] = None
    mitigation_actions: Optional[str] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @computed_field(alias="riskBand")
    @property
    def risk_band(self) -> RiskBand:
        return classify_risk_level(self.risk_level)

    @computed_field(alias="riskLabel")
    @property
    def risk_label(self) -> str:
        return BAND_LABELS[classify_risk_level(self.risk_level)]


class RiskComparisonOut(CamelModel):
    assessment_id: int
    risk_registry_id: int
    current_risk_level: int
    current_band: RiskBand
    prior_risk_level: Optional[int] = None
    prior_band: RiskBand
    delta: int
    direction: str
    direction_label: str
    has_prior: bool


# ---------------------------------------------------------------- legacy questionnaire

class RiskAssessmentOut(CamelModel):
    id: int
    email: str
    name: str
    department: str
    acknowledgement: bool

    # Strategic
    competition_impact: Optional[int] = None
    competition_likelihood: Optional[int] = None
    market_demand_impact: Optional[int] = None
    market_demand_likelihood: Optional[int] = None

    # Operational
    raw_material_impact: Optional[int] = None
    raw_material_likelihood: Optional[int] = None
    material_shortage_impact: Optional[int] = None
    material_shortage_likelihood: Optional[int] = None
    new_product_development_impact: Optional[int] = None
    new_product_development_likelihood: Optional[int] = None

    # Financial
    credit_impact: Optional[int] = None
    credit_likelihood: Optional[int] = None
    currency_impact: Optional[int] = None
    currency_likelihood: Optional[int] = None
    funding_cost_impact: Optional[int] = None
    funding_cost_likelihood: Optional[int] = None

    # Emerging
    geopolitical_conflict_impact: Optional[int] = None
    geopolitical_conflict_likelihood: Optional[int] = None
    technology_cold_war_impact: Optional[int] = None
    technology_cold_war_likelihood: Optional[int] = None
    ai_transformation_impact: Optional[int] = None
    ai_transformation_likelihood: Optional[int] = None
    carbon_pricing_impact: Optional[int] = None
    carbon_pricing_likelihood: Optional[int] = None

    submitted_at: Optional[datetime] = None


class RiskAssessmentCreate(CamelModel):
    email: EmailStr
    name: RequiredText
    department: RequiredText
    acknowledgement: bool

    competition_impact: Optional[Score] = None
    competition_likelihood: Optional[Score] = None
    market_demand_impact: Optional[Score] = None
    market_demand_likelihood: Optional[Score] = None

    raw_material_impact: Optional[Score] = None
    raw_material_likelihood: Optional[Score] = None
    material_shortage_impact: Optional[Score] = None
    material_shortage_likelihood: Optional[Score] = None
    new_product_development_impact: Optional[Score] = None
    new_product_development_likelihood: Optional[Score] = None

    credit_impact: Optional[Score] = None
    credit_likelihood: Optional[Score] = None
    currency_impact: Optional[Score] = None
    currency_likelihood: Optional[Score] = None
    funding_cost_impact: Optional[Score] = None
    funding_cost_likelihood: Optional[Score] = None

    geopolitical_conflict_impact: Optional[Score] = None
    geopolitical_conflict_likelihood: Optional[Score] = None
    technology_cold_war_impact: Optional[Score] = None
    technology_cold_war_likelihood: Optional[Score] = None
    ai_transformation_impact: Optional[Score] = None
    ai_transformation_likelihood: Optional[Score] = None
    carbon_pricing_impact: Optional[Score] = None
    carbon_pricing_likelihood: Optional[Score] = None

    @field_validator("acknowledgement")
    @classmethod
    def must_acknowledge(cls, value):
        if value is not True:
            raise ValueError("You must acknowledge the terms")
        return value


# ---------------------------------------------------------------- strategic taxonomy

class StrategicObjectiveCreate(CamelModel):
    name: RequiredText
    leader: RequiredText
    year: Optional[Year] = None

class StrategicObjectiveOut(CamelModel):
    id: int
    name: str
    leader: str
    year: int
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SubStrategicObjectiveCreate(CamelModel):
    name: RequiredText
    year: Optional[Year] = None

class SubStrategicObjectiveOut(CamelModel):
    id: int
    strategic_objective_id: int
    name: str
    year: int
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class RiskCategoryCreate(CamelModel):
    name: RequiredText
    description: Optional[str] = None
    year: Optional[Year] = None

class RiskCategoryOut(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    year: int
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class StrategicMappingCreate(CamelModel):
    strategic_objective_id: int
    sub_strategic_objective_id: int
    risk_category_id: int
    year: Optional[Year] = None

class StrategicMappingOut(CamelModel):
    id: int
    strategic_objective_id: int
    sub_strategic_objective_id: int
    risk_category_id: int
    year: int
    is_active: bool
    strategic_objective_name: Optional[str] = None
    sub_strategic_objective_name: Optional[str] = None
    risk_category_name: Optional[str] = None
    created_at: Optional[datetime] = None


# ---------------------------------------------------------------- reports

class BandCount(CamelModel):
    band: RiskBand
    label: str
    count: int

class CategoryCount(CamelModel):
    category: str
    count: int

class RegistrySummaryOut(CamelModel):
    total_risks: int
    total_assessments: int
    bands: List[BandCount]
    categories: List[CategoryCount]
