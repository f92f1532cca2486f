# scenario_model/config/models.py
"""
Pydantic models for the scenario parameter set.

Field names are Python-style; each field carries an alias matching the
persisted JSON layout (``months``, ``birthRate``, ``peopleProps`` ...), so the
same models validate policy files, stored parameter documents and YAML
scenario files. All models are frozen: a run's parameters never change once
built, and edits go through ``model_copy(update=...)``.
"""

from typing import Any, ClassVar, Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field

# Declared (slider) ranges. Values outside these are accepted but reported.
UNIT_RANGE: Tuple[float, float] = (0.0, 1.0)
RATE_ADJ_RANGE: Tuple[float, float] = (-0.5, 0.5)
INDEX_RANGE: Tuple[float, float] = (0.5, 1.5)
RETIRE_AGE_RANGE: Tuple[int, int] = (55, 68)


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    # field name -> (min, max); filled in by subclasses
    declared_ranges: ClassVar[Dict[str, Tuple[float, float]]] = {}

    def range_warnings(self, prefix: str = "") -> List[str]:
        """Return a message for every field outside its declared range."""
        messages = []
        for name, (low, high) in self.declared_ranges.items():
            value = getattr(self, name)
            if not low <= value <= high:
                messages.append(
                    f"{prefix}{name}={value} outside declared range [{low}, {high}]"
                )
        return messages


class PersonAttributes(_FrozenModel):
    """Properties of the simulated population (``peopleProps``)."""

    career_orientation: float = Field(0.6, alias="careerOrientation")
    openness: float = Field(0.5, alias="openness")
    stress: float = Field(0.4, alias="stress")
    skills: float = Field(0.6, alias="skills")
    memory: float = Field(0.5, alias="memory")
    social_norms: float = Field(0.7, alias="socialNorms")
    income_thousand: float = Field(
        60, alias="incomeThousand", description="Monthly income, thousands"
    )
    savings_thousand: float = Field(
        300, alias="savingsThousand", description="Savings, thousands"
    )
    fatigue: float = Field(0.3, alias="fatigue")
    illness: float = Field(0.2, alias="illness")

    declared_ranges = {
        "career_orientation": UNIT_RANGE,
        "openness": UNIT_RANGE,
        "stress": UNIT_RANGE,
        "skills": UNIT_RANGE,
        "memory": UNIT_RANGE,
        "social_norms": UNIT_RANGE,
        "income_thousand": (10, 300),
        "savings_thousand": (0, 2000),
        "fatigue": UNIT_RANGE,
        "illness": UNIT_RANGE,
    }


class PersonBehaviorRates(_FrozenModel):
    """Monthly behaviour probabilities of the population (``peopleActions``)."""

    job_search_prob: float = Field(0.5, alias="jobSearchProb")
    hire_prob: float = Field(0.3, alias="hireProb")
    quit_prob: float = Field(0.2, alias="quitProb")
    migrate_prob: float = Field(0.2, alias="migrateProb")
    training_rate: float = Field(0.1, alias="trainingRate")
    education_rate: float = Field(0.05, alias="educationRate")
    retire_age: int = Field(64, alias="retireAge")
    meet_rate: float = Field(0.2, alias="meetRate")
    pair_create_rate: float = Field(0.15, alias="pairCreateRate")
    marry_rate: float = Field(0.12, alias="marryRate")
    divorce_rate: float = Field(0.05, alias="divorceRate")
    birth_rate_adj: float = Field(0.0, alias="birthRateAdj")
    death_rate_adj: float = Field(0.0, alias="deathRateAdj")

    declared_ranges = {
        "job_search_prob": UNIT_RANGE,
        "hire_prob": UNIT_RANGE,
        "quit_prob": UNIT_RANGE,
        "migrate_prob": UNIT_RANGE,
        "training_rate": UNIT_RANGE,
        "education_rate": UNIT_RANGE,
        "retire_age": RETIRE_AGE_RANGE,
        "meet_rate": UNIT_RANGE,
        "pair_create_rate": UNIT_RANGE,
        "marry_rate": UNIT_RANGE,
        "divorce_rate": UNIT_RANGE,
        "birth_rate_adj": RATE_ADJ_RANGE,
        "death_rate_adj": RATE_ADJ_RANGE,
    }


class OrganizationActions(_FrozenModel):
    """Employer behaviour (``orgActions``)."""

    hire_rate: float = Field(0.25, alias="hireRate", description="Share hired per month")
    fire_rate: float = Field(0.15, alias="fireRate", description="Share fired per month")
    wage_index: float = Field(1.0, alias="wageIndex")
    hours_index: float = Field(1.0, alias="hoursIndex")

    declared_ranges = {
        "hire_rate": UNIT_RANGE,
        "fire_rate": UNIT_RANGE,
        "wage_index": INDEX_RANGE,
        "hours_index": INDEX_RANGE,
    }


# Top-level field name -> (persisted key, group model)
PARAMETER_GROUPS: Dict[str, Tuple[str, type]] = {
    "person_attributes": ("peopleProps", PersonAttributes),
    "behavior_rates": ("peopleActions", PersonBehaviorRates),
    "organization_actions": ("orgActions", OrganizationActions),
}


class ScenarioParameters(_FrozenModel):
    """The complete input of one simulation run."""

    horizon_months: int = Field(36, alias="months", description="Number of monthly steps")
    annual_birth_rate: float = Field(0.011, alias="birthRate")
    annual_death_rate: float = Field(0.013, alias="deathRate")
    annual_net_migration: float = Field(
        150_000, alias="migrationNet", description="Net migrants per year (signed)"
    )
    employment_shock_amplitude: float = Field(0.001, alias="employmentShock")
    person_attributes: PersonAttributes = Field(
        default_factory=PersonAttributes, alias="peopleProps"
    )
    behavior_rates: PersonBehaviorRates = Field(
        default_factory=PersonBehaviorRates, alias="peopleActions"
    )
    organization_actions: OrganizationActions = Field(
        default_factory=OrganizationActions, alias="orgActions"
    )

    declared_ranges = {
        "horizon_months": (6, 120),
        "annual_birth_rate": (0.005, 0.02),
        "annual_death_rate": (0.005, 0.02),
        "annual_net_migration": (-500_000, 500_000),
        "employment_shock_amplitude": (-0.005, 0.005),
    }

    def range_warnings(self, prefix: str = "") -> List[str]:
        messages = super().range_warnings(prefix)
        for field_name, (key, _) in PARAMETER_GROUPS.items():
            messages.extend(getattr(self, field_name).range_warnings(f"{prefix}{key}."))
        return messages

    def to_document(self) -> Dict[str, Any]:
        """Serialize to the persisted JSON layout (camelCase keys)."""
        return self.model_dump(by_alias=True, mode="json")

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "ScenarioParameters":
        """Build parameters from a full or partial document over the defaults."""
        from .merge import merge_overlay

        return merge_overlay(cls(), document)
