"""Schemas for the multi-step intake questionnaire.

The form is collected over six topics. Each topic has its own model so the
client can validate a step before moving on; `IntakeFormRequest` combines all
of them for the final submission.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class Sex(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"
    PREFER_NOT_TO_SAY = "PREFER_NOT_TO_SAY"


class ActivityLevel(str, Enum):
    SEDENTARY = "SEDENTARY"
    LIGHT = "LIGHT"
    MODERATE = "MODERATE"
    ACTIVE = "ACTIVE"
    VERY_ACTIVE = "VERY_ACTIVE"


class FitnessLevel(str, Enum):
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"


class PrimaryGoal(str, Enum):
    LOSE_WEIGHT = "LOSE_WEIGHT"
    BUILD_MUSCLE = "BUILD_MUSCLE"
    MAINTAIN = "MAINTAIN"
    IMPROVE_ENDURANCE = "IMPROVE_ENDURANCE"
    GENERAL_HEALTH = "GENERAL_HEALTH"
    SPORT_SPECIFIC = "SPORT_SPECIFIC"


class TrainingStyle(str, Enum):
    STRENGTH = "STRENGTH"
    HYPERTROPHY = "HYPERTROPHY"
    HIIT = "HIIT"
    ENDURANCE = "ENDURANCE"
    BODYWEIGHT = "BODYWEIGHT"
    YOGA = "YOGA"
    PILATES = "PILATES"
    MIXED = "MIXED"


class Equipment(str, Enum):
    NONE = "NONE"
    DUMBBELLS = "DUMBBELLS"
    BARBELL = "BARBELL"
    KETTLEBELLS = "KETTLEBELLS"
    RESISTANCE_BANDS = "RESISTANCE_BANDS"
    BENCH = "BENCH"
    CABLE_MACHINE = "CABLE_MACHINE"
    PULL_UP_BAR = "PULL_UP_BAR"
    CARDIO_EQUIPMENT = "CARDIO_EQUIPMENT"
    FULL_GYM = "FULL_GYM"


class DietPreference(str, Enum):
    NO_RESTRICTIONS = "NO_RESTRICTIONS"
    VEGETARIAN = "VEGETARIAN"
    VEGAN = "VEGAN"
    PESCATARIAN = "PESCATARIAN"
    KETO = "KETO"
    MEDITERRANEAN = "MEDITERRANEAN"
    PALEO = "PALEO"
    INTERMITTENT_FASTING = "INTERMITTENT_FASTING"


class MotivationStyle(str, Enum):
    GENTLE = "GENTLE"
    FIRM = "FIRM"
    DATA_DRIVEN = "DATA_DRIVEN"
    COMMUNITY = "COMMUNITY"


class PersonalInfoStep(BaseModel):
    """Step 0: who the user is."""

    age: int = Field(..., ge=16, le=100, examples=[30], description="Age in years (16-100)")
    sex: Sex = Field(..., examples=["MALE"], description="Biological sex used for BMR")


class PhysicalProfileStep(BaseModel):
    """Step 1: body measurements and weight goal."""

    height_cm: float = Field(..., ge=100, le=250, examples=[180.0], description="Height in centimeters (100-250)")
    weight_kg: float = Field(..., ge=30, le=300, examples=[80.0], description="Weight in kilograms (30-300)")
    goal_weight_kg: Optional[float] = Field(None, ge=30, le=300, examples=[75.0], description="Goal weight in kilograms")
    target_date: Optional[str] = Field(None, examples=["2026-12-31"], description="Date the goal should be reached")


class FitnessAssessmentStep(BaseModel):
    """Step 2: activity level and training preferences."""

    activity_level: ActivityLevel = Field(..., examples=["MODERATE"])
    training_styles: List[TrainingStyle] = Field(..., min_length=1, examples=[["STRENGTH", "HIIT"]])
    days_per_week: int = Field(..., ge=1, le=7, examples=[4])
    session_minutes: int = Field(..., ge=15, le=180, examples=[45])
    equipment: List[Equipment] = Field(..., min_length=1, examples=[["DUMBBELLS"]])
    fitness_level: FitnessLevel = Field(..., examples=["INTERMEDIATE"])


class HealthNutritionStep(BaseModel):
    """Step 3: limitations and dietary preferences."""

    injuries_limitations: Optional[str] = None
    diet_preferences: List[DietPreference] = Field(default_factory=lambda: [DietPreference.NO_RESTRICTIONS])
    food_allergies: Optional[str] = None
    cuisine_preferences: Optional[List[str]] = None
    foods_to_avoid: Optional[str] = None


class GoalsMotivationStep(BaseModel):
    """Step 4: what the user wants and how to push them."""

    primary_goal: PrimaryGoal = Field(..., examples=["LOSE_WEIGHT"])
    motivation_style: MotivationStyle = Field(..., examples=["GENTLE"])


class ConsentStep(BaseModel):
    """Step 5: permissions. Both acknowledgements are mandatory."""

    photo_permission: bool = False
    medical_consent: bool
    terms_accepted: bool

    @field_validator("medical_consent")
    @classmethod
    def _medical_consent_given(cls, value: bool) -> bool:
        if value is not True:
            raise ValueError("You must acknowledge the medical disclaimer")
        return value

    @field_validator("terms_accepted")
    @classmethod
    def _terms_accepted(cls, value: bool) -> bool:
        if value is not True:
            raise ValueError("You must accept the terms and conditions")
        return value


class IntakeFormRequest(
    PersonalInfoStep,
    PhysicalProfileStep,
    FitnessAssessmentStep,
    HealthNutritionStep,
    GoalsMotivationStep,
    ConsentStep,
):
    """Complete intake submission: every step's fields in one payload."""


INTAKE_STEPS = [
    ("personal_info", "Personal Information", PersonalInfoStep),
    ("physical_profile", "Physical Profile", PhysicalProfileStep),
    ("fitness_assessment", "Fitness Assessment", FitnessAssessmentStep),
    ("health_nutrition", "Health & Nutrition", HealthNutritionStep),
    ("goals_motivation", "Goals & Motivation", GoalsMotivationStep),
    ("consent", "Terms & Consent", ConsentStep),
]


class IntakeStepInfo(BaseModel):
    step: int
    key: str
    title: str
    fields: List[str]


class StepValidationResult(BaseModel):
    """Outcome of validating a single wizard step."""

    success: bool = True
    valid: bool
    step: int
    errors: Dict[str, str] = {}
    next_step: Optional[int] = None


class IntakeSubmitResponse(BaseModel):
    success: bool = True
    job_id: int
    intake_form_id: int
    message: str
