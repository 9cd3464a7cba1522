from pydantic import BaseModel, ConfigDict, Field, model_validator

from dropcheck.schemas.profile import DietaryPreference, Gender, PeriodSeverity

MENSTRUAL_FIELDS = ("duration_of_periods", "severity_of_periods", "irregular_cycles_or_spotting")


class RecommendationRequest(BaseModel):
    """Profile and lab values sent to the model. Menstrual fields are only valid for Female users."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    age: float = Field(description="The age of the user.")
    height_cm: float = Field(description="The height of the user in centimeters.")
    weight_kg: float = Field(description="The weight of the user in kilograms.")
    gender: Gender
    family_history: list[str] = Field(description="Inherited diseases in the family history.")
    regular_medications: str
    dietary_preference: DietaryPreference
    supplement_use: list[str]

    fatigue_level: int = Field(ge=1, le=10)
    dizziness_level: int = Field(ge=1, le=10)
    pale_skin_or_nails: int = Field(ge=1, le=10)
    shortness_of_breath: int = Field(ge=1, le=10)
    polyuria: int | None = Field(default=None, ge=1, le=10)
    polydipsia: int | None = Field(default=None, ge=1, le=10)
    polyphagia: int | None = Field(default=None, ge=1, le=10)

    duration_of_periods: float | None = Field(default=None, ge=0)
    severity_of_periods: PeriodSeverity | None = None
    irregular_cycles_or_spotting: bool | None = None

    hemoglobin: float
    glucose: float
    crp: float

    @model_validator(mode="after")
    def menstrual_fields_require_female(self):
        if self.gender != Gender.FEMALE:
            present = [name for name in MENSTRUAL_FIELDS if getattr(self, name) is not None]
            if present:
                raise ValueError(f"menstrual-cycle fields are only accepted when gender is Female: {', '.join(present)}")
        return self


class RecommendationItem(BaseModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)


class RecommendationSection(BaseModel):
    introduction: str = Field(min_length=1)
    recommendations: list[RecommendationItem] = Field(min_length=1)
    scientific_rationale: str = Field(min_length=1)

    @model_validator(mode="after")
    def introduction_not_blank(self):
        if not self.introduction.strip():
            raise ValueError("introduction must not be blank")
        return self


class RecommendationBundle(BaseModel):
    diet_advice: RecommendationSection
    exercise_routine: RecommendationSection
    lifestyle_tips: RecommendationSection


SECTION_TITLES = {
    "diet_advice": "Diet Advice",
    "exercise_routine": "Exercise Routine",
    "lifestyle_tips": "Lifestyle Tips",
}
SECTION_ORDER = tuple(SECTION_TITLES)
