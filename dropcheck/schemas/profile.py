from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

CM_PER_INCH = 2.54
KG_PER_POUND = 0.453592


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class DietaryPreference(str, Enum):
    VEGETARIAN = "Vegetarian"
    NON_VEGETARIAN = "Non-vegetarian"


class PeriodSeverity(str, Enum):
    LIGHT = "Light"
    MODERATE = "Moderate"
    HEAVY = "Heavy"


class UserProfile(BaseModel):
    """Stored health profile. Height is always centimetres and weight kilograms."""

    model_config = ConfigDict(allow_inf_nan=False)

    age: int = Field(ge=1, le=120)
    height: float = Field(gt=0, description="Height in cm")
    weight: float = Field(gt=0, description="Weight in kg")
    gender: Gender
    family_history: bool = False
    family_history_details: str | None = Field(default=None, description="Comma separated inherited conditions")
    regular_medications: str | None = None
    duration_of_periods: float | None = Field(default=None, ge=0)
    severity_of_periods: PeriodSeverity | None = None
    irregular_cycles_or_spotting: bool = False
    dietary_preferences: DietaryPreference
    supplement_use: list[str] = Field(default_factory=list)
    fatigue_level: int = Field(default=5, ge=1, le=10)
    dizziness_level: int = Field(default=5, ge=1, le=10)
    pale_skin_or_nails: int = Field(default=5, ge=1, le=10)
    shortness_of_breath: int = Field(default=5, ge=1, le=10)
    polyuria: int = Field(default=1, ge=1, le=10, description="Frequent urination")
    polydipsia: int = Field(default=1, ge=1, le=10, description="Frequent thirst")
    polyphagia: int = Field(default=1, ge=1, le=10, description="Frequent hunger")
    medical_history: str | None = None


class ProfileSubmission(UserProfile):
    height_unit: Literal["cm", "in"] = "cm"
    weight_unit: Literal["kg", "lbs"] = "kg"

    def to_profile(self) -> UserProfile:
        data = self.model_dump(exclude={"height_unit", "weight_unit"})
        if self.height_unit == "in":
            data["height"] = self.height * CM_PER_INCH
        if self.weight_unit == "lbs":
            data["weight"] = self.weight * KG_PER_POUND
        return UserProfile(**data)
