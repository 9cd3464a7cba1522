from pydantic import BaseModel, ConfigDict, Field

from dropcheck.schemas.biomarker import BiomarkerReading, BiomarkerStatus


class TestResult(BaseModel):
    """A completed blood test: three lab values stamped with an id and date."""

    __test__ = False
    model_config = ConfigDict(allow_inf_nan=False)

    id: str
    date: str = Field(description="ISO date the test was taken")
    hemoglobin: float = Field(description="Hemoglobin in g/dL")
    glucose: float = Field(description="Glucose in mg/dL")
    crp: float = Field(description="C-reactive protein in mg/L")


class TestResultCreate(BaseModel):
    __test__ = False
    model_config = ConfigDict(allow_inf_nan=False)

    hemoglobin: float
    glucose: float
    crp: float
    date: str | None = Field(default=None, description="ISO date; defaults to today")


class EvaluatedResult(BaseModel):
    result: TestResult
    readings: list[BiomarkerReading]
    overall_status: BiomarkerStatus
