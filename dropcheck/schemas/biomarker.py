from enum import Enum

from pydantic import BaseModel


class BiomarkerKind(str, Enum):
    HEMOGLOBIN = "hemoglobin"
    GLUCOSE = "glucose"
    CRP = "crp"


class BiomarkerStatus(str, Enum):
    NORMAL = "Normal"
    AT_RISK = "At Risk"
    NEEDS_ATTENTION = "Needs Attention"


class ReferenceRangeItem(BaseModel):
    kind: BiomarkerKind
    name: str
    unit: str
    normal: tuple[float, float]
    at_risk: tuple[float, float]
    one_sided: bool
    display_range: str


class BiomarkerReading(BaseModel):
    kind: BiomarkerKind
    name: str
    value: float
    unit: str
    reference_range: str
    status: BiomarkerStatus


class BiomarkerTrend(BaseModel):
    kind: BiomarkerKind
    name: str
    previous: float
    current: float
    delta_percent: float
    direction: str
    current_status: BiomarkerStatus
    previous_date: str
    current_date: str
