"""Classification of lab values against the static DropCheck reference ranges."""
from collections.abc import Iterable
from dataclasses import dataclass

from dropcheck.schemas.biomarker import BiomarkerKind, BiomarkerReading, BiomarkerStatus, ReferenceRangeItem
from dropcheck.schemas.test_result import EvaluatedResult, TestResult


@dataclass(frozen=True)
class ReferenceRange:
    name: str
    unit: str
    normal: tuple[float, float]
    at_risk: tuple[float, float]
    display_range: str
    one_sided: bool = False


REFERENCE_RANGES: dict[BiomarkerKind, ReferenceRange] = {
    BiomarkerKind.HEMOGLOBIN: ReferenceRange("Hemoglobin", "g/dL", (12.0, 15.5), (11.0, 11.9), "12.0 - 15.5"),
    BiomarkerKind.GLUCOSE: ReferenceRange("Glucose", "mg/dL", (70.0, 99.0), (100.0, 125.0), "70 - 99"),
    # CRP only has an upper bound that matters.
    BiomarkerKind.CRP: ReferenceRange("CRP", "mg/L", (0.0, 3.0), (3.1, 10.0), "< 3.0", one_sided=True),
}

STATUS_SEVERITY = {
    BiomarkerStatus.NORMAL: 0,
    BiomarkerStatus.AT_RISK: 1,
    BiomarkerStatus.NEEDS_ATTENTION: 2,
}


def classify(kind: BiomarkerKind | str, value: float) -> BiomarkerStatus:
    """Map a lab value to its status tier.

    Two-sided markers only check the at-risk band below the normal interval, so
    anything above the normal upper bound is Needs Attention (a glucose of 110
    never reports At Risk). Unknown kinds raise ``ValueError``.
    """
    ranges = REFERENCE_RANGES[BiomarkerKind(kind)]
    normal_low, normal_high = ranges.normal
    at_risk_low, at_risk_high = ranges.at_risk

    if ranges.one_sided:
        if value <= normal_high:
            return BiomarkerStatus.NORMAL
        if value <= at_risk_high:
            return BiomarkerStatus.AT_RISK
        return BiomarkerStatus.NEEDS_ATTENTION

    if normal_low <= value <= normal_high:
        return BiomarkerStatus.NORMAL
    if at_risk_low <= value < normal_low:
        return BiomarkerStatus.AT_RISK
    return BiomarkerStatus.NEEDS_ATTENTION


def overall_status(statuses: Iterable[BiomarkerStatus]) -> BiomarkerStatus:
    return max(statuses, key=STATUS_SEVERITY.__getitem__, default=BiomarkerStatus.NORMAL)


def evaluate_result(result: TestResult) -> EvaluatedResult:
    readings = []
    for kind, ranges in REFERENCE_RANGES.items():
        value = getattr(result, kind.value)
        readings.append(
            BiomarkerReading(
                kind=kind,
                name=ranges.name,
                value=value,
                unit=ranges.unit,
                reference_range=ranges.display_range,
                status=classify(kind, value),
            )
        )
    return EvaluatedResult(
        result=result,
        readings=readings,
        overall_status=overall_status(r.status for r in readings),
    )


def reference_range_items() -> list[ReferenceRangeItem]:
    return [
        ReferenceRangeItem(
            kind=kind,
            name=r.name,
            unit=r.unit,
            normal=r.normal,
            at_risk=r.at_risk,
            one_sided=r.one_sided,
            display_range=r.display_range,
        )
        for kind, r in REFERENCE_RANGES.items()
    ]
