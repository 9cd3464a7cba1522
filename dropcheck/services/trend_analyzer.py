from dropcheck.schemas.biomarker import BiomarkerTrend
from dropcheck.schemas.test_result import TestResult
from dropcheck.services.biomarker_evaluator import REFERENCE_RANGES, classify

STABLE_BAND_PERCENT = 5.0


def compute_delta(prev: float | None, curr: float | None) -> float | None:
    if prev is None or curr is None or prev == 0:
        return None
    return ((curr - prev) / abs(prev)) * 100.0


def direction_for(delta: float) -> str:
    if delta > STABLE_BAND_PERCENT:
        return "up"
    if delta < -STABLE_BAND_PERCENT:
        return "down"
    return "stable"


def summarize_trends(results: list[TestResult]) -> list[BiomarkerTrend]:
    """Compare the two newest results. ``results`` is newest first, as the history is stored."""
    if len(results) < 2:
        return []
    current, previous = results[0], results[1]

    output = []
    for kind, ranges in REFERENCE_RANGES.items():
        prev_value = getattr(previous, kind.value)
        curr_value = getattr(current, kind.value)
        delta = compute_delta(prev_value, curr_value)
        if delta is None:
            continue
        output.append(
            BiomarkerTrend(
                kind=kind,
                name=ranges.name,
                previous=prev_value,
                current=curr_value,
                delta_percent=round(delta, 2),
                direction=direction_for(delta),
                current_status=classify(kind, curr_value),
                previous_date=previous.date,
                current_date=current.date,
            )
        )
    return output
