from fastapi import APIRouter, HTTPException, Query

from dropcheck.schemas.biomarker import BiomarkerKind
from dropcheck.services.biomarker_evaluator import REFERENCE_RANGES, classify, reference_range_items

router = APIRouter(prefix="/api/biomarkers", tags=["biomarkers"])


@router.get("/reference-ranges")
def reference_ranges():
    return {
        "statusCode": 200,
        "message": "Success",
        "data": [item.model_dump(mode="json") for item in reference_range_items()],
    }


@router.get("/{kind}/classify")
def classify_value(kind: str, value: float = Query(...)):
    try:
        biomarker = BiomarkerKind(kind.lower())
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown biomarker: {kind}")
    ranges = REFERENCE_RANGES[biomarker]
    return {
        "statusCode": 200,
        "message": "Success",
        "data": {
            "kind": biomarker.value,
            "value": value,
            "unit": ranges.unit,
            "reference_range": ranges.display_range,
            "status": classify(biomarker, value).value,
        },
    }
