from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from dropcheck.routers.deps import get_state_store
from dropcheck.schemas.test_result import TestResultCreate
from dropcheck.services.biomarker_evaluator import evaluate_result
from dropcheck.services.exporter import HISTORY_CSV_FILENAME, history_to_csv
from dropcheck.services.state_store import StateStore
from dropcheck.services.trend_analyzer import summarize_trends

router = APIRouter(prefix="/api/results", tags=["results"])


@router.get("")
def list_results(store: StateStore = Depends(get_state_store)):
    evaluated = [evaluate_result(r) for r in store.list_results()]
    return {
        "statusCode": 200,
        "message": "Success",
        "data": {
            "results": [
                {**e.result.model_dump(mode="json"), "overall_status": e.overall_status.value}
                for e in evaluated
            ],
            "total": len(evaluated),
        },
    }


@router.post("")
def add_result(payload: TestResultCreate, store: StateStore = Depends(get_state_store)):
    result = store.add_result(payload.hemoglobin, payload.glucose, payload.crp, taken_on=payload.date)
    return {"statusCode": 200, "message": "Test result saved", "data": evaluate_result(result).model_dump(mode="json")}


@router.get("/latest")
def latest_result(store: StateStore = Depends(get_state_store)):
    result = store.latest_result()
    if result is None:
        raise HTTPException(status_code=404, detail="No test results yet")
    return {"statusCode": 200, "message": "Success", "data": evaluate_result(result).model_dump(mode="json")}


@router.get("/trends")
def trends(store: StateStore = Depends(get_state_store)):
    rows = summarize_trends(store.list_results())
    return {"statusCode": 200, "message": "Success", "data": [row.model_dump(mode="json") for row in rows]}


@router.get("/export.csv")
def export_history(store: StateStore = Depends(get_state_store)):
    return Response(
        content=history_to_csv(store.list_results()),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{HISTORY_CSV_FILENAME}"'},
    )


@router.get("/{result_id}")
def get_result(result_id: str, store: StateStore = Depends(get_state_store)):
    result = store.get_result(result_id)
    if result is None:
        raise HTTPException(status_code=404, detail="Test result not found")
    return {"statusCode": 200, "message": "Success", "data": evaluate_result(result).model_dump(mode="json")}


@router.delete("/{result_id}")
def delete_result(result_id: str, store: StateStore = Depends(get_state_store)):
    if not store.remove_result(result_id):
        raise HTTPException(status_code=404, detail="Test result not found")
    return {"statusCode": 200, "message": "Test result deleted", "data": None}
