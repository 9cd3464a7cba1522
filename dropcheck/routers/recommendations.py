import logging

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from fastapi.responses import Response

from dropcheck.routers.deps import get_state_store, get_user_id
from dropcheck.services import recommender
from dropcheck.services.exporter import bundle_to_csv
from dropcheck.services.state_store import StateStore

router = APIRouter(prefix="/api/recommendations", tags=["recommendations"])
logger = logging.getLogger(__name__)


@router.post("")
async def recommendations_for_latest(
    refresh: bool = Query(default=False),
    store: StateStore = Depends(get_state_store),
):
    profile = store.get_profile()
    if profile is None:
        raise HTTPException(status_code=404, detail="Create your health profile first")
    latest = store.latest_result()
    if latest is None:
        raise HTTPException(status_code=404, detail="No test results yet. Start a test first")

    if not refresh:
        cached = store.get_recommendations(latest.id)
        if cached is not None:
            return {
                "statusCode": 200,
                "message": "Success",
                "data": {"result_id": latest.id, "cached": True, "recommendations": cached.model_dump()},
            }

    payload = recommender.build_recommendation_request(profile, latest)
    bundle = await recommender.request_recommendations(payload)
    store.cache_recommendations(latest.id, bundle)
    logger.info("Cached recommendations for result %s", latest.id)
    return {
        "statusCode": 200,
        "message": "Success",
        "data": {"result_id": latest.id, "cached": False, "recommendations": bundle.model_dump()},
    }


@router.post("/generate")
async def generate(payload: dict = Body(...), user_id: str = Depends(get_user_id)):
    bundle = await recommender.request_recommendations(payload)
    return {"statusCode": 200, "message": "Success", "data": bundle.model_dump()}


@router.get("/{result_id}")
def cached_recommendations(result_id: str, store: StateStore = Depends(get_state_store)):
    bundle = store.get_recommendations(result_id)
    if bundle is None:
        raise HTTPException(status_code=404, detail="No recommendations for this result")
    return {"statusCode": 200, "message": "Success", "data": bundle.model_dump()}


@router.get("/{result_id}/export.csv")
def export_recommendations(result_id: str, store: StateStore = Depends(get_state_store)):
    bundle = store.get_recommendations(result_id)
    if bundle is None:
        raise HTTPException(status_code=404, detail="No recommendations for this result")
    return Response(
        content=bundle_to_csv(bundle),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="DropCheck_Recommendations.csv"'},
    )
