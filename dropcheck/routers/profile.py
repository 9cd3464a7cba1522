from fastapi import APIRouter, Depends, HTTPException

from dropcheck.routers.deps import get_state_store
from dropcheck.schemas.profile import ProfileSubmission
from dropcheck.services.state_store import StateStore

router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.get("")
def get_profile(store: StateStore = Depends(get_state_store)):
    profile = store.get_profile()
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return {"statusCode": 200, "message": "Success", "data": profile.model_dump(mode="json")}


@router.put("")
def replace_profile(payload: ProfileSubmission, store: StateStore = Depends(get_state_store)):
    profile = store.replace_profile(payload.to_profile())
    return {"statusCode": 200, "message": "Profile saved", "data": profile.model_dump(mode="json")}
