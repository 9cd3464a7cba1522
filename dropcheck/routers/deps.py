from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from dropcheck.config import settings
from dropcheck.database import get_db
from dropcheck.models.app_state import USER_ID_MAX_LENGTH
from dropcheck.seed.demo_history import seed_demo_history
from dropcheck.services.device_simulator import DeviceSimulator
from dropcheck.services.state_store import StateStore


def get_user_id(x_user_id: str | None = Header(default=None)) -> str:
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    user_id = x_user_id.strip()
    if len(user_id) > USER_ID_MAX_LENGTH:
        raise HTTPException(status_code=401, detail=f"X-User-Id must be at most {USER_ID_MAX_LENGTH} characters")
    return user_id


def get_state_store(db: Session = Depends(get_db), user_id: str = Depends(get_user_id)) -> StateStore:
    store = StateStore(db, user_id)
    if settings.seed_demo_history:
        seed_demo_history(store)
    return store


def get_device_simulator() -> DeviceSimulator:
    return DeviceSimulator()
