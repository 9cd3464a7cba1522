from dropcheck.schemas.test_result import TestResult
from dropcheck.services.state_store import HISTORY_KEY, StateStore


DEMO_HISTORY = [
    {"id": "1", "date": "2023-10-26", "hemoglobin": 13.5, "glucose": 98, "crp": 1.2},
    {"id": "2", "date": "2023-10-19", "hemoglobin": 12.8, "glucose": 115, "crp": 2.5},
    {"id": "3", "date": "2023-10-12", "hemoglobin": 11.9, "glucose": 125, "crp": 4.2},
    {"id": "4", "date": "2023-10-05", "hemoglobin": 13.2, "glucose": 95, "crp": 0.9},
]


def seed_demo_history(store: StateStore) -> bool:
    """Give a user without any stored history the demo results. Returns True when seeded."""
    if store.has(HISTORY_KEY):
        return False
    store.replace_history([TestResult(**item) for item in DEMO_HISTORY])
    return True
