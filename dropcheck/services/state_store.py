import json
import logging
from datetime import date, datetime, timezone
from typing import Any
from uuid import uuid4

from pydantic import ValidationError
from sqlalchemy.orm import Session

from dropcheck.models.app_state import AppStateRecord
from dropcheck.schemas.profile import UserProfile
from dropcheck.schemas.recommendation import RecommendationBundle
from dropcheck.schemas.test_result import TestResult

logger = logging.getLogger(__name__)

PROFILE_KEY = "userProfile"
HISTORY_KEY = "testHistory"
RECOMMENDATIONS_KEY = "recommendations"


class StateStore:
    """Per-user profile, test history and cached recommendations.

    Each of the three entries is read and replaced wholesale; nothing is
    patched in place.
    """

    def __init__(self, db: Session, user_id: str):
        self.db = db
        self.user_id = user_id

    def _record(self, key: str) -> AppStateRecord | None:
        return (
            self.db.query(AppStateRecord)
            .filter(AppStateRecord.user_id == self.user_id, AppStateRecord.key == key)
            .first()
        )

    def has(self, key: str) -> bool:
        return self._record(key) is not None

    def read(self, key: str) -> Any | None:
        record = self._record(key)
        if record is None:
            return None
        try:
            return json.loads(record.value)
        except json.JSONDecodeError:
            logger.warning("Failed to decode stored %s for user %s", key, self.user_id)
            return None

    def write(self, key: str, value: Any) -> None:
        record = self._record(key)
        encoded = json.dumps(value)
        if record is None:
            record = AppStateRecord(user_id=self.user_id, key=key, value=encoded)
        else:
            record.value = encoded
            record.updated_at = datetime.now(timezone.utc)
        self.db.add(record)
        self.db.commit()

    # -- profile -----------------------------------------------------------
    def get_profile(self) -> UserProfile | None:
        raw = self.read(PROFILE_KEY)
        if raw is None:
            return None
        try:
            return UserProfile.model_validate(raw)
        except ValidationError:
            logger.warning("Stored profile for user %s no longer validates", self.user_id)
            return None

    def replace_profile(self, profile: UserProfile) -> UserProfile:
        """Store ``profile``; cached bundles were built from the old one and are dropped."""
        self.write(PROFILE_KEY, profile.model_dump(mode="json"))
        if self.has(RECOMMENDATIONS_KEY):
            self.write(RECOMMENDATIONS_KEY, {})
        return profile

    # -- history -----------------------------------------------------------
    def list_results(self) -> list[TestResult]:
        raw = self.read(HISTORY_KEY)
        if not isinstance(raw, list):
            return []
        results = []
        for item in raw:
            try:
                results.append(TestResult.model_validate(item))
            except ValidationError:
                logger.warning("Skipping undecodable test result for user %s: %r", self.user_id, item)
        return results

    def replace_history(self, results: list[TestResult]) -> None:
        self.write(HISTORY_KEY, [r.model_dump(mode="json") for r in results])

    def latest_result(self) -> TestResult | None:
        results = self.list_results()
        return results[0] if results else None

    def get_result(self, result_id: str) -> TestResult | None:
        return next((r for r in self.list_results() if r.id == result_id), None)

    def add_result(self, hemoglobin: float, glucose: float, crp: float, taken_on: str | None = None) -> TestResult:
        result = TestResult(
            id=str(uuid4()),
            date=taken_on or date.today().isoformat(),
            hemoglobin=hemoglobin,
            glucose=glucose,
            crp=crp,
        )
        self.replace_history([result, *self.list_results()])
        return result

    def remove_result(self, result_id: str) -> bool:
        results = self.list_results()
        remaining = [r for r in results if r.id != result_id]
        if len(remaining) == len(results):
            return False
        self.replace_history(remaining)

        cached = self.read(RECOMMENDATIONS_KEY)
        if isinstance(cached, dict) and result_id in cached:
            cached.pop(result_id)
            self.write(RECOMMENDATIONS_KEY, cached)
        return True

    # -- recommendations ---------------------------------------------------
    def get_recommendations(self, result_id: str) -> RecommendationBundle | None:
        cached = self.read(RECOMMENDATIONS_KEY)
        if not isinstance(cached, dict) or result_id not in cached:
            return None
        try:
            return RecommendationBundle.model_validate(cached[result_id])
        except ValidationError:
            logger.warning("Dropping invalid cached recommendations for result %s", result_id)
            return None

    def cache_recommendations(self, result_id: str, bundle: RecommendationBundle) -> None:
        cached = self.read(RECOMMENDATIONS_KEY)
        if not isinstance(cached, dict):
            cached = {}
        cached[result_id] = bundle.model_dump(mode="json")
        self.write(RECOMMENDATIONS_KEY, cached)
