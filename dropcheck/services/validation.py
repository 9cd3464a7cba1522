import json
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from dropcheck.schemas.recommendation import RecommendationBundle, RecommendationRequest


@dataclass
class ValidationResult:
    """Tagged outcome of a validation: ``value`` is set when ``ok``, ``errors`` otherwise."""

    ok: bool
    value: Any = None
    errors: list[dict] = field(default_factory=list)

    @classmethod
    def success(cls, value: Any) -> "ValidationResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, errors: list[dict]) -> "ValidationResult":
        return cls(ok=False, errors=errors)


def _errors_from(exc: ValidationError) -> list[dict]:
    return [
        {"field": ".".join(str(part) for part in err["loc"]) or "__root__", "message": err["msg"]}
        for err in exc.errors()
    ]


def validate_recommendation_request(data: Mapping | RecommendationRequest) -> ValidationResult:
    if isinstance(data, RecommendationRequest):
        return ValidationResult.success(data)
    if not isinstance(data, Mapping):
        return ValidationResult.failure([{"field": "__root__", "message": "request must be an object"}])
    try:
        return ValidationResult.success(RecommendationRequest.model_validate(dict(data)))
    except ValidationError as exc:
        return ValidationResult.failure(_errors_from(exc))


def _extract_json_obj(raw_text: str) -> dict | None:
    match = re.search(r"\{.*\}", raw_text, flags=re.DOTALL)
    if not match:
        return None
    try:
        payload = json.loads(match.group(0))
    except json.JSONDecodeError:
        return None
    return payload if isinstance(payload, dict) else None


def validate_model_output(raw_text: str) -> ValidationResult:
    payload = _extract_json_obj(raw_text or "")
    if payload is None:
        return ValidationResult.failure([{"field": "__root__", "message": "model output contained no JSON object"}])
    try:
        return ValidationResult.success(RecommendationBundle.model_validate(payload))
    except ValidationError as exc:
        return ValidationResult.failure(_errors_from(exc))
