import logging
from collections.abc import Mapping

from dropcheck.config import settings
from dropcheck.exceptions import (
    InvalidRecommendationRequest,
    MalformedModelOutput,
    RecommendationGenerationFailed,
)
from dropcheck.schemas.profile import Gender, UserProfile
from dropcheck.schemas.recommendation import RecommendationBundle, RecommendationRequest
from dropcheck.schemas.test_result import TestResult
from dropcheck.services.prompt import render_prompt
from dropcheck.services.validation import validate_model_output, validate_recommendation_request

logger = logging.getLogger(__name__)


def build_recommendation_request(profile: UserProfile, result: TestResult) -> dict:
    """Map a stored profile and a test result onto the recommendation request shape."""
    details = profile.family_history_details or ""
    payload = {
        "age": profile.age,
        "height_cm": profile.height,
        "weight_kg": profile.weight,
        "gender": profile.gender.value,
        "family_history": [item.strip() for item in details.split(",") if item.strip()],
        "regular_medications": (profile.regular_medications or "").strip() or "None",
        "dietary_preference": profile.dietary_preferences.value,
        "supplement_use": list(profile.supplement_use),
        "fatigue_level": profile.fatigue_level,
        "dizziness_level": profile.dizziness_level,
        "pale_skin_or_nails": profile.pale_skin_or_nails,
        "shortness_of_breath": profile.shortness_of_breath,
        "polyuria": profile.polyuria,
        "polydipsia": profile.polydipsia,
        "polyphagia": profile.polyphagia,
        "hemoglobin": result.hemoglobin,
        "glucose": result.glucose,
        "crp": result.crp,
    }
    if profile.gender == Gender.FEMALE:
        if profile.duration_of_periods is not None:
            payload["duration_of_periods"] = profile.duration_of_periods
        if profile.severity_of_periods is not None:
            payload["severity_of_periods"] = profile.severity_of_periods.value
        payload["irregular_cycles_or_spotting"] = profile.irregular_cycles_or_spotting
    return payload


def _build_llm():
    if not settings.openai_api_key:
        raise RecommendationGenerationFailed("OPENAI_API_KEY is missing")
    try:
        from llama_index.llms.openai import OpenAI
    except ImportError as exc:
        raise RecommendationGenerationFailed("llama_index is not installed") from exc

    return OpenAI(
        model=settings.recommendation_model,
        api_key=settings.openai_api_key,
        temperature=settings.recommendation_temperature,
        timeout=settings.recommendation_timeout_seconds,
        max_retries=settings.recommendation_max_retries,
    )


async def request_recommendations(
    request: Mapping | RecommendationRequest,
    llm=None,
) -> RecommendationBundle:
    """Validate ``request``, ask the model for advice and validate what comes back.

    Raises ``InvalidRecommendationRequest`` before any outbound call,
    ``RecommendationGenerationFailed`` when the call itself fails and
    ``MalformedModelOutput`` when the response does not match the bundle schema.
    Concurrent calls for the same input are not coalesced.
    """
    checked = validate_recommendation_request(request)
    if not checked.ok:
        raise InvalidRecommendationRequest("Invalid recommendation request", details=checked.errors)

    prompt = render_prompt(checked.value)
    if llm is None:
        llm = _build_llm()

    logger.info("Requesting recommendations from %s", getattr(llm, "model", type(llm).__name__))
    try:
        response = await llm.acomplete(prompt)
    except Exception as exc:
        logger.warning("Recommendation model call failed: %s", exc)
        raise RecommendationGenerationFailed(str(exc) or "Model call failed") from exc

    parsed = validate_model_output(getattr(response, "text", str(response)))
    if not parsed.ok:
        logger.warning("Model output failed schema validation: %s", parsed.errors)
        raise MalformedModelOutput("Malformed model output", details=parsed.errors)
    return parsed.value
