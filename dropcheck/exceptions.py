class RecommendationError(Exception):
    """Base class for failures of the recommendation flow."""

    error_name = "RecommendationError"
    status_code = 500
    public_message = "Could not load recommendations. Please try again later."

    def __init__(self, message: str, details: list | None = None):
        super().__init__(message)
        self.details = details or []


class InvalidRecommendationRequest(RecommendationError):
    error_name = "InvalidRequest"
    status_code = 422
    public_message = "Invalid recommendation request"


class RecommendationGenerationFailed(RecommendationError):
    error_name = "RecommendationGenerationFailed"
    status_code = 502


class MalformedModelOutput(RecommendationError):
    error_name = "MalformedModelOutput"
    status_code = 502


class DeviceNotFound(Exception):
    def __init__(self, name: str):
        super().__init__(f"Device {name!r} not found")
        self.name = name
