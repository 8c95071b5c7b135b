"""Error taxonomy shared by the scoring and ranking services.

Handlers in ``api/errors.py`` map these to HTTP responses. ``UpstreamAIError`` never
reaches the client: the ranking pipeline converts it into a fallback result.
"""


class EngineError(Exception):
    """Base class for expected engine failures."""

    status_code: int = 500
    public_message: str = "Internal error"


class PayloadValidationError(EngineError):
    status_code = 400
    public_message = "Invalid request payload"

    def __init__(self, message: str = "", details: object = None) -> None:
        super().__init__(message or self.public_message)
        self.details = details


class AuthError(EngineError):
    status_code = 401
    public_message = "Unauthorized"


class UpstreamAIError(EngineError):
    """The AI ranking call timed out, failed, or returned unusable output."""

    status_code = 502
    public_message = "AI ranking service unavailable"


class ScoringError(EngineError):
    public_message = "Failed to score CV"


class RankingError(EngineError):
    public_message = "Failed to rank candidates"


class CandidateStoreError(RankingError):
    """The candidate pool could not be fetched."""
