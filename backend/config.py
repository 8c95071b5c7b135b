import os
from pydantic_settings import BaseSettings


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseSettings):
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    ai_timeout_seconds: float = 20.0
    ai_retry_delays: list[float] = [0.2, 0.4, 0.8]  # 429 backoff only

    admin_key: str = ""
    environment: str = "development"  # "development" | "production"
    debug: bool = False
    log_level: str = "INFO"

    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]

    rank_rate_limit: str = "10/5 minutes"
    score_rate_limit: str = "30/minute"

    match_strategy: str = "substring"  # "substring" | "fuzzy"

    # Ranking pipeline
    prefilter_window: int = 50
    candidate_store_path: str = ""  # JSON list of candidate records; empty = no pool

    # Versioned capability data; empty = bundled files under services/data
    keywords_path: str = ""
    taxonomy_path: str = ""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def expose_error_details(self) -> bool:
        return self.debug or not self.is_production


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
