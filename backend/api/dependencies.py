"""Shared dependencies for API routes."""

import hmac

from fastapi import Header, Request
from slowapi.util import get_remote_address

from config import settings
from services import gemini_client, keywords
from services.candidate_store import CandidateStore, InMemoryCandidateStore, JsonFileCandidateStore
from services.errors import AuthError
from services.keywords import MatchPredicate
from services.ranking import BaseRanker, GeminiRanker

# Also accepted outside production
DEV_ADMIN_KEY = "test-admin-key"


def client_ip(request: Request) -> str:
    """Rate-limit key: first X-Forwarded-For hop, then X-Real-IP, then the peer."""
    forwarded = request.headers.get("x-forwarded-for", "")
    first_hop = forwarded.split(",")[0].strip()
    if first_hop:
        return first_hop
    real_ip = request.headers.get("x-real-ip", "").strip()
    if real_ip:
        return real_ip
    return get_remote_address(request)


def get_match_predicate() -> MatchPredicate:
    return keywords.get_match_predicate(settings.match_strategy)


def get_candidate_store() -> CandidateStore:
    if settings.candidate_store_path:
        return JsonFileCandidateStore(settings.candidate_store_path)
    return InMemoryCandidateStore([])


def get_ai_ranker() -> BaseRanker | None:
    if not gemini_client.is_configured():
        return None
    return GeminiRanker(get_match_predicate(), timeout=settings.ai_timeout_seconds)


def _accepted_admin_keys() -> list[str]:
    accepted = [settings.admin_key] if settings.admin_key else []
    if not settings.is_production:
        accepted.append(DEV_ADMIN_KEY)
    return accepted


def require_admin(x_admin_key: str | None = Header(None)) -> None:
    provided = (x_admin_key or "").strip()
    if not provided:
        raise AuthError()
    if not any(hmac.compare_digest(provided, key) for key in _accepted_admin_keys()):
        raise AuthError()
