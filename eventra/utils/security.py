"""
Security utilities and authentication
"""

import time
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from eventra.core.config import settings
from eventra.core.errors import AuthenticationError, RateLimitedError

# Simple in-memory rate limiter
rate_limiter = defaultdict(list)

security = HTTPBearer(auto_error=False)

@dataclass
class AuthUser:
    """Caller identity taken from a verified auth-provider token"""
    id: str
    email: Optional[str] = None
    is_admin: bool = False
    subscription_tier: str = "free"

def decode_access_token(token: str) -> Dict[str, Any]:
    """Verify an auth-provider access token and return its claims"""
    try:
        return jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.SUPABASE_JWT_AUDIENCE,
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token has expired")
    except jwt.PyJWTError:
        raise AuthenticationError("Invalid authentication token")

def create_access_token(
    user_id: str,
    email: Optional[str] = None,
    app_metadata: Optional[Dict[str, Any]] = None,
    expires_delta: Optional[timedelta] = None
) -> str:
    """Mint a token shaped like the auth provider's, for local development and tests"""
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(hours=1))
    claims = {
        "sub": user_id,
        "email": email,
        "aud": settings.SUPABASE_JWT_AUDIENCE,
        "role": "authenticated",
        "app_metadata": app_metadata or {},
        "exp": expire,
    }
    return jwt.encode(claims, settings.SUPABASE_JWT_SECRET, algorithm=settings.JWT_ALGORITHM)

def user_from_claims(claims: Dict[str, Any]) -> AuthUser:
    user_id = claims.get("sub")
    if not user_id:
        raise AuthenticationError("Token has no subject")

    app_metadata = claims.get("app_metadata") or {}
    is_admin = bool(app_metadata.get("is_admin")) or app_metadata.get("role") == "admin"

    return AuthUser(
        id=str(user_id),
        email=claims.get("email"),
        is_admin=is_admin,
        subscription_tier=app_metadata.get("subscription_tier") or "free",
    )

def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> AuthUser:
    """Require a valid bearer token"""
    if credentials is None:
        raise AuthenticationError("Not authenticated")
    return user_from_claims(decode_access_token(credentials.credentials))

def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Optional[AuthUser]:
    """Resolve the caller when a token is sent; anonymous otherwise"""
    if credentials is None:
        return None
    return user_from_claims(decode_access_token(credentials.credentials))

def rate_limit_check(client_ip: str, limit: int = None, bucket: str = "default") -> bool:
    """Simple rate limiting by IP address"""
    if limit is None:
        limit = settings.RATE_LIMIT_PER_MINUTE

    key = f"{bucket}:{client_ip}"
    current_time = time.time()
    minute_ago = current_time - 60

    # Clean old requests
    recent = [
        req_time for req_time in rate_limiter.get(key, [])
        if req_time > minute_ago
    ]

    if len(recent) >= limit:
        rate_limiter[key] = recent
        return False

    recent.append(current_time)
    rate_limiter[key] = recent
    prune_rate_limiter(minute_ago)
    return True

def prune_rate_limiter(cutoff: float) -> None:
    """Drop buckets whose requests are all older than the cutoff"""
    stale = [
        key for key, times in rate_limiter.items()
        if not times or times[-1] <= cutoff
    ]
    for key in stale:
        del rate_limiter[key]

def enforce_rate_limit(request: Request, limit: int = None, bucket: str = "default") -> None:
    if not rate_limit_check(get_client_ip(request), limit=limit, bucket=bucket):
        raise RateLimitedError("Rate limit exceeded. Please try again later.")

def get_client_ip(request) -> str:
    """Extract client IP from request"""
    # Check for forwarded IP first (for reverse proxy setups)
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    return request.client.host if request.client else "unknown"
