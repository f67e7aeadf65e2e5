"""
Per-client rate limiting shared by the routers and the application.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

from ecostats.config import settings


limiter = Limiter(key_func=get_remote_address)

# Limit string applied to every analysis endpoint
DEFAULT_LIMIT = f"{settings.rate_limit_requests}/minute"
