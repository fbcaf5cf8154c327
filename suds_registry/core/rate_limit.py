from slowapi import Limiter
from slowapi.util import get_remote_address

from suds_registry.core.config import get_settings

# In-memory storage; each worker process keeps its own counters
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[get_settings().RATE_LIMIT_GENERAL],
)
