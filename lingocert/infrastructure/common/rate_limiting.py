from slowapi import Limiter
from slowapi.util import get_remote_address

from lingocert.config import get_settings

# Counters are per endpoint and client, so distinct certificate ids share one budget
limiter = Limiter(
    key_func=get_remote_address,
    key_style="endpoint",
    enabled=get_settings().RATE_LIMIT_ENABLED,
)


def certificate_verify_limit() -> str:
    return get_settings().CERTIFICATE_VERIFY_RATE_LIMIT
