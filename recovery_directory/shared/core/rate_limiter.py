# 📄 File: recovery_directory/shared/core/rate_limiter.py
# 🧭 Purpose (Layman Explanation):
# Stops any one visitor from hammering the directory, for example by sending dozens
# of ownership claims or login attempts in a minute.
# 🧪 Purpose (Technical Summary):
# Process-wide slowapi Limiter keyed by client address, with the global default from
# settings. Routes add tighter limits through @limiter.limit.
# 🔗 Dependencies:
# slowapi, shared.config.settings
# 🔄 Connected Modules / Calls From:
# main.py (app.state.limiter, RateLimitExceeded handler), auth.py, claims.py

from slowapi import Limiter
from slowapi.util import get_remote_address

from recovery_directory.shared.config.settings import get_settings

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[get_settings().GLOBAL_RATE_LIMIT],
)


def claim_rate_limit() -> str:
    return get_settings().CLAIM_RATE_LIMIT


def auth_rate_limit() -> str:
    return get_settings().AUTH_RATE_LIMIT
