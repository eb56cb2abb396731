"""Display-timing helpers for invitation expiry.

All functions take the current time explicitly and compare instants only,
so results do not depend on locale or local timezone. They drive UI urgency
and countdowns; whether an invitation can still be accepted is decided by
the backend flags on the Invitation.
"""

import math
from datetime import datetime, timedelta

EXPIRED_LABEL = "expired"
LESS_THAN_A_DAY_LABEL = "<1 day"
DEFAULT_EXPIRING_SOON_WINDOW = timedelta(days=2)

_ONE_DAY = timedelta(days=1)


def _remaining(expires_at: datetime, now: datetime) -> timedelta:
    if expires_at.tzinfo is None or now.tzinfo is None:
        raise ValueError("expires_at and now must be timezone-aware")
    return expires_at - now


def days_until_expiry(expires_at: datetime, now: datetime) -> int:
    """Whole days left before expiry, rounded up; 0 once expired."""
    remaining = _remaining(expires_at, now)
    if remaining <= timedelta(0):
        return 0
    return math.ceil(remaining / _ONE_DAY)


def time_until_expiry(expires_at: datetime, now: datetime) -> str:
    """Coarse countdown label.

    Returns:
        ``"expired"`` once ``expires_at <= now``, ``"<1 day"`` when the
        rounded-up day count is one, otherwise ``"N days"``.
    """
    days = days_until_expiry(expires_at, now)
    if days == 0:
        return EXPIRED_LABEL
    if days == 1:
        return LESS_THAN_A_DAY_LABEL
    return f"{days} days"


def is_expiring_soon(
    expires_at: datetime,
    now: datetime,
    window: timedelta = DEFAULT_EXPIRING_SOON_WINDOW,
) -> bool:
    """True iff ``0 < expires_at - now <= window``."""
    remaining = _remaining(expires_at, now)
    return timedelta(0) < remaining <= window


def is_past_expiry(expires_at: datetime, now: datetime) -> bool:
    return _remaining(expires_at, now) <= timedelta(0)
