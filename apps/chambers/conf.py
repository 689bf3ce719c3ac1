# apps/chambers/conf.py
from django.conf import settings

DEFAULTS = {
    "SLOT_DURATIONS": [15, 30, 45, 60],
    "MIN_SESSION_MINUTES": 30,
    "MONTHLY_SCAN_MONTHS": 6,
    "CONFLICT_HORIZON_MONTHS": 12,
    "DEFAULT_UPCOMING_COUNT": 5,
    "MAX_UPCOMING_COUNT": 60,
}


def get_setting(name):
    """
    CHAMBER_SCHEDULING[name] from settings, falling back to DEFAULTS.
    """
    overrides = getattr(settings, "CHAMBER_SCHEDULING", {})
    return overrides.get(name, DEFAULTS[name])
