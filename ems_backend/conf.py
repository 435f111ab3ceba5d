from django.conf import settings

DEFAULTS = {
    "WORKDAY_START": "09:00",
    "DEFAULT_ANNUAL_LEAVE": 20,
    "DEFAULT_SICK_LEAVE": 10,
    "DEFAULT_PERSONAL_LEAVE": 5,
    "LOGIN_LOCK_THRESHOLD": 5,
    "LOGIN_LOCK_MINUTES": 15,
    "AUTO_SEED": False,
    "HEATMAP_DAYS": 365,
    "TREND_DAYS": 30,
}


def ems_setting(name):
    """Read a value from settings.EMS, falling back to the built-in default."""
    return getattr(settings, "EMS", {}).get(name, DEFAULTS[name])
