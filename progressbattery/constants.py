from __future__ import annotations

APP_ORG = "ProgressBattery"
APP_NAME = "Progress Battery"
APP_VERSION = "1.0.0"
APP_DESCRIPTION = "A simple menu bar app to track the progress of various time metrics."

# Preference defaults
DEFAULT_BIRTH_YEAR = 1998
DEFAULT_LIFE_EXPECTANCY_YEARS = 80.0
DEFAULT_REFRESH_INTERVAL_SECONDS = 60.0

MIN_BIRTH_YEAR = 1900

MIN_LIFE_EXPECTANCY_YEARS = 1.0
MAX_LIFE_EXPECTANCY_YEARS = 150.0

MIN_REFRESH_INTERVAL_SECONDS = 1.0
MAX_REFRESH_INTERVAL_SECONDS = 3600.0

# Preferences dialog
LIFE_EXPECTANCY_SLIDER_RANGE = (60, 120)
REFRESH_INTERVAL_CHOICES = (
    ("30 seconds", 30.0),
    ("1 minute", 60.0),
    ("5 minutes", 300.0),
)

# Tray icon
ICON_WIDTH = 24
ICON_HEIGHT = 11

LOG_LEVEL_ENV = "PROGRESS_BATTERY_LOG_LEVEL"
