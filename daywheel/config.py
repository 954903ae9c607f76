"""Application configuration - single source of truth for all constants.

Contains ring geometry ratios, hit-test tolerances, gradient colors, enums
(PopupKind, HitKind, TaskSource) and the Flet palette.
Import from here instead of hardcoding values elsewhere so the painted ring
and the hit regions stay in agreement.
"""
from enum import Enum


class PopupKind(Enum):
    """Enum for selectable timeline items."""
    EVENT = "event"
    TASK = "task"


class HitKind(Enum):
    """Enum for what a tap on the ring resolved to."""
    EVENT = "event"
    TASK = "task"
    SLEEP = "sleep"


class TaskSource(Enum):
    """Enum for where a task came from."""
    LOCAL = "local"
    GOOGLE_TASKS_IF_FUTURE = "google_tasks_if_future"


MINUTES_PER_DAY = 1440
SECONDS_PER_DAY = 86400
FULL_CIRCLE = 360.0

# Canvas angle of midnight; every minute adds 360/1440 degrees clockwise
MIDNIGHT_ANGLE = 90.0
# Phase used by the live "now" pointer (midnight at the top of the dial)
NOW_POINTER_OFFSET = -90.0
MIN_VISIBLE_SWEEP = 1.0

BACK_TO_BACK_TOLERANCE_MINUTES = 2
ROTARY_STEP_THRESHOLD = 6.0

# Ring geometry, as fractions of the outer radius / arc stroke width
ARC_STROKE_RATIO = 0.08
EVENT_STROKE_RATIO = 1.5
EVENT_ARC_INSET_RATIO = 0.4
INWARD_TOUCH_EXPANSION = 3.8
OUTWARD_TOUCH_EXPANSION = 1.2
INWARD_PUNCTUAL_EXPANSION = 3.8
RADIUS_TOLERANCE_RATIO = 0.5
TASK_RING_INSET = 0.94
SLEEP_STROKE_RATIO = 0.6

PUNCTUAL_ANGLE_TOLERANCE = 6.0
TASK_ANGLE_TOLERANCE = 12.0

# Day/night gradient
TRANSITION_HALF_WIDTH = 20.0
DEFAULT_SUNRISE_MINUTES = 6 * 60
DEFAULT_SUNSET_MINUTES = 18 * 60
SUNSET_BLEND = 0.5

NIGHT_COLOR = (0x1A, 0x1A, 0x3E)
SUNRISE_COLOR = (0xFF, 0x6B, 0x35)
DAY_COLOR = (0x4A, 0x6D, 0x8A)
SUNSET_ORANGE_COLOR = (0xFF, 0xA5, 0x00)
SUNSET_PURPLE_COLOR = (0x8B, 0x3A, 0x62)

DEFAULT_EVENT_COLOR = 0xFFA4A4A5

# Fallback coordinates when no location is known
APPROXIMATE_ZONE_COORDINATES = {
    "America/New_York": (40.7, -74.0),
    "America/Los_Angeles": (34.0, -118.0),
    "America/Chicago": (41.9, -87.6),
    "America/Denver": (39.7, -105.0),
    "America/Sao_Paulo": (-23.5, -46.6),
    "America/Buenos_Aires": (-34.6, -58.4),
    "Europe/London": (51.5, -0.1),
    "Europe/Paris": (48.9, 2.3),
    "Europe/Berlin": (52.5, 13.4),
    "Asia/Tokyo": (35.7, 139.7),
    "Asia/Shanghai": (31.2, 121.5),
    "Asia/Kolkata": (28.6, 77.2),
    "Australia/Sydney": (-33.9, 151.2),
}
FALLBACK_LATITUDE = 40.0

# Sleep stage weights (Health Connect stage codes)
SLEEP_STAGE_AWAKE = 2
SLEEP_STAGE_SLEEPING = 3
SLEEP_STAGE_LIGHT = 4
SLEEP_STAGE_DEEP = 5
SLEEP_STAGE_REM = 6
DEEP_WEIGHT = 1.5
REM_WEIGHT = 1.2
LIGHT_WEIGHT = 0.8
QUALITY_DIVISOR = 3.5

DIAL_SIZE = 400
EVENT_LINE_RATIO = 0.58
TICK_WIDTH_RATIO = 0.32
PAST_DIM_FACTOR = 0.4
NOW_POINTER_LENGTH_RATIO = 0.12
HOUR_TICK_STEP_MINUTES = 10
HOUR_TICK_LENGTH_RATIO = 0.018

FONT_SIZE_SM = 10
FONT_SIZE_MD = 12
FONT_SIZE_LG = 14
FONT_SIZE_2XL = 18

COLORS = {
    "bg": "#000000",
    "card": "#222222",
    "card_border": "#0a0a0a",
    "accent": "#4a9eff",
    "text": "#cccccc",
    "text_muted": "#888888",
    "task": "#888888",
    "task_past": "#666666",
    "sleep_fill": "#664b3b8c",
    "sleep_stroke": "#6b5b95",
    "now_today": "#ff4444",
    "now_other_day": "#666666",
    "marker": "#ffffff",
    "event_bg": "#cc2a2a2a",
    "white": "white",
}
