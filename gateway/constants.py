"""
gateway/constants.py

Scheduling, alarm and air quality constants used by the gateway services.
All numeric thresholds must be referenced from this module.
Magic numbers in business logic are prohibited.
"""

# ── Reminder scheduling ──────────────────────────────────────
REMINDER_STORAGE_KEY: str = "reminders_v1"
SNOOZE_CHOICES_MIN: tuple[int, ...] = (5, 10, 15)

# ── Alarm tone (seconds unless noted) ────────────────────────
ALARM_FREQUENCY_HZ: float = 880.0  # A5
ALARM_PEAK_GAIN: float = 0.9
ALARM_ATTACK_SEC: float = 0.05
ALARM_HOLD_UNTIL_SEC: float = 1.0
ALARM_RELEASE_UNTIL_SEC: float = 1.1
ALARM_CYCLE_SEC: float = 1.7
ALARM_FADE_OUT_SEC: float = 0.1

# ── AQI breakpoints: (C_low, C_high, I_low, I_high), µg/m³ ───
US_PM25_BREAKPOINTS: tuple[tuple[float, float, int, int], ...] = (
    (0.0, 12.0, 0, 50),
    (12.1, 35.4, 51, 100),
    (35.5, 55.4, 101, 150),
    (55.5, 150.4, 151, 200),
    (150.5, 250.4, 201, 300),
    (250.5, 350.4, 301, 400),
    (350.5, 500.4, 401, 500),
)
US_PM10_BREAKPOINTS: tuple[tuple[float, float, int, int], ...] = (
    (0, 54, 0, 50),
    (55, 154, 51, 100),
    (155, 254, 101, 150),
    (255, 354, 151, 200),
    (355, 424, 201, 300),
    (425, 504, 301, 400),
    (505, 604, 401, 500),
)
INDIA_PM25_BREAKPOINTS: tuple[tuple[float, float, int, int], ...] = (
    (0.0, 30.0, 0, 50),
    (31.0, 60.0, 51, 100),
    (61.0, 90.0, 101, 200),
    (91.0, 120.0, 201, 300),
    (121.0, 250.0, 301, 400),
    (250.1, 500.0, 401, 500),
)
INDIA_PM10_BREAKPOINTS: tuple[tuple[float, float, int, int], ...] = (
    (0, 50, 0, 50),
    (51, 100, 51, 100),
    (101, 250, 101, 200),
    (251, 350, 201, 300),
    (351, 430, 301, 400),
    (431, 500, 401, 500),
)
INDIA_COUNTRY_CODE: str = "IN"

# ── AQI recommendation wording ───────────────────────────────
AQI_ADVICE_GOOD: str = "Air quality is satisfactory. Enjoy outdoor activities."
AQI_ADVICE_ACCEPTABLE: str = "Acceptable; some risk for sensitive groups."
AQI_ADVICE_SENSITIVE: str = "Sensitive groups should limit prolonged outdoor exertion."
AQI_ADVICE_EVERYONE: str = "Everyone may experience health effects; reduce outdoor exertion."
AQI_ADVICE_ALERT: str = "Health alert: avoid outdoor activities; consider PM-rated mask."
AQI_ADVICE_HAZARDOUS: str = "Hazardous: stay indoors with filtered air; avoid outdoor exposure."
AQI_ADVICE_UNAVAILABLE: str = "Air quality data unavailable."

# ── Emergency numbers ────────────────────────────────────────
DEFAULT_EMERGENCY_NUMBER: str = "911"
