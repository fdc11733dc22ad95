"""Constants for Weather Digest."""

# Integration identity
DOMAIN = "weather_digest"
DEFAULT_NAME = "Weather Digest"

# Refresh cycle
DEFAULT_UPDATE_INTERVAL = 15 * 60  # seconds
UPDATE_TIMEOUT = 60  # seconds allowed for the source fetch

# Aggregation bounds: today plus the next three days, hourly samples at most
MAX_FORECAST_DAYS = 4
MAX_SKY_CODES_PER_DAY = 24

# Temperature used when an observation carries none
MISSING_TEMPERATURE = 0.0

# Accepted timestamp shapes, fractional form first
TIMESTAMP_FORMATS = (
    "%Y-%m-%dT%H:%M:%S.%fZ",
    "%Y-%m-%dT%H:%M:%SZ",
)

# Row keys a fetch collaborator may hand over -> Observation field
OBSERVATION_KEY_MAP = {
    "timestamp": "timestamp",
    "time": "timestamp",
    "temperature": "temperature",
    "air_temperature": "temperature",
    "sky_code": "sky_code",
    "symbol_code": "sky_code",
}

# Classifier keywords, highest severity first (first match wins)
CONDITION_KEYWORDS = (
    (5, ("thunder",)),
    (4, ("fog", "mist")),
    (3, ("snow",)),
    (2, ("rain", "drizzle")),
    (1, ("cloud", "overcast", "partlycloudy")),
)
