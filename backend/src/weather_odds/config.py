# Analysis year range (inclusive)
START_YEAR = 1981
END_YEAR = 2023

# Non-leap year used only for month/day arithmetic when resolving windows
REFERENCE_YEAR = 2001

# Maximum half-width of the date window (days on each side)
MAX_WINDOW_DAYS = 30

# NASA POWER daily point API
NASA_POWER_URL = "https://power.larc.nasa.gov/api/temporal/daily/point"
NASA_POWER_COMMUNITY = "RE"
NASA_POWER_FILL_VALUE = -999.0
REQUEST_TIMEOUT = 60  # seconds, 40+ years of daily data is a large payload

# Provenance
DATA_SOURCE_NAME = "NASA POWER API"
DATA_SOURCE_URL = "https://power.larc.nasa.gov/"

# Nearest-rank percentiles reported for the yearly maxima
PERCENTILES = [25, 50, 75, 90]

# Normal quantile for a 95% confidence interval
CONFIDENCE_Z = 1.96

# Default request, matching the web form
DEFAULT_VARIABLE = "T2M_MAX"
DEFAULT_MONTH = 7
DEFAULT_DAY = 15
DEFAULT_WINDOW = 3
DEFAULT_THRESHOLD = 25.0

# CORS for frontend dev
CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]
