# vacation_planner/config.py
import logging
import os

from dotenv import load_dotenv

load_dotenv()

# --- Selection limits ---
DISPLAY_LIMIT = 15      # candidates returned per slot solution
WINDOW_LIMIT = 20       # candidates kept in the selection heap
TAG_LENGTH_LIMIT = 4    # events per slot

# --- Search ---
DEFAULT_RADIUS = 2000       # meters
MAX_SEARCH_RADIUS = 16000   # about 10 miles
MAX_REQUEST_TIMES = 5       # paged requests per place type
NEARBY_SEARCH_DELAY = 1.0   # seconds before a next page token becomes valid
MIN_NUM_RESULTS = 20
MAX_NUM_RESULTS = 60

# Hours spent at a place, by category symbol
STAY_HOURS = {"E": 1, "V": 2}

# Upper bounds for day plan budgets; the knapsack table grows with both
MAX_TIME_BUDGET = 24        # hours
MAX_MONEY_BUDGET = 5000

# --- Environment ---
GOOGLE_MAPS_API_KEY = os.getenv("GOOGLE_MAPS_API_KEY", "")
PLACES_DATA_PATH = os.getenv("PLACES_DATA_PATH", "data/places.json")
SOLUTION_CACHE_FILE = os.getenv("SOLUTION_CACHE_FILE", "slot_solution_cache.json")
GEOCODE_CACHE_FILE = os.getenv("GEOCODE_CACHE_FILE", "geocode_cache.json")
PLACE_CACHE_FILE = os.getenv("PLACE_CACHE_FILE", "place_cache.json")
TRAVEL_SPEED_KMPH = float(os.getenv("TRAVEL_SPEED_KMPH", "20"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def configure_logging(level: str = LOG_LEVEL) -> logging.Logger:
    """Attach one stream handler to the package logger and return it."""
    log = logging.getLogger("vacation_planner")
    if not log.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
        log.addHandler(h)
    log.setLevel(logging.DEBUG if level == "DEBUG" else logging.INFO)
    return log
