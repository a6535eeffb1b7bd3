"""Internal constants shared across the library."""

# Session state keys written on suspend and read back on resume.
ARRIVALS_KEY = "Arrivals"
DEPARTURES_KEY = "Departures"
SELECTED_AIRPORT_KEY = "SelectedAirport"

SESSION_KEYS: tuple[str, str, str] = (ARRIVALS_KEY, DEPARTURES_KEY, SELECTED_AIRPORT_KEY)

#: Durable file holding the user's saved selection (airport or "nearest").
SELECTED_AIRPORT_FILENAME = "selected_airport.json"

DEFAULT_STATE_DIR = "~/.flightsync"

# Time window of the stale-flight policy (disabled unless configured).
DEFAULT_ARRIVAL_MAX_AGE_HOURS = 1.0
DEFAULT_DEPARTURE_MAX_AGE_HOURS = 0.25
