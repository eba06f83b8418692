"""Internal constants shared across the package."""

DEFAULT_STATS_PATH = "stats.json"
DEFAULT_AIRCRAFTS_PATH = "aircrafts.json"
DEFAULT_LISTEN_ADDR = ":9187"
DEFAULT_INTERVAL_SECONDS = 5
DEFAULT_SHUTDOWN_GRACE_SECONDS = 10.0

# Aggregation windows in stats.json, in export order.
PERIODS: tuple[str, ...] = ("latest", "last1min", "last5min", "last15min", "total")

# Autopilot modes a transponder can report in ``nav_modes``. Every aircraft
# gets one series per flag on every poll.
NAV_MODES: tuple[str, ...] = ("autopilot", "vnav", "althold", "approach", "lnav", "tcas")

# Labels identifying one aircraft's series family.
AIRCRAFT_IDENTITY_LABELS: tuple[str, ...] = ("hex", "flight", "category")
