"""
Configuration for the mine simulation.

Defaults applied when a level file omits a metadata line, and the symbols
used in contest-style route strings.
"""

# Level metadata defaults
DEFAULT_GROWTH = 25  # Ticks between beard growth passes
DEFAULT_RAZORS = 0  # Razors held at start
DEFAULT_WATER = 0  # Initial water row (0 = dry)
DEFAULT_FLOODING = 0  # Ticks between water rises (0 = never)
DEFAULT_WATERPROOF = 10  # Submerged ticks survivable

# Level files
LEVEL_SUFFIX = ".map"
METADATA_KEYS = ("Growth", "Razors", "Water", "Flooding", "Waterproof")

# Route symbols (action name -> symbol)
ROUTE_SYMBOLS = {
    "UP": "U",
    "DOWN": "D",
    "LEFT": "L",
    "RIGHT": "R",
    "WAIT": "W",
    "USE_RAZOR": "S",
    "ABORT": "A",
}
