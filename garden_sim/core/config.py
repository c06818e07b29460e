"""All tunable constants for the garden simulation.

Every magic number in the codebase must reference this file.
"""

# =============================================================================
# TIME
# =============================================================================
SECONDS_PER_MINUTE: int = 60
MINUTES_PER_HOUR: int = 60
HOURS_PER_DAY: int = 24
SECONDS_PER_HOUR: int = SECONDS_PER_MINUTE * MINUTES_PER_HOUR
SECONDS_PER_DAY: int = SECONDS_PER_HOUR * HOURS_PER_DAY

START_DAY: int = 1
DAY_START_HOUR: int = 6       # new games and skipped days begin at 06:00
DAY_START_MINUTE: int = 0

# In-game minutes that pass per real second at speed factor 1
BASE_TIME_SCALE: float = 1.0
SPEED_FACTORS: tuple[int, ...] = (1, 2, 3)
DEFAULT_SPEED_FACTOR: int = 1

# =============================================================================
# POTS
# =============================================================================
MAX_WATER_LEVEL: float = 5.0
MIN_WATER_LEVEL: float = 0.0
WATER_PER_POUR: float = 1.0
HARVEST_WATER_COST: float = 2.0

POT_ID_PREFIX: str = "Pot_"
POT_ID_HEX_DIGITS: int = 8

# Visual scale of a pot by size name
POT_SCALES: dict[str, float] = {
    "SMALL": 0.15,
    "MEDIUM": 0.2,
    "LARGE": 0.25,
}

# Where pots may appear; a point only spawns once its unlock level is reached
DEFAULT_SPAWN_POINTS: list[dict] = [
    {"position": (-2.0, 0.0, 0.0), "size": "SMALL", "unlock_level": 0},
    {"position": (0.0, 0.0, 0.0), "size": "MEDIUM", "unlock_level": 0},
    {"position": (2.0, 0.0, 0.0), "size": "MEDIUM", "unlock_level": 0},
    {"position": (-2.0, -1.5, 0.0), "size": "LARGE", "unlock_level": 1},
    {"position": (0.0, -1.5, 0.0), "size": "SMALL", "unlock_level": 2},
    {"position": (2.0, -1.5, 0.0), "size": "LARGE", "unlock_level": 3},
]

# =============================================================================
# PLANTS
# =============================================================================
DEFAULT_YIELD_PER_HARVEST: int = 1

# growth_days: planting to first harvest; drain_rate: water units per in-game hour
PLANT_CATALOG: dict[str, dict] = {
    "daisy": {"item_type": "FLOWER", "required_pot_size": "SMALL", "growth_days": 0.5, "drain_rate": 0.10},
    "marigold": {"item_type": "FLOWER", "required_pot_size": "SMALL", "growth_days": 1.0, "drain_rate": 0.15},
    "sunflower": {"item_type": "FLOWER", "required_pot_size": "MEDIUM", "growth_days": 2.0, "drain_rate": 0.20},
    "basil": {"item_type": "VEGETABLE", "required_pot_size": "SMALL", "growth_days": 1.5, "drain_rate": 0.10},
    "carrot": {"item_type": "VEGETABLE", "required_pot_size": "MEDIUM", "growth_days": 3.0, "drain_rate": 0.15},
    "pumpkin": {"item_type": "VEGETABLE", "required_pot_size": "LARGE", "growth_days": 6.0, "drain_rate": 0.30},
    "strawberry": {"item_type": "FRUIT", "required_pot_size": "SMALL", "growth_days": 2.0, "drain_rate": 0.20},
    "tomato": {"item_type": "FRUIT", "required_pot_size": "MEDIUM", "growth_days": 4.0, "drain_rate": 0.25},
    "lemon_tree": {"item_type": "FRUIT", "required_pot_size": "LARGE", "growth_days": 10.0, "drain_rate": 0.20},
}

# =============================================================================
# INVENTORY
# =============================================================================
INVENTORY_SIZE: int = 18
MAX_STACK_SIZE: int = 100

STARTING_SEEDS: dict[str, int] = {
    "daisy": 5,
    "marigold": 3,
    "sunflower": 2,
    "carrot": 2,
    "strawberry": 2,
}

# =============================================================================
# SAVE
# =============================================================================
SAVE_FILE_NAME: str = "gamesave.json"
SAVE_FORMAT_VERSION: int = 1

# =============================================================================
# METRICS
# =============================================================================
METRICS_SAMPLE_HOURS: int = 1  # record a garden snapshot every N in-game hours
