"""
FieldCx configuration and constants.

Acceptance thresholds for the commissioning checks and the physical bounds
enforced on incoming readings.
"""

# Default outdoor dry bulb used when neither the session weather nor the
# reading carries one (°F)
DEFAULT_OUTDOOR_TEMP_F = 95.0

DEFAULT_REFRIGERANT = "R-410A"

# Physical bounds for reading fields
TEMP_RANGE_F = (-40.0, 150.0)
RH_RANGE_PCT = (0.0, 100.0)
PRESSURE_RANGE_INWC = (-10.0, 10.0)
CFM_RANGE = (0.0, 50000.0)
PSI_RANGE = (0.0, 1000.0)
TONS_RANGE = (0.5, 200.0)
DECAY_SECONDS_RANGE = (0.0, 3600.0)

# Envelope thresholds
BUILDING_PRESSURE_RANGE = (0.02, 0.05)   # in. w.c.
MAX_DECAY_RATE_INWC_PER_MIN = 0.01
MAX_RETURN_SUPPLY_DIFF_INWC = 0.1

# HVAC thresholds
CFM_PER_TON_RANGE = (350, 400)
SUPPLY_DEW_POINT_RANGE = (50, 55)        # °F
STATIC_PRESSURE_RANGE = (0.3, 1.5)       # in. w.c.
TEMPERATURE_DROP_RANGE = (8, 25)         # °F across the coil
MAX_DAMPER_POSITION_PCT = 5              # tolerance around fully closed
MAX_MIXING_TEMP_VARIATION_F = 5
MAX_MIXING_RH_VARIATION_PCT = 10

# Superheat/subcooling bands, keyed by outdoor condition
NORMAL_OUTDOOR_RANGE_F = (80.0, 100.0)
SUPERHEAT_RANGES = {
    "normal": (8, 15),
    "hot": (6, 12),    # outdoor above 100°F
    "cold": (10, 18),  # outdoor below 80°F
}
SUBCOOLING_RANGES = {
    "normal": (8, 15),
    "hot": (10, 18),
    "cold": (6, 12),
}

# CORS origins for the local frontend dev server
CORS_ORIGINS = [
    "http://localhost:5173",  # Vite default
    "http://localhost:3000",
    "http://127.0.0.1:5173",
    "http://127.0.0.1:3000",
]
