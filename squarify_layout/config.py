"""Layout configuration via environment variables."""

import os

from dotenv import load_dotenv

load_dotenv()

# Tolerance used when validating tilings and detecting overlaps
TOLERANCE = float(os.getenv("SQUARIFY_TOLERANCE", "1e-6"))

# Minimum shared edge length for two tiles to count as neighbours
ADJACENCY_TOLERANCE = float(os.getenv("SQUARIFY_ADJACENCY_TOLERANCE", "1e-6"))

# Tiles up to GOOD_ASPECT_RATIO are free; beyond MAX_ASPECT_RATIO they are penalised fully
GOOD_ASPECT_RATIO = 1.5
MAX_ASPECT_RATIO = float(os.getenv("SQUARIFY_MAX_ASPECT_RATIO", "2.2"))

# Component weights for metrics.score_layout
SCORE_WEIGHTS = {
    "area": 0.40,
    "shape": 0.35,
    "coverage": 0.25,
}
