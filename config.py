"""Default render settings, overridable through environment variables."""

import os

# Image
WIDTH = int(os.getenv("RT_WIDTH", "320"))
HEIGHT = int(os.getenv("RT_HEIGHT", "180"))
FOV = float(os.getenv("RT_FOV", "30"))

# Workers
NUM_THREADS = int(os.getenv("RT_THREADS", "8"))

# Output
OUTPUT_PATH = os.getenv("RT_OUTPUT", "render.png")

# Logging settings
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
