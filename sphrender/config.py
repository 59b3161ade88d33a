"""
Central configuration constants for the spherical harmonic renderer.
"""

from pathlib import Path

# ========== Image settings ==========
WIDTH = 6000  # image width in pixels, also the number of phi samples
HEIGHT = 3000  # image height in pixels, must match the theta sampling of the source data

# ========== Harmonic settings ==========
MAX_L = 49  # highest degree rendered; the table must hold every l up to and including this

# ========== Parallelism ==========
MAX_RENDER_WORKERS = 4  # threads used when rendering (l, m) pairs concurrently

# ========== Directory paths ==========
PROJECT_ROOT = Path(__file__).resolve().parent.parent  # project root directory
DATA_DIR = PROJECT_ROOT / "data"  # pre-generated Legendre CSV files
OUTPUT_DIR = PROJECT_ROOT / "artifacts" / "images"  # rendered PNG files

# ========== File names ==========
SOURCE_PREFIX = "legendres-"
SOURCE_SUFFIX = ".csv"
SOURCE_GLOB = f"{SOURCE_PREFIX}*{SOURCE_SUFFIX}"  # one file per l, e.g. legendres-12.csv
CACHE_FILE = "legendres.npz"  # binary cache written next to the source files
OUTPUT_TEMPLATE = "sphericalharmonic-{l}_{m}.png"

# ========== Cache format ==========
CACHE_FORMAT_VERSION = 1  # bump when the npz layout changes

# ========== Color scale ==========
COLOR_STEPS = 1024  # normalized scale size, four bands of 256
COLOR_BAND = 256
