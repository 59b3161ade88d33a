"""Loading and caching of precomputed associated Legendre samples."""

from .cache import load_table_cache, save_table_cache
from .loader import (
    discover_source_files,
    load_legendre_table,
    read_source_file,
    read_source_files,
)
from .table import LegendreTable

__all__ = [
    "LegendreTable",
    "discover_source_files",
    "load_legendre_table",
    "load_table_cache",
    "read_source_file",
    "read_source_files",
    "save_table_cache",
]
