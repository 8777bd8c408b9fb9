import os
from pathlib import Path

# Base directories
ROOT_DIR = Path(__file__).resolve().parents[1]
ASSETS_FOLDER = ROOT_DIR / "assets"

# Application settings
MAX_FILE_SIZE = 50 * 1024 * 1024  # 50 MB
ALLOWED_EXTENSIONS = {".xlsx"}
XLSX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# Logging
LOG_LEVEL = os.environ.get("FORECAST_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Dashboard defaults
ITEMS_PER_PAGE = 20
TOP_PRODUCTS_COUNT = 10
SUMMARY_DETAIL_COUNT = 5
SEASONAL_TOP_COUNT = 8
MAX_SELECTED_PRODUCTS = 5

# Chart palette for selected products
SERIES_COLORS = [
    "#3b82f6",
    "#ef4444",
    "#10b981",
    "#f59e0b",
    "#8b5cf6",
    "#ec4899",
    "#14b8a6",
    "#f97316",
]
