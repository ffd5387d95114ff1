import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Base paths
PACKAGE_DIR = Path(__file__).parent
DATA_DIR = Path(os.environ.get("ROOM_DESIGNER_DATA_DIR", PACKAGE_DIR / "data"))
STORAGE_DIR = DATA_DIR / "storage"

# Database paths
DESIGNER_DB = DATA_DIR / "designer.db"

# Storage paths
PROJECT_THUMBNAILS = STORAGE_DIR / "projects" / "thumbnails"
PRODUCT_MODELS = STORAGE_DIR / "products" / "models"

# Thumbnails larger than this (either side) are downscaled on upload
MAX_THUMBNAIL_SIZE = 512

# Persistence service the designer store talks to
API_URL = os.environ.get("ROOM_DESIGNER_API_URL", "http://localhost:8000")
API_TIMEOUT = float(os.environ.get("ROOM_DESIGNER_API_TIMEOUT", "30"))

# Create directories
for path in [DATA_DIR, PROJECT_THUMBNAILS, PRODUCT_MODELS]:
    path.mkdir(parents=True, exist_ok=True)
