"""Application configuration and constants."""
import os
from pathlib import Path

# Directory paths
BASE_DIR = Path(__file__).resolve().parent.parent
DATA_DIR = Path(os.environ.get("GALLERY_DATA_DIR", str(BASE_DIR / "data")))

# Record store: 'sqlite' (default) or 'json' (flat file)
RECORD_STORE = os.environ.get("GALLERY_RECORD_STORE", "sqlite").lower()
DATABASE_PATH = Path(os.environ.get("GALLERY_DATABASE_PATH", str(DATA_DIR / "gallery.db")))
GALLERY_JSON_PATH = Path(os.environ.get("GALLERY_JSON_PATH", str(DATA_DIR / "gallery.json")))

# Upload accept rule
ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/png", "image/gif"}
MAX_UPLOAD_SIZE = 10 * 1024 * 1024  # 10 MiB

# Folder inside the asset store that holds gallery images
UPLOADS_FOLDER = "uploads"

LOG_LEVEL = os.environ.get("GALLERY_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
