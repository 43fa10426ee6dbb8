# storefront/utils/settings.py
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

PACKAGE_DIR = Path(__file__).resolve().parents[1]

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./storefront.db")
REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379/0")
CART_BACKEND = os.getenv("CART_BACKEND", "memory")
SESSION_TTL_SECONDS = int(os.getenv("SESSION_TTL_SECONDS", 60*60*24))
SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "sid")
API_VERSION = os.getenv("API_VERSION", "1.0")
CATALOG_SEED_PATH = os.getenv("CATALOG_SEED_PATH", str(PACKAGE_DIR / "data" / "products.json"))
SORT_LOCALE = os.getenv("SORT_LOCALE", "")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
PORT = int(os.getenv("PORT", 3000))
