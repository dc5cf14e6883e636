"""Path configuration for the backend."""
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parents[2]
load_dotenv(dotenv_path=BASE_DIR / ".env")

# Local data
DATA_DIR = BASE_DIR / "data"
DEFAULT_SQLITE_PATH = DATA_DIR / "catch_provenance.db"
