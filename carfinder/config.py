import os
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

# Catalog: remote inventory API if CATALOG_URL is set, local flat file otherwise
CATALOG_URL = os.getenv("CATALOG_URL", "").rstrip("/")
CATALOG_PATH = os.getenv("CATALOG_PATH") or os.path.join(BASE_DIR, "data", "catalog.csv")
CATALOG_TIMEOUT = float(os.getenv("CATALOG_TIMEOUT", "10"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

TWILIO_VALIDATE = os.getenv("TWILIO_VALIDATE", "0") == "1"
TWILIO_AUTH_TOKEN = os.getenv("TWILIO_AUTH_TOKEN", "")
PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL", "")
