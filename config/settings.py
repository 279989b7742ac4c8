import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./risk_registry.db")
APP_TIMEZONE = os.getenv("APP_TIMEZONE", "Asia/Taipei")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
AUTO_CREATE_TABLES = os.getenv("AUTO_CREATE_TABLES", "true").lower() in ("1", "true", "yes")
IMPORT_BATCH_SIZE = int(os.getenv("IMPORT_BATCH_SIZE", "50"))
