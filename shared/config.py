# shared/config.py
import os
from dotenv import load_dotenv

load_dotenv()

# Remote mode needs both the endpoint and its access key
DATABASE_URL = os.getenv("DATABASE_URL", "")
DATABASE_KEY = os.getenv("DATABASE_KEY", "")

LOCAL_STORAGE_DIR = os.getenv("LOCAL_STORAGE_DIR", ".local_storage")

SECRET_KEY = os.getenv("SECRET_KEY", "your-secret-key")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24 * 7))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def is_remote_enabled(url: str = None, key: str = None) -> bool:
    url = DATABASE_URL if url is None else url
    key = DATABASE_KEY if key is None else key
    return bool(url and url.strip()) and bool(key and key.strip())
