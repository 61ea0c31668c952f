import logging
import os
from dotenv import load_dotenv

load_dotenv()


def resolve_log_level(value: str | None) -> str:
    """Return a level name logging accepts, INFO for anything unknown."""
    level = (value or "INFO").upper()
    if not isinstance(logging.getLevelName(level), int):
        return "INFO"
    return level


redis_url = os.getenv("REDIS_URL")
redis_token = os.getenv("REDIS_TOKEN")
log_level = resolve_log_level(os.getenv("LOG_LEVEL"))
host = os.getenv("HOST", "0.0.0.0")
port = int(os.getenv("PORT", "8080"))

if __name__ == "__main__":
    print(redis_url, log_level, host, port)
