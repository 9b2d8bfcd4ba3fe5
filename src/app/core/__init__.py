from app.core.config import settings
from app.core.database import Base, async_session_maker, engine, get_db
from app.core.redis import close_redis, get_redis

__all__ = [
    "settings",
    "Base",
    "engine",
    "async_session_maker",
    "get_db",
    "get_redis",
    "close_redis",
]
