from shipcost.core.config import settings
from shipcost.core.database import get_db, Base
from shipcost.core.session_cache import (
    SessionCache,
    InMemorySessionCache,
    RedisSessionCache,
    SessionCacheRegistry,
)
