"""
Конфигурация API (переменные окружения)
"""
import os

# Supabase (BaaS): PostgREST + GoTrue
SUPABASE_URL = os.getenv("SUPABASE_URL", "http://localhost:54321").rstrip("/")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY", "")
SUPABASE_SERVICE_ROLE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY", "")

# Все маршруты живут под одним префиксом
API_PREFIX = os.getenv("API_PREFIX", "/api")

PORT = int(os.getenv("PORT", 5000))
DEBUG = os.getenv("DEBUG", "false").lower() in ("1", "true", "yes")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")

# Таймаут запросов к Supabase (в секундах)
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", 10))

# Попытки условного обновления счётчика мест
SEAT_UPDATE_RETRIES = int(os.getenv("SEAT_UPDATE_RETRIES", 3))

SEAT_MAP_ROWS = int(os.getenv("SEAT_MAP_ROWS", 10))


class Config:
    """Значения по умолчанию для app.config"""

    SUPABASE_URL = SUPABASE_URL
    SUPABASE_ANON_KEY = SUPABASE_ANON_KEY
    SUPABASE_SERVICE_ROLE_KEY = SUPABASE_SERVICE_ROLE_KEY
    API_PREFIX = API_PREFIX
    DEBUG = DEBUG
    LOG_LEVEL = LOG_LEVEL
    CORS_ORIGINS = CORS_ORIGINS
    REQUEST_TIMEOUT = REQUEST_TIMEOUT
    SEAT_UPDATE_RETRIES = SEAT_UPDATE_RETRIES
    SEAT_MAP_ROWS = SEAT_MAP_ROWS
    JSON_SORT_KEYS = False
