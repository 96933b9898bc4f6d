from os import getenv

class Settings:
    DATABASE_URL = getenv("DATABASE_URL", "postgresql+psycopg://tickr:tickr@db:5432/tickr")
    JWT_SECRET = getenv("JWT_SECRET", "dev-secret-change-in-prod")
    JWT_EXPIRE_MIN = int(getenv("JWT_EXPIRE_MIN", "15"))  # 15 minutes
    JWT_REFRESH_EXPIRE_MIN = int(getenv("JWT_REFRESH_EXPIRE_MIN", "43200"))  # 30 jours

    # Fuseau de référence fixe : UTC+5:30
    REFERENCE_UTC_OFFSET_MINUTES = int(getenv("REFERENCE_UTC_OFFSET_MINUTES", "330"))

    ANALYTICS_DEFAULT_DAYS = int(getenv("ANALYTICS_DEFAULT_DAYS", "30"))
    ANALYTICS_MAX_DAYS = int(getenv("ANALYTICS_MAX_DAYS", "365"))

    LOG_LEVEL = getenv("LOG_LEVEL", "INFO")

settings = Settings()
