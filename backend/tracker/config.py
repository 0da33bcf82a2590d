from decimal import Decimal

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # App
    ENV: str = "development"
    PORT: int = 8000

    # Database (PostgreSQL)
    DATABASE_URL: str
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20

    # JWT Authentication (tokens are issued by the auth service, only verified here)
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"

    # Frontend
    WEB_APP_URL: str = "http://localhost:5173"

    # Reports
    TIMEZONE: str = "UTC"  # IANA zone used for period boundaries
    CURRENCY_SYMBOL: str = "Rs"
    DEFAULT_MONTHLY_BUDGET: Decimal = Decimal("6000")
    WEEKS_PER_MONTH: Decimal = Decimal("4.33")  # Average weeks per month
    RECENT_EXPENSES_LIMIT: int = 5

    model_config = {
        "env_file": ".env",
        "extra": "ignore"
    }

settings = Settings()
