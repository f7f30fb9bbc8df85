from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Dict, List

EXPENSE_CATEGORIES = [
    "Food",
    "Travel",
    "Groceries",
    "Rent_utilities",
    "Personal_utilities",
    "Other",
]

DEFAULT_CATEGORY = "Other"


class Settings(BaseSettings):
    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # API Settings
    PROJECT_NAME: str = "FairShare API"
    PROJECT_VERSION: str = "0.1.0"
    DESCRIPTION: str = "Group expense splitting and personal spending insights API"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # MongoDB
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DB: str = "fairshare"
    MONGODB_TRANSACTIONS: bool = True

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    # JWT
    JWT_SECRET: str = "change-this-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_MINUTES: int = 60 * 24

    # Monthly budget per personal expense category (currency units)
    CATEGORY_BUDGETS: Dict[str, float] = {
        "Food": 8000,
        "Travel": 5000,
        "Groceries": 6000,
        "Rent_utilities": 15000,
        "Personal_utilities": 4000,
        "Other": 3000,
    }

    # Signal policy
    SIGNAL_EWMA_ALPHA: float = 0.3
    SIGNAL_ANOMALY_FACTOR: float = 2.5
    SIGNAL_MIN_DAYS: int = 7
    SIGNAL_TREND_MIN_PCT: float = 1.0
    SIGNAL_TREND_MEDIUM_PCT: float = 10.0
    SIGNAL_TREND_HIGH_PCT: float = 20.0
    SIGNAL_ANOMALY_LOW_MULTIPLIER: float = 3.0
    SIGNAL_ANOMALY_HIGH_MULTIPLIER: float = 5.0
    SIGNAL_VOLATILITY_LOW: float = 0.3
    SIGNAL_VOLATILITY_HIGH: float = 0.6
    SIGNAL_OUTLIER_LOW_Z: float = 2.0
    SIGNAL_OUTLIER_MEDIUM_Z: float = 2.5
    SIGNAL_OUTLIER_HIGH_Z: float = 3.0
    SIGNAL_BUDGET_UNDER_RATIO: float = 0.8
    SIGNAL_BUDGET_MEDIUM_RATIO: float = 1.1
    SIGNAL_BUDGET_HIGH_RATIO: float = 1.3

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env"
    )

settings = Settings()
