from typing import Generator, List, Optional
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session, declarative_base
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_SYSTEM_PROMPT = (
    "You are a supportive AI health buddy. Your role is to help users maintain "
    "and improve their health and fitness. You have access to their recent "
    "activities and personal reminders. Use this information to provide "
    "personalized, relevant advice and encouragement. Keep your responses "
    "friendly, concise, and focused on health and fitness goals."
)


# =====================================================================
# SETTINGS
# =====================================================================


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # App
    APP_NAME: str = "HealthBuddy API"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    PORT: int = 5001

    # Database
    DATABASE_URL: str = "sqlite:///./healthbuddy.db"

    # JWT
    SECRET_KEY: str = "healthbuddy-access-secret"
    REFRESH_SECRET_KEY: str = "healthbuddy-refresh-secret"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    # CORS
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://192.168.68.56:3000",
        "https://healthbuddy-client.onrender.com",
        "https://healthbuddy.onrender.com",
    ]

    # Completion API
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL: str = "gpt-4-turbo"
    SYSTEM_PROMPT: str = DEFAULT_SYSTEM_PROMPT
    CHAT_TEMPERATURE: float = 0.7
    CHAT_MAX_TOKENS: int = 500


settings = Settings()


# =====================================================================
# DATABASE
# =====================================================================

engine = create_engine(
    settings.DATABASE_URL,
    connect_args=(
        {"check_same_thread": False} if "sqlite" in settings.DATABASE_URL else {}
    ),
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Database session dependency."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
