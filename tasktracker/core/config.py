from pydantic_settings import BaseSettings
from typing import List
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

class Settings(BaseSettings):
    # Database settings
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./tasktracker.db")
    DB_ECHO: bool = False

    # Password hashing cost (bcrypt log2 rounds, 4 is the lowest bcrypt accepts)
    BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "12"))

    # Project settings
    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "Task Tracker")
    API_PREFIX: str = "/api"
    CORS_ORIGINS: List[str] = ["http://localhost:5500", "http://127.0.0.1:5500"]

    # Per-IP rate limit: at most N requests in any rolling window
    RATE_LIMIT_MAX_REQUESTS: int = int(os.getenv("RATE_LIMIT_MAX_REQUESTS", "100"))
    RATE_LIMIT_WINDOW_SECONDS: int = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", str(15 * 60)))

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    HOST: str = os.getenv("HOST", "127.0.0.1")
    PORT: int = int(os.getenv("PORT", "5500"))

    class Config:
        env_file = ".env"
        # Variables in .env that aren't defined here are simply ignored.
        extra = "ignore"

settings = Settings()
