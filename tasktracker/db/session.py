from sqlmodel import create_engine, Session
from sqlalchemy.pool import StaticPool
from ..core.config import settings

# Helper function to ensure URL format is correct
def get_db_url():
    url = settings.DATABASE_URL
    if not url:
        return "sqlite:///tasktracker.db"
    # Async drivers are not used by this service
    url = url.replace("+aiosqlite", "").replace("+asyncpg", "")
    return url.replace("postgres://", "postgresql://")

db_url = get_db_url()

# --- CONFIGURATION FOR SQLITE ---
if db_url.startswith("sqlite"):
    engine_kwargs = {"connect_args": {"check_same_thread": False}}
    # An in-memory database lives only as long as its connection, so every
    # session has to share one
    if db_url in ("sqlite://", "sqlite:///:memory:"):
        engine_kwargs["poolclass"] = StaticPool

    sync_engine = create_engine(db_url, echo=settings.DB_ECHO, **engine_kwargs)

# --- CONFIGURATION FOR POSTGRESQL ---
else:
    # Uses psycopg2-binary
    sync_engine = create_engine(
        db_url,
        echo=settings.DB_ECHO,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10
    )


def get_session():
    with Session(sync_engine) as session:
        yield session
