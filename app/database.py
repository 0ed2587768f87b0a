"""Database Configuration and Connection Management Module

This module handles database connectivity, session management, and table operations
for the interview evaluation service. It provides PostgreSQL connection with connection
pooling and the session factory used both by request handlers and by the background
evaluation job.

Dependencies:
- sqlalchemy: For database ORM and connection management.
- dotenv: For environment variable loading.
- loguru: For logging operations.
- app.models.interview_models: For database model definitions.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from dotenv import load_dotenv
import os
from loguru import logger
from app.models.interview_models import Base
load_dotenv()


def build_database_url() -> str:
    """Resolve the database URL from the environment.

    DATABASE_URL wins when set; otherwise the URL is assembled from the
    individual DB_* variables.

    Raises:
        ValueError: If neither DATABASE_URL nor every DB_* variable is set
    """
    database_url = os.getenv("DATABASE_URL")
    if database_url:
        return database_url

    # Load database connection details from environment variables
    required_vars = {
        "DB_USER": os.getenv("DB_USER"),
        "DB_PASSWORD": os.getenv("DB_PASSWORD"),
        "DB_HOST": os.getenv("DB_HOST"),
        "DB_PORT": os.getenv("DB_PORT"),
        "DB_NAME": os.getenv("DB_NAME"),
    }
    missing_vars = [var for var, value in required_vars.items() if not value]
    if missing_vars:
        raise ValueError(f"Missing required environment variables: {', '.join(missing_vars)}")

    return (
        f"postgresql+psycopg2://{required_vars['DB_USER']}:{required_vars['DB_PASSWORD']}"
        f"@{required_vars['DB_HOST']}:{required_vars['DB_PORT']}/{required_vars['DB_NAME']}?sslmode=require"
    )


DATABASE_URL = build_database_url()

# Create a new SQLAlchemy engine instance
engine = create_engine(
    DATABASE_URL,
    echo=False, # Log SQL queries for debugging
    pool_pre_ping=True, # verify connections before using
    pool_recycle=300 # Recycle connections every 5 minutes
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db_session():
    """FastAPI dependency for database session management.

    Creates a new database session for each request and ensures proper
    cleanup after the request is completed.

    Yields:
        Session: SQLAlchemy database session

    Example:
        @app.get("/interviews/{interview_id}")
        async def get_interview(db: Session = Depends(get_db_session)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_session_factory() -> sessionmaker:
    """FastAPI dependency returning the session factory.

    Background jobs outlive the request, so they open their own sessions
    from this factory instead of borrowing the request-scoped one.
    """
    return SessionLocal

def create_tables():
    """Create all database tables defined in the models.

    Uses SQLAlchemy's metadata to create all tables that don't already exist.
    This is typically called during application startup.

    Raises:
        Exception: If table creation fails

    Note:
        This operation is idempotent - existing tables won't be modified
    """
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created successfully")
    except Exception as e:
        logger.error(f"Error creating database table: {e}")
        raise
