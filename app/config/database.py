# app/config/database.py
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from .settings import settings


def build_engine_kwargs(config=settings) -> dict:
    """Opciones del engine según el backend configurado"""
    engine_kwargs = {
        "pool_pre_ping": True,
        "echo": config.debug
    }

    if config.is_postgres:
        engine_kwargs["pool_size"] = config.db_pool_size
        engine_kwargs["max_overflow"] = config.db_max_overflow
        engine_kwargs["pool_recycle"] = config.db_pool_recycle
        if config.db_statement_timeout_ms:
            engine_kwargs["connect_args"] = {
                "options": f"-c statement_timeout={config.db_statement_timeout_ms}"
            }

    return engine_kwargs


# Create engine
engine = create_engine(settings.database_url, **build_engine_kwargs())

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()

# Database dependency
def get_db():
    """Database dependency for FastAPI"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
