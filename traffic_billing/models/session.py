from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from traffic_billing.config import settings


def engine_options(database_uri: str) -> dict:
    # SQLite pools reject the sizing arguments
    if database_uri.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,
        "pool_size": settings.SQLALCHEMY_POOL_SIZE,
        "max_overflow": settings.SQLALCHEMY_POOL_MAX_OVERFLOW,
    }


engine = create_engine(settings.SQLALCHEMY_DATABASE_URI,
                       **engine_options(settings.SQLALCHEMY_DATABASE_URI))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)
