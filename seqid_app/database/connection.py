from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

from seqid_app.config import settings

Base = declarative_base()


def build_engine(database_url: str) -> Engine:
    """Create an engine; SQLite connections may be shared across threads"""
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, connect_args=connect_args)


engine = build_engine(settings.database_url)
