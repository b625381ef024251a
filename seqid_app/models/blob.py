from sqlalchemy import Column, String, Text, DateTime, Float
from sqlalchemy.sql import func
from seqid_app.database.connection import Base


class StoredBlob(Base):
    """
    One named JSON document.
    
    Writes replace the whole payload; there is no partial update.
    """
    __tablename__ = "blobs"

    name = Column(String(64), primary_key=True)
    payload = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class WriteLease(Base):
    """
    Exclusive write lease on the blobs.

    Holding the row means holding the lock. The primary key makes a second
    insert fail, and an expired lease may be taken over.
    """
    __tablename__ = "write_leases"

    name = Column(String(64), primary_key=True)
    owner = Column(String(32), nullable=False)
    expires_at = Column(Float, nullable=False)  # epoch seconds
