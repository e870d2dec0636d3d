from datetime import datetime
from webextract.connectors.db.sql import Base
from sqlalchemy import Column, String, DateTime, JSON


class ExtractionRecord(Base):
    __tablename__ = "extraction_records"

    id = Column(String, primary_key=True)
    url = Column(String, unique=True, index=True, nullable=False)
    status = Column(String, index=True, nullable=False)
    company_name = Column(String, nullable=True)
    data = Column(JSON, nullable=True)
    error_message = Column(String, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(
        DateTime, nullable=False, default=datetime.now, onupdate=datetime.now
    )
