from datetime import datetime
from webextract.connectors.db.sql import Base
from sqlalchemy import Column, String, DateTime, Integer, Text


class OperationLog(Base):
    __tablename__ = "operation_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    url = Column(String, index=True, nullable=False)
    extraction_id = Column(String, index=True, nullable=True)
    category = Column(String, nullable=False)
    event = Column(String, nullable=False)
    message = Column(Text, nullable=True)
    duration_ms = Column(Integer, nullable=True)
    stack_trace = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
