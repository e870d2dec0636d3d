import logging

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from webextract.connectors.db.sql import get_db
from webextract.schemas.operation_logs.schema import OperationLog
from webextract.schemas.operation_logs.models import (
    OperationLogCreateModel,
    OperationLogModel,
)

logger = logging.getLogger(__name__)

ERROR_EVENT = "Error"


class OperationLogTable:
    """Append-only log of workflow operations, mirrored to the python logger."""

    def __init__(self, db_session=get_db):
        self.db_session = db_session

    def _write(self, **fields) -> OperationLogModel | None:
        try:
            entry = OperationLogCreateModel(**fields)
            with self.db_session() as db:
                db_record = OperationLog(**entry.model_dump())
                db.add(db_record)
                db.commit()
                db.refresh(db_record)
                return OperationLogModel.model_validate(db_record)
        except (SQLAlchemyError, ValidationError) as e:
            logger.warning(
                f"Could not persist log entry {fields.get('category')}/{fields.get('event')} "
                f"for {fields.get('url')!r}: {e}"
            )
            return None

    def log_operation(
        self,
        url: str,
        extraction_id: str | None,
        category: str,
        event: str,
        message: str | None = None,
        duration_ms: int | None = None,
    ) -> OperationLogModel | None:
        duration = f" ({duration_ms} ms)" if duration_ms is not None else ""
        logger.info(f"[{extraction_id or '-'}] {category} {event}: {message or ''}{duration}")
        return self._write(
            url=url,
            extraction_id=extraction_id,
            category=category,
            event=event,
            message=message,
            duration_ms=duration_ms,
        )

    def log_error(
        self,
        url: str,
        extraction_id: str | None,
        error_type: str,
        message: str,
        stack_trace: str | None = None,
    ) -> OperationLogModel | None:
        logger.error(f"[{extraction_id or '-'}] {error_type} for {url}: {message}")
        if stack_trace:
            logger.debug(stack_trace)
        return self._write(
            url=url,
            extraction_id=extraction_id,
            category=error_type,
            event=ERROR_EVENT,
            message=message,
            stack_trace=stack_trace,
        )

    def list_by_extraction_id(self, extraction_id: str) -> list[OperationLogModel]:
        with self.db_session() as db:
            records = (
                db.query(OperationLog)
                .filter(OperationLog.extraction_id == extraction_id)
                .order_by(OperationLog.id)
                .all()
            )
            return [OperationLogModel.model_validate(record) for record in records]

    def list_by_url(self, url: str, limit: int = 100) -> list[OperationLogModel]:
        with self.db_session() as db:
            records = (
                db.query(OperationLog)
                .filter(OperationLog.url == url)
                .order_by(OperationLog.id)
                .limit(limit)
                .all()
            )
            return [OperationLogModel.model_validate(record) for record in records]


operation_log_table = OperationLogTable()
