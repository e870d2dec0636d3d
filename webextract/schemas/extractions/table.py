from typing import Any

from webextract.connectors.db.sql import get_db
from webextract.schemas.extractions.schema import ExtractionRecord
from webextract.schemas.extractions.models import (
    ExtractionModel,
    ExtractionCreateModel,
    ExtractionStatus,
    ExtractionUpdateModel,
)


def _status_value(status: str | ExtractionStatus) -> str:
    return status.value if isinstance(status, ExtractionStatus) else status


class ExtractionTable:
    def __init__(self, db_session=get_db):
        self.db_session = db_session

    def create_record(
        self, url: str, status: str | ExtractionStatus = ExtractionStatus.PENDING
    ) -> ExtractionModel:
        with self.db_session() as db:
            created_record = ExtractionCreateModel(
                url=url,
                status=_status_value(status),
            )
            db_record = ExtractionRecord(**created_record.model_dump())
            db.add(db_record)
            db.commit()
            db.refresh(db_record)
            return ExtractionModel.model_validate(db_record)

    def get_record_by_url(self, url: str) -> ExtractionModel | None:
        with self.db_session() as db:
            record = (
                db.query(ExtractionRecord).filter(ExtractionRecord.url == url).first()
            )
            return ExtractionModel.model_validate(record) if record else None

    def get_record_by_id(self, record_id: str) -> ExtractionModel | None:
        with self.db_session() as db:
            record = (
                db.query(ExtractionRecord)
                .filter(ExtractionRecord.id == record_id)
                .first()
            )
            return ExtractionModel.model_validate(record) if record else None

    def initialize_url_entry(self, url: str) -> ExtractionModel:
        """Return the record for `url`, creating a pending one when missing."""
        record = self.get_record_by_url(url)
        if record:
            return record
        return self.create_record(url=url, status=ExtractionStatus.PENDING)

    def update_record(
        self, record_id: str, updated_record: ExtractionUpdateModel
    ) -> ExtractionModel | None:
        with self.db_session() as db:
            record = (
                db.query(ExtractionRecord)
                .filter(ExtractionRecord.id == record_id)
                .first()
            )
            if not record:
                return None
            for field, value in updated_record.model_dump(exclude_unset=True).items():
                setattr(record, field, value)
            db.commit()
            db.refresh(record)
        return ExtractionModel.model_validate(record) if record else None

    def update_status(
        self,
        url: str,
        status: str | ExtractionStatus,
        error_message: str | None = None,
    ) -> ExtractionModel | None:
        with self.db_session() as db:
            record = (
                db.query(ExtractionRecord).filter(ExtractionRecord.url == url).first()
            )
            if not record:
                return None
            record.status = _status_value(status)
            record.error_message = error_message
            db.commit()
            db.refresh(record)
            return ExtractionModel.model_validate(record)

    def store_data(
        self, url: str, company_name: str | None, data: dict[str, Any]
    ) -> ExtractionModel | None:
        with self.db_session() as db:
            record = (
                db.query(ExtractionRecord).filter(ExtractionRecord.url == url).first()
            )
            if not record:
                return None
            record.company_name = company_name
            record.data = data
            db.commit()
            db.refresh(record)
            return ExtractionModel.model_validate(record)

    def delete_record(self, record_id: str) -> bool:
        with self.db_session() as db:
            record = (
                db.query(ExtractionRecord)
                .filter(ExtractionRecord.id == record_id)
                .first()
            )
            if not record:
                return False
            db.delete(record)
            db.commit()
            return True

    def list_records(
        self,
        status: str | ExtractionStatus | None = None,
        offset: int = 0,
        limit: int = 100,
    ) -> list[ExtractionModel]:
        with self.db_session() as db:
            query = db.query(ExtractionRecord)
            if status is not None:
                query = query.filter(ExtractionRecord.status == _status_value(status))
            records = (
                query.order_by(ExtractionRecord.created_at)
                .offset(offset)
                .limit(limit)
                .all()
            )
            return [ExtractionModel.model_validate(record) for record in records]


extraction_table = ExtractionTable()
