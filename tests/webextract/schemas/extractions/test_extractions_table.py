from uuid import uuid4

from webextract.schemas.extractions.models import (
    ExtractionModel,
    ExtractionStatus,
    ExtractionUpdateModel,
)


def create_record(extractions) -> ExtractionModel:
    url = f"https://example.com/{uuid4()}"
    return extractions.create_record(url=url)


def test_create_extraction_record(extractions):
    record = create_record(extractions)
    assert record.url.startswith("https://example.com/")
    assert record.status == "Pending"
    assert record.data is None


def test_get_extraction_record_by_url(extractions):
    created = create_record(extractions)
    record = extractions.get_record_by_url(url=created.url)
    assert record is not None
    assert record.id == created.id


def test_get_extraction_record_by_id(extractions):
    created = create_record(extractions)
    record = extractions.get_record_by_id(record_id=created.id)
    assert record is not None
    assert record.url == created.url


def test_initialize_url_entry_is_idempotent(extractions):
    url = "https://example.com/initialize"
    first = extractions.initialize_url_entry(url)
    extractions.update_status(url, ExtractionStatus.COMPLETED)
    second = extractions.initialize_url_entry(url)
    assert second.id == first.id
    assert second.status == "Completed"
    assert len(extractions.list_records()) == 1


def test_update_status(extractions):
    created = create_record(extractions)
    record = extractions.update_status(
        created.url, ExtractionStatus.FAILED, "Extraction failed: boom"
    )
    assert record.status == "Failed"
    assert record.error_message == "Extraction failed: boom"

    record = extractions.update_status(created.url, "In Progress")
    assert record.status == "In Progress"
    assert record.error_message is None


def test_update_status_unknown_url(extractions):
    assert extractions.update_status("https://example.com/missing", "Failed") is None


def test_update_extraction_record(extractions):
    created = create_record(extractions)
    updated = extractions.update_record(
        record_id=created.id,
        updated_record=ExtractionUpdateModel(status="Completed", company_name="Acme"),
    )
    assert updated is not None
    assert updated.status == "Completed"
    assert updated.company_name == "Acme"


def test_store_data(extractions):
    created = create_record(extractions)
    data = {"company": {"name": "Acme"}, "products": [{"name": "Arm X1"}]}
    record = extractions.store_data(created.url, company_name="Acme", data=data)
    assert record.company_name == "Acme"
    assert extractions.get_record_by_url(created.url).data == data


def test_list_records_by_status(extractions):
    completed = create_record(extractions)
    create_record(extractions)
    extractions.update_status(completed.url, ExtractionStatus.COMPLETED)

    records = extractions.list_records(status=ExtractionStatus.COMPLETED)
    assert [record.id for record in records] == [completed.id]
    assert len(extractions.list_records()) == 2


def test_delete_extraction_record(extractions):
    created = create_record(extractions)
    assert extractions.delete_record(record_id=created.id) is True
    assert extractions.get_record_by_url(url=created.url) is None


def test_delete_nonexistent_extraction_record(extractions):
    assert extractions.delete_record(record_id=str(uuid4())) is False
