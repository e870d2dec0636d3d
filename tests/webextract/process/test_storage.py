import pytest

from webextract.exceptions import StorageError
from webextract.process.storage import store_extracted_data


def test_store_extracted_data(extractions):
    extractions.initialize_url_entry("https://acme.test/")
    data = {"company": {"name": "Acme"}, "products": [{"name": "Arm X1"}]}

    record = store_extracted_data(extractions, "https://acme.test/", data)

    assert record.company_name == "Acme"
    assert record.data == data


def test_store_extracted_data_without_company(extractions):
    extractions.initialize_url_entry("https://acme.test/")
    record = store_extracted_data(extractions, "https://acme.test/", {"products": []})
    assert record.company_name is None


def test_store_extracted_data_requires_record(extractions):
    with pytest.raises(StorageError):
        store_extracted_data(extractions, "https://unknown.test/", {"company": {}})
