import logging

from webextract.exceptions import StorageError
from webextract.schemas.extractions.models import ExtractionModel
from webextract.schemas.extractions.table import ExtractionTable

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


def store_extracted_data(
    extractions: ExtractionTable, url: str, extracted_data: dict
) -> ExtractionModel:
    """
    Write extracted data onto the status record of `url`.

    Args:
        extractions (ExtractionTable): Table holding one record per URL.
        url (str): The extracted URL.
        extracted_data (dict): The payload returned by the extractor.

    Returns:
        ExtractionModel: The updated record.

    Raises:
        StorageError: If the URL has no record.
    """
    company = extracted_data.get("company") or {}
    record = extractions.store_data(
        url=url, company_name=company.get("name"), data=extracted_data
    )
    if record is None:
        raise StorageError(f"No extraction record found for {url}")
    logger.info(
        f"Stored data for {url}: {len(extracted_data.get('products') or [])} products"
    )
    return record
