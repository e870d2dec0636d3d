import logging
import time
import traceback
from collections.abc import Callable
from uuid import uuid4

from pydantic import BaseModel, Field
from tqdm import tqdm

from config import CLEANUP_DELAY_SECONDS, EXTRACTION_CONFIG
from database import create_all_tables
from webextract.extraction import CompanyProductExtractor, Extractor
from webextract.process.storage import store_extracted_data
from webextract.schemas.extractions.models import ExtractionStatus
from webextract.schemas.extractions.table import ExtractionTable, extraction_table
from webextract.schemas.operation_logs.table import (
    OperationLogTable,
    operation_log_table,
)
from webextract.state import ExtractionStateRegistry
from webextract.utils.pattern import is_valid_url
from webextract.utils.timing import elapsed_ms, time_and_log_operation

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

INVALID_URL_MESSAGE = "Invalid URL format"
NO_DATA_MESSAGE = "Failed to extract data from URL"


class ExtractionResult(BaseModel):
    success: bool = Field(..., description="Whether the extraction succeeded")
    data: dict | None = Field(None, description="The extracted data on success")
    error: str | None = Field(None, description="Error message on failure")
    extraction_id: str | None = Field(
        None, description="Identifier of the extraction attempt"
    )


class ExtractionContext:
    """Collaborators and shared state used by `process_url`."""

    def __init__(
        self,
        states: ExtractionStateRegistry | None = None,
        extractions: ExtractionTable = extraction_table,
        operation_logs: OperationLogTable = operation_log_table,
        extractor: Extractor | None = None,
        storer: Callable[[ExtractionTable, str, dict], object] = store_extracted_data,
        validator: Callable[[str], bool] = is_valid_url,
        setup_store: Callable[[], None] | None = create_all_tables,
        config_loader: dict | None = None,
        cleanup_delay: float = CLEANUP_DELAY_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.states = states if states is not None else ExtractionStateRegistry()
        self.extractions = extractions
        self.operation_logs = operation_logs
        self.extractor = extractor or CompanyProductExtractor()
        self.storer = storer
        self.validator = validator
        self.setup_store = setup_store
        self.config_loader = config_loader if config_loader is not None else EXTRACTION_CONFIG
        self.cleanup_delay = cleanup_delay
        self.sleep = sleep


def process_url(
    url: str,
    extraction_id: str | None = None,
    context: ExtractionContext | None = None,
) -> ExtractionResult:
    """
    Run one extraction attempt for `url` and report its outcome.

    Progress is tracked under `extraction_id` in `context.states` for the
    duration of the attempt, the URL status record moves through
    In Progress to Completed or Failed, and every stage is written to the
    operation log.

    Args:
        url (str): The URL to extract data from.
        extraction_id (str | None): Identifier correlating progress and logs.
        context (ExtractionContext | None): Collaborators, defaults to the
            module tables and the company extractor.

    Returns:
        ExtractionResult: success with the data, or failure with a message.
    """
    context = context or ExtractionContext()
    states = context.states
    logs = context.operation_logs
    start = time.monotonic()

    try:
        if extraction_id:
            states.start(extraction_id, url)

        if context.setup_store is not None:
            context.setup_store()

        logs.log_operation(
            url, extraction_id, "Extraction", "Started", "Beginning extraction process"
        )
        states.update_progress(extraction_id, 5, "Validating URL")

        if not context.validator(url):
            logs.log_error(url, extraction_id, "ValidationError", INVALID_URL_MESSAGE)
            return ExtractionResult(
                success=False, error=INVALID_URL_MESSAGE, extraction_id=extraction_id
            )

        context.extractions.initialize_url_entry(url)
        context.extractions.update_status(url, ExtractionStatus.IN_PROGRESS)
        states.update_progress(extraction_id, 10, "Starting extraction")

        def report_progress(percent: int, stage: str):
            states.update_progress(extraction_id, percent, stage)

        try:
            extracted_data = time_and_log_operation(
                logs,
                url,
                extraction_id,
                "DataExtraction",
                context.extractor,
                url,
                context.config_loader,
                extraction_id,
                report_progress,
            )
        except Exception as e:
            logs.log_error(
                url, extraction_id, "ExtractionError", str(e), traceback.format_exc()
            )
            error = f"Extraction failed: {e}"
            context.extractions.update_status(url, ExtractionStatus.FAILED, error)
            logs.log_operation(
                url, extraction_id, "Extraction", "Failed", error, elapsed_ms(start)
            )
            return ExtractionResult(success=False, error=error, extraction_id=extraction_id)

        if extracted_data is None:
            context.extractions.update_status(
                url, ExtractionStatus.FAILED, NO_DATA_MESSAGE
            )
            logs.log_operation(
                url, extraction_id, "Extraction", "Failed", "No data extracted"
            )
            return ExtractionResult(
                success=False, error=NO_DATA_MESSAGE, extraction_id=extraction_id
            )

        try:
            time_and_log_operation(
                logs,
                url,
                extraction_id,
                "DataStorage",
                context.storer,
                context.extractions,
                url,
                extracted_data,
            )
        except Exception as e:
            # The data was extracted, a storage failure does not fail the attempt.
            logs.log_error(
                url, extraction_id, "StorageError", str(e), traceback.format_exc()
            )

        context.extractions.update_status(url, ExtractionStatus.COMPLETED)
        states.update_progress(extraction_id, 100, "Completed")
        logs.log_operation(
            url,
            extraction_id,
            "Extraction",
            "Completed",
            "Extraction completed successfully",
            elapsed_ms(start),
        )

        # Leave the final progress readable for pollers before it is dropped.
        if extraction_id and context.cleanup_delay > 0:
            context.sleep(context.cleanup_delay)

        return ExtractionResult(
            success=True, data=extracted_data, extraction_id=extraction_id
        )

    except Exception as e:
        error = f"Error processing URL: {e}"
        logs.log_error(url, extraction_id, "ProcessingError", error, traceback.format_exc())
        try:
            context.extractions.update_status(url, ExtractionStatus.FAILED, error)
        except Exception as status_error:
            logger.warning(f"Could not mark {url} as failed: {status_error}")
        return ExtractionResult(success=False, error=error, extraction_id=extraction_id)

    finally:
        states.remove(extraction_id)


def process_urls(
    urls: list[str], context: ExtractionContext | None = None
) -> list[ExtractionResult]:
    """Run `process_url` on each URL in order, one extraction id per URL."""
    context = context or ExtractionContext()
    results = []
    for url in tqdm(urls, desc="Extracting URLs"):
        extraction_id = str(uuid4())
        logger.info(f"Processing {url} (extraction {extraction_id})")
        results.append(process_url(url, extraction_id=extraction_id, context=context))
    succeeded = sum(1 for result in results if result.success)
    logger.info(f"Processed {len(results)} URLs: {succeeded} succeeded")
    return results
