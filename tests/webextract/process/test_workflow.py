from unittest.mock import Mock

import pytest

from webextract.exceptions import StorageError
from webextract.process.workflow import ExtractionContext, process_url, process_urls

URL = "https://acme.test/"

DATA = {
    "url": URL,
    "company": {"name": "Acme Robotics"},
    "products": [{"name": "Arm X1"}],
}


@pytest.fixture
def extractor():
    return Mock(return_value=DATA)


@pytest.fixture
def sleep():
    return Mock()


@pytest.fixture
def context(states, extractions, operation_logs, extractor, sleep):
    return ExtractionContext(
        states=states,
        extractions=extractions,
        operation_logs=operation_logs,
        extractor=extractor,
        setup_store=None,
        config_loader={"max_pages": 1},
        cleanup_delay=1,
        sleep=sleep,
    )


def events(operation_logs, extraction_id):
    return [
        (entry.category, entry.event)
        for entry in operation_logs.list_by_extraction_id(extraction_id)
    ]


def test_invalid_url_fails_without_extracting(context, extractor, extractions, operation_logs, states):
    result = process_url("not a url", extraction_id="run-1", context=context)

    assert result.success is False
    assert result.error == "Invalid URL format"
    assert result.data is None
    extractor.assert_not_called()
    assert extractions.get_record_by_url("not a url") is None
    assert "run-1" not in states
    assert events(operation_logs, "run-1") == [
        ("Extraction", "Started"),
        ("ValidationError", "Error"),
    ]


def test_missing_url_fails_without_extracting(context, extractor, states):
    for value in (None, 42):
        result = process_url(value, extraction_id="run-1", context=context)

        assert result.success is False
        assert result.error == "Invalid URL format"
        assert "run-1" not in states
    extractor.assert_not_called()


def test_failing_extractor_marks_record_failed(context, extractor, extractions, operation_logs, states):
    extractor.side_effect = RuntimeError("connection reset")

    result = process_url(URL, extraction_id="run-1", context=context)

    assert result.success is False
    assert result.error == "Extraction failed: connection reset"
    record = extractions.get_record_by_url(URL)
    assert record.status == "Failed"
    assert record.error_message == "Extraction failed: connection reset"
    assert "run-1" not in states

    assert events(operation_logs, "run-1") == [
        ("Extraction", "Started"),
        ("DataExtraction", "Started"),
        ("DataExtraction", "Failed"),
        ("ExtractionError", "Error"),
        ("Extraction", "Failed"),
    ]
    entries = operation_logs.list_by_extraction_id("run-1")
    assert "RuntimeError: connection reset" in entries[3].stack_trace
    assert entries[-1].duration_ms is not None


def test_empty_extraction_fails(context, extractor, extractions, states):
    extractor.return_value = None

    result = process_url(URL, extraction_id="run-1", context=context)

    assert result.success is False
    assert result.error == "Failed to extract data from URL"
    assert extractions.get_record_by_url(URL).status == "Failed"
    assert "run-1" not in states


def test_empty_dict_counts_as_extracted_data(context, extractor, extractions):
    extractor.return_value = {}

    result = process_url(URL, extraction_id="run-1", context=context)

    assert result.success is True
    assert result.data == {}
    assert extractions.get_record_by_url(URL).status == "Completed"


def test_storage_failure_still_succeeds(context, extractions, operation_logs, states):
    context.storer = Mock(side_effect=StorageError("disk full"))

    result = process_url(URL, extraction_id="run-1", context=context)

    assert result.success is True
    assert result.data == DATA
    record = extractions.get_record_by_url(URL)
    assert record.status == "Completed"
    assert record.data is None
    assert ("StorageError", "Error") in events(operation_logs, "run-1")
    assert ("Extraction", "Completed") in events(operation_logs, "run-1")
    assert "run-1" not in states


def test_successful_extraction(context, extractor, extractions, operation_logs, states, sleep):
    result = process_url(URL, extraction_id="run-1", context=context)

    assert result.success is True
    assert result.data == DATA
    assert result.error is None
    assert result.extraction_id == "run-1"

    record = extractions.get_record_by_url(URL)
    assert record.status == "Completed"
    assert record.company_name == "Acme Robotics"
    assert record.data == DATA
    assert record.error_message is None

    extractor.assert_called_once()
    assert extractor.call_args.args[:3] == (URL, {"max_pages": 1}, "run-1")

    assert events(operation_logs, "run-1") == [
        ("Extraction", "Started"),
        ("DataExtraction", "Started"),
        ("DataExtraction", "Completed"),
        ("DataStorage", "Started"),
        ("DataStorage", "Completed"),
        ("Extraction", "Completed"),
    ]
    sleep.assert_called_once_with(1)
    assert "run-1" not in states


def test_progress_is_tracked_during_extraction(context, extractor, states):
    seen = []

    def extract(url, config, extraction_id, progress):
        seen.append(states.get(extraction_id).model_copy())
        progress(50, "Scanning pages")
        seen.append(states.get(extraction_id).model_copy())
        return DATA

    extractor.side_effect = extract

    process_url(URL, extraction_id="run-1", context=context)

    assert (seen[0].progress, seen[0].stage) == (10, "Starting extraction")
    assert (seen[1].progress, seen[1].stage) == (50, "Scanning pages")
    assert seen[0].url == URL
    assert "run-1" not in states


def test_final_progress_is_visible_before_cleanup(context, states, sleep):
    sleep.side_effect = lambda delay: seen.append(states.get("run-1").model_copy())
    seen = []

    process_url(URL, extraction_id="run-1", context=context)

    assert (seen[0].progress, seen[0].stage) == (100, "Completed")
    assert "run-1" not in states


def test_retry_after_failure_resets_status(context, extractor, extractions):
    extractor.side_effect = RuntimeError("timeout")
    process_url(URL, extraction_id="run-1", context=context)
    extractor.side_effect = None

    result = process_url(URL, extraction_id="run-2", context=context)

    assert result.success is True
    record = extractions.get_record_by_url(URL)
    assert record.status == "Completed"
    assert record.error_message is None
    assert len(extractions.list_records()) == 1


def test_unexpected_error_is_reported(context, extractions, operation_logs, states):
    context.validator = Mock(side_effect=RuntimeError("validator unavailable"))

    result = process_url(URL, extraction_id="run-1", context=context)

    assert result.success is False
    assert result.error == "Error processing URL: validator unavailable"
    assert ("ProcessingError", "Error") in events(operation_logs, "run-1")
    assert "run-1" not in states


def test_unexpected_error_marks_existing_record_failed(context, extractions, states):
    extractions.initialize_url_entry(URL)
    context.setup_store = Mock(side_effect=RuntimeError("database unavailable"))

    result = process_url(URL, extraction_id="run-1", context=context)

    assert result.success is False
    assert result.error == "Error processing URL: database unavailable"
    assert extractions.get_record_by_url(URL).status == "Failed"
    assert "run-1" not in states


def test_status_cleanup_failure_is_not_raised(context, states):
    context.setup_store = Mock(side_effect=RuntimeError("database unavailable"))
    context.extractions = Mock()
    context.extractions.update_status.side_effect = RuntimeError("still unavailable")

    result = process_url(URL, extraction_id="run-1", context=context)

    assert result.success is False
    assert "run-1" not in states


def test_without_extraction_id(context, sleep, states):
    result = process_url(URL, context=context)

    assert result.success is True
    assert result.extraction_id is None
    sleep.assert_not_called()
    assert len(states) == 0


def test_setup_store_is_called(context):
    context.setup_store = Mock()
    process_url(URL, extraction_id="run-1", context=context)
    context.setup_store.assert_called_once_with()


def test_process_urls(context, extractions):
    results = process_urls([URL, "ftp://acme.test/file"], context=context)

    assert [result.success for result in results] == [True, False]
    assert results[1].error == "Invalid URL format"
    assert results[0].extraction_id != results[1].extraction_id
    assert extractions.get_record_by_url(URL).status == "Completed"
