#!/usr/bin/env python3

"""webextract CLI.

Usage:
    main.py create_tables [--delete-existing] [--debug]
    main.py upgrade_db [--debug]
    main.py extract <url> [--id=<extraction_id>] [--debug]
    main.py extract_file --input=<path> [--debug]
    main.py status <url> [--debug]
    main.py logs (--id=<extraction_id> | --url=<url>) [--debug]
    main.py export_table --table=<name> [--output=<path>] [--debug]
    main.py -h | --help

Commands:
    create_tables   Create the database tables (with option to delete existing ones)
    upgrade_db      Apply the database migrations
    extract         Extract company and product data from a single URL
    extract_file    Extract data from every URL listed in a file (one per line)
    status          Show the extraction status recorded for a URL
    logs            Show the operation log of an extraction or a URL
    export_table    Export a table to a CSV or Parquet file

Options:
    --delete-existing       Delete existing tables before creating new ones
    --id=<extraction_id>    Extraction identifier used to correlate progress and logs
    --input=<path>          File listing the URLs to extract
    --url=<url>             URL whose logs are shown
    --table=<name>          Table to export (extraction_records, operation_logs)
    --output=<path>         Output file, .csv or .parquet
    --debug                 Enable debug logging
    -h --help               Show this help message

Examples:
    main.py create_tables --delete-existing
    main.py extract https://example.com --id 42 --debug
    main.py extract_file --input urls.txt
    main.py status https://example.com
    main.py logs --id 42
    main.py export_table --table extraction_records --output data/exports/records.parquet
"""

import json
import sys
from uuid import uuid4

from docopt import docopt

from config import get_logger, setup_logging
from database import create_all_tables, export_table
from webextract.process.workflow import ExtractionContext, process_url, process_urls
from webextract.schemas.extractions.table import extraction_table
from webextract.schemas.operation_logs.table import operation_log_table


def read_urls(path: str) -> list[str]:
    with open(path, encoding="utf-8") as f:
        lines = [line.strip() for line in f]
    return [line for line in lines if line and not line.startswith("#")]


def cli_context() -> ExtractionContext:
    # Progress records of a CLI run have no reader, so they are dropped at once.
    return ExtractionContext(cleanup_delay=0)


def main(argv=None):
    logger = get_logger(__name__)
    try:
        args = docopt(__doc__, argv=argv)

        # Setup logging
        debug_mode = args.get("--debug", False)
        setup_logging(debug=debug_mode)

        # Create tables
        if args["create_tables"]:
            delete_existing = True if args["--delete-existing"] else False
            logger.info(f"Creating tables (delete_existing={delete_existing})")
            create_all_tables(delete_existing=delete_existing)

        # Apply migrations
        elif args["upgrade_db"]:
            from migrations.utils import upgrade_db

            upgrade_db()

        # Extract a single URL
        elif args["extract"]:
            extraction_id = args["--id"] or str(uuid4())
            logger.info(f"Extracting {args['<url>']} (extraction {extraction_id})")
            result = process_url(
                args["<url>"], extraction_id=extraction_id, context=cli_context()
            )
            print(result.model_dump_json(indent=2))
            return 0 if result.success else 1

        # Extract every URL of a file
        elif args["extract_file"]:
            urls = read_urls(args["--input"])
            logger.info(f"Extracting {len(urls)} URLs from {args['--input']}")
            results = process_urls(urls, context=cli_context())
            failed = [
                (url, result.error)
                for url, result in zip(urls, results)
                if not result.success
            ]
            print(f"{len(results) - len(failed)}/{len(results)} URLs extracted")
            for url, error in failed:
                print(f"FAILED {url}: {error}")
            return 0 if not failed else 1

        # Show the status of a URL
        elif args["status"]:
            record = extraction_table.get_record_by_url(args["<url>"])
            if record is None:
                logger.error(f"No extraction recorded for {args['<url>']}")
                return 1
            print(
                json.dumps(
                    {
                        "url": record.url,
                        "status": record.status,
                        "company_name": record.company_name,
                        "error_message": record.error_message,
                        "updated_at": record.updated_at.isoformat(),
                    },
                    indent=2,
                )
            )

        # Show operation logs
        elif args["logs"]:
            if args["--id"]:
                entries = operation_log_table.list_by_extraction_id(args["--id"])
            else:
                entries = operation_log_table.list_by_url(args["--url"])
            for entry in entries:
                duration = (
                    f" ({entry.duration_ms} ms)" if entry.duration_ms is not None else ""
                )
                print(
                    f"{entry.created_at.isoformat()} {entry.category} {entry.event}: "
                    f"{entry.message or ''}{duration}"
                )

        # Export tables
        elif args["export_table"]:
            output = export_table(table_name=args["--table"], output_path=args["--output"])
            logger.info(f"Table {args['--table']} exported to {output}")

        return 0

    except Exception as e:
        logger.error(f"An error occurred: {e}")
        return 1


if __name__ == "__main__":
    exit_code = main()
    sys.exit(exit_code)
