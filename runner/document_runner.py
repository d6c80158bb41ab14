"""Document runner entry point.

Uploads a document image to the configured processing service, waits until it
is processed and logs the extractions.

Usage:
    python -m runner.document_runner invoice.jpg [--doc-type Invoice] [--incubator]
"""

import argparse
import asyncio
from pathlib import Path

from services.document_tasks.DocumentTaskManager import DocumentTaskManager
from shared.clients.processing.ProcessingClientManager import ProcessingClientManager
from shared.clients.processing.models.Document import DocumentState
from shared.helper.HelperConfig import HelperConfig
from shared.logging.logging_setup import setup_logging

CONTENT_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".pdf": "application/pdf",
}


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Process a document and print its extractions.")
    parser.add_argument("file", type=Path, help="Image of the document")
    parser.add_argument("--doc-type", default=None, help="Document type hint, e.g. Invoice")
    parser.add_argument("--incubator", action="store_true", help="Include incubating extractions")
    return parser.parse_args(argv)


async def main(argv: list[str] | None = None) -> int:
    """Create, poll and read out one document. Returns the process exit code."""
    args = _parse_args(argv)
    logger = setup_logging()
    config = HelperConfig(logger=logger)

    client = ProcessingClientManager(helper_config=config).get_client()
    manager = DocumentTaskManager(helper_config=config, processing_client=client)

    try:
        await client.boot()
        await client.do_healthcheck()

        content = args.file.read_bytes()
        document = await manager.create_document(
            args.file.name,
            content,
            doc_type=args.doc_type,
            content_type=CONTENT_TYPES.get(args.file.suffix.lower(), "application/octet-stream"),
        )
        logger.info("Waiting for document %s, polling every %ss...", document.id, manager.polling_interval)
        document = await manager.poll_document(document)

        if document.state == DocumentState.ERROR:
            logger.error("Document %s could not be processed.", document.id)
            return 1

        if args.incubator:
            extractions = await manager.get_incubator_extractions_for_document(document)
        else:
            extractions = await manager.get_extractions_for_document(document)
        for name, extraction in sorted(extractions.items()):
            logger.info("%-24s %s", name, extraction.value, color="cyan")
        return 0
    finally:
        await client.close()


def run() -> None:
    raise SystemExit(asyncio.run(main()))


if __name__ == "__main__":
    run()
