"""
Shared pytest fixtures.

FakeProcessingClient keeps documents and extractions in memory and records every
call, so orchestration tests can assert call counts, order and timing without HTTP.
"""

import asyncio
import logging
import time

import pytest

from shared.clients.processing.models.Document import DocumentDetails, DocumentState
from shared.clients.processing.models.ErrorReport import ErrorReport
from shared.clients.processing.models.Extraction import Extraction
from shared.clients.processing.models.Layout import DocumentLayout, LayoutPage
from shared.clients.processing.models.Preview import PreviewSize
from shared.exceptions import RemoteError, RemoteErrorKind
from shared.helper.HelperConfig import HelperConfig


class FakeProcessingClient:
    """In-memory stand-in for a ProcessingClientInterface implementation."""

    def __init__(self) -> None:
        self.documents: dict[str, DocumentDetails] = {}
        self.extractions: dict[str, dict[str, Extraction]] = {}
        self.incubator_extractions: dict[str, dict[str, Extraction]] = {}
        # per document: states returned by successive fetches, the last one repeats
        self.state_scripts: dict[str, list[DocumentState]] = {}
        self.fetch_calls: list[tuple[str, float, asyncio.Task | None]] = []
        self.feedback_calls: list[tuple[str, str, str | None]] = []
        self.calls: list[tuple] = []
        self.fail_fetch_with: RemoteError | None = None
        self.fail_feedback_on: dict[str, RemoteError] = {}
        self._fetch_counter: dict[str, int] = {}
        self._next_id = 1

    def add_document(self, document_id: str, states: list[DocumentState], page_count: int | None = 1, extractions: dict[str, Extraction] | None = None) -> DocumentDetails:
        self.state_scripts[document_id] = list(states)
        self.extractions[document_id] = dict(extractions or {})
        document = DocumentDetails(engine="Fake", id=document_id, state=states[0], file_name=f"{document_id}.jpg", page_count=page_count)
        self.documents[document_id] = document
        return document

    def fetch_count(self, document_id: str) -> int:
        return sum(1 for call in self.fetch_calls if call[0] == document_id)

    def _not_found(self, document_id: str) -> RemoteError:
        return RemoteError(f"Document {document_id} not found", kind=RemoteErrorKind.NOT_FOUND, status_code=404)

    async def do_create_document(self, file_name: str, content: bytes, doc_type: str | None = None, content_type: str = "image/jpeg") -> DocumentDetails:
        self.calls.append(("create", file_name, doc_type, content_type))
        document_id = f"doc-{self._next_id}"
        self._next_id += 1
        document = self.add_document(document_id, [DocumentState.PENDING, DocumentState.COMPLETE])
        return document.model_copy(update={"doc_type": doc_type, "file_name": file_name})

    async def do_fetch_document(self, document_id: str) -> DocumentDetails:
        self.fetch_calls.append((document_id, time.monotonic(), asyncio.current_task()))
        await asyncio.sleep(0)
        if self.fail_fetch_with is not None:
            raise self.fail_fetch_with
        if document_id not in self.documents:
            raise self._not_found(document_id)
        script = self.state_scripts[document_id]
        index = self._fetch_counter.get(document_id, 0)
        self._fetch_counter[document_id] = index + 1
        state = script[min(index, len(script) - 1)]
        return self.documents[document_id].model_copy(update={"state": state})

    async def do_fetch_extractions(self, document_id: str) -> dict[str, Extraction]:
        self.calls.append(("extractions", document_id))
        if document_id not in self.documents:
            raise self._not_found(document_id)
        return dict(self.extractions[document_id])

    async def do_fetch_incubator_extractions(self, document_id: str) -> dict[str, Extraction]:
        self.calls.append(("incubator", document_id))
        if document_id not in self.documents:
            raise self._not_found(document_id)
        return {**self.extractions[document_id], **self.incubator_extractions.get(document_id, {})}

    async def do_submit_feedback(self, document_id: str, extraction: Extraction) -> None:
        self.feedback_calls.append((document_id, extraction.name, extraction.value))
        await asyncio.sleep(0)
        if extraction.name in self.fail_feedback_on:
            raise self.fail_feedback_on[extraction.name]
        if document_id not in self.documents:
            raise self._not_found(document_id)
        self.extractions[document_id][extraction.name] = extraction

    async def do_delete_document(self, document_id: str) -> None:
        self.calls.append(("delete", document_id))
        if document_id not in self.documents:
            raise self._not_found(document_id)
        del self.documents[document_id]
        del self.extractions[document_id]

    async def do_fetch_preview(self, document_id: str, page: int, size: PreviewSize) -> bytes:
        self.calls.append(("preview", document_id, page, size))
        return f"{document_id}:{page}:{PreviewSize(size).value}".encode()

    async def do_fetch_layout(self, document_id: str) -> DocumentLayout:
        self.calls.append(("layout", document_id))
        return DocumentLayout(document_id=document_id, pages=[LayoutPage(number=1, size_x=595.0, size_y=842.0)])

    async def do_submit_error_report(self, document_id: str, summary: str | None = None, description: str | None = None) -> ErrorReport:
        self.calls.append(("error_report", document_id, summary, description))
        return ErrorReport(document_id=document_id, error_id="err-42", summary=summary, description=description)


@pytest.fixture
def logger():
    return logging.getLogger("docbridge.tests")


@pytest.fixture
def helper_config(logger):
    return HelperConfig(logger=logger)


@pytest.fixture
def fake_client():
    return FakeProcessingClient()


@pytest.fixture
def amount_extraction():
    return Extraction(name="amountToPay", value="24.99:EUR", entity="amount", original_value="24.99:EUR")
