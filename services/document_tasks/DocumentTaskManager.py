"""Document task manager.

High level API on top of a processing client: one coroutine per document use
case, each composed of one or more remote calls. Remote errors are never caught
here; they reach the caller unchanged.
"""

from shared.clients.processing.ProcessingClientInterface import ProcessingClientInterface
from shared.clients.processing.models.Document import DocumentDetails
from shared.clients.processing.models.Extraction import Extraction
from shared.clients.processing.models.Layout import DocumentLayout
from shared.clients.processing.models.Preview import PreviewSize
from shared.exceptions import InvalidPageError
from shared.helper.HelperConfig import HelperConfig
from shared.tasks.TaskChain import run_sequentially
from services.document_tasks.DocumentPoller import DocumentPoller

DEFAULT_POLLING_INTERVAL = 1  # seconds


class DocumentTaskManager:
    """Composes processing client calls into document tasks."""

    def __init__(
        self,
        helper_config: HelperConfig,
        processing_client: ProcessingClientInterface,
        polling_interval: float | None = None,
    ) -> None:
        self.logging = helper_config.get_logger()
        self._client = processing_client
        if polling_interval is None:
            polling_interval = helper_config.get_number_val("DOCUMENT_POLLING_INTERVAL", default=DEFAULT_POLLING_INTERVAL)
        self.polling_interval = polling_interval
        self._poller = DocumentPoller(
            helper_config=helper_config,
            processing_client=processing_client,
            interval_provider=lambda: self.polling_interval,
        )

    ##########################################
    ################ CONFIG ##################
    ##########################################

    @property
    def polling_interval(self) -> float:
        """Minimum delay in seconds between two status requests while polling.

        Running polls pick up a new value at their next wait.
        """
        return self._polling_interval

    @polling_interval.setter
    def polling_interval(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError(f"Polling interval must not be negative, got {seconds}.")
        self._polling_interval = seconds

    ##########################################
    ############### DOCUMENTS ################
    ##########################################

    async def get_document(self, document_id: str) -> DocumentDetails:
        return await self._client.do_fetch_document(document_id)

    async def create_document(self, file_name: str, image: bytes, doc_type: str | None = None, content_type: str = "image/jpeg") -> DocumentDetails:
        """Upload a new document.

        The created document is very likely not processed yet; use
        poll_document() to wait for the extractions.

        Args:
            file_name (str): The file name of the document.
            image (bytes): The encoded image.
            doc_type (str | None): Optional document type. Some incubating extractions are only available when it is set.
            content_type (str): The media type of the image.
        """
        return await self._client.do_create_document(file_name, image, doc_type=doc_type, content_type=content_type)

    async def update_document(self, document: DocumentDetails) -> DocumentDetails:
        """Submit the current values of all extractions of the document as feedback.

        Submissions run one after another. If one fails, the remaining ones are
        not sent and the ones already sent stay submitted.

        Snapshots from get_document() or poll_document() carry no extractions.
        Attach the (corrected) extractions first, e.g.
        ``document.model_copy(update={"extractions": extractions})`` with the
        mapping from get_extractions_for_document().

        Returns:
            DocumentDetails: The given document.
        """
        extractions = list(document.extractions.values())
        if not extractions:
            self.logging.warning("Document %s carries no extractions, no feedback is submitted", document.id)
            return document

        self.logging.info("Submitting feedback for %d extraction(s) of document %s", len(extractions), document.id)
        await run_sequentially(
            (lambda extraction=extraction: self._client.do_submit_feedback(document.id, extraction))
            for extraction in extractions
        )
        return document

    async def delete_document(self, document: DocumentDetails) -> None:
        await self._client.do_delete_document(document.id)

    async def poll_document(self, document: DocumentDetails) -> DocumentDetails:
        """Wait until the document is fully processed or failed.

        The result is a new snapshot; the given document is not updated.
        """
        return await self.poll_document_with_id(document.id)

    async def poll_document_with_id(self, document_id: str) -> DocumentDetails:
        return await self._poller.poll(document_id)

    ##########################################
    ################ CONTENT #################
    ##########################################

    async def get_preview_for_page(self, page: int, document: DocumentDetails, size: PreviewSize) -> bytes:
        """Get the rendered preview of a page.

        Args:
            page (int): The page number, starting from 1.
            document (DocumentDetails): The document.
            size (PreviewSize): The maximum size of the image; the image may be slightly smaller.

        Raises:
            InvalidPageError: If the page is below 1 or beyond the known page count.
        """
        if page < 1:
            raise InvalidPageError(f"Page numbers start at 1, got {page}.")
        if document.page_count is not None and page > document.page_count:
            raise InvalidPageError(f"Document {document.id} has {document.page_count} page(s), got page {page}.")
        return await self._client.do_fetch_preview(document.id, page, size)

    async def get_layout_for_document(self, document: DocumentDetails) -> DocumentLayout:
        return await self._client.do_fetch_layout(document.id)

    ##########################################
    ############## EXTRACTIONS ###############
    ##########################################

    async def get_extractions_for_document(self, document: DocumentDetails) -> dict[str, Extraction]:
        return await self._client.do_fetch_extractions(document.id)

    async def get_incubator_extractions_for_document(self, document: DocumentDetails) -> dict[str, Extraction]:
        """Get the extractions including the ones still in incubation."""
        return await self._client.do_fetch_incubator_extractions(document.id)

    async def update_extraction(self, extraction: Extraction, document: DocumentDetails) -> None:
        """Submit the value of a single extraction as feedback for the document."""
        await self._client.do_submit_feedback(document.id, extraction)

    ##########################################
    ################ ERRORS ##################
    ##########################################

    async def error_report_for_document(self, document: DocumentDetails, summary: str | None = None, description: str | None = None) -> str:
        """Report unsatisfying processing results for a document.

        The owner of the document must agree that the service may use it for
        error analysis.

        Returns:
            str: The error id assigned by the service, usable as a support reference.
        """
        report = await self._client.do_submit_error_report(document.id, summary=summary, description=description)
        return report.error_id
