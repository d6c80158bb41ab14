from abc import abstractmethod

import httpx

from shared.clients.ClientInterface import ClientInterface
from shared.clients.processing.models.Document import DocumentDetails
from shared.clients.processing.models.ErrorReport import ErrorReport
from shared.clients.processing.models.Extraction import Extraction
from shared.clients.processing.models.Layout import DocumentLayout
from shared.clients.processing.models.Preview import PreviewSize
from shared.helper.HelperConfig import HelperConfig
from shared.tasks.TaskChain import chain


class ProcessingClientInterface(ClientInterface):
    """
    Client for a remote document processing service.

    Every do_* method performs exactly one remote operation (do_create_document reads
    the created document back) and raises RemoteError on failure. Nothing is retried.
    """

    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_client_type(self) -> str:
        return "processing"

    ################ ENDPOINTS ##################
    @abstractmethod
    def _get_endpoint_documents(self) -> str:
        """
        Returns the endpoint path documents are uploaded to (e.g. "/documents").
        """
        pass

    @abstractmethod
    def _get_endpoint_document_details(self, document_id: str) -> str:
        """
        Returns the endpoint path of a single document (e.g. "/documents/{id}").
        """
        pass

    @abstractmethod
    def _get_endpoint_extractions(self, document_id: str) -> str:
        """
        Returns the endpoint path of the extractions of a document.
        """
        pass

    @abstractmethod
    def _get_endpoint_extraction_feedback(self, document_id: str, extraction_name: str) -> str:
        """
        Returns the endpoint path feedback for a single extraction is submitted to.
        """
        pass

    @abstractmethod
    def _get_endpoint_preview(self, document_id: str, page: int, size: PreviewSize) -> str:
        """
        Returns the endpoint path of the rendered preview of a page.

        Args:
            document_id (str): The ID of the document.
            page (int): The 1-based page number.
            size (PreviewSize): The maximum size of the rendered image.
        """
        pass

    @abstractmethod
    def _get_endpoint_layout(self, document_id: str) -> str:
        pass

    @abstractmethod
    def _get_endpoint_error_report(self, document_id: str) -> str:
        pass

    ################ HEADERS & PARAMS ##################
    @abstractmethod
    def _get_headers_extractions(self, incubator: bool = False) -> dict:
        """
        Returns the headers for extraction requests. Some backends deliver incubating
        extractions on the same endpoint when asked for a different media type.
        """
        pass

    @abstractmethod
    def _get_params_create_document(self, file_name: str, doc_type: str | None = None) -> dict:
        pass

    @abstractmethod
    def _get_params_error_report(self, summary: str | None = None, description: str | None = None) -> dict:
        pass

    ##########################################
    ############### REQUESTS #################
    ##########################################

    async def do_create_document(self, file_name: str, content: bytes, doc_type: str | None = None, content_type: str = "image/jpeg") -> DocumentDetails:
        """
        Uploads a new document and returns the created document as the backend reports it.

        The returned document is most likely not processed yet.

        Args:
            file_name (str): The file name of the document.
            content (bytes): The encoded image.
            doc_type (str | None): Optional document type hint, which enables specialised processing on some backends.
            content_type (str): The media type of content.

        Returns:
            DocumentDetails: The created document.

        Raises:
            RemoteError: If the upload or the read back fails.
        """
        upload = self.do_request(
            method="POST",
            content=content,
            params=self._get_params_create_document(file_name, doc_type),
            endpoint=self._get_endpoint_documents(),
            additional_headers={"Content-Type": content_type},
        )
        document = await chain(upload, lambda resp: self.do_fetch_document(self._parse_created_document_id(resp)))
        self.logging.info("Created document %s (%s) on %s", document.id, file_name, self._get_engine_name())
        return document

    async def do_fetch_document(self, document_id: str) -> DocumentDetails:
        """
        Fetches a fresh snapshot of a document.

        Raises:
            RemoteError: If the request fails or the response cannot be parsed.
        """
        resp = await self.do_request(method="GET", endpoint=self._get_endpoint_document_details(document_id))
        return self._parse_endpoint_document(self.parse_json(resp))

    async def do_fetch_extractions(self, document_id: str) -> dict[str, Extraction]:
        """
        Fetches the extractions of a document.

        Returns:
            dict[str, Extraction]: The extractions indexed by their name.
        """
        resp = await self.do_request(
            method="GET",
            endpoint=self._get_endpoint_extractions(document_id),
            additional_headers=self._get_headers_extractions(incubator=False),
        )
        return self._parse_endpoint_extractions(self.parse_json(resp))

    async def do_fetch_incubator_extractions(self, document_id: str) -> dict[str, Extraction]:
        """
        Fetches the extractions of a document including the ones still in incubation.

        Returns:
            dict[str, Extraction]: The extractions indexed by their name.
        """
        resp = await self.do_request(
            method="GET",
            endpoint=self._get_endpoint_extractions(document_id),
            additional_headers=self._get_headers_extractions(incubator=True),
        )
        return self._parse_endpoint_extractions(self.parse_json(resp))

    async def do_submit_feedback(self, document_id: str, extraction: Extraction) -> None:
        """
        Submits the current value of an extraction as feedback for the given document.
        """
        await self.do_request(
            method="PUT",
            json=self._build_feedback_payload(extraction),
            endpoint=self._get_endpoint_extraction_feedback(document_id, extraction.name),
        )
        self.logging.debug(
            "Submitted feedback for extraction '%s' of document %s (%s)",
            extraction.name,
            document_id,
            "corrected" if extraction.is_modified() else "confirmed",
        )

    async def do_delete_document(self, document_id: str) -> None:
        await self.do_request(method="DELETE", endpoint=self._get_endpoint_document_details(document_id))
        self.logging.info("Deleted document %s on %s", document_id, self._get_engine_name())

    async def do_fetch_preview(self, document_id: str, page: int, size: PreviewSize) -> bytes:
        """
        Fetches the rendered preview image of a page.

        Args:
            document_id (str): The ID of the document.
            page (int): The 1-based page number.
            size (PreviewSize): The maximum size of the image.

        Returns:
            bytes: The encoded image.
        """
        resp = await self.do_request(
            method="GET",
            endpoint=self._get_endpoint_preview(document_id, page, size),
            additional_headers={"Accept": "image/jpeg"},
        )
        return resp.content

    async def do_fetch_layout(self, document_id: str) -> DocumentLayout:
        resp = await self.do_request(method="GET", endpoint=self._get_endpoint_layout(document_id))
        return self._parse_endpoint_layout(document_id, self.parse_json(resp))

    async def do_submit_error_report(self, document_id: str, summary: str | None = None, description: str | None = None) -> ErrorReport:
        """
        Reports a processing error for a document.

        Returns:
            ErrorReport: The submitted report including the error_id assigned by the backend.
        """
        resp = await self.do_request(
            method="POST",
            params=self._get_params_error_report(summary, description),
            endpoint=self._get_endpoint_error_report(document_id),
        )
        report = self._parse_endpoint_error_report(document_id, summary, description, self.parse_json(resp))
        self.logging.info("Reported error %s for document %s", report.error_id, document_id)
        return report

    ##########################################
    ########### RESPONSE PARSER ##############
    ##########################################

    @abstractmethod
    def _parse_created_document_id(self, response: httpx.Response) -> str:
        """
        Extracts the ID of a freshly uploaded document from the upload response.

        Raises:
            RemoteError: If the response does not identify the created document.
        """
        pass

    @abstractmethod
    def _parse_endpoint_document(self, response: dict) -> DocumentDetails:
        """
        Parses a raw document dict into a DocumentDetails snapshot.

        Raises:
            RemoteError: If required fields are missing or the state is unknown.
        """
        pass

    @abstractmethod
    def _parse_endpoint_extractions(self, response: dict) -> dict[str, Extraction]:
        pass

    @abstractmethod
    def _parse_endpoint_layout(self, document_id: str, response: dict) -> DocumentLayout:
        pass

    @abstractmethod
    def _parse_endpoint_error_report(self, document_id: str, summary: str | None, description: str | None, response: dict) -> ErrorReport:
        pass

    @abstractmethod
    def _build_feedback_payload(self, extraction: Extraction) -> dict:
        """
        Builds the request body carrying the current value of an extraction.
        """
        pass
