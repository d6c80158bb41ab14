from datetime import datetime, timezone
from typing import Any

import httpx
from pydantic import ValidationError

from shared.clients.processing.ProcessingClientInterface import ProcessingClientInterface
from shared.clients.processing.models.Document import DocumentDetails, DocumentState
from shared.clients.processing.models.ErrorReport import ErrorReport
from shared.clients.processing.models.Extraction import Extraction
from shared.clients.processing.models.Layout import DocumentLayout, LayoutPage
from shared.clients.processing.models.Preview import PreviewSize
from shared.exceptions import RemoteError, RemoteErrorKind
from shared.helper.HelperConfig import HelperConfig
from shared.models.config import EnvConfig

MEDIA_TYPE_V1 = "application/vnd.gini.v1+json"
MEDIA_TYPE_INCUBATOR = "application/vnd.gini.incubator+json"

# "progress" values of the Gini API
_PROGRESS_STATES: dict[str, DocumentState] = {
    "PENDING": DocumentState.PENDING,
    "PROCESSING": DocumentState.PROCESSING,
    "COMPLETED": DocumentState.COMPLETE,
    "ERROR": DocumentState.ERROR,
}


class ProcessingClientGini(ProcessingClientInterface):
    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)
        self._base_url = self.get_config_val("BASE_URL", default="https://api.gini.net", val_type="string")
        self._access_token = self.get_config_val("ACCESS_TOKEN", default=None, val_type="string")

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_engine_name(self) -> str:
        return "Gini"

    ################ CONFIG ##################
    def _get_required_config(self) -> list[EnvConfig]:
        return [
            EnvConfig(env_key="BASE_URL", val_type="string", default="https://api.gini.net"),
            EnvConfig(env_key="ACCESS_TOKEN", val_type="string", default=None),
        ]

    ################ AUTH ##################
    def _get_auth_header(self) -> dict:
        return {"Authorization": f"Bearer {self._access_token}"}

    def _get_default_headers(self) -> dict:
        return {"Accept": MEDIA_TYPE_V1}

    ################ ENDPOINTS ##################
    def _get_base_url(self) -> str:
        return self._base_url

    def _get_endpoint_healthcheck(self) -> str:
        return "/documents?limit=1"

    def _get_endpoint_documents(self) -> str:
        return "/documents"

    def _get_endpoint_document_details(self, document_id: str) -> str:
        return f"/documents/{document_id}"

    def _get_endpoint_extractions(self, document_id: str) -> str:
        return f"/documents/{document_id}/extractions"

    def _get_endpoint_extraction_feedback(self, document_id: str, extraction_name: str) -> str:
        return f"/documents/{document_id}/extractions/{extraction_name}"

    def _get_endpoint_preview(self, document_id: str, page: int, size: PreviewSize) -> str:
        return f"/documents/{document_id}/pages/{page}/{PreviewSize(size).value}"

    def _get_endpoint_layout(self, document_id: str) -> str:
        return f"/documents/{document_id}/layout"

    def _get_endpoint_error_report(self, document_id: str) -> str:
        return f"/documents/{document_id}/errorreport"

    ################ HEADERS & PARAMS ##################
    def _get_headers_extractions(self, incubator: bool = False) -> dict:
        return {"Accept": MEDIA_TYPE_INCUBATOR if incubator else MEDIA_TYPE_V1}

    def _get_params_create_document(self, file_name: str, doc_type: str | None = None) -> dict:
        params = {"filename": file_name}
        if doc_type:
            params["doctype"] = doc_type
        return params

    def _get_params_error_report(self, summary: str | None = None, description: str | None = None) -> dict:
        params = {}
        if summary is not None:
            params["summary"] = summary
        if description is not None:
            params["description"] = description
        return params

    ##########################################
    ########### RESPONSE PARSER ##############
    ##########################################

    def _invalid_response(self, message: str) -> RemoteError:
        self.logging.error("Invalid response from %s: %s", self._get_engine_name(), message)
        return RemoteError(message, kind=RemoteErrorKind.INVALID_RESPONSE)

    def _expect_object(self, value: Any, what: str) -> dict:
        if not isinstance(value, dict):
            raise self._invalid_response(f"Expected a JSON object for {what}, got {type(value).__name__}")
        return value

    def _parse_created_document_id(self, response: httpx.Response) -> str:
        # the upload answers with 201 and the document URL in the Location header
        location = response.headers.get("Location")
        if not location:
            raise self._invalid_response("Upload response carries no Location header")
        document_id = httpx.URL(location).path.rstrip("/").rsplit("/", 1)[-1]
        if not document_id:
            raise self._invalid_response(f"Cannot read document id from Location '{location}'")
        return document_id

    def _parse_endpoint_document(self, response: dict) -> DocumentDetails:
        response = self._expect_object(response, "document")
        document_id = response.get("id")
        progress = str(response.get("progress", "")).upper()
        if not document_id:
            raise self._invalid_response("Document response carries no id")
        if progress not in _PROGRESS_STATES:
            raise self._invalid_response(f"Unknown progress '{progress}' for document {document_id}")

        try:
            created_ms = response.get("creationDate")
            return DocumentDetails(
                    #base
                    engine=self._get_engine_name(),
                    id=str(document_id),
                    state=_PROGRESS_STATES[progress],

                    #details
                    file_name=response.get("name"),
                    doc_type=response.get("docType"),
                    page_count=response.get("pageCount"),
                    source_classification=response.get("sourceClassification"),
                    created_date=datetime.fromtimestamp(created_ms / 1000, tz=timezone.utc) if created_ms else None,
                )
        except (TypeError, ValueError, OverflowError, OSError, ValidationError) as e:
            raise self._invalid_response(f"Malformed document {document_id}: {e}") from e

    def _parse_endpoint_extractions(self, response: dict) -> dict[str, Extraction]:
        response = self._expect_object(response, "extractions")
        extractions: dict[str, Extraction] = {}
        for name, item in self._expect_object(response.get("extractions") or {}, "extractions").items():
            item = self._expect_object(item, f"extraction '{name}'")
            try:
                extractions[name] = Extraction(
                    name=name,
                    value=item.get("value"),
                    entity=item.get("entity"),
                    original_value=item.get("value"),
                    confidence=item.get("confidence"),
                    box=item.get("box"),
                    candidates=item.get("candidates"),
                )
            except ValidationError as e:
                raise self._invalid_response(f"Malformed extraction '{name}': {e}") from e
        return extractions

    def _parse_endpoint_layout(self, document_id: str, response: dict) -> DocumentLayout:
        response = self._expect_object(response, f"layout of document {document_id}")
        raw_pages = response.get("pages") or []
        if not isinstance(raw_pages, list):
            raise self._invalid_response(f"Layout of document {document_id} carries no page list")

        pages: list[LayoutPage] = []
        for raw_page in raw_pages:
            page = self._expect_object(raw_page, f"layout page of document {document_id}")
            try:
                pages.append(LayoutPage(
                    number=page.get("number"),
                    size_x=page.get("sizeX"),
                    size_y=page.get("sizeY"),
                    text_zones=page.get("textZones") or [],
                    regions=page.get("regions") or [],
                ))
            except ValidationError as e:
                raise self._invalid_response(f"Malformed layout page of document {document_id}: {e}") from e
        return DocumentLayout(document_id=document_id, pages=sorted(pages, key=lambda p: p.number))

    def _parse_endpoint_error_report(self, document_id: str, summary: str | None, description: str | None, response: dict) -> ErrorReport:
        response = self._expect_object(response, f"error report of document {document_id}")
        error_id = response.get("errorId")
        if not error_id:
            raise self._invalid_response(f"Error report response for document {document_id} carries no errorId")
        return ErrorReport(document_id=document_id, error_id=str(error_id), summary=summary, description=description)

    def _build_feedback_payload(self, extraction: Extraction) -> dict:
        return {"value": extraction.value}
