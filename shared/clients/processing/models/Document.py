"""Generic processing document model, independent of the backend."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict

from shared.clients.processing.models.Extraction import Extraction


class DocumentState(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETE = "complete"
    ERROR = "error"

    def is_terminal(self) -> bool:
        """
        Returns True if the service will not change the state anymore.
        """
        return self in (DocumentState.COMPLETE, DocumentState.ERROR)


class DocumentDetails(BaseModel):
    """
    A snapshot of a document as returned by a processing client.

    Every remote read produces a new snapshot; snapshots are never updated in place.
    """
    model_config = ConfigDict(frozen=True)

    engine: str
    id: str
    state: DocumentState
    file_name: str | None = None
    doc_type: str | None = None
    page_count: int | None = None
    source_classification: str | None = None
    created_date: datetime | None = None
    extractions: dict[str, Extraction] = {}
