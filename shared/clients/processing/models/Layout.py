"""Generic document layout model, independent of the backend."""

from pydantic import BaseModel, ConfigDict


class LayoutPage(BaseModel):
    """
    The layout of a single page: its dimensions and the text zones and regions the service detected.
    """
    model_config = ConfigDict(frozen=True)

    number: int
    size_x: float | None = None
    size_y: float | None = None
    text_zones: list[dict] = []
    regions: list[dict] = []


class DocumentLayout(BaseModel):
    """
    The layout of a whole document, one entry per page in page order.
    """
    model_config = ConfigDict(frozen=True)

    document_id: str
    pages: list[LayoutPage] = []
