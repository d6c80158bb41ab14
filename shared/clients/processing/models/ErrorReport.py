from pydantic import BaseModel, ConfigDict


class ErrorReport(BaseModel):
    """
    An error report submitted for a document. error_id is assigned by the service
    and can be handed to its support as a reference.
    """
    model_config = ConfigDict(frozen=True)

    document_id: str
    error_id: str
    summary: str | None = None
    description: str | None = None
