"""Generic extraction model, independent of the backend."""

from pydantic import BaseModel, ConfigDict


class Extraction(BaseModel):
    """
    A named field value the processing service derived from a document (e.g. an amount or a date).

    Extractions are immutable snapshots. A corrected value is expressed as a new
    instance via with_value(), which keeps the value the service originally delivered.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    value: str | None = None
    entity: str | None = None
    original_value: str | None = None
    confidence: float | None = None
    box: dict | None = None
    candidates: str | None = None

    def with_value(self, value: str | None) -> "Extraction":
        """
        Returns a copy of this extraction carrying the given value.

        Args:
            value (str | None): The corrected value.

        Returns:
            Extraction: The corrected extraction. original_value is kept, or set to the current value if it was unknown.
        """
        original = self.original_value if self.original_value is not None else self.value
        return self.model_copy(update={"value": value, "original_value": original})

    def is_modified(self) -> bool:
        """
        Returns True if the value differs from the value the service originally delivered.
        """
        return self.original_value is not None and self.value != self.original_value
