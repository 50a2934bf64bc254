"""Base model shared by service response models."""

from typing import Any, Self

from pydantic import BaseModel, ConfigDict


class ApiModel(BaseModel):
    """Response model base.

    Fields the service adds after this SDK was written are kept as extra
    attributes instead of being rejected.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Build the model from a decoded JSON object."""
        return cls.model_validate(data)

    def to_dict(self) -> dict[str, Any]:
        """Serialize back to the JSON shape, omitting fields the service did not send."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True, exclude_none=True)
