"""Shared schema helpers: camelCase models and the success envelope."""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Request body whose JSON keys are camelCase (fullName, productId, ...)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        """Fields the client actually sent, keyed by their JSON names."""
        return self.model_dump(by_alias=True, exclude_unset=True)


def success_response(data: Any = None, message: str | None = None) -> dict[str, Any]:
    """``{"success": true, "data": ..., "message": ...}``; data/message omitted when None."""
    body: dict[str, Any] = {"success": True}
    if data is not None:
        body["data"] = data
    if message is not None:
        body["message"] = message
    return body
