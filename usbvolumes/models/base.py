"""Base model for all usbvolumes Pydantic models.

This module provides a base model class that enforces consistent serialization
behavior across all usbvolumes models.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class UsbVolumesBaseModel(BaseModel):
    """Base model class for all usbvolumes Pydantic models.

    Serialization always goes through field aliases in JSON mode, so the
    wire names (``serialNumber``) are used wherever a model leaves Python.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
        use_enum_values=True,
        validate_assignment=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """Convert model to dictionary with consistent serialization parameters.

        Returns:
            Dictionary representation using JSON-compatible serialization
        """
        return self.model_dump(by_alias=True, exclude_unset=True, mode="json")
