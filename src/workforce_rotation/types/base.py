"""Base model class for all engine models with serialization support."""

from datetime import date
from enum import Enum
from typing import Any, Dict
from pydantic import BaseModel, ConfigDict


class RotationBaseModel(BaseModel):
    """Base model for all engine models with built-in serialization.

    Provides common functionality for all engine models including:
    - Immutability once constructed (snapshots and indicators are values)
    - Serialization to a JSON-ready dictionary via to_dict()
    - Proper handling of nested models
    """
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to dictionary for serialization.

        Recursively converts nested models, enums and dates so the result
        can be handed to ``json.dumps`` by the presentation layer.

        Returns:
            Dictionary representation suitable for JSON serialization
        """
        data = self.model_dump(by_alias=False, exclude_none=True)

        def convert_nested(obj):
            if isinstance(obj, RotationBaseModel):
                return obj.to_dict()
            elif isinstance(obj, dict):
                return {k: convert_nested(v) for k, v in obj.items()}
            elif isinstance(obj, (list, tuple)):
                return [convert_nested(item) for item in obj]
            elif isinstance(obj, Enum):
                return obj.value
            elif isinstance(obj, date):
                return obj.isoformat()
            return obj

        return convert_nested(data)
