# ==============================================================================
# BASE SERVICE - Shared Business Logic Helpers
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel

from thinklock.core.exceptions import NotFoundError
from thinklock.database.adapters.mongodb_adapter import MongoDBAdapter

ResponseSchemaType = TypeVar("ResponseSchemaType", bound=BaseModel)


class BaseService:
    """
    Base class for domain services.

    Holds the database adapter and offers conversion helpers from
    stored documents to response schemas.

    Attributes:
        _adapter: Database adapter for repositories and transactions
    """

    def __init__(self, adapter: MongoDBAdapter) -> None:
        self._adapter = adapter

    @staticmethod
    def _to_response(
        schema: Type[ResponseSchemaType],
        document: Dict[str, Any],
    ) -> ResponseSchemaType:
        return schema.model_validate(document)

    @classmethod
    def _to_responses(
        cls,
        schema: Type[ResponseSchemaType],
        documents: List[Dict[str, Any]],
    ) -> List[ResponseSchemaType]:
        return [cls._to_response(schema, doc) for doc in documents]

    @staticmethod
    def _require(
        document: Optional[Dict[str, Any]],
        message: str,
        resource_type: str,
        resource_id: Any,
    ) -> Dict[str, Any]:
        """
        Return the document or raise NotFoundError.

        Raises:
            NotFoundError: If document is None
        """
        if document is None:
            raise NotFoundError(
                message=message,
                resource_type=resource_type,
                resource_id=resource_id,
            )
        return document
