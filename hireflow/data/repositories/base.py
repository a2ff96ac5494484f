"""
Base repository class providing common CRUD operations.

All entity-specific repositories inherit from this base class.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, TypeVar

from bson import ObjectId
from pymongo.collection import Collection
from pymongo.results import InsertOneResult

from hireflow.data.database import get_database_manager
from hireflow.data.models.base import BaseDocument, utc_now
from hireflow.utils.logger import get_logger

logger = get_logger(__name__)

# Type variable for document models
T = TypeVar("T", bound=BaseDocument)


class BaseRepository(ABC, Generic[T]):
    """
    Abstract base repository providing common database operations.

    Subclasses must define the collection name and model class. A
    collection may be passed in directly; otherwise it is resolved
    lazily through the database manager.
    """

    @property
    @abstractmethod
    def collection_name(self) -> str:
        """Name of the MongoDB collection."""
        pass

    @property
    @abstractmethod
    def model_class(self) -> type[T]:
        """Pydantic model class for this repository."""
        pass

    def __init__(self, collection: Optional[Collection] = None) -> None:
        self._collection = collection

    # -------------------------------------------------------------------------
    # Collection Access
    # -------------------------------------------------------------------------

    def _get_collection(self) -> Collection:
        """Get the collection instance."""
        if self._collection is None:
            self._collection = get_database_manager().get_collection(self.collection_name)
        return self._collection

    # -------------------------------------------------------------------------
    # Document Conversion
    # -------------------------------------------------------------------------

    def _to_model(self, document: Optional[dict[str, Any]]) -> Optional[T]:
        """Convert MongoDB document to Pydantic model."""
        if document is None:
            return None
        return self.model_class.model_validate(document)

    def _to_models(self, documents: list[dict[str, Any]]) -> list[T]:
        """Convert list of MongoDB documents to Pydantic models."""
        return [self._to_model(doc) for doc in documents if doc is not None]

    def _to_document(self, model: T) -> dict[str, Any]:
        """Convert Pydantic model to MongoDB document."""
        return model.model_dump_mongo()

    @staticmethod
    def _to_object_id(id_value: str | ObjectId) -> ObjectId:
        """Convert string to ObjectId if needed."""
        if isinstance(id_value, ObjectId):
            return id_value
        return ObjectId(id_value)

    @staticmethod
    def _is_valid_id(id_value: Any) -> bool:
        return isinstance(id_value, ObjectId) or ObjectId.is_valid(id_value)

    # -------------------------------------------------------------------------
    # CRUD Operations
    # -------------------------------------------------------------------------

    def create(self, model: T) -> T:
        """Create a new document."""
        collection = self._get_collection()
        now = utc_now()
        model.created_at = now
        model.updated_at = now
        document = self._to_document(model)

        result: InsertOneResult = collection.insert_one(document)
        model.id = result.inserted_id
        logger.debug(f"Created {self.collection_name} document: {result.inserted_id}")
        return model

    def get_by_id(self, id_value: str | ObjectId) -> Optional[T]:
        """Get a document by its ID. Malformed IDs match nothing."""
        if not self._is_valid_id(id_value):
            return None
        collection = self._get_collection()
        document = collection.find_one({"_id": self._to_object_id(id_value)})
        return self._to_model(document)

    def get_by_ids(self, ids: list[str | ObjectId]) -> dict[str, T]:
        """Fetch several documents at once, keyed by string ID."""
        object_ids = [self._to_object_id(i) for i in ids if self._is_valid_id(i)]
        if not object_ids:
            return {}
        collection = self._get_collection()
        documents = collection.find({"_id": {"$in": object_ids}})
        return {str(model.id): model for model in self._to_models(list(documents))}

    def find(
        self,
        query: dict[str, Any],
        skip: int = 0,
        limit: int = 100,
        sort_by: Optional[str] = None,
        sort_order: int = -1,
    ) -> list[T]:
        """Find documents matching a query. A limit of 0 means no limit."""
        collection = self._get_collection()
        cursor = collection.find(query)

        if sort_by:
            cursor = cursor.sort(sort_by, sort_order)
        else:
            cursor = cursor.sort("created_at", -1)

        cursor = cursor.skip(skip).limit(limit)
        return self._to_models(list(cursor))

    def find_one(self, query: dict[str, Any]) -> Optional[T]:
        """Find a single document matching a query."""
        collection = self._get_collection()
        document = collection.find_one(query)
        return self._to_model(document)

    def count(self, query: Optional[dict[str, Any]] = None) -> int:
        """Count documents matching a query."""
        collection = self._get_collection()
        return collection.count_documents(query or {})

    def exists(self, query: dict[str, Any]) -> bool:
        """Check if any document matches the query."""
        collection = self._get_collection()
        return collection.count_documents(query, limit=1) > 0
