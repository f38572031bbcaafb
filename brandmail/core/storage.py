"""
Persistence for brand kits and email drafts.

The renderer and checker never touch storage; callers load records
through a Repository and pass the values in.

Backends:
- memory: process-local dict (default, tests)
- json: one JSON file per collection
- firestore: one Firestore collection per record type
"""

import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from google.cloud import firestore
from pydantic import BaseModel

from ..config.settings import StorageConfig
from ..models.schemas import BrandKit
from .brand_parser import default_brand_kit

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


def _stamp(item: T) -> T:
    return item.model_copy(update={"updated_at": datetime.now(timezone.utc).isoformat()})


class Repository(ABC, Generic[T]):
    """get/list/put/delete by id over pydantic records with an ``id`` field."""

    def __init__(self, model: Type[T]):
        self.model = model

    @abstractmethod
    def get(self, item_id: str) -> Optional[T]:
        ...

    @abstractmethod
    def list(self) -> List[T]:
        ...

    @abstractmethod
    def put(self, item: T) -> T:
        """Insert or replace ``item``; returns the stored copy with ``updated_at`` set."""

    @abstractmethod
    def delete(self, item_id: str) -> bool:
        """Remove the record; False if it did not exist."""


class InMemoryRepository(Repository[T]):

    def __init__(self, model: Type[T]):
        super().__init__(model)
        self._items: Dict[str, T] = {}

    def get(self, item_id: str) -> Optional[T]:
        return self._items.get(item_id)

    def list(self) -> List[T]:
        return list(self._items.values())

    def put(self, item: T) -> T:
        stored = _stamp(item)
        self._items[stored.id] = stored
        return stored

    def delete(self, item_id: str) -> bool:
        return self._items.pop(item_id, None) is not None


class JsonFileRepository(Repository[T]):
    """Stores the whole collection as a JSON list in ``<data_dir>/<collection>.json``."""

    def __init__(self, model: Type[T], data_dir: str, collection: str):
        super().__init__(model)
        self.path = Path(data_dir) / f"{collection}.json"
        self.path.parent.mkdir(parents=True, exist_ok=True)
        logger.info(f"JsonFileRepository initialized ({self.path})")

    def _load(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            return []
        with open(self.path, "r", encoding="utf-8") as f:
            return json.load(f)

    def _save(self, records: List[Dict[str, Any]]):
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(records, f, ensure_ascii=False, indent=2)

    def get(self, item_id: str) -> Optional[T]:
        for record in self._load():
            if record.get("id") == item_id:
                return self.model.model_validate(record)
        return None

    def list(self) -> List[T]:
        return [self.model.model_validate(record) for record in self._load()]

    def put(self, item: T) -> T:
        stored = _stamp(item)
        data = stored.model_dump(by_alias=True)
        records = self._load()
        for index, record in enumerate(records):
            if record.get("id") == stored.id:
                records[index] = data
                break
        else:
            records.append(data)
        self._save(records)
        return stored

    def delete(self, item_id: str) -> bool:
        records = self._load()
        remaining = [r for r in records if r.get("id") != item_id]
        if len(remaining) == len(records):
            return False
        self._save(remaining)
        return True


class FirestoreRepository(Repository[T]):
    """One Firestore document per record, keyed by record id."""

    def __init__(
        self,
        model: Type[T],
        collection: str,
        project_id: Optional[str] = None,
        client: Optional[firestore.Client] = None,
    ):
        super().__init__(model)
        self.db = client or firestore.Client(project=project_id)
        self.collection = collection
        logger.info(f"FirestoreRepository initialized (collection: {self.collection})")

    def _doc(self, item_id: str):
        return self.db.collection(self.collection).document(item_id)

    def get(self, item_id: str) -> Optional[T]:
        doc = self._doc(item_id).get()
        if doc.exists:
            return self.model.model_validate(doc.to_dict())
        return None

    def list(self) -> List[T]:
        return [self.model.model_validate(doc.to_dict()) for doc in self.db.collection(self.collection).stream()]

    def put(self, item: T) -> T:
        stored = _stamp(item)
        self._doc(stored.id).set(stored.model_dump(by_alias=True))
        logger.info(f"Saved {self.collection}/{stored.id}")
        return stored

    def delete(self, item_id: str) -> bool:
        doc_ref = self._doc(item_id)
        if not doc_ref.get().exists:
            return False
        doc_ref.delete()
        logger.info(f"Deleted {self.collection}/{item_id}")
        return True


def create_repository(model: Type[T], collection: str, config: StorageConfig) -> Repository[T]:
    """Build the repository selected by ``config.backend``."""
    if config.backend == "memory":
        return InMemoryRepository(model)
    if config.backend == "json":
        return JsonFileRepository(model, config.data_dir, collection)
    if config.backend == "firestore":
        return FirestoreRepository(
            model,
            collection=f"{config.collection_prefix}_{collection}",
            project_id=config.gcp_project_id,
        )
    raise ValueError(f"Unknown storage backend: {config.backend}")


class BrandKitStore:
    """
    Brand kit access with first-use seeding.

    An empty store is seeded with the presets (or the default kit when
    there are none) the first time it is listed.
    """

    def __init__(self, repository: Repository[BrandKit], presets: Optional[List[Dict[str, Any]]] = None):
        self.repository = repository
        self.presets = presets or []

    def _seed(self) -> List[BrandKit]:
        kits = [BrandKit.model_validate(raw) for raw in self.presets] or [default_brand_kit()]
        stored = [self.repository.put(kit) for kit in kits]
        logger.info(f"Seeded brand kit store with {len(stored)} kits")
        return stored

    def list(self) -> List[BrandKit]:
        kits = self.repository.list()
        return kits or self._seed()

    def get(self, kit_id: str) -> Optional[BrandKit]:
        kit = self.repository.get(kit_id)
        if kit is None and not self.repository.list():
            kit = next((k for k in self._seed() if k.id == kit_id), None)
        return kit

    def put(self, kit: BrandKit) -> BrandKit:
        return self.repository.put(kit)

    def delete(self, kit_id: str) -> bool:
        return self.repository.delete(kit_id)
