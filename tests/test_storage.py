import json

import pytest

from brandmail.config.settings import StorageConfig
from brandmail.core.brand_parser import DEFAULT_KIT_ID, DEFAULT_KIT_NAME, create_brand_kit
from brandmail.core.storage import (
    BrandKitStore,
    FirestoreRepository,
    InMemoryRepository,
    JsonFileRepository,
    create_repository,
)
from brandmail.models.schemas import BrandKit, EmailDocument


class FakeSnapshot:
    def __init__(self, data):
        self._data = data
        self.exists = data is not None

    def to_dict(self):
        return dict(self._data) if self._data is not None else None


class FakeDocument:
    def __init__(self, collection, doc_id):
        self.collection = collection
        self.id = doc_id

    def get(self):
        return FakeSnapshot(self.collection.docs.get(self.id))

    def set(self, data):
        self.collection.docs[self.id] = data

    def delete(self):
        self.collection.docs.pop(self.id, None)


class FakeCollection:
    def __init__(self):
        self.docs = {}

    def document(self, doc_id):
        return FakeDocument(self, doc_id)

    def stream(self):
        return [FakeSnapshot(data) for data in self.docs.values()]


class FakeFirestoreClient:
    def __init__(self):
        self.collections = {}

    def collection(self, name):
        return self.collections.setdefault(name, FakeCollection())


@pytest.fixture(params=["memory", "json", "firestore"])
def repository(request, tmp_path):
    if request.param == "memory":
        return InMemoryRepository(BrandKit)
    if request.param == "json":
        return JsonFileRepository(BrandKit, str(tmp_path), "brand_kits")
    return FirestoreRepository(BrandKit, "test_brand_kits", client=FakeFirestoreClient())


def test_put_get_list_delete(repository):
    kit = create_brand_kit("Acme")

    stored = repository.put(kit)
    assert repository.get(kit.id) == stored
    assert [k.id for k in repository.list()] == [kit.id]

    assert repository.delete(kit.id) is True
    assert repository.get(kit.id) is None
    assert repository.delete(kit.id) is False


def test_put_stamps_updated_at_and_replaces(repository):
    kit = create_brand_kit("Acme").model_copy(update={"updated_at": "2000-01-01T00:00:00+00:00"})

    stored = repository.put(kit)
    assert stored.updated_at != "2000-01-01T00:00:00+00:00"

    repository.put(stored.model_copy(update={"name": "Acme 2"}))
    assert len(repository.list()) == 1
    assert repository.get(kit.id).name == "Acme 2"


def test_get_missing(repository):
    assert repository.get("nope") is None


def test_json_repository_writes_camel_case(tmp_path):
    repo = JsonFileRepository(BrandKit, str(tmp_path), "brand_kits")
    repo.put(create_brand_kit("Acme"))

    records = json.loads((tmp_path / "brand_kits.json").read_text(encoding="utf-8"))
    assert "mutedText" in records[0]["colors"]
    assert "createdAt" in records[0]


def test_json_repository_persists_across_instances(tmp_path):
    doc = EmailDocument.model_validate({
        "id": "d1", "name": "Draft",
        "blocks": [{"id": "c", "type": "columns", "columns": []}],
    })
    JsonFileRepository(EmailDocument, str(tmp_path), "drafts").put(doc)

    loaded = JsonFileRepository(EmailDocument, str(tmp_path), "drafts").get("d1")
    assert loaded.blocks[0].type == "columns"


def test_create_repository_backends(tmp_path):
    assert isinstance(create_repository(BrandKit, "kits", StorageConfig()), InMemoryRepository)

    json_repo = create_repository(BrandKit, "kits", StorageConfig(backend="json", data_dir=str(tmp_path)))
    assert isinstance(json_repo, JsonFileRepository)

    with pytest.raises(ValueError):
        create_repository(BrandKit, "kits", StorageConfig(backend="s3"))


def test_brand_kit_store_seeds_default_kit():
    store = BrandKitStore(InMemoryRepository(BrandKit))
    kits = store.list()

    assert [k.id for k in kits] == [DEFAULT_KIT_ID]
    assert kits[0].name == DEFAULT_KIT_NAME
    assert len(store.list()) == 1


def test_brand_kit_store_get_seeds_on_empty():
    store = BrandKitStore(InMemoryRepository(BrandKit))
    assert store.get(DEFAULT_KIT_ID).name == DEFAULT_KIT_NAME
    assert store.get("other") is None


def test_brand_kit_store_seeds_presets():
    presets = [{"id": "acme", "name": "Acme", "colors": {"primary": "#0f766e"}}]
    store = BrandKitStore(InMemoryRepository(BrandKit), presets=presets)

    kits = store.list()
    assert [k.id for k in kits] == ["acme"]
    assert kits[0].colors.primary == "#0f766e"


def test_brand_kit_store_does_not_reseed_after_delete_of_one():
    store = BrandKitStore(InMemoryRepository(BrandKit))
    store.list()
    store.put(create_brand_kit("Acme"))

    assert store.delete(DEFAULT_KIT_ID) is True
    assert [k.name for k in store.list()] == ["Acme"]
