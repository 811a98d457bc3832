"""
entity_core/engine/existence.py

存在性检查 - 区分“记录已删除”和“记录被并发修改”
"""
from entity_core.engine.storage import Key, StorageEngine


class ExistenceChecker:
    """Reports whether a record of one entity type currently exists."""

    def __init__(self, storage: StorageEngine, entity_type: str):
        self.storage = storage
        self.entity_type = entity_type

    def exists(self, key: Key) -> bool:
        return self.storage.fetch(self.entity_type, key) is not None

    __call__ = exists
