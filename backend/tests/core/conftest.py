"""
entity_core 测试用的内存存储引擎
"""
import itertools

import pytest

from entity_core.domain.schema import (
    DeleteBehavior, EntitySchema, FieldSpec, Relationship, SchemaRegistry,
)
from entity_core.engine.storage import (
    KeyConflict, RestrictViolation, StorageEngine, StorageFatalError, UpdateOutcome,
)


class MemoryStorage(StorageEngine):
    """按表保存已提交行；写操作先进入待提交副本"""

    def __init__(self, registry: SchemaRegistry):
        self.registry = registry
        self.committed = {name: {} for name in registry.entity_names()}
        self.pending = None
        self.calls = []
        self.commits = 0
        self.rollbacks = 0
        self.fail_on = set()
        self._ids = itertools.count(1)

    def _tables(self):
        if self.pending is None:
            self.pending = {name: {k: dict(v) for k, v in rows.items()}
                            for name, rows in self.committed.items()}
        return self.pending

    def _key_tuple(self, entity_type, key):
        return tuple(key[name] for name in self.registry.get(entity_type).key)

    def _record(self, op):
        self.calls.append(op)
        if op in self.fail_on:
            raise StorageFatalError(f"{op} failed")

    def fetch(self, entity_type, key):
        self._record("fetch")
        row = self._tables()[entity_type].get(self._key_tuple(entity_type, key))
        return dict(row) if row else None

    def insert(self, entity_type, row):
        self._record("insert")
        schema = self.registry.get(entity_type)
        row = dict(row)
        if schema.generated_key:
            row[schema.key[0]] = next(self._ids)
        key = self._key_tuple(entity_type, row)
        table = self._tables()[entity_type]
        if key in table:
            raise KeyConflict(entity_type, dict(zip(schema.key, key)))
        row[self.VERSION_FIELD] = 1
        table[key] = row
        return dict(row)

    def update_versioned(self, entity_type, key, row, expected_version):
        self._record("update_versioned")
        table = self._tables()[entity_type]
        current = table.get(self._key_tuple(entity_type, key))
        if current is None or current[self.VERSION_FIELD] != expected_version:
            return UpdateOutcome.VERSION_MISMATCH
        current.update(row)
        current[self.VERSION_FIELD] = expected_version + 1
        return UpdateOutcome.COMMITTED

    def delete(self, entity_type, key):
        self._record("delete")
        parent_key = self.registry.get(entity_type).key
        for rel in self.registry.children_of(entity_type):
            where = {c: key[p] for c, p in rel.column_pairs(parent_key)}
            children = self.list_all(rel.child, where)
            if children and rel.on_delete is DeleteBehavior.RESTRICT:
                raise RestrictViolation(entity_type, key, rel.name)
            child_key = self.registry.get(rel.child).key
            for child in children:
                self.delete(rel.child, {n: child[n] for n in child_key})
        removed = self._tables()[entity_type].pop(self._key_tuple(entity_type, key), None)
        return 0 if removed is None else 1

    def list_all(self, entity_type, where=None):
        self._record("list_all")
        rows = self._tables()[entity_type].values()
        if where:
            rows = [r for r in rows if all(r.get(k) == v for k, v in where.items())]
        return [dict(r) for r in rows]

    def commit(self):
        self.commits += 1
        if self.pending is not None:
            self.committed = self.pending
        self.pending = None

    def rollback(self):
        self.rollbacks += 1
        self.pending = None



@pytest.fixture
def core_registry():
    """两层父子实体：Parent(id 生成) -> Child(code, parent_id 由调用方提供)"""
    registry = SchemaRegistry()
    registry.register(EntitySchema(
        "Parent", "parents", ("id",), generated_key=True,
        fields=[FieldSpec("id"), FieldSpec("title", max_length=10)],
    ))
    registry.register(EntitySchema(
        "Child", "children", ("code", "parent_id"),
        fields=[FieldSpec("code"), FieldSpec("parent_id"), FieldSpec("size", min_value=1)],
    ))
    registry.register_relationship(Relationship(
        "parent_children", parent="Parent", child="Child",
        columns=("parent_id",), on_delete=DeleteBehavior.CASCADE,
    ))
    registry.freeze()
    return registry


@pytest.fixture
def memory_storage(core_registry):
    return MemoryStorage(core_registry)
