"""
entity_core/repository.py

通用实体仓储 - CRUD 契约对所有实体一致，仅主键形态不同

Subclasses set ``entity_type`` (the schema registry name) and
``entity_cls`` (a dataclass whose field names are the entity's columns plus
``version``).
"""
from dataclasses import asdict, fields
from typing import Any, ClassVar, Dict, Generic, List, Optional, Type, TypeVar, Union
import logging

from entity_core.domain.schema import EntitySchema, SchemaRegistry, schema_registry
from entity_core.domain.validation import validate_row
from entity_core.engine.concurrency import ConcurrencyGuard
from entity_core.engine.existence import ExistenceChecker
from entity_core.engine.storage import Key, KeyConflict, Row, StorageEngine
from entity_core.result import (
    ConflictError, KeyMismatchError, NotFound, Ok, ValidationError,
)

logger = logging.getLogger(__name__)

E = TypeVar("E")


class EntityRepository(Generic[E]):
    """
    实体仓储基类

    Repositories are cheap, hold no state between calls and are built per
    request around a per-request storage handle.
    """

    entity_type: ClassVar[str] = ""
    entity_cls: ClassVar[Type[Any]]

    def __init__(self, storage: StorageEngine, registry: SchemaRegistry = schema_registry):
        self.storage = storage
        self.registry = registry
        self.existence = ExistenceChecker(storage, self.entity_type)

    @property
    def schema(self) -> EntitySchema:
        return self.registry.get(self.entity_type)

    # ============== 主键与行转换 ==============

    def make_key(self, *values: Any, **named: Any) -> Key:
        """
        Build a well-formed key dict.

        Accepts positional values in primary-key order or keyword values.

        Raises:
            ValueError: Wrong number of values or missing key fields
        """
        key_fields = self.schema.key
        if values and named:
            raise ValueError("Pass key values positionally or by name, not both")
        if values:
            if len(values) == 1 and isinstance(values[0], dict):
                named = dict(values[0])
            elif len(values) != len(key_fields):
                raise ValueError(f"{self.entity_type} key needs {len(key_fields)} values: {key_fields}")
            else:
                return dict(zip(key_fields, values))
        missing = [name for name in key_fields if named.get(name) is None]
        if missing:
            raise ValueError(f"{self.entity_type} key is missing {missing}")
        return {name: named[name] for name in key_fields}

    def key_of(self, entity: E) -> Dict[str, Any]:
        row = asdict(entity)
        return {name: row.get(name) for name in self.schema.key}

    def to_row(self, entity: E) -> Row:
        row = asdict(entity)
        row.pop(StorageEngine.VERSION_FIELD, None)
        return row

    def from_row(self, row: Row) -> E:
        names = {f.name for f in fields(self.entity_cls)}
        return self.entity_cls(**{k: v for k, v in row.items() if k in names})

    # ============== 读操作 ==============

    def list(self) -> List[E]:
        """获取全部记录（不分页，不保证顺序）"""
        return [self.from_row(row) for row in self.storage.list_all(self.entity_type)]

    def list_where(self, **filters: Any) -> List[E]:
        """按外键列等值过滤"""
        unknown = set(filters) - set(self.schema.column_names)
        if unknown:
            raise ValueError(f"{self.entity_type} has no columns {sorted(unknown)}")
        return [self.from_row(row) for row in self.storage.list_all(self.entity_type, where=filters)]

    def get(self, key: Key) -> Union[Ok[E], NotFound]:
        """按主键获取"""
        key = self.make_key(key)
        row = self.storage.fetch(self.entity_type, key)
        if row is None:
            return NotFound(self.entity_type, key)
        return Ok(self.from_row(row))

    # ============== 写操作 ==============

    def create(self, entity: E) -> Union[Ok[E], ValidationError, ConflictError]:
        """
        创建记录

        Storage-generated keys supplied by the caller are ignored. For
        caller-supplied keys an existing row yields ConflictError.
        """
        schema = self.schema
        row = self.to_row(entity)
        if schema.generated_key:
            for name in schema.key:
                row.pop(name, None)

        error = validate_row(schema, row, skip=schema.key if schema.generated_key else ())
        if error is not None:
            logger.info(f"Rejected {self.entity_type} create: {error.message}")
            return error

        try:
            with self.storage.transaction():
                stored = self.storage.insert(self.entity_type, row)
        except KeyConflict as e:
            logger.warning(f"{self.entity_type} {e.key} already exists, create rejected")
            return ConflictError(self.entity_type, e.key, ConflictError.DUPLICATE_KEY)

        created = self.from_row(stored)
        logger.info(f"Created {self.entity_type} {self.key_of(created)}")
        return Ok(created)

    def update(self, key: Key, entity: E) -> Union[
            Ok[None], ValidationError, KeyMismatchError, NotFound, ConflictError]:
        """
        整体替换记录

        ``entity.version`` must be the version the caller last read.
        """
        key = self.make_key(key)
        body_key = self.key_of(entity)
        if body_key != key:
            logger.info(f"Rejected {self.entity_type} update: body key {body_key} != {key}")
            return KeyMismatchError(self.entity_type, key, body_key)

        expected_version = getattr(entity, StorageEngine.VERSION_FIELD, None)
        if expected_version is None:
            return ValidationError(
                self.entity_type, StorageEngine.VERSION_FIELD,
                "version is required to update a record",
            )

        row = self.to_row(entity)
        error = validate_row(self.schema, row)
        if error is not None:
            logger.info(f"Rejected {self.entity_type} update: {error.message}")
            return error

        values = {name: value for name, value in row.items() if name not in key}
        guard = ConcurrencyGuard(self.storage, self.entity_type, self.existence)
        result = guard.update(key, values, expected_version)
        if result.is_ok:
            logger.info(f"Updated {self.entity_type} {key} from version {expected_version}")
        return result

    def delete(self, key: Key) -> Union[Ok[E], NotFound]:
        """删除记录（按模式级联），返回删除前的状态"""
        key = self.make_key(key)
        with self.storage.transaction():
            row = self.storage.fetch(self.entity_type, key)
            if row is None:
                return NotFound(self.entity_type, key)
            if not self.storage.delete(self.entity_type, key):
                # 读取之后被并发删除
                logger.info(f"{self.entity_type} {key} was deleted by another request")
                return NotFound(self.entity_type, key)

        logger.info(f"Deleted {self.entity_type} {key}")
        return Ok(self.from_row(row))

    def exists(self, key: Key) -> bool:
        return self.existence.exists(self.make_key(key))


__all__ = ["EntityRepository"]
