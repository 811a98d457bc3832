"""
SQL 存储引擎 - StorageEngine 的 SQLAlchemy 实现
每个请求一个 Session；所有语句都是显式的 Core 语句，不依赖 ORM 变更跟踪
级联/限制删除按模式注册表中的关系执行，数据库外键约束作为兜底
"""
from typing import List, Optional
import logging

from sqlalchemy import and_, delete, insert, select, update, Table
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from entity_core.domain.schema import DeleteBehavior, SchemaRegistry, schema_registry
from entity_core.engine.storage import (
    Key, KeyConflict, RestrictViolation, Row, StorageEngine, StorageFatalError, UpdateOutcome,
)
from hotel_server.database import Base

logger = logging.getLogger(__name__)


class SqlStorageEngine(StorageEngine):
    """基于 SQLAlchemy Session 的存储引擎"""

    def __init__(self, session: Session, registry: SchemaRegistry = schema_registry):
        self.session = session
        self.registry = registry

    # ============== 内部工具 ==============

    def _table(self, entity_type: str) -> Table:
        # 确保表模型已加载到 metadata
        from hotel_server.models import ontology  # noqa
        return Base.metadata.tables[self.registry.get(entity_type).table]

    @staticmethod
    def _match(table: Table, values: Row):
        return and_(*(table.c[name] == value for name, value in values.items()))

    def _fatal(self, entity_type: str, action: str, error: Exception) -> StorageFatalError:
        logger.error(f"Storage failure during {action} on {entity_type}: {error}")
        return StorageFatalError(f"{action} {entity_type} failed: {error}", entity_type=entity_type)

    # ============== 读 ==============

    def fetch(self, entity_type: str, key: Key) -> Optional[Row]:
        table = self._table(entity_type)
        try:
            row = self.session.execute(
                select(table).where(self._match(table, key))
            ).mappings().first()
        except SQLAlchemyError as e:
            raise self._fatal(entity_type, "fetch", e) from e
        return dict(row) if row is not None else None

    def list_all(self, entity_type: str, where: Optional[Row] = None) -> List[Row]:
        table = self._table(entity_type)
        query = select(table)
        if where:
            query = query.where(self._match(table, where))
        try:
            rows = self.session.execute(query).mappings().all()
        except SQLAlchemyError as e:
            raise self._fatal(entity_type, "list", e) from e
        return [dict(row) for row in rows]

    # ============== 写 ==============

    def insert(self, entity_type: str, row: Row) -> Row:
        schema = self.registry.get(entity_type)
        table = self._table(entity_type)
        values = {name: value for name, value in row.items() if name in table.c}
        values[self.VERSION_FIELD] = 1

        try:
            result = self.session.execute(insert(table).values(**values))
        except IntegrityError as e:
            # 事务已失效，先回滚再判断是否主键冲突
            self.session.rollback()
            key = {name: row.get(name) for name in schema.key}
            if all(value is not None for value in key.values()) and self.fetch(entity_type, key) is not None:
                raise KeyConflict(entity_type, key) from e
            raise self._fatal(entity_type, "insert", e) from e
        except SQLAlchemyError as e:
            raise self._fatal(entity_type, "insert", e) from e

        if schema.generated_key:
            key = dict(zip(schema.key, result.inserted_primary_key))
        else:
            key = {name: values[name] for name in schema.key}
        return self.fetch(entity_type, key)

    def update_versioned(self, entity_type: str, key: Key, row: Row,
                         expected_version: int) -> UpdateOutcome:
        table = self._table(entity_type)
        values = {name: value for name, value in row.items()
                  if name in table.c and name not in key and name != self.VERSION_FIELD}
        version_col = table.c[self.VERSION_FIELD]
        stmt = (
            update(table)
            .where(self._match(table, key), version_col == expected_version)
            .values(**values, **{self.VERSION_FIELD: version_col + 1})
        )
        try:
            result = self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise self._fatal(entity_type, "update", e) from e

        if result.rowcount == 1:
            return UpdateOutcome.COMMITTED
        return UpdateOutcome.VERSION_MISMATCH

    def delete(self, entity_type: str, key: Key) -> int:
        self._delete_dependents(entity_type, key)
        table = self._table(entity_type)
        try:
            result = self.session.execute(delete(table).where(self._match(table, key)))
        except SQLAlchemyError as e:
            raise self._fatal(entity_type, "delete", e) from e
        return result.rowcount

    def _delete_dependents(self, entity_type: str, key: Key) -> None:
        """按关系级联删除子记录；存在 RESTRICT 引用时拒绝"""
        parent_key = self.registry.get(entity_type).key
        for rel in self.registry.children_of(entity_type):
            where = {child_col: key[parent_col] for child_col, parent_col in rel.column_pairs(parent_key)}
            children = self.list_all(rel.child, where=where)
            if not children:
                continue
            if rel.on_delete is DeleteBehavior.RESTRICT:
                raise RestrictViolation(entity_type, key, rel.name)

            child_key_fields = self.registry.get(rel.child).key
            logger.debug(f"Cascading delete of {entity_type} {key} to {len(children)} {rel.child} rows")
            for child in children:
                self.delete(rel.child, {name: child[name] for name in child_key_fields})

    # ============== 事务 ==============

    def commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            raise StorageFatalError(f"commit failed: {e}") from e

    def rollback(self) -> None:
        self.session.rollback()
