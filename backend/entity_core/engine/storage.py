"""
entity_core/engine/storage.py

存储引擎接口 - 核心层只依赖此抽象
A concrete engine (see hotel_server.services.storage) executes reads and
writes against a relational store and commits transactions.
"""
from abc import ABC, abstractmethod
from contextlib import contextmanager
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional

Row = Dict[str, Any]
Key = Dict[str, Any]


class UpdateOutcome(str, Enum):
    """带版本更新的结果"""
    COMMITTED = "committed"
    VERSION_MISMATCH = "version_mismatch"   # 没有行受影响：版本已变或记录已删除


class StorageFatalError(Exception):
    """
    Unrecoverable storage failure (connectivity, corruption, constraint
    violations other than a duplicate primary key). Never retried by the core.
    """

    def __init__(self, message: str, entity_type: Optional[str] = None):
        super().__init__(message)
        self.entity_type = entity_type


class KeyConflict(Exception):
    """Insert failed because a row with the same primary key already exists."""

    def __init__(self, entity_type: str, key: Key):
        super().__init__(f"{entity_type} {key} already exists")
        self.entity_type = entity_type
        self.key = key


class RestrictViolation(StorageFatalError):
    """Delete refused because a restrict relationship still references the row."""

    def __init__(self, entity_type: str, key: Key, relationship: str):
        super().__init__(
            f"{entity_type} {key} is still referenced through '{relationship}'",
            entity_type=entity_type,
        )
        self.key = key
        self.relationship = relationship


class StorageEngine(ABC):
    """
    存储引擎抽象

    All methods may block on I/O. Writes are only durable once the enclosing
    ``transaction()`` block exits without an exception.
    """

    VERSION_FIELD = "version"

    @abstractmethod
    def fetch(self, entity_type: str, key: Key) -> Optional[Row]:
        """Return the row with primary key ``key`` or None."""

    @abstractmethod
    def insert(self, entity_type: str, row: Row) -> Row:
        """
        Insert ``row`` and return it as stored (with generated key and version).

        Raises:
            KeyConflict: A row with the same primary key exists
            StorageFatalError: Any other failure
        """

    @abstractmethod
    def update_versioned(self, entity_type: str, key: Key, row: Row,
                         expected_version: int) -> UpdateOutcome:
        """
        Replace the row at ``key`` only if its version equals ``expected_version``.
        The stored version is incremented on success.
        """

    @abstractmethod
    def delete(self, entity_type: str, key: Key) -> int:
        """
        Delete the row at ``key``, cascading or restricting per the schema registry.

        Returns:
            Number of ``entity_type`` rows removed (0 when the row was already gone)
        """

    @abstractmethod
    def list_all(self, entity_type: str, where: Optional[Row] = None) -> List[Row]:
        """All rows of ``entity_type``; ``where`` filters by column equality."""

    @abstractmethod
    def commit(self) -> None:
        ...

    @abstractmethod
    def rollback(self) -> None:
        ...

    @contextmanager
    def transaction(self) -> Iterator["StorageEngine"]:
        """One atomic unit: commit on success, roll back on any exception."""
        try:
            yield self
            self.commit()
        except BaseException:
            self.rollback()
            raise


__all__ = [
    "Row",
    "Key",
    "UpdateOutcome",
    "StorageFatalError",
    "KeyConflict",
    "RestrictViolation",
    "StorageEngine",
]
