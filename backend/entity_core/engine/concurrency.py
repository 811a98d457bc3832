"""
entity_core/engine/concurrency.py

乐观并发控制 - 包装存储引擎的带版本更新

Per write attempt:

    PENDING -> COMMITTED
            -> VERSION_CONFLICT -> NOT_FOUND | CONFLICT
            -> FATAL

There are no implicit retries; a failed attempt leaves the stored row as it was.
"""
from enum import Enum
from typing import Optional, Union
import logging

from entity_core.engine.existence import ExistenceChecker
from entity_core.engine.storage import (
    Key, Row, StorageEngine, StorageFatalError, UpdateOutcome,
)
from entity_core.result import ConflictError, NotFound, Ok

logger = logging.getLogger(__name__)


class WriteState(str, Enum):
    """单次写入尝试的状态"""
    PENDING = "pending"
    COMMITTED = "committed"
    VERSION_CONFLICT = "version_conflict"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    FATAL = "fatal"


class ConcurrencyGuard:
    """
    Optimistic-concurrency wrapper around ``StorageEngine.update_versioned``.

    Example:
        >>> guard = ConcurrencyGuard(storage, "Hotel")
        >>> guard.update({"id": 1}, row, expected_version=3)
        Ok(value=None)
    """

    def __init__(self, storage: StorageEngine, entity_type: str,
                 existence: Optional[ExistenceChecker] = None):
        self.storage = storage
        self.entity_type = entity_type
        self.existence = existence or ExistenceChecker(storage, entity_type)
        self.last_state = WriteState.PENDING

    def update(self, key: Key, row: Row,
               expected_version: int) -> Union[Ok[None], NotFound, ConflictError]:
        """
        Apply a full-row replacement guarded by ``expected_version``.

        Returns:
            Ok(None) when committed, NotFound when the row vanished since the
            caller read it, ConflictError when it still exists with a newer version.

        Raises:
            StorageFatalError: Any other storage failure
        """
        self.last_state = WriteState.PENDING
        still_exists = True
        try:
            with self.storage.transaction():
                outcome = self.storage.update_versioned(self.entity_type, key, row, expected_version)
                if outcome is UpdateOutcome.COMMITTED:
                    self.last_state = WriteState.COMMITTED
                else:
                    self.last_state = WriteState.VERSION_CONFLICT
                    still_exists = self.existence.exists(key)
        except StorageFatalError:
            self.last_state = WriteState.FATAL
            raise

        if self.last_state is WriteState.COMMITTED:
            return Ok()

        if not still_exists:
            self.last_state = WriteState.NOT_FOUND
            logger.info(f"{self.entity_type} {key} was deleted before update (version {expected_version})")
            return NotFound(self.entity_type, key)

        self.last_state = WriteState.CONFLICT
        logger.warning(f"{self.entity_type} {key} version {expected_version} is stale, update rejected")
        return ConflictError(self.entity_type, key, ConflictError.CONCURRENT_MODIFICATION)


__all__ = ["WriteState", "ConcurrencyGuard"]
