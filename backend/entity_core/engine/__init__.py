"""
entity_core/engine - 持久化引擎组件

包含：
- storage: 存储引擎接口（由应用层实现）
- existence: 存在性检查
- concurrency: 乐观并发控制

使用方式:
    >>> from entity_core.engine import ConcurrencyGuard, ExistenceChecker
    >>> from entity_core.engine import StorageEngine, UpdateOutcome
"""

# 存储引擎接口
from entity_core.engine.storage import (
    Row,
    Key,
    UpdateOutcome,
    StorageFatalError,
    KeyConflict,
    RestrictViolation,
    StorageEngine,
)

# 存在性检查
from entity_core.engine.existence import ExistenceChecker

# 乐观并发控制
from entity_core.engine.concurrency import WriteState, ConcurrencyGuard

__all__ = [
    # 存储引擎
    "Row",
    "Key",
    "UpdateOutcome",
    "StorageFatalError",
    "KeyConflict",
    "RestrictViolation",
    "StorageEngine",
    # 存在性检查
    "ExistenceChecker",
    # 并发控制
    "WriteState",
    "ConcurrencyGuard",
]
