"""
entity_core/result.py

仓储操作结果类型 - 所有仓储方法返回这些变体之一
Failures the caller can act on are returned as values with a discriminated
``kind``; only unrecoverable storage errors are raised (StorageFatalError).
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Generic, Optional, TypeVar, Union

T = TypeVar("T")


class ResultKind(str, Enum):
    """结果类别"""
    OK = "ok"
    VALIDATION_ERROR = "validation_error"    # 违反模式约束，未触达存储
    KEY_MISMATCH = "key_mismatch"            # 路由主键与请求体主键不一致，未触达存储
    NOT_FOUND = "not_found"                  # 记录不存在
    CONFLICT = "conflict"                    # 主键已存在或记录已被并发修改


@dataclass(frozen=True)
class Ok(Generic[T]):
    """成功结果，value 可以为 None（如 update）"""
    value: Optional[T] = None

    kind: ClassVar[ResultKind] = ResultKind.OK
    is_ok: ClassVar[bool] = True


@dataclass(frozen=True)
class ValidationError:
    """
    字段校验失败

    Attributes:
        entity_type: 实体名称
        field: 违规字段
        message: 描述
    """
    entity_type: str
    field: str
    message: str

    kind: ClassVar[ResultKind] = ResultKind.VALIDATION_ERROR
    is_ok: ClassVar[bool] = False


@dataclass(frozen=True)
class KeyMismatchError:
    entity_type: str
    route_key: Dict[str, Any]
    body_key: Dict[str, Any]

    kind: ClassVar[ResultKind] = ResultKind.KEY_MISMATCH
    is_ok: ClassVar[bool] = False

    @property
    def message(self) -> str:
        return f"{self.entity_type} key {self.body_key} in body does not match {self.route_key}"


@dataclass(frozen=True)
class NotFound:
    entity_type: str
    key: Dict[str, Any]

    kind: ClassVar[ResultKind] = ResultKind.NOT_FOUND
    is_ok: ClassVar[bool] = False

    @property
    def message(self) -> str:
        return f"{self.entity_type} {self.key} not found"


@dataclass(frozen=True)
class ConflictError:
    """
    冲突

    Attributes:
        entity_type: 实体名称
        key: 冲突记录主键
        reason: "duplicate_key" | "concurrent_modification"
    """
    entity_type: str
    key: Dict[str, Any]
    reason: str

    kind: ClassVar[ResultKind] = ResultKind.CONFLICT
    is_ok: ClassVar[bool] = False

    DUPLICATE_KEY: ClassVar[str] = "duplicate_key"
    CONCURRENT_MODIFICATION: ClassVar[str] = "concurrent_modification"

    @property
    def message(self) -> str:
        if self.reason == self.DUPLICATE_KEY:
            return f"{self.entity_type} {self.key} already exists"
        return f"{self.entity_type} {self.key} was modified by another request"


Failure = Union[ValidationError, KeyMismatchError, NotFound, ConflictError]
Result = Union[Ok[T], Failure]


__all__ = [
    "ResultKind",
    "Ok",
    "ValidationError",
    "KeyMismatchError",
    "NotFound",
    "ConflictError",
    "Failure",
    "Result",
]
