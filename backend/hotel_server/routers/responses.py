"""
仓储结果 → HTTP 响应
路由层是唯一把结果类型转换为状态码的地方
"""
from typing import Optional

from fastapi import HTTPException, status
from pydantic.alias_generators import to_camel

from entity_core.result import ResultKind
from hotel_server.models.schemas import ErrorDetail

STATUS_BY_KIND = {
    ResultKind.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ResultKind.KEY_MISMATCH: status.HTTP_400_BAD_REQUEST,
    ResultKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ResultKind.CONFLICT: status.HTTP_409_CONFLICT,
}


def wire_field(name: Optional[str]) -> Optional[str]:
    """列名 -> 请求体中的 camelCase 字段名"""
    return to_camel(name) if name else None


def raise_for_failure(result) -> None:
    """失败结果转换为 HTTPException；成功结果不做处理"""
    if result.is_ok:
        return
    detail = ErrorDetail(
        kind=result.kind.value,
        message=result.message,
        field=wire_field(getattr(result, "field", None)),
    )
    raise HTTPException(
        status_code=STATUS_BY_KIND[result.kind],
        detail=detail.model_dump(),
    )
