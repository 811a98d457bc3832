"""
entity_core/domain/schema.py

实体模式注册表 - 领域无关
Declares entity shapes: primary keys, required fields, length limits,
numeric lower bounds and the delete behavior of every foreign-key
relationship. Hotel-specific schemas are registered in hotel_server.hotel.schema.
"""
from typing import Dict, List, Optional, Tuple, Union
from dataclasses import dataclass, field
from enum import Enum


class DeleteBehavior(str, Enum):
    """外键删除行为"""
    CASCADE = "cascade"      # 级联删除子记录
    RESTRICT = "restrict"    # 存在引用时禁止删除


class SchemaRegistryFrozen(RuntimeError):
    """Raised when registering into a registry that has been frozen."""


@dataclass(frozen=True)
class FieldSpec:
    """
    字段定义

    Attributes:
        name: 列名
        required: 是否必填
        max_length: 最大长度（仅字符串）
        min_value: 最小值（仅数值）
        max_scale: 最多小数位数（仅数值）
    """

    name: str
    required: bool = True
    max_length: Optional[int] = None
    min_value: Optional[Union[int, float]] = None
    max_scale: Optional[int] = None


@dataclass(frozen=True)
class Relationship:
    """
    外键关系定义 - child.columns 引用 parent.primary_key

    Attributes:
        name: 关系名称
        parent: 父实体名称
        child: 子实体名称
        columns: 子实体中的外键列（顺序与父实体主键一致，None 表示子实体不保存该主键列）
        on_delete: 删除父记录时的行为
    """

    name: str
    parent: str
    child: str
    columns: Tuple[Optional[str], ...]
    on_delete: DeleteBehavior

    def column_pairs(self, parent_key: Tuple[str, ...]) -> List[Tuple[str, str]]:
        """(child column, parent key column) pairs actually carried by the child."""
        return [(child_col, parent_col)
                for child_col, parent_col in zip(self.columns, parent_key)
                if child_col is not None]


@dataclass
class EntitySchema:
    """
    实体模式

    Attributes:
        name: 实体名称
        table: 表名
        key: 有序主键字段
        fields: 字段定义
        generated_key: 主键是否由存储引擎生成
    """

    name: str
    table: str
    key: Tuple[str, ...]
    fields: List[FieldSpec] = field(default_factory=list)
    generated_key: bool = False

    def field_spec(self, name: str) -> Optional[FieldSpec]:
        for spec in self.fields:
            if spec.name == name:
                return spec
        return None

    @property
    def column_names(self) -> List[str]:
        return [spec.name for spec in self.fields]


class SchemaRegistry:
    """
    模式注册表 - 启动时注册，之后只读

    Example:
        >>> registry = SchemaRegistry()
        >>> registry.register(EntitySchema("Hotel", "hotels", ("id",), generated_key=True))
        >>> registry.primary_key("Hotel")
        ['id']
    """

    def __init__(self):
        self._entities: Dict[str, EntitySchema] = {}
        self._relationships: Dict[str, Relationship] = {}
        self._frozen = False

    # ============== 注册 ==============

    def register(self, schema: EntitySchema) -> "SchemaRegistry":
        self._check_mutable()
        self._entities[schema.name] = schema
        return self

    def register_relationship(self, relationship: Relationship) -> "SchemaRegistry":
        self._check_mutable()
        for entity_name in (relationship.parent, relationship.child):
            if entity_name not in self._entities:
                raise KeyError(f"Unknown entity '{entity_name}' in relationship '{relationship.name}'")
        parent_key = self._entities[relationship.parent].key
        if len(parent_key) != len(relationship.columns):
            raise ValueError(
                f"Relationship '{relationship.name}' has {len(relationship.columns)} columns, "
                f"parent key has {len(parent_key)}"
            )
        if all(col is None for col in relationship.columns):
            raise ValueError(f"Relationship '{relationship.name}' references no columns")
        self._relationships[relationship.name] = relationship
        return self

    def freeze(self) -> None:
        """Make the registry read-only."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_mutable(self) -> None:
        if self._frozen:
            raise SchemaRegistryFrozen("Schema registry is read-only after startup")

    # ============== 查询 ==============

    def get(self, entity_name: str) -> EntitySchema:
        try:
            return self._entities[entity_name]
        except KeyError:
            raise KeyError(f"Unknown entity '{entity_name}'") from None

    def entity_names(self) -> List[str]:
        return list(self._entities)

    def primary_key(self, entity_name: str) -> List[str]:
        return list(self.get(entity_name).key)

    def required_fields(self, entity_name: str) -> List[str]:
        return [spec.name for spec in self.get(entity_name).fields if spec.required]

    def max_length(self, entity_name: str, field_name: str) -> Optional[int]:
        spec = self.get(entity_name).field_spec(field_name)
        return spec.max_length if spec else None

    def min_value(self, entity_name: str, field_name: str) -> Optional[Union[int, float]]:
        spec = self.get(entity_name).field_spec(field_name)
        return spec.min_value if spec else None

    def max_scale(self, entity_name: str, field_name: str) -> Optional[int]:
        spec = self.get(entity_name).field_spec(field_name)
        return spec.max_scale if spec else None

    def delete_behavior(self, relationship_name: str) -> DeleteBehavior:
        try:
            return self._relationships[relationship_name].on_delete
        except KeyError:
            raise KeyError(f"Unknown relationship '{relationship_name}'") from None

    def relationships(self) -> List[Relationship]:
        return list(self._relationships.values())

    def children_of(self, entity_name: str) -> List[Relationship]:
        """Relationships in which ``entity_name`` is the referenced parent."""
        return [rel for rel in self._relationships.values() if rel.parent == entity_name]

    def parents_of(self, entity_name: str) -> List[Relationship]:
        return [rel for rel in self._relationships.values() if rel.child == entity_name]


# 全局模式注册表实例
schema_registry = SchemaRegistry()


__all__ = [
    "DeleteBehavior",
    "SchemaRegistryFrozen",
    "FieldSpec",
    "Relationship",
    "EntitySchema",
    "SchemaRegistry",
    "schema_registry",
]
