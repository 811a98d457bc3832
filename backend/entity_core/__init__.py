"""
entity_core - 实体持久化内核

领域无关的持久化层：
- domain: 实体模式注册表与校验
- engine: 存储引擎接口、存在性检查、乐观并发控制
- repository: 通用 CRUD 仓储
- result: 仓储操作结果类型

使用方式:
    >>> from entity_core.domain import schema_registry
    >>> from entity_core.repository import EntityRepository
    >>> from entity_core.result import Ok, NotFound
"""
