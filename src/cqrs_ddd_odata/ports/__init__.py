from cqrs_ddd_odata.ports.grammar import IExpressionGrammar
from cqrs_ddd_odata.ports.queryable import IQueryable
from cqrs_ddd_odata.ports.schema import IEntityModel, IEntityType

__all__ = [
    "IEntityModel",
    "IEntityType",
    "IExpressionGrammar",
    "IQueryable",
]
