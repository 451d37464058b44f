from .allowed import (
    AllowedArithmeticOperators,
    AllowedFunctions,
    AllowedLogicalOperators,
    AllowedQueryOptions,
)
from .applier import QueryApplier, effective_take
from .clauses import (
    ExpandItem,
    FilterClause,
    OrderByClause,
    OrderByDirection,
    OrderByNode,
    SelectExpandClause,
)
from .context import QueryContext
from .evaluator import MemoryFunction, MemoryOperator, MemoryOperatorRegistry
from .exceptions import (
    ArgumentNullError,
    DisallowedQueryOptionError,
    DuplicateQueryOptionError,
    EmptyQueryOptionError,
    FieldNotFoundError,
    GrammarSyntaxError,
    InvalidIntegerError,
    LimitExceededError,
    NegativeValueError,
    QueryOptionError,
    QueryOptionParseError,
    QueryValidationError,
    UnsupportedQueryOptionError,
)
from .grammar import ODataExpressionGrammar
from .operators_memory import build_default_registry
from .options import (
    ApplyOption,
    CountOption,
    FilterOption,
    OrderByOption,
    SelectExpandOption,
    SkipOption,
    TopOption,
)
from .parser import QueryOptionParser
from .ports import IEntityModel, IEntityType, IExpressionGrammar, IQueryable
from .projection import SelectExpandProjector
from .query_options import QueryOptions
from .query_string import QueryStringBuilder
from .queryable import MemoryQueryable
from .raw import RawQueryOptions
from .request import QueryRequest, RequestProperties, is_count_request
from .schema import (
    EntityModel,
    EntitySet,
    EntityType,
    NavigationProperty,
    PrimitiveKind,
    StructuralProperty,
    primitive_kind,
)
from .settings import QuerySettings, ValidationSettings
from .validator import QueryValidator

__all__ = [
    # Pipeline
    "QueryOptionParser",
    "QueryValidator",
    "QueryApplier",
    "effective_take",
    # Query options
    "QueryOptions",
    "RawQueryOptions",
    "FilterOption",
    "OrderByOption",
    "TopOption",
    "SkipOption",
    "SelectExpandOption",
    "CountOption",
    "ApplyOption",
    # Clauses
    "FilterClause",
    "OrderByClause",
    "OrderByNode",
    "OrderByDirection",
    "SelectExpandClause",
    "ExpandItem",
    # Policy / settings
    "AllowedQueryOptions",
    "AllowedLogicalOperators",
    "AllowedArithmeticOperators",
    "AllowedFunctions",
    "ValidationSettings",
    "QuerySettings",
    # Schema / request
    "EntityModel",
    "EntityType",
    "EntitySet",
    "StructuralProperty",
    "NavigationProperty",
    "PrimitiveKind",
    "primitive_kind",
    "QueryContext",
    "QueryRequest",
    "RequestProperties",
    "is_count_request",
    # Ports / adapters
    "IEntityModel",
    "IEntityType",
    "IExpressionGrammar",
    "IQueryable",
    "ODataExpressionGrammar",
    "MemoryQueryable",
    "SelectExpandProjector",
    "QueryStringBuilder",
    # Evaluator / strategy
    "MemoryOperator",
    "MemoryFunction",
    "MemoryOperatorRegistry",
    "build_default_registry",
    # Exceptions
    "QueryOptionError",
    "ArgumentNullError",
    "QueryOptionParseError",
    "EmptyQueryOptionError",
    "InvalidIntegerError",
    "NegativeValueError",
    "DuplicateQueryOptionError",
    "GrammarSyntaxError",
    "FieldNotFoundError",
    "QueryValidationError",
    "DisallowedQueryOptionError",
    "LimitExceededError",
    "UnsupportedQueryOptionError",
]
