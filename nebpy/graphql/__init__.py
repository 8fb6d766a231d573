"""
GraphQL building blocks for nebpy.

- paths: FieldPath declarations and JSONPath resolution
- projection: result shape -> selection set
- parameters: Python values -> GraphQL input literals
- operation: the request envelope
- materializer: JSON nodes -> result shapes
"""

from nebpy.graphql.materializer import Materializer
from nebpy.graphql.operation import Operation, OperationType
from nebpy.graphql.parameters import GraphQLParameters, format_value
from nebpy.graphql.paths import FieldPath, base_name, clean_path, field_paths, resolve
from nebpy.graphql.projection import graphql_fields, project_fields, query_paths

__all__ = [
    "FieldPath",
    "GraphQLParameters",
    "Materializer",
    "Operation",
    "OperationType",
    "base_name",
    "clean_path",
    "field_paths",
    "format_value",
    "graphql_fields",
    "project_fields",
    "query_paths",
    "resolve",
]
