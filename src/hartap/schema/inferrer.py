"""
JSON Schema inference from observed data.

``infer_schema`` describes one decoded JSON value; ``merge_schemas`` folds
several descriptions (array elements, repeated samples of a response) into
one. Observed samples are a lower bound on the real API, so objects stay open
to extra properties and a field counts as required as soon as any sample had
it set.
"""

import math
import re
from collections import OrderedDict
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple


class SchemaKind(str, Enum):
    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"
    UNION = "union"


class _Missing:
    """Marker for a value that was absent rather than null."""

    def __repr__(self) -> str:
        return 'MISSING'


MISSING = _Missing()


@dataclass(frozen=True)
class SchemaNode:
    """
    Inferred shape of a JSON value.

    ``kind`` selects the variant; ``None`` means unconstrained (nothing was
    observed). Only the fields relevant to the variant are set:
    format/pattern/description for strings, ``items`` for arrays,
    ``properties``/``required`` for objects and ``members`` for unions.
    """

    kind: Optional[SchemaKind] = None
    format: Optional[str] = None
    pattern: Optional[str] = None
    description: Optional[str] = None
    nullable: bool = False
    items: Optional['SchemaNode'] = None
    properties: Dict[str, 'SchemaNode'] = field(default_factory=dict)
    required: Tuple[str, ...] = ()
    members: Tuple['SchemaNode', ...] = ()

    @property
    def is_unconstrained(self) -> bool:
        return self.kind is None

    def to_dict(self) -> Dict[str, Any]:
        """Render as an OpenAPI 3.0 schema object."""
        if self.kind is None:
            schema: Dict[str, Any] = {}
        elif self.kind is SchemaKind.UNION:
            schema = {'oneOf': [member.to_dict() for member in self.members]}
        else:
            schema = {'type': self.kind.value}

        if self.format:
            schema['format'] = self.format
        if self.pattern:
            schema['pattern'] = self.pattern
        if self.description:
            schema['description'] = self.description
        if self.nullable:
            schema['nullable'] = True

        if self.kind is SchemaKind.ARRAY:
            schema['items'] = self.items.to_dict() if self.items is not None else {}
        elif self.kind is SchemaKind.OBJECT:
            schema['properties'] = {name: node.to_dict() for name, node in self.properties.items()}
            if self.required:
                schema['required'] = list(self.required)
            schema['additionalProperties'] = True

        return schema


UNCONSTRAINED = SchemaNode()

HEX_COLOR_PATTERN = '^#?[0-9A-Fa-f]{6}$'

# (regex, format, pattern, description); first match wins
_STRING_RULES: Sequence[Tuple[Any, Optional[str], Optional[str], Optional[str]]] = (
    (re.compile(r'^\d{4}-\d{2}-\d{2}$', re.ASCII), 'date', None, None),
    (re.compile(r'^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}', re.ASCII), 'date-time', None, None),
    (re.compile(r'^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$', re.IGNORECASE), 'uuid', None, None),
    (re.compile(r'^https?://'), 'uri', None, None),
    (re.compile(HEX_COLOR_PATTERN), None, HEX_COLOR_PATTERN, 'Hex color'),
    (re.compile(r'^\d{2}:\d{2}$', re.ASCII), 'time', None, 'Time in HH:MM format'),
    (re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'), 'email', None, None),
)


def infer_schema(data: Any) -> SchemaNode:
    """
    Infer a schema from one observed JSON value.

    Args:
        data: Decoded JSON value, or MISSING for an absent value

    Returns:
        SchemaNode describing the value
    """
    if data is MISSING:
        return UNCONSTRAINED

    if data is None:
        return SchemaNode(kind=SchemaKind.NULL)

    # bool is a subclass of int, test it first
    if isinstance(data, bool):
        return SchemaNode(kind=SchemaKind.BOOLEAN)

    if isinstance(data, int):
        return SchemaNode(kind=SchemaKind.INTEGER)

    if isinstance(data, float):
        if math.isfinite(data) and data.is_integer():
            return SchemaNode(kind=SchemaKind.INTEGER)
        return SchemaNode(kind=SchemaKind.NUMBER)

    if isinstance(data, str):
        return _infer_string_schema(data)

    if isinstance(data, (list, tuple)):
        return _infer_array_schema(data)

    if isinstance(data, dict):
        return _infer_object_schema(data)

    return UNCONSTRAINED


def _infer_string_schema(value: str) -> SchemaNode:
    for regex, fmt, pattern, description in _STRING_RULES:
        if regex.search(value):
            return SchemaNode(kind=SchemaKind.STRING, format=fmt, pattern=pattern, description=description)

    return SchemaNode(kind=SchemaKind.STRING)


def _infer_array_schema(data: Sequence[Any]) -> SchemaNode:
    if not data:
        return SchemaNode(kind=SchemaKind.ARRAY, items=UNCONSTRAINED)

    return SchemaNode(
        kind=SchemaKind.ARRAY,
        items=merge_schemas([infer_schema(item) for item in data])
    )


def _infer_object_schema(data: Dict[str, Any]) -> SchemaNode:
    properties: Dict[str, SchemaNode] = {}
    required: List[str] = []

    for key, value in data.items():
        prop = infer_schema(value)

        if value is None:
            prop = replace(prop, nullable=True)

        properties[key] = prop

        if value is not None and value is not MISSING:
            required.append(key)

    return SchemaNode(kind=SchemaKind.OBJECT, properties=properties, required=tuple(required))


def merge_schemas(schemas: Iterable[SchemaNode]) -> SchemaNode:
    """
    Merge multiple schemas into one.

    Inputs are grouped by kind (union members count individually) and merged
    within each group; more than one remaining group yields a union. Null
    observations only make the result nullable when other kinds were seen.
    Unconstrained inputs carry no information and are ignored.

    Args:
        schemas: Nodes to merge

    Returns:
        The merged node; an unconstrained node for empty input and the input
        itself when exactly one is given
    """
    schemas = list(schemas)

    if not schemas:
        return UNCONSTRAINED

    if len(schemas) == 1:
        return schemas[0]

    expanded: List[SchemaNode] = []
    for schema in schemas:
        if schema.kind is SchemaKind.UNION:
            expanded.extend(schema.members)
        else:
            expanded.append(schema)

    nullable = any(schema.nullable for schema in schemas) or any(node.nullable for node in expanded)

    groups: 'OrderedDict[SchemaKind, List[SchemaNode]]' = OrderedDict()
    for node in expanded:
        if node.kind is not None:
            groups.setdefault(node.kind, []).append(node)

    if not groups:
        return schemas[0]

    if SchemaKind.NULL in groups and len(groups) > 1:
        del groups[SchemaKind.NULL]
        nullable = True

    merged = [_merge_group(kind, group) for kind, group in groups.items()]

    if len(merged) == 1:
        result = merged[0]
    else:
        result = SchemaNode(kind=SchemaKind.UNION, members=tuple(_without_nullable(m) for m in merged))

    if nullable and not result.nullable:
        result = replace(result, nullable=True)
    return result


def infer_merged(values: Iterable[Any]) -> SchemaNode:
    """Infer a schema for each observed sample and merge the results."""
    return merge_schemas([infer_schema(value) for value in values])


def _without_nullable(node: SchemaNode) -> SchemaNode:
    return replace(node, nullable=False) if node.nullable else node


def _merge_group(kind: SchemaKind, group: List[SchemaNode]) -> SchemaNode:
    if len(group) == 1:
        return group[0]

    nullable = any(node.nullable for node in group)

    if kind is SchemaKind.OBJECT:
        return _merge_object_schemas(group, nullable)

    if kind is SchemaKind.ARRAY:
        items = [node.items for node in group if node.items is not None]
        return replace(group[0], items=merge_schemas(items), nullable=nullable)

    # Primitives: first observation wins, including its format
    first = group[0]
    return replace(first, nullable=True) if nullable and not first.nullable else first


def _merge_object_schemas(group: List[SchemaNode], nullable: bool) -> SchemaNode:
    all_properties: Dict[str, List[SchemaNode]] = {}
    all_required: Dict[str, None] = {}

    for node in group:
        for key, prop in node.properties.items():
            all_properties.setdefault(key, []).append(prop)
        for name in node.required:
            all_required.setdefault(name, None)

    return replace(
        group[0],
        properties={key: merge_schemas(props) for key, props in all_properties.items()},
        required=tuple(all_required),
        nullable=nullable
    )
