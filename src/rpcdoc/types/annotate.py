"""Annotated AAD: every argument and result field paired with its resolved type.

This is the hand-off to emitters. Arguments are reordered so that required
ones come first, which is the fix the ordering warning announces.
"""

from pydantic import BaseModel

from rpcdoc.naming import field_ident, pascal_case, sanitize_method_name
from rpcdoc.parser.base import ApiDefinition, Argument, Method, Result
from rpcdoc.types.registry import DEFAULT_REGISTRY, Category, TypeRegistry


class AnnotatedField(BaseModel):
    name: str
    ident: str
    schema_type: str
    category: Category
    target_type: str
    optional: bool
    serialization_hint: str | None = None
    description: str = ""
    condition: str = ""
    skip_type_check: bool = False
    children: list["AnnotatedField"] = []


class AnnotatedMethod(BaseModel):
    name: str
    ident: str
    response_name: str
    description: str = ""
    params: list[AnnotatedField] = []
    fields: list[AnnotatedField] = []


class AnnotatedDefinition(BaseModel):
    version: str | None = None
    methods: dict[str, AnnotatedMethod] = {}


def ordered_arguments(method: Method) -> list[Argument]:
    """Required arguments first, original order kept within each group."""
    return sorted(method.arguments, key=lambda a: a.optional)


def annotate_argument(argument: Argument, idx: int, registry: TypeRegistry) -> AnnotatedField:
    category = registry.categorize_argument(argument)
    target = registry.resolve_target_type(category)
    return AnnotatedField(
        name=argument.name,
        ident=field_ident(argument.name, idx),
        schema_type=argument.type_,
        category=category,
        target_type=target.type,
        optional=target.default_optional or argument.optional,
        serialization_hint=target.serialization_hint,
        description=argument.description,
    )


def annotate_result(result: Result, idx: int, registry: TypeRegistry) -> AnnotatedField:
    category = registry.categorize_result(result)
    target = registry.resolve_target_type(category)
    children = [
        annotate_result(child, i, registry)
        for i, child in enumerate(result.inner)
        if child.type_ != "none"
    ]
    return AnnotatedField(
        name=result.key_name,
        ident=field_ident(result.key_name, idx),
        schema_type=result.type_,
        category=category,
        target_type=target.type,
        optional=target.default_optional or result.optional,
        serialization_hint=target.serialization_hint,
        description=result.description,
        condition=result.condition,
        skip_type_check=result.skip_type_check,
        children=children,
    )


def annotate_method(method: Method, registry: TypeRegistry = DEFAULT_REGISTRY) -> AnnotatedMethod:
    return AnnotatedMethod(
        name=method.name,
        ident=sanitize_method_name(method.name),
        response_name=pascal_case(method.name) + "Response",
        description=method.description,
        params=[
            annotate_argument(arg, i, registry)
            for i, arg in enumerate(ordered_arguments(method))
        ],
        fields=[
            annotate_result(result, i, registry)
            for i, result in enumerate(method.results)
            if result.type_ != "none"
        ],
    )


def annotate(definition: ApiDefinition, registry: TypeRegistry = DEFAULT_REGISTRY) -> AnnotatedDefinition:
    return AnnotatedDefinition(
        version=definition.version.as_str() if definition.version else None,
        methods={
            name: annotate_method(method, registry)
            for name, method in definition.rpcs.items()
        },
    )
