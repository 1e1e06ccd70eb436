"""Unified data models for parsed command documentation.

Both the free-text help parser and the bulk JSON codec produce these
models, so every API version shares a single representation.
"""

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

from rpcdoc.types.version import Version

COMPOSITE_TYPES = frozenset({"object", "array", "object_dynamic", "array_fixed"})


class Argument(BaseModel):
    """A single method argument."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    names: list[str]  # first name is canonical
    type_: str = Field("string", alias="type")
    required: bool = True
    description: str = ""
    oneline_description: str = ""
    also_positional: bool = False
    type_str: list[str] | None = None  # accepted type tags
    hidden: bool = False

    @model_validator(mode="before")
    @classmethod
    def _required_from_optional(cls, data):
        if isinstance(data, dict) and "optional" in data:
            data = dict(data)
            data["required"] = not bool(data.pop("optional"))
        return data

    @field_validator("names")
    @classmethod
    def _names_not_empty(cls, names: list[str]) -> list[str]:
        if not names:
            raise ValueError("argument names must not be empty")
        return names

    @computed_field
    @property
    def optional(self) -> bool:
        return not self.required

    @property
    def name(self) -> str:
        return self.names[0]


class Result(BaseModel):
    """A single result field, possibly with nested children."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type_: str = Field("", alias="type")  # string / number / boolean / hex / amount / object / array / none
    optional: bool = False
    description: str = ""
    skip_type_check: bool = False
    key_name: str = ""  # empty for unnamed and array-element nodes
    condition: str = ""
    inner: list["Result"] = []

    @computed_field
    @property
    def required(self) -> bool:
        # Derived on every node; a serialized "required" is never read back.
        return not self.optional

    @property
    def is_composite(self) -> bool:
        return self.type_ in COMPOSITE_TYPES


class Method(BaseModel):
    """A single documented method with all its metadata."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    description: str = ""
    examples: str = ""
    argument_names: list[str] = []  # positional-name hints
    arguments: list[Argument] = []
    results: list[Result] = []  # alternative response shapes

    @field_validator("examples", mode="before")
    @classmethod
    def _join_examples(cls, value):
        if value is None:
            return ""
        if isinstance(value, list):
            return "\n".join(str(v) for v in value)
        return value


class ApiDefinition(BaseModel):
    """All methods of one API version, keyed by method name."""

    model_config = ConfigDict(frozen=True)

    rpcs: dict[str, Method] = {}
    version: Version | None = Field(default=None, exclude=True)

    def get_method(self, name: str) -> Method | None:
        return self.rpcs.get(name)
