from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Iterator, MutableSequence, Sequence, Union

from std2.types import never

from ..consts import CORE_LIBRARY, DYNAMIC

if TYPE_CHECKING:
    from .elements import ParameterElement


class Nullability(Enum):
    none = auto()
    question = auto()
    star = auto()


class ParameterKind(Enum):
    required_positional = auto()
    optional_positional = auto()
    required_named = auto()
    optional_named = auto()


@dataclass(frozen=True)
class DynamicType:
    def __str__(self) -> str:
        return display_string(self)


@dataclass(frozen=True)
class VoidType:
    def __str__(self) -> str:
        return display_string(self)


@dataclass(frozen=True)
class NeverType:
    nullability: Nullability = Nullability.none

    def __str__(self) -> str:
        return display_string(self)


@dataclass(frozen=True)
class TypeParameterType:
    name: str
    nullability: Nullability = Nullability.none

    def __str__(self) -> str:
        return display_string(self)


@dataclass(frozen=True)
class InterfaceType:
    name: str
    library: str = ""
    type_arguments: Sequence["DartType"] = ()
    nullability: Nullability = Nullability.none

    def __str__(self) -> str:
        return display_string(self)


@dataclass(frozen=True)
class FunctionType:
    return_type: "DartType"
    parameters: Sequence["ParameterElement"] = ()
    nullability: Nullability = Nullability.none

    def __str__(self) -> str:
        return display_string(self)


DartType = Union[
    DynamicType, VoidType, NeverType, TypeParameterType, InterfaceType, FunctionType
]

DYNAMIC_TYPE = DynamicType()


def is_dynamic(type: DartType) -> bool:
    return isinstance(type, DynamicType)


def is_core_list(type: DartType) -> bool:
    return (
        isinstance(type, InterfaceType)
        and type.name == "List"
        and type.library == CORE_LIBRARY
    )


def _suffix(nullability: Nullability, with_nullability: bool) -> str:
    if not with_nullability:
        return ""
    elif nullability is Nullability.none:
        return ""
    elif nullability is Nullability.question:
        return "?"
    elif nullability is Nullability.star:
        return "*"
    else:
        never(nullability)


def _function_params(
    parameters: Sequence["ParameterElement"], with_nullability: bool
) -> Iterator[str]:
    positional: MutableSequence[str] = []
    optional: MutableSequence[str] = []
    named: MutableSequence[str] = []

    for param in parameters:
        rendered = display_string(param.type, with_nullability=with_nullability)
        if param.kind is ParameterKind.required_positional:
            positional.append(rendered)
        elif param.kind is ParameterKind.optional_positional:
            optional.append(rendered)
        elif param.kind is ParameterKind.required_named:
            named.append(f"required {rendered} {param.name}")
        elif param.kind is ParameterKind.optional_named:
            named.append(f"{rendered} {param.name}")
        else:
            never(param.kind)

    yield from positional
    if optional:
        yield f"[{', '.join(optional)}]"
    if named:
        yield f"{{{', '.join(named)}}}"


def display_string(type: DartType, with_nullability: bool = True) -> str:
    """
    Source-like rendering, ie `List<int>`, `int Function(String, {bool b})`
    """

    if isinstance(type, DynamicType):
        return DYNAMIC
    elif isinstance(type, VoidType):
        return "void"
    elif isinstance(type, NeverType):
        return "Never" + _suffix(type.nullability, with_nullability)
    elif isinstance(type, TypeParameterType):
        return type.name + _suffix(type.nullability, with_nullability)
    elif isinstance(type, InterfaceType):
        args = ", ".join(
            display_string(arg, with_nullability=with_nullability)
            for arg in type.type_arguments
        )
        generic = f"<{args}>" if type.type_arguments else ""
        return type.name + generic + _suffix(type.nullability, with_nullability)
    elif isinstance(type, FunctionType):
        ret = display_string(type.return_type, with_nullability=with_nullability)
        params = ", ".join(_function_params(type.parameters, with_nullability))
        suffix = _suffix(type.nullability, with_nullability)
        return f"{ret} Function({params}){suffix}"
    else:
        never(type)
