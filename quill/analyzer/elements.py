from dataclasses import dataclass
from typing import Optional, Sequence, Union

from .types import DartType, FunctionType, ParameterKind


@dataclass(frozen=True)
class ParameterElement:
    name: str
    type: DartType
    kind: ParameterKind = ParameterKind.required_positional

    @property
    def is_named(self) -> bool:
        return self.kind in {ParameterKind.required_named, ParameterKind.optional_named}

    @property
    def is_positional(self) -> bool:
        return not self.is_named

    @property
    def is_required(self) -> bool:
        return self.kind in {
            ParameterKind.required_positional,
            ParameterKind.required_named,
        }


@dataclass(frozen=True)
class FunctionElement:
    """
    Functions, methods and constructors
    """

    name: str
    return_type: Optional[DartType]
    parameters: Sequence[ParameterElement] = ()
    is_abstract: bool = False


@dataclass(frozen=True)
class PropertyAccessorElement:
    name: str
    return_type: Optional[DartType]
    is_setter: bool = False
    is_abstract: bool = False


@dataclass(frozen=True)
class FunctionTypeAliasElement:
    name: str
    function: FunctionType


@dataclass(frozen=True)
class VariableElement:
    """
    Locals, fields and top level variables
    """

    name: str
    type: Optional[DartType]


@dataclass(frozen=True)
class ClassElement:
    name: str
    is_abstract: bool = False
    is_mixin: bool = False


@dataclass(frozen=True)
class UnknownElement:
    """
    Enums, extensions, prefixes, labels and the like, these carry no type
    """

    name: str


Element = Union[
    FunctionElement,
    PropertyAccessorElement,
    FunctionTypeAliasElement,
    VariableElement,
    ParameterElement,
    ClassElement,
    UnknownElement,
]
