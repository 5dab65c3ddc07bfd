from dataclasses import dataclass
from typing import Any, Optional, Sequence

from ..analyzer.ast import Declaration, Source
from ..analyzer.types import Nullability, ParameterKind


class ValidationError(Exception): ...


@dataclass(frozen=True)
class Request:
    source: Source
    declarations: Sequence[Declaration]


# Shapes of the resolver's JSON, nested nodes are left as `Any`
# and dispatched on their `kind`


@dataclass(frozen=True)
class _Request:
    file: str
    declarations: Sequence[Any] = ()


@dataclass(frozen=True)
class _Identifier:
    name: str
    offset: int = -1
    element: Optional[Any] = None


@dataclass(frozen=True)
class _Annotation:
    name: str
    prefix: Optional[str] = None


@dataclass(frozen=True)
class _TypeName:
    kind: str
    name: Optional[str] = None
    prefix: Optional[str] = None
    arguments: Sequence[Any] = ()


@dataclass(frozen=True)
class _GenericFunctionType:
    kind: str
    returnType: Optional[Any] = None


@dataclass(frozen=True)
class _InterfaceType:
    kind: str
    name: str
    library: str = ""
    arguments: Sequence[Any] = ()
    nullability: Nullability = Nullability.none


@dataclass(frozen=True)
class _TypeParameterType:
    kind: str
    name: str
    nullability: Nullability = Nullability.none


@dataclass(frozen=True)
class _FunctionType:
    kind: str
    returnType: Any = "dynamic"
    parameters: Sequence[Any] = ()
    nullability: Nullability = Nullability.none


@dataclass(frozen=True)
class _ParameterElement:
    kind: str
    name: str
    type: Any = "dynamic"
    parameterKind: ParameterKind = ParameterKind.required_positional


@dataclass(frozen=True)
class _FunctionElement:
    kind: str
    name: str
    returnType: Optional[Any] = None
    parameters: Sequence[Any] = ()
    abstract: bool = False


@dataclass(frozen=True)
class _AccessorElement:
    kind: str
    name: str
    returnType: Optional[Any] = None
    abstract: bool = False


@dataclass(frozen=True)
class _TypeAliasElement:
    kind: str
    name: str
    function: Any


@dataclass(frozen=True)
class _VariableElement:
    kind: str
    name: str
    type: Optional[Any] = None


@dataclass(frozen=True)
class _ClassElement:
    kind: str
    name: str
    abstract: bool = False


@dataclass(frozen=True)
class _FormalParameter:
    kind: str
    identifier: Any
    type: Optional[Any] = None
    parameterKind: ParameterKind = ParameterKind.required_positional
    metadata: Sequence[Any] = ()


@dataclass(frozen=True)
class _VariableDeclaration:
    name: Any
    metadata: Sequence[Any] = ()


@dataclass(frozen=True)
class _Variables:
    """
    field, top_level_variable, local_variable
    """

    kind: str
    variables: Sequence[Any]
    type: Optional[Any] = None
    metadata: Sequence[Any] = ()


@dataclass(frozen=True)
class _Callable:
    """
    function, method
    """

    kind: str
    name: Any
    returnType: Optional[Any] = None
    parameters: Optional[Sequence[Any]] = None
    abstract: bool = False
    getter: bool = False
    setter: bool = False
    metadata: Sequence[Any] = ()


@dataclass(frozen=True)
class _Class:
    """
    class, mixin
    """

    kind: str
    name: Optional[Any] = None
    members: Sequence[Any] = ()
    abstract: bool = False
    metadata: Sequence[Any] = ()
