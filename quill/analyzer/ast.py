from dataclasses import dataclass
from typing import Optional, Sequence, Union

from .elements import Element
from .types import ParameterKind


@dataclass(frozen=True)
class Source:
    full_name: str


@dataclass(frozen=True)
class SimpleIdentifier:
    name: str
    offset: int = -1
    static_element: Optional[Element] = None

    @property
    def length(self) -> int:
        return len(self.name)


@dataclass(frozen=True)
class PrefixedIdentifier:
    """
    <prefix>.<identifier>
    """

    prefix: SimpleIdentifier
    identifier: SimpleIdentifier

    @property
    def name(self) -> str:
        return f"{self.prefix.name}.{self.identifier.name}"


Identifier = Union[SimpleIdentifier, PrefixedIdentifier]


@dataclass(frozen=True)
class TypeName:
    name: Optional[Identifier]
    type_arguments: Sequence["TypeAnnotation"] = ()


@dataclass(frozen=True)
class GenericFunctionType:
    return_type: Optional["TypeAnnotation"] = None


TypeAnnotation = Union[TypeName, GenericFunctionType]

# Stand in for `null` when a function has no return type
NO_RETURN_TYPE = TypeName(name=SimpleIdentifier(name="", offset=0))


@dataclass(frozen=True)
class Annotation:
    name: Identifier


@dataclass(frozen=True)
class FormalParameter:
    identifier: SimpleIdentifier
    type: Optional[TypeAnnotation] = None
    kind: ParameterKind = ParameterKind.required_positional
    metadata: Sequence[Annotation] = ()


@dataclass(frozen=True)
class VariableDeclaration:
    name: SimpleIdentifier
    metadata: Sequence[Annotation] = ()


@dataclass(frozen=True)
class FieldDeclaration:
    variables: Sequence[VariableDeclaration]
    type: Optional[TypeAnnotation] = None
    metadata: Sequence[Annotation] = ()


@dataclass(frozen=True)
class TopLevelVariableDeclaration:
    variables: Sequence[VariableDeclaration]
    type: Optional[TypeAnnotation] = None
    metadata: Sequence[Annotation] = ()


@dataclass(frozen=True)
class LocalVariableDeclaration:
    variables: Sequence[VariableDeclaration]
    type: Optional[TypeAnnotation] = None
    metadata: Sequence[Annotation] = ()


@dataclass(frozen=True)
class FunctionDeclaration:
    name: SimpleIdentifier
    return_type: Optional[TypeAnnotation] = None
    parameters: Optional[Sequence[FormalParameter]] = None
    is_getter: bool = False
    is_setter: bool = False
    metadata: Sequence[Annotation] = ()


@dataclass(frozen=True)
class MethodDeclaration:
    name: SimpleIdentifier
    return_type: Optional[TypeAnnotation] = None
    parameters: Optional[Sequence[FormalParameter]] = None
    is_abstract: bool = False
    is_getter: bool = False
    is_setter: bool = False
    metadata: Sequence[Annotation] = ()


ClassMember = Union[FieldDeclaration, MethodDeclaration]


@dataclass(frozen=True)
class ClassOrMixinDeclaration:
    name: Optional[SimpleIdentifier]
    members: Sequence[ClassMember] = ()
    is_abstract: bool = False
    is_mixin: bool = False
    metadata: Sequence[Annotation] = ()


AnnotatedNode = Union[
    ClassOrMixinDeclaration,
    FieldDeclaration,
    FormalParameter,
    FunctionDeclaration,
    LocalVariableDeclaration,
    MethodDeclaration,
    TopLevelVariableDeclaration,
    VariableDeclaration,
]

Declaration = Union[
    ClassOrMixinDeclaration,
    FormalParameter,
    FunctionDeclaration,
    LocalVariableDeclaration,
    TopLevelVariableDeclaration,
]
