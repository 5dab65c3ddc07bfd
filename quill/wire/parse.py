from typing import Any, Mapping, Optional, Sequence

from pynvim_pp.logging import log
from std2.pickle.decoder import new_decoder

from ..analyzer.ast import (
    Annotation,
    ClassMember,
    ClassOrMixinDeclaration,
    Declaration,
    FieldDeclaration,
    FormalParameter,
    FunctionDeclaration,
    GenericFunctionType,
    Identifier,
    LocalVariableDeclaration,
    MethodDeclaration,
    PrefixedIdentifier,
    SimpleIdentifier,
    Source,
    TopLevelVariableDeclaration,
    TypeAnnotation,
    TypeName,
    VariableDeclaration,
)
from ..analyzer.elements import (
    ClassElement,
    Element,
    FunctionElement,
    FunctionTypeAliasElement,
    ParameterElement,
    PropertyAccessorElement,
    UnknownElement,
    VariableElement,
)
from ..analyzer.types import (
    DYNAMIC_TYPE,
    DartType,
    FunctionType,
    InterfaceType,
    NeverType,
    TypeParameterType,
    VoidType,
)
from ..consts import DYNAMIC
from .types import (
    Request,
    ValidationError,
    _AccessorElement,
    _Annotation,
    _Callable,
    _Class,
    _ClassElement,
    _FormalParameter,
    _FunctionElement,
    _FunctionType,
    _GenericFunctionType,
    _Identifier,
    _InterfaceType,
    _ParameterElement,
    _Request,
    _TypeAliasElement,
    _TypeName,
    _TypeParameterType,
    _VariableDeclaration,
    _VariableElement,
    _Variables,
)

_REQUEST = new_decoder[_Request](_Request)
_IDENTIFIER = new_decoder[_Identifier](_Identifier)
_ANNOTATION = new_decoder[_Annotation](_Annotation)
_TYPE_NAME = new_decoder[_TypeName](_TypeName)
_GENERIC_FUNCTION_TYPE = new_decoder[_GenericFunctionType](_GenericFunctionType)
_INTERFACE_TYPE = new_decoder[_InterfaceType](_InterfaceType)
_TYPE_PARAMETER_TYPE = new_decoder[_TypeParameterType](_TypeParameterType)
_FUNCTION_TYPE = new_decoder[_FunctionType](_FunctionType)
_PARAMETER_ELEMENT = new_decoder[_ParameterElement](_ParameterElement)
_FUNCTION_ELEMENT = new_decoder[_FunctionElement](_FunctionElement)
_ACCESSOR_ELEMENT = new_decoder[_AccessorElement](_AccessorElement)
_TYPE_ALIAS_ELEMENT = new_decoder[_TypeAliasElement](_TypeAliasElement)
_VARIABLE_ELEMENT = new_decoder[_VariableElement](_VariableElement)
_CLASS_ELEMENT = new_decoder[_ClassElement](_ClassElement)
_FORMAL_PARAMETER = new_decoder[_FormalParameter](_FormalParameter)
_VARIABLE_DECLARATION = new_decoder[_VariableDeclaration](_VariableDeclaration)
_VARIABLES = new_decoder[_Variables](_Variables)
_CALLABLE = new_decoder[_Callable](_Callable)
_CLASS = new_decoder[_Class](_Class)


def _kind(json: Any) -> str:
    if isinstance(json, Mapping) and isinstance(kind := json.get("kind"), str):
        return kind
    else:
        raise ValidationError(f"missing `kind` -- {json!r}")


def parse_type(json: Any) -> DartType:
    if json == DYNAMIC:
        return DYNAMIC_TYPE
    elif json == "void":
        return VoidType()
    elif json == "Never":
        return NeverType()

    kind = _kind(json)
    if kind == "interface":
        interface = _INTERFACE_TYPE(json)
        return InterfaceType(
            name=interface.name,
            library=interface.library,
            type_arguments=tuple(map(parse_type, interface.arguments)),
            nullability=interface.nullability,
        )
    elif kind == "type_parameter":
        param = _TYPE_PARAMETER_TYPE(json)
        return TypeParameterType(name=param.name, nullability=param.nullability)
    elif kind == "function":
        function = _FUNCTION_TYPE(json)
        return FunctionType(
            return_type=parse_type(function.returnType),
            parameters=tuple(map(parse_parameter, function.parameters)),
            nullability=function.nullability,
        )
    else:
        raise ValidationError(f"unknown type -- {kind}")


def _maybe_type(json: Any) -> Optional[DartType]:
    return None if json is None else parse_type(json)


def parse_parameter(json: Any) -> ParameterElement:
    param = _PARAMETER_ELEMENT(json)
    return ParameterElement(
        name=param.name, type=parse_type(param.type), kind=param.parameterKind
    )


def parse_element(json: Any) -> Element:
    kind = _kind(json)
    if kind in {"function", "method", "constructor"}:
        function = _FUNCTION_ELEMENT(json)
        return FunctionElement(
            name=function.name,
            return_type=_maybe_type(function.returnType),
            parameters=tuple(map(parse_parameter, function.parameters)),
            is_abstract=function.abstract,
        )
    elif kind in {"getter", "setter"}:
        accessor = _ACCESSOR_ELEMENT(json)
        return PropertyAccessorElement(
            name=accessor.name,
            return_type=_maybe_type(accessor.returnType),
            is_setter=kind == "setter",
            is_abstract=accessor.abstract,
        )
    elif kind == "type_alias":
        alias = _TYPE_ALIAS_ELEMENT(json)
        function = parse_type(alias.function)
        if not isinstance(function, FunctionType):
            raise ValidationError(f"type alias of non function -- {alias.name}")
        else:
            return FunctionTypeAliasElement(name=alias.name, function=function)
    elif kind in {"variable", "field", "local_variable", "top_level_variable"}:
        variable = _VARIABLE_ELEMENT(json)
        return VariableElement(name=variable.name, type=_maybe_type(variable.type))
    elif kind == "parameter":
        return parse_parameter(json)
    elif kind in {"class", "mixin"}:
        cls = _CLASS_ELEMENT(json)
        return ClassElement(
            name=cls.name, is_abstract=cls.abstract, is_mixin=kind == "mixin"
        )
    else:
        name = json.get("name")
        log.debug("%s", f"untyped element {kind} -- {name!r}")
        return UnknownElement(name=name if isinstance(name, str) else "")


def parse_identifier(json: Any) -> SimpleIdentifier:
    identifier = _IDENTIFIER(json)
    element = None if identifier.element is None else parse_element(identifier.element)
    return SimpleIdentifier(
        name=identifier.name, offset=identifier.offset, static_element=element
    )


def _name(name: str, prefix: Optional[str]) -> Identifier:
    if prefix is None:
        return SimpleIdentifier(name=name)
    else:
        return PrefixedIdentifier(
            prefix=SimpleIdentifier(name=prefix),
            identifier=SimpleIdentifier(name=name),
        )


def _annotation(json: Any) -> Annotation:
    annotation = _ANNOTATION(json)
    return Annotation(name=_name(annotation.name, prefix=annotation.prefix))


def _metadata(json: Sequence[Any]) -> Sequence[Annotation]:
    return tuple(map(_annotation, json))


def parse_type_annotation(json: Any) -> TypeAnnotation:
    kind = _kind(json)
    if kind == "type_name":
        type_name = _TYPE_NAME(json)
        return TypeName(
            name=(
                None
                if type_name.name is None
                else _name(type_name.name, prefix=type_name.prefix)
            ),
            type_arguments=tuple(map(parse_type_annotation, type_name.arguments)),
        )
    elif kind == "function_type":
        function = _GENERIC_FUNCTION_TYPE(json)
        return GenericFunctionType(
            return_type=_maybe_annotation(function.returnType)
        )
    else:
        raise ValidationError(f"unknown type annotation -- {kind}")


def _maybe_annotation(json: Any) -> Optional[TypeAnnotation]:
    return None if json is None else parse_type_annotation(json)


def _formal_parameter(json: Any) -> FormalParameter:
    param = _FORMAL_PARAMETER(json)
    return FormalParameter(
        identifier=parse_identifier(param.identifier),
        type=_maybe_annotation(param.type),
        kind=param.parameterKind,
        metadata=_metadata(param.metadata),
    )


def _formal_parameters(
    json: Optional[Sequence[Any]],
) -> Optional[Sequence[FormalParameter]]:
    return None if json is None else tuple(map(_formal_parameter, json))


def _variable(json: Any) -> VariableDeclaration:
    var = _VARIABLE_DECLARATION(json)
    return VariableDeclaration(
        name=parse_identifier(var.name), metadata=_metadata(var.metadata)
    )


def _member(json: Any) -> ClassMember:
    kind = _kind(json)
    if kind == "field":
        field = _VARIABLES(json)
        return FieldDeclaration(
            variables=tuple(map(_variable, field.variables)),
            type=_maybe_annotation(field.type),
            metadata=_metadata(field.metadata),
        )
    elif kind == "method":
        method = _CALLABLE(json)
        return MethodDeclaration(
            name=parse_identifier(method.name),
            return_type=_maybe_annotation(method.returnType),
            parameters=_formal_parameters(method.parameters),
            is_abstract=method.abstract,
            is_getter=method.getter,
            is_setter=method.setter,
            metadata=_metadata(method.metadata),
        )
    else:
        raise ValidationError(f"unknown class member -- {kind}")


def parse_declaration(json: Any) -> Declaration:
    kind = _kind(json)
    if kind in {"class", "mixin"}:
        cls = _CLASS(json)
        return ClassOrMixinDeclaration(
            name=None if cls.name is None else parse_identifier(cls.name),
            members=tuple(map(_member, cls.members)),
            is_abstract=cls.abstract,
            is_mixin=kind == "mixin",
            metadata=_metadata(cls.metadata),
        )
    elif kind == "function":
        function = _CALLABLE(json)
        return FunctionDeclaration(
            name=parse_identifier(function.name),
            return_type=_maybe_annotation(function.returnType),
            parameters=_formal_parameters(function.parameters),
            is_getter=function.getter,
            is_setter=function.setter,
            metadata=_metadata(function.metadata),
        )
    elif kind in {"top_level_variable", "local_variable"}:
        variables = _VARIABLES(json)
        if kind == "top_level_variable":
            return TopLevelVariableDeclaration(
                variables=tuple(map(_variable, variables.variables)),
                type=_maybe_annotation(variables.type),
                metadata=_metadata(variables.metadata),
            )
        else:
            return LocalVariableDeclaration(
                variables=tuple(map(_variable, variables.variables)),
                type=_maybe_annotation(variables.type),
                metadata=_metadata(variables.metadata),
            )
    elif kind == "parameter":
        return _formal_parameter(json)
    else:
        raise ValidationError(f"unknown declaration -- {kind}")


def parse_request(json: Any) -> Request:
    """
    Raises `DecodeError` or `ValidationError` on malformed input
    """

    request = _REQUEST(json)
    return Request(
        source=Source(full_name=request.file),
        declarations=tuple(map(parse_declaration, request.declarations)),
    )
