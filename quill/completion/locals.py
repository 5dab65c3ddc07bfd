from typing import Iterable, Iterator, MutableSequence, Optional, Sequence, Tuple

from pynvim_pp.logging import log
from std2.types import never

from ..analyzer.ast import (
    ClassOrMixinDeclaration,
    Declaration,
    FieldDeclaration,
    FormalParameter,
    FunctionDeclaration,
    GenericFunctionType,
    LocalVariableDeclaration,
    MethodDeclaration,
    SimpleIdentifier,
    Source,
    TopLevelVariableDeclaration,
    TypeAnnotation,
    TypeName,
)
from ..analyzer.elements import ParameterElement
from ..analyzer.types import DYNAMIC_TYPE, ParameterKind
from ..consts import DYNAMIC
from ..protocol.types import CompletionSuggestion, CompletionSuggestionKind, ElementKind
from ..settings.types import Settings
from ..shared.timeit import timeit
from .utilities import (
    add_default_arg_details,
    create_local_element,
    create_local_suggestion,
    is_deprecated,
    sort_suggestions,
)


def annotation_text(annotation: Optional[TypeAnnotation]) -> str:
    if annotation is None:
        return DYNAMIC
    elif isinstance(annotation, TypeName):
        name = annotation.name.name if annotation.name else DYNAMIC
        if annotation.type_arguments:
            args = ", ".join(map(annotation_text, annotation.type_arguments))
            return f"{name}<{args}>"
        else:
            return name
    elif isinstance(annotation, GenericFunctionType):
        ret = annotation_text(annotation.return_type)
        return f"{ret} Function()"
    else:
        never(annotation)


def parameters_text(parameters: Sequence[FormalParameter]) -> str:
    """
    (int a, [b], {required String c})
    """

    positional: MutableSequence[str] = []
    optional: MutableSequence[str] = []
    named: MutableSequence[str] = []

    for param in parameters:
        name = param.identifier.name
        text = f"{annotation_text(param.type)} {name}" if param.type else name
        if param.kind is ParameterKind.required_positional:
            positional.append(text)
        elif param.kind is ParameterKind.optional_positional:
            optional.append(text)
        elif param.kind is ParameterKind.required_named:
            named.append(f"required {text}")
        elif param.kind is ParameterKind.optional_named:
            named.append(text)
        else:
            never(param.kind)

    if optional:
        positional.append(f"[{', '.join(optional)}]")
    if named:
        positional.append(f"{{{', '.join(named)}}}")
    return f"({', '.join(positional)})"


def _parameter_element(param: FormalParameter) -> ParameterElement:
    element = param.identifier.static_element
    if isinstance(element, ParameterElement):
        return element
    else:
        return ParameterElement(
            name=param.identifier.name, type=DYNAMIC_TYPE, kind=param.kind
        )


def _split_params(
    parameters: Sequence[FormalParameter],
) -> Tuple[Sequence[ParameterElement], Sequence[ParameterElement]]:
    elements = tuple(map(_parameter_element, parameters))
    required = tuple(
        p for p in elements if p.kind is ParameterKind.required_positional
    )
    named = tuple(p for p in elements if p.is_named)
    return required, named


def _callable_kind(
    is_getter: bool, is_setter: bool, otherwise: ElementKind
) -> ElementKind:
    if is_getter:
        return ElementKind.GETTER
    elif is_setter:
        return ElementKind.SETTER
    else:
        return otherwise


class _Builder:
    def __init__(self, settings: Settings, source: Source) -> None:
        self._settings, self._source = settings, source

    def _suggest(
        self,
        id: SimpleIdentifier,
        kind: ElementKind,
        deprecated: bool,
        relevance: int,
        return_type: Optional[TypeAnnotation],
        class_decl: Optional[ClassOrMixinDeclaration] = None,
        parameters: Optional[Sequence[FormalParameter]] = None,
        is_abstract: bool = False,
        suggestion_kind: CompletionSuggestionKind = CompletionSuggestionKind.INVOCATION,
    ) -> Optional[CompletionSuggestion]:
        element = create_local_element(
            self._source,
            kind=kind,
            id=id,
            parameters=parameters_text(parameters) if parameters is not None else None,
            return_type=return_type,
            is_abstract=is_abstract,
            is_deprecated=deprecated,
        )
        suggestion = create_local_suggestion(
            self._settings.relevance,
            id=id,
            is_deprecated=deprecated,
            default_relevance=relevance,
            return_type=return_type,
            class_decl=class_decl,
            kind=suggestion_kind,
            element=element,
        )
        if suggestion is None:
            log.debug("%s", f"no suggestion for {kind.name} -- {id.name!r}")
            return None
        elif parameters is None:
            return suggestion
        else:
            required, named = _split_params(parameters)
            return add_default_arg_details(
                self._settings.default_args,
                suggestion=suggestion,
                required_params=required,
                named_params=named,
            )

    def _members(self, decl: ClassOrMixinDeclaration) -> Iterator[CompletionSuggestion]:
        relevance = self._settings.relevance
        for member in decl.members:
            if isinstance(member, FieldDeclaration):
                for var in member.variables:
                    if s1 := self._suggest(
                        var.name,
                        kind=ElementKind.FIELD,
                        deprecated=is_deprecated(member) or is_deprecated(var),
                        relevance=relevance.local_field,
                        return_type=member.type,
                        class_decl=decl,
                    ):
                        yield s1
            elif isinstance(member, MethodDeclaration):
                accessor = member.is_getter or member.is_setter
                if s2 := self._suggest(
                    member.name,
                    kind=_callable_kind(
                        member.is_getter, member.is_setter, otherwise=ElementKind.METHOD
                    ),
                    deprecated=is_deprecated(member),
                    relevance=(
                        relevance.local_accessor if accessor else relevance.local_method
                    ),
                    return_type=member.return_type,
                    class_decl=decl,
                    parameters=None if accessor else member.parameters,
                    is_abstract=member.is_abstract,
                ):
                    yield s2
            else:
                never(member)

    def suggestions(self, decl: Declaration) -> Iterator[CompletionSuggestion]:
        relevance = self._settings.relevance
        if isinstance(decl, ClassOrMixinDeclaration):
            if decl.name is not None:
                if s1 := self._suggest(
                    decl.name,
                    kind=ElementKind.MIXIN if decl.is_mixin else ElementKind.CLASS,
                    deprecated=is_deprecated(decl),
                    relevance=relevance.local_class,
                    return_type=None,
                    is_abstract=decl.is_abstract,
                    suggestion_kind=CompletionSuggestionKind.IDENTIFIER,
                ):
                    yield s1
            yield from self._members(decl)

        elif isinstance(decl, FunctionDeclaration):
            accessor = decl.is_getter or decl.is_setter
            if s2 := self._suggest(
                decl.name,
                kind=_callable_kind(
                    decl.is_getter, decl.is_setter, otherwise=ElementKind.FUNCTION
                ),
                deprecated=is_deprecated(decl),
                relevance=(
                    relevance.local_accessor if accessor else relevance.local_function
                ),
                return_type=decl.return_type,
                parameters=None if accessor else decl.parameters,
            ):
                yield s2

        elif isinstance(decl, (TopLevelVariableDeclaration, LocalVariableDeclaration)):
            top_level = isinstance(decl, TopLevelVariableDeclaration)
            for var in decl.variables:
                if s3 := self._suggest(
                    var.name,
                    kind=(
                        ElementKind.TOP_LEVEL_VARIABLE
                        if top_level
                        else ElementKind.LOCAL_VARIABLE
                    ),
                    deprecated=is_deprecated(decl) or is_deprecated(var),
                    relevance=(
                        relevance.local_top_level_variable
                        if top_level
                        else relevance.local_variable
                    ),
                    return_type=decl.type,
                ):
                    yield s3

        elif isinstance(decl, FormalParameter):
            if s4 := self._suggest(
                decl.identifier,
                kind=ElementKind.PARAMETER,
                deprecated=is_deprecated(decl),
                relevance=relevance.parameter,
                return_type=decl.type,
            ):
                yield s4

        else:
            never(decl)


def suggest_locals(
    settings: Settings, source: Source, declarations: Iterable[Declaration]
) -> Sequence[CompletionSuggestion]:
    """
    One suggestion per visible declaration, ranked
    """

    builder = _Builder(settings, source=source)
    with timeit("LOCALS", source.full_name):
        suggestions = tuple(
            suggestion
            for decl in declarations
            for suggestion in builder.suggestions(decl)
        )
        return sort_suggestions(suggestions)
