"""
Helpers shared by completion contributors
"""

from dataclasses import replace
from functools import cmp_to_key
from typing import Iterable, MutableSequence, Optional, Sequence

from ..analyzer.ast import (
    AnnotatedNode,
    ClassOrMixinDeclaration,
    SimpleIdentifier,
    Source,
    TypeAnnotation,
    TypeName,
)
from ..analyzer.elements import (
    FunctionElement,
    FunctionTypeAliasElement,
    ParameterElement,
    PropertyAccessorElement,
    VariableElement,
)
from ..analyzer.types import (
    DYNAMIC_TYPE,
    DartType,
    FunctionType,
    InterfaceType,
    display_string,
    is_core_list,
    is_dynamic,
)
from ..consts import DEPRECATED, DYNAMIC, PLACEHOLDER, PRIVATE_PREFIX
from ..protocol.types import (
    CompletionSuggestion,
    CompletionSuggestionKind,
    DefaultArgument,
    Element,
    ElementKind,
    Location,
    make_flags,
)
from ..settings.types import DefaultArgs, Relevance


def is_private_name(name: str) -> bool:
    return name.startswith(PRIVATE_PREFIX)


def name_for_type(
    identifier: Optional[SimpleIdentifier], declared_type: Optional[TypeAnnotation]
) -> Optional[str]:
    """
    Name of the type of `identifier`,
    or if unresolved, the name of its `declared_type`
    """

    if identifier is None:
        return None

    element = identifier.static_element
    type: Optional[DartType]
    if element is None:
        return DYNAMIC
    elif isinstance(element, PropertyAccessorElement):
        if element.is_setter:
            return None
        else:
            type = element.return_type
    elif isinstance(element, FunctionElement):
        type = element.return_type
    elif isinstance(element, FunctionTypeAliasElement):
        type = element.function.return_type
    elif isinstance(element, (VariableElement, ParameterElement)):
        type = element.type
    else:
        return None

    if type is None:
        return DYNAMIC
    elif is_dynamic(type):
        if isinstance(declared_type, TypeName) and declared_type.name is not None:
            return declared_type.name.name
        else:
            return DYNAMIC
    else:
        return str(type)


def get_type_string(type: DartType, with_nullability: bool = False) -> str:
    if is_dynamic(type):
        return ""
    else:
        return display_string(type, with_nullability=with_nullability) + " "


def _list_type_argument(type: InterfaceType, with_nullability: bool) -> str:
    element_type = (
        type.type_arguments[0] if len(type.type_arguments) == 1 else DYNAMIC_TYPE
    )
    if is_dynamic(element_type):
        return ""
    else:
        type_arg = display_string(element_type, with_nullability=with_nullability)
        return f"<{type_arg}>"


def default_string_parameter_value(
    param: Optional[ParameterElement], with_nullability: bool = False
) -> Optional[DefaultArgument]:
    if param is None:
        return None

    type = param.type
    if isinstance(type, InterfaceType) and is_core_list(type):
        text = _list_type_argument(type, with_nullability=with_nullability) + "[]"
        return DefaultArgument(text=text, cursor_position=len(text) - 1)
    elif isinstance(type, FunctionType):
        params = ", ".join(
            get_type_string(p.type, with_nullability=with_nullability) + p.name
            for p in type.parameters
        )
        # TODO: multi-line bodies once the editor side can re-indent them
        text = f"({params}) {{  }}"
        return DefaultArgument(text=text, cursor_position=len(text) - 2)
    else:
        # no map literals
        return None


def _default_value(options: DefaultArgs, param: ParameterElement) -> str:
    return options.named_placeholder


def add_default_arg_details(
    options: DefaultArgs,
    suggestion: CompletionSuggestion,
    required_params: Iterable[ParameterElement],
    named_params: Iterable[ParameterElement],
) -> CompletionSuggestion:
    text = ""
    ranges: MutableSequence[int] = []

    for param in required_params:
        if text:
            text += options.separator
        offset = len(text)
        text += param.name
        ranges.extend((offset, len(param.name)))

    for param in named_params:
        if param.is_required:
            if text:
                text += options.separator
            text += f"{param.name}: "
            offset = len(text)
            default_value = _default_value(options, param=param)
            text += default_value
            ranges.extend((offset, len(default_value)))

    return replace(
        suggestion,
        default_argument_list_string=text or None,
        default_argument_list_text_ranges=tuple(ranges) or None,
    )


def is_deprecated(node: Optional[AnnotatedNode]) -> bool:
    if node is None:
        return False
    else:
        return any(
            isinstance(annotation.name, SimpleIdentifier)
            and annotation.name.name == DEPRECATED
            for annotation in node.metadata
        )


def completion_comparator(lhs: CompletionSuggestion, rhs: CompletionSuggestion) -> int:
    """
    Relevance high -> low, then completion alphabetically
    """

    if lhs.relevance == rhs.relevance:
        return (lhs.completion > rhs.completion) - (lhs.completion < rhs.completion)
    else:
        return (rhs.relevance > lhs.relevance) - (rhs.relevance < lhs.relevance)


def sort_suggestions(
    suggestions: Iterable[CompletionSuggestion],
) -> Sequence[CompletionSuggestion]:
    return sorted(suggestions, key=cmp_to_key(completion_comparator))


def create_local_element(
    source: Source,
    kind: ElementKind,
    id: Optional[SimpleIdentifier],
    parameters: Optional[str] = None,
    return_type: Optional[TypeAnnotation] = None,
    is_abstract: bool = False,
    is_deprecated: bool = False,
) -> Element:
    if id is not None:
        name = id.name
        # TODO: real start line / column once a line index is passed in
        location = Location(
            file=source.full_name,
            offset=id.offset,
            length=id.length,
            start_line=0,
            start_column=0,
        )
    else:
        name = ""
        location = Location(
            file=source.full_name, offset=-1, length=0, start_line=1, start_column=0
        )

    flags = make_flags(
        is_abstract=is_abstract,
        is_deprecated=is_deprecated,
        is_private=is_private_name(name),
    )
    return Element(
        kind=kind,
        name=name,
        flags=flags,
        location=location,
        parameters=parameters,
        return_type=name_for_type(id, return_type),
    )


def create_local_suggestion(
    relevance: Relevance,
    id: Optional[SimpleIdentifier],
    is_deprecated: bool,
    default_relevance: int,
    return_type: Optional[TypeAnnotation],
    class_decl: Optional[ClassOrMixinDeclaration] = None,
    kind: CompletionSuggestionKind = CompletionSuggestionKind.INVOCATION,
    element: Optional[Element] = None,
) -> Optional[CompletionSuggestion]:
    """
    `None` when there is nothing worth suggesting
    """

    if id is None:
        return None

    completion = id.name
    if not completion or completion == PLACEHOLDER:
        return None

    class_name = class_decl.name.name if class_decl and class_decl.name else None
    suggestion = CompletionSuggestion(
        kind=kind,
        relevance=relevance.low if is_deprecated else default_relevance,
        completion=completion,
        selection_offset=len(completion),
        selection_length=0,
        is_deprecated=is_deprecated,
        is_potential=False,
        declaring_type=class_name or None,
        element=element,
        return_type=name_for_type(id, return_type),
    )
    return suggestion
