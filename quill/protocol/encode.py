from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Sequence

from std2.pickle.encoder import new_encoder

from .types import CompletionSuggestion, Element, Location, flags_bitset


@dataclass(frozen=True)
class _Location:
    file: str
    offset: int
    length: int
    startLine: int
    startColumn: int


@dataclass(frozen=True)
class _Element:
    kind: str
    name: str
    flags: int
    location: Optional[_Location] = None
    parameters: Optional[str] = None
    returnType: Optional[str] = None


@dataclass(frozen=True)
class _CompletionSuggestion:
    kind: str
    relevance: int
    completion: str
    selectionOffset: int
    selectionLength: int
    isDeprecated: bool
    isPotential: bool
    declaringType: Optional[str] = None
    defaultArgumentListString: Optional[str] = None
    defaultArgumentListTextRanges: Optional[Sequence[int]] = None
    element: Optional[_Element] = None
    returnType: Optional[str] = None


_ENCODER = new_encoder[_CompletionSuggestion](_CompletionSuggestion)


def _prune(thing: Any) -> Any:
    if isinstance(thing, Mapping):
        return {k: _prune(v) for k, v in thing.items() if v is not None}
    else:
        return thing


def _location(location: Location) -> _Location:
    return _Location(
        file=location.file,
        offset=location.offset,
        length=location.length,
        startLine=location.start_line,
        startColumn=location.start_column,
    )


def _element(element: Element) -> _Element:
    return _Element(
        kind=element.kind.name,
        name=element.name,
        flags=flags_bitset(element.flags),
        location=_location(element.location) if element.location else None,
        parameters=element.parameters,
        returnType=element.return_type,
    )


def encode_suggestion(suggestion: CompletionSuggestion) -> Mapping[str, Any]:
    """
    JSON ready, absent fields are left out
    """

    ranges = suggestion.default_argument_list_text_ranges
    wire = _CompletionSuggestion(
        kind=suggestion.kind.name,
        relevance=suggestion.relevance,
        completion=suggestion.completion,
        selectionOffset=suggestion.selection_offset,
        selectionLength=suggestion.selection_length,
        isDeprecated=suggestion.is_deprecated,
        isPotential=suggestion.is_potential,
        declaringType=suggestion.declaring_type,
        defaultArgumentListString=suggestion.default_argument_list_string,
        defaultArgumentListTextRanges=tuple(ranges) if ranges is not None else None,
        element=_element(suggestion.element) if suggestion.element else None,
        returnType=suggestion.return_type,
    )
    return _prune(_ENCODER(wire))


def encode_suggestions(
    suggestions: Iterable[CompletionSuggestion],
) -> Sequence[Mapping[str, Any]]:
    return tuple(map(encode_suggestion, suggestions))
