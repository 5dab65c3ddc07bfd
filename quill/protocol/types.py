from dataclasses import dataclass
from enum import Enum, auto
from typing import AbstractSet, Optional, Sequence

# Wire names of the completion protocol, members render by name


class CompletionSuggestionKind(Enum):
    ARGUMENT_LIST = auto()
    IMPORT = auto()
    IDENTIFIER = auto()
    INVOCATION = auto()
    KEYWORD = auto()
    NAMED_ARGUMENT = auto()
    OPTIONAL_ARGUMENT = auto()
    OVERRIDE = auto()
    PARAMETER = auto()


class ElementKind(Enum):
    CLASS = auto()
    CLASS_TYPE_ALIAS = auto()
    COMPILATION_UNIT = auto()
    CONSTRUCTOR = auto()
    CONSTRUCTOR_INVOCATION = auto()
    ENUM = auto()
    ENUM_CONSTANT = auto()
    EXTENSION = auto()
    FIELD = auto()
    FILE = auto()
    FUNCTION = auto()
    FUNCTION_INVOCATION = auto()
    FUNCTION_TYPE_ALIAS = auto()
    GETTER = auto()
    LABEL = auto()
    LIBRARY = auto()
    LOCAL_VARIABLE = auto()
    METHOD = auto()
    MIXIN = auto()
    PARAMETER = auto()
    PREFIX = auto()
    SETTER = auto()
    TOP_LEVEL_VARIABLE = auto()
    TYPE_PARAMETER = auto()
    UNIT_TEST_GROUP = auto()
    UNIT_TEST_TEST = auto()
    UNKNOWN = auto()


class ElementFlag(Enum):
    ABSTRACT = 0x01
    CONST = 0x02
    FINAL = 0x04
    TOP_LEVEL_STATIC = 0x08
    PRIVATE = 0x10
    DEPRECATED = 0x20


def make_flags(
    is_abstract: bool = False,
    is_const: bool = False,
    is_final: bool = False,
    is_static: bool = False,
    is_private: bool = False,
    is_deprecated: bool = False,
) -> AbstractSet[ElementFlag]:
    flags = {
        ElementFlag.ABSTRACT: is_abstract,
        ElementFlag.CONST: is_const,
        ElementFlag.FINAL: is_final,
        ElementFlag.TOP_LEVEL_STATIC: is_static,
        ElementFlag.PRIVATE: is_private,
        ElementFlag.DEPRECATED: is_deprecated,
    }
    return frozenset(flag for flag, on in flags.items() if on)


def flags_bitset(flags: AbstractSet[ElementFlag]) -> int:
    acc = 0
    for flag in flags:
        acc |= flag.value
    return acc


@dataclass(frozen=True)
class Location:
    """
    `start_line` & `start_column` are placeholders, no line index here
    """

    file: str
    offset: int
    length: int
    start_line: int
    start_column: int


@dataclass(frozen=True)
class Element:
    kind: ElementKind
    name: str
    flags: AbstractSet[ElementFlag] = frozenset()
    location: Optional[Location] = None
    parameters: Optional[str] = None
    return_type: Optional[str] = None


@dataclass(frozen=True)
class CompletionSuggestion:
    kind: CompletionSuggestionKind
    relevance: int
    completion: str
    selection_offset: int
    selection_length: int
    is_deprecated: bool
    is_potential: bool

    declaring_type: Optional[str] = None
    # Pairs of (offset, length), flattened
    default_argument_list_string: Optional[str] = None
    default_argument_list_text_ranges: Optional[Sequence[int]] = None
    element: Optional[Element] = None
    return_type: Optional[str] = None


@dataclass(frozen=True)
class DefaultArgument:
    """
    Text to insert, and where the cursor goes relative to its start
    """

    text: str
    cursor_position: Optional[int] = None
