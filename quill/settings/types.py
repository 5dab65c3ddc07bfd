from dataclasses import dataclass


@dataclass(frozen=True)
class Relevance:
    low: int
    default: int
    high: int

    local_class: int
    local_function: int
    local_method: int
    local_accessor: int
    local_field: int
    local_variable: int
    local_top_level_variable: int
    parameter: int


@dataclass(frozen=True)
class DefaultArgs:
    separator: str
    named_placeholder: str


@dataclass(frozen=True)
class Settings:
    relevance: Relevance
    default_args: DefaultArgs
