from unittest import TestCase

from quill.analyzer.ast import (
    NO_RETURN_TYPE,
    Annotation,
    ClassOrMixinDeclaration,
    GenericFunctionType,
    PrefixedIdentifier,
    SimpleIdentifier,
    Source,
    TypeName,
    VariableDeclaration,
)
from quill.analyzer.elements import (
    ClassElement,
    FunctionElement,
    FunctionTypeAliasElement,
    ParameterElement,
    PropertyAccessorElement,
    VariableElement,
)
from quill.analyzer.types import (
    DYNAMIC_TYPE,
    FunctionType,
    InterfaceType,
    Nullability,
    ParameterKind,
)
from quill.completion.utilities import (
    add_default_arg_details,
    completion_comparator,
    create_local_element,
    create_local_suggestion,
    default_string_parameter_value,
    get_type_string,
    is_deprecated,
    name_for_type,
    sort_suggestions,
)
from quill.protocol.types import (
    CompletionSuggestion,
    CompletionSuggestionKind,
    ElementFlag,
    ElementKind,
    Location,
)
from quill.settings.types import DefaultArgs, Relevance

_INT = InterfaceType(name="int", library="dart:core")
_FOO = InterfaceType(name="Foo", library="package:app/foo.dart")

_RELEVANCE = Relevance(
    low=500,
    default=1000,
    high=2000,
    local_class=1000,
    local_function=1056,
    local_method=1057,
    local_accessor=1057,
    local_field=1058,
    local_variable=1059,
    local_top_level_variable=1040,
    parameter=1059,
)
_DEFAULT_ARGS = DefaultArgs(separator=", ", named_placeholder="null")


def _list_of(element_type: object) -> InterfaceType:
    return InterfaceType(
        name="List", library="dart:core", type_arguments=(element_type,)
    )


def _suggestion(completion: str, relevance: int = 1000) -> CompletionSuggestion:
    return CompletionSuggestion(
        kind=CompletionSuggestionKind.INVOCATION,
        relevance=relevance,
        completion=completion,
        selection_offset=len(completion),
        selection_length=0,
        is_deprecated=False,
        is_potential=False,
    )


def _identifier(element: object = None) -> SimpleIdentifier:
    return SimpleIdentifier(name="foo", offset=3, static_element=element)


class NameForType(TestCase):
    def test_absent_identifier(self) -> None:
        self.assertIsNone(name_for_type(None, None))

    def test_unresolved(self) -> None:
        self.assertEqual(name_for_type(_identifier(), None), "dynamic")

    def test_unresolved_ignores_declared(self) -> None:
        declared = TypeName(name=SimpleIdentifier(name="Foo"))
        self.assertEqual(name_for_type(_identifier(), declared), "dynamic")

    def test_setter(self) -> None:
        setter = PropertyAccessorElement(name="foo", return_type=None, is_setter=True)
        self.assertIsNone(name_for_type(_identifier(setter), None))

    def test_getter(self) -> None:
        getter = PropertyAccessorElement(name="foo", return_type=_list_of(_INT))
        self.assertEqual(name_for_type(_identifier(getter), None), "List<int>")

    def test_function(self) -> None:
        function = FunctionElement(name="foo", return_type=_INT)
        self.assertEqual(name_for_type(_identifier(function), None), "int")

    def test_type_alias(self) -> None:
        alias = FunctionTypeAliasElement(
            name="foo", function=FunctionType(return_type=_FOO)
        )
        self.assertEqual(name_for_type(_identifier(alias), None), "Foo")

    def test_variable(self) -> None:
        nullable = InterfaceType(name="int", nullability=Nullability.question)
        variable = VariableElement(name="foo", type=nullable)
        self.assertEqual(name_for_type(_identifier(variable), None), "int?")

    def test_parameter(self) -> None:
        param = ParameterElement(name="foo", type=_FOO)
        self.assertEqual(name_for_type(_identifier(param), None), "Foo")

    def test_dynamic_uses_declared(self) -> None:
        variable = VariableElement(name="foo", type=DYNAMIC_TYPE)
        declared = TypeName(name=SimpleIdentifier(name="Bar"))
        self.assertEqual(name_for_type(_identifier(variable), declared), "Bar")

    def test_dynamic_uses_prefixed_declared(self) -> None:
        variable = VariableElement(name="foo", type=DYNAMIC_TYPE)
        declared = TypeName(
            name=PrefixedIdentifier(
                prefix=SimpleIdentifier(name="p"),
                identifier=SimpleIdentifier(name="Bar"),
            )
        )
        self.assertEqual(name_for_type(_identifier(variable), declared), "p.Bar")

    def test_dynamic_without_declared(self) -> None:
        variable = VariableElement(name="foo", type=DYNAMIC_TYPE)
        self.assertEqual(name_for_type(_identifier(variable), None), "dynamic")
        self.assertEqual(
            name_for_type(_identifier(variable), GenericFunctionType()), "dynamic"
        )
        self.assertEqual(
            name_for_type(_identifier(variable), TypeName(name=None)), "dynamic"
        )

    def test_dynamic_no_return_type(self) -> None:
        function = FunctionElement(name="foo", return_type=DYNAMIC_TYPE)
        self.assertEqual(name_for_type(_identifier(function), NO_RETURN_TYPE), "")

    def test_missing_type(self) -> None:
        variable = VariableElement(name="foo", type=None)
        self.assertEqual(name_for_type(_identifier(variable), None), "dynamic")

    def test_other_element(self) -> None:
        cls = ClassElement(name="foo")
        self.assertIsNone(name_for_type(_identifier(cls), None))


class DefaultStringParameterValue(TestCase):
    def test_absent(self) -> None:
        self.assertIsNone(default_string_parameter_value(None))

    def test_dynamic_list(self) -> None:
        param = ParameterElement(name="xs", type=_list_of(DYNAMIC_TYPE))
        arg = default_string_parameter_value(param)
        assert arg
        self.assertEqual(arg.text, "[]")
        self.assertEqual(arg.cursor_position, 1)

    def test_typed_list(self) -> None:
        param = ParameterElement(name="xs", type=_list_of(_FOO))
        arg = default_string_parameter_value(param)
        assert arg
        self.assertEqual(arg.text, "<Foo>[]")
        self.assertEqual(arg.cursor_position, 6)

    def test_typed_list_nullability(self) -> None:
        nullable = InterfaceType(name="int", nullability=Nullability.question)
        param = ParameterElement(name="xs", type=_list_of(nullable))
        arg = default_string_parameter_value(param)
        assert arg
        self.assertEqual(arg.text, "<int>[]")
        with_null = default_string_parameter_value(param, with_nullability=True)
        assert with_null
        self.assertEqual(with_null.text, "<int?>[]")

    def test_foreign_list(self) -> None:
        fake = InterfaceType(name="List", library="package:fake/list.dart")
        param = ParameterElement(name="xs", type=fake)
        self.assertIsNone(default_string_parameter_value(param))

    def test_function_no_params(self) -> None:
        param = ParameterElement(name="f", type=FunctionType(return_type=_INT))
        arg = default_string_parameter_value(param)
        assert arg
        self.assertEqual(arg.text, "() {  }")
        self.assertEqual(arg.cursor_position, len(arg.text) - 2)

    def test_function_params(self) -> None:
        t = FunctionType(
            return_type=_INT,
            parameters=(
                ParameterElement(name="a", type=_INT),
                ParameterElement(name="b", type=DYNAMIC_TYPE),
            ),
        )
        arg = default_string_parameter_value(ParameterElement(name="f", type=t))
        assert arg
        self.assertEqual(arg.text, "(int a, b) {  }")
        self.assertEqual(arg.cursor_position, 13)

    def test_map(self) -> None:
        t = InterfaceType(
            name="Map", library="dart:core", type_arguments=(_INT, _INT)
        )
        self.assertIsNone(
            default_string_parameter_value(ParameterElement(name="m", type=t))
        )

    def test_type_string(self) -> None:
        self.assertEqual(get_type_string(DYNAMIC_TYPE), "")
        self.assertEqual(get_type_string(_list_of(_INT)), "List<int> ")


class AddDefaultArgDetails(TestCase):
    def test_required_only(self) -> None:
        s = add_default_arg_details(
            _DEFAULT_ARGS,
            suggestion=_suggestion("f"),
            required_params=(
                ParameterElement(name="a", type=_INT),
                ParameterElement(name="bb", type=_INT),
            ),
            named_params=(),
        )
        self.assertEqual(s.default_argument_list_string, "a, bb")
        self.assertEqual(tuple(s.default_argument_list_text_ranges or ()), (0, 1, 3, 2))

    def test_required_and_named(self) -> None:
        s = add_default_arg_details(
            _DEFAULT_ARGS,
            suggestion=_suggestion("f"),
            required_params=(ParameterElement(name="a", type=_INT),),
            named_params=(
                ParameterElement(
                    name="x", type=_list_of(_INT), kind=ParameterKind.required_named
                ),
                ParameterElement(
                    name="y", type=_INT, kind=ParameterKind.optional_named
                ),
            ),
        )
        self.assertEqual(s.default_argument_list_string, "a, x: null")
        self.assertEqual(tuple(s.default_argument_list_text_ranges or ()), (0, 1, 6, 4))

    def test_named_only(self) -> None:
        s = add_default_arg_details(
            _DEFAULT_ARGS,
            suggestion=_suggestion("f"),
            required_params=(),
            named_params=(
                ParameterElement(
                    name="x", type=_INT, kind=ParameterKind.required_named
                ),
            ),
        )
        self.assertEqual(s.default_argument_list_string, "x: null")
        self.assertEqual(tuple(s.default_argument_list_text_ranges or ()), (3, 4))

    def test_nothing_qualifies(self) -> None:
        s = add_default_arg_details(
            _DEFAULT_ARGS,
            suggestion=_suggestion("f"),
            required_params=(),
            named_params=(
                ParameterElement(
                    name="y", type=_INT, kind=ParameterKind.optional_named
                ),
            ),
        )
        self.assertIsNone(s.default_argument_list_string)
        self.assertIsNone(s.default_argument_list_text_ranges)

    def test_keeps_suggestion(self) -> None:
        base = _suggestion("f", relevance=1234)
        s = add_default_arg_details(
            _DEFAULT_ARGS,
            suggestion=base,
            required_params=(ParameterElement(name="a", type=_INT),),
            named_params=(),
        )
        self.assertEqual(s.completion, "f")
        self.assertEqual(s.relevance, 1234)
        self.assertIsNone(base.default_argument_list_string)

    def test_placeholder(self) -> None:
        options = DefaultArgs(separator=",", named_placeholder="0")
        s = add_default_arg_details(
            options,
            suggestion=_suggestion("f"),
            required_params=(ParameterElement(name="a", type=_INT),),
            named_params=(
                ParameterElement(
                    name="n", type=_INT, kind=ParameterKind.required_named
                ),
            ),
        )
        self.assertEqual(s.default_argument_list_string, "a,n: 0")
        self.assertEqual(tuple(s.default_argument_list_text_ranges or ()), (0, 1, 5, 1))


class IsDeprecated(TestCase):
    def test_absent(self) -> None:
        self.assertFalse(is_deprecated(None))

    def test_no_metadata(self) -> None:
        node = VariableDeclaration(name=SimpleIdentifier(name="x"))
        self.assertFalse(is_deprecated(node))

    def test_deprecated(self) -> None:
        node = VariableDeclaration(
            name=SimpleIdentifier(name="x"),
            metadata=(
                Annotation(name=SimpleIdentifier(name="override")),
                Annotation(name=SimpleIdentifier(name="deprecated")),
            ),
        )
        self.assertTrue(is_deprecated(node))

    def test_exact_name(self) -> None:
        node = VariableDeclaration(
            name=SimpleIdentifier(name="x"),
            metadata=(Annotation(name=SimpleIdentifier(name="Deprecated")),),
        )
        self.assertFalse(is_deprecated(node))

    def test_prefixed(self) -> None:
        node = VariableDeclaration(
            name=SimpleIdentifier(name="x"),
            metadata=(
                Annotation(
                    name=PrefixedIdentifier(
                        prefix=SimpleIdentifier(name="meta"),
                        identifier=SimpleIdentifier(name="deprecated"),
                    )
                ),
            ),
        )
        self.assertFalse(is_deprecated(node))


class Comparator(TestCase):
    def test_relevance_first(self) -> None:
        lo, hi = _suggestion("a", relevance=1), _suggestion("b", relevance=2)
        self.assertGreater(completion_comparator(lo, hi), 0)
        self.assertLess(completion_comparator(hi, lo), 0)

    def test_alphabetical(self) -> None:
        a, b = _suggestion("a"), _suggestion("b")
        self.assertLess(completion_comparator(a, b), 0)
        self.assertGreater(completion_comparator(b, a), 0)
        self.assertEqual(completion_comparator(a, a), 0)

    def test_sort(self) -> None:
        suggestions = (
            _suggestion("b", relevance=1000),
            _suggestion("z", relevance=500),
            _suggestion("a", relevance=1000),
            _suggestion("c", relevance=2000),
        )
        ordered = [s.completion for s in sort_suggestions(suggestions)]
        self.assertEqual(ordered, ["c", "a", "b", "z"])


class CreateLocalSuggestion(TestCase):
    def test_absent(self) -> None:
        self.assertIsNone(
            create_local_suggestion(
                _RELEVANCE,
                id=None,
                is_deprecated=False,
                default_relevance=1000,
                return_type=None,
            )
        )

    def test_placeholders(self) -> None:
        for name in ("", "_"):
            self.assertIsNone(
                create_local_suggestion(
                    _RELEVANCE,
                    id=SimpleIdentifier(name=name),
                    is_deprecated=False,
                    default_relevance=1000,
                    return_type=None,
                )
            )

    def test_suggestion(self) -> None:
        id = SimpleIdentifier(
            name="count", offset=7, static_element=VariableElement("count", _INT)
        )
        s = create_local_suggestion(
            _RELEVANCE,
            id=id,
            is_deprecated=False,
            default_relevance=1059,
            return_type=None,
        )
        assert s
        self.assertEqual(s.kind, CompletionSuggestionKind.INVOCATION)
        self.assertEqual(s.relevance, 1059)
        self.assertEqual(s.completion, "count")
        self.assertEqual(s.selection_offset, 5)
        self.assertEqual(s.selection_length, 0)
        self.assertFalse(s.is_deprecated)
        self.assertFalse(s.is_potential)
        self.assertEqual(s.return_type, "int")
        self.assertIsNone(s.declaring_type)

    def test_deprecated(self) -> None:
        s = create_local_suggestion(
            _RELEVANCE,
            id=SimpleIdentifier(name="old"),
            is_deprecated=True,
            default_relevance=1059,
            return_type=None,
        )
        assert s
        self.assertEqual(s.relevance, _RELEVANCE.low)
        self.assertTrue(s.is_deprecated)

    def test_declaring_type(self) -> None:
        named = ClassOrMixinDeclaration(name=SimpleIdentifier(name="Widget"))
        unnamed = ClassOrMixinDeclaration(name=None)
        empty = ClassOrMixinDeclaration(name=SimpleIdentifier(name=""))
        for decl, expected in ((named, "Widget"), (unnamed, None), (empty, None)):
            s = create_local_suggestion(
                _RELEVANCE,
                id=SimpleIdentifier(name="x"),
                is_deprecated=False,
                default_relevance=1000,
                return_type=None,
                class_decl=decl,
                kind=CompletionSuggestionKind.IDENTIFIER,
            )
            assert s
            self.assertEqual(s.declaring_type, expected)
            self.assertEqual(s.kind, CompletionSuggestionKind.IDENTIFIER)


class CreateLocalElement(TestCase):
    _SOURCE = Source(full_name="/lib/main.dart")

    def test_absent_identifier(self) -> None:
        e = create_local_element(self._SOURCE, kind=ElementKind.FUNCTION, id=None)
        self.assertEqual(e.name, "")
        self.assertEqual(
            e.location,
            Location(
                file="/lib/main.dart", offset=-1, length=0, start_line=1, start_column=0
            ),
        )
        self.assertEqual(e.flags, frozenset())
        self.assertIsNone(e.return_type)

    def test_private(self) -> None:
        id = SimpleIdentifier(
            name="_hidden",
            offset=10,
            static_element=FunctionElement(name="_hidden", return_type=_INT),
        )
        e = create_local_element(
            self._SOURCE, kind=ElementKind.FUNCTION, id=id, parameters="(int a)"
        )
        self.assertEqual(e.kind, ElementKind.FUNCTION)
        self.assertEqual(e.flags, {ElementFlag.PRIVATE})
        self.assertEqual(
            e.location,
            Location(
                file="/lib/main.dart", offset=10, length=7, start_line=0, start_column=0
            ),
        )
        self.assertEqual(e.parameters, "(int a)")
        self.assertEqual(e.return_type, "int")

    def test_flags(self) -> None:
        e = create_local_element(
            self._SOURCE,
            kind=ElementKind.METHOD,
            id=SimpleIdentifier(name="run"),
            is_abstract=True,
            is_deprecated=True,
        )
        self.assertEqual(e.flags, {ElementFlag.ABSTRACT, ElementFlag.DEPRECATED})
        self.assertEqual(e.return_type, "dynamic")
