"""Tests for transform functions.

Tests cover:
- Result: present/absent semantics
- FunctionRegistry: registration, freeze, lookup
- Built-in functions: every registered function
"""

import math
from decimal import Decimal

import pytest

from transmute.functions import (
    ABSENT,
    FunctionCategory,
    FunctionDefinition,
    FunctionRegistry,
    RegistryFrozenError,
    Result,
    default_registry,
    register_all_builtins,
)
from transmute.functions.numbers import INT32_MAX, INT32_MIN, INT64_MIN, is_numeric
from transmute.functions.text import to_text


BUILTIN_NAMES = [
    "noop",
    "isPresent",
    "notNull",
    "isNull",
    "toLower",
    "toUpper",
    "concat",
    "min",
    "max",
    "abs",
    "toInteger",
    "toDouble",
    "toLong",
]


@pytest.fixture
def registry():
    return register_all_builtins(FunctionRegistry())


def call(registry, name, *args):
    return registry.get(name).apply(*args)


# =============================================================================
# Result Tests
# =============================================================================


class TestResult:
    def test_present_value(self):
        result = Result.of("x")
        assert result.is_present
        assert not result.is_absent
        assert result.value == "x"

    def test_present_none_is_not_absent(self):
        result = Result.of(None)
        assert result.is_present
        assert result.value is None
        assert result != ABSENT

    def test_empty_is_shared_absent(self):
        assert Result.empty() is ABSENT
        assert ABSENT.is_absent

    def test_absent_value_raises(self):
        with pytest.raises(ValueError):
            ABSENT.value

    def test_get_or(self):
        assert ABSENT.get_or("fallback") == "fallback"
        assert Result.of(None).get_or("fallback") is None

    def test_repr(self):
        assert repr(ABSENT) == "Result.empty()"
        assert repr(Result.of(1)) == "Result.of(1)"


# =============================================================================
# Registry Tests
# =============================================================================


class TestFunctionRegistry:
    def test_all_builtins_registered(self, registry):
        assert sorted(f.name for f in registry.list_all()) == sorted(BUILTIN_NAMES)
        assert len(registry) == 13

    def test_lookup_is_case_sensitive(self, registry):
        assert registry.lookup("abs") is not None
        assert registry.lookup("ABS") is None
        assert registry.lookup("toupper") is None

    def test_get_unknown_raises(self, registry):
        with pytest.raises(ValueError) as exc_info:
            registry.get("missing")
        assert "missing" in str(exc_info.value)

    def test_register_after_freeze_raises(self, registry):
        registry.freeze()
        assert registry.frozen
        with pytest.raises(RegistryFrozenError):
            registry.register(
                FunctionDefinition(
                    name="double",
                    description="",
                    category=FunctionCategory.MATH,
                    parameters=(),
                    return_type="number",
                    implementation=lambda *args: Result.of(args[0] * 2),
                )
            )
        assert "double" not in registry

    def test_custom_function_before_freeze(self):
        registry = FunctionRegistry()
        registry.register(
            FunctionDefinition(
                name="first",
                description="First argument",
                category=FunctionCategory.EXISTENCE,
                parameters=(),
                return_type="any",
                implementation=lambda *args: Result.of(args[0]) if args else ABSENT,
            )
        )
        registry.freeze()
        assert registry.get("first").apply(5, 6) == Result.of(5)
        assert registry.get("first").apply() is ABSENT

    def test_list_by_category(self, registry):
        names = {f.name for f in registry.list_by_category(FunctionCategory.CONVERSION)}
        assert names == {"toInteger", "toDouble", "toLong"}

    def test_export_documentation(self, registry):
        docs = registry.export_documentation()
        assert set(docs["functions"]) == set(BUILTIN_NAMES)
        assert docs["functions"]["concat"]["parameters"][0]["variadic"] is True
        assert "abs" in docs["byCategory"]["math"]

    def test_default_registry_is_shared_and_frozen(self):
        assert default_registry() is default_registry()
        assert default_registry().frozen


# =============================================================================
# Existence Functions
# =============================================================================


class TestExistenceFunctions:
    @pytest.mark.parametrize("name", BUILTIN_NAMES)
    def test_no_arguments_is_absent(self, registry, name):
        assert call(registry, name) is ABSENT

    @pytest.mark.parametrize("args", [(), (None,), ("x",), (1, 2, 3), ({"a": 1},)])
    def test_noop_always_absent(self, registry, args):
        assert call(registry, "noop", *args) is ABSENT

    def test_is_present(self, registry):
        assert call(registry, "isPresent", None) == Result.of(None)
        assert call(registry, "isPresent", "x", "y") == Result.of("x")

    def test_not_null(self, registry):
        assert call(registry, "notNull", None) is ABSENT
        assert call(registry, "notNull", "x") == Result.of("x")
        assert call(registry, "notNull", False) == Result.of(False)

    def test_is_null(self, registry):
        assert call(registry, "isNull", None) == Result.of(None)
        assert call(registry, "isNull", "x") is ABSENT
        assert call(registry, "isNull", 0) is ABSENT


# =============================================================================
# String Functions
# =============================================================================


class TestStringFunctions:
    def test_to_lower(self, registry):
        assert call(registry, "toLower", "HeLLo") == Result.of("hello")
        assert call(registry, "toLower", "ABC", "IGNORED") == Result.of("abc")

    def test_to_upper(self, registry):
        assert call(registry, "toUpper", "us") == Result.of("US")

    def test_case_functions_use_string_form(self, registry):
        assert call(registry, "toUpper", True).value == "TRUE"
        assert call(registry, "toLower", 1.5).value == "1.5"

    def test_case_functions_absent_for_null(self, registry):
        assert call(registry, "toLower", None) is ABSENT
        assert call(registry, "toUpper", None) is ABSENT

    def test_concat(self, registry):
        assert call(registry, "concat", "a", 1, True) == Result.of("a1true")

    def test_concat_renders_null(self, registry):
        assert call(registry, "concat", "a", None) == Result.of("anull")

    def test_concat_single_argument(self, registry):
        assert call(registry, "concat", 2.5).value == "2.5"

    def test_to_text_containers(self):
        assert to_text([1, "a"]) == '[1,"a"]'
        assert to_text({"k": None}) == '{"k":null}'
        assert to_text(False) == "false"


# =============================================================================
# Math Functions
# =============================================================================


class TestMathFunctions:
    def test_min_skips_non_numeric(self, registry):
        assert call(registry, "min", "a", 3, "b", 1) == Result.of(1)

    def test_max_skips_non_numeric(self, registry):
        assert call(registry, "max", "a", 3, "b", 1) == Result.of(3)

    def test_min_max_keep_type(self, registry):
        assert isinstance(call(registry, "min", 2.5, 4).value, float)
        assert isinstance(call(registry, "max", 2.5, 4).value, int)

    def test_min_max_absent_without_numbers(self, registry):
        assert call(registry, "min", "1", None, True) is ABSENT
        assert call(registry, "max", "x") is ABSENT

    def test_booleans_are_not_numbers(self, registry):
        assert call(registry, "min", True, 5) == Result.of(5)
        assert not is_numeric(True)

    def test_nan_is_skipped(self, registry):
        assert call(registry, "max", float("nan"), 2) == Result.of(2)

    def test_decimal_arguments(self, registry):
        assert call(registry, "min", Decimal("1.5"), 2).value == Decimal("1.5")

    def test_abs(self, registry):
        assert call(registry, "abs", -1.0) == Result.of(1.0)
        result = call(registry, "abs", -3)
        assert result.value == 3 and isinstance(result.value, int)
        assert call(registry, "abs", Decimal("-2.5")).value == Decimal("2.5")

    def test_abs_absent_for_non_numeric(self, registry):
        assert call(registry, "abs", "xyz") is ABSENT
        assert call(registry, "abs", "1.0") is ABSENT
        assert call(registry, "abs", None) is ABSENT
        assert call(registry, "abs", "x", -1) is ABSENT

    def test_abs_decimal_is_exact(self, registry):
        value = Decimal("-1.2345678901234567890123456789012345")
        result = call(registry, "abs", value)
        assert result.value == Decimal("1.2345678901234567890123456789012345")
        assert str(result.value) == "1.2345678901234567890123456789012345"

    def test_abs_non_finite_decimals(self, registry):
        assert call(registry, "abs", Decimal("-Infinity")).value == Decimal("Infinity")
        assert call(registry, "abs", Decimal("NaN")).value.is_qnan()
        assert call(registry, "abs", Decimal("sNaN")) is ABSENT

    def test_min_max_skip_decimal_nans(self, registry):
        assert call(registry, "min", Decimal("sNaN"), Decimal("NaN"), 4) == Result.of(4)
        assert call(registry, "max", Decimal("sNaN")) is ABSENT


# =============================================================================
# Conversion Functions
# =============================================================================


class TestConversionFunctions:
    def test_to_integer_truncates(self, registry):
        assert call(registry, "toInteger", 1.9).value == 1
        assert call(registry, "toInteger", -1.9).value == -1
        assert call(registry, "toInteger", Decimal("7.8")).value == 7

    def test_to_integer_wraps_integers(self, registry):
        assert call(registry, "toInteger", 2**31).value == INT32_MIN
        assert call(registry, "toInteger", 2**32 + 5).value == 5

    def test_to_integer_saturates_floats(self, registry):
        assert call(registry, "toInteger", 1e20).value == INT32_MAX
        assert call(registry, "toInteger", -1e20).value == INT32_MIN
        assert call(registry, "toInteger", float("nan")).value == 0

    def test_to_long(self, registry):
        assert call(registry, "toLong", 3.99).value == 3
        assert call(registry, "toLong", 2**63).value == INT64_MIN
        assert call(registry, "toLong", 2**40).value == 2**40

    def test_to_double(self, registry):
        result = call(registry, "toDouble", 3)
        assert result.value == 3.0 and isinstance(result.value, float)
        assert call(registry, "toDouble", Decimal("0.5")).value == 0.5

    def test_to_double_overflow_is_infinite(self, registry):
        assert call(registry, "toDouble", 10**400).value == math.inf
        assert call(registry, "toDouble", -(10**400)).value == -math.inf

    @pytest.mark.parametrize("name", ["toInteger", "toDouble", "toLong"])
    @pytest.mark.parametrize("value", ["12", None, True, [1], {"n": 1}])
    def test_conversions_absent_for_non_numeric(self, registry, name, value):
        assert call(registry, name, value) is ABSENT

    @pytest.mark.parametrize("name", ["toInteger", "toLong"])
    @pytest.mark.parametrize("value", ["NaN", "sNaN", "Infinity", "-Infinity"])
    def test_integer_conversions_absent_for_non_finite_decimals(self, registry, name, value):
        assert call(registry, name, Decimal(value)) is ABSENT

    def test_to_double_non_finite_decimals(self, registry):
        assert math.isnan(call(registry, "toDouble", Decimal("NaN")).value)
        assert call(registry, "toDouble", Decimal("-Infinity")).value == -math.inf
        assert call(registry, "toDouble", Decimal("sNaN")) is ABSENT

    def test_huge_exponent_decimals(self, registry):
        huge = Decimal("1e99999999")
        assert call(registry, "toInteger", huge).value == 0
        assert call(registry, "toLong", Decimal("-1e99999999")).value == 0
        assert call(registry, "toDouble", huge).value == math.inf
        assert call(registry, "toInteger", Decimal("1e-99999999")).value == 0

    def test_decimal_integer_wrapping(self, registry):
        assert call(registry, "toInteger", Decimal("5e9")).value == 5 * 10**9 - 2**32
        assert call(registry, "toInteger", Decimal("-3E+2")).value == -300
        expected = ((10**40 + 2**63) % 2**64) - 2**63
        assert call(registry, "toLong", Decimal("1e40")).value == expected


# =============================================================================
# Unusual Inputs
# =============================================================================


ODD_VALUES = [
    Decimal("sNaN"),
    Decimal("NaN"),
    Decimal("-Infinity"),
    Decimal("1e99999999"),
    float("inf"),
    float("nan"),
    {"a": [1, {"b": None}]},
    [[1, [2]], []],
    object(),
]


class TestUnusualInputs:
    @pytest.mark.parametrize("name", BUILTIN_NAMES)
    @pytest.mark.parametrize("value", ODD_VALUES)
    def test_never_raises(self, registry, name, value):
        assert isinstance(call(registry, name, value), Result)
        assert isinstance(call(registry, name, value, 1, "x"), Result)
        assert isinstance(call(registry, name, "x", value, None), Result)
