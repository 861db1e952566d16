"""Test that API functions return typed dataclasses."""

from radixcalc_pkg.api import evaluate, validate_expression
from radixcalc_pkg.calculator import Calculator
from radixcalc_pkg.number import Radix
from radixcalc_pkg.types import EvalResult


class TestAPITypedReturns:
    """Test that all API functions return typed dataclasses."""

    def test_evaluate_returns_eval_result(self):
        """Test that evaluate() returns EvalResult."""
        result = evaluate("2 + 2")
        assert isinstance(result, EvalResult)
        assert result.ok is True
        assert result.result == "4"
        assert result.radix == "dec"

    def test_evaluate_error_returns_eval_result(self):
        """Test that evaluate() errors return EvalResult."""
        result = evaluate("__import__('os')")
        assert isinstance(result, EvalResult)
        assert result.ok is False
        assert result.error is not None
        assert result.error_code == "UNSUPPORTED_TOKEN"

    def test_evaluate_radix(self):
        """Test output radix selection by name and by enum."""
        assert evaluate("0x1F", radix="bin").result == "11111"
        assert evaluate("255", radix=Radix.HEXADECIMAL).result == "FF"
        assert evaluate("1/2", radix="bin").radix == "bin"

    def test_evaluate_invalid_radix(self):
        """Test that an unknown radix is reported, not raised."""
        result = evaluate("1", radix="base7")
        assert result.ok is False
        assert result.error_code == "INVALID_RADIX"

    def test_evaluate_precision(self):
        """Test fractional digit count of the formatted result."""
        assert evaluate("1/3", precision=3).result == "0.333"
        assert evaluate("2/3", precision=2).result == "0.67"
        assert evaluate("1/3").result == "0.333333"

    def test_evaluate_with_calculator_keeps_ans(self):
        """Test that a shared Calculator carries ans across calls."""
        calc = Calculator()
        assert evaluate("6*7", calculator=calc).result == "42"
        assert evaluate("ans() + 1", calculator=calc).result == "43"

    def test_evaluate_without_calculator_is_fresh(self):
        """Test that separate calls share no state."""
        evaluate("6*7")
        result = evaluate("ans()")
        assert result.ok is False
        assert result.error_code == "INVALID_TOKEN"

    def test_validate_expression_returns_tuple(self):
        """Test that validate_expression() returns tuple."""
        is_valid, error = validate_expression("root(2, 64) + 1")
        assert is_valid is True
        assert error is None

    def test_validate_expression_reports_error(self):
        """Test that validate_expression() returns the error message."""
        is_valid, error = validate_expression("(1+2)(3+4)")
        assert is_valid is False
        assert isinstance(error, str)
        assert "Missing operator" in error

    def test_to_dict_omits_missing_fields(self):
        """Test EvalResult serialization."""
        assert evaluate("1+1").to_dict() == {"ok": True, "result": "2", "radix": "dec"}
        failed = evaluate("1/0").to_dict()
        assert failed == {
            "ok": False,
            "error": "Division by zero",
            "error_code": "DIVISION_ZERO",
        }

    def test_repr(self):
        """Test EvalResult repr for success and failure."""
        assert repr(EvalResult(ok=True, result="3")) == "EvalResult(ok=True, result='3')"
        assert "error_code='X'" in repr(EvalResult(ok=False, error="e", error_code="X"))
