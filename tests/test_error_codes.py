"""Test failure codes returned for each error category."""

import unittest

from kalkmem_pkg.session import interpret
from kalkmem_pkg.types import CalcState, FailureKind, OpResult


class TestErrorCodes(unittest.TestCase):
    """Test that each failure category carries its code and a message."""

    def setUp(self):
        self.state = CalcState(current=5.0, memory=3.0)

    def assertFailure(self, line, code):
        result = interpret(self.state, line)
        self.assertFalse(result.ok)
        self.assertIs(result.code, code, f"Expected {code}, got {result.code}")
        self.assertTrue(result.error, "Failure should carry a message")
        self.assertEqual(result.state, self.state, "Failed command must not mutate state")
        return result

    def test_parse_error_code(self):
        result = self.assertFailure("* 2..5", FailureKind.PARSE_ERROR)
        self.assertIn("2..5", result.error)

    def test_missing_argument_code(self):
        self.assertFailure("/", FailureKind.MISSING_ARGUMENT)

    def test_divide_by_zero_codes(self):
        self.assertFailure("/ 0", FailureKind.DIVIDE_BY_ZERO)
        self.assertFailure("% 0,0", FailureKind.DIVIDE_BY_ZERO)

    def test_reciprocal_of_zero_code(self):
        self.state = CalcState(current=0.0, memory=3.0)
        self.assertFailure("1/x", FailureKind.DIVIDE_BY_ZERO)

    def test_domain_error_code(self):
        self.state = CalcState(current=-4.0, memory=3.0)
        self.assertFailure("√", FailureKind.DOMAIN_ERROR)

    def test_overflow_code(self):
        self.state = CalcState(current=1e200, memory=3.0)
        result = self.assertFailure("x^2", FailureKind.OVERFLOW)
        self.assertIn("overflow", result.error.lower())

    def test_unknown_command_code(self):
        self.assertFailure("foo", FailureKind.UNKNOWN_COMMAND)

    def test_to_dict_includes_code(self):
        result = interpret(self.state, "/ 0")
        data = result.to_dict()
        self.assertEqual(data["ok"], False)
        self.assertEqual(data["code"], "DIVIDE_BY_ZERO")
        self.assertEqual(data["current"], 5.0)
        self.assertEqual(data["memory"], 3.0)

    def test_success_to_dict_has_no_error(self):
        data = OpResult.success(self.state).to_dict()
        self.assertEqual(data, {"ok": True, "current": 5.0, "memory": 3.0})

    def test_repr(self):
        self.assertIn("DIVIDE_BY_ZERO", repr(interpret(self.state, "/ 0")))
        self.assertIn("current=5.0", repr(OpResult.success(self.state)))


if __name__ == "__main__":
    unittest.main()
