"""Arithmetic engine: register operations over an immutable CalcState.

Every operation takes the current state and an optional argument and returns
an OpResult. Failed operations hand back the state they were given, so a
rejected command can never leave a register half-updated or non-finite.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable

import numpy as np

from .logging_config import get_logger
from .types import CalcState, FailureKind, OpResult

logger = get_logger("engine")

OperationImpl = Callable[[CalcState, "float | None"], OpResult]


@dataclass(frozen=True)
class Operation:
    name: str
    fn: OperationImpl
    requires_arg: bool


# keyword (lowercase) -> operation; aliases share one Operation
OPERATIONS: dict[str, Operation] = dict()


def register_operation(name: str, *keywords: str, requires_arg: bool = False):
    def decorator(fn: OperationImpl) -> OperationImpl:
        operation = Operation(name=name, fn=fn, requires_arg=requires_arg)
        for keyword in keywords:
            OPERATIONS[keyword] = operation
        return fn

    return decorator


MISSING_ARGUMENT_MESSAGE = "This operation requires a numeric argument."
OVERFLOW_MESSAGE = "Overflow: the result is too large to represent."


def _compute(fn: Callable[..., np.float64], *operands: float) -> float | None:
    """Apply a numpy ufunc in float64, returning None if the result is not finite."""
    try:
        with np.errstate(over="raise", divide="raise", invalid="raise"):
            value = fn(*(np.float64(x) for x in operands))
    except FloatingPointError as e:
        logger.debug("Floating point error in %s%r: %s", fn.__name__, operands, e)
        return None
    if not np.isfinite(value):
        return None
    return float(value)


def _fail(state: CalcState, name: str, code: FailureKind, error: str) -> OpResult:
    logger.debug("Rejected %s on %r: %s", name, state, code)
    return OpResult.failure(state, code, error)


def _with_current(state: CalcState, name: str, fn: Callable[..., np.float64], *operands: float) -> OpResult:
    value = _compute(fn, *operands)
    if value is None:
        return _fail(state, name, FailureKind.OVERFLOW, OVERFLOW_MESSAGE)
    return OpResult.success(replace(state, current=value))


def _with_memory(state: CalcState, name: str, fn: Callable[..., np.float64], *operands: float) -> OpResult:
    value = _compute(fn, *operands)
    if value is None:
        return _fail(state, name, FailureKind.OVERFLOW, OVERFLOW_MESSAGE)
    return OpResult.success(replace(state, memory=value))


def enter_value(state: CalcState, value: float) -> OpResult:
    """Overwrite the current register with an already-parsed value."""
    return OpResult.success(replace(state, current=float(value)))


@register_operation("add", "+", requires_arg=True)
def add(state: CalcState, arg: float) -> OpResult:
    return _with_current(state, "add", np.add, state.current, arg)


@register_operation("subtract", "-", requires_arg=True)
def subtract(state: CalcState, arg: float) -> OpResult:
    return _with_current(state, "subtract", np.subtract, state.current, arg)


@register_operation("multiply", "*", "x", requires_arg=True)
def multiply(state: CalcState, arg: float) -> OpResult:
    return _with_current(state, "multiply", np.multiply, state.current, arg)


@register_operation("divide", "/", "÷", requires_arg=True)
def divide(state: CalcState, arg: float) -> OpResult:
    if arg == 0:
        return _fail(state, "divide", FailureKind.DIVIDE_BY_ZERO, "Division by zero.")
    return _with_current(state, "divide", np.divide, state.current, arg)


@register_operation("modulo", "%", requires_arg=True)
def modulo(state: CalcState, arg: float) -> OpResult:
    """Floating remainder whose sign follows the dividend (C fmod, not Python's %)."""
    if arg == 0:
        return _fail(
            state, "modulo", FailureKind.DIVIDE_BY_ZERO, "Remainder modulo 0 is undefined."
        )
    return _with_current(state, "modulo", np.fmod, state.current, arg)


@register_operation("reciprocal", "inv", "1/x")
def reciprocal(state: CalcState, arg: float | None = None) -> OpResult:
    if state.current == 0:
        return _fail(state, "reciprocal", FailureKind.DIVIDE_BY_ZERO, "1/0 is undefined.")
    return _with_current(state, "reciprocal", np.reciprocal, state.current)


@register_operation("square", "sq", "x^2")
def square(state: CalcState, arg: float | None = None) -> OpResult:
    return _with_current(state, "square", np.square, state.current)


@register_operation("square-root", "sqrt", "√")
def square_root(state: CalcState, arg: float | None = None) -> OpResult:
    if state.current < 0:
        return _fail(
            state,
            "square-root",
            FailureKind.DOMAIN_ERROR,
            "Square root of a negative number is not defined for real numbers.",
        )
    return _with_current(state, "square-root", np.sqrt, state.current)


@register_operation("memory-add", "m+", "mplus")
def memory_add(state: CalcState, arg: float | None = None) -> OpResult:
    return _with_memory(state, "memory-add", np.add, state.memory, state.current)


@register_operation("memory-subtract", "m-", "mminus")
def memory_subtract(state: CalcState, arg: float | None = None) -> OpResult:
    return _with_memory(state, "memory-subtract", np.subtract, state.memory, state.current)


@register_operation("memory-recall", "mr", "memory")
def memory_recall(state: CalcState, arg: float | None = None) -> OpResult:
    return OpResult.success(replace(state, current=state.memory))


@register_operation("clear-current", "c")
def clear_current(state: CalcState, arg: float | None = None) -> OpResult:
    return OpResult.success(replace(state, current=0.0))


@register_operation("clear-all", "ac")
def clear_all(state: CalcState, arg: float | None = None) -> OpResult:
    return OpResult.success(CalcState())


def dispatch(state: CalcState, keyword: str, arg: float | None = None) -> OpResult:
    """Run the operation registered under keyword.

    Args:
        state: State to operate on
        keyword: Lowercase command keyword or alias (e.g. "+", "sqrt", "m+")
        arg: Parsed numeric argument, or None if the command had none

    Returns:
        OpResult with the new state, or a failure carrying the unchanged state
    """
    operation = OPERATIONS.get(keyword)
    if operation is None:
        return OpResult.failure(
            state,
            FailureKind.UNKNOWN_COMMAND,
            "Unknown command. Type 'help' for the list of commands.",
        )
    if operation.requires_arg and arg is None:
        return _fail(state, operation.name, FailureKind.MISSING_ARGUMENT, MISSING_ARGUMENT_MESSAGE)
    if not operation.requires_arg and arg is not None:
        logger.debug("Ignoring argument %r for %s", arg, operation.name)
    return operation.fn(state, arg)
