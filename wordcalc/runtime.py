import logging
import math
from dataclasses import dataclass
from typing import Optional

from wordcalc.parser import BinaryOp, Expression, Operand, build_expression_tree
from wordcalc.utils import ErrorKind

logger = logging.getLogger(__name__)


@dataclass
class CalcRuntimeError(Exception):
    kind: ErrorKind
    errmsg: str

    def __str__(self) -> str:
        return f"Runtime error: {self.errmsg}"


def is_invalid_result(value: float) -> bool:
    return math.isnan(value)


def evaluate(expression: Optional[Expression]) -> float:
    """Reduce a tree to a number.

    A missing tree evaluates to 0.0; an undefined operation anywhere in the tree
    makes the whole result `INVALID_RESULT`.
    """
    if expression is None:
        return 0.0
    elif isinstance(expression, Operand):
        return expression.value
    elif isinstance(expression, BinaryOp):
        left_res = evaluate(expression.left)
        right_res = evaluate(expression.right)
        if expression.operator.fn is None:
            raise RuntimeError(f"Operator without implementation: {expression.operator}")
        return expression.operator.fn(left_res, right_res)
    else:
        raise RuntimeError(f"Unexpected expression type: {expression}")


def find_undefined_operation(expression: Optional[Expression]) -> Optional[BinaryOp]:
    """Innermost operation whose operands are defined but whose result is not"""
    if not isinstance(expression, BinaryOp):
        return None
    for child in (expression.left, expression.right):
        found = find_undefined_operation(child)
        if found is not None:
            return found
    if is_invalid_result(evaluate(expression)):
        return expression
    return None


def check_result(result: float, expression: Optional[Expression]) -> float:
    """Pass a defined `result` through, otherwise raise for the operation that produced it"""
    if not is_invalid_result(result):
        return result

    undefined = find_undefined_operation(expression)
    if undefined is None:
        raise CalcRuntimeError(ErrorKind.UNDEFINED_RESULT, "Undefined result")
    left_res, right_res = evaluate(undefined.left), evaluate(undefined.right)
    logger.debug("%s undefined for %r and %r", undefined.operator, left_res, right_res)
    if undefined.operator.name == "div":
        raise CalcRuntimeError(
            ErrorKind.DIVISION_BY_NEAR_ZERO, f"Division by zero or near-zero divisor: {left_res!r} div {right_res!r}"
        )
    raise CalcRuntimeError(
        ErrorKind.UNDEFINED_RESULT, f"'{undefined.operator}' is undefined for {left_res!r} and {right_res!r}"
    )


def calculate(code: str, strict: bool = True) -> float:
    """Parse and evaluate one line, raising instead of returning `INVALID_RESULT`"""
    tree = build_expression_tree(code, strict=strict)
    return check_result(evaluate(tree), tree)
