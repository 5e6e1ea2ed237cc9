import logging
from dataclasses import dataclass

from wordcalc.lexer import consume_while, find_closing_paren, is_alpha, is_digit, is_space, peek, skip_whitespace
from wordcalc.operators import UNKNOWN_OPERATOR, Operator, lookup
from wordcalc.utils import ErrorKind, point_at

logger = logging.getLogger(__name__)


@dataclass
class ParseError(Exception):
    kind: ErrorKind
    errmsg: str
    code: str
    error_char_idx: int

    def __str__(self) -> str:
        return "\n".join([f"Parser error: {self.errmsg}", *point_at(self.code, self.error_char_idx)])


@dataclass(frozen=True)
class Operand:
    value: float

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class BinaryOp:
    operator: Operator
    left: "Expression"
    right: "Expression"

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


Expression = Operand | BinaryOp


def build_expression_tree(code: str, strict: bool = True) -> Expression:
    """Parse a whole line into an expression tree.

    With `strict` set, anything but whitespace left after the expression is an
    error; otherwise the trailing text is ignored.
    """
    tree, i = parse_expression(code, 0, min_precedence=0)
    rest_idx = skip_whitespace(code, i)
    if rest_idx < len(code):
        if not strict:
            logger.debug("Ignoring unparsed input %r", code[rest_idx:])
        elif code[rest_idx] == ")":
            raise ParseError(
                ErrorKind.UNBALANCED_PARENTHESES, "Unmatched ')'", code=code, error_char_idx=rest_idx
            )
        else:
            raise ParseError(
                ErrorKind.UNEXPECTED_CHARACTER,
                f"Unexpected character: {code[rest_idx]!r}",
                code=code,
                error_char_idx=rest_idx,
            )
    logger.debug("Built expression tree %s", tree)
    return tree


def parse_expression(code: str, i: int, min_precedence: int) -> tuple[Expression, int]:
    """Precedence climbing over `factor (operator expression)*`.

    The right-hand side is parsed with the operator's own precedence as the
    floor, and only operators binding less tightly than the floor stop the
    climb, so operators of equal precedence group to the right:
    `10 sub 3 sub 2` is `10 sub (3 sub 2)`.
    """
    left, i = parse_factor(code, i)
    while i < len(code):
        i = skip_whitespace(code, i)
        saved_idx = i
        operator, i = parse_operator(code, i)
        if operator is UNKNOWN_OPERATOR:
            if i > saved_idx:
                raise ParseError(
                    ErrorKind.UNKNOWN_OPERATOR,
                    f"Unknown operator: {code[saved_idx:i]!r}",
                    code=code,
                    error_char_idx=saved_idx,
                )
            # end of input, ')' or some other non-operator: the caller decides
            i = saved_idx
            break
        if operator.precedence < min_precedence:
            i = saved_idx
            break
        right, i = parse_expression(code, i, min_precedence=operator.precedence)
        left = BinaryOp(operator=operator, left=left, right=right)
    return left, i


def parse_factor(code: str, i: int) -> tuple[Expression, int]:
    i = skip_whitespace(code, i)
    ch = peek(code, i)
    if ch == "(":
        logger.debug("Opening parenthesis at %d", i)
        inner, j = parse_expression(code, i + 1, min_precedence=0)
        j = skip_whitespace(code, j)
        if peek(code, j) != ")":
            raise ParseError(ErrorKind.UNBALANCED_PARENTHESES, "Expected ')'", code=code, error_char_idx=j)
        logger.debug("Closing parenthesis at %d", j)
        return inner, j + 1
    elif is_digit(ch) or ch == "-":
        return parse_operand(code, i)
    else:
        errmsg = f"Unexpected character: {ch!r}" if ch else "Unexpected end of input"
        raise ParseError(ErrorKind.UNEXPECTED_CHARACTER, errmsg, code=code, error_char_idx=i)


def parse_operand(code: str, i: int) -> tuple[Operand, int]:
    """Read `[-]digits[.digits]` starting at `i`.

    Extra decimal points are skipped, so `1.2.3` reads as 1.23, and a trailing
    point is allowed.
    """
    sign = 1.0
    if peek(code, i) == "-":
        sign = -1.0
        i += 1

    int_end_idx = consume_while(code, i, is_digit)
    if int_end_idx == i:
        raise ParseError(ErrorKind.MALFORMED_LITERAL, "Digit expected", code=code, error_char_idx=i)
    int_digits = code[i:int_end_idx]
    i = int_end_idx

    frac_digits: list[str] = []
    if peek(code, i) == ".":
        i += 1
        while is_digit(peek(code, i)) or peek(code, i) == ".":
            if code[i] != ".":
                frac_digits.append(code[i])
            i += 1

    value = sign * float(f"{int_digits}.{''.join(frac_digits) or '0'}")

    next_ch = peek(code, i)
    if next_ch == "(" and find_closing_paren(code, i) is None:
        raise ParseError(ErrorKind.UNBALANCED_PARENTHESES, "Unclosed '('", code=code, error_char_idx=i)
    if next_ch and not (is_space(next_ch) or next_ch == ")" or is_alpha(next_ch)):
        raise ParseError(
            ErrorKind.MALFORMED_LITERAL,
            f"Invalid character after number: {next_ch!r}",
            code=code,
            error_char_idx=i,
        )

    logger.debug("Parsed operand %r", value)
    return Operand(value), i


def parse_operator(code: str, i: int) -> tuple[Operator, int]:
    """Read an operator word after optional whitespace.

    Returns `UNKNOWN_OPERATOR` both for a word missing from the registry (the
    returned index is past the word) and for a non-letter (the returned index
    points at it, nothing consumed).
    """
    i = skip_whitespace(code, i)
    if not is_alpha(peek(code, i)):
        return UNKNOWN_OPERATOR, i

    word_end_idx = consume_while(code, i, is_alpha)
    name = code[i:word_end_idx]
    operator = lookup(name)
    if operator is UNKNOWN_OPERATOR:
        logger.debug("No operator named %r", name)
    else:
        logger.debug("Parsed operator %s", operator)
    return operator, word_end_idx
