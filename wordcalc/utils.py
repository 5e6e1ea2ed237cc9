import enum


class PrintableEnum(enum.Enum):
    def __str__(self) -> str:
        return self.name

    __repr__ = __str__


class ErrorKind(PrintableEnum):
    UNKNOWN_OPERATOR = enum.auto()
    MALFORMED_LITERAL = enum.auto()
    UNBALANCED_PARENTHESES = enum.auto()
    UNEXPECTED_CHARACTER = enum.auto()
    DIVISION_BY_NEAR_ZERO = enum.auto()
    UNDEFINED_RESULT = enum.auto()


def point_at(code: str, idx: int, context: int = 20) -> list[str]:
    """Excerpt of `code` around `idx` and a caret line marking `idx` under it"""
    start = max(0, idx - context)
    end = min(len(code), idx + context)
    prefix = "..." if start > 0 else ""
    suffix = "..." if end < len(code) else ""
    return [prefix + code[start:end] + suffix, " " * (len(prefix) + idx - start) + "^"]
