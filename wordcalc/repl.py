import logging
from typing import Optional, Sequence

from wordcalc.config import ReplConfig, parse_config
from wordcalc.parser import ParseError, build_expression_tree
from wordcalc.runtime import CalcRuntimeError, calculate, check_result, evaluate

logger = logging.getLogger(__name__)

QUIT_COMMANDS = {"quit", "exit"}


def truncate_line(line: str, max_line_length: int) -> str:
    if len(line) > max_line_length:
        logger.warning("Input truncated to %d characters", max_line_length)
        line = line[:max_line_length]
    return line


def read_line(prompt: str, max_line_length: int) -> str:
    return truncate_line(input(prompt).rstrip("\r\n"), max_line_length)


def format_result(value: float, precision: int) -> str:
    return f"{value:.{precision}g}"


def run(config: ReplConfig) -> None:
    while True:
        try:
            code = read_line(config.prompt, config.max_line_length)
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print()
            continue

        if not code.strip():
            continue
        if code.strip() in QUIT_COMMANDS:
            break

        try:
            tree = build_expression_tree(code, strict=config.strict)
        except ParseError as e:
            print(e)
            continue

        try:
            result = check_result(evaluate(tree), tree)
        except CalcRuntimeError as e:
            print(e)
            continue

        print(format_result(result, config.precision))


def main(argv: Optional[Sequence[str]] = None) -> int:
    config = parse_config(argv)
    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if config.expression is not None:
        code = truncate_line(config.expression, config.max_line_length)
        try:
            result = calculate(code, strict=config.strict)
        except (ParseError, CalcRuntimeError) as e:
            print(e)
            return 1
        print(format_result(result, config.precision))
        return 0

    run(config)
    return 0
