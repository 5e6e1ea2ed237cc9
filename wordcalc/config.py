import argparse
from dataclasses import dataclass
from typing import Optional, Sequence

from wordcalc import __version__
from wordcalc.operators import operator_names

MAX_LINE_LENGTH = 99


@dataclass
class ReplConfig:
    prompt: str = "> "
    max_line_length: int = MAX_LINE_LENGTH
    precision: int = 15
    strict: bool = True
    verbose: bool = False
    expression: Optional[str] = None


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wordcalc",
        description="Evaluate arithmetic written with word operators: " + ", ".join(operator_names()),
    )
    parser.add_argument("-e", "--expression", help="evaluate a single expression and exit")
    parser.add_argument("--prompt", default=ReplConfig.prompt, help="interactive prompt (default: %(default)r)")
    parser.add_argument(
        "--max-line-length",
        type=int,
        default=MAX_LINE_LENGTH,
        help="input lines are truncated to this many characters (default: %(default)s)",
    )
    parser.add_argument(
        "--precision", type=int, default=ReplConfig.precision, help="significant digits printed (default: %(default)s)"
    )
    parser.add_argument("--lenient", action="store_true", help="ignore unparsed text after an expression")
    parser.add_argument("-v", "--verbose", action="store_true", help="log parsing steps")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def parse_config(argv: Optional[Sequence[str]] = None) -> ReplConfig:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    if args.max_line_length <= 0:
        parser.error(f"--max-line-length must be positive, got {args.max_line_length}")
    if args.precision <= 0:
        parser.error(f"--precision must be positive, got {args.precision}")
    return ReplConfig(
        prompt=args.prompt,
        max_line_length=args.max_line_length,
        precision=args.precision,
        strict=not args.lenient,
        verbose=args.verbose,
        expression=args.expression,
    )
