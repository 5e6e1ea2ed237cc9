import pytest

from wordcalc import repl
from wordcalc.config import MAX_LINE_LENGTH, ReplConfig, parse_config


def feed_input(monkeypatch: pytest.MonkeyPatch, lines: list[str]) -> None:
    it = iter(lines)

    def fake_input(prompt: str = "") -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr("builtins.input", fake_input)


def test_repl_session(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    feed_input(monkeypatch, ["1 add 2 mul 3", "", "(1 add 2", "5 div 0", "0.1 add 0.2", "1 xor 2", "10 sub 3 sub 2"])
    repl.run(ReplConfig())
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "7"
    assert out[1] == "Parser error: Expected ')'"
    assert out[4] == "Runtime error: Division by zero or near-zero divisor: 5.0 div 0.0"
    assert out[5] == "0.3"
    assert out[6] == "Parser error: Unknown operator: 'xor'"
    assert out[9] == "9"


def test_repl_quit(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    feed_input(monkeypatch, ["2 mul 2", "quit", "3 mul 3"])
    repl.run(ReplConfig())
    assert capsys.readouterr().out.splitlines() == ["4"]


def test_read_line_truncates(monkeypatch: pytest.MonkeyPatch) -> None:
    feed_input(monkeypatch, ["1 add 2" + " " * 200 + "@"])
    assert repl.read_line("> ", MAX_LINE_LENGTH) == ("1 add 2" + " " * 200)[:MAX_LINE_LENGTH]


@pytest.mark.parametrize(
    "value, precision, expected",
    [
        pytest.param(7.0, 15, "7"),
        pytest.param(-2.0, 15, "-2"),
        pytest.param(1 / 3, 15, "0.333333333333333"),
        pytest.param(1 / 3, 4, "0.3333"),
        pytest.param(1e20, 15, "1e+20"),
    ],
)
def test_format_result(value: float, precision: int, expected: str) -> None:
    assert repl.format_result(value, precision) == expected


def test_main_expression(capsys: pytest.CaptureFixture[str]) -> None:
    assert repl.main(["-e", "(1 add 2) mul 3"]) == 0
    assert capsys.readouterr().out == "9\n"

    assert repl.main(["-e", "1 add 2 ) 3"]) == 1
    assert repl.main(["-e", "1 add 2 ) 3", "--lenient"]) == 0
    assert repl.main(["-e", "1 div 0"]) == 1


def test_parse_config() -> None:
    assert parse_config([]) == ReplConfig()
    config = parse_config(["--prompt", "calc> ", "--precision", "6", "--lenient", "-v"])
    assert config == ReplConfig(prompt="calc> ", precision=6, strict=False, verbose=True)
    with pytest.raises(SystemExit):
        parse_config(["--max-line-length", "0"])


def test_main_expression_is_truncated(capsys: pytest.CaptureFixture[str]) -> None:
    nested = "(" * 3000 + "1" + ")" * 3000
    assert repl.main(["-e", nested]) == 1
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "Parser error: Unexpected end of input"
    assert len(out[1]) <= MAX_LINE_LENGTH + len("...")


def test_truncate_line() -> None:
    assert repl.truncate_line("1 add 2", 5) == "1 add"
    assert repl.truncate_line("1 add 2", MAX_LINE_LENGTH) == "1 add 2"


def test_repl_undefined_remainder(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    feed_input(monkeypatch, ["5 mod 0"])
    repl.run(ReplConfig())
    assert capsys.readouterr().out.splitlines()[0] == "Runtime error: 'mod' is undefined for 5.0 and 0.0"
