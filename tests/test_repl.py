import io

import pytest

from lispy.__main__ import main
from lispy.repl import BANNER, PROMPT, Repl


def _feed(lines):
    """input() replacement that serves `lines` and then signals EOF."""
    it = iter(lines)
    prompts = []

    def _input(prompt):
        prompts.append(prompt)
        try:
            return next(it)
        except StopIteration:
            raise EOFError
    return _input, prompts


@pytest.fixture
def streams():
    return io.StringIO(), io.StringIO()


def test_repl_session(interp, streams):
    out, err = streams
    input_fn, prompts = _feed(["(+ 1 2)", "", "(/ 10 0)", "(+ 1", "{+ 1 2}"])
    Repl(interp, out=out, err=err).run(input_fn)
    assert out.getvalue() == BANNER + "\n" + "3\nError: Division By Zero\n{+ 1 2}\n\n"
    assert err.getvalue() == "<stdin>:1:5: error: expected ')' at end of input\n"
    assert prompts == [PROMPT] * 6


def test_repl_stops_on_ctrl_c(interp, streams):
    out, err = streams

    def _input(prompt):
        raise KeyboardInterrupt

    Repl(interp, out=out, err=err).run(_input)
    assert out.getvalue().endswith("\n\n")


def test_repl_history_round_trip(interp, streams, tmp_path):
    pytest.importorskip("readline")
    out, err = streams
    history = tmp_path / "history"
    input_fn, _ = _feed(["(+ 1 2)"])
    Repl(interp, out=out, err=err).run(input_fn, history=history)
    assert history.exists()


def test_show_ast(interp, streams):
    out, err = streams
    assert Repl(interp, show_ast=True, out=out, err=err).eval_line("5")
    assert out.getvalue() == (
        "> \n"
        "  regex:1:1 ''\n"
        "  expr|number|regex:1:1 '5'\n"
        "  regex:1:2 ''\n"
        "5\n"
    )


def test_run_file_reports_line_numbers(interp, streams, tmp_path):
    out, err = streams
    program = tmp_path / "prog.lspy"
    program.write_text("(+ 1 2)\n\n(* 2 (- 5))\n(+ 1 x)\n")
    failures = Repl(interp, out=out, err=err).run_file(program)
    assert failures == 1
    assert out.getvalue() == "3\n-10\n"
    assert err.getvalue() == f"{program}:4:6: error: unexpected character 'x'\n"


def test_color_output(interp, streams):
    out, err = streams
    Repl(interp, color=True, out=out, err=err).eval_line("(+ 1 2)")
    assert out.getvalue() == "\033[94m3\033[0m\n"

# -------------------------------
# Command line
# -------------------------------

def test_main_eval(capsys):
    assert main(["-e", "(+ 1 (* 2 3))"]) == 0
    assert capsys.readouterr().out == "7\n"


def test_main_eval_syntax_error(capsys):
    assert main(["-e", "(+ 1 2"]) == 1
    assert "error: expected ')'" in capsys.readouterr().err


def test_main_overflow_flag(capsys):
    assert main(["--overflow", "wrap", "-e", "(+ 9223372036854775807 1)"]) == 0
    assert capsys.readouterr().out == "-9223372036854775808\n"


def test_main_file(capsys, tmp_path):
    program = tmp_path / "prog.lspy"
    program.write_text("(- 5)\n()\n")
    assert main([str(program)]) == 0
    assert capsys.readouterr().out == "-5\n()\n"


def test_main_missing_file(tmp_path):
    with pytest.raises(SystemExit) as exc_info:
        main([str(tmp_path / "nope.lspy")])
    assert exc_info.value.code == 2


def test_main_bad_configuration(monkeypatch):
    monkeypatch.setenv("LISPY_OVERFLOW", "explode")
    with pytest.raises(SystemExit) as exc_info:
        main(["-e", "1"])
    assert exc_info.value.code == 2
