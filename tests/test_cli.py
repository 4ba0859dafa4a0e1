import io

import pytest

from simplex.__main__ import main


class TtyStringIO(io.StringIO):
    """In-memory stream that reports itself as an interactive terminal."""

    def isatty(self):
        return True


def _run(argv, stdin=""):
    stdin = stdin if isinstance(stdin, io.StringIO) else io.StringIO(stdin)
    stdout, stderr = io.StringIO(), io.StringIO()
    code = main(argv, stdin=stdin, stdout=stdout, stderr=stderr)
    return code, stdout.getvalue(), stderr.getvalue()


def test_runs_files_in_order(tmp_path):
    first = tmp_path / "first.smp"
    second = tmp_path / "second.smp"
    first.write_text("(print 'one' endl)", encoding="utf-8")
    second.write_text("(print (length (list 1 2)) endl)", encoding="utf-8")
    code, out, err = _run([str(first), str(second)])
    assert code == 0
    assert out == "one\n2\n"
    assert err == ""


def test_each_file_gets_a_fresh_interpreter(tmp_path):
    first = tmp_path / "first.smp"
    second = tmp_path / "second.smp"
    first.write_text("(let x 1)", encoding="utf-8")
    second.write_text("(print x)", encoding="utf-8")
    code, _, err = _run([str(first), str(second)])
    assert code == 1
    assert "undeclared identifier: x" in err


def test_first_error_aborts_the_batch(tmp_path):
    bad = tmp_path / "bad.smp"
    never = tmp_path / "never.smp"
    bad.write_text("(let f (lambda x (car x)))\n(f 1)", encoding="utf-8")
    never.write_text("(print 'ran')", encoding="utf-8")
    code, out, err = _run([str(bad), str(never)])
    assert code == 1
    assert out == ""
    assert "Unhandled exception!" in err
    assert f"frame #1: <lambda x> at {bad}:2" in err
    assert "type mismatch error: expected Cons, found Integer" in err


def test_syntax_error_in_file(tmp_path):
    bad = tmp_path / "bad.smp"
    bad.write_text("(print 1", encoding="utf-8")
    code, _, err = _run([str(bad)])
    assert code == 1
    assert "1|9: parse error while attempting to parse Expression: expected (, found EOF" in err


def test_missing_file():
    code, _, err = _run(["/nonexistent/prog.smp"])
    assert code == 1
    assert err.startswith("simplex: ")


def test_piped_program():
    code, out, _ = _run([], stdin="(print (+ 1 2))")
    assert code == 0
    assert out == "3"


def test_ast_flag(tmp_path):
    prog = tmp_path / "prog.smp"
    prog.write_text("(print 1)", encoding="utf-8")
    code, out, _ = _run(["--ast", str(prog)])
    assert code == 0
    assert out.splitlines()[0] == "Program"
    assert "      Identifier print" in out.splitlines()


def test_repl_prints_results_and_survives_errors():
    stdin = TtyStringIO("(+ 1 2)\n\n(car 1)\n(let x 4)\nx\n")
    code, out, err = _run([], stdin=stdin)
    assert code == 0
    assert "3\n" in out
    assert "true\n" in out
    assert "4\n" in out
    assert err.count("Unhandled exception!") == 1


def test_verbose_flag_is_accepted(tmp_path):
    prog = tmp_path / "prog.smp"
    prog.write_text("1", encoding="utf-8")
    code, _, _ = _run(["--verbose", str(prog)])
    assert code == 0


def test_ast_options_json_configures_the_tree_dump(tmp_path):
    prog = tmp_path / "prog.smp"
    prog.write_text("(print 1)", encoding="utf-8")
    code, out, _ = _run(["--ast-options", '{"display_position": true}', str(prog)])
    assert code == 0
    assert out.splitlines()[0].startswith("Program @")


def test_ast_options_must_be_a_json_object(tmp_path):
    prog = tmp_path / "prog.smp"
    prog.write_text("1", encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        _run(["--ast-options", "[1]", str(prog)])
    assert exc.value.code == 2


def test_deep_recursion_runs_on_the_worker_stack(tmp_path):
    prog = tmp_path / "deep.smp"
    prog.write_text(
        "(let count (lambda n (if (= n 0) 0 (+ 1 (count (- n 1))))))\n(print (count 3000))",
        encoding="utf-8",
    )
    code, out, err = _run([str(prog)])
    assert code == 0, err
    assert out == "3000"
