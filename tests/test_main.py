"""Tests for the raz command-line driver."""
import pytest
from raz import __version__
from raz.main import main
from raz.runtime import Interpreter


def write_source(tmp_path, source: str, name: str = "prog.raz") -> str:
    path = tmp_path / name
    path.write_text(source)
    return str(path)


def feed_input(monkeypatch, lines: list[str]):
    """Replace input() with a scripted session that ends in EOF."""
    remaining = iter(lines)

    def fake_input(prompt=""):
        try:
            return next(remaining)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr("builtins.input", fake_input)


class TestFileMode:
    def test_runs_file(self, tmp_path, capsys):
        main([write_source(tmp_path, 'show "hello"; show 1 + 1;')])
        assert capsys.readouterr().out == "hello\n2\n"

    def test_quote_strings_option(self, tmp_path, capsys):
        main([write_source(tmp_path, 'show "hello";'), "--quote-strings"])
        assert capsys.readouterr().out == '"hello"\n'

    def test_wrong_suffix(self, tmp_path, capsys):
        path = write_source(tmp_path, "show 1;", name="prog.txt")
        with pytest.raises(SystemExit) as exc:
            main([path])
        assert exc.value.code == 1
        assert "Wrong file type" in capsys.readouterr().out

    def test_missing_file(self, tmp_path, capsys):
        path = str(tmp_path / "absent.raz")
        with pytest.raises(SystemExit) as exc:
            main([path])
        assert exc.value.code == 1
        assert f"[raz] File not found: {path}" in capsys.readouterr().out

    def test_runtime_error_exits_1(self, tmp_path, capsys):
        path = write_source(tmp_path, 'show "before";\nshow missing;')
        with pytest.raises(SystemExit) as exc:
            main([path])
        assert exc.value.code == 1
        out = capsys.readouterr().out
        assert out.startswith("before\n")
        assert "[raz] Runtime Error: [line 2] Variable 'missing' has not been declared" in out

    def test_parse_error_exits_1(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main([write_source(tmp_path, "var = ;")])
        assert exc.value.code == 1
        assert "Parse error" in capsys.readouterr().out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--version"])
        assert exc.value.code == 0
        assert __version__ in capsys.readouterr().out


class TestRepl:
    def test_echoes_expression_values(self, monkeypatch, capsys):
        feed_input(monkeypatch, ["1 + 2;", "var x = 3;", "quit"])
        main([])
        out = capsys.readouterr().out
        assert "=> 3" in out
        assert "[raz] Goodbye." in out

    def test_non_results_not_echoed(self, monkeypatch, capsys):
        feed_input(monkeypatch, ["non;", "exit"])
        main(["--repl"])
        assert "=>" not in capsys.readouterr().out

    def test_state_survives_errors(self, monkeypatch, capsys):
        feed_input(monkeypatch, ["var x = 1;", "show y;", "show x + 1;"])
        main([])
        out = capsys.readouterr().out
        assert "[Error] [line 1] Variable 'y' has not been declared" in out
        assert "2\n" in out

    def test_blank_lines_skipped(self, monkeypatch, capsys):
        feed_input(monkeypatch, ["", "   ", "show 5;"])
        main([])
        out = capsys.readouterr().out
        assert "5\n" in out
        assert "[Error]" not in out

    def test_eof_ends_session(self, monkeypatch, capsys):
        feed_input(monkeypatch, [])
        main([])
        assert "[raz] Goodbye." in capsys.readouterr().out

    def test_capture_cleared_between_lines(self, monkeypatch, capsys):
        created = []

        class RecordingInterpreter(Interpreter):
            def __init__(self, flags=None):
                super().__init__(flags)
                created.append(self)

        monkeypatch.setattr("raz.main.Interpreter", RecordingInterpreter)
        feed_input(monkeypatch, ["show 1;", "show 2;"])
        main([])
        assert created[0].output == []
        assert "1\n2\n" in capsys.readouterr().out
