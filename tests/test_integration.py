"""Integration tests for the raz interpreter.

These tests run complete raz programs and verify output.
"""
import pytest
import io
import sys
from raz.errors import RazError, UndeclaredVariableError, ArityMismatchError
from raz.lexer import LexerError
from raz.parser import ParseError
from raz.runtime import Interpreter
import raz.runtime_statements  # Install statement executors


def run_program(source: str, flags: dict | None = None) -> str:
    """Run a raz program and capture stdout."""
    interp = Interpreter(flags=flags)
    old_stdout = sys.stdout
    sys.stdout = captured = io.StringIO()
    try:
        interp.run(source)
    finally:
        sys.stdout = old_stdout
    return captured.getvalue()


class TestHelloWorld:
    def test_print_string(self):
        assert run_program('print "Hello, World!";') == "Hello, World!\n"

    def test_show_number(self):
        assert run_program("show 42;") == "42\n"

    def test_show_expression(self):
        assert run_program("show 1 + 2;") == "3\n"

    def test_show_fraction(self):
        assert run_program("show 1 / 4;") == "0.25\n"

    def test_quote_strings_flag(self):
        assert run_program('show "hi";', flags={"quote_strings": True}) == '"hi"\n'


class TestScenarios:
    def test_function_call(self):
        assert run_program("func add(a,b){ return a+b; } show add(2,3);") == "5\n"

    def test_assignment_in_block(self):
        assert run_program("var x = 10; { x = x + 1; } show x;") == "11\n"

    def test_string_repetition(self):
        assert run_program('show "ab" * 3;') == "ababab\n"

    def test_cross_type_equality(self):
        assert run_program('show 1==1; show 1=="1";') == "true\nfalse\n"

    def test_block_shadowing(self):
        assert run_program("{ var x = 1; { var x = 2; } show x; }") == "1\n"


class TestControlFlow:
    def test_if_else(self):
        source = """
        var x = 3;
        if (x > 2) show "big"; else show "small";
        """
        assert run_program(source) == "big\n"

    def test_while(self):
        source = """
        var i = 0;
        while (i < 3) { show i; i = i + 1; }
        """
        assert run_program(source) == "0\n1\n2\n"

    def test_for(self):
        assert run_program("for (var i = 0; i < 3; i = i + 1) show i;") == "0\n1\n2\n"

    def test_for_variable_is_scoped(self):
        with pytest.raises(UndeclaredVariableError):
            run_program("for (var i = 0; i < 1; i = i + 1) {} show i;")

    def test_falsy_empty_string(self):
        assert run_program('if ("") show "yes"; else show "no";') == "no\n"


class TestFunctions:
    def test_recursion(self):
        source = """
        func fib(n) {
            if (n < 2) return n;
            return fib(n - 1) + fib(n - 2);
        }
        show fib(10);
        """
        assert run_program(source) == "55\n"

    def test_return_from_nested_loop(self):
        source = """
        func firstOver(limit) {
            var i = 0;
            while (true) {
                if (i * i > limit) {
                    return i;
                }
                i = i + 1;
            }
        }
        show firstOver(10);
        """
        assert run_program(source) == "4\n"

    def test_closure_sees_later_mutation(self):
        source = """
        func outer() {
            var count = 0;
            func read() { return count; }
            count = 5;
            return read;
        }
        show outer()();
        """
        assert run_program(source) == "5\n"

    def test_counter_closure(self):
        source = """
        func makeCounter() {
            var n = 0;
            func inc() { n = n + 1; return n; }
            return inc;
        }
        var c = makeCounter();
        c();
        c();
        show c();
        """
        assert run_program(source) == "3\n"

    def test_show_callable(self):
        assert run_program("func add(a, b) {} show add;") == "add_2\n"

    def test_arity_error(self):
        with pytest.raises(ArityMismatchError) as exc:
            run_program("func add(a,b){ return a+b; } add(1);")
        assert exc.value.expected == 2
        assert exc.value.got == 1


class TestErrors:
    def test_undeclared(self):
        with pytest.raises(UndeclaredVariableError):
            run_program("show y;")

    def test_output_before_error_is_kept(self):
        interp = Interpreter()
        with pytest.raises(RazError):
            interp.run('show "before"; show missing; show "after";')
        assert interp.output == ["before"]

    def test_lexer_error(self):
        with pytest.raises(LexerError):
            run_program("show @;")

    def test_parse_error(self):
        with pytest.raises(ParseError):
            run_program("show (1;")

    def test_errors_are_raz_errors(self):
        for source in ("show @;", "show (1;", "show -\"a\";"):
            with pytest.raises(RazError):
                run_program(source)
