"""CLI entry point for the raz interpreter."""
from __future__ import annotations
import sys
import argparse
import traceback

from . import __version__
from .errors import RazError
from .runtime import Interpreter
from .values import RazType
import raz.runtime_statements  # Install statement executors

SOURCE_SUFFIX = ".raz"


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        prog="raz",
        description="raz interpreter",
    )
    parser.add_argument("file", nargs="?", help="Source file to execute (.raz)")
    parser.add_argument("--repl", action="store_true", help="Force REPL mode")
    parser.add_argument("--quote-strings", action="store_true",
                        help="Print strings wrapped in double quotes")
    parser.add_argument("--version", action="version", version=f"raz {__version__}")

    args = parser.parse_args(argv)

    flags = {
        "quote_strings": args.quote_strings,
    }

    if args.file and not args.repl:
        run_file(args.file, flags)
    else:
        run_repl(flags)


def run_file(path: str, flags: dict):
    """Execute a .raz file."""
    if not path.endswith(SOURCE_SUFFIX):
        print(f"[raz] Wrong file type: {path}")
        print(f"  Has to be a '{SOURCE_SUFFIX}' file.")
        sys.exit(1)

    try:
        with open(path, "r") as f:
            source = f.read()
    except FileNotFoundError:
        print(f"[raz] File not found: {path}")
        sys.exit(1)

    interp = Interpreter(flags=flags)
    try:
        interp.run(source)
    except RazError as e:
        print(f"\n[raz] Runtime Error: {e}")
        sys.exit(1)
    except Exception as e:
        print(f"\n[raz] Internal Error: {e}")
        traceback.print_exc()
        sys.exit(2)


def run_repl(flags: dict):
    """Interactive REPL. State survives errors."""
    print(f"raz REPL v{__version__}")
    print("Type 'quit' to exit.\n")

    interp = Interpreter(flags=flags)

    while True:
        try:
            line = input("raz> ")
        except (EOFError, KeyboardInterrupt):
            print("\n[raz] Goodbye.")
            break

        line = line.strip()
        if not line:
            continue
        if line in ("quit", "exit"):
            print("[raz] Goodbye.")
            break

        try:
            result = interp.run(line)
            if result.type != RazType.NONE:
                print(f"=> {result}")
        except RazError as e:
            print(f"[Error] {e}")
        except Exception as e:
            print(f"[Internal Error] {e}")
        finally:
            # Printed lines already went to stdout
            interp.output.clear()


if __name__ == "__main__":
    main()
