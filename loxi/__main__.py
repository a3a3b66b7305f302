"""CLI entry point for the Lox interpreter.

Usage:
    python -m loxi [-v|-vv|-vvv|-vvvv] [script]
    python -m loxi [-v...] --emit-ast <script>
    python -m loxi [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given script and print its AST as JSON
  --ast         Execute a previously emitted AST JSON file

Without a script an interactive prompt is started. Debug information is
written to `debug.txt` in the current directory when verbosity is
greater than zero.
"""

import argparse
import builtins
import json
import sys
from pathlib import Path

from .ast_json import ast_to_obj, ast_from_obj
from .errors import ErrorReporter, LoxRuntimeError
from .interpreter import Interpreter
from .parser import parse
from .scanner import scan
from .types import NIL, to_repr

EXIT_USAGE = 64
EXIT_DATAERR = 65
EXIT_NOINPUT = 66


def read_source(path: str) -> str:
    program_file = Path(path)
    try:
        with open(program_file, 'r', encoding='utf-8') as f:
            return f.read()
    except OSError as e:
        print(f"Couldn't read {program_file}: {e.strerror}", file=sys.stderr)
        sys.exit(EXIT_NOINPUT)


def lex_and_parse(source: str, reporter: ErrorReporter, interpreter: Interpreter | None = None):
    """Return the statements for `source`, or None if scanning or parsing failed."""
    tokens, had_error = scan(source, reporter)
    if interpreter is not None and interpreter.debug_level >= 4:
        for token in tokens:
            interpreter.debug(f"token {token} (line {token.line})")
    if had_error:
        return None, "Aborting due to error while lexing."
    statements, had_error = parse(tokens, reporter)
    if had_error:
        return None, "Aborting due to error while parsing."
    return statements, None


def run_file(path: str, debug_level: int = 0) -> None:
    source = read_source(path)
    reporter = ErrorReporter()
    interpreter = Interpreter(debug_level=debug_level, reporter=reporter)
    try:
        statements, error = lex_and_parse(source, reporter, interpreter)
        if statements is None:
            print(error, file=sys.stderr)
            sys.exit(EXIT_DATAERR)
        try:
            interpreter.interpret(statements)
        except LoxRuntimeError:
            sys.exit(EXIT_DATAERR)
    finally:
        interpreter.close()


def run_prompt(debug_level: int = 0) -> None:
    reporter = ErrorReporter()
    interpreter = Interpreter(debug_level=debug_level, reporter=reporter)
    try:
        while True:
            try:
                line = builtins.input('> ')
            except EOFError:
                print()
                break
            reporter.clear()
            # errors were already reported, move on to the next line
            statements, _ = lex_and_parse(line, reporter, interpreter)
            if statements is None:
                continue
            try:
                value = interpreter.interpret(statements)
            except LoxRuntimeError:
                continue
            if value is not NIL:
                print(to_repr(value))
    finally:
        interpreter.close()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='loxi', description="Lox language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='LOX_FILE', help='print the AST of the given script as JSON')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('script', nargs='?', help='Lox script to execute; omit for a prompt')
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        # argparse exits with 2 on bad usage
        sys.exit(EXIT_USAGE if e.code else 0)

    # Emit AST mode
    if args.emit_ast:
        source = read_source(args.emit_ast)
        statements, error = lex_and_parse(source, ErrorReporter())
        if statements is None:
            print(error, file=sys.stderr)
            sys.exit(EXIT_DATAERR)
        json.dump(ast_to_obj(statements), sys.stdout, ensure_ascii=False, indent=2)
        print()
        return

    # Execute from AST JSON
    if args.ast:
        try:
            data = json.loads(read_source(args.ast))
            statements = ast_from_obj(data)
        except (ValueError, KeyError) as e:
            print(f"Error: invalid AST file {args.ast}: {e}", file=sys.stderr)
            sys.exit(EXIT_DATAERR)
        interpreter = Interpreter(debug_level=args.v)
        try:
            interpreter.interpret(statements)
        except LoxRuntimeError:
            sys.exit(EXIT_DATAERR)
        finally:
            interpreter.close()
        return

    if args.script:
        run_file(args.script, debug_level=args.v)
    else:
        run_prompt(debug_level=args.v)


if __name__ == '__main__':
    main()
