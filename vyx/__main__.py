"""CLI entry point for the Vyx interpreter.

Usage:
    python -m vyx [-v|-vv|-vvv] <program_file.vyx>
    python -m vyx [-v...] --emit-ast <program_file.vyx>
    python -m vyx [-v...] --ast <ast_json_file>
    python -m vyx [-v...]              (interactive prompt)

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given .vyx file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. Without a program file the interpreter
reads one line at a time from a `> ` prompt until an empty line or end of
input; definitions persist between lines.
"""

import argparse
import json
import sys
from pathlib import Path

from .ast_json import program_from_obj, program_to_obj
from .errors import ErrorReporter
from .interpreter import Interpreter, parse_program, run_program

SOURCE_SUFFIX = '.vyx'


def read_source(program_file: Path) -> str:
    if program_file.suffix != SOURCE_SUFFIX:
        print(f"Error: file must have a {SOURCE_SUFFIX} extension.", file=sys.stderr)
        sys.exit(1)
    if not program_file.exists():
        print(f"Error: file {program_file} not found", file=sys.stderr)
        sys.exit(1)
    with open(program_file, 'r', encoding='utf-8') as f:
        return f.read()


def prompt(interpreter: Interpreter, reporter: ErrorReporter) -> None:
    while True:
        try:
            line = input('> ')
        except EOFError:
            break
        if not line:
            break
        # errors on one line do not affect the next
        reporter.reset()
        run_program(line, interpreter, reporter)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Vyx language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='VYX_FILE', help='emit AST JSON for the given .vyx file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='Vyx program file (.vyx) to execute')
    args = parser.parse_args(argv)

    reporter = ErrorReporter()

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        source = read_source(program_file)
        statements, diagnostics = parse_program(source)
        for diagnostic in diagnostics:
            reporter.report(diagnostic)
        if diagnostics:
            sys.exit(1)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(program_to_obj(statements), out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Execute from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        if not ast_path.exists():
            print(f"Error: file {ast_path} not found", file=sys.stderr)
            sys.exit(1)
        with open(ast_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        try:
            statements = program_from_obj(data)
        except (ValueError, KeyError, TypeError) as e:
            print(f"Error: invalid AST file: {e}", file=sys.stderr)
            sys.exit(1)
        interpreter = Interpreter(debug_level=args.v, reporter=reporter)
        try:
            errors = interpreter.interpret(statements)
        finally:
            interpreter.close()
        if errors:
            sys.exit(1)
        return

    interpreter = Interpreter(debug_level=args.v, reporter=reporter)
    try:
        if not args.program:
            prompt(interpreter, reporter)
            return
        source = read_source(Path(args.program))
        result = run_program(source, interpreter, reporter)
    finally:
        interpreter.close()
    if result.had_error or result.had_runtime_error:
        sys.exit(1)


if __name__ == '__main__':
    main()
