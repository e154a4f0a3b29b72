"""CLI entry point for the UtopiaScript interpreter.

Usage:
    python -m utopiascript [-v|-vv|-vvv] [program_file]
    python -m utopiascript [-v...] --emit-ast <program_file>
    python -m utopiascript [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given source file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Without a program file an interactive prompt is started. Debug
information is written to `debug.txt` in the current directory when
verbosity is greater than zero.

Exit status is 64 for usage errors, 65 when the program has syntax
errors and 70 when it stops on a runtime error.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from .ast import Program
from .ast_json import ast_to_obj, ast_from_obj
from .interpreter import Interpreter, run_source
from .parser import parse_program
from .reporting import ErrorReporter
from .scanner import scan

EX_USAGE = 64
EX_DATAERR = 65
EX_SOFTWARE = 70


def _read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(EX_USAGE)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def run_prompt(interpreter: Interpreter) -> None:
    reporter = interpreter.reporter
    while True:
        try:
            line = input('> ')
        except (EOFError, KeyboardInterrupt):
            print()
            break
        run_source(line, interpreter=interpreter)
        reporter.reset()


def main(argv: Optional[list] = None) -> None:
    parser = argparse.ArgumentParser(description="UtopiaScript interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='SOURCE_FILE', help='emit AST JSON for the given source file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='UtopiaScript program file to execute')
    args = parser.parse_args(argv)

    reporter = ErrorReporter()

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        source = _read_source(program_file)
        program = parse_program(scan(source, reporter), reporter)
        if reporter.had_error:
            sys.exit(EX_DATAERR)
        obj = ast_to_obj(program)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(obj, out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    interpreter = Interpreter(debug_level=args.v, reporter=reporter)
    try:
        # Execute from AST JSON
        if args.ast:
            ast_path = Path(args.ast)
            if not ast_path.exists():
                print(f"Error: file {ast_path} not found", file=sys.stderr)
                sys.exit(EX_USAGE)
            try:
                with open(ast_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                program = ast_from_obj(data)
            except (KeyError, TypeError, ValueError) as e:
                print(f"Error: {ast_path} is not a valid AST file ({type(e).__name__}: {e})", file=sys.stderr)
                sys.exit(EX_DATAERR)
            if not isinstance(program, Program):
                print(f"Error: {ast_path} does not contain a program", file=sys.stderr)
                sys.exit(EX_DATAERR)
            if not interpreter.interpret(program):
                sys.exit(EX_SOFTWARE)
            return

        if not args.program:
            run_prompt(interpreter)
            return

        # Default: execute source file
        source = _read_source(Path(args.program))
        run_source(source, interpreter=interpreter)
        if reporter.had_error:
            sys.exit(EX_DATAERR)
        if reporter.had_runtime_error:
            sys.exit(EX_SOFTWARE)
    finally:
        interpreter.close()


if __name__ == '__main__':
    main()
