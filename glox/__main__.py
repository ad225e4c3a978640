"""CLI entry point for the glox interpreter.

Usage:
    python -m glox [-v|-vv|-vvv|-vvvv] <program_file>
    python -m glox [-v...] --emit-ast <program_file>
    python -m glox [-v...] --ast <ast_json_file>
    python -m glox [-v...] --tokens <program_file>
    python -m glox

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given .lox file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file
  --tokens      Print the token stream of the given .lox file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. Without a program file an interactive
shell is started.
"""

import argparse
import json
import sys
from pathlib import Path

from .ast_json import ast_to_obj, program_from_obj
from .errors import GloxError
from .interpreter import Interpreter, parse_program
from .scanner import scan
from .shell import Shell


def read_source(path: Path) -> bytes:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'rb') as f:
        return f.read()


def main(argv: list = None) -> None:
    parser = argparse.ArgumentParser(description="glox language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='LOX_FILE', help='emit AST JSON for the given .lox file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    group.add_argument('--tokens', metavar='LOX_FILE', help='print the token stream of the given .lox file')
    parser.add_argument('program', nargs='?', help='glox program file (.lox) to execute')
    args = parser.parse_args(argv)

    # Token dump mode
    if args.tokens:
        tokens, errors = scan(read_source(Path(args.tokens)))
        for token in tokens:
            print(token)
        for error in errors:
            print(error, file=sys.stderr)
        if errors:
            sys.exit(1)
        return

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        source = read_source(program_file)
        try:
            statements = parse_program(source)
        except GloxError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(ast_to_obj(statements), out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    interpreter = Interpreter(debug_level=args.v)
    try:
        # Execute from AST JSON
        if args.ast:
            ast_path = Path(args.ast)
            if not ast_path.exists():
                print(f"Error: file {ast_path} not found", file=sys.stderr)
                sys.exit(1)
            with open(ast_path, 'r', encoding='utf-8') as f:
                statements = program_from_obj(json.load(f))
            interpreter.run(statements)
            return

        if not args.program:
            Shell(interpreter).cmdloop()
            return

        interpreter.interpret(read_source(Path(args.program)))
    except GloxError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        interpreter.close()


if __name__ == '__main__':
    main()
