"""CLI entry point for the Boba interpreter.

Usage:
    python -m boba [-v|-vv|-vvv] [program_file]
    python -m boba [-v...] --emit-ast <program_file>
    python -m boba [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given .boba file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Without a program file an interactive prompt is started. Debug
information is written to `debug.txt` in the current directory when
verbosity is greater than zero.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from .ast_json import program_from_obj, program_to_obj
from .errors import BobaError
from .interpreter import Interpreter
from .types import NoneVal, to_string


DEBUG_FILE = 'debug.txt'


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def emit_ast(program_file: Path) -> int:
    source = read_source(program_file)
    interpreter = Interpreter()
    try:
        statements = interpreter.load(source, str(program_file))
    except BobaError as e:
        print(interpreter.report(e), file=sys.stderr)
        return 1
    obj = program_to_obj(statements, str(program_file), source)
    out_path = program_file.with_name(program_file.name + '.ast.json')
    with open(out_path, 'w', encoding='utf-8') as out:
        json.dump(obj, out, ensure_ascii=False, indent=2)
    print(str(out_path))
    return 0


def run_ast(ast_path: Path, debug_level: int) -> int:
    data = json.loads(read_source(ast_path))
    interpreter = Interpreter(debug_level=debug_level, debug_file=DEBUG_FILE)
    try:
        entry = interpreter.cache.store(data.get('label', str(ast_path)), data.get('source', ''))
        interpreter.run(program_from_obj(data, entry.id))
    except BobaError as e:
        print(interpreter.report(e), file=sys.stderr)
        return 1
    finally:
        interpreter.close()
    return 0


def run_file(program_file: Path, debug_level: int) -> int:
    source = read_source(program_file)
    interpreter = Interpreter(debug_level=debug_level, debug_file=DEBUG_FILE)
    try:
        interpreter.run_source(source, str(program_file))
    except BobaError as e:
        print(interpreter.report(e), file=sys.stderr)
        return 1
    finally:
        interpreter.close()
    return 0


def repl(debug_level: int) -> int:
    """Read-eval-print loop; a line ending in ':' continues until a blank line."""
    interpreter = Interpreter(debug_level=debug_level, debug_file=DEBUG_FILE)
    count = 0
    try:
        while True:
            try:
                line = input('>>> ')
            except EOFError:
                print()
                return 0
            lines = [line]
            while lines[-1].rstrip().endswith(':') or (len(lines) > 1 and lines[-1].strip()):
                try:
                    lines.append(input('... '))
                except EOFError:
                    break
            source = '\n'.join(lines)
            if not source.strip():
                continue
            count += 1
            try:
                result = interpreter.run_source(source, f"<repl:{count}>")
            except BobaError as e:
                print(interpreter.report(e), file=sys.stderr)
                continue
            if not isinstance(result, NoneVal):
                print(to_string(result))
    except KeyboardInterrupt:
        print()
        return 0
    finally:
        interpreter.close()


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog='boba', description="Boba language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='BOBA_FILE', help='emit AST JSON for the given .boba file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='Boba program file (.boba) to execute')
    args = parser.parse_args(argv)

    if args.emit_ast:
        status = emit_ast(Path(args.emit_ast))
    elif args.ast:
        status = run_ast(Path(args.ast), args.v)
    elif args.program:
        status = run_file(Path(args.program), args.v)
    else:
        status = repl(args.v)
    if status:
        sys.exit(status)


if __name__ == '__main__':
    main()
