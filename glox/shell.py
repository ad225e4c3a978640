"""Handles interactive mode for the glox interpreter. Uses cmd as backend."""

import cmd
import sys
from typing import Optional

from .errors import GloxError
from .interpreter import Interpreter
from .scanner import scan
from .tokens import TokenType


def open_braces(source: str) -> int:
    tokens, _ = scan(source)
    depth = 0
    for token in tokens:
        if token.type is TokenType.LEFT_BRACE:
            depth += 1
        elif token.type is TokenType.RIGHT_BRACE:
            depth -= 1
    return depth


class Shell(cmd.Cmd):
    """glox interpreter shell."""
    intro = "glox interpreter\nType 'exit' or press Ctrl-D to leave."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "

    def __init__(self, interpreter: Optional[Interpreter] = None, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.interpreter = interpreter if interpreter is not None else Interpreter()
        self._tmp_line = ""

    def default(self, line):
        """Executes a line of glox source against the session's root scope."""
        source = self._tmp_line + line + "\n"
        if open_braces(source) > 0:
            self._tmp_line = source
            self.prompt = self.secondary_prompt
            return
        self._tmp_line = ""
        self.prompt = self._tmp_prompt
        try:
            self.interpreter.interpret(source)
        except GloxError as e:
            print(e, file=sys.stderr)

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
