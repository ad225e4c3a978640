from typing import Any, List, Optional


class GloxError(Exception):
    """Base class for every error reported by the glox pipeline."""
    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        self.message = message
        self.line = line
        self.column = column
        if line is not None:
            super().__init__(f"{message} (line {line} col {column})")
        else:
            super().__init__(message)


class LexError(GloxError):
    """A single scanning problem. The scanner collects these instead of raising."""


class ScanErrors(GloxError):
    """Raised once scanning is complete if any LexError was collected."""
    def __init__(self, errors: List[LexError]):
        super().__init__('\n'.join(str(e) for e in errors))
        self.errors = errors


class ParseError(GloxError):
    """Syntax error. Aborts the whole parse."""


class GloxRuntimeError(GloxError):
    """Evaluation failure. `kind` names the category, e.g. 'NameError'."""
    def __init__(self, kind: str, message: str, line: Optional[int] = None, column: Optional[int] = None):
        super().__init__(f"{kind}: {message}", line, column)
        self.kind = kind


class ReturnSignal(Exception):
    """Internal exception to handle return statements in functions."""
    def __init__(self, value: Any):
        super().__init__('return')
        self.value = value
