"""Tree-walking interpreter for the glox language.

This module ties the pipeline together: source text is scanned into
tokens, parsed into a list of statements, and the statements are
executed one by one against a root environment that already holds the
host built-ins. `execute` handles statements and `evaluate` handles
expressions; both dispatch on the node class.

Any scan or parse error rejects the input before anything runs. The
first runtime error aborts the run, while output already printed stays
printed.
"""

from __future__ import annotations

from typing import Any, List, Optional, TextIO, Union

from .ast import (
    Assign, BinaryOp, Block, Call, Expr, ExprStmt, FuncDecl, Grouping,
    Ident, IfStmt, Literal, Logical, PrintStmt, ReturnStmt, Stmt,
    UnaryOp, VarDecl, WhileStmt, ast_to_string,
)
from .environment import Environment
from .errors import GloxRuntimeError, ReturnSignal, ScanErrors
from .functions import Callable, UserFunction
from .parser import parse
from .scanner import scan
from .std import populate_std_environment
from .tokens import Token, TokenType
from .types import is_number, is_truthy, to_string, type_name, values_equal


def parse_program(source: Union[str, bytes]) -> List[Stmt]:
    """Scan and parse source text, raising ScanErrors or ParseError on bad input."""
    tokens, errors = scan(source)
    if errors:
        raise ScanErrors(errors)
    return parse(tokens)


class Interpreter:
    """Core interpreter that executes glox ASTs."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt', out: Optional[TextIO] = None):
        self.global_env = populate_std_environment(Environment())
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None
        # None means sys.stdout at the time of each print
        self.out = out
        self.call_depth = 0

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def interpret(self, source: Union[str, bytes], env: Optional[Environment] = None) -> None:
        """Run source text through the whole pipeline against `env` (the root scope by default)."""
        tokens, errors = scan(source)
        self.debug(f"scanned {len(tokens)} tokens, {len(errors)} errors")
        if self.debug_level >= 4:
            for token in tokens:
                self.debug(str(token))
        if errors:
            raise ScanErrors(errors)
        statements = parse(tokens)
        self.debug(f"parsed {len(statements)} statements")
        if self.debug_level >= 4:
            for stmt in statements:
                self.debug(ast_to_string(stmt))
        self.run(statements, env)

    def run(self, statements: List[Stmt], env: Optional[Environment] = None) -> None:
        if env is None:
            env = self.global_env
        self.debug('run start')
        try:
            for stmt in statements:
                self.execute(stmt, env)
        except RecursionError:
            raise GloxRuntimeError('StackOverflowError', 'program nested too deeply') from None
        self.debug('run end')

    def execute(self, node: Stmt, env: Environment) -> None:
        if isinstance(node, ExprStmt):
            self.evaluate(node.expression, env)
            return
        if isinstance(node, PrintStmt):
            value = self.evaluate(node.expression, env)
            print(to_string(value), file=self.out)
            return
        if isinstance(node, VarDecl):
            value = self.evaluate(node.initializer, env) if node.initializer is not None else None
            env.declare(node.name.lexeme, value, node.name)
            if self.debug_level >= 2:
                self.debug(f"declare {node.name.lexeme}: {type_name(value)} = {to_string(value)}")
            return
        if isinstance(node, Block):
            block_env = Environment(parent=env)
            for stmt in node.statements:
                self.execute(stmt, block_env)
            return
        if isinstance(node, IfStmt):
            cond = self.evaluate(node.condition, env)
            truthy = is_truthy(cond)
            if self.debug_level >= 3:
                self.debug(f"if condition {to_string(cond)} -> {truthy}")
            if truthy:
                self.execute(node.then_branch, env)
            elif node.else_branch is not None:
                self.execute(node.else_branch, env)
            return
        if isinstance(node, WhileStmt):
            while True:
                cond = self.evaluate(node.condition, env)
                if self.debug_level >= 3:
                    self.debug(f"while condition {to_string(cond)}")
                if not is_truthy(cond):
                    break
                self.execute(node.body, env)
            return
        if isinstance(node, FuncDecl):
            env.declare(node.name.lexeme, UserFunction(node), node.name)
            if self.debug_level >= 2:
                self.debug(f"define function {node.name.lexeme}")
            return
        if isinstance(node, ReturnStmt):
            if self.call_depth == 0:
                raise GloxRuntimeError('ReturnError', 'return outside function',
                                       node.keyword.line, node.keyword.column)
            value = self.evaluate(node.value, env) if node.value is not None else None
            raise ReturnSignal(value)
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def evaluate(self, node: Expr, env: Environment) -> Any:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Grouping):
            return self.evaluate(node.expression, env)
        if isinstance(node, Ident):
            return env.get(node.name)
        if isinstance(node, Assign):
            value = self.evaluate(node.value, env)
            env.set(node.name, value)
            return value
        if isinstance(node, UnaryOp):
            operand = self.evaluate(node.operand, env)
            if node.operator.type is TokenType.BANG:
                return not is_truthy(operand)
            if node.operator.type is TokenType.MINUS:
                self.check_number_operands(node.operator, operand)
                return -operand
            raise self.type_error(node.operator, f'unsupported unary operator {node.operator.lexeme}')
        if isinstance(node, Logical):
            left = self.evaluate(node.left, env)
            if node.operator.type is TokenType.OR:
                if is_truthy(left):
                    return left
            elif not is_truthy(left):
                return left
            return self.evaluate(node.right, env)
        if isinstance(node, BinaryOp):
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            return self.apply_binary_op(node.operator, left, right)
        if isinstance(node, Call):
            callee = self.evaluate(node.callee, env)
            args = [self.evaluate(arg, env) for arg in node.arguments]
            return self.call_function(callee, args, node.paren, env)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def call_function(self, func: Any, args: List[Any], paren: Token, env: Environment) -> Any:
        if not isinstance(func, Callable):
            raise self.type_error(paren, f'can only call functions, got {type_name(func)}')
        if len(args) != func.arity:
            raise GloxRuntimeError('ArityError', f'{func} expects {func.arity} arguments, got {len(args)}',
                                   paren.line, paren.column)
        if self.debug_level >= 3:
            self.debug(f"call {func} with {len(args)} arguments")
        self.call_depth += 1
        try:
            return func.call(self, env, args)
        except RecursionError:
            raise GloxRuntimeError('StackOverflowError', 'maximum call depth exceeded',
                                   paren.line, paren.column) from None
        finally:
            self.call_depth -= 1

    def apply_binary_op(self, operator: Token, a: Any, b: Any) -> Any:
        op = operator.type
        if op is TokenType.PLUS:
            if is_number(a) and is_number(b):
                return a + b
            if isinstance(a, str) and isinstance(b, str):
                return a + b
            raise self.type_error(operator, f'unsupported + for {type_name(a)} and {type_name(b)}')
        if op is TokenType.EQUAL_EQUAL:
            return values_equal(a, b)
        if op is TokenType.BANG_EQUAL:
            return not values_equal(a, b)
        self.check_number_operands(operator, a, b)
        if op is TokenType.MINUS:
            return a - b
        if op is TokenType.STAR:
            return a * b
        if op is TokenType.SLASH:
            if b == 0.0:
                raise GloxRuntimeError('ZeroDivisionError', 'division by zero', operator.line, operator.column)
            return a / b
        if op is TokenType.GREATER:
            return a > b
        if op is TokenType.GREATER_EQUAL:
            return a >= b
        if op is TokenType.LESS:
            return a < b
        if op is TokenType.LESS_EQUAL:
            return a <= b
        raise self.type_error(operator, f'unknown operator {operator.lexeme}')

    def check_number_operands(self, operator: Token, *operands: Any):
        for operand in operands:
            if not is_number(operand):
                names = ' and '.join(type_name(o) for o in operands)
                raise self.type_error(operator, f'operator {operator.lexeme} expects numbers, got {names}')

    @staticmethod
    def type_error(token: Token, message: str) -> GloxRuntimeError:
        return GloxRuntimeError('TypeError', message, token.line, token.column)


def run_program(source: Union[str, bytes], debug_level: int = 0) -> Interpreter:
    """Convenience function to scan, parse and run a glox program from source text."""
    interpreter = Interpreter(debug_level=debug_level)
    try:
        interpreter.interpret(source)
    finally:
        interpreter.close()
    return interpreter
