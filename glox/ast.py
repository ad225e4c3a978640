"""Abstract Syntax Tree (AST) definitions for the glox language.

The AST classes defined in this module represent the syntactic structure
of parsed glox programs. Expressions and statements are plain immutable
data; all behaviour lives in the interpreter. Nodes that can fail at run
time keep the token they came from so errors can report a position.

`ast_to_string` renders any node as a parenthesized prefix form, which
is only meant for debugging output.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

from .tokens import Token
from .types import to_string


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass(frozen=True)
class Expr(Node):
    pass


@dataclass(frozen=True)
class Stmt(Node):
    pass


# Expressions

@dataclass(frozen=True)
class Literal(Expr):
    value: Any  # float, str, bool or None


@dataclass(frozen=True)
class Grouping(Expr):
    expression: Expr


@dataclass(frozen=True)
class UnaryOp(Expr):
    operator: Token
    operand: Expr


@dataclass(frozen=True)
class BinaryOp(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Logical(Expr):
    left: Expr
    operator: Token  # 'and' / 'or'
    right: Expr


@dataclass(frozen=True)
class Ident(Expr):
    name: Token


@dataclass(frozen=True)
class Assign(Expr):
    name: Token
    value: Expr


@dataclass(frozen=True)
class Call(Expr):
    callee: Expr
    paren: Token  # closing paren, used for error positions
    arguments: List[Expr]


# Statements

@dataclass(frozen=True)
class ExprStmt(Stmt):
    expression: Expr


@dataclass(frozen=True)
class PrintStmt(Stmt):
    expression: Expr


@dataclass(frozen=True)
class VarDecl(Stmt):
    name: Token
    initializer: Optional[Expr]


@dataclass(frozen=True)
class Block(Stmt):
    statements: List[Stmt]


@dataclass(frozen=True)
class IfStmt(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt]


@dataclass(frozen=True)
class WhileStmt(Stmt):
    condition: Expr
    body: Stmt


@dataclass(frozen=True)
class FuncDecl(Stmt):
    name: Token
    params: List[Token]
    body: List[Stmt]


@dataclass(frozen=True)
class ReturnStmt(Stmt):
    keyword: Token
    value: Optional[Expr]


def parenthesize(name: str, *parts: Any) -> str:
    inner = ' '.join([name] + [ast_to_string(p) for p in parts])
    return f"({inner})"


def ast_to_string(node: Any) -> str:
    if node is None:
        return 'nil'
    if isinstance(node, list):
        return ' '.join(ast_to_string(n) for n in node)
    if isinstance(node, Literal):
        if isinstance(node.value, str):
            return f'"{node.value}"'
        return to_string(node.value)
    if isinstance(node, Grouping):
        return parenthesize('group', node.expression)
    if isinstance(node, UnaryOp):
        return parenthesize(node.operator.lexeme, node.operand)
    if isinstance(node, (BinaryOp, Logical)):
        return parenthesize(node.operator.lexeme, node.left, node.right)
    if isinstance(node, Ident):
        return node.name.lexeme
    if isinstance(node, Assign):
        return parenthesize('= ' + node.name.lexeme, node.value)
    if isinstance(node, Call):
        return parenthesize('call', node.callee, *node.arguments)
    if isinstance(node, ExprStmt):
        return parenthesize('expr', node.expression)
    if isinstance(node, PrintStmt):
        return parenthesize('print', node.expression)
    if isinstance(node, VarDecl):
        if node.initializer is None:
            return f"(var {node.name.lexeme})"
        return parenthesize('var ' + node.name.lexeme, node.initializer)
    if isinstance(node, Block):
        return parenthesize('block', *node.statements)
    if isinstance(node, IfStmt):
        if node.else_branch is None:
            return parenthesize('if', node.condition, node.then_branch)
        return parenthesize('if', node.condition, node.then_branch, node.else_branch)
    if isinstance(node, WhileStmt):
        return parenthesize('while', node.condition, node.body)
    if isinstance(node, FuncDecl):
        params = ' '.join(p.lexeme for p in node.params)
        return parenthesize(f"fun {node.name.lexeme} ({params})", *node.body)
    if isinstance(node, ReturnStmt):
        if node.value is None:
            return '(return)'
        return parenthesize('return', node.value)
    return f"<unknown node {type(node).__name__}>"
