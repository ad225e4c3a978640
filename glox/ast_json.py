"""JSON serialization/deserialization for glox ASTs.

This module converts between glox AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. Nodes become
`{"__node__": <class name>, <field>: ...}` and tokens become
`{"__token__": <kind>, "lexeme": ..., "literal": ..., "line": ...,
"start": ..., "end": ...}`, which is enough for a full round-trip.
"""

from __future__ import annotations

from dataclasses import fields
from typing import Any, Dict, List

from .ast import (
    Assign,
    BinaryOp,
    Block,
    Call,
    ExprStmt,
    FuncDecl,
    Grouping,
    Ident,
    IfStmt,
    Literal,
    Logical,
    Node,
    PrintStmt,
    ReturnStmt,
    Stmt,
    UnaryOp,
    VarDecl,
    WhileStmt,
)
from .tokens import Position, Token, TokenType


NODE_CLASSES = {
    cls.__name__: cls
    for cls in (
        Assign, BinaryOp, Block, Call, ExprStmt, FuncDecl, Grouping, Ident,
        IfStmt, Literal, Logical, PrintStmt, ReturnStmt, UnaryOp, VarDecl,
        WhileStmt,
    )
}


def token_to_obj(token: Token) -> Dict[str, Any]:
    return {
        "__token__": token.type.value,
        "lexeme": token.lexeme,
        "literal": token.literal,
        "line": token.pos.line,
        "start": token.pos.start,
        "end": token.pos.end,
    }


def token_from_obj(o: Dict[str, Any]) -> Token:
    return Token(TokenType(o["__token__"]), o["lexeme"], o.get("literal"),
                 Position(o["line"], o["start"], o["end"]))


def ast_to_obj(node: Any) -> Any:
    # Primitives
    if node is None or isinstance(node, (bool, int, float, str)):
        return node
    if isinstance(node, list):
        return [ast_to_obj(n) for n in node]
    if isinstance(node, Token):
        return token_to_obj(node)
    if isinstance(node, Node):
        obj: Dict[str, Any] = {"__node__": type(node).__name__}
        for f in fields(node):
            obj[f.name] = ast_to_obj(getattr(node, f.name))
        return obj
    raise TypeError(f"cannot serialize {type(node).__name__}")


def ast_from_obj(o: Any) -> Any:
    if o is None or isinstance(o, (bool, int, float, str)):
        return o
    if isinstance(o, list):
        return [ast_from_obj(x) for x in o]
    if isinstance(o, dict):
        if "__token__" in o:
            return token_from_obj(o)
        name = o.get("__node__")
        if name not in NODE_CLASSES:
            raise ValueError(f"unknown AST node {name!r}")
        cls = NODE_CLASSES[name]
        kwargs = {f.name: ast_from_obj(o[f.name]) for f in fields(cls)}
        if cls is Literal and isinstance(kwargs["value"], int) and not isinstance(kwargs["value"], bool):
            # JSON writes 3.0 as 3.0, but hand-edited files may use plain integers
            kwargs["value"] = float(kwargs["value"])
        return cls(**kwargs)
    raise TypeError(f"cannot deserialize {type(o).__name__}")


def program_from_obj(o: Any) -> List[Stmt]:
    statements = ast_from_obj(o)
    if not isinstance(statements, list):
        raise ValueError("AST JSON must be a list of statements")
    return statements
