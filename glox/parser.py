"""Recursive-descent parser for glox.

Each precedence level has its own method, from lowest to highest:

    assignment -> logic_or -> logic_and -> equality -> comparison
               -> term -> factor -> unary -> call -> primary

Binary levels are left-associative (the loop folds further operators
onto the left operand); assignment is right-associative and its target
must be a plain identifier.

There is no error recovery: the first syntax error raises `ParseError`
and the whole input is rejected. `for` loops are desugared here into a
block holding the initializer and a `while` loop, so the interpreter
never sees them.
"""

from __future__ import annotations

from typing import List, Optional

from .ast import (
    Assign, BinaryOp, Block, Call, Expr, ExprStmt, FuncDecl, Grouping,
    Ident, IfStmt, Literal, Logical, PrintStmt, ReturnStmt, Stmt,
    UnaryOp, VarDecl, WhileStmt,
)
from .errors import ParseError
from .tokens import Position, Token, TokenType


class Parser:
    def __init__(self, tokens: List[Token]):
        # Comments carry no meaning for the grammar; drop them at the boundary.
        self.tokens = [t for t in tokens if t.type is not TokenType.COMMENT]
        if not self.tokens or self.tokens[-1].type is not TokenType.EOF:
            line = self.tokens[-1].line + 1 if self.tokens else 1
            self.tokens.append(Token(TokenType.EOF, '', None, Position(line, 0, 0)))
        self.pos = 0

    # Token helpers

    def peek(self) -> Token:
        return self.tokens[self.pos]

    def previous(self) -> Token:
        return self.tokens[self.pos - 1]

    def is_at_end(self) -> bool:
        return self.peek().type is TokenType.EOF

    def advance(self) -> Token:
        token = self.peek()
        if not self.is_at_end():
            self.pos += 1
        return token

    def check(self, token_type: TokenType) -> bool:
        return self.peek().type is token_type

    def match(self, *types: TokenType) -> bool:
        for token_type in types:
            if self.check(token_type):
                self.advance()
                return True
        return False

    def consume(self, expected: TokenType) -> Token:
        if self.check(expected):
            return self.advance()
        token = self.peek()
        raise ParseError(f"expected {expected}, got {token.type}", token.line, token.column)

    # Declarations and statements

    def parse(self) -> List[Stmt]:
        statements: List[Stmt] = []
        try:
            while not self.is_at_end():
                statements.append(self.declaration())
        except RecursionError:
            token = self.peek()
            raise ParseError('expression nested too deeply', token.line, token.column) from None
        return statements

    def declaration(self) -> Stmt:
        if self.match(TokenType.VAR):
            return self.var_declaration()
        if self.match(TokenType.FUN):
            return self.fun_declaration()
        return self.statement()

    def var_declaration(self) -> VarDecl:
        name = self.consume(TokenType.IDENTIFIER)
        initializer: Optional[Expr] = None
        if self.match(TokenType.EQUAL):
            initializer = self.expression()
        self.consume(TokenType.SEMICOLON)
        return VarDecl(name, initializer)

    def fun_declaration(self) -> FuncDecl:
        name = self.consume(TokenType.IDENTIFIER)
        self.consume(TokenType.LEFT_PAREN)
        params: List[Token] = []
        if not self.check(TokenType.RIGHT_PAREN):
            params.append(self.consume(TokenType.IDENTIFIER))
            while self.match(TokenType.COMMA):
                params.append(self.consume(TokenType.IDENTIFIER))
        self.consume(TokenType.RIGHT_PAREN)
        self.consume(TokenType.LEFT_BRACE)
        body = self.block()
        return FuncDecl(name, params, body)

    def statement(self) -> Stmt:
        if self.match(TokenType.IF):
            return self.if_statement()
        if self.match(TokenType.PRINT):
            return self.print_statement()
        if self.match(TokenType.LEFT_BRACE):
            return Block(self.block())
        if self.match(TokenType.WHILE):
            return self.while_statement()
        if self.match(TokenType.FOR):
            return self.for_statement()
        if self.match(TokenType.RETURN):
            return self.return_statement()
        return self.expression_statement()

    def block(self) -> List[Stmt]:
        """Parse declarations up to the closing brace. The opening brace is already consumed."""
        statements: List[Stmt] = []
        while not self.check(TokenType.RIGHT_BRACE) and not self.is_at_end():
            statements.append(self.declaration())
        self.consume(TokenType.RIGHT_BRACE)
        return statements

    def if_statement(self) -> IfStmt:
        # No mandatory parentheses: `(cond)` simply parses as a grouping.
        condition = self.expression()
        then_branch = self.statement()
        else_branch = None
        if self.match(TokenType.ELSE):
            else_branch = self.statement()
        return IfStmt(condition, then_branch, else_branch)

    def print_statement(self) -> PrintStmt:
        value = self.expression()
        self.consume(TokenType.SEMICOLON)
        return PrintStmt(value)

    def while_statement(self) -> WhileStmt:
        condition = self.expression()
        body = self.statement()
        return WhileStmt(condition, body)

    def for_statement(self) -> Block:
        self.consume(TokenType.LEFT_PAREN)
        initializer: Optional[Stmt]
        if self.match(TokenType.SEMICOLON):
            initializer = None
        elif self.match(TokenType.VAR):
            initializer = self.var_declaration()
        else:
            initializer = self.expression_statement()

        condition: Expr = Literal(True)
        if not self.check(TokenType.SEMICOLON):
            condition = self.expression()
        self.consume(TokenType.SEMICOLON)

        increment: Optional[Expr] = None
        if not self.check(TokenType.RIGHT_PAREN):
            increment = self.expression()
        self.consume(TokenType.RIGHT_PAREN)

        body = self.statement()
        loop_body: List[Stmt] = [body]
        if increment is not None:
            loop_body.append(ExprStmt(increment))
        loop = WhileStmt(condition, Block(loop_body))
        if initializer is None:
            return Block([loop])
        return Block([initializer, loop])

    def return_statement(self) -> ReturnStmt:
        keyword = self.previous()
        value = None
        if not self.check(TokenType.SEMICOLON):
            value = self.expression()
        self.consume(TokenType.SEMICOLON)
        return ReturnStmt(keyword, value)

    def expression_statement(self) -> ExprStmt:
        expr = self.expression()
        self.consume(TokenType.SEMICOLON)
        return ExprStmt(expr)

    # Expressions

    def expression(self) -> Expr:
        return self.assignment()

    def assignment(self) -> Expr:
        expr = self.logic_or()
        if self.match(TokenType.EQUAL):
            equals = self.previous()
            value = self.assignment()
            if isinstance(expr, Ident):
                return Assign(expr.name, value)
            raise ParseError('invalid assignment target', equals.line, equals.column)
        return expr

    def logic_or(self) -> Expr:
        expr = self.logic_and()
        while self.match(TokenType.OR):
            operator = self.previous()
            right = self.logic_and()
            expr = Logical(expr, operator, right)
        return expr

    def logic_and(self) -> Expr:
        expr = self.equality()
        while self.match(TokenType.AND):
            operator = self.previous()
            right = self.equality()
            expr = Logical(expr, operator, right)
        return expr

    def equality(self) -> Expr:
        expr = self.comparison()
        while self.match(TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL):
            operator = self.previous()
            right = self.comparison()
            expr = BinaryOp(expr, operator, right)
        return expr

    def comparison(self) -> Expr:
        expr = self.term()
        while self.match(TokenType.GREATER, TokenType.GREATER_EQUAL,
                         TokenType.LESS, TokenType.LESS_EQUAL):
            operator = self.previous()
            right = self.term()
            expr = BinaryOp(expr, operator, right)
        return expr

    def term(self) -> Expr:
        expr = self.factor()
        while self.match(TokenType.MINUS, TokenType.PLUS):
            operator = self.previous()
            right = self.factor()
            expr = BinaryOp(expr, operator, right)
        return expr

    def factor(self) -> Expr:
        expr = self.unary()
        while self.match(TokenType.SLASH, TokenType.STAR):
            operator = self.previous()
            right = self.unary()
            expr = BinaryOp(expr, operator, right)
        return expr

    def unary(self) -> Expr:
        if self.match(TokenType.BANG, TokenType.MINUS):
            operator = self.previous()
            operand = self.unary()
            return UnaryOp(operator, operand)
        return self.call()

    def call(self) -> Expr:
        expr = self.primary()
        while self.match(TokenType.LEFT_PAREN):
            expr = self.finish_call(expr)
        return expr

    def finish_call(self, callee: Expr) -> Call:
        arguments: List[Expr] = []
        if not self.check(TokenType.RIGHT_PAREN):
            arguments.append(self.expression())
            while self.match(TokenType.COMMA):
                arguments.append(self.expression())
        paren = self.consume(TokenType.RIGHT_PAREN)
        return Call(callee, paren, arguments)

    def primary(self) -> Expr:
        if self.match(TokenType.FALSE):
            return Literal(False)
        if self.match(TokenType.TRUE):
            return Literal(True)
        if self.match(TokenType.NIL):
            return Literal(None)
        if self.match(TokenType.NUMBER):
            return Literal(float(self.previous().literal))
        if self.match(TokenType.STRING):
            return Literal(self.previous().literal)
        if self.match(TokenType.IDENTIFIER):
            return Ident(self.previous())
        if self.match(TokenType.LEFT_PAREN):
            expr = self.expression()
            self.consume(TokenType.RIGHT_PAREN)
            return Grouping(expr)
        token = self.peek()
        raise ParseError(f"expected expression, got {token.type}", token.line, token.column)


def parse(tokens: List[Token]) -> List[Stmt]:
    """Parse a token sequence into a list of statements."""
    return Parser(tokens).parse()
