"""Recursive descent parser for policy expressions.

Grammar, loosest binding first::

    expression := term ("or" term)*
    term       := factor ("and" factor)*
    factor     := "not" factor | comparison
    comparison := atom (("==" | "!=" | "<" | ">" | "<=" | ">=" | "in") atom)?
    atom       := literal | list | variable | call | "(" expression ")"
"""

from .ast import BinaryOp, FunctionCall, ListLiteral, Literal, Node, UnaryOp, Variable
from .exceptions import PolicySyntaxError
from .lexer import Lexer, Token, TokenType

COMPARISON_OPERATORS = {
    TokenType.EQ: "==",
    TokenType.NEQ: "!=",
    TokenType.LT: "<",
    TokenType.GT: ">",
    TokenType.LTE: "<=",
    TokenType.GTE: ">=",
    TokenType.IN: "in",
}

LITERAL_TOKENS = (
    TokenType.INTEGER,
    TokenType.FLOAT,
    TokenType.STRING,
    TokenType.BOOLEAN,
    TokenType.NULL,
)


class Parser:
    """Recursive descent parser for policy expressions."""

    def __init__(self, lexer: Lexer):
        self.lexer = lexer
        self.current_token: Token = self.lexer.get_next_token()

    def error(self, message: str) -> None:
        raise PolicySyntaxError(message, self.current_token.position)

    def consume(self, token_type: TokenType) -> None:
        """Consume the current token if it matches the expected type."""
        if self.current_token.type == token_type:
            self.current_token = self.lexer.get_next_token()
        else:
            self.error(f"Expected {token_type.name}, found {self.current_token.type.name}")

    def parse(self) -> Node:
        node = self.expression()
        if self.current_token.type != TokenType.EOF:
            self.error("Unexpected token after expression")
        return node

    def expression(self) -> Node:
        node = self.term()
        while self.current_token.type == TokenType.OR:
            self.consume(TokenType.OR)
            node = BinaryOp(left=node, operator="or", right=self.term())
        return node

    def term(self) -> Node:
        node = self.factor()
        while self.current_token.type == TokenType.AND:
            self.consume(TokenType.AND)
            node = BinaryOp(left=node, operator="and", right=self.factor())
        return node

    def factor(self) -> Node:
        if self.current_token.type == TokenType.NOT:
            self.consume(TokenType.NOT)
            return UnaryOp(operator="not", operand=self.factor())
        return self.comparison()

    def comparison(self) -> Node:
        node = self.atom()
        token_type = self.current_token.type
        if token_type in COMPARISON_OPERATORS:
            self.consume(token_type)
            node = BinaryOp(left=node, operator=COMPARISON_OPERATORS[token_type], right=self.atom())
        return node

    def atom(self) -> Node:
        token = self.current_token

        if token.type in LITERAL_TOKENS:
            self.consume(token.type)
            return Literal(token.value)

        if token.type == TokenType.LPAREN:
            self.consume(TokenType.LPAREN)
            node = self.expression()
            self.consume(TokenType.RPAREN)
            return node

        if token.type == TokenType.LBRACKET:
            return ListLiteral(self._items(TokenType.LBRACKET, TokenType.RBRACKET))

        if token.type == TokenType.IDENTIFIER:
            name = str(token.value)
            self.consume(TokenType.IDENTIFIER)
            if self.current_token.type == TokenType.LPAREN:
                return FunctionCall(name, self._items(TokenType.LPAREN, TokenType.RPAREN))
            return Variable(name)

        self.error(f"Unexpected token: {token.type.name}")
        return Node()  # unreachable, error() raises

    def _items(self, opening: TokenType, closing: TokenType) -> list[Node]:
        """Parse a comma-separated expression list between two delimiters."""
        self.consume(opening)
        items: list[Node] = []
        if self.current_token.type != closing:
            items.append(self.expression())
            while self.current_token.type == TokenType.COMMA:
                self.consume(TokenType.COMMA)
                items.append(self.expression())
        self.consume(closing)
        return items
