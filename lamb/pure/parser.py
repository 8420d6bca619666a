r"""Recursive-descent parser producing a LambdaTerm from Tokens.

```
expr        ::= lambda | let | application
let         ::= "let" var "=" expr "in" expr    ; let x = N in M == (λx.M) N
lambda      ::= "\" var "." expr               ; abstraction bodies are greedy: \x.x y = λx.(x y)
application ::= atom { atom }                  ; associating by left: a b c = ((a b) c)
atom        ::= var | "(" expr ")"
```

`let` is sugar only: it never shows up as its own kind of term.
"""

from lamb.lang.error import ParseError
from lamb.pure.lexical import Abstraction, Application, Variable
from lamb.pure.scanner import Token, TokenType


class Parser:
    """Parses a complete token sequence. Stops at the first error (no recovery)."""

    def __init__(self, tokens, source=None):
        """source is the text tokens were scanned from. Only used for error diagnosis."""
        self.tokens = list(tokens)
        self.source = source
        self.cur = 0

    def parse(self):
        """Returns the LambdaTerm spanned by all of self.tokens. Raises ParseError otherwise."""
        if not self.tokens:
            raise ParseError("unexpected end of input", Token(TokenType.VAR, "", 1, 1))

        term = self.parse_expr()
        if not self.is_end():
            self.error("expected end of input, got '{}'", self.peek().text)
        return term

    def is_end(self):
        return self.cur >= len(self.tokens)

    def peek(self):
        if self.is_end():
            self.error("unexpected end of input")
        return self.tokens[self.cur]

    def check(self, token_type):
        return not self.is_end() and self.tokens[self.cur].type is token_type

    def advance(self):
        token = self.peek()
        self.cur += 1
        return token

    def consume(self, token_type, msg):
        """Consumes a token of token_type, or raises ParseError with msg at the current token."""
        if not self.check(token_type):
            self.error(msg)
        return self.advance()

    def error(self, msg, *exprs):
        """Raises ParseError at the current token (or at the last one, if all tokens have been consumed)."""
        if self.is_end():
            token = self.tokens[-1]
            if msg != "unexpected end of input":
                msg = f"unexpected end of input: {msg}"
        else:
            token = self.tokens[self.cur]
        raise ParseError(msg, token, self.context(token), list(exprs) if exprs else None)

    def context(self, token):
        if self.source is None:
            return None
        return self.source.split("\n")[token.line - 1]

    def parse_expr(self):
        if self.check(TokenType.LAMBDA):
            return self.parse_lambda()
        elif self.check(TokenType.LET):
            return self.parse_let()
        return self.parse_application()

    def parse_let(self):
        self.advance()
        name = self.consume(TokenType.VAR, "expected a variable for a let binding name")
        self.consume(TokenType.EQ, "expected '='")
        value = self.parse_expr()
        self.consume(TokenType.IN, "expected 'in'")
        body = self.parse_expr()
        return Application(Abstraction(Variable(name.text), body), value)

    def parse_lambda(self):
        self.advance()
        param = self.consume(TokenType.VAR, "expected a variable")
        self.consume(TokenType.DOT, "expected '.'")
        return Abstraction(Variable(param.text), self.parse_expr())

    def parse_application(self):
        term = self.parse_atom()
        while self.check(TokenType.VAR) or self.check(TokenType.LEFT_PAREN):
            term = Application(term, self.parse_atom())
        return term

    def parse_atom(self):
        if self.check(TokenType.LEFT_PAREN):
            self.advance()
            term = self.parse_expr()
            self.consume(TokenType.RIGHT_PAREN, "expected ')'")
            return term

        name = self.consume(TokenType.VAR, "expected a variable")
        return Variable(name.text)


def parse(tokens, source=None):
    """Returns (term, success). term is None on failure."""
    try:
        return Parser(tokens, source).parse(), True
    except ParseError:
        return None, False
