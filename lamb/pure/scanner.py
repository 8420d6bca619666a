r"""Lexical analysis of la source text.

```
<lambda>  ::= "\"
<dot>     ::= "."
<eq>      ::= "="
<parens>  ::= "(" | ")"
<let>     ::= "let"                 ; only when followed by a space, a newline or the end of input
<in>      ::= "in"                  ; same as <let>
<var>     ::= (<letter> | <digit> | <symbol>)+   ; <symbol> is any of !@#$%^&*_+{}[]:;"'<>?,/|~`- (never "=")
<comment> ::= "//" <char>* "\n"     ; skipped
```

Spaces and newlines separate tokens and are not emitted. Anything else is an error: scanning stops at the first
unrecognized character.
"""

from enum import Enum
from string import ascii_letters, digits
from typing import NamedTuple

from lamb.lang.error import LexError


class TokenType(Enum):
    LAMBDA = "\\"
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    DOT = "."
    VAR = "<var>"
    LET = "let"
    IN = "in"
    EQ = "="


class Token(NamedTuple):
    type: TokenType
    text: str
    line: int    # 1-based
    column: int  # 1-based, first character of the token


class Scanner:
    """Converts source text into Tokens, left to right."""
    SINGLE = {
        "\\": TokenType.LAMBDA,
        "=": TokenType.EQ,
        "(": TokenType.LEFT_PAREN,
        ")": TokenType.RIGHT_PAREN,
        ".": TokenType.DOT,
    }
    KEYWORDS = {"let": TokenType.LET, "in": TokenType.IN}
    SYMBOLS = "!@#$%^&*_+{}[]:;\"'<>?,/|~`-"  # no "=": it always ends a variable, so "let 0=x" binds 0
    VAR_CHARS = frozenset(ascii_letters + digits + SYMBOLS)
    WHITESPACE = " \n"
    COMMENT = "//"

    def __init__(self, source):
        self.source = source
        self.cur = 0
        self.line = 1
        self.column = 1
        self.tokens = []

    def scan(self):
        """Returns all tokens in self.source. Raises LexError (carrying the tokens scanned so far) on the first
        unrecognized character.
        """
        while not self.is_end():
            char = self.peek()

            if char in Scanner.WHITESPACE:
                self.advance()
            elif char in Scanner.SINGLE:
                self.emit(Scanner.SINGLE[char], char)
            elif self.source.startswith(Scanner.COMMENT, self.cur):
                while not self.is_end() and self.peek() != "\n":
                    self.advance()
            elif self.scan_keyword():
                continue
            elif char in Scanner.VAR_CHARS:
                self.scan_var()
            else:
                raise LexError(char, self.line, self.column, self.current_line(), self.tokens)

        return self.tokens

    def is_end(self):
        return self.cur >= len(self.source)

    def peek(self):
        return self.source[self.cur]

    def advance(self):
        """Moves past the current character, keeping track of line and column."""
        if self.peek() == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.cur += 1

    def emit(self, token_type, text):
        """Appends token starting at the current position and moves past it."""
        self.tokens.append(Token(token_type, text, self.line, self.column))
        for __ in text:
            self.advance()

    def scan_keyword(self):
        """Emits 'let'/'in' if one starts here and is followed by whitespace or the end of input."""
        for keyword, token_type in Scanner.KEYWORDS.items():
            end = self.cur + len(keyword)
            if self.source.startswith(keyword, self.cur) and (end >= len(self.source)
                                                              or self.source[end] in Scanner.WHITESPACE):
                self.emit(token_type, keyword)
                return True
        return False

    def scan_var(self):
        end = self.cur
        while end < len(self.source) and self.source[end] in Scanner.VAR_CHARS:
            end += 1
        self.emit(TokenType.VAR, self.source[self.cur:end])

    def current_line(self):
        """Text of the line being scanned, used for error diagnosis."""
        start = self.source.rfind("\n", 0, self.cur) + 1
        end = self.source.find("\n", self.cur)
        return self.source[start:end if end != -1 else len(self.source)]


def scan(source):
    """Returns (tokens, success). On failure, tokens are the ones scanned before the offending character."""
    try:
        return Scanner(source).scan(), True
    except LexError as error:
        return error.tokens, False
