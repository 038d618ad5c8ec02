"""
JavaScript minifier for generated runtime scripts.

Tokenizes the script first, so string, template and regex literals and
comments are recognized before any whitespace is removed, then re-emits
the tokens with the minimum separator each boundary needs:

- a newline where the original gap held one and automatic semicolon
  insertion could depend on it,
- a space where two tokens would otherwise fuse (``return x``, ``a - -b``),
- nothing otherwise.

Re-tokenizing the output yields the same tokens and the same separators,
so ``minify_js(minify_js(s)) == minify_js(s)``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from dynui.core.errors import RenderError


class TokenType(Enum):
    """Token types of the minifier's lexer."""

    IDENTIFIER = "IDENTIFIER"  # includes keywords
    NUMBER = "NUMBER"
    STRING = "STRING"
    TEMPLATE = "TEMPLATE"
    REGEX = "REGEX"
    PUNCTUATOR = "PUNCTUATOR"


@dataclass
class Token:
    """
    A single lexical token.

    Attributes:
        type: Type of token
        value: Source text of the token, verbatim
        newline_before: Whether the whitespace or comments before it held a line break
    """

    type: TokenType
    value: str
    newline_before: bool = False


# Longest first
PUNCTUATORS = (
    ">>>=",
    "...",
    "===",
    "!==",
    "**=",
    "<<=",
    ">>=",
    ">>>",
    "&&=",
    "||=",
    "??=",
    "=>",
    "==",
    "!=",
    "<=",
    ">=",
    "&&",
    "||",
    "??",
    "?.",
    "++",
    "--",
    "+=",
    "-=",
    "*=",
    "/=",
    "%=",
    "&=",
    "|=",
    "^=",
    "**",
    "<<",
    ">>",
)

# After these keywords a slash starts a regex literal, not a division
REGEX_KEYWORDS = frozenset(
    {
        "return",
        "typeof",
        "instanceof",
        "in",
        "of",
        "new",
        "delete",
        "void",
        "throw",
        "case",
        "do",
        "else",
        "yield",
        "await",
    }
)

# A line break after these always ends the statement
RESTRICTED_KEYWORDS = frozenset({"return", "throw", "break", "continue", "yield"})

_WORDS = (TokenType.IDENTIFIER, TokenType.NUMBER)
_VALUES = (TokenType.IDENTIFIER, TokenType.NUMBER, TokenType.STRING, TokenType.TEMPLATE, TokenType.REGEX)

# Tokens after which a line break may end a statement
_STATEMENT_END_PUNCTUATORS = frozenset({")", "]", "}", "++", "--"})
# Tokens that may begin a statement where a preceding line break matters
_STATEMENT_START_PUNCTUATORS = frozenset({"{", "++", "--", "!", "~"})
_STATEMENT_START_TYPES = (TokenType.IDENTIFIER, TokenType.NUMBER, TokenType.STRING, TokenType.REGEX)

# (last char of previous token, first char of next token) pairs that fuse
_FUSING_PAIRS = frozenset({("+", "+"), ("-", "-"), ("/", "/"), ("/", "*"), ("?", "."), ("<", "!")})


def _is_identifier_start(ch: str) -> bool:
    return ch.isalpha() or ch in "_$" or (not ch.isascii() and ch.isidentifier())


def _is_identifier_part(ch: str) -> bool:
    return ch.isalnum() or ch in "_$" or (not ch.isascii() and ("a" + ch).isidentifier())


class JsLexer:
    """
    Lexer for JavaScript source.

    Only as much of the grammar as minification needs: literal and comment
    boundaries, identifiers, numbers and punctuators.
    """

    def __init__(self, text: str):
        """
        Initialize lexer.

        Args:
            text: Source text to tokenize
        """
        self.text = text.replace("\r\n", "\n")
        self.pos = 0
        self.line = 1
        self.tokens: list[Token] = []

    def current_char(self) -> str | None:
        """Get current character or None if at end."""
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def peek_char(self, offset: int = 1) -> str | None:
        """Peek ahead at character."""
        pos = self.pos + offset
        if pos >= len(self.text):
            return None
        return self.text[pos]

    def advance(self) -> None:
        """Move to next character, tracking lines."""
        if self.pos < len(self.text):
            if self.text[self.pos] == "\n":
                self.line += 1
            self.pos += 1

    def error(self, message: str) -> RenderError:
        return RenderError(f"{message} at line {self.line}")

    def skip_whitespace_and_comments(self) -> bool:
        """Skip whitespace and comments; report whether a line break was crossed."""
        newline = False
        while True:
            ch = self.current_char()
            if ch is None:
                return newline
            if ch == "\n":
                newline = True
                self.advance()
            elif ch.isspace() or ch == "\ufeff":
                self.advance()
            elif ch == "/" and self.peek_char() == "/":
                while self.current_char() not in (None, "\n"):
                    self.advance()
            elif ch == "/" and self.peek_char() == "*":
                end = self.text.find("*/", self.pos + 2)
                if end == -1:
                    raise self.error("Unterminated block comment")
                if "\n" in self.text[self.pos : end]:
                    newline = True
                while self.pos < end + 2:
                    self.advance()
            else:
                return newline

    def read_string(self) -> str:
        """Read a quoted string, returning its source text."""
        start = self.pos
        quote = self.current_char()
        self.advance()  # skip opening quote

        while True:
            current = self.current_char()
            if current is None or current == "\n":
                raise self.error("Unterminated string literal")
            if current == "\\":
                self.advance()
                self.advance()
            elif current == quote:
                self.advance()
                return self.text[start : self.pos]
            else:
                self.advance()

    def read_template(self) -> str:
        """Read a template literal, including nested ``${...}`` expressions."""
        start = self.pos
        self.advance()  # skip opening backtick

        while True:
            current = self.current_char()
            if current is None:
                raise self.error("Unterminated template literal")
            if current == "\\":
                self.advance()
                self.advance()
            elif current == "`":
                self.advance()
                return self.text[start : self.pos]
            elif current == "$" and self.peek_char() == "{":
                self.advance()
                self.advance()
                self.skip_template_expression()
            else:
                self.advance()

    def skip_template_expression(self) -> None:
        """Skip to the ``}`` closing a template substitution."""
        depth = 1
        while True:
            current = self.current_char()
            if current is None:
                raise self.error("Unterminated template substitution")
            if current in ("'", '"'):
                self.read_string()
            elif current == "`":
                self.read_template()
            elif current == "{":
                depth += 1
                self.advance()
            elif current == "}":
                depth -= 1
                self.advance()
                if depth == 0:
                    return
            else:
                self.advance()

    def read_regex(self) -> str:
        """Read a regex literal with its flags."""
        start = self.pos
        self.advance()  # skip opening slash
        in_class = False

        while True:
            current = self.current_char()
            if current is None or current == "\n":
                raise self.error("Unterminated regular expression")
            if current == "\\":
                self.advance()
                self.advance()
                continue
            if current == "[":
                in_class = True
            elif current == "]":
                in_class = False
            elif current == "/" and not in_class:
                self.advance()
                break
            self.advance()

        while (ch := self.current_char()) is not None and _is_identifier_part(ch):
            self.advance()
        return self.text[start : self.pos]

    def read_number(self) -> str:
        """Read a numeric literal (decimal, exponent, hex/octal/binary, separators, bigint)."""
        start = self.pos
        while True:
            ch = self.current_char()
            if ch is None:
                break
            if ch.isalnum() or ch in "._":
                self.advance()
            elif ch in "+-" and self.text[self.pos - 1] in "eE" and not self.text[start:].startswith(
                ("0x", "0X")
            ):
                self.advance()
            else:
                break
        return self.text[start : self.pos]

    def read_identifier(self) -> str:
        start = self.pos
        while (ch := self.current_char()) is not None and _is_identifier_part(ch):
            self.advance()
        return self.text[start : self.pos]

    def read_punctuator(self) -> str:
        for punct in PUNCTUATORS:
            if self.text.startswith(punct, self.pos):
                # "?." followed by a digit is a conditional and a number
                if punct == "?." and (self.peek_char(2) or "").isdigit():
                    break
                for _ in punct:
                    self.advance()
                return punct
        ch = self.current_char() or ""
        self.advance()
        return ch

    def regex_allowed(self) -> bool:
        """Whether a slash at this point starts a regex literal."""
        if not self.tokens:
            return True
        prev = self.tokens[-1]
        if prev.type is TokenType.IDENTIFIER:
            return prev.value in REGEX_KEYWORDS
        if prev.type is TokenType.PUNCTUATOR:
            return prev.value not in (")", "]", "}", "++", "--")
        return False

    def tokenize(self) -> list[Token]:
        """Tokenize the whole source."""
        while True:
            newline = self.skip_whitespace_and_comments()
            ch = self.current_char()
            if ch is None:
                return self.tokens

            if ch in ("'", '"'):
                token = Token(TokenType.STRING, self.read_string())
            elif ch == "`":
                token = Token(TokenType.TEMPLATE, self.read_template())
            elif ch.isdigit() or (ch == "." and (self.peek_char() or "").isdigit()):
                token = Token(TokenType.NUMBER, self.read_number())
            elif _is_identifier_start(ch):
                token = Token(TokenType.IDENTIFIER, self.read_identifier())
            elif ch == "/" and self.regex_allowed():
                token = Token(TokenType.REGEX, self.read_regex())
            else:
                token = Token(TokenType.PUNCTUATOR, self.read_punctuator())

            token.newline_before = newline
            self.tokens.append(token)


def _can_end_statement(token: Token) -> bool:
    if token.type in _VALUES:
        return True
    return token.value in _STATEMENT_END_PUNCTUATORS


def _can_start_statement(token: Token) -> bool:
    if token.type in _STATEMENT_START_TYPES:
        return True
    return token.type is TokenType.PUNCTUATOR and token.value in _STATEMENT_START_PUNCTUATORS


def separator(prev: Token, token: Token) -> str:
    """The minimal text needed between two adjacent tokens."""
    if token.newline_before and prev.type is TokenType.IDENTIFIER and prev.value in RESTRICTED_KEYWORDS:
        return "\n"
    if token.newline_before and _can_end_statement(prev) and _can_start_statement(token):
        return "\n"
    if prev.type in _WORDS and token.type in _WORDS:
        return " "
    if prev.type is TokenType.REGEX and token.type in _WORDS:
        return " "
    if prev.type is TokenType.NUMBER and token.value.startswith("."):
        return " "
    if (prev.value[-1], token.value[0]) in _FUSING_PAIRS:
        return " "
    if prev.value == "--" and token.value.startswith(">"):
        return " "
    return ""


def tokenize(text: str) -> list[Token]:
    """Tokenize JavaScript source."""
    return JsLexer(text).tokenize()


def minify_js(text: str) -> str:
    """
    Minify JavaScript source.

    Comments and redundant whitespace are removed; identifiers, keywords
    and literal contents are left untouched.

    Raises:
        RenderError: On unterminated literals or comments
    """
    tokens = tokenize(text)
    if not tokens:
        return ""

    parts = [tokens[0].value]
    for prev, token in zip(tokens, tokens[1:]):
        parts.append(separator(prev, token))
        parts.append(token.value)
    return "".join(parts)
