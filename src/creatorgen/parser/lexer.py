# Copyright 2026 CreatorGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexical scanner for C# source files.

Converts raw source text into a sequence of tokens for the declaration parser.
Only the token classes needed to recover declarations are distinguished;
everything else is reported as generic keyword or operator tokens.
"""

import enum
import re
from dataclasses import dataclass

# ###############
# Public Interface
# ###############


class TokenType(enum.Enum):
    """All token types produced by the C# lexer."""

    # Structural keywords
    USING = "using"
    NAMESPACE = "namespace"
    CLASS = "class"
    STRUCT = "struct"
    INTERFACE = "interface"
    ENUM = "enum"
    DELEGATE = "delegate"
    TYPEOF = "typeof"
    STATIC = "static"
    NEW = "new"
    THIS = "this"
    BASE = "base"

    # Keyword groups
    MODIFIER = "MODIFIER"
    PARAMETER_MODIFIER = "PARAMETER_MODIFIER"
    PREDEFINED_TYPE = "PREDEFINED_TYPE"
    KEYWORD = "KEYWORD"

    # Symbols and operators
    LBRACE = "{"
    RBRACE = "}"
    LPAREN = "("
    RPAREN = ")"
    LBRACKET = "["
    RBRACKET = "]"
    LANGLE = "<"
    RANGLE = ">"
    COMMA = ","
    DOT = "."
    SEMICOLON = ";"
    COLON = ":"
    DOUBLE_COLON = "::"
    EQUALS = "="
    ARROW = "=>"
    QUESTION = "?"
    TILDE = "~"
    OPERATOR = "OPERATOR"

    # Literals
    STRING = "STRING"
    CHARACTER = "CHARACTER"
    NUMBER = "NUMBER"

    # Identifiers
    IDENTIFIER = "IDENTIFIER"

    # End of file
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """A lexical token with its source location.

    Attributes:
        type: The kind of token.
        value: The source text of the token. Literals keep their quotes and
            escapes; verbatim identifiers drop the leading ``@``.
        line: 1-based line number where the token starts.
        column: 1-based column number where the token starts.
    """

    type: TokenType
    value: str
    line: int
    column: int


class LexerError(Exception):
    """Raised when the scanner encounters an invalid character or unterminated literal.

    Attributes:
        line: 1-based line number of the error.
        column: 1-based column number of the error.
    """

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(f"Line {line}, column {column}: {message}")
        self.line = line
        self.column = column


def tokenize(source: str) -> list[Token]:
    """Tokenize C# source text into a sequence of tokens.

    Comments, whitespace and preprocessor directive lines are consumed and not
    included in the output. Of each ``#if`` group only the first branch whose
    condition is not the literal ``false`` is tokenized.

    Args:
        source: The full text of a ``.cs`` file.

    Returns:
        A list of Token objects ending with a single EOF token.

    Raises:
        LexerError: On unexpected characters, unterminated literals,
            unterminated block comments, or unbalanced ``#if`` groups.
    """
    return _Lexer(source).tokenize()


# ################
# Implementation
# ################

_KEYWORDS: dict[str, TokenType] = {
    "using": TokenType.USING,
    "namespace": TokenType.NAMESPACE,
    "class": TokenType.CLASS,
    "struct": TokenType.STRUCT,
    "interface": TokenType.INTERFACE,
    "enum": TokenType.ENUM,
    "delegate": TokenType.DELEGATE,
    "typeof": TokenType.TYPEOF,
    "static": TokenType.STATIC,
    "new": TokenType.NEW,
    "this": TokenType.THIS,
    "base": TokenType.BASE,
}

_MODIFIERS = frozenset(
    {
        "public", "private", "protected", "internal", "abstract", "sealed", "readonly",
        "extern", "unsafe", "volatile", "virtual", "override", "const", "fixed",
    }
)  # fmt: skip

_PARAMETER_MODIFIERS = frozenset({"ref", "out", "in", "params"})

_PREDEFINED_TYPES = frozenset(
    {
        "bool", "byte", "sbyte", "char", "decimal", "double", "float", "int", "uint",
        "long", "ulong", "short", "ushort", "object", "string", "void",
    }
)  # fmt: skip

_OTHER_KEYWORDS = frozenset(
    {
        "as", "break", "case", "catch", "checked", "continue", "default", "do", "else",
        "event", "explicit", "false", "finally", "for", "foreach", "goto", "if",
        "implicit", "is", "lock", "null", "operator", "return", "sizeof", "stackalloc",
        "switch", "throw", "true", "try", "unchecked", "while",
    }
)  # fmt: skip

_SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    "<": TokenType.LANGLE,
    ">": TokenType.RANGLE,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    ";": TokenType.SEMICOLON,
    "?": TokenType.QUESTION,
    "~": TokenType.TILDE,
}

_OPERATOR_CHARS = "+-*/%&|^!"
_OPERATOR_CONTINUATION = "+-&|="

_DIRECTIVE = re.compile(r"#[ \t]*(\w*)([^\n]*)")


class _Lexer:
    """Internal scanner state machine."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._line = 1
        self._column = 1
        self._tokens: list[Token] = []
        # True while only whitespace has been seen on the current line.
        self._line_start = True
        # One entry per open #if group: True once a branch has been taken.
        self._conditions: list[bool] = []

    def tokenize(self) -> list[Token]:
        """Run the scanner and return all tokens including the terminal EOF."""
        while self._pos < len(self._source):
            self._skip_trivia()
            if self._pos >= len(self._source):
                break
            self._scan_token()
            self._line_start = False
        self._tokens.append(Token(TokenType.EOF, "", self._line, self._column))
        return self._tokens

    # ------------------------------------------------------------------
    # Low-level character access helpers
    # ------------------------------------------------------------------

    def _current(self) -> str:
        """Return the character at the current position, or '' at end of input."""
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def _peek(self, offset: int = 1) -> str:
        """Return the character *offset* positions ahead, or '' past the end."""
        if self._pos + offset < len(self._source):
            return self._source[self._pos + offset]
        return ""

    def _advance(self) -> str:
        """Consume the current character, update position tracking, and return it."""
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._column = 1
            self._line_start = True
        else:
            self._column += 1
        return ch

    def _emit(self, token_type: TokenType, start: int, line: int, col: int) -> None:
        self._tokens.append(Token(token_type, self._source[start : self._pos], line, col))

    # ------------------------------------------------------------------
    # Whitespace, comment and directive skipping
    # ------------------------------------------------------------------

    def _skip_trivia(self) -> None:
        """Skip whitespace, comments and preprocessor lines at the current position."""
        while self._pos < len(self._source):
            ch = self._current()
            if ch in " \t\r\n\f\v\ufeff":
                self._advance()
            elif ch == "/" and self._peek() == "/":
                self._skip_line()
            elif ch == "/" and self._peek() == "*":
                self._skip_block_comment()
            elif ch == "#" and self._line_start:
                self._directive()
            else:
                break

    def _skip_line(self) -> None:
        """Consume through end-of-line (exclusive of the newline itself)."""
        while self._pos < len(self._source) and self._current() != "\n":
            self._advance()

    def _skip_block_comment(self) -> None:
        """Consume from '/*' through the matching '*/'."""
        start_line = self._line
        start_col = self._column
        self._advance()  # /
        self._advance()  # *
        while self._pos < len(self._source):
            if self._current() == "*" and self._peek() == "/":
                self._advance()  # *
                self._advance()  # /
                return
            self._advance()
        raise LexerError("Unterminated block comment", start_line, start_col)

    def _directive(self) -> None:
        """Consume a preprocessor line, skipping the branches of ``#if`` groups that are not taken."""
        line = self._line
        col = self._column
        keyword, condition = _parse_directive(self._source, self._pos)
        self._skip_line()
        if keyword == "if":
            taken = condition != "false"
            self._conditions.append(taken)
            if not taken:
                self._skip_section(line, col)
        elif keyword in ("elif", "else"):
            if not self._conditions:
                raise LexerError(f"Unexpected #{keyword}", line, col)
            if self._conditions[-1] or (keyword == "elif" and condition == "false"):
                self._skip_section(line, col)
            else:
                self._conditions[-1] = True
        elif keyword == "endif":
            if not self._conditions:
                raise LexerError("Unexpected #endif", line, col)
            self._conditions.pop()

    def _skip_section(self, line: int, col: int) -> None:
        """Skip lines up to the next ``#elif``, ``#else`` or ``#endif`` of the current group.

        Stops on the ``#`` of that directive so the trivia loop handles it.
        """
        depth = 0
        while self._pos < len(self._source):
            self._advance()  # \n
            while self._current() in (" ", "\t"):
                self._advance()
            if self._current() == "#":
                keyword, _ = _parse_directive(self._source, self._pos)
                if keyword == "if":
                    depth += 1
                elif keyword == "endif" and depth > 0:
                    depth -= 1
                elif keyword in ("elif", "else", "endif") and depth == 0:
                    return
            self._skip_line()
        raise LexerError("Unterminated #if section", line, col)

    # ------------------------------------------------------------------
    # Token scanning dispatcher
    # ------------------------------------------------------------------

    def _scan_token(self) -> None:
        """Dispatch to the appropriate handler based on the current character."""
        ch = self._current()
        line = self._line
        col = self._column
        start = self._pos

        if ch == "@" and (self._peek().isalpha() or self._peek() == "_"):
            self._advance()  # @
            self._scan_identifier(line, col, verbatim=True)
        elif ch in "@$" or ch == '"':
            self._scan_string(line, col)
        elif ch == "'":
            self._scan_character(line, col)
        elif ch.isdigit() or (ch == "." and self._peek().isdigit()):
            self._scan_number(line, col)
        elif ch.isalpha() or ch == "_":
            self._scan_identifier(line, col, verbatim=False)
        elif ch == ":":
            self._advance()
            if self._current() == ":":
                self._advance()
                self._emit(TokenType.DOUBLE_COLON, start, line, col)
            else:
                self._emit(TokenType.COLON, start, line, col)
        elif ch == "=":
            self._advance()
            if self._current() == ">":
                self._advance()
                self._emit(TokenType.ARROW, start, line, col)
            elif self._current() == "=":
                self._advance()
                self._emit(TokenType.OPERATOR, start, line, col)
            else:
                self._emit(TokenType.EQUALS, start, line, col)
        elif ch in _SINGLE_CHAR_TOKENS:
            self._advance()
            self._emit(_SINGLE_CHAR_TOKENS[ch], start, line, col)
        elif ch in _OPERATOR_CHARS:
            self._advance()
            while self._current() != "" and self._current() in _OPERATOR_CONTINUATION:
                self._advance()
            self._emit(TokenType.OPERATOR, start, line, col)
        else:
            raise LexerError(f"Unexpected character: {ch!r}", line, col)

    # ------------------------------------------------------------------
    # Identifier and literal scanners
    # ------------------------------------------------------------------

    def _scan_identifier(self, line: int, col: int, *, verbatim: bool) -> None:
        """Scan an identifier and map it to a keyword token type if applicable."""
        start = self._pos
        while self._pos < len(self._source) and (self._current().isalnum() or self._current() == "_"):
            self._advance()
        value = self._source[start : self._pos]
        if verbatim:
            self._tokens.append(Token(TokenType.IDENTIFIER, value, line, col))
            return
        self._tokens.append(Token(_classify_word(value), value, line, col))

    def _scan_number(self, line: int, col: int) -> None:
        """Scan an integer or real literal including hex/binary prefixes and suffixes."""
        start = self._pos
        is_hex = self._current() == "0" and self._peek() in "xXbB" and self._peek() != ""
        while self._pos < len(self._source):
            ch = self._current()
            if ch.isalnum() or ch == "_":
                self._advance()
                if not is_hex and ch in "eE" and self._current() in "+-" and self._current() != "":
                    self._advance()
            elif ch == "." and self._peek().isdigit():
                self._advance()
            else:
                break
        self._emit(TokenType.NUMBER, start, line, col)

    def _scan_character(self, line: int, col: int) -> None:
        """Scan a character literal such as ``'a'`` or ``'\\n'``."""
        start = self._pos
        self._advance()  # opening '
        while self._pos < len(self._source):
            ch = self._current()
            if ch == "\n":
                break
            self._advance()
            if ch == "\\":
                if self._pos >= len(self._source):
                    break
                self._advance()
            elif ch == "'":
                self._emit(TokenType.CHARACTER, start, line, col)
                return
        raise LexerError("Unterminated character literal", line, col)

    def _scan_string(self, line: int, col: int) -> None:
        """Scan a regular, verbatim, interpolated or raw string literal."""
        start = self._pos
        interpolated = False
        verbatim = False
        while self._current() in ("@", "$"):
            if self._current() == "@":
                verbatim = True
            else:
                interpolated = True
            self._advance()
        if self._current() != '"':
            raise LexerError(f"Unexpected character: {self._source[start]!r}", line, col)

        quotes = 0
        while self._peek(quotes) == '"':
            quotes += 1
        if quotes >= 3:
            self._scan_raw_string(quotes, line, col)
        else:
            self._advance()  # opening "
            self._scan_string_body(verbatim=verbatim, interpolated=interpolated, line=line, col=col)
        self._emit(TokenType.STRING, start, line, col)

    def _scan_raw_string(self, quotes: int, line: int, col: int) -> None:
        """Consume a raw string delimited by *quotes* double quotes on each side."""
        for _ in range(quotes):
            self._advance()
        while self._pos < len(self._source):
            if self._source.startswith('"' * quotes, self._pos):
                for _ in range(quotes):
                    self._advance()
                return
            self._advance()
        raise LexerError("Unterminated raw string literal", line, col)

    def _scan_string_body(self, *, verbatim: bool, interpolated: bool, line: int, col: int) -> None:
        """Consume characters up to and including the closing quote."""
        while self._pos < len(self._source):
            ch = self._current()
            if ch == "\n" and not verbatim:
                break
            if ch == '"':
                self._advance()
                if verbatim and self._current() == '"':
                    self._advance()  # "" escape
                    continue
                return
            if ch == "\\" and not verbatim:
                self._advance()
                if self._pos < len(self._source):
                    self._advance()
                continue
            if interpolated and ch == "{":
                self._advance()
                if self._current() == "{":
                    self._advance()  # {{ escape
                else:
                    self._skip_interpolation_hole(line, col)
                continue
            self._advance()
        raise LexerError("Unterminated string literal", line, col)

    def _skip_interpolation_hole(self, line: int, col: int) -> None:
        """Consume an interpolation hole body through its closing brace."""
        depth = 1
        while self._pos < len(self._source):
            ch = self._current()
            if ch == '"':
                self._advance()
                self._scan_string_body(verbatim=False, interpolated=False, line=line, col=col)
                continue
            self._advance()
            if ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    return
        raise LexerError("Unterminated interpolated string", line, col)


def _parse_directive(source: str, pos: int) -> tuple[str, str]:
    """Return the directive name and its condition text for the ``#`` at *pos*."""
    match = _DIRECTIVE.match(source, pos)
    if match is None:
        return "", ""
    return match.group(1), match.group(2).split("//", 1)[0].strip()


def _classify_word(value: str) -> TokenType:
    if value in _KEYWORDS:
        return _KEYWORDS[value]
    if value in _MODIFIERS:
        return TokenType.MODIFIER
    if value in _PARAMETER_MODIFIERS:
        return TokenType.PARAMETER_MODIFIER
    if value in _PREDEFINED_TYPES:
        return TokenType.PREDEFINED_TYPE
    if value in _OTHER_KEYWORDS:
        return TokenType.KEYWORD
    return TokenType.IDENTIFIER
