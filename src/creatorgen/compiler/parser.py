# Copyright 2026 CreatorGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recursive-descent parser for the declaration structure of C# files.

Converts a token stream produced by the lexer into a CompilationUnit. Only
what the generator needs is kept: using directives, namespaces, type
declarations with their attributes, base lists and constructors. Method,
property and field members as well as all bodies are skipped by balanced
bracket scanning.
"""

from creatorgen.compiler.syntax import (
    AttributeArgumentSyntax,
    AttributeSyntax,
    CompilationUnit,
    ConstructorSyntax,
    Expression,
    ExpressionSyntax,
    NamespaceDeclarationSyntax,
    NamespaceMember,
    ParameterSyntax,
    TypeDeclarationSyntax,
    TypeOfExpression,
    TypeSyntax,
    UsingDirectiveSyntax,
)
from creatorgen.model.types import TypeKind
from creatorgen.parser.lexer import Token, TokenType, tokenize

# ###############
# Public Interface
# ###############


class ParseError(Exception):
    """Raised when the parser encounters a syntactically invalid construct.

    Attributes:
        line: 1-based line number of the error.
        column: 1-based column number of the error.
    """

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(f"Line {line}, column {column}: {message}")
        self.line = line
        self.column = column


def parse(source: str, path: str | None = None) -> CompilationUnit:
    """Parse C# source text into a CompilationUnit.

    Args:
        source: The full text of a ``.cs`` file.
        path: Optional file path recorded on the result.

    Returns:
        A CompilationUnit holding the file's using directives, namespaces and
        type declarations.

    Raises:
        LexerError: If the source contains invalid characters or unterminated literals.
        ParseError: If the declaration structure is syntactically invalid.
    """
    tokens = tokenize(source)
    unit = _Parser(tokens).parse()
    unit.path = path
    return unit


# ################
# Implementation
# ################

_TYPE_KEYWORDS: frozenset[TokenType] = frozenset(
    {
        TokenType.CLASS,
        TokenType.STRUCT,
        TokenType.INTERFACE,
        TokenType.ENUM,
        TokenType.DELEGATE,
    }
)

_KEYWORD_KINDS: dict[TokenType, TypeKind] = {
    TokenType.CLASS: TypeKind.CLASS,
    TokenType.STRUCT: TypeKind.STRUCT,
    TokenType.INTERFACE: TypeKind.INTERFACE,
    TokenType.ENUM: TypeKind.ENUM,
    TokenType.DELEGATE: TypeKind.DELEGATE,
}

_CONTEXTUAL_MODIFIERS = frozenset({"partial", "async", "file", "required"})

# Tokens that may follow a contextual modifier when it is used as a modifier.
_AFTER_MODIFIER: frozenset[TokenType] = frozenset(
    {
        TokenType.MODIFIER,
        TokenType.STATIC,
        TokenType.NEW,
        TokenType.IDENTIFIER,
        TokenType.PREDEFINED_TYPE,
        *_TYPE_KEYWORDS,
    }
)

_OPENERS: dict[TokenType, TokenType] = {
    TokenType.LPAREN: TokenType.RPAREN,
    TokenType.LBRACKET: TokenType.RBRACKET,
    TokenType.LBRACE: TokenType.RBRACE,
}
_CLOSERS: frozenset[TokenType] = frozenset(_OPENERS.values())


class _Parser:
    """Recursive-descent parser for C# token streams."""

    def __init__(self, tokens: list[Token]) -> None:
        self._tokens = tokens
        self._pos = 0

    def parse(self) -> CompilationUnit:
        """Parse the full token stream and return a CompilationUnit."""
        result = CompilationUnit()
        self._parse_usings(result.usings)
        self._parse_namespace_members(result.members, result.usings, top_level=True)
        if not self._at_end():
            tok = self._current()
            raise ParseError(f"Unexpected token {tok.value!r}", tok.line, tok.column)
        return result

    # ------------------------------------------------------------------
    # Token access helpers
    # ------------------------------------------------------------------

    def _current(self) -> Token:
        """Return the current (un-consumed) token."""
        return self._tokens[self._pos]

    def _peek_type(self, offset: int = 0) -> TokenType:
        """Return the type of the token *offset* positions ahead (EOF past the end)."""
        index = min(self._pos + offset, len(self._tokens) - 1)
        return self._tokens[index].type

    def _at_end(self) -> bool:
        """Return True if the current token is the EOF token."""
        return self._peek_type() == TokenType.EOF

    def _advance(self) -> Token:
        """Consume and return the current token, stopping at EOF."""
        tok = self._tokens[self._pos]
        if self._pos < len(self._tokens) - 1:
            self._pos += 1
        return tok

    def _expect(self, *types: TokenType) -> Token:
        """Consume the current token if it matches any of the given types.

        Raises ParseError if the current token does not match.
        """
        tok = self._current()
        if tok.type not in types:
            expected = ", ".join(repr(t.value) for t in types)
            raise ParseError(
                f"Expected {expected}, got {tok.value!r}",
                tok.line,
                tok.column,
            )
        return self._advance()

    def _check(self, *types: TokenType) -> bool:
        """Return True if the current token matches any of the given types (without
        consuming).
        """
        return self._peek_type() in types

    def _check_word(self, value: str, offset: int = 0) -> bool:
        """Return True if the token *offset* ahead is the identifier *value*."""
        index = min(self._pos + offset, len(self._tokens) - 1)
        tok = self._tokens[index]
        return tok.type == TokenType.IDENTIFIER and tok.value == value

    def _expect_identifier(self) -> Token:
        return self._expect(TokenType.IDENTIFIER)

    # ------------------------------------------------------------------
    # Using directives and namespaces
    # ------------------------------------------------------------------

    def _parse_usings(self, usings: list[UsingDirectiveSyntax]) -> None:
        """Parse the run of using and extern alias directives at the current position."""
        while True:
            if self._check(TokenType.USING) or (self._check_word("global") and self._peek_type(1) == TokenType.USING):
                usings.append(self._parse_using())
            elif self._check(TokenType.MODIFIER) and self._current().value == "extern" and self._check_word("alias", 1):
                self._skip_member()
            else:
                return

    def _parse_using(self) -> UsingDirectiveSyntax:
        """Parse: [global] using [static] [Alias =] Name ;"""
        is_global = False
        if self._check_word("global"):
            self._advance()
            is_global = True
        self._expect(TokenType.USING)
        is_static = False
        if self._check(TokenType.STATIC):
            self._advance()
            is_static = True
        alias = None
        if self._check(TokenType.IDENTIFIER) and self._peek_type(1) == TokenType.EQUALS:
            alias = self._advance().value
            self._advance()  # consume =
        target = self._parse_type()
        self._expect(TokenType.SEMICOLON)
        return UsingDirectiveSyntax(target=target, alias=alias, is_static=is_static, is_global=is_global)

    def _parse_namespace_members(
        self,
        members: list[NamespaceMember],
        usings: list[UsingDirectiveSyntax],
        *,
        top_level: bool = False,
    ) -> None:
        """Parse declarations until the enclosing namespace's closing brace or EOF."""
        while not self._at_end() and not self._check(TokenType.RBRACE):
            if self._check(TokenType.NAMESPACE):
                members.append(self._parse_namespace())
                continue
            if self._check(TokenType.USING) and top_level:
                # Using directives after top-level statements are still directives.
                usings.append(self._parse_using())
                continue
            declaration = self._parse_declaration_or_skip()
            if declaration is not None:
                members.append(declaration)

    def _parse_namespace(self) -> NamespaceDeclarationSyntax:
        """Parse: namespace A.B { ... } or the file-scoped form namespace A.B;"""
        start = self._expect(TokenType.NAMESPACE)
        name = self._parse_qualified_name()
        if self._check(TokenType.SEMICOLON):
            self._advance()
            result = NamespaceDeclarationSyntax(name=name, file_scoped=True, line=start.line, column=start.column)
            self._parse_usings(result.usings)
            self._parse_namespace_members(result.members, result.usings)
            return result
        self._expect(TokenType.LBRACE)
        result = NamespaceDeclarationSyntax(name=name, line=start.line, column=start.column)
        self._parse_usings(result.usings)
        self._parse_namespace_members(result.members, result.usings)
        self._expect(TokenType.RBRACE)
        if self._check(TokenType.SEMICOLON):
            self._advance()
        return result

    def _parse_qualified_name(self) -> str:
        """Parse a dotted identifier such as ``InnerApi.Core.Tests``."""
        parts = [self._expect_identifier().value]
        while self._check(TokenType.DOT):
            self._advance()
            parts.append(self._expect_identifier().value)
        return ".".join(parts)

    # ------------------------------------------------------------------
    # Type declarations
    # ------------------------------------------------------------------

    def _parse_declaration_or_skip(self) -> TypeDeclarationSyntax | None:
        """Parse a type declaration, or skip a statement or global attribute list."""
        start = self._current()
        attributes = [a for a in self._parse_attribute_lists() if a.target not in ("assembly", "module")]
        modifiers = self._parse_modifiers()
        if self._at_type_keyword():
            return self._parse_type_declaration(attributes, modifiers, start)
        if self._current() is start or not self._check(
            TokenType.NAMESPACE,
            TokenType.USING,
            TokenType.RBRACE,
            TokenType.EOF,
        ):
            # Top-level statement or local function.
            self._skip_member()
        return None

    def _at_type_keyword(self) -> bool:
        if self._check(*_TYPE_KEYWORDS):
            return True
        return self._check_word("record") and self._peek_type(1) in (
            TokenType.IDENTIFIER,
            TokenType.CLASS,
            TokenType.STRUCT,
        )

    def _parse_modifiers(self) -> list[str]:
        modifiers: list[str] = []
        while True:
            tok = self._current()
            if tok.type in (TokenType.MODIFIER, TokenType.STATIC, TokenType.NEW):
                if tok.type == TokenType.NEW and self._peek_type(1) == TokenType.LPAREN:
                    return modifiers
                modifiers.append(self._advance().value)
            elif (
                tok.type == TokenType.IDENTIFIER
                and tok.value in _CONTEXTUAL_MODIFIERS
                and self._peek_type(1) in _AFTER_MODIFIER
            ):
                modifiers.append(self._advance().value)
            else:
                return modifiers

    def _parse_type_declaration(
        self,
        attributes: list[AttributeSyntax],
        modifiers: list[str],
        start: Token,
    ) -> TypeDeclarationSyntax:
        """Parse a type declaration after its attributes and modifiers."""
        kind = self._parse_type_kind()
        if kind == TypeKind.DELEGATE:
            self._parse_type()  # return type
        name = self._expect_identifier().value
        result = TypeDeclarationSyntax(
            kind=kind,
            name=name,
            modifiers=tuple(modifiers),
            attributes=tuple(attributes),
            line=start.line,
            column=start.column,
        )
        if self._check(TokenType.LANGLE):
            result.type_parameters = self._parse_type_parameter_list()

        if kind == TypeKind.DELEGATE:
            self._skip_member()
            return result
        if kind == TypeKind.ENUM:
            if self._check(TokenType.COLON):
                self._advance()
                result.base_types = (self._parse_type(),)
            self._skip_block()
            if self._check(TokenType.SEMICOLON):
                self._advance()
            return result

        if self._check(TokenType.LPAREN):
            result.primary_parameters = self._parse_parameter_list()
        if self._check(TokenType.COLON):
            self._advance()
            result.base_types = self._parse_base_list()
        self._skip_constraints()

        if self._check(TokenType.SEMICOLON):
            self._advance()
            return result
        self._parse_type_body(result)
        if self._check(TokenType.SEMICOLON):
            self._advance()
        return result

    def _parse_type_kind(self) -> TypeKind:
        tok = self._current()
        if tok.type in _KEYWORD_KINDS:
            self._advance()
            return _KEYWORD_KINDS[tok.type]
        if self._check_word("record"):
            self._advance()
            if self._check(TokenType.STRUCT):
                self._advance()
                return TypeKind.RECORD_STRUCT
            if self._check(TokenType.CLASS):
                self._advance()
            return TypeKind.RECORD
        raise ParseError(f"Expected type declaration, got {tok.value!r}", tok.line, tok.column)

    def _parse_type_parameter_list(self) -> tuple[str, ...]:
        """Parse: < [attributes] [in|out] T (, ...)* >"""
        self._expect(TokenType.LANGLE)
        names: list[str] = []
        while True:
            self._parse_attribute_lists()
            if self._check(TokenType.PARAMETER_MODIFIER):
                self._advance()
            names.append(self._expect_identifier().value)
            if self._check(TokenType.COMMA):
                self._advance()
                continue
            break
        self._expect(TokenType.RANGLE)
        return tuple(names)

    def _parse_base_list(self) -> tuple[TypeSyntax, ...]:
        """Parse base types; arguments passed to a base constructor are skipped."""
        bases = [self._parse_type()]
        if self._check(TokenType.LPAREN):
            self._skip_balanced()
        while self._check(TokenType.COMMA):
            self._advance()
            bases.append(self._parse_type())
        return tuple(bases)

    def _skip_constraints(self) -> None:
        """Skip ``where T : ...`` clauses up to the declaration body."""
        while self._check_word("where"):
            while not self._check(TokenType.LBRACE, TokenType.SEMICOLON, TokenType.EOF):
                if self._check(TokenType.LPAREN):
                    self._skip_balanced()
                else:
                    self._advance()

    def _parse_type_body(self, declaration: TypeDeclarationSyntax) -> None:
        self._expect(TokenType.LBRACE)
        while not self._check(TokenType.RBRACE):
            if self._at_end():
                tok = self._current()
                raise ParseError(f"Unterminated body of type '{declaration.name}'", tok.line, tok.column)
            self._parse_member(declaration)
        self._expect(TokenType.RBRACE)

    def _parse_member(self, declaration: TypeDeclarationSyntax) -> None:
        """Parse one member; only nested types and constructors are kept."""
        start = self._current()
        attributes = self._parse_attribute_lists()
        modifiers = self._parse_modifiers()
        if self._at_type_keyword():
            declaration.members.append(self._parse_type_declaration(attributes, modifiers, start))
            return
        if self._check_word(declaration.name) and self._peek_type(1) == TokenType.LPAREN:
            declaration.constructors.append(self._parse_constructor(modifiers, start))
            return
        self._skip_member()

    def _parse_constructor(self, modifiers: list[str], start: Token) -> ConstructorSyntax:
        self._expect_identifier()
        parameters = self._parse_parameter_list()
        if self._check(TokenType.COLON):
            self._advance()
            self._expect(TokenType.THIS, TokenType.BASE)
            self._skip_balanced()
        if self._check(TokenType.LBRACE):
            self._skip_block()
        elif self._check(TokenType.ARROW):
            self._skip_member()
        else:
            self._expect(TokenType.SEMICOLON)
        return ConstructorSyntax(
            parameters=parameters,
            modifiers=tuple(modifiers),
            line=start.line,
            column=start.column,
        )

    # ------------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------------

    def _parse_parameter_list(self) -> tuple[ParameterSyntax, ...]:
        """Parse: ( [param (, param)*] )"""
        self._expect(TokenType.LPAREN)
        parameters: list[ParameterSyntax] = []
        while not self._check(TokenType.RPAREN):
            parameters.append(self._parse_parameter())
            if not self._check(TokenType.RPAREN):
                self._expect(TokenType.COMMA)
        self._expect(TokenType.RPAREN)
        return tuple(parameters)

    def _parse_parameter(self) -> ParameterSyntax:
        """Parse a parameter; modifiers and default values are consumed and not kept."""
        self._parse_attribute_lists()
        start = self._current()
        while True:
            if self._check(TokenType.PARAMETER_MODIFIER, TokenType.THIS) or (
                self._check(TokenType.MODIFIER) and self._current().value == "readonly"
            ):
                self._advance()
            elif self._check_word("scoped") and self._peek_type(1) in (
                TokenType.PARAMETER_MODIFIER,
                TokenType.IDENTIFIER,
                TokenType.PREDEFINED_TYPE,
            ):
                self._advance()
            else:
                break
        type_syntax = self._parse_type()
        name = self._expect_identifier().value
        if self._check(TokenType.EQUALS):
            self._advance()
            self._skip_expression()
        return ParameterSyntax(
            name=name,
            type=type_syntax,
            line=start.line,
            column=start.column,
        )

    # ------------------------------------------------------------------
    # Types
    # ------------------------------------------------------------------

    def _parse_type(self) -> TypeSyntax:
        """Parse a type: predefined, named (optionally generic), or tuple, with suffixes."""
        start = self._current()
        if self._check(TokenType.LPAREN):
            result = self._parse_tuple_type()
        elif self._check(TokenType.PREDEFINED_TYPE):
            result = TypeSyntax(names=(self._advance().value,), is_keyword=True)
        elif self._check(TokenType.IDENTIFIER):
            result = self._parse_named_type()
        else:
            raise ParseError(f"Expected type, got {start.value!r}", start.line, start.column)
        result.line = start.line
        result.column = start.column

        while True:
            if self._check(TokenType.QUESTION):
                self._advance()
                result.nullable = True
            elif self._check(TokenType.LBRACKET) and self._peek_type(1) in (TokenType.RBRACKET, TokenType.COMMA):
                self._advance()
                while self._check(TokenType.COMMA):
                    self._advance()
                self._expect(TokenType.RBRACKET)
                result.array_rank += 1
            elif self._check(TokenType.OPERATOR) and self._current().value == "*":
                self._advance()  # pointer types are treated as their element type
            else:
                return result

    def _parse_named_type(self) -> TypeSyntax:
        is_global = False
        if self._check_word("global") and self._peek_type(1) == TokenType.DOUBLE_COLON:
            self._advance()
            self._advance()
            is_global = True
        names = [self._expect_identifier().value]
        if self._check(TokenType.DOUBLE_COLON):
            # Extern alias qualifier: alias::Name
            self._advance()
            names = [self._expect_identifier().value]
        type_arguments: tuple[TypeSyntax, ...] = ()
        if self._check(TokenType.LANGLE):
            type_arguments = self._parse_type_argument_list()
        while self._check(TokenType.DOT) and self._peek_type(1) == TokenType.IDENTIFIER:
            self._advance()
            names.append(self._advance().value)
            type_arguments = ()
            if self._check(TokenType.LANGLE):
                type_arguments = self._parse_type_argument_list()
        return TypeSyntax(names=tuple(names), type_arguments=type_arguments, is_global=is_global)

    def _parse_type_argument_list(self) -> tuple[TypeSyntax, ...]:
        """Parse ``<T, U>`` or the unbound forms ``<>`` and ``<,>``."""
        self._expect(TokenType.LANGLE)
        if self._check(TokenType.RANGLE, TokenType.COMMA):
            count = 1
            while self._check(TokenType.COMMA):
                self._advance()
                count += 1
            self._expect(TokenType.RANGLE)
            return tuple(TypeSyntax(names=()) for _ in range(count))
        arguments = [self._parse_type()]
        while self._check(TokenType.COMMA):
            self._advance()
            arguments.append(self._parse_type())
        self._expect(TokenType.RANGLE)
        return tuple(arguments)

    def _parse_tuple_type(self) -> TypeSyntax:
        """Parse ``(int Count, string)``; element names are dropped."""
        self._expect(TokenType.LPAREN)
        elements = [self._parse_tuple_element()]
        while self._check(TokenType.COMMA):
            self._advance()
            elements.append(self._parse_tuple_element())
        self._expect(TokenType.RPAREN)
        return TypeSyntax(names=("ValueTuple",), type_arguments=tuple(elements), is_tuple=True)

    def _parse_tuple_element(self) -> TypeSyntax:
        element = self._parse_type()
        if self._check(TokenType.IDENTIFIER):
            self._advance()
        return element

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------

    def _parse_attribute_lists(self) -> list[AttributeSyntax]:
        attributes: list[AttributeSyntax] = []
        while self._check(TokenType.LBRACKET):
            attributes.extend(self._parse_attribute_list())
        return attributes

    def _parse_attribute_list(self) -> list[AttributeSyntax]:
        """Parse: [ [target:] Attr [(args)] (, Attr [(args)])* [,] ]"""
        self._expect(TokenType.LBRACKET)
        target = None
        if self._peek_type(1) == TokenType.COLON and self._check(TokenType.IDENTIFIER, TokenType.KEYWORD):
            target = self._advance().value
            self._advance()  # consume :
        attributes = [self._parse_attribute(target)]
        while self._check(TokenType.COMMA):
            self._advance()
            if self._check(TokenType.RBRACKET):
                break
            attributes.append(self._parse_attribute(target))
        self._expect(TokenType.RBRACKET)
        return attributes

    def _parse_attribute(self, target: str | None) -> AttributeSyntax:
        start = self._current()
        name = self._parse_named_type()
        name.line = start.line
        name.column = start.column
        arguments: list[AttributeArgumentSyntax] = []
        if self._check(TokenType.LPAREN):
            self._advance()
            while not self._check(TokenType.RPAREN):
                arguments.append(self._parse_attribute_argument())
                if not self._check(TokenType.RPAREN):
                    self._expect(TokenType.COMMA)
            self._expect(TokenType.RPAREN)
        return AttributeSyntax(
            name=name,
            arguments=tuple(arguments),
            target=target,
            line=start.line,
            column=start.column,
        )

    def _parse_attribute_argument(self) -> AttributeArgumentSyntax:
        """Parse ``Name = expr``, ``name: expr`` or a positional expression."""
        if self._check(TokenType.IDENTIFIER) and self._peek_type(1) == TokenType.EQUALS:
            name = self._advance().value
            self._advance()  # consume =
            return AttributeArgumentSyntax(expression=self._parse_expression(), name_equals=name)
        if self._check(TokenType.IDENTIFIER) and self._peek_type(1) == TokenType.COLON:
            name = self._advance().value
            self._advance()  # consume :
            return AttributeArgumentSyntax(expression=self._parse_expression(), name_colon=name)
        return AttributeArgumentSyntax(expression=self._parse_expression())

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _parse_expression(self) -> Expression:
        """Parse an argument expression up to the next top-level ``,`` or ``)``.

        ``typeof(T)`` standing alone is recognised; anything else is kept as text.
        """
        start = self._current()
        if self._check(TokenType.TYPEOF) and self._peek_type(1) == TokenType.LPAREN:
            saved = self._pos
            try:
                self._advance()
                self._advance()
                type_syntax = self._parse_type()
                self._expect(TokenType.RPAREN)
            except ParseError:
                self._pos = saved
            else:
                if self._check(TokenType.COMMA, TokenType.RPAREN):
                    return TypeOfExpression(type=type_syntax, line=start.line, column=start.column)
                self._pos = saved
        tokens = self._skip_expression()
        if not tokens:
            raise ParseError(f"Expected expression, got {start.value!r}", start.line, start.column)
        return ExpressionSyntax(text=_join_tokens(tokens), line=start.line, column=start.column)

    def _skip_expression(self) -> list[Token]:
        """Consume tokens up to a top-level ``,`` or closing bracket and return them."""
        tokens: list[Token] = []
        depth = 0
        while not self._at_end():
            if depth == 0 and self._check(TokenType.COMMA, *_CLOSERS):
                break
            tok = self._advance()
            tokens.append(tok)
            if tok.type in _OPENERS:
                depth += 1
            elif tok.type in _CLOSERS:
                depth -= 1
        return tokens

    # ------------------------------------------------------------------
    # Skipping
    # ------------------------------------------------------------------

    def _skip_balanced(self) -> None:
        """Skip a bracketed group starting at the current opening bracket."""
        open_tok = self._current()
        if open_tok.type not in _OPENERS:
            raise ParseError(f"Expected bracket, got {open_tok.value!r}", open_tok.line, open_tok.column)
        depth = 0
        while True:
            tok = self._advance()
            if tok.type == TokenType.EOF:
                raise ParseError(f"Unbalanced {open_tok.value!r}", open_tok.line, open_tok.column)
            if tok.type in _OPENERS:
                depth += 1
            elif tok.type in _CLOSERS:
                depth -= 1
                if depth == 0:
                    return

    def _skip_block(self) -> None:
        if not self._check(TokenType.LBRACE):
            tok = self._current()
            raise ParseError(f"Expected '{{', got {tok.value!r}", tok.line, tok.column)
        self._skip_balanced()

    def _skip_member(self) -> None:
        """Skip a member or statement: up to a top-level ``;`` or the end of its body.

        A body followed by ``=`` (property initializer) continues to the ``;``.
        The closing brace of the enclosing scope is never consumed.
        """
        while not self._at_end():
            if self._check(TokenType.RBRACE):
                return
            if self._check(TokenType.SEMICOLON):
                self._advance()
                return
            if self._check(TokenType.LBRACE):
                self._skip_balanced()
                if self._check(TokenType.SEMICOLON):
                    self._advance()
                    return
                if not self._check(TokenType.EQUALS):
                    return
                continue
            if self._check(TokenType.LPAREN, TokenType.LBRACKET):
                self._skip_balanced()
                continue
            if self._check(TokenType.RPAREN, TokenType.RBRACKET):
                tok = self._current()
                raise ParseError(f"Unexpected {tok.value!r}", tok.line, tok.column)
            self._advance()


def _join_tokens(tokens: list[Token]) -> str:
    """Join token values, separating adjacent word-like tokens with a space."""
    parts: list[str] = []
    previous: Token | None = None
    for tok in tokens:
        if previous is not None and _is_word(previous) and _is_word(tok):
            parts.append(" ")
        parts.append(tok.value)
        previous = tok
    return "".join(parts)


def _is_word(tok: Token) -> bool:
    return bool(tok.value) and (tok.value[0].isalnum() or tok.value[0] in "_@$\"'")
