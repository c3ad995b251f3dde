# Copyright 2026 CreatorGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexical scanning of C# source files."""

from creatorgen.parser.lexer import LexerError, Token, TokenType, tokenize

__all__ = [
    "tokenize",
    "Token",
    "TokenType",
    "LexerError",
]
