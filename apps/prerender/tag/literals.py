# apps/prerender/tag/literals.py
"""
Inline literals for the `with` / `in` clauses:

    {% react 'Card' with {title: 'Hello', user: request.user.username} in {tag: 'section', class: 'card'} %}

Grammar:
    value  := object | array | atom
    object := '{' [pair (',' pair)* [',']] '}'
    pair   := (IDENT | STRING) ':' value
    array  := '[' [value (',' value)* [',']] ']'
    atom   := STRING | NUMBER | true | false | null | <filter expression>

Filter expressions are compiled by the Django parser. Filter arguments using
':' cannot be written inside a literal.
"""
from __future__ import annotations

import re
from typing import List, Optional, Tuple

from django.utils.text import unescape_string_literal

from apps.prerender.exceptions import TagSyntaxError
from apps.prerender.tag.ir import ArrayLiteral, Expression, Literal, ObjectLiteral, Variable

_TOKEN_RE = re.compile(
    r"""
      (?P<string>"(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*')
    | (?P<punct>[{}\[\]:,])
    | (?P<atom>[^\s{}\[\]:,"']+)
    | (?P<space>\s+)
    """,
    re.VERBOSE | re.S,
)
_NUMBER_RE = re.compile(r"^-?\d+(?:\.\d+)?(?:[eE][-+]?\d+)?$")
_QUOTED_RE = re.compile(r""""(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*'""", re.S)

JSON_CONSTANTS = {"true": True, "false": False, "null": None}

Lexeme = Tuple[str, str]


def lex(text: str) -> List[Lexeme]:
    lexemes: List[Lexeme] = []
    pos = 0
    while pos < len(text):
        m = _TOKEN_RE.match(text, pos)
        if not m:
            raise TagSyntaxError(f"Unexpected character {text[pos]!r} in literal: {text}")
        if m.lastgroup != "space":
            lexemes.append((m.lastgroup, m.group()))
        pos = m.end()
    return lexemes


class LiteralParser:
    def __init__(self, text: str, parser=None):
        self.text = text
        self.parser = parser
        self.lexemes = lex(text)
        self.pos = 0

    def _error(self, message: str) -> TagSyntaxError:
        return TagSyntaxError(f"{message} in literal: {self.text}")

    def _peek(self) -> Optional[Lexeme]:
        return self.lexemes[self.pos] if self.pos < len(self.lexemes) else None

    def _next(self, expected: str) -> Lexeme:
        lexeme = self._peek()
        if lexeme is None:
            raise self._error(f"Expected {expected}, reached end")
        self.pos += 1
        return lexeme

    def _accept(self, punct: str) -> bool:
        if self._peek() == ("punct", punct):
            self.pos += 1
            return True
        return False

    def _expect(self, punct: str) -> None:
        kind, text = self._next(f"'{punct}'")
        if (kind, text) != ("punct", punct):
            raise self._error(f"Expected '{punct}', got '{text}'")

    def parse(self) -> Expression:
        value = self._value()
        extra = self._peek()
        if extra is not None:
            raise self._error(f"Unexpected '{extra[1]}'")
        return value

    def _value(self) -> Expression:
        kind, text = self._next("a value")
        if kind == "punct":
            if text == "{":
                return self._object()
            if text == "[":
                return self._array()
            raise self._error(f"Unexpected '{text}'")
        if kind == "string":
            return Literal(unescape_string_literal(text))
        return compile_atom(text, self.parser)

    def _object(self) -> ObjectLiteral:
        entries: List[Tuple[str, Expression]] = []
        seen = set()
        if self._accept("}"):
            return ObjectLiteral(())
        while True:
            kind, text = self._next("a key")
            if kind == "string":
                key = unescape_string_literal(text)
            elif kind == "atom":
                key = text
            else:
                raise self._error(f"Expected a key, got '{text}'")
            if key in seen:
                raise self._error(f"Duplicate key '{key}'")
            seen.add(key)
            self._expect(":")
            entries.append((key, self._value()))
            if self._accept("}"):
                break
            self._expect(",")
            if self._accept("}"):
                break
        return ObjectLiteral(tuple(entries))

    def _array(self) -> ArrayLiteral:
        items: List[Expression] = []
        if self._accept("]"):
            return ArrayLiteral(())
        while True:
            items.append(self._value())
            if self._accept("]"):
                break
            self._expect(",")
            if self._accept("]"):
                break
        return ArrayLiteral(tuple(items))


def compile_atom(text: str, parser=None) -> Expression:
    if text in JSON_CONSTANTS:
        return Literal(JSON_CONSTANTS[text])
    if _NUMBER_RE.match(text):
        return Literal(float(text) if any(c in text for c in ".eE") else int(text))
    if parser is None:
        raise TagSyntaxError(f"Cannot compile expression '{text}' without a template parser.")
    return Variable(text, parser.compile_filter(text))


def parse_expression(text: str, parser=None) -> Expression:
    """Raw clause text -> IR expression."""
    text = text.strip()
    if text.startswith(("{", "[")):
        return LiteralParser(text, parser).parse()
    if _QUOTED_RE.fullmatch(text):
        return Literal(unescape_string_literal(text))
    return compile_atom(text, parser)
