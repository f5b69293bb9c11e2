# apps/prerender/tag/parser.py
"""
Argument parser of the component tag.

    {% react NAME [with EXPR] [in EXPR] %}

The bits after the tag name are classified into raw tokens and fed one by one
to a small state machine. Each token is either consumed (component reference,
keyword, clause expression) or forwarded to the caller, which decides what to
do with it (the compiler rejects anything forwarded).
"""
from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from django.utils.text import unescape_string_literal

from apps.prerender.exceptions import TagSyntaxError

KEYWORD_WITH = "with"
KEYWORD_IN = "in"
KEYWORDS = (KEYWORD_WITH, KEYWORD_IN)
LITERAL_OPENERS = ("{", "[")

_STRING_RE = re.compile(r""""(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*'""", re.S)


class TokenKind(enum.Enum):
    STRING = "string"
    VAR = "var"
    END = "end"


@dataclass(frozen=True)
class RawToken:
    kind: TokenKind
    text: str


END = RawToken(TokenKind.END, "")


def classify(bit: str) -> RawToken:
    """A bit fully wrapped in matching quotes is a string, anything else a variable expression."""
    if _STRING_RE.fullmatch(bit):
        return RawToken(TokenKind.STRING, bit)
    return RawToken(TokenKind.VAR, bit)


def tokenize(bits: Sequence[str]) -> List[RawToken]:
    return [classify(bit) for bit in bits] + [END]


def bracket_depth(text: str) -> int:
    """Open minus closed brackets, ignoring those inside quoted strings."""
    bare = _STRING_RE.sub("", text)
    return bare.count("{") + bare.count("[") - bare.count("}") - bare.count("]")


@dataclass(frozen=True)
class TagArguments:
    component_ref: str
    props_expr: Optional[str] = None
    container_expr: Optional[str] = None
    component_is_literal: bool = False


@dataclass(frozen=True)
class Consume:
    field: str


@dataclass(frozen=True)
class Forward:
    token: RawToken


Step = Union[Consume, Forward]


@dataclass(frozen=True)
class ParsedTag:
    tag_name: str
    arguments: TagArguments
    forwarded: Tuple[RawToken, ...] = ()


class State(enum.Enum):
    REF = "ref"
    CLAUSE = "clause"
    PROPS = "props"
    CONTAINER = "container"


_CLAUSE_STATES = {KEYWORD_WITH: State.PROPS, KEYWORD_IN: State.CONTAINER}


class ArgumentParser:
    """Single left-to-right pass, no backtracking."""

    def __init__(self, tag_name: str = "react"):
        self.tag_name = tag_name
        self.state = State.REF
        self._ref: Optional[str] = None
        self._ref_is_literal = False
        self._clauses: Dict[str, str] = {}
        self._pending: Optional[str] = None
        self._buffer: List[str] = []

    def _error(self, message: str) -> TagSyntaxError:
        return TagSyntaxError(f"'{self.tag_name}' tag {message}")

    def feed(self, token: RawToken) -> Step:
        if token.kind is TokenKind.END:
            raise ValueError("END is not fed to the parser; call finish()")
        if self.state is State.REF:
            return self._feed_ref(token)
        if self.state is State.CLAUSE:
            return self._feed_clause(token)
        return self._feed_expression(token)

    def _feed_ref(self, token: RawToken) -> Step:
        if token.kind is TokenKind.STRING:
            ref = unescape_string_literal(token.text)
            if not ref:
                raise self._error("received an empty component reference.")
            self._ref, self._ref_is_literal = ref, True
        elif token.text in KEYWORDS or token.text.startswith(LITERAL_OPENERS):
            raise self._error(f"expected a component reference, got '{token.text}'.")
        else:
            self._ref = token.text
        self.state = State.CLAUSE
        return Consume("component")

    def _feed_clause(self, token: RawToken) -> Step:
        if token.kind is TokenKind.VAR and token.text in KEYWORDS:
            if token.text in self._clauses:
                raise self._error(f"accepts a single '{token.text}' clause.")
            self._pending = token.text
            self.state = _CLAUSE_STATES[token.text]
            return Consume(token.text)
        return Forward(token)

    def _feed_expression(self, token: RawToken) -> Step:
        # whatever comes next is the expression; inline literals may span several bits
        self._buffer.append(token.text)
        field = self.state.value
        text = " ".join(self._buffer)
        if text.startswith(LITERAL_OPENERS) and bracket_depth(text) > 0:
            return Consume(field)
        self._clauses[self._pending] = text
        self._pending = None
        self._buffer = []
        self.state = State.CLAUSE
        return Consume(field)

    def finish(self) -> TagArguments:
        if self._ref is None:
            raise self._error("requires a component reference.")
        if self._pending is not None:
            if self._buffer:
                raise self._error(f"has an unterminated literal after '{self._pending}': {' '.join(self._buffer)}")
            raise self._error(f"expected an expression after '{self._pending}'.")
        return TagArguments(
            component_ref=self._ref,
            props_expr=self._clauses.get(KEYWORD_WITH),
            container_expr=self._clauses.get(KEYWORD_IN),
            component_is_literal=self._ref_is_literal,
        )


def parse_tag_arguments(tag_name: str, tokens: Iterable[RawToken]) -> ParsedTag:
    machine = ArgumentParser(tag_name)
    forwarded: List[RawToken] = []
    for token in tokens:
        if token.kind is TokenKind.END:
            break
        step = machine.feed(token)
        if isinstance(step, Forward):
            forwarded.append(step.token)
    return ParsedTag(tag_name, machine.finish(), tuple(forwarded))


def parse_bits(bits: Sequence[str]) -> ParsedTag:
    """Shortcut for Token.split_contents() output (tag name first)."""
    return parse_tag_arguments(bits[0], tokenize(bits[1:]))
