"""
Parser for compact rule tags.

Grammar:
    tag    := rule (SEP rule)*
    rule   := name ['=' params]
    params := param (SEP param)*

SEP is either the rule splitter (``|``) or the params separator (``,``).
Outside a parameter list a separator always ends the rule. Inside one, the
parser looks at the text up to the next separator and starts a new rule
only if that text contains ``=`` or looks like a rule name (and, when a set
of known rule names is given, the name is in it). Otherwise ``,`` starts a
new parameter and ``|`` is kept as part of the current one.

    parse_tag("required|min=5,max=100")
    # [TagRule('required'), TagRule('min', ('5',)), TagRule('max', ('100',))]

    parse_tag("between=10,20")
    # [TagRule('between', ('10', '20'))]
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterable
from uuid import UUID

from ..data.struct_info import NAME_TAGS

if TYPE_CHECKING:
    from ..rules.registry import Registry

DIVE = "dive"

RULE_NAME = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class ParseConfig:
    """
    Tag parsing and type derivation settings.

    Attributes:
        rule_splitter: Separator between rules
        name_param_separator: Separator between a rule name and its params
        params_separator: Separator between params
        dive_tag: Keyword splitting array rules from element rules
        name_tags: Metadata keys read for external field names, in order
        value_types: Types validated as plain values instead of objects
        registry: Registry used to build rules (None means the standard one)
        tag_key: Metadata key holding the rule tag
    """

    rule_splitter: str = "|"
    name_param_separator: str = "="
    params_separator: str = ","
    dive_tag: str = DIVE
    name_tags: tuple[str, ...] = NAME_TAGS
    value_types: tuple[type, ...] = (datetime, date, time, Decimal, UUID, Enum)
    registry: Registry | None = None
    tag_key: str = "validate"


@dataclass(frozen=True)
class TagRule:
    """One parsed rule: a name and its raw string params."""

    name: str
    params: tuple[str, ...] = ()

    def __str__(self) -> str:
        if not self.params:
            return self.name
        return f"{self.name}={','.join(self.params)}"


# Tokenizer


class TokenType(Enum):
    TEXT = "text"
    EQ = "eq"
    SEP = "sep"


@dataclass(frozen=True)
class Token:
    type: TokenType
    text: str


class Tokenizer:
    """Splits a tag into TEXT, EQ and SEP tokens."""

    def __init__(self, config: ParseConfig):
        self.eq = config.name_param_separator
        self.separators = (config.rule_splitter, config.params_separator)

    def tokenize(self, tag: str) -> list[Token]:
        tokens: list[Token] = []
        buffer: list[str] = []

        def flush():
            if buffer:
                tokens.append(Token(TokenType.TEXT, "".join(buffer)))
                buffer.clear()

        i = 0
        while i < len(tag):
            if tag.startswith(self.eq, i):
                flush()
                tokens.append(Token(TokenType.EQ, self.eq))
                i += len(self.eq)
                continue
            sep = next((s for s in self.separators if tag.startswith(s, i)), None)
            if sep is not None:
                flush()
                tokens.append(Token(TokenType.SEP, sep))
                i += len(sep)
                continue
            buffer.append(tag[i])
            i += 1
        flush()
        return tokens


# Parser


class TagParser:
    """Recursive-descent parser over the token stream."""

    def __init__(self, config: ParseConfig | None = None, known_rules: Iterable[str] | None = None):
        self.config = config or ParseConfig()
        self.known_rules = None if known_rules is None else frozenset(known_rules) | {self.config.dive_tag}
        self._tokens: list[Token] = []
        self._pos = 0

    def parse(self, tag: str) -> list[TagRule]:
        self._tokens = Tokenizer(self.config).tokenize(tag)
        self._pos = 0
        rules: list[TagRule] = []
        while self._peek() is not None:
            if self._peek().type is TokenType.SEP:
                self._pos += 1
                continue
            rule = self._parse_rule()
            if rule is not None:
                rules.append(rule)
        return rules

    def _peek(self, offset: int = 0) -> Token | None:
        idx = self._pos + offset
        return self._tokens[idx] if idx < len(self._tokens) else None

    def _parse_rule(self) -> TagRule | None:
        name_parts: list[str] = []
        while (tok := self._peek()) is not None and tok.type is TokenType.TEXT:
            name_parts.append(tok.text)
            self._pos += 1
        name = "".join(name_parts).strip()

        params: tuple[str, ...] = ()
        tok = self._peek()
        if tok is not None and tok.type is TokenType.EQ:
            self._pos += 1
            params = self._parse_params()

        if not name:
            return None
        return TagRule(name, params)

    def _parse_params(self) -> tuple[str, ...]:
        params: list[str] = []
        current: list[str] = []

        while (tok := self._peek()) is not None:
            if tok.type is not TokenType.SEP:
                current.append(tok.text)
                self._pos += 1
                continue
            if self._starts_rule(self._chunk_after(self._pos)):
                break
            self._pos += 1
            if tok.text == self.config.params_separator:
                params.append("".join(current))
                current = []
            else:
                current.append(tok.text)

        params.append("".join(current))
        return tuple(p.strip() for p in params if p.strip())

    def _chunk_after(self, sep_pos: int) -> str:
        parts: list[str] = []
        for tok in self._tokens[sep_pos + 1 :]:
            if tok.type is TokenType.SEP:
                break
            parts.append(tok.text)
        return "".join(parts)

    def _starts_rule(self, chunk: str) -> bool:
        eq = self.config.name_param_separator
        if eq in chunk:
            name = chunk.split(eq, 1)[0].strip()
        elif RULE_NAME.match(chunk.strip()):
            name = chunk.strip()
        else:
            return False
        if self.known_rules is not None:
            return name in self.known_rules
        return bool(name)


def parse_tag(tag: str, config: ParseConfig | None = None, known_rules: Iterable[str] | None = None) -> list[TagRule]:
    """Parse a tag string into rules, in order."""
    return TagParser(config, known_rules).parse(tag)


def split_dive(rules: list[TagRule], dive_tag: str = DIVE) -> tuple[list[TagRule], list[TagRule] | None]:
    """
    Split at the first dive keyword: rules before it apply to the sequence,
    rules after it to every element. The second item is None without a dive.
    """
    for idx, rule in enumerate(rules):
        if rule.name == dive_tag:
            return rules[:idx], rules[idx + 1 :]
    return rules, None


def tag_rules_from(value: Any, config: ParseConfig | None = None, known_rules: Iterable[str] | None = None) -> list[TagRule]:
    """Accept a tag string, or an already-split list of tag strings."""
    if value is None:
        return []
    if isinstance(value, str):
        return parse_tag(value, config, known_rules)
    rules: list[TagRule] = []
    for item in value:
        rules.extend(parse_tag(item, config, known_rules))
    return rules
