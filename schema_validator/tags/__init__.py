from .derive import parse_type
from .parser import (
    DIVE,
    ParseConfig,
    TagParser,
    TagRule,
    Token,
    Tokenizer,
    TokenType,
    parse_tag,
    split_dive,
)

__all__ = [
    "DIVE",
    "ParseConfig",
    "TagParser",
    "TagRule",
    "Token",
    "Tokenizer",
    "TokenType",
    "parse_tag",
    "parse_type",
    "split_dive",
]
