"""
Tokenizer for the canonical (normalized) message syntax.

    <b>, <b id="1">, </b>        start and end tags
    <br/>, <img id="1"/>         empty tags (void elements only, <br> also accepted)
    {{0}}                        placeholder
    <ICU-Message-Ref_0/>         reference to an ICU message
    <ICU-Message/>               marker for an ICU message
"""
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Pattern, Tuple

from .errors import LexError
from .tag_mapping import VOID_ELEMENTS

# Token types
TEXT = "TEXT"
START_TAG = "START_TAG"
END_TAG = "END_TAG"
EMPTY_TAG = "EMPTY_TAG"
PLACEHOLDER = "PLACEHOLDER"
ICU_MESSAGE_REF = "ICU_MESSAGE_REF"
ICU_MESSAGE = "ICU_MESSAGE"

TAG_NAME = r"[a-zA-Z][a-zA-Z0-9-]*"
_VOID_NAMES = "|".join(sorted(VOID_ELEMENTS, key=len, reverse=True))


@dataclass
class Token:
    type: str
    value: Dict[str, Any] = field(default_factory=dict)


def _id_counter(match) -> int:
    return int(match.group("id")) if match.group("id") else 0


class MessageTokenizer:
    """
    Splits a normalized string into tokens.

    Rules are tried in order at every position, the first match wins.
    Characters matched by no rule are collected into TEXT tokens.
    """

    def __init__(self):
        self.rules: List[Tuple[str, Pattern, Callable]] = [
            (ICU_MESSAGE_REF, re.compile(r"<ICU-Message-Ref_(\d+)/>"),
             lambda m: {"index": int(m.group(1))}),
            (ICU_MESSAGE, re.compile(r"<ICU-Message/>"),
             lambda m: {"message": m.group(0)}),
            (EMPTY_TAG, re.compile(rf'<(?P<name>{_VOID_NAMES})(?:\s+id="(?P<id>\d+)")?\s*/?>'),
             lambda m: {"name": m.group("name"), "id_counter": _id_counter(m)}),
            (START_TAG, re.compile(rf'<(?P<name>{TAG_NAME})(?:\s+id="(?P<id>\d+)")?>'),
             lambda m: {"name": m.group("name"), "id_counter": _id_counter(m)}),
            (END_TAG, re.compile(rf"</(?P<name>{TAG_NAME})>"),
             lambda m: {"name": m.group("name")}),
            (PLACEHOLDER, re.compile(r"\{\{(\d+)\}\}"),
             lambda m: {"index": int(m.group(1))}),
        ]

    def tokenize(self, normalized_message: Optional[str]) -> List[Token]:
        tokens: List[Token] = []
        plaintext: List[str] = []
        text = normalized_message or ""
        pos = 0
        while pos < len(text):
            token = self._match_rule(text, pos)
            if token is None:
                # no control sequence here, plain text
                plaintext.append(text[pos])
                pos += 1
                continue
            token_type, value, end = token
            if end <= pos:
                raise LexError("tokenizer made no progress", text[pos:pos + 20])
            if plaintext:
                tokens.append(Token(TEXT, {"text": "".join(plaintext)}))
                plaintext = []
            tokens.append(Token(token_type, value))
            pos = end
        if plaintext:
            tokens.append(Token(TEXT, {"text": "".join(plaintext)}))
        return tokens

    def _match_rule(self, text: str, pos: int):
        if text[pos] not in "<{":
            return None
        for token_type, pattern, to_value in self.rules:
            match = pattern.match(text, pos)
            if match:
                return token_type, to_value(match), match.end()
        return None
