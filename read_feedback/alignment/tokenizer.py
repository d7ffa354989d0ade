"""Reference text tokenization that preserves the exact text layout."""
from __future__ import annotations

import re
from dataclasses import replace
from typing import List, Optional, Sequence

from ..models.word_display import TOKEN_PUNCT, TOKEN_SPACE, TOKEN_WORD, Token, WordDisplay

# Alternatives are mutually exclusive, so every character lands in exactly one
# token: whitespace runs, words (letters/digits with at most one internal
# apostrophe), and runs of everything else.
_TOKEN_RE = re.compile(
    r"(?P<space>\s+)"
    r"|(?P<word>[^\W_]+(?:['’][^\W_]+)?)"
    r"|(?P<punct>(?:[^\w\s]|_)+)"
)


def tokenize_text(text: str) -> List[Token]:
    """Split reference text into space, punctuation and word tokens.

    Example: "Don't stop." -> word "Don't", space " ", word "stop", punct "."

    Args:
        text: Reference text exactly as shown to the reader

    Returns:
        Tokens whose texts concatenate back to ``text``; words are unattached
    """
    tokens: List[Token] = []
    if not text:
        return tokens

    for m in _TOKEN_RE.finditer(text):
        kind = m.lastgroup
        if kind == "space":
            tokens.append(Token(TOKEN_SPACE, m.group()))
        elif kind == "word":
            tokens.append(Token(TOKEN_WORD, m.group()))
        else:
            tokens.append(Token(TOKEN_PUNCT, m.group()))
    return tokens


def word_tokens(tokens: Sequence[Token]) -> List[Token]:
    """Word tokens only, in text order."""
    return [t for t in tokens if t.kind == TOKEN_WORD]


def attach_words(tokens: Sequence[Token], displays: Sequence[Optional[WordDisplay]]) -> List[Token]:
    """Attach displays to word tokens strictly by word order.

    The i-th word token receives ``displays[i]``; word tokens beyond the end
    of ``displays`` stay unattached. Returns new tokens.
    """
    out: List[Token] = []
    wi = 0
    for token in tokens:
        if token.kind != TOKEN_WORD:
            out.append(token)
            continue
        attach = displays[wi] if wi < len(displays) else None
        wi += 1
        out.append(replace(token, attach=attach))
    return out
