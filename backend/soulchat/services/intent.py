"""Decide whether a chat message should go to web search.

The decision is a fixed, ordered list of tagged rules. The first rule whose
predicate matches the trimmed, lowercased message supplies the verdict; when
nothing matches the message is searched.
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional

# Any match means the local reply table can answer it.
DIRECT_RESPONSE_PATTERNS = [
    re.compile(r"how are you"),
    re.compile(r"^hi$|^hi\s+there"),
    re.compile(r"^hello$|^hello\s+there"),
    re.compile(r"thank"),
    re.compile(r"your name"),
    re.compile(r"who are you"),
    re.compile(r"what can you (do|help)"),
]

NON_SEARCH_PHRASES = (
    "hello", "hi there", "how are you", "nice to meet you", "thanks", "thank you",
    "goodbye", "bye", "see you", "your name", "who are you", "what can you do",
    "what can you help me with", "what can you help with", "help me", "ok", "okay",
    "yes", "no", "please", "great", "awesome",
)

SEARCH_KEYWORDS = (
    "search", "find", "look up", "google", "information", "about",
    "what is", "who is", "where is", "when is", "why is", "how to",
    "latest", "recent", "news", "current", "today", "weather",
    "history", "facts", "data", "recipe", "receipe", "how do i", "tell me about",
    "what are", "chocolate", "make", "best way to", "top", "list of", "when did",
    "where can i", "show me", "price of", "cost of", "explain", "describe",
)

LONG_MESSAGE_WORDS = 3
DEFAULT_VERDICT = True


@dataclass(frozen=True)
class IntentRule:
    name: str
    matches: Callable[[str], bool]
    search: bool


def _matches_direct_pattern(text: str) -> bool:
    return any(p.search(text) for p in DIRECT_RESPONSE_PATTERNS)


def _is_non_search_phrase(text: str) -> bool:
    return any(
        text == phrase or text.startswith(phrase + " ") or text.endswith(" " + phrase)
        for phrase in NON_SEARCH_PHRASES
    )


def _is_long_message(text: str) -> bool:
    return len(text.split()) >= LONG_MESSAGE_WORDS


def _has_search_keyword(text: str) -> bool:
    return any(keyword in text for keyword in SEARCH_KEYWORDS)


RULES: tuple[IntentRule, ...] = (
    IntentRule("direct_response", _matches_direct_pattern, search=False),
    IntentRule("non_search_phrase", _is_non_search_phrase, search=False),
    IntentRule("long_message", _is_long_message, search=True),
    IntentRule("search_keyword", _has_search_keyword, search=True),
)


def normalize(message: str) -> str:
    return message.strip().lower()


def match_rule(message: str) -> Optional[IntentRule]:
    """The first rule that matches, or None when the default applies."""
    text = normalize(message)
    for rule in RULES:
        if rule.matches(text):
            return rule
    return None


def classify(message: str) -> bool:
    """True when the message should trigger a web search."""
    rule = match_rule(message)
    return rule.search if rule is not None else DEFAULT_VERDICT
