"""Rules-based complexity classifier.

Zero cost, no I/O. Uses regex banks plus length, tool-mention and
conversation-depth heuristics. The precedence lives in ``RULES``: an ordered
table evaluated top to bottom where the first matching rule decides the tier.
Reasoning and complex signals sit above the length-based medium rules so a
short but mathematically dense message is not classified simple just because
it is short.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from auto_router.models import ComplexityTier

# ---------------------------------------------------------------------------
# Pattern banks
# ---------------------------------------------------------------------------

SIMPLE_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"^(hi|hello|hey|thanks|thank you|ok|okay|yes|no|sure|bye|good morning|good night|gm|gn)\b",
        r"^what('s| is) (the )?(time|date|day|weather)\b",
        r"\bwhat\s+(time|day|date)\s+is\s+it\b",
        r"\bwhat('s| is)\s+today('s)?\s+(date|day)\b",
        r"^(who|what|where|when) (is|are|was|were) ",
        r"^(show|list|get|find|lookup|check)\b",
    )
)

REASONING_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"\b(prove|proof|theorem|lemma|corollary)\b",
        r"\b(solve|equation|integral|derivative|matrix|eigenvalue)\b",
        r"\b(logic|logical|syllogism|contradiction|induction|deduction)\b",
        r"\b(step[- ]by[- ]step|chain[- ]of[- ]thought|reason(ing)?( through)?)\b",
        r"\b(algorithm|complexity|big[- ]o|np[- ]hard|dynamic programming)\b",
        r"\b(probability|bayesian|statistics|hypothesis)\b",
    )
)

COMPLEX_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"\b(architect(ure)?|design (system|pattern|a ))\b",
        r"\b(refactor|rewrite|implement|build|create)\b.{20,}",
        r"\b(multi[- ]?file|codebase|project|repository)\b",
        r"\b(deploy|infrastructure|ci/?cd|pipeline|kubernetes|docker)\b.*"
        r"\b(architect|scale|design|migration|cluster|orchestrat)",
        r"\b(database (schema|design|migration))\b",
        r"\b(full[- ]?stack|end[- ]to[- ]end|microservice)\b",
    )
)

MEDIUM_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"\b(summarize|summary|explain|review|analyze|compare)\b",
        r"\b(code review|debug|fix (this|the)|what('s| is) wrong)\b",
        r"\b(convert|translate|transform|format)\b",
        r"\b(write (a |an )?(function|class|test|script|query))\b",
        r"\b(how (do|does|to|can|should))\b",
    )
)


def matches_any(text: str, patterns: Sequence[re.Pattern[str]]) -> bool:
    return any(p.search(text) for p in patterns)


# ---------------------------------------------------------------------------
# Rule table
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Signals:
    """Inputs every rule predicate sees. ``text`` is already trimmed."""

    text: str
    conversation_depth: int = 0
    tool_mentions: int = 0

    @property
    def length(self) -> int:
        return len(self.text)


@dataclass(frozen=True)
class Rule:
    name: str
    tier: ComplexityTier
    predicate: Callable[[Signals], bool]

    def matches(self, signals: Signals) -> bool:
        return self.predicate(signals)


def _short_and_trivial(s: Signals) -> bool:
    if s.length >= 20 or matches_any(s.text, REASONING_PATTERNS):
        return False
    return matches_any(s.text, SIMPLE_PATTERNS) or s.length < 10


RULES: tuple[Rule, ...] = (
    Rule("short_simple", "simple", _short_and_trivial),
    Rule("reasoning_pattern", "reasoning", lambda s: matches_any(s.text, REASONING_PATTERNS)),
    Rule("complex_pattern", "complex", lambda s: matches_any(s.text, COMPLEX_PATTERNS)),
    Rule("long_with_tools", "complex", lambda s: s.length > 500 and s.tool_mentions >= 2),
    Rule("very_long", "complex", lambda s: s.length > 1000),
    Rule("medium_pattern", "medium", lambda s: matches_any(s.text, MEDIUM_PATTERNS)),
    Rule("long_or_deep", "medium", lambda s: s.length > 100 or s.conversation_depth > 5),
    Rule("simple_pattern", "simple", lambda s: matches_any(s.text, SIMPLE_PATTERNS)),
)

DEFAULT_TIER: ComplexityTier = "medium"


def match_rule(
    message: str,
    conversation_depth: int = 0,
    tool_mentions: int = 0,
    rules: Sequence[Rule] = RULES,
) -> Rule | None:
    """Return the first rule that matches, or None when the default applies."""
    signals = Signals(message.strip(), conversation_depth, tool_mentions)
    for rule in rules:
        if rule.matches(signals):
            return rule
    return None


def classify_by_rules(
    message: str,
    conversation_depth: int = 0,
    tool_mentions: int = 0,
    rules: Sequence[Rule] = RULES,
) -> ComplexityTier:
    """Classify a user message into a complexity tier.

    Args:
        message: The user's message text.
        conversation_depth: Number of messages in the conversation so far.
        tool_mentions: Number of distinct tools referenced in the message.
        rules: Ordered rule table; defaults to RULES.

    Returns:
        The tier of the first matching rule, or "medium" when none match.
    """
    rule = match_rule(message, conversation_depth, tool_mentions, rules)
    return rule.tier if rule else DEFAULT_TIER
