"""Rule-driven clean-up of extracted post text.

The rule table lives in :data:`postminer.scraper.rules.SANITIZE_RULES`:
script residue first, then site boilerplate, then whitespace
normalisation.  Removing one span can expose another match (two widgets
that were separated only by the removed text, say), so the table is
re-applied until the text stops changing.  Every rule deletes or shortens
text, which bounds the number of passes and makes :func:`sanitize`
idempotent.
"""

from __future__ import annotations

from typing import Sequence

from postminer.scraper.rules import SANITIZE_RULES, SanitizeRule


def apply_rules(text: str, rules: Sequence[SanitizeRule] = SANITIZE_RULES) -> str:
    """Run every rule in *rules* once, in order, then strip the result."""
    for rule in rules:
        text = rule.apply(text)
    return text.strip()


def sanitize(text: str, rules: Sequence[SanitizeRule] = SANITIZE_RULES) -> str:
    """Return *text* with script residue and boilerplate removed."""
    if not text:
        return ""
    current = apply_rules(text, rules)
    while True:
        cleaned = apply_rules(current, rules)
        if cleaned == current:
            return current
        current = cleaned
