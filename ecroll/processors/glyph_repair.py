"""
Glyph repair engine.

Turns text copied out of EC roll PDFs back into readable Bengali:

1. One str.translate pass over the anomaly table.
2. The ordered contextual rules, repeated until a pass changes nothing.
3. Trim.

Repair is total and idempotent: the output is a fixed point of the rule
pass and holds no anomaly code points, so repairing it again is a no-op.
Under-repair is acceptable; touching already-correct text is not.
"""

from __future__ import annotations

import re
from typing import Optional

from ..logger import get_logger
from ..models import GlyphRuleSet
from ..rules import DEFAULT_RULE_SET

logger = get_logger(__name__)

# Latin letters with diacritics never belong in Bengali roll text
_RESIDUE_RE = re.compile(r"[À-ɏ]")


class GlyphRepairer:
    """Applies one rule set. Stateless apart from the immutable rule set."""

    def __init__(self, rule_set: Optional[GlyphRuleSet] = None):
        self.rule_set = rule_set or DEFAULT_RULE_SET
        anomalies = "".join(re.escape(c) for c in sorted(self.rule_set.anomaly_chars))
        self._anomaly_re = re.compile(f"[{anomalies}]") if anomalies else None

    def repair(self, text: Optional[str]) -> str:
        if not text:
            return ""
        if not isinstance(text, str):
            text = str(text)

        result = text.translate(self.rule_set.translation_table)

        for _ in range(self.rule_set.max_passes):
            updated = self._apply_rules(result)
            if updated == result:
                break
            result = updated
        else:
            logger.debug(
                f"Rule pass did not settle after {self.rule_set.max_passes} passes "
                f"(rule set {self.rule_set.version})"
            )

        return result.strip()

    def _apply_rules(self, text: str) -> str:
        for rule in self.rule_set.rules:
            text = rule.apply(text)
        return text

    def has_artifacts(self, text: Optional[str]) -> bool:
        """True when text still shows anomaly glyphs or Latin residue."""
        if not text:
            return False
        if self._anomaly_re is not None and self._anomaly_re.search(text):
            return True
        return bool(_RESIDUE_RE.search(text))


_default_repairer = GlyphRepairer(DEFAULT_RULE_SET)


def _repairer_for(rule_set: Optional[GlyphRuleSet]) -> GlyphRepairer:
    if rule_set is None or rule_set is DEFAULT_RULE_SET:
        return _default_repairer
    return GlyphRepairer(rule_set)


def repair_text(text: Optional[str], rule_set: Optional[GlyphRuleSet] = None) -> str:
    """
    Repair mis-encoded Bengali text.

    Never raises; input matching no rule passes through (whitespace
    collapsed and trimmed).
    """
    return _repairer_for(rule_set).repair(text)


def has_artifacts(text: Optional[str], rule_set: Optional[GlyphRuleSet] = None) -> bool:
    return _repairer_for(rule_set).has_artifacts(text)
