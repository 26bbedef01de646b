"""
Built-in glyph repair data and rule file loading.

Legacy Bengali fonts used in EC roll PDFs draw conjuncts and vowel signs
from private glyph slots. PDF text extraction reports those slots as
unrelated Latin code points (ĺ for ব্দ, İ for ি, ...). The anomaly table
maps each such code point back to its Bengali sequence; the ordered rules
then fix words whose pre-base vowel signs came out in visual order.

Rule files are JSON:

    {
      "version": "local-1",
      "char_map": {"Ĵ": "প্র"},
      "rules": [
        {"pattern": "োবগম", "replacement": "বেগম", "regex": false}
      ]
    }

Loaded rules extend the built-in set and run after it.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional, Union

from .exceptions import RuleSetError
from .models import GlyphRule, GlyphRuleSet

RULE_SET_VERSION = "1"

# Bengali block, consonants (with the nukta letters), and dependent signs
# written after their consonant
BENGALI = "\u0980-\u09FF"
CONSONANT = "[\u0995-\u09B9\u09DC\u09DD\u09DF]"
POST_BASE_SIGN = "[\u09BE\u09C0-\u09C4\u09CB\u09CC\u09D7]"  # া ী ু ূ ৃ ৄ ো ৌ ৗ

ANOMALY_MAP: dict[str, str] = {
    "ĺ": "ব্দ",  # আĺুল -> আব্দুল
    "Ĩ": "সা",  # হাĨান -> হাসান
    "ę": "দ্র",  # ইিęস -> ইদ্রিস
    "Ľ": "ব্র",  # ইĽািহম -> ইব্রাহিম
    "Ō": "ছা",
    "Ž": "জ",
    "ñ": "ন",
    "ĥ": "ন্ম",  # জĥ -> জন্ম
    "ń": "ম্ব",  # নńর -> নম্বর
    "İ": "ি",  # İলটন -> লিটন
    "Ï": "ো",
    "Ř": "শ্র",  # Řীদাসগাতী -> শ্রীদাসগাতী
    "ý": "গঞ্জ",
    "ঁ": "া",
    "Ĵ": "প্র",  # Ĵকােশর -> প্রকাশের
}


def _literal(pattern: str, replacement: str, description: str) -> GlyphRule:
    return GlyphRule(pattern, replacement, description, regex=False)


# Label and honorific words broken by pre-base vowel signs. These run
# before the vowel-sign rules, which would otherwise join the stray sign
# to the wrong consonant.
PREFIX_RULES: tuple[GlyphRule, ...] = (
    _literal("\ufeff", "", "byte-order marks"),
    _literal("োমাছাঃ", "মোছাঃ", "honorific মোছাঃ"),
    _literal("োমাঃ", "মোঃ", "honorific মোঃ"),
    _literal("োভাটার", "ভোটার", "label ভোটার"),
    _literal("িপতা", "পিতা", "label পিতা"),
    GlyphRule(f"(?<![{BENGALI}])ামাতা", "মাতা", "label মাতা"),
    _literal("োপেশা", "পেশা", "label পেশা"),
    _literal("োপশা", "পেশা", "label পেশা (split e-kar)"),
    _literal("তািরখ", "তারিখ", "label তারিখ"),
    _literal("িঠকানা", "ঠিকানা", "label ঠিকানা"),
    _literal("োকাড", "কোড", "label কোড"),
    _literal("োজলা", "জেলা", "label জেলা"),
    _literal("োপৗর", "পৌর", "label পৌর"),
    _literal("প্রকােশর", "প্রকাশের", "header প্রকাশের"),
    _literal("প্রামািনক", "প্রামানিক", "surname প্রামানিক"),
)

VOWEL_SIGN_RULES: tuple[GlyphRule, ...] = (
    GlyphRule(r"ে\s*া", "ো", "e-kar + aa-kar -> o-kar"),
    GlyphRule(r"ে\s*ৗ", "ৌ", "e-kar + au length mark -> ou-kar"),
    GlyphRule(f"(?<![{BENGALI}])ি\\s+(?={CONSONANT})", "ি", "orphan i-kar before its consonant"),
    GlyphRule(f"({CONSONANT})\\s+({POST_BASE_SIGN})", r"\1\2", "post-base sign split from consonant"),
    GlyphRule(f"({CONSONANT})\\s+ি(?!{CONSONANT})", r"\1ি", "trailing i-kar split from consonant"),
    GlyphRule(r"র্\s+", "র্", "reph split from its consonant"),
)

SPACING_RULES: tuple[GlyphRule, ...] = (
    GlyphRule(r"\s+", " ", "collapse whitespace"),
)

DEFAULT_RULE_SET = GlyphRuleSet(
    version=RULE_SET_VERSION,
    char_map=ANOMALY_MAP,
    rules=PREFIX_RULES + VOWEL_SIGN_RULES + SPACING_RULES,
)


def rule_set_from_dict(
    data: dict,
    base: Optional[GlyphRuleSet] = DEFAULT_RULE_SET,
    source: Optional[str] = None
) -> GlyphRuleSet:
    """
    Build a rule set from parsed rule-file data.

    Args:
        data: Mapping with optional "version", "char_map" and "rules"
        base: Rule set to extend; None builds a standalone set
        source: Where the data came from (for error details)

    Raises:
        RuleSetError: If an entry is malformed or a pattern does not compile
    """
    if not isinstance(data, dict):
        raise RuleSetError("Rule data must be a JSON object", source=source)

    char_map = data.get("char_map") or {}
    if not isinstance(char_map, dict):
        raise RuleSetError("char_map must be an object", source=source)
    for key, value in char_map.items():
        if len(key) != 1:
            raise RuleSetError(
                "char_map keys must be single code points", source=source, pattern=key
            )
        if not isinstance(value, str):
            raise RuleSetError("char_map values must be strings", source=source, pattern=key)

    rules = []
    for entry in data.get("rules") or []:
        if not isinstance(entry, dict) or "pattern" not in entry:
            raise RuleSetError("Each rule needs a pattern", source=source)
        try:
            rules.append(GlyphRule.from_dict(entry))
        except Exception as e:
            raise RuleSetError(
                f"Invalid rule pattern: {e}", source=source, pattern=str(entry.get("pattern"))
            ) from e

    version = str(data.get("version") or (base.version if base else RULE_SET_VERSION))

    if base is None:
        return GlyphRuleSet(version=version, char_map=char_map, rules=tuple(rules))
    return base.extended(char_map=char_map, rules=rules, version=version)


def load_rule_set(
    path: Union[str, Path],
    base: Optional[GlyphRuleSet] = DEFAULT_RULE_SET
) -> GlyphRuleSet:
    """
    Load a JSON rule file extending the built-in rule set.

    Raises:
        RuleSetError: If the file is missing, not JSON, or holds bad rules
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise RuleSetError(f"Cannot read rule file: {e}", source=str(path)) from e
    except json.JSONDecodeError as e:
        raise RuleSetError(f"Rule file is not valid JSON: {e}", source=str(path)) from e

    return rule_set_from_dict(data, base=base, source=str(path))
