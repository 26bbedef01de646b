"""
Glyph rule models.

A rule set is immutable, process-wide data: a single-code-point anomaly
table plus an ordered tuple of contextual rewrite rules. Later rules
assume earlier ones already ran, so order is part of the data.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional


_GROUP_REF_RE = re.compile(r"\\(\d+)|\\g<([^>]*)>")


def _check_group_refs(compiled: re.Pattern, replacement: str) -> None:
    """Fail at load time, not at first match, on a bad group reference."""
    for m in _GROUP_REF_RE.finditer(replacement):
        ref = m.group(1) or m.group(2)
        if ref.isdigit():
            if int(ref) > compiled.groups:
                raise re.error(f"invalid group reference {ref}")
        elif ref not in compiled.groupindex:
            raise re.error(f"unknown group name {ref!r}")


@dataclass(frozen=True)
class GlyphRule:
    """One ordered pattern -> replacement rewrite."""

    pattern: str
    replacement: str
    description: str = ""
    regex: bool = True

    _compiled: Optional[re.Pattern] = field(
        default=None, init=False, repr=False, compare=False
    )

    def __post_init__(self):
        if self.regex:
            # re.error propagates to the caller (rule loaders wrap it)
            compiled = re.compile(self.pattern)
            _check_group_refs(compiled, self.replacement)
            object.__setattr__(self, "_compiled", compiled)

    def apply(self, text: str) -> str:
        """Apply this rule to text once, everywhere it matches."""
        if self._compiled is not None:
            return self._compiled.sub(self.replacement, text)
        return text.replace(self.pattern, self.replacement)

    def to_dict(self) -> dict[str, Any]:
        return {
            "pattern": self.pattern,
            "replacement": self.replacement,
            "description": self.description,
            "regex": self.regex,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GlyphRule":
        return cls(
            pattern=str(data["pattern"]),
            replacement=str(data.get("replacement", "")),
            description=str(data.get("description", "")),
            regex=bool(data.get("regex", True)),
        )


@dataclass(frozen=True)
class GlyphRuleSet:
    """
    Versioned anomaly table and ordered rule list.

    The anomaly table is applied as one str.translate pass, so output of
    one entry is never re-scanned for another entry.
    """

    version: str
    char_map: Mapping[str, str]
    rules: tuple[GlyphRule, ...] = ()
    max_passes: int = 32

    _table: dict[int, str] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self):
        frozen_map = MappingProxyType(dict(self.char_map))
        object.__setattr__(self, "char_map", frozen_map)
        object.__setattr__(self, "rules", tuple(self.rules))
        # maketrans rejects keys that are not single code points
        object.__setattr__(self, "_table", str.maketrans(dict(frozen_map)))

    @property
    def translation_table(self) -> dict[int, str]:
        return self._table

    @property
    def anomaly_chars(self) -> frozenset[str]:
        return frozenset(self.char_map)

    def extended(
        self,
        char_map: Optional[Mapping[str, str]] = None,
        rules: Iterable[GlyphRule] = (),
        version: Optional[str] = None,
    ) -> "GlyphRuleSet":
        """
        Return a new rule set with extra anomalies and rules.

        Extra anomaly entries override existing ones; extra rules run after
        the built-in ones.
        """
        merged = dict(self.char_map)
        merged.update(char_map or {})
        return GlyphRuleSet(
            version=version or self.version,
            char_map=merged,
            rules=self.rules + tuple(rules),
            max_passes=self.max_passes,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "char_map": dict(self.char_map),
            "rules": [rule.to_dict() for rule in self.rules],
        }
