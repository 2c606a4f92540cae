"""Tagged dispatch outcome.

``resolve`` collapses "no rule for these candidates" and "rule ran but the
content was inconclusive" into the same empty result. ``explain`` keeps them
apart for diagnostics; callers should still treat both as a failed
disambiguation.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from tiebreak.languages import Language


class OutcomeKind(enum.StrEnum):
    RESOLVED = "resolved"
    NO_RULE = "no_rule"
    INCONCLUSIVE = "inconclusive"


@dataclass(frozen=True)
class Resolution:
    kind: OutcomeKind
    language: Language | None = None
    rule: str | None = None

    @property
    def resolved(self) -> bool:
        return self.kind is OutcomeKind.RESOLVED

    @property
    def languages(self) -> list[Language]:
        return [self.language] if self.language is not None else []

    def to_dict(self) -> dict:
        return {
            "kind": str(self.kind),
            "language": self.language.name if self.language else None,
            "rule": self.rule,
        }


__all__ = ["OutcomeKind", "Resolution"]
