"""Reading levels and the rewrite rules attached to each of them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ReadingLevel(StrEnum):
    """How aggressively text is simplified."""

    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"

    @classmethod
    def resolve(cls, value: str | ReadingLevel | None) -> ReadingLevel:
        """Map any incoming value to a level; unknown values fall back to moderate."""
        if isinstance(value, ReadingLevel):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.MODERATE


@dataclass(frozen=True)
class LevelRules:
    """Immutable rewrite rules for one reading level."""

    vocabulary: str
    max_words_per_sentence: int
    tone: str
    extra_rules: tuple[str, ...] = ()

    def as_prompt_lines(self) -> list[str]:
        lines = [
            f"- Vocabulary: {self.vocabulary}",
            f"- Max {self.max_words_per_sentence} words per sentence",
            f"- Tone: {self.tone}",
        ]
        lines.extend(f"- {rule}" for rule in self.extra_rules)
        lines.append("- Write continuous prose (NO lists or numbers)")
        return lines


LEVEL_RULES: dict[ReadingLevel, LevelRules] = {
    ReadingLevel.MILD: LevelRules(
        vocabulary="keep most words but replace uncommon ones",
        max_words_per_sentence=15,
        tone="neutral",
        extra_rules=(
            "Break long sentences into shorter ones",
            "Use simpler punctuation (avoid semicolons)",
            "Active voice instead of passive",
        ),
    ),
    ReadingLevel.MODERATE: LevelRules(
        vocabulary="simple, everyday words",
        max_words_per_sentence=12,
        tone="plain and direct",
        extra_rules=(
            "One idea per sentence",
            "Active voice only",
            "Avoid abbreviations",
        ),
    ),
    ReadingLevel.SEVERE: LevelRules(
        vocabulary="very basic words (reading age 8-10)",
        max_words_per_sentence=8,
        tone="warm and personal, use \"you\" and \"we\"",
        extra_rules=(
            "No metaphors or idioms",
            "Bold key terms like **word**",
        ),
    ),
}


def rules_for(level: str | ReadingLevel | None) -> LevelRules:
    """Return the rule set for *level*, defaulting to moderate."""
    return LEVEL_RULES[ReadingLevel.resolve(level)]
