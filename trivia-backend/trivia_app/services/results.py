import math
from dataclasses import dataclass

# (minimum percentage, tier, emoji, message), best first; messages are in
# the default TARGET_LANG (pt), the language the questions are shown in
TIERS = [
    (100, "perfect", "🏆", "Perfeito! Você é um mestre em trivia!"),
    (80, "excellent", "⭐", "Excelente! Você se saiu muito bem!"),
    (60, "good", "👍", "Bom trabalho! Continue praticando!"),
    (40, "fair", "💪", "Você pode melhorar! Tente novamente!"),
    (0, "keep_trying", "🚀", "Não desista! Tente novamente!"),
]


@dataclass(frozen=True)
class QuizResult:
    score: int
    total: int
    percentage: int
    tier: str
    emoji: str
    message: str


def percentage(score: int, total: int) -> int:
    if total <= 0:
        return 0
    # half-up, not banker's rounding: 2.5 -> 3
    return int(math.floor(score * 100 / total + 0.5))


def grade(score: int, total: int) -> QuizResult:
    pct = percentage(score, total)
    for minimum, tier, emoji, message in TIERS[:-1]:
        if pct >= minimum:
            return QuizResult(score, total, pct, tier, emoji, message)
    _, tier, emoji, message = TIERS[-1]
    return QuizResult(score, total, pct, tier, emoji, message)
