from __future__ import annotations

from collections import Counter
import random
from typing import List, Optional, Sequence

from .game_config import GameConfig, get_game_config
from .storage import DrawRecord, ModelRecord, PredictionData

MAIN_POOL_SIZE = 25
STAR_POOL_SIZE = 8
BASE_CONFIDENCE = 75.0
MAX_CONFIDENCE = 97.0


def pattern_label(confidence: float) -> str:
    if confidence >= 85:
        return 'High'
    if confidence >= 70:
        return 'Medium'
    return 'Low'


def confidence_for(draw_count: int) -> float:
    if draw_count <= 0:
        return BASE_CONFIDENCE
    score = min(MAX_CONFIDENCE, BASE_CONFIDENCE + (draw_count / 100) * 15)
    return max(0.0, min(100.0, score))


def ranked_by_frequency(counts: Counter) -> List[int]:
    # Counter keeps first-seen order, and sorted() is stable on ties.
    return [number for number, _ in sorted(counts.items(), key=lambda item: item[1], reverse=True)]


class PredictionEngine:
    """Picks the next "prediction" from the most frequent historical numbers.

    Frequency only decides which numbers are eligible (the top 25 main
    numbers and top 8 stars); the pick within that pool is uniform.
    """

    def __init__(
        self,
        draws: Sequence[DrawRecord],
        active_model: Optional[ModelRecord] = None,
        game: GameConfig | None = None,
        seed: str | int | None = None,
    ):
        self.draws = list(draws)
        self.active_model = active_model
        self.game = game or get_game_config()
        self.random = random.Random(seed)

        main_counts: Counter = Counter()
        star_counts: Counter = Counter()
        for draw in self.draws:
            main_counts.update(draw.main_numbers)
            star_counts.update(draw.lucky_stars)
        self.main_pool = ranked_by_frequency(main_counts)[:MAIN_POOL_SIZE]
        self.star_pool = ranked_by_frequency(star_counts)[:STAR_POOL_SIZE]

    def generate(self) -> PredictionData:
        main_numbers = self._pick_unique(self.main_pool, self.game.main_count, self.game.max_number)
        lucky_stars = self._pick_unique(self.star_pool, self.game.star_count, self.game.max_star)
        confidence = confidence_for(len(self.draws))
        version = self.active_model.version if self.active_model else self.game.default_model_version
        return PredictionData(
            main_numbers=sorted(main_numbers),
            lucky_stars=sorted(lucky_stars),
            confidence_score=confidence,
            model_version=version,
            pattern_match=pattern_label(confidence),
        )

    def _pick_unique(self, pool: List[int], count: int, max_value: int) -> List[int]:
        picked: List[int] = []
        while len(picked) < count:
            remaining = [n for n in pool if n not in picked]
            if remaining:
                candidate = pool[self.random.randrange(len(pool))]
            else:
                candidate = self.random.randint(1, max_value)
            if candidate not in picked:
                picked.append(candidate)
        return picked
