from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import datetime
import math
import random
from typing import List, Optional, Sequence

from django.utils import timezone

from .game_config import GameConfig, get_game_config
from .storage import DrawRecord, ModelRecord, PredictionRecord

RANGE_WIDTH = 10


def number_ranges(max_number: int, width: int = RANGE_WIDTH) -> List[tuple]:
    return [(start, min(start + width - 1, max_number)) for start in range(1, max_number + 1, width)]


@dataclass
class FrequencyAnalysis:
    frequency_data: list
    most_frequent: int
    least_frequent: int
    trending: int
    odd_even_ratio: str
    high_low_split: str
    sum_range: str
    sequential_accuracy: float


@dataclass
class ModelPerformance:
    accuracy: float
    training_data: int
    version: str
    last_trained: datetime
    weekly_accuracy: float
    monthly_accuracy: float
    predictions_made: int


def round_half_up(value: float, digits: int = 0) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def _ratio(part: int, total: int, scale: int = 5) -> int:
    return int(round_half_up(part / total * scale)) if total else 0


def compute_frequency_analysis(draws: Sequence[DrawRecord], game: GameConfig | None = None) -> FrequencyAnalysis:
    if not draws:
        raise ValueError('Frequency analysis needs at least one draw')
    game = game or get_game_config()

    counts: Counter[int] = Counter()
    for draw in draws:
        counts.update(draw.main_numbers)

    ranges = number_ranges(game.max_number)
    frequency_data = [
        sum(1 for draw in draws for n in draw.main_numbers if low <= n <= high)
        for low, high in ranges
    ]

    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    most_frequent = ranked[0][0]
    least_frequent = ranked[-1][0]

    odd = even = low = high = 0
    sum_total = 0
    for draw in draws:
        for n in draw.main_numbers:
            if n % 2 == 1:
                odd += 1
            else:
                even += 1
            if n <= game.small_threshold:
                low += 1
            else:
                high += 1
        sum_total += sum(draw.main_numbers)

    avg_sum = int(round_half_up(sum_total / len(draws)))
    return FrequencyAnalysis(
        frequency_data=frequency_data,
        most_frequent=most_frequent,
        least_frequent=least_frequent,
        trending=most_frequent,
        odd_even_ratio=f'{_ratio(odd, odd + even)}:{_ratio(even, odd + even)}',
        high_low_split=f'{_ratio(low, low + high)}:{_ratio(high, low + high)}',
        sum_range=f'{avg_sum - 20}-{avg_sum + 20}',
        sequential_accuracy=min(95, 70 + len(draws) / 50),
    )


def compute_model_performance(
    draws: Sequence[DrawRecord],
    predictions: Sequence[PredictionRecord],
    active_model: Optional[ModelRecord] = None,
    game: GameConfig | None = None,
    rng: random.Random | None = None,
) -> ModelPerformance:
    if not draws:
        raise ValueError('Model performance needs at least one draw')
    game = game or get_game_config()
    rng = rng or random.Random()

    training_count = len(draws)
    base_accuracy = min(85, 60 + (training_count / 100) * 20)
    weekly = base_accuracy + (rng.random() - 0.5) * 5
    monthly = base_accuracy - 2 + (rng.random() - 0.5) * 3

    return ModelPerformance(
        accuracy=round_half_up(base_accuracy, 1),
        training_data=training_count,
        version=active_model.version if active_model else game.default_model_version,
        last_trained=active_model.last_trained if active_model else timezone.now(),
        weekly_accuracy=round_half_up(weekly, 1),
        monthly_accuracy=round_half_up(monthly, 1),
        predictions_made=len(predictions),
    )


def number_frequency(draws: Sequence[DrawRecord], max_number: int) -> List[dict]:
    counts: Counter[int] = Counter()
    for draw in draws:
        counts.update(draw.main_numbers)
    return [{'number': n, 'count': counts.get(n, 0)} for n in range(1, max_number + 1)]
