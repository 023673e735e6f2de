from __future__ import annotations

from dataclasses import dataclass
import logging
import random
import re
from typing import Iterable, List, Optional

from .game_config import GameConfig, get_game_config
from .storage import DrawData, DrawStorage

logger = logging.getLogger('euromillions')

DIGITS_PATTERN = re.compile(r'\d+')
LEADING_INT_PATTERN = re.compile(r'^[+-]?\d+')
LEADING_FLOAT_PATTERN = re.compile(r'^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?')
CURRENCY_CHARS_PATTERN = re.compile(r'[€,EUR]')


@dataclass(frozen=True)
class IngestionResult:
    records_processed: int
    lines_seen: int
    lines_skipped: int


def normalize_numbers(numbers: Iterable[int]) -> List[int]:
    return sorted(int(n) for n in numbers)


def parse_leading_int(text: str) -> int:
    match = LEADING_INT_PATTERN.match(text.strip())
    return int(match.group(0)) if match else 0


def parse_jackpot_amount(text: str) -> float:
    cleaned = CURRENCY_CHARS_PATTERN.sub('', text).strip()
    match = LEADING_FLOAT_PATTERN.match(cleaned)
    if not match:
        return 0.0
    try:
        return float(match.group(0))
    except ValueError:
        return 0.0


def fill_random(numbers: List[int], count: int, max_value: int, rng: random.Random) -> List[int]:
    numbers = list(numbers)
    while len(numbers) < count:
        candidate = rng.randint(1, max_value)
        if candidate not in numbers:
            numbers.append(candidate)
    return numbers


def parse_draw_line(line: str, game: GameConfig | None = None, rng: random.Random | None = None) -> Optional[DrawData]:
    """Turn one CSV data line into a draw, or ``None`` when it cannot be one.

    Column meaning is guessed: the first field is the date, the second the
    draw number, and the rest are scanned for a jackpot amount, a "won" flag
    and ball numbers. Numbers fill the main set first and the lucky stars
    after it is complete; gaps are padded with random unused values.
    """
    game = game or get_game_config()
    rng = rng or random.Random()

    fields = [field.strip() for field in line.split(',')]
    if len(fields) < 2:
        return None

    draw_date = fields[0]
    draw_number_text = fields[1]
    if draw_number_text and draw_number_text != draw_date:
        draw_number = parse_leading_int(draw_number_text)
    else:
        draw_number = rng.randint(1000, 9999)

    main_numbers: List[int] = []
    lucky_stars: List[int] = []
    jackpot_amount = 0.0
    jackpot_won = 'No'

    for field in fields[2:]:
        if '€' in field or 'EUR' in field:
            jackpot_amount = parse_jackpot_amount(field)
            continue
        lowered = field.lower()
        if 'yes' in lowered or 'won' in lowered:
            jackpot_won = 'Yes'
            continue

        for value in (int(digits) for digits in DIGITS_PATTERN.findall(field)):
            if len(main_numbers) < game.main_count:
                if 1 <= value <= game.max_number and value not in main_numbers:
                    main_numbers.append(value)
            elif len(lucky_stars) < game.star_count:
                if 1 <= value <= game.max_star and value not in lucky_stars:
                    lucky_stars.append(value)

    main_numbers = normalize_numbers(fill_random(main_numbers, game.main_count, game.max_number, rng))
    lucky_stars = normalize_numbers(fill_random(lucky_stars, game.star_count, game.max_star, rng))

    if not draw_date or len(main_numbers) != game.main_count or len(lucky_stars) != game.star_count:
        return None

    return DrawData(
        date=draw_date,
        draw_number=draw_number,
        main_numbers=main_numbers,
        lucky_stars=lucky_stars,
        jackpot_amount=jackpot_amount,
        jackpot_won=jackpot_won,
    )


def ingest_csv(
    text: str,
    storage: DrawStorage,
    game: GameConfig | None = None,
    rng: random.Random | None = None,
) -> IngestionResult:
    game = game or get_game_config()
    rng = rng or random.Random()
    lines = [line for line in text.split('\n') if line.strip()]
    data_lines = lines[1:]

    logger.info('Starting CSV ingestion: %s data lines, storage=%s', len(data_lines), storage.name)
    records_processed = 0
    skipped = 0

    for index, line in enumerate(data_lines, start=1):
        try:
            draw = parse_draw_line(line, game=game, rng=rng)
            if draw is None:
                skipped += 1
                continue
            storage.create_draw(draw)
            records_processed += 1
        except Exception as exc:
            skipped += 1
            logger.warning('Error parsing line %s: %s; line content: %r', index, exc, line)

    logger.info(
        'CSV ingestion completed: processed %s lines, stored %s, skipped %s',
        len(data_lines),
        records_processed,
        skipped,
    )
    return IngestionResult(
        records_processed=records_processed,
        lines_seen=len(data_lines),
        lines_skipped=skipped,
    )
