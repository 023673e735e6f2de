from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional
import logging

from dateutil import parser as date_parser

logger = logging.getLogger('euromillions')

DEFAULT_MODEL_VERSION = 'v2.4.1'
DEFAULT_MODEL_ACCURACY = 75.0


class StorageError(RuntimeError):
    pass


class ModelNotFoundError(StorageError):
    def __init__(self, model_id: int):
        super().__init__(f'Model with id {model_id} not found')
        self.model_id = model_id


@dataclass(frozen=True)
class DrawData:
    date: str
    draw_number: int
    main_numbers: List[int]
    lucky_stars: List[int]
    jackpot_amount: float = 0.0
    jackpot_won: str = 'No'


@dataclass(frozen=True)
class DrawRecord:
    id: int
    date: str
    draw_number: int
    main_numbers: List[int]
    lucky_stars: List[int]
    jackpot_amount: float
    jackpot_won: str
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'date': self.date,
            'drawNumber': self.draw_number,
            'mainNumbers': list(self.main_numbers),
            'luckyStars': list(self.lucky_stars),
            'jackpotAmount': self.jackpot_amount,
            'jackpotWon': self.jackpot_won,
            'createdAt': self.created_at,
        }


@dataclass(frozen=True)
class PredictionData:
    main_numbers: List[int]
    lucky_stars: List[int]
    confidence_score: float
    model_version: str
    pattern_match: str


@dataclass(frozen=True)
class PredictionRecord:
    id: int
    main_numbers: List[int]
    lucky_stars: List[int]
    confidence_score: float
    model_version: str
    pattern_match: str
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'mainNumbers': list(self.main_numbers),
            'luckyStars': list(self.lucky_stars),
            'confidenceScore': self.confidence_score,
            'modelVersion': self.model_version,
            'patternMatch': self.pattern_match,
            'createdAt': self.created_at,
        }


@dataclass(frozen=True)
class ModelData:
    version: str = DEFAULT_MODEL_VERSION
    accuracy: float = DEFAULT_MODEL_ACCURACY
    training_data: int = 0
    is_active: str = 'true'


@dataclass(frozen=True)
class ModelRecord:
    id: int
    version: str
    accuracy: float
    training_data: int
    last_trained: datetime
    is_active: str = 'true'

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'version': self.version,
            'accuracy': self.accuracy,
            'trainingData': self.training_data,
            'lastTrained': self.last_trained,
            'isActive': self.is_active,
        }


def recomputed_accuracy(total_draws: int) -> float:
    """Accuracy figure the active model reports after ``total_draws`` draws."""
    return min(98.5, 85 + (total_draws / 100) * 2)


def parse_draw_date(value: str) -> Optional[date]:
    try:
        return date_parser.parse(value).date()
    except (ValueError, TypeError, OverflowError) as exc:
        logger.debug('Failed to parse draw date %r: %s', value, exc)
        return None


def in_date_range(value: str, start: date, end: date) -> bool:
    parsed = parse_draw_date(value)
    return parsed is not None and start <= parsed <= end


def as_date(value) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_draw_date(str(value))


class DrawStorage(ABC):
    """Persistence for draws, predictions and the (nominal) ML model rows.

    Every successful ``create_draw`` also refreshes the active model's
    training count and accuracy.
    """

    name = 'base'

    @abstractmethod
    def create_draw(self, draw: DrawData) -> DrawRecord:
        raise NotImplementedError

    @abstractmethod
    def get_all_draws(self) -> List[DrawRecord]:
        raise NotImplementedError

    @abstractmethod
    def get_draws_by_date_range(self, start_date, end_date) -> List[DrawRecord]:
        raise NotImplementedError

    @abstractmethod
    def create_prediction(self, prediction: PredictionData) -> PredictionRecord:
        raise NotImplementedError

    @abstractmethod
    def get_latest_prediction(self) -> Optional[PredictionRecord]:
        raise NotImplementedError

    @abstractmethod
    def get_all_predictions(self) -> List[PredictionRecord]:
        raise NotImplementedError

    @abstractmethod
    def create_model(self, model: ModelData) -> ModelRecord:
        raise NotImplementedError

    @abstractmethod
    def get_active_model(self) -> Optional[ModelRecord]:
        raise NotImplementedError

    @abstractmethod
    def update_model_accuracy(self, model_id: int, accuracy: float) -> ModelRecord:
        raise NotImplementedError

    @abstractmethod
    def get_all_models(self) -> List[ModelRecord]:
        raise NotImplementedError

    @abstractmethod
    def clear_all_data(self) -> None:
        raise NotImplementedError
