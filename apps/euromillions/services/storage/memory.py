from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Dict, List, Optional

from django.utils import timezone

from .base import (
    DrawData,
    DrawRecord,
    DrawStorage,
    ModelData,
    ModelNotFoundError,
    ModelRecord,
    PredictionData,
    PredictionRecord,
    as_date,
    in_date_range,
    parse_draw_date,
    recomputed_accuracy,
)


class MemoryStorage(DrawStorage):
    """Process-local storage backed by dicts keyed by integer id."""

    name = 'memory'

    def __init__(self):
        self._draws: Dict[int, DrawRecord] = {}
        self._predictions: Dict[int, PredictionRecord] = {}
        self._models: Dict[int, ModelRecord] = {}
        self._reset_counters()
        self.create_model(ModelData())

    def _reset_counters(self) -> None:
        self._next_draw_id = 1
        self._next_prediction_id = 1
        self._next_model_id = 1

    def create_draw(self, draw: DrawData) -> DrawRecord:
        record = DrawRecord(
            id=self._next_draw_id,
            date=draw.date,
            draw_number=draw.draw_number,
            main_numbers=list(draw.main_numbers),
            lucky_stars=list(draw.lucky_stars),
            jackpot_amount=float(draw.jackpot_amount),
            jackpot_won=draw.jackpot_won,
            created_at=timezone.now(),
        )
        self._next_draw_id += 1
        self._draws[record.id] = record

        active = self.get_active_model()
        if active:
            total = len(self._draws)
            self._models[active.id] = replace(
                active,
                training_data=total,
                last_trained=timezone.now(),
                accuracy=recomputed_accuracy(total),
            )
        return record

    def get_all_draws(self) -> List[DrawRecord]:
        def sort_key(record: DrawRecord):
            parsed = parse_draw_date(record.date)
            return (parsed is not None, parsed or date.min, record.id)

        return sorted(self._draws.values(), key=sort_key, reverse=True)

    def get_draws_by_date_range(self, start_date, end_date) -> List[DrawRecord]:
        start = as_date(start_date)
        end = as_date(end_date)
        if start is None or end is None:
            return []
        return [draw for draw in self._draws.values() if in_date_range(draw.date, start, end)]

    def create_prediction(self, prediction: PredictionData) -> PredictionRecord:
        record = PredictionRecord(
            id=self._next_prediction_id,
            main_numbers=list(prediction.main_numbers),
            lucky_stars=list(prediction.lucky_stars),
            confidence_score=prediction.confidence_score,
            model_version=prediction.model_version,
            pattern_match=prediction.pattern_match,
            created_at=timezone.now(),
        )
        self._next_prediction_id += 1
        self._predictions[record.id] = record
        return record

    def get_latest_prediction(self) -> Optional[PredictionRecord]:
        predictions = self.get_all_predictions()
        return predictions[0] if predictions else None

    def get_all_predictions(self) -> List[PredictionRecord]:
        return sorted(
            self._predictions.values(),
            key=lambda p: (p.created_at, p.id),
            reverse=True,
        )

    def create_model(self, model: ModelData) -> ModelRecord:
        record = ModelRecord(
            id=self._next_model_id,
            version=model.version,
            accuracy=model.accuracy,
            training_data=model.training_data,
            last_trained=timezone.now(),
            is_active=model.is_active,
        )
        self._next_model_id += 1
        self._models[record.id] = record
        return record

    def get_active_model(self) -> Optional[ModelRecord]:
        for model in self._models.values():
            if model.is_active == 'true':
                return model
        return None

    def update_model_accuracy(self, model_id: int, accuracy: float) -> ModelRecord:
        model = self._models.get(model_id)
        if model is None:
            raise ModelNotFoundError(model_id)
        updated = replace(model, accuracy=accuracy, last_trained=timezone.now())
        self._models[model_id] = updated
        return updated

    def get_all_models(self) -> List[ModelRecord]:
        return sorted(self._models.values(), key=lambda m: (m.last_trained, m.id), reverse=True)

    def clear_all_data(self) -> None:
        self._draws.clear()
        self._predictions.clear()
        self._models.clear()
        self._reset_counters()
        self.create_model(ModelData())
