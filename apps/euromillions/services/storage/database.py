from __future__ import annotations

from typing import List, Optional

from django.db import transaction
from django.utils import timezone

from ...models import Draw, MLModel, Prediction
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
    recomputed_accuracy,
)


def _draw_record(row: Draw) -> DrawRecord:
    return DrawRecord(
        id=row.id,
        date=row.date,
        draw_number=row.draw_number,
        main_numbers=list(row.main_numbers),
        lucky_stars=list(row.lucky_stars),
        jackpot_amount=row.jackpot_amount,
        jackpot_won=row.jackpot_won,
        created_at=row.created_at,
    )


def _prediction_record(row: Prediction) -> PredictionRecord:
    return PredictionRecord(
        id=row.id,
        main_numbers=list(row.main_numbers),
        lucky_stars=list(row.lucky_stars),
        confidence_score=row.confidence_score,
        model_version=row.model_version,
        pattern_match=row.pattern_match,
        created_at=row.created_at,
    )


def _model_record(row: MLModel) -> ModelRecord:
    return ModelRecord(
        id=row.id,
        version=row.version,
        accuracy=row.accuracy,
        training_data=row.training_data,
        last_trained=row.last_trained,
        is_active=row.is_active,
    )


class DatabaseStorage(DrawStorage):
    """Storage on the ``draws``, ``predictions`` and ``ml_models`` tables."""

    name = 'database'

    def create_draw(self, draw: DrawData) -> DrawRecord:
        with transaction.atomic():
            row = Draw.objects.create(
                date=draw.date,
                draw_number=draw.draw_number,
                main_numbers=list(draw.main_numbers),
                lucky_stars=list(draw.lucky_stars),
                jackpot_amount=float(draw.jackpot_amount),
                jackpot_won=draw.jackpot_won,
            )
            active = self._active_model_row()
            if active:
                total = Draw.objects.count()
                active.training_data = total
                active.accuracy = recomputed_accuracy(total)
                active.last_trained = timezone.now()
                active.save(update_fields=['training_data', 'accuracy', 'last_trained'])
        return _draw_record(row)

    def get_all_draws(self) -> List[DrawRecord]:
        return [_draw_record(row) for row in Draw.objects.order_by('-created_at', '-id')]

    def get_draws_by_date_range(self, start_date, end_date) -> List[DrawRecord]:
        # Dates are free-form text, so the range is applied after loading.
        start = as_date(start_date)
        end = as_date(end_date)
        if start is None or end is None:
            return []
        return [draw for draw in self.get_all_draws() if in_date_range(draw.date, start, end)]

    def create_prediction(self, prediction: PredictionData) -> PredictionRecord:
        row = Prediction.objects.create(
            main_numbers=list(prediction.main_numbers),
            lucky_stars=list(prediction.lucky_stars),
            confidence_score=prediction.confidence_score,
            model_version=prediction.model_version,
            pattern_match=prediction.pattern_match,
        )
        return _prediction_record(row)

    def get_latest_prediction(self) -> Optional[PredictionRecord]:
        row = Prediction.objects.order_by('-created_at', '-id').first()
        return _prediction_record(row) if row else None

    def get_all_predictions(self) -> List[PredictionRecord]:
        return [_prediction_record(row) for row in Prediction.objects.order_by('-created_at', '-id')]

    def create_model(self, model: ModelData) -> ModelRecord:
        row = MLModel.objects.create(
            version=model.version,
            accuracy=model.accuracy,
            training_data=model.training_data,
            is_active=model.is_active,
        )
        return _model_record(row)

    def get_active_model(self) -> Optional[ModelRecord]:
        row = self._active_model_row()
        return _model_record(row) if row else None

    def update_model_accuracy(self, model_id: int, accuracy: float) -> ModelRecord:
        row = MLModel.objects.filter(pk=model_id).first()
        if row is None:
            raise ModelNotFoundError(model_id)
        row.accuracy = accuracy
        row.last_trained = timezone.now()
        row.save(update_fields=['accuracy', 'last_trained'])
        return _model_record(row)

    def get_all_models(self) -> List[ModelRecord]:
        return [_model_record(row) for row in MLModel.objects.order_by('-last_trained', '-id')]

    def clear_all_data(self) -> None:
        with transaction.atomic():
            Draw.objects.all().delete()
            Prediction.objects.all().delete()
            MLModel.objects.all().delete()
            self.create_model(ModelData())

    def _active_model_row(self) -> Optional[MLModel]:
        return MLModel.objects.filter(is_active='true').order_by('-last_trained', '-id').first()
