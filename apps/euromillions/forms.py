from __future__ import annotations

from django import forms
from django.core.exceptions import ValidationError

from .services.budget import DEFAULT_ALLOCATION, DEFAULT_INTEREST_RATE, DEFAULT_JACKPOT_EUR
from .services.game_config import get_game_config
from .services.storage import DrawData


class NumberListField(forms.JSONField):
    """A JSON array of ``count`` distinct integers between 1 and ``max_value``."""

    def __init__(self, count: int, max_value: int, **kwargs):
        self.count = count
        self.max_value = max_value
        super().__init__(**kwargs)

    def to_python(self, value):
        if isinstance(value, (list, tuple)):
            return list(value)
        return super().to_python(value)

    def bound_data(self, data, initial):
        if isinstance(data, (list, tuple)):
            return list(data)
        return super().bound_data(data, initial)

    def validate(self, value):
        super().validate(value)
        if not isinstance(value, list):
            raise ValidationError('Expected an array of numbers.', code='invalid_type')
        if any(isinstance(n, bool) or not isinstance(n, int) for n in value):
            raise ValidationError('Expected whole numbers.', code='invalid_type')
        if len(value) != self.count:
            raise ValidationError(
                'Expected exactly %(count)s numbers.',
                code='invalid_length',
                params={'count': self.count},
            )
        if len(set(value)) != len(value):
            raise ValidationError('Numbers must be unique.', code='not_unique')
        if any(n < 1 or n > self.max_value for n in value):
            raise ValidationError(
                'Numbers must be between 1 and %(max)s.',
                code='out_of_range',
                params={'max': self.max_value},
            )


class DrawForm(forms.Form):
    """Validates the JSON body of ``POST /api/draws`` (camelCase keys)."""

    date = forms.CharField(strip=False)
    drawNumber = forms.IntegerField()
    jackpotAmount = forms.FloatField()
    jackpotWon = forms.CharField()

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        game = get_game_config()
        self.fields['mainNumbers'] = NumberListField(count=game.main_count, max_value=game.max_number)
        self.fields['luckyStars'] = NumberListField(count=game.star_count, max_value=game.max_star)

    def to_draw_data(self) -> DrawData:
        data = self.cleaned_data
        return DrawData(
            date=data['date'],
            draw_number=data['drawNumber'],
            main_numbers=sorted(data['mainNumbers']),
            lucky_stars=sorted(data['luckyStars']),
            jackpot_amount=data['jackpotAmount'],
            jackpot_won=data['jackpotWon'],
        )

    def error_list(self) -> list:
        return [
            {'path': [name], 'message': error['message'], 'code': error['code']}
            for name, errors in self.errors.get_json_data().items()
            for error in errors
        ]


class UploadForm(forms.Form):
    csvFile = forms.FileField(allow_empty_file=True)


class BudgetForm(forms.Form):
    jackpot = forms.FloatField(min_value=0, initial=DEFAULT_JACKPOT_EUR, required=False)
    interestRate = forms.FloatField(min_value=0, initial=DEFAULT_INTEREST_RATE, required=False)
    investecFixedDeposit = forms.FloatField(min_value=0, max_value=100, initial=DEFAULT_ALLOCATION['investecFixedDeposit'], required=False)
    houses = forms.FloatField(min_value=0, max_value=100, initial=DEFAULT_ALLOCATION['houses'], required=False)
    cars = forms.FloatField(min_value=0, max_value=100, initial=DEFAULT_ALLOCATION['cars'], required=False)
    otherExpenses = forms.FloatField(min_value=0, max_value=100, initial=DEFAULT_ALLOCATION['otherExpenses'], required=False)

    def value(self, name: str) -> float:
        value = self.cleaned_data.get(name)
        return self.fields[name].initial if value is None else value

    def allocation(self) -> dict:
        return {key: self.value(key) for key in DEFAULT_ALLOCATION}
