from __future__ import annotations

from functools import wraps
import json
import logging
import uuid

from django.conf import settings
from django.core.files.storage import default_storage
from django.http import JsonResponse
from django.shortcuts import render
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from .apps import get_services
from .forms import BudgetForm, DrawForm, UploadForm
from .services.analytics import (
    compute_frequency_analysis,
    compute_model_performance,
    number_frequency,
    number_ranges,
)
from .services.budget import DEFAULT_INTEREST_RATE, DEFAULT_JACKPOT_EUR, calculate_budget, convert_currency
from .services.game_config import get_game_config
from .services.ingestion import ingest_csv
from .services.jackpot import get_jackpot_info
from .services.predictor import PredictionEngine

logger = logging.getLogger('euromillions')


def _error(message: str, status: int, **extra) -> JsonResponse:
    return JsonResponse({'message': message, **extra}, status=status)


def with_services(failure_message: str):
    """Pass the app's services into the view and turn crashes into a 500."""

    def decorator(view):
        @wraps(view)
        def wrapper(request, *args, **kwargs):
            try:
                return view(request, get_services(), *args, **kwargs)
            except Exception:
                logger.exception('%s %s failed', request.method, request.path)
                return _error(failure_message, 500)

        return wrapper

    return decorator


@require_http_methods(['GET'])
@with_services('Failed to fetch jackpot data')
def api_jackpot(request, services):
    return JsonResponse(get_jackpot_info())


@require_http_methods(['GET'])
@with_services('Failed to fetch exchange rate')
def api_exchange_rate(request, services):
    return JsonResponse(services.exchange_rates.get_current_rate())


@csrf_exempt
@require_http_methods(['POST'])
@with_services('Failed to process CSV file')
def api_upload_data(request, services):
    form = UploadForm(request.POST, request.FILES)
    if not form.is_valid():
        return _error('No file uploaded', 400)

    upload = form.cleaned_data['csvFile']
    upload_dir = settings.EUROMILLIONS_CONFIG['UPLOAD_DIR']
    stored_name = default_storage.save(
        f'{upload_dir}/{uuid.uuid4().hex}.csv',
        upload,
    )
    try:
        with default_storage.open(stored_name, 'rb') as handle:
            content = handle.read().decode('utf-8-sig', errors='replace')
        result = ingest_csv(content, services.storage)
    finally:
        default_storage.delete(stored_name)

    return JsonResponse({
        'recordsProcessed': result.records_processed,
        'lastUpload': timezone.now(),
        'status': 'success',
    })


@csrf_exempt
@require_http_methods(['GET', 'POST'])
def api_draws(request):
    if request.method == 'POST':
        return _create_draw(request)
    return _list_draws(request)


@with_services('Failed to fetch draws')
def _list_draws(request, services):
    draws = services.storage.get_all_draws()
    return JsonResponse([draw.to_dict() for draw in draws], safe=False)


@with_services('Failed to create draw')
def _create_draw(request, services):
    try:
        payload = json.loads(request.body or b'{}')
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        return _error('Invalid draw data', 400, errors=[{'path': [], 'message': str(exc), 'code': 'invalid_json'}])
    if not isinstance(payload, dict):
        return _error('Invalid draw data', 400, errors=[{'path': [], 'message': 'Expected an object.', 'code': 'invalid_type'}])

    form = DrawForm(payload)
    if not form.is_valid():
        return _error('Invalid draw data', 400, errors=form.error_list())

    draw = services.storage.create_draw(form.to_draw_data())
    return JsonResponse(draw.to_dict(), status=201)


@csrf_exempt
@require_http_methods(['POST'])
@with_services('Failed to generate prediction')
def api_generate_prediction(request, services):
    storage = services.storage
    engine = PredictionEngine(storage.get_all_draws(), active_model=storage.get_active_model())
    prediction = storage.create_prediction(engine.generate())
    return JsonResponse(prediction.to_dict())


@require_http_methods(['GET'])
@with_services('Failed to fetch prediction')
def api_latest_prediction(request, services):
    prediction = services.storage.get_latest_prediction()
    if prediction is None:
        return _error('No predictions found', 404)
    return JsonResponse(prediction.to_dict())


@require_http_methods(['GET'])
@with_services('Failed to fetch predictions')
def api_predictions(request, services):
    predictions = services.storage.get_all_predictions()
    return JsonResponse([prediction.to_dict() for prediction in predictions], safe=False)


@require_http_methods(['GET'])
@with_services('Failed to fetch model performance')
def api_model_performance(request, services):
    storage = services.storage
    draws = storage.get_all_draws()
    if not draws:
        return _error('No training data available. Please upload historical CSV data first.', 404)

    performance = compute_model_performance(
        draws,
        storage.get_all_predictions(),
        active_model=storage.get_active_model(),
    )
    return JsonResponse({
        'accuracy': performance.accuracy,
        'trainingData': performance.training_data,
        'version': performance.version,
        'lastTrained': performance.last_trained,
        'weeklyAccuracy': performance.weekly_accuracy,
        'monthlyAccuracy': performance.monthly_accuracy,
        'predictionsMade': performance.predictions_made,
    })


@require_http_methods(['GET'])
@with_services('Failed to fetch frequency analysis')
def api_frequency_analysis(request, services):
    draws = services.storage.get_all_draws()
    if not draws:
        return _error('No historical data available. Please upload CSV data first.', 404)

    analysis = compute_frequency_analysis(draws)
    return JsonResponse({
        'frequencyData': analysis.frequency_data,
        'mostFrequent': analysis.most_frequent,
        'leastFrequent': analysis.least_frequent,
        'trending': analysis.trending,
        'patterns': {
            'oddEvenRatio': analysis.odd_even_ratio,
            'highLowSplit': analysis.high_low_split,
            'sumRange': analysis.sum_range,
            'sequentialAccuracy': analysis.sequential_accuracy,
        },
    })


@require_http_methods(['GET'])
@with_services('Failed to calculate budget')
def api_budget(request, services):
    form = BudgetForm(request.GET)
    if not form.is_valid():
        return _error('Invalid budget parameters', 400, errors=form.errors.get_json_data())
    rate = services.exchange_rates.get_current_rate()['rate']
    result = calculate_budget(form.value('jackpot'), rate, form.value('interestRate'), form.allocation())
    return JsonResponse(result.to_dict())


def dashboard(request):
    services = get_services()
    storage = services.storage
    game = get_game_config()
    jackpot = get_jackpot_info()
    exchange = services.exchange_rates.get_current_rate()
    draws = storage.get_all_draws()

    analysis = compute_frequency_analysis(draws) if draws else None
    frequency_ranges = []
    if analysis:
        frequency_ranges = [
            {'label': f'{low}-{high}', 'count': count}
            for (low, high), count in zip(number_ranges(game.max_number), analysis.frequency_data)
        ]
    performance = (
        compute_model_performance(draws, storage.get_all_predictions(), active_model=storage.get_active_model())
        if draws else None
    )
    context = {
        'game': game,
        'jackpot': jackpot,
        'jackpot_zar': convert_currency(jackpot['amount'], exchange['rate']),
        'exchange': exchange,
        'latest_prediction': storage.get_latest_prediction(),
        'recent_draws': draws[:10],
        'total_draws': len(draws),
        'analysis': analysis,
        'frequency_ranges': frequency_ranges,
        'performance': performance,
        'number_frequency': number_frequency(draws, game.max_number),
    }
    return render(request, 'euromillions/dashboard.html', context)


def budget(request):
    exchange = get_services().exchange_rates.get_current_rate()
    form = BudgetForm(request.GET or None)
    if form.is_bound and form.is_valid():
        result = calculate_budget(form.value('jackpot'), exchange['rate'], form.value('interestRate'), form.allocation())
    else:
        result = calculate_budget(DEFAULT_JACKPOT_EUR, exchange['rate'], DEFAULT_INTEREST_RATE)
    context = {
        'form': form,
        'result': result,
        'exchange': exchange,
    }
    return render(request, 'euromillions/budget.html', context)
