import random
import shutil
import tempfile
from pathlib import Path
from unittest import mock

import requests
from django.apps import apps
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase, override_settings

from apps.euromillions.apps import Services
from apps.euromillions.services.exchange_rate import ExchangeRateService
from apps.euromillions.services.storage import DrawData, MemoryStorage
from apps.euromillions.services.storage.database import DatabaseStorage

SCENARIO_CSV = b'Date,Draw,N1,N2,N3,N4,N5,S1,S2\n2025-07-04,1851,3,16,23,38,47,7,11\n'

VALID_DRAW = {
    'date': '2025-07-04',
    'drawNumber': 1851,
    'mainNumbers': [47, 3, 16, 23, 38],
    'luckyStars': [11, 7],
    'jackpotAmount': 130000000,
    'jackpotWon': 'No',
}

LONG_DATE = ' Friday 4 July 2025, EuroMillions draw 1851 (superdraw week) '


class BrokenStorage(MemoryStorage):
    def get_all_draws(self):
        raise RuntimeError('connection reset')


class ApiTestCase(TestCase):
    storage_class = MemoryStorage

    def setUp(self):
        self.config = apps.get_app_config('euromillions')
        original = self.config.services
        self.addCleanup(setattr, self.config, 'services', original)

        self.session = mock.Mock()
        self.session.get.side_effect = requests.ConnectionError('offline')
        self.storage = self.storage_class()
        self.exchange_rates = ExchangeRateService(session=self.session, rng=random.Random(1))
        self.config.services = Services(storage=self.storage, exchange_rates=self.exchange_rates)

        self.media_root = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.media_root, ignore_errors=True)
        media_override = override_settings(MEDIA_ROOT=self.media_root)
        media_override.enable()
        self.addCleanup(media_override.disable)

    def upload(self, content, name='draws.csv'):
        csv_file = SimpleUploadedFile(name, content, content_type='text/csv')
        return self.client.post('/api/upload-data', {'csvFile': csv_file})

    def add_draws(self, count):
        for idx in range(count):
            self.storage.create_draw(DrawData(
                date=f'2025-01-{idx % 28 + 1:02d}',
                draw_number=1000 + idx,
                main_numbers=[1 + idx % 10, 12, 23, 34, 45],
                lucky_stars=[1, 2 + idx % 10],
            ))


class JackpotAndRateApiTests(ApiTestCase):
    def test_jackpot(self):
        response = self.client.get('/api/jackpot')
        assert response.status_code == 200
        body = response.json()
        assert body['amount'] == 74000000
        assert body['currency'] == 'EUR'
        assert body['drawNumber'] == 1852
        assert body['nextDrawDate'].endswith('Z')

    def test_exchange_rate(self):
        response = self.client.get('/api/exchange-rate')
        assert response.status_code == 200
        body = response.json()
        assert body['from'] == 'EUR'
        assert body['to'] == 'ZAR'
        assert body['rate'] == 21.01
        assert 'lastUpdated' in body

    def test_exchange_rate_reads_do_not_fetch(self):
        first = self.client.get('/api/exchange-rate').json()
        second = self.client.get('/api/exchange-rate').json()
        assert first == second
        self.session.get.assert_not_called()

    def test_post_not_allowed(self):
        assert self.client.post('/api/jackpot').status_code == 405


class UploadApiTests(ApiTestCase):
    def test_upload_single_draw(self):
        response = self.upload(SCENARIO_CSV)
        assert response.status_code == 200
        body = response.json()
        assert body['recordsProcessed'] == 1
        assert body['status'] == 'success'
        assert body['lastUpload']

        draws = self.client.get('/api/draws').json()
        assert len(draws) == 1
        assert draws[0]['mainNumbers'] == [3, 16, 23, 38, 47]
        assert draws[0]['luckyStars'] == [7, 11]
        assert draws[0]['drawNumber'] == 1851

    def test_upload_fixture(self):
        content = (Path(__file__).parent / 'fixtures' / 'draws_sample.csv').read_bytes()
        response = self.upload(content)
        assert response.json()['recordsProcessed'] == 4
        assert self.storage.get_active_model().training_data == 4

    def test_upload_with_bom(self):
        response = self.upload(b'\xef\xbb\xbf' + SCENARIO_CSV)
        assert response.json()['recordsProcessed'] == 1

    def test_uploaded_file_is_removed(self):
        self.upload(SCENARIO_CSV)
        upload_dir = Path(self.media_root) / 'uploads'
        assert not upload_dir.exists() or list(upload_dir.iterdir()) == []

    def test_upload_without_usable_lines(self):
        response = self.upload(b'Date,Draw\nbroken-line\n')
        assert response.status_code == 200
        assert response.json()['recordsProcessed'] == 0

    def test_upload_with_cp1252_euro_sign(self):
        content = SCENARIO_CSV.rstrip(b'\n') + b',\x80130000000\n'
        response = self.upload(content)
        assert response.status_code == 200
        assert response.json()['recordsProcessed'] == 1
        draw = self.storage.get_all_draws()[0]
        assert draw.main_numbers == [3, 16, 23, 38, 47]
        assert draw.lucky_stars == [7, 11]

    def test_empty_file(self):
        response = self.upload(b'')
        assert response.status_code == 200
        assert response.json()['recordsProcessed'] == 0

    def test_missing_file(self):
        response = self.client.post('/api/upload-data', {})
        assert response.status_code == 400
        assert response.json() == {'message': 'No file uploaded'}


class DrawApiTests(ApiTestCase):
    def test_empty_list(self):
        response = self.client.get('/api/draws')
        assert response.status_code == 200
        assert response.json() == []

    def test_create_and_list(self):
        response = self.client.post('/api/draws', VALID_DRAW, content_type='application/json')
        assert response.status_code == 201
        created = response.json()
        assert created['mainNumbers'] == [3, 16, 23, 38, 47]
        assert created['luckyStars'] == [7, 11]
        assert created['jackpotAmount'] == 130000000
        assert created['id'] == 1
        assert self.client.get('/api/draws').json() == [created]

    def test_free_text_fields_round_trip(self):
        payload = dict(VALID_DRAW, date=LONG_DATE, jackpotWon='Rolled over')
        response = self.client.post('/api/draws', payload, content_type='application/json')
        assert response.status_code == 201
        created = response.json()
        assert created['date'] == LONG_DATE
        assert created['jackpotWon'] == 'Rolled over'
        assert self.client.get('/api/draws').json() == [created]

    def test_wrong_count(self):
        payload = dict(VALID_DRAW, mainNumbers=[1, 2, 3, 4])
        response = self.client.post('/api/draws', payload, content_type='application/json')
        assert response.status_code == 400
        body = response.json()
        assert body['message'] == 'Invalid draw data'
        assert body['errors'][0]['path'] == ['mainNumbers']
        assert body['errors'][0]['code'] == 'invalid_length'
        assert self.storage.get_all_draws() == []

    def test_out_of_range_star(self):
        payload = dict(VALID_DRAW, luckyStars=[1, 13])
        response = self.client.post('/api/draws', payload, content_type='application/json')
        assert response.status_code == 400
        assert response.json()['errors'][0]['code'] == 'out_of_range'

    def test_duplicate_numbers(self):
        payload = dict(VALID_DRAW, mainNumbers=[1, 1, 2, 3, 4])
        response = self.client.post('/api/draws', payload, content_type='application/json')
        assert response.json()['errors'][0]['code'] == 'not_unique'

    def test_missing_field(self):
        payload = dict(VALID_DRAW)
        del payload['date']
        response = self.client.post('/api/draws', payload, content_type='application/json')
        assert response.status_code == 400
        assert response.json()['errors'][0]['path'] == ['date']

    def test_malformed_json(self):
        response = self.client.post('/api/draws', '{"date": ', content_type='application/json')
        assert response.status_code == 400
        assert response.json()['errors'][0]['code'] == 'invalid_json'

    def test_storage_failure_is_500(self):
        self.config.services = Services(storage=BrokenStorage(), exchange_rates=self.exchange_rates)
        with self.assertLogs('euromillions', level='ERROR'):
            response = self.client.get('/api/draws')
        assert response.status_code == 500
        assert response.json() == {'message': 'Failed to fetch draws'}


class PredictionApiTests(ApiTestCase):
    def test_latest_without_predictions(self):
        response = self.client.get('/api/predictions/latest')
        assert response.status_code == 404
        assert response.json() == {'message': 'No predictions found'}

    def test_generate_without_history(self):
        response = self.client.post('/api/predictions/generate')
        assert response.status_code == 200
        body = response.json()
        assert body['confidenceScore'] == 75.0
        assert body['patternMatch'] == 'Medium'
        assert body['modelVersion'] == 'v2.4.1'
        assert len(set(body['mainNumbers'])) == 5
        assert body['mainNumbers'] == sorted(body['mainNumbers'])
        assert all(1 <= n <= 12 for n in body['luckyStars'])

    def test_generate_with_history(self):
        self.add_draws(100)
        body = self.client.post('/api/predictions/generate').json()
        assert body['confidenceScore'] == 90.0
        assert body['patternMatch'] == 'High'

    def test_latest_and_list(self):
        first = self.client.post('/api/predictions/generate').json()
        second = self.client.post('/api/predictions/generate').json()
        assert self.client.get('/api/predictions/latest').json() == second
        listed = self.client.get('/api/predictions').json()
        assert [p['id'] for p in listed] == [second['id'], first['id']]

    def test_generate_requires_post(self):
        assert self.client.get('/api/predictions/generate').status_code == 405


class AnalysisApiTests(ApiTestCase):
    def test_performance_without_data(self):
        response = self.client.get('/api/model/performance')
        assert response.status_code == 404
        assert response.json()['message'] == 'No training data available. Please upload historical CSV data first.'

    def test_frequency_without_data(self):
        response = self.client.get('/api/analysis/frequency')
        assert response.status_code == 404
        assert response.json()['message'] == 'No historical data available. Please upload CSV data first.'

    def test_performance(self):
        self.add_draws(100)
        self.client.post('/api/predictions/generate')
        body = self.client.get('/api/model/performance').json()
        assert body['accuracy'] == 80.0
        assert body['trainingData'] == 100
        assert body['version'] == 'v2.4.1'
        assert body['predictionsMade'] == 1
        assert 77.5 <= body['weeklyAccuracy'] <= 82.5
        assert 76.5 <= body['monthlyAccuracy'] <= 79.5
        assert body['lastTrained']

    def test_frequency(self):
        self.upload(SCENARIO_CSV)
        body = self.client.get('/api/analysis/frequency').json()
        assert body['frequencyData'] == [1, 1, 1, 1, 1]
        assert body['mostFrequent'] == 3
        assert body['leastFrequent'] == 47
        assert body['trending'] == 3
        assert body['patterns']['oddEvenRatio'] == '3:2'
        assert body['patterns']['highLowSplit'] == '3:2'
        assert body['patterns']['sumRange'] == '107-147'
        self.assertAlmostEqual(body['patterns']['sequentialAccuracy'], 70.02)


class BudgetApiTests(ApiTestCase):
    def test_defaults(self):
        body = self.client.get('/api/budget').json()
        assert body['jackpotEUR'] == 74000000
        assert body['exchangeRate'] == 21.01
        assert body['allocationValid'] is True

    def test_custom_values(self):
        body = self.client.get('/api/budget', {'jackpot': 1000000, 'interestRate': 8, 'houses': 40}).json()
        assert body['jackpotEUR'] == 1000000
        assert body['interestRate'] == 8
        assert body['allocationValid'] is False
        assert body['totalAllocation'] == 115

    def test_invalid_values(self):
        response = self.client.get('/api/budget', {'jackpot': 'lots'})
        assert response.status_code == 400
        assert 'jackpot' in response.json()['errors']


class PageTests(ApiTestCase):
    def test_dashboard_empty(self):
        response = self.client.get('/')
        assert response.status_code == 200
        self.assertContains(response, 'No predictions yet.')
        self.assertContains(response, '0 draws stored.')

    def test_dashboard_with_data(self):
        self.upload(SCENARIO_CSV)
        self.client.post('/api/predictions/generate')
        response = self.client.get('/')
        assert response.status_code == 200
        assert response.context['total_draws'] == 1
        assert response.context['frequency_ranges'][0] == {'label': '1-10', 'count': 1}
        self.assertContains(response, '2025-07-04')

    def test_budget_page(self):
        response = self.client.get('/budget/')
        assert response.status_code == 200
        assert response.context['result'].allocation_valid
        self.assertContains(response, 'Budget planner')

    def test_budget_page_with_invalid_input_uses_defaults(self):
        response = self.client.get('/budget/', {'jackpot': 'lots'})
        assert response.status_code == 200
        assert response.context['result'].jackpot_eur == 74000000


class DatabaseBackedApiTests(ApiTestCase):
    storage_class = DatabaseStorage

    def test_round_trip(self):
        created = self.client.post('/api/draws', VALID_DRAW, content_type='application/json').json()
        assert self.client.get('/api/draws').json() == [created]
        assert self.storage.get_active_model().training_data == 1

    def test_upload_single_draw(self):
        assert self.upload(SCENARIO_CSV).json()['recordsProcessed'] == 1
        draw = self.client.get('/api/draws').json()[0]
        assert draw['luckyStars'] == [7, 11]

    def test_free_text_fields_round_trip(self):
        payload = dict(VALID_DRAW, date=LONG_DATE, jackpotWon='Rolled over')
        created = self.client.post('/api/draws', payload, content_type='application/json').json()
        assert created['date'] == LONG_DATE
        assert created['jackpotWon'] == 'Rolled over'
        assert self.client.get('/api/draws').json() == [created]

    def test_upload_long_date(self):
        content = b'Date,Draw,N1,N2,N3,N4,N5,S1,S2\nFriday 4 July 2025 superdraw evening,1851,3,16,23,38,47,7,11\n'
        assert self.upload(content).json()['recordsProcessed'] == 1
        assert self.storage.get_all_draws()[0].date == 'Friday 4 July 2025 superdraw evening'
