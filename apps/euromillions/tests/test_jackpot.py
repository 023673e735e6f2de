from datetime import datetime
from zoneinfo import ZoneInfo

from django.test import SimpleTestCase, override_settings

from apps.euromillions.services.jackpot import get_jackpot_info, next_draw_datetime

BRUSSELS = ZoneInfo('Europe/Brussels')


def brussels(*args):
    return datetime(*args, tzinfo=BRUSSELS)


class NextDrawTests(SimpleTestCase):
    def assertNextDraw(self, now, expected):
        result = next_draw_datetime(now)
        assert result.replace(tzinfo=None) == expected, result

    def test_tuesday_before_draw_time(self):
        self.assertNextDraw(brussels(2025, 7, 8, 20, 0), datetime(2025, 7, 8, 21, 5))

    def test_tuesday_just_before_cutoff(self):
        self.assertNextDraw(brussels(2025, 7, 8, 21, 4, 59), datetime(2025, 7, 8, 21, 5))

    def test_tuesday_at_draw_time_moves_to_friday(self):
        self.assertNextDraw(brussels(2025, 7, 8, 21, 5), datetime(2025, 7, 11, 21, 5))

    def test_midweek_goes_to_friday(self):
        self.assertNextDraw(brussels(2025, 7, 9, 9, 0), datetime(2025, 7, 11, 21, 5))
        self.assertNextDraw(brussels(2025, 7, 10, 23, 0), datetime(2025, 7, 11, 21, 5))

    def test_friday_evening_goes_to_tuesday(self):
        self.assertNextDraw(brussels(2025, 7, 11, 22, 0), datetime(2025, 7, 15, 21, 5))

    def test_weekend_goes_to_tuesday(self):
        self.assertNextDraw(brussels(2025, 7, 12, 12, 0), datetime(2025, 7, 15, 21, 5))
        self.assertNextDraw(brussels(2025, 7, 13, 12, 0), datetime(2025, 7, 15, 21, 5))
        self.assertNextDraw(brussels(2025, 7, 14, 12, 0), datetime(2025, 7, 15, 21, 5))

    def test_result_is_in_project_time_zone(self):
        result = next_draw_datetime(brussels(2025, 7, 8, 20, 0))
        assert result.utcoffset() == BRUSSELS.utcoffset(datetime(2025, 7, 8, 21, 5))


class JackpotInfoTests(SimpleTestCase):
    def test_payload(self):
        info = get_jackpot_info(brussels(2025, 7, 8, 20, 0))
        assert info == {
            'amount': 74000000,
            'currency': 'EUR',
            'nextDrawDate': '2025-07-08T19:05:00Z',
            'drawNumber': 1852,
        }

    @override_settings(EUROMILLIONS_CONFIG={'JACKPOT': {'AMOUNT': 17000000, 'CURRENCY': 'EUR', 'DRAW_NUMBER': 1900}})
    def test_values_come_from_settings(self):
        info = get_jackpot_info(brussels(2025, 1, 10, 22, 0))
        assert info['amount'] == 17000000
        assert info['drawNumber'] == 1900
        assert info['nextDrawDate'] == '2025-01-14T20:05:00Z'
