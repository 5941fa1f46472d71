"""
Testes para arredondamento e formatação de horário local
"""
import pytest

from shared.utils.local_time import (
    current_local_time,
    format_hour_label,
    format_local_time,
    utc_date_string,
)
from shared.utils.rounding import round_half_up, round_to_tenth

# 2024-06-01 00:00:00 UTC
MIDNIGHT_UTC = 1717200000


class TestRounding:

    @pytest.mark.parametrize('value, expected', [
        (20.5, 21),
        (21.5, 22),
        (20.49, 20),
        (-2.5, -2),
        (-2.6, -3),
        (0, 0),
    ])
    def test_round_half_up(self, value, expected):
        """REGRA: Empates sobem (diferente do round() bancário)"""
        assert round_half_up(value) == expected

    def test_round_to_tenth(self):
        assert round_to_tenth(4.63) == 4.6
        assert round_to_tenth(4.65) in (4.6, 4.7)
        assert round_to_tenth(3) == 3.0


class TestLocalTime:

    def test_format_local_time_morning(self):
        assert format_local_time(MIDNIGHT_UTC + 6 * 3600 + 5 * 60) == "6:05 AM"

    def test_format_local_time_applies_offset(self):
        # 18:42 UTC + 1h
        assert format_local_time(MIDNIGHT_UTC + 18 * 3600 + 42 * 60, 3600) == "7:42 PM"

    def test_midnight_and_noon(self):
        assert format_local_time(MIDNIGHT_UTC) == "12:00 AM"
        assert format_local_time(MIDNIGHT_UTC + 12 * 3600) == "12:00 PM"

    def test_negative_offset_crosses_day(self):
        assert format_local_time(MIDNIGHT_UTC + 3600, -3 * 3600) == "10:00 PM"

    def test_hour_label_is_zero_padded(self):
        assert format_hour_label(MIDNIGHT_UTC + 9 * 3600) == "09 AM"
        assert format_hour_label(MIDNIGHT_UTC + 15 * 3600) == "03 PM"

    def test_current_local_time(self):
        assert current_local_time(-10800, now=MIDNIGHT_UTC + 0.9) == MIDNIGHT_UTC - 10800

    def test_utc_date_string(self):
        assert utc_date_string(MIDNIGHT_UTC + 23 * 3600) == '2024-06-01'
        assert utc_date_string(MIDNIGHT_UTC + 24 * 3600) == '2024-06-02'
