"""
Testes para resolve_min_max
Cadeia: provider -> amostras do dia -> temperatura atual ± 2
"""
from domain.value_objects.temperature_range import TemperatureRangeSource
from domain.services.temperature_resolver import resolve_min_max


class TestResolveMinMax:

    def test_provider_values_win(self, make_forecast_sample):
        """REGRA: temp_min/temp_max do provider têm prioridade sobre a previsão"""
        samples = [make_forecast_sample('2024-06-01 12:00:00', temp=30)]
        result = resolve_min_max({'temp': 18, 'temp_min': 16.5, 'temp_max': 20.4}, samples, '2024-06-01')

        assert (result.minimum, result.maximum) == (17, 20)
        assert result.source == TemperatureRangeSource.PROVIDER

    def test_today_samples_only(self, make_forecast_sample):
        """REGRA: Apenas amostras cuja data do dt_txt é hoje entram no cálculo"""
        samples = [
            make_forecast_sample('2024-05-31 21:00:00', temp=5),
            make_forecast_sample('2024-06-01 09:00:00', temp=14.6),
            make_forecast_sample('2024-06-01 15:00:00', temp=22.5),
            make_forecast_sample('2024-06-02 00:00:00', temp=40),
        ]
        result = resolve_min_max({'temp': 18}, samples, '2024-06-01')

        assert (result.minimum, result.maximum) == (15, 23)
        assert result.source == TemperatureRangeSource.FORECAST

    def test_fallback_offset(self):
        result = resolve_min_max({'temp': 18.5}, None, '2024-06-01')

        assert (result.minimum, result.maximum) == (17, 21)
        assert result.source == TemperatureRangeSource.FALLBACK

    def test_fallback_when_no_sample_for_today(self, make_forecast_sample):
        samples = [make_forecast_sample('2024-06-02 00:00:00', temp=10)]
        result = resolve_min_max({'temp': 0}, samples, '2024-06-01')

        assert (result.minimum, result.maximum) == (-2, 2)
        assert result.source == TemperatureRangeSource.FALLBACK

    def test_partial_provider_values_fall_through(self, make_forecast_sample):
        samples = [make_forecast_sample('2024-06-01 12:00:00', temp=25)]
        result = resolve_min_max({'temp': 20, 'temp_min': 15}, samples, '2024-06-01')

        assert result.source == TemperatureRangeSource.FORECAST
