import pytest

from fairshare.analysis.volatility import (
    classify_volatility,
    mean,
    rolling_volatility,
    standard_deviation,
    volatility,
)
from fairshare.analysis.zscore import is_outlier, outlier_severity, z_score, z_score_in_series


class TestVolatility:

    def test_mean_and_population_std(self):
        values = [2, 4, 4, 4, 5, 5, 7, 9]

        assert mean(values) == 5
        assert standard_deviation(values) == 2

    def test_coefficient_of_variation(self):
        assert volatility([2, 4, 4, 4, 5, 5, 7, 9]) == pytest.approx(0.4)

    def test_constant_series_has_no_volatility(self):
        assert volatility([50] * 10) == 0

    def test_empty_and_zero_mean(self):
        assert mean([]) == 0
        assert standard_deviation([]) == 0
        assert volatility([]) == 0
        assert volatility([0, 0, 0]) == 0

    @pytest.mark.parametrize("vol,expected", [
        (0.1, "LOW"),
        (0.3, "NORMAL"),
        (0.59, "NORMAL"),
        (0.6, "HIGH"),
        (1.4, "HIGH"),
    ])
    def test_classification_bands(self, vol, expected):
        assert classify_volatility(vol) == expected

    def test_rolling_window(self):
        result = rolling_volatility([10, 10, 10, 40], window_size=3)

        assert len(result) == 4
        assert result[:3] == [0, 0, 0]
        assert result[3] > 0

    def test_rolling_window_must_be_positive(self):
        with pytest.raises(ValueError):
            rolling_volatility([1, 2], window_size=0)


class TestZScore:

    def test_z_score(self):
        assert z_score(9, 5, 2) == 2

    def test_zero_std(self):
        assert z_score(10, 10, 0) == 0
        assert z_score_in_series(10, [10, 10, 10]) == 0

    def test_outlier_detection(self):
        series = [10] * 20 + [100]

        assert is_outlier(100, series)
        assert not is_outlier(10, series)

    @pytest.mark.parametrize("z,expected", [
        (1.9, "NONE"),
        (2.0, "LOW"),
        (-2.6, "MEDIUM"),
        (3.0, "HIGH"),
    ])
    def test_severity_bands(self, z, expected):
        assert outlier_severity(z) == expected
