import pytest

from boliga_analytics import config
from boliga_analytics.utils.normalize import ValidationError


class TestConfigHelpers:

    @pytest.mark.parametrize("raw,expected", [
        ('true', True), ('1', True), (' Yes ', True), ('on', True),
        ('false', False), ('0', False), ('', False),
    ])
    def test_get_bool(self, monkeypatch, raw, expected):
        monkeypatch.setenv('BOLIGA_APPLY_RANGE_FILTERS', raw)

        assert config._get_bool('BOLIGA_APPLY_RANGE_FILTERS') is expected

    def test_get_bool_default(self, monkeypatch):
        monkeypatch.delenv('BOLIGA_APPLY_RANGE_FILTERS', raising=False)

        assert config._get_bool('BOLIGA_APPLY_RANGE_FILTERS') is False

    @pytest.mark.parametrize("raw,expected", [('250', 250), ('0', None), ('-5', None)])
    def test_get_max_rows(self, monkeypatch, raw, expected):
        monkeypatch.setenv('BOLIGA_MAX_ROWS', raw)

        assert config._get_max_rows() == expected

    def test_max_rows_default(self, monkeypatch):
        monkeypatch.delenv('BOLIGA_MAX_ROWS', raising=False)

        assert config._get_max_rows() == 1000

    def test_get_int(self, monkeypatch):
        monkeypatch.setenv('BOLIGA_TRAILING_VOLUME_DAYS', ' 14 ')

        assert config._get_int('BOLIGA_TRAILING_VOLUME_DAYS', 30) == 14

    def test_get_int_default(self, monkeypatch):
        monkeypatch.delenv('BOLIGA_TRAILING_VOLUME_DAYS', raising=False)

        assert config._get_int('BOLIGA_TRAILING_VOLUME_DAYS', 30) == 30

    def test_get_int_names_bad_variable(self, monkeypatch):
        monkeypatch.setenv('BOLIGA_PRICE_BUCKET_WIDTH', '500k')

        with pytest.raises(ValidationError) as exc:
            config._get_int('BOLIGA_PRICE_BUCKET_WIDTH', 500000)

        assert exc.value.field == 'BOLIGA_PRICE_BUCKET_WIDTH'
