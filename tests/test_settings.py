from decimal import Decimal

import pytest

from shopcenter.utils.settings import ConfigError, load_settings


def test_missing_api_key_fails_fast():
    with pytest.raises(ConfigError) as exc:
        load_settings({})

    assert "GEMINI_API_KEY" in str(exc.value)


def test_invalid_values_are_named():
    with pytest.raises(ConfigError) as exc:
        load_settings({"GEMINI_API_KEY": "k", "TAX_RATE": "lots"})

    assert "TAX_RATE" in str(exc.value)


def test_values_are_read_from_environment():
    settings = load_settings(
        {
            "GEMINI_API_KEY": "k",
            "DATABASE_URL": "sqlite://",
            "SHIPPING_FEE": "4.50",
            "GEMINI_TIMEOUT": "2.5",
        }
    )

    assert settings.database_url == "sqlite://"
    assert settings.shipping_fee == Decimal("4.50")
    assert settings.gemini_timeout == 2.5
    assert settings.tax_rate == Decimal("0.08")
