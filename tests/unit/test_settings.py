"""
Unit tests for config/settings.py
"""
import pytest

from conftest import make_settings
from config.settings import ConfigurationError, check_credential


class TestCredentials:

    @pytest.mark.parametrize("key, exists, valid", [
        ("", False, False),
        ("x" * 20, True, False),
        ("x" * 21, True, True),
    ])
    def test_check_credential(self, key, exists, valid):
        status = check_credential(key)
        assert (status.exists, status.valid) == (exists, valid)

    def test_report_is_independent(self):
        report = make_settings(deepl_api_key="", gemini_api_key="short").credential_report()
        assert report["openrouter"].valid
        assert not report["deepl"].exists
        assert report["gemini"].exists and not report["gemini"].valid

    def test_require_primary_missing(self):
        with pytest.raises(ConfigurationError, match="not found"):
            make_settings(openrouter_api_key="").require_primary_credential()

    def test_require_primary_too_short(self):
        with pytest.raises(ConfigurationError, match="longer than 20"):
            make_settings(openrouter_api_key="abc").require_primary_credential()

    def test_require_primary_ok(self, test_settings):
        assert test_settings.require_primary_credential() == test_settings.openrouter_api_key


class TestDefaults:

    def test_provider_defaults(self, test_settings):
        assert test_settings.chat_model == "deepseek/deepseek-chat"
        assert test_settings.chat_temperature == 0.01
        assert test_settings.chat_max_tokens == 4000
        assert test_settings.deepl_base_url == "https://api-free.deepl.com/v2"
        assert test_settings.max_upload_bytes == 5 * 1024 * 1024

    def test_describe_has_no_secrets(self, test_settings):
        described = str(test_settings.describe())
        assert test_settings.openrouter_api_key not in described
