"""Tests for OnAppSettings."""

from onapp_client.settings import (
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_TRANSACTION_PAGE_SIZE,
    OnAppSettings,
)


def test_defaults_are_invalid_until_credentials_are_set():
    errors = OnAppSettings().validate()
    assert 'base_url is required' in errors
    assert 'user is required' in errors
    assert 'api_key is required' in errors


def test_complete_settings_validate_clean():
    settings = OnAppSettings(base_url='https://cp.example.com', user='admin', api_key='k')
    assert settings.validate() == []


def test_validate_rejects_bad_url_and_limits():
    settings = OnAppSettings(
        base_url='cp.example.com',
        user='admin',
        api_key='k',
        timeout_seconds=0,
        transaction_page_size=0,
    )
    errors = settings.validate()
    assert 'base_url must start with http:// or https://' in errors
    assert 'timeout_seconds must be positive' in errors
    assert 'transaction_page_size must be >= 1' in errors


def test_from_env_reads_all_fields():
    settings = OnAppSettings.from_env({
        'ONAPP_URL': 'https://cp.example.com/',
        'ONAPP_USER': 'admin',
        'ONAPP_API_KEY': 'secret',
        'ONAPP_TIMEOUT_SECONDS': '12.5',
        'ONAPP_TRANSACTION_PAGE_SIZE': '25',
    })
    assert settings.base_url == 'https://cp.example.com'
    assert settings.user == 'admin'
    assert settings.api_key == 'secret'
    assert settings.timeout_seconds == 12.5
    assert settings.transaction_page_size == 25


def test_from_env_falls_back_to_defaults():
    settings = OnAppSettings.from_env({})
    assert settings.timeout_seconds == DEFAULT_TIMEOUT_SECONDS
    assert settings.transaction_page_size == DEFAULT_TRANSACTION_PAGE_SIZE
    assert settings.base_url == ''
