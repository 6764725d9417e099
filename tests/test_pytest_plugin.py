"""Tests for the pytest plugin fixtures."""

from unittest.mock import patch

import pytest
from selenium_helper.helper import SeleniumHelper  # noqa: F401  imported so the patch target is shared


@pytest.fixture
def suite(pytester, monkeypatch, tmp_path):
    """Create a pytester suite that enables the plugin."""
    for name in ("SMOKE_REMOTE", "SMOKE_HEADLESS", "CI"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SMOKE_ARTIFACTS_DIR", str(tmp_path / "artifacts"))
    pytester.makeconftest('pytest_plugins = ["selenium_helper.pytest_plugin"]')
    return pytester


def test_selenium_helper_fixture(suite):
    """Test each test gets a driver named after it, quit afterwards."""
    suite.makepyfile(
        """
        def test_uses_helper(selenium_helper):
            assert selenium_helper.driver is not None
        """
    )

    with patch("selenium_helper.helper.BrowserFactory.create_driver") as mock_create:
        result = suite.runpytest()

    result.assert_outcomes(passed=1)
    mock_create.assert_called_once()
    assert mock_create.call_args.args[1] == "test_uses_helper"
    mock_create.return_value.quit.assert_called_once()
    mock_create.return_value.save_screenshot.assert_not_called()


def test_selenium_helper_fixture_saves_artifacts_on_failure(suite):
    """Test failed tests save debug artifacts before the browser is closed."""
    suite.makepyfile(
        """
        def test_fails(selenium_helper):
            assert False
        """
    )

    with patch("selenium_helper.helper.BrowserFactory.create_driver") as mock_create:
        result = suite.runpytest()

    result.assert_outcomes(failed=1)
    mock_create.return_value.save_screenshot.assert_called_once()
    mock_create.return_value.quit.assert_called_once()


def test_selenium_config_fixture(suite, monkeypatch):
    """Test configuration comes from the environment."""
    monkeypatch.setenv("SMOKE_TIMEOUT", "3")
    suite.makepyfile(
        """
        def test_config(selenium_config):
            assert selenium_config.timeout == 3.0
            assert selenium_config.remote is False
        """
    )

    result = suite.runpytest()

    result.assert_outcomes(passed=1)
