"""Tests for configuration classes."""

from selenium_helper.config import HelperConfig, Timeouts


def test_config_defaults():
    """Test HelperConfig with default values."""
    config = HelperConfig()

    assert config.headless is False
    assert config.remote is False
    assert config.ci is False
    assert config.build_id == "0000"
    assert config.timeout == 20
    assert config.debug_port == 9222
    assert config.artifacts_dir == "/tmp/selenium-artifacts"


def test_from_env_empty():
    """Test empty environment gives the defaults."""
    assert HelperConfig.from_env({}) == HelperConfig()


def test_from_env_values():
    """Test environment variables are read."""
    config = HelperConfig.from_env(
        {
            "SMOKE_HEADLESS": "true",
            "SMOKE_REMOTE": "1",
            "CI": "TRUE",
            "CIRCLECI": "yes",
            "CIRCLE_BUILD_NUM": "4242",
            "SAUCE_USERNAME": "user",
            "SAUCE_ACCESS_KEY": "key",
            "PYTEST_XDIST_WORKER": "gw3",
            "SMOKE_TIMEOUT": "7.5",
            "SMOKE_ARTIFACTS_DIR": "/tmp/artifacts",
        }
    )

    assert config.headless is True
    assert config.remote is True
    assert config.ci is True
    assert config.using_circle is True
    assert config.build_id == "4242"
    assert config.sauce_username == "user"
    assert config.sauce_access_key == "key"
    assert config.worker_index == 3
    assert config.debug_port == 9225
    assert config.timeout == 7.5
    assert config.artifacts_dir == "/tmp/artifacts"


def test_from_env_false_flags():
    """Test values other than true/1/yes are false."""
    config = HelperConfig.from_env({"SMOKE_HEADLESS": "false", "SMOKE_REMOTE": "0", "PYTEST_XDIST_WORKER": "master"})

    assert config.headless is False
    assert config.remote is False
    assert config.worker_index == 0


def test_session_name_outside_ci():
    """Test session name is the test name when not in CI."""
    assert HelperConfig().session_name("signs in") == "signs in"


def test_session_name_in_ci():
    """Test session name is prefixed with the CI build."""
    assert HelperConfig(ci=True, using_circle=True, build_id="12").session_name("t") == "circleCi 12 : t"
    assert HelperConfig(ci=True, build_id="12").session_name("t") == "unknown 12 : t"


def test_timeouts_constants():
    """Test Timeouts class has expected constants."""
    assert Timeouts.DEFAULT_WAIT == 20
    assert Timeouts.POLL_INTERVAL < 1
    assert Timeouts.PAGE_LOAD == 30
