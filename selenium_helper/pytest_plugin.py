"""
Pytest fixtures for end-to-end suites.

Requires pytest (the ``pytest`` extra). Enable with
``pytest_plugins = ["selenium_helper.pytest_plugin"]`` in a conftest.py.
Each test that requests ``selenium_helper`` gets its own browser, named
after the test; failed tests leave a screenshot and page source in the
artifacts directory.
"""

import logging

import pytest

from .config import HelperConfig
from .helper import SeleniumHelper

logger = logging.getLogger(__name__)


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


@pytest.fixture(scope="session")
def selenium_config() -> HelperConfig:
    """Helper configuration read once from the environment."""
    return HelperConfig.from_env()


@pytest.fixture
def selenium_helper(request, selenium_config):
    """SeleniumHelper with a fresh browser for this test."""
    helper = SeleniumHelper(config=selenium_config)
    helper.build_driver(request.node.name)
    yield helper

    report = getattr(request.node, "rep_call", None)
    if report is not None and report.failed:
        logger.info(f"Test {request.node.name} failed, saving debug artifacts")
        helper.save_debug_artifacts(request.node.name)
    helper.quit()
