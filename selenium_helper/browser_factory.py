"""Browser factory for creating WebDriver instances."""

import logging
import platform
import shutil

from selenium import webdriver
from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.chrome.service import Service as ChromeService
from selenium.webdriver.remote.webdriver import WebDriver

from .config import HelperConfig, Timeouts
from .exceptions import BrowserSetupError

logger = logging.getLogger(__name__)


class BrowserFactory:
    """Factory for creating browser instances."""

    @staticmethod
    def create_driver(config: HelperConfig, name: str = "") -> WebDriver:
        """
        Create a WebDriver instance.

        Args:
            config: Helper configuration (local or remote lab)
            name: Test name, used as the remote lab session name

        Returns:
            Configured WebDriver instance

        Raises:
            BrowserSetupError: If browser creation fails
        """
        target = "remote chrome" if config.remote else "chrome"
        try:
            if config.remote:
                return BrowserFactory._create_sauce(config, config.session_name(name))
            return BrowserFactory._create_chrome(config)
        except BrowserSetupError:
            raise
        except Exception as e:
            raise BrowserSetupError(f"Failed to create {target} browser: {e}") from e

    @staticmethod
    def _chrome_options(config: HelperConfig) -> ChromeOptions:
        options = ChromeOptions()

        if config.headless:
            options.add_argument("--headless=new")

        options.add_argument(f"window-size={config.window_size}")
        options.add_argument("--no-sandbox")
        options.add_argument("--disable-dev-shm-usage")
        # One port per test worker so a debugger can attach to each browser
        options.add_argument(f"--remote-debugging-port={config.debug_port}")

        options.page_load_strategy = "eager"
        options.set_capability("goog:loggingPrefs", {"browser": "ALL"})
        return options

    @staticmethod
    def _create_chrome(config: HelperConfig) -> WebDriver:
        """
        Create local Chrome WebDriver.

        On x86_64: Uses Selenium Manager to auto-download chromedriver
        On ARM64: Uses system-installed chromium and chromedriver (must be pre-installed)
        """
        logger.info(f"Creating Chrome browser on debugging port {config.debug_port}...")
        options = BrowserFactory._chrome_options(config)

        # Selenium Manager doesn't support ARM64
        arch = platform.machine().lower()
        if arch in ("aarch64", "arm64", "armv7l"):
            logger.info(f"Detected ARM architecture ({arch}), using system chromedriver")

            chromium_path = shutil.which("chromium") or shutil.which("chromium-browser")
            if chromium_path:
                options.binary_location = chromium_path
                logger.info(f"Using chromium at: {chromium_path}")

            chromedriver_path = shutil.which("chromedriver")
            if chromedriver_path:
                logger.info(f"Using chromedriver at: {chromedriver_path}")
                driver = webdriver.Chrome(service=ChromeService(executable_path=chromedriver_path), options=options)
            else:
                logger.warning("chromedriver not found in PATH, attempting without explicit path")
                driver = webdriver.Chrome(options=options)
        else:
            driver = webdriver.Chrome(options=options)

        driver.set_page_load_timeout(Timeouts.PAGE_LOAD)
        # Zero throughput means unlimited
        driver.set_network_conditions(offline=False, latency=0, download_throughput=0, upload_throughput=0)
        logger.info("Chrome browser created successfully")
        return driver

    @staticmethod
    def _create_sauce(config: HelperConfig, session_name: str) -> WebDriver:
        """Create Chrome WebDriver on the Sauce Labs remote lab."""
        if not config.sauce_username or not config.sauce_access_key:
            raise BrowserSetupError("SAUCE_USERNAME and SAUCE_ACCESS_KEY are required for remote runs")

        logger.info(f"Creating remote Chrome {config.chrome_version} session '{session_name}'...")
        options = ChromeOptions()
        options.browser_version = config.chrome_version
        options.platform_name = config.sauce_platform
        options.set_capability(
            "sauce:options",
            {
                "username": config.sauce_username,
                "accessKey": config.sauce_access_key,
                "name": session_name,
            },
        )
        options.set_capability("goog:loggingPrefs", {"browser": "ALL"})

        driver = webdriver.Remote(command_executor=config.sauce_url, options=options)
        driver.set_page_load_timeout(Timeouts.PAGE_LOAD)
        logger.info("Remote Chrome browser created successfully")
        return driver
