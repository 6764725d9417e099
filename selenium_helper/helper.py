"""High-level browser actions for end-to-end tests."""

import logging
import time
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from selenium.webdriver.common.action_chains import ActionChains
from selenium.webdriver.common.by import By
from selenium.webdriver.common.keys import Keys
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support import expected_conditions as EC

from .browser_factory import BrowserFactory
from .config import HelperConfig
from .exceptions import HelperError, annotate
from .waiter import BoundedWaiter

logger = logging.getLogger(__name__)

SIGNED_IN_SCRIPT = """
if (document.evaluate(arguments[0], document, null, XPathResult.FIRST_ORDERED_NODE_TYPE, null)
    .singleNodeValue) {
    return 'signed in';
}
if (document.evaluate(arguments[1], document, null, XPathResult.FIRST_ORDERED_NODE_TYPE, null)
    .singleNodeValue) {
    return 'signed out';
}
"""


class SeleniumHelper:
    """
    Convenience wrapper around a WebDriver for end-to-end tests.

    Every action waits through a BoundedWaiter and re-raises failures as an
    AnnotatedError naming the action and its arguments.
    """

    USERNAME_INPUT = '//input[@id="frc-username-1088"]'
    PASSWORD_INPUT = '//input[@id="frc-password-1088"]'

    def __init__(self, driver: Optional[WebDriver] = None, config: Optional[HelperConfig] = None):
        """
        Initialize helper.

        Args:
            driver: Existing WebDriver instance (or call build_driver later)
            config: Helper configuration (default: read from environment)
        """
        self.config = config if config is not None else HelperConfig.from_env()
        self.driver = driver
        self.waiter = BoundedWaiter(timeout=self.config.timeout, poll_interval=self.config.poll_interval)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if not exc_type:
            self.quit()
            return
        # The exception from the with-block propagates unchanged
        if self.driver:
            self.save_debug_artifacts("failure")
        try:
            self.quit()
        except Exception as e:
            logger.warning(f"Failed to close browser: {e}")
            self.driver = None

    def build_driver(self, name: str) -> WebDriver:
        """Create a local or remote driver for the named test."""
        self.driver = BrowserFactory.create_driver(self.config, name)
        return self.driver

    def quit(self) -> None:
        if self.driver:
            logger.info("Closing browser")
            self.driver.quit()
            self.driver = None

    def _until(self, expected_condition, description: str) -> Any:
        return self.waiter.until(self.driver, expected_condition, description=description)

    @staticmethod
    def get_key(key_name: str) -> str:
        return getattr(Keys, key_name.upper())

    def wait_until_document_ready(self) -> None:
        """Wait until document.readyState is 'complete'."""
        with annotate("wait_until_document_ready"):
            self.waiter.wait(
                lambda: self.driver.execute_script("return document.readyState;") == "complete",
                description="for document.readyState to be 'complete'",
            )

    def navigate(self, url: str) -> None:
        """
        Navigate to the given URL and wait until the document is ready.

        ``driver.get()`` returns once the page has loaded according to the
        page load strategy, which is "eager" here; that is not the same as
        ready for testing, so also wait for readyState 'complete'.
        """
        with annotate("navigate", url=url):
            logger.info(f"Navigating to {url}")
            self.driver.get(url)
            self.wait_until_document_ready()

    def find_by_xpath(self, xpath: str) -> WebElement:
        """Find a displayed element by XPath."""
        with annotate("find_by_xpath", xpath=xpath):
            return self._until(
                EC.visibility_of_element_located((By.XPATH, xpath)),
                f"for element {xpath} to be displayed",
            )

    def wait_until_gone(self, element: WebElement) -> None:
        with annotate("wait_until_gone", element=element):
            self._until(EC.staleness_of(element), "for element to be removed")

    def click_xpath(self, xpath: str) -> WebElement:
        """
        Click an element by XPath, retrying while something covers it.

        Returns:
            The clicked element
        """
        with annotate("click_xpath", xpath=xpath):

            def click() -> WebElement:
                element = self.find_by_xpath(xpath)
                # ElementClickInterceptedException is transient: probably the loading screen
                element.click()
                return element

            return self.waiter.wait(click, description="for element click to succeed")

    def click_text(self, text: str) -> WebElement:
        with annotate("click_text", text=text):
            return self.click_xpath(f"//*[contains(text(), '{text}')]")

    def find_text(self, text: str) -> WebElement:
        with annotate("find_text", text=text):
            return self._until(
                EC.presence_of_element_located((By.XPATH, f"//*[contains(text(), '{text}')]")),
                f"for text '{text}' to be located",
            )

    def click_button(self, text: str) -> WebElement:
        with annotate("click_button", text=text):
            return self.click_xpath(f"//button[contains(text(), '{text}')]")

    def find_by_css(self, css: str) -> WebElement:
        with annotate("find_by_css", css=css):
            return self._until(EC.presence_of_element_located((By.CSS_SELECTOR, css)), f"for element {css} to be located")

    def click_css(self, css: str) -> None:
        with annotate("click_css", css=css):
            element = self.find_by_css(css)
            element.click()

    def drag_from_xpath_to_xpath(self, start_xpath: str, end_xpath: str) -> None:
        with annotate("drag_from_xpath_to_xpath", start_xpath=start_xpath, end_xpath=end_xpath):
            start_element = self.find_by_xpath(start_xpath)
            end_element = self.find_by_xpath(end_xpath)
            ActionChains(self.driver).drag_and_drop(start_element, end_element).perform()

    @staticmethod
    def get_path_for_login() -> str:
        return '//li[@class="link right login-item"]/a'

    @staticmethod
    def get_path_for_profile_name() -> str:
        return '//span[contains(@class, "profile-name")]'

    def is_signed_in(self) -> bool:
        """
        Report whether the page shows a signed-in user.

        Polls until either the profile name or the login link is present.

        Raises:
            AnnotatedError: If neither shows up in time or the script returns something else
        """
        with annotate("is_signed_in"):
            state = self.waiter.wait(
                lambda: self.driver.execute_script(
                    SIGNED_IN_SCRIPT, self.get_path_for_profile_name(), self.get_path_for_login()
                ),
                description="for sign-in state to be known",
            )
            if state == "signed in":
                return True
            if state == "signed out":
                return False
            raise HelperError(f"unexpected state: {state}")

    def sign_in(self, username: str, password: str) -> None:
        """Sign in through the login dialog. Must be used on a www page."""
        with annotate("sign_in", username=username, password="provided" if password else "missing"):
            self.click_xpath(self.get_path_for_login())
            name_input = self.find_by_xpath(self.USERNAME_INPUT)
            name_input.send_keys(username)
            password_input = self.find_by_xpath(self.PASSWORD_INPUT)
            password_input.send_keys(password + self.get_key("ENTER"))
            self.find_by_xpath(self.get_path_for_profile_name())
            logger.info(f"Signed in as {username}")

    def url_matches(self, pattern: str) -> bool:
        with annotate("url_matches", regex=pattern):
            return self._until(EC.url_matches(pattern), f"for URL to match {pattern}")

    def get_logs(self, whitelist: Union[str, Iterable[str]] = ()) -> List[Dict[str, Any]]:
        """
        Return SEVERE browser log entries that are not whitelisted.

        An entry is dropped if its message contains any whitelisted substring
        or its level is not SEVERE.

        Args:
            whitelist: Substrings of messages to ignore, or a single substring

        Returns:
            Remaining log entries as returned by the driver
        """
        whitelist = [whitelist] if isinstance(whitelist, str) else list(whitelist)
        with annotate("get_logs", whitelist=whitelist):
            entries = self.driver.get_log("browser")
        kept = []
        for entry in entries:
            message = entry.get("message", "")
            if entry.get("level") != "SEVERE":
                continue
            if any(item in message for item in whitelist):
                logger.debug(f"Ignoring whitelisted error: {message}")
                continue
            kept.append(entry)
        return kept

    def contains_class(self, element: WebElement, cl: str) -> bool:
        with annotate("contains_class", element=element, cl=cl):
            classes = element.get_attribute("class") or ""
            return cl in classes.split(" ")

    def wait_until_visible(self, element: WebElement) -> None:
        with annotate("wait_until_visible", element=element):
            self._until(EC.visibility_of(element), "for element to be visible")

    def _save_artifact(self, name: str, suffix: str, kind: str, write: Callable[[Path], Any]) -> str:
        try:
            Path(self.config.artifacts_dir).mkdir(parents=True, exist_ok=True)
            timestamp = time.strftime("%Y%m%d-%H%M%S")
            path = Path(self.config.artifacts_dir) / f"{name}-{timestamp}.{suffix}"
            write(path)
            return str(path)
        except Exception as e:
            logger.warning(f"Failed to save {kind}: {e}")
            return ""

    def save_screenshot(self, name: str) -> str:
        """Save a screenshot; return its path, or "" on failure."""
        return self._save_artifact(name, "png", "screenshot", lambda path: self.driver.save_screenshot(str(path)))

    def save_page_source(self, name: str) -> str:
        """Save the current page source; return its path, or "" on failure."""
        return self._save_artifact(
            name, "html", "page source", lambda path: path.write_text(self.driver.page_source, encoding="utf-8")
        )

    def save_debug_artifacts(self, name: str) -> dict:
        """Save screenshot and page source and return their paths."""
        paths = {
            "screenshot": self.save_screenshot(name),
            "page_source": self.save_page_source(name),
        }
        logger.info(f"Saved debug artifacts to: {self.config.artifacts_dir}")
        return paths
