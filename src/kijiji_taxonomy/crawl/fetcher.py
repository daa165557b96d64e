"""
Fetch the Kijiji homepage for one locale.

Two ways to get the page source:
- plain HTTP with requests (enough for the embedded ``window.__data`` payload)
- headless Chrome through Selenium, for markup built by JavaScript (location list)
"""

import logging
import time
from typing import Any

import requests
from selenium import webdriver
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.chrome.service import Service
from webdriver_manager.chrome import ChromeDriverManager

from ..exceptions import NetworkError, SeleniumError
from ..models import Locale

logger = logging.getLogger(__name__)


def homepage_url(fetch_config: dict[str, Any], locale: Locale) -> str:
    return fetch_config["base_url"] + fetch_config["homepage_path"].format(locale=locale.value)


def _accept_language(locale: Locale) -> str:
    lang = locale.value.split("_")[0]
    return f"{locale.value.replace('_', '-')},{lang};q=0.9"


def fetch_html(url: str, locale: Locale, fetch_config: dict[str, Any]) -> str:
    """
    GET ``url`` and return the decoded body

    Raises:
        NetworkError: connection error, timeout or non-2xx status
    """
    headers = {
        "User-Agent": fetch_config["user_agent"],
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": _accept_language(locale),
    }
    logger.info(f"🌐 [{locale.value}] GET {url}")
    try:
        response = requests.get(url, headers=headers, timeout=fetch_config["timeout"])
        response.raise_for_status()
    except requests.HTTPError as e:
        status_code = e.response.status_code if e.response is not None else None
        raise NetworkError(
            f"HTTP error: {e}", url=url, status_code=status_code, original_error=e
        ) from e
    except requests.RequestException as e:
        raise NetworkError(f"Fetch failed: {e}", url=url, original_error=e) from e

    response.encoding = "utf-8"
    logger.info(f"✓ [{locale.value}] received {len(response.text)} chars")
    return response.text


# ========== SELENIUM ==========
def get_selenium_options(fetch_config: dict[str, Any]) -> Options:
    chrome_options = Options()
    chrome_options.add_argument("--headless")
    chrome_options.add_argument("--no-sandbox")
    chrome_options.add_argument("--disable-dev-shm-usage")
    chrome_options.add_argument("--disable-gpu")
    chrome_options.add_argument(f"user-agent={fetch_config['user_agent']}")
    # Images are never needed
    prefs = {
        "profile.managed_default_content_settings.images": 2,
        "profile.default_content_setting_values.notifications": 2,
    }
    chrome_options.add_experimental_option("prefs", prefs)
    return chrome_options


def create_selenium_driver(fetch_config: dict[str, Any]):
    """
    Start headless Chrome, preferring a chromedriver already on PATH

    Raises:
        SeleniumError: no usable driver
    """
    chrome_options = get_selenium_options(fetch_config)
    try:
        return webdriver.Chrome(options=chrome_options)
    except WebDriverException as e:
        logger.info(f"Chromedriver on PATH unusable ({e.msg}), trying webdriver-manager")

    logging.getLogger("WDM").setLevel(logging.WARNING)
    try:
        service = Service(ChromeDriverManager().install())
        return webdriver.Chrome(service=service, options=chrome_options)
    except (WebDriverException, ValueError, OSError) as e:
        raise SeleniumError(
            "Could not start headless Chrome", driver_error=str(e), original_error=e
        ) from e


def fetch_rendered_html(url: str, locale: Locale, fetch_config: dict[str, Any]) -> str:
    """
    Load ``url`` in headless Chrome and return the rendered DOM

    Raises:
        SeleniumError: browser failed to start or to load the page
    """
    driver = create_selenium_driver(fetch_config)
    try:
        driver.set_page_load_timeout(fetch_config["timeout"])
        logger.info(f"🌐 [{locale.value}] rendering {url}")
        driver.get(url)
        # Let client-side scripts build the menus
        time.sleep(fetch_config["selenium_wait"])
        html = driver.page_source
    except WebDriverException as e:
        raise SeleniumError(
            f"Page load failed: {e.msg}", context={"url": url}, original_error=e
        ) from e
    finally:
        driver.quit()

    logger.info(f"✓ [{locale.value}] rendered {len(html)} chars")
    return html


def fetch_document(
    locale: Locale, fetch_config: dict[str, Any], fetcher: str = "http"
) -> str:
    """Homepage source for ``locale`` using the ``http`` or ``selenium`` fetcher."""
    url = homepage_url(fetch_config, locale)
    if fetcher == "selenium":
        return fetch_rendered_html(url, locale, fetch_config)
    return fetch_html(url, locale, fetch_config)
