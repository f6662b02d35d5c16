"""Tests for cookie harvesting and transfer to requests."""

import asyncio
import logging

import pytest
import requests

from social_login.auth.cookies import cookies_to_session, harvest_cookies
from social_login.auth.options import SessionConfig
from social_login.errors import StepTimeoutError


def make_config(**overrides):
    values = dict(
        username="u",
        password="p",
        login_url="https://app.example/login",
        login_selector="#ssoBtn",
        post_login_selector="#dashboard",
    )
    values.update(overrides)
    return SessionConfig(**values)


def test_scoped_cookies_use_login_url(driver):
    page = driver.context.open_page("original")
    cookies = asyncio.run(harvest_cookies(driver.context, page, make_config()))

    assert [c["name"] for c in cookies] == ["sid"]
    assert ("context", "cookies", "https://app.example/login") in driver.actions


def test_all_cookies_are_returned_verbatim(driver):
    page = driver.context.open_page("original")
    config = make_config(get_all_browser_cookies=True)

    cookies = asyncio.run(harvest_cookies(driver.context, page, config))

    assert cookies == driver.context.cookie_jar
    assert ("context", "cookies", None) in driver.actions


def test_post_login_marker_waited_before_reading_cookies(driver):
    page = driver.context.open_page("original")
    asyncio.run(harvest_cookies(driver.context, page, make_config()))

    assert driver.actions[0] == ("original", "wait", "#dashboard", "attached")


def test_missing_marker_raises_step_timeout(driver):
    page = driver.context.open_page("original")
    page.missing.add("#dashboard")

    with pytest.raises(StepTimeoutError) as exc_info:
        asyncio.run(harvest_cookies(driver.context, page, make_config()))

    assert exc_info.value.step == "post-login"
    assert not any(a[0] == "context" for a in driver.actions)


def test_logs_flag_emits_cookies(driver, caplog):
    page = driver.context.open_page("original")

    with caplog.at_level(logging.INFO, logger="social_login"):
        asyncio.run(harvest_cookies(driver.context, page, make_config()))
    assert not any("abc123" in r.getMessage() for r in caplog.records)

    caplog.clear()
    with caplog.at_level(logging.INFO, logger="social_login"):
        asyncio.run(harvest_cookies(driver.context, page, make_config(logs=True)))
    assert any("abc123" in r.getMessage() for r in caplog.records)


def test_cookies_to_session_transfers_cookies(driver):
    session = cookies_to_session(driver.context.cookie_jar)

    assert isinstance(session, requests.Session)
    assert session.cookies.get("sid", domain="app.example") == "abc123"
    assert session.cookies.get("NID", domain=".google.com") == "g00gle"


def test_cookies_to_session_skips_malformed_entries():
    session = cookies_to_session([{"value": "orphan"}, {"name": "ok", "value": "1", "domain": "a.example"}])

    assert len(session.cookies) == 1
