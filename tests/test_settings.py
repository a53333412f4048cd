"""Tests for settings resolution."""

from article_feeds.core.settings import Settings


def test_effective_database_url_defaults_to_main_database() -> None:
    config = Settings(DATABASE_URL="sqlite:///./main.db", TEST_DATABASE_URL="sqlite:///./test.db")

    assert config.effective_database_url == "sqlite:///./main.db"


def test_effective_database_url_switches_to_test_database() -> None:
    config = Settings(
        DATABASE_URL="sqlite:///./main.db",
        TEST_DATABASE_URL="sqlite:///./test.db",
        USE_TEST_DATABASE=True,
    )

    assert config.effective_database_url == "sqlite:///./test.db"


def test_test_switch_without_url_keeps_main_database() -> None:
    config = Settings(DATABASE_URL="sqlite:///./main.db", USE_TEST_DATABASE=True)

    assert config.effective_database_url == "sqlite:///./main.db"
    assert not hasattr(config, "database_url_sync")
