"""
Pytest configuration and shared fixtures for News Article Exporter tests.
"""
import sys
from pathlib import Path
from typing import Any, Dict, List

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.settings import Settings
from exporter.assembler import ArticleAssembler
from exporter.publish import (
    ArticleRecord,
    ExportContent,
    InMemoryContentStore,
    InMemoryStateStore,
)
from exporter.theme import Theme, ThemeStore


# ============================================================================
# Fixtures: Configuration & Settings
# ============================================================================

@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings with API credentials and temp directories."""
    return Settings(
        api_key="test_key",
        api_secret="test_secret",
        api_channel="channel-1",
        temp_dir=tmp_path / "temp",
        themes_dir=tmp_path / "themes",
    )


@pytest.fixture
def theme_store() -> ThemeStore:
    return ThemeStore()


@pytest.fixture
def dark_theme() -> Theme:
    """Theme with every dark-mode value used by asides and quotes set."""
    return Theme("Dark", {
        "aside_background_color_dark": "#111111",
        "aside_border_color_dark": "#222222",
        "blockquote_background_color_dark": "#333333",
        "body_color_dark": "#eeeeee",
    })


@pytest.fixture
def assembler(settings: Settings, theme_store: ThemeStore) -> ArticleAssembler:
    return ArticleAssembler(settings, theme_store)


# ============================================================================
# Fixtures: Publishing
# ============================================================================

class FakePublishingApi:
    """
    In-memory PublishingApi.

    Errors queued with fail_next() are raised by the next call of that
    method, in order. Every call is recorded in `calls`.
    """

    def __init__(self):
        self.calls: List[tuple] = []
        self.articles: Dict[str, ArticleRecord] = {}
        self.channel: Dict[str, Any] = {"id": "channel-1", "name": "Test Channel"}
        self._errors: Dict[str, List[Exception]] = {}
        self._count = 0

    def fail_next(self, method: str, error: Exception) -> None:
        self._errors.setdefault(method, []).append(error)

    def _maybe_fail(self, method: str) -> None:
        pending = self._errors.get(method)
        if pending:
            raise pending.pop(0)

    def _new_revision(self) -> str:
        self._count += 1
        return f"rev-{self._count}"

    def create_article(self, document, channel_id, bundles, metadata):
        self.calls.append(("create_article", channel_id))
        self._maybe_fail("create_article")
        remote_id = f"article-{len(self.articles) + 1}"
        record = ArticleRecord(
            id=remote_id,
            revision=self._new_revision(),
            createdAt="2026-01-01T00:00:00Z",
            modifiedAt="2026-01-01T00:00:00Z",
            shareUrl=f"https://news.example.com/{remote_id}",
        )
        self.articles[remote_id] = record
        return record

    def update_article(self, remote_id, revision, document, bundles, metadata):
        self.calls.append(("update_article", remote_id, revision))
        self._maybe_fail("update_article")
        record = self.articles[remote_id].model_copy(update={"revision": self._new_revision()})
        self.articles[remote_id] = record
        return record

    def get_article(self, remote_id):
        self.calls.append(("get_article", remote_id))
        self._maybe_fail("get_article")
        return self.articles[remote_id]

    def get_channel(self, channel_id):
        self.calls.append(("get_channel", channel_id))
        self._maybe_fail("get_channel")
        return dict(self.channel)

    def call_names(self) -> List[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def fake_api() -> FakePublishingApi:
    return FakePublishingApi()


@pytest.fixture
def state_store() -> InMemoryStateStore:
    return InMemoryStateStore()


@pytest.fixture
def sample_content() -> ExportContent:
    return ExportContent(
        id="42",
        title="Sample Article",
        html=(
            "<h2>Intro</h2>"
            "<p>First paragraph with <a href=\"https://example.com\">a link</a>.</p>"
            "<p>Second paragraph.</p>"
        ),
        sections=["news"],
        meta={"is_paid": "0", "maturity_rating": "GENERAL"},
    )


@pytest.fixture
def content_store(sample_content: ExportContent) -> InMemoryContentStore:
    return InMemoryContentStore([sample_content])

