"""
Integration Tests for GetAction and ChannelAction
"""

import pytest

from exporter.errors import RemoteRequestError
from exporter.publish import ChannelAction, GetAction, PushAction


@pytest.fixture
def published(settings, fake_api, content_store, state_store, assembler):
    PushAction(settings, fake_api, content_store, state_store, assembler).perform("42")
    return fake_api


class TestGetAction:
    def test_unpublished_returns_none(self, fake_api, state_store):
        action = GetAction(fake_api, state_store)
        assert action.perform("42") is None
        assert action.get_data("42", "share_url", "n/a") == "n/a"
        assert fake_api.calls == []

    def test_published_record(self, published, state_store):
        action = GetAction(published, state_store)

        record = action.perform("42")

        assert record.id == "article-1"
        assert action.get_data("42", "share_url") == "https://news.example.com/article-1"
        assert action.get_data("42", "missing", "fallback") == "fallback"


class TestChannelAction:
    def test_lookup_is_cached(self, settings, fake_api, state_store):
        action = ChannelAction(settings, fake_api, state_store)

        assert action.perform() == {"id": "channel-1", "name": "Test Channel"}
        assert action.perform() == {"id": "channel-1", "name": "Test Channel"}
        assert fake_api.call_names() == ["get_channel"]

    def test_failure_is_cached(self, settings, fake_api, state_store):
        fake_api.fail_next("get_channel", RemoteRequestError("UNAUTHORIZED"))
        action = ChannelAction(settings, fake_api, state_store)

        assert action.perform() is None
        assert action.perform() is None
        assert fake_api.call_names() == ["get_channel"]
        assert state_store.get_transient("channel") == ""

    def test_missing_configuration(self, settings, fake_api, state_store):
        action = ChannelAction(settings.model_copy(update={"api_channel": ""}), fake_api, state_store)
        assert action.perform() is None
        assert fake_api.calls == []
