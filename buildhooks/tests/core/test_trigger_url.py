"""Unit tests for build trigger URL resolution."""

import pytest

from buildhooks.core.errors import URLResolutionError
from buildhooks.core.trigger_url import TriggerURLResolver, build_trigger_url


class TestBuildTriggerURL:
    """Tests for canonical endpoint derivation."""

    def test_canonical_endpoint(self):
        assert (
            build_trigger_url("https://app.bitrise.io", "abc123")
            == "https://app.bitrise.io/app/abc123/build/start.json"
        )

    def test_trailing_slash_on_root(self):
        assert (
            build_trigger_url("https://app.bitrise.io/", "abc123")
            == "https://app.bitrise.io/app/abc123/build/start.json"
        )

    @pytest.mark.parametrize("slug", ["", "   ", "a/b", "a?b", "a#b"])
    def test_invalid_slug(self, slug):
        with pytest.raises(URLResolutionError):
            build_trigger_url("https://app.bitrise.io", slug)

    @pytest.mark.parametrize("root", ["", "app.bitrise.io", "ftp://app.bitrise.io", "https://"])
    def test_invalid_root(self, root):
        with pytest.raises(URLResolutionError):
            build_trigger_url(root, "abc123")


class TestTriggerURLResolver:
    """Tests for override-aware resolution."""

    def test_derives_endpoint_without_override(self):
        resolver = TriggerURLResolver(api_root_url="https://app.bitrise.io")
        assert resolver.resolve("slug") == "https://app.bitrise.io/app/slug/build/start.json"

    def test_override_used_unchanged(self):
        resolver = TriggerURLResolver(
            api_root_url="https://app.bitrise.io",
            override_url="http://requestbin.local/abc?x=1",
        )
        assert resolver.resolve("slug") == "http://requestbin.local/abc?x=1"

    def test_override_skips_slug_validation(self):
        resolver = TriggerURLResolver(
            api_root_url="https://app.bitrise.io",
            override_url="http://localhost:9000",
        )
        assert resolver.resolve("a/b") == "http://localhost:9000"

    def test_empty_override_is_unset(self):
        resolver = TriggerURLResolver(api_root_url="https://app.bitrise.io", override_url="")
        assert resolver.override_url is None
