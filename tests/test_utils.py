"""
Unit tests for the utility helpers.

Tests URL normalization, cache-key hashing and JSON extraction from model output.
"""

import pytest

from src.core.exceptions import MalformedResponseError
from src.utils import (
    URLUtils,
    extract_json_array,
    extract_json_object,
    make_cache_key,
    rolling_hash,
)


class TestURLUtils:
    """Test cases for URLUtils."""

    def test_get_domain_strips_leading_www(self):
        assert URLUtils.get_domain("https://www.example.com/article") == "example.com"

    def test_get_domain_keeps_inner_www(self):
        assert URLUtils.get_domain("https://news.www.example.com/a") == "news.www.example.com"

    def test_get_domain_lowercases(self):
        assert URLUtils.get_domain("https://WWW.Example.COM/x") == "example.com"

    def test_get_domain_invalid(self):
        assert URLUtils.get_domain("not a url") is None
        assert URLUtils.get_domain("") is None
        assert URLUtils.get_domain(None) is None

    def test_derive_source_name(self):
        assert URLUtils.derive_source_name("nytimes.com") == "Nytimes"
        assert URLUtils.derive_source_name("bbc.co.uk") == "Bbc"

    def test_link_preview_image(self):
        template = "https://api.microlink.io/?url={url}&meta=false&embed=image.url"
        result = URLUtils.link_preview_image("https://news.net/story?id=1", template)
        assert result == (
            "https://api.microlink.io/?url=https%3A%2F%2Fnews.net%2Fstory%3Fid%3D1"
            "&meta=false&embed=image.url"
        )


class TestRollingHash:
    """Test cases for the cache-key hash."""

    def test_empty_string(self):
        assert rolling_hash("") == "0"

    def test_short_string(self):
        assert rolling_hash("abc") == "96354"

    def test_wraps_to_signed_32_bit(self):
        assert rolling_hash("polygenelubricants") == "-2147483648"

    def test_counts_utf16_code_units(self):
        # U+1F600 is the surrogate pair D83D DE00
        assert rolling_hash("\U0001F600") == "1772899"

    def test_make_cache_key_uses_prefix_of_content(self):
        assert make_cache_key("summary", "abc" + "z" * 300, key_chars=3) == "summary_96354"

    def test_make_cache_key_differs_by_endpoint(self):
        content = "Same article text"
        assert make_cache_key("summary", content) != make_cache_key("insights", content)


class TestJsonExtraction:
    """Test cases for JSON extraction from free text."""

    def test_plain_object(self):
        assert extract_json_object('{"core_subject": "x"}') == {"core_subject": "x"}

    def test_fenced_object(self):
        text = '```json\n{"core_subject": "x", "opposing_terms": []}\n```'
        assert extract_json_object(text)["core_subject"] == "x"

    def test_object_with_preamble(self):
        text = 'Sure! Here is the analysis:\n{"core_subject": "x"}\nHope this helps.'
        assert extract_json_object(text) == {"core_subject": "x"}

    def test_object_unparseable_raises(self):
        with pytest.raises(MalformedResponseError) as exc_info:
            extract_json_object("I cannot help with that.")
        assert "I cannot help with that." in str(exc_info.value)
        assert exc_info.value.raw == "I cannot help with that."

    def test_object_snippet_is_truncated(self):
        text = "no json " * 100
        with pytest.raises(MalformedResponseError) as exc_info:
            extract_json_object(text)
        assert len(exc_info.value.raw) == 200

    def test_array_is_not_an_object(self):
        with pytest.raises(MalformedResponseError):
            extract_json_object('["a", "b"]')

    def test_empty_text_raises(self):
        with pytest.raises(MalformedResponseError):
            extract_json_object("   ")

    def test_array_with_preamble(self):
        text = 'Articles:\n[{"title": "A", "url": "https://a.com/1"}]'
        assert extract_json_array(text) == [{"title": "A", "url": "https://a.com/1"}]
