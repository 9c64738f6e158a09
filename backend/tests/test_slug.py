"""Tests for slug normalization."""

import pytest

from contenthub.utils.slug import is_valid_slug, slugify


class TestSlugify:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Kitchen Tips", "kitchen-tips"),
            ("  About   Us ", "-about-us-"),
            ("Café & Bar!", "caf--bar"),
            ("Already-a-slug", "already-a-slug"),
            ("Tabs\tand\nnewlines", "tabs-and-newlines"),
            ("", ""),
        ],
    )
    def test_examples(self, text, expected):
        assert slugify(text) == expected

    @pytest.mark.parametrize(
        "text",
        ["Kitchen Tips", "  Über   Größe 2024 ", "a--b  c", "!!!", "Mixed_Case Name", "ÅÄÖ -- x"],
    )
    def test_idempotent(self, text):
        once = slugify(text)
        assert slugify(once) == once

    def test_none_is_empty(self):
        assert slugify(None) == ""

    def test_output_is_always_valid_or_empty(self):
        for text in ["Hello World", "###", "   ", "x y z"]:
            slug = slugify(text)
            assert slug == "" or is_valid_slug(slug)


class TestIsValidSlug:
    def test_accepts_lowercase_digits_hyphens(self):
        assert is_valid_slug("kitchen-tips-2")

    @pytest.mark.parametrize("value", ["", "Kitchen", "with space", "under_score"])
    def test_rejects(self, value):
        assert not is_valid_slug(value)
