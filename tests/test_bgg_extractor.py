"""Tests for pattern-based BGG field extraction."""

from __future__ import annotations

import pytest

from gamehaven.services.bgg_extractor import (
    DEFAULT_TITLE,
    DESCRIPTION_MAX_CHARS,
    FIELDS,
    extract,
    parse_search_results,
    parse_thing,
)
from tests.bgg_documents import GLOOMHAVEN_THING, SEARCH_RESULTS


class TestParseThing:
    def test_gloomhaven_fields(self) -> None:
        fields = parse_thing(GLOOMHAVEN_THING)
        assert fields.title == "Gloomhaven"
        assert fields.min_players == 1
        assert fields.max_players == 4
        assert fields.playing_time == 120
        assert fields.weight == pytest.approx(3.8966)
        assert fields.min_age == 14
        assert fields.year_published == 2017

    def test_image_whitespace_is_stripped(self) -> None:
        assert extract(GLOOMHAVEN_THING, "image_url") == (
            "https://cf.geekdo-images.com/sZYp_3BTDGjh2unaZfZmuA__original/img/pic2437871.jpg"
        )

    def test_description_newline_entities_decoded(self) -> None:
        description = extract(GLOOMHAVEN_THING, "description")
        assert description.startswith("Gloomhaven is a game")
        assert "\n\nPlayers take on" in description
        assert "&#10;" not in description

    def test_description_is_truncated(self) -> None:
        document = f"<description>{'x' * 5000}</description>"
        assert len(extract(document, "description")) == DESCRIPTION_MAX_CHARS

    def test_description_spans_lines(self) -> None:
        document = "<description>line one\nline two</description>"
        assert extract(document, "description") == "line one\nline two"

    def test_alternate_name_is_ignored(self) -> None:
        document = '<name type="alternate" value="Other" /><name type="primary" value="Real" />'
        assert extract(document, "title") == "Real"

    def test_apostrophe_in_double_quoted_title(self) -> None:
        document = """<name type="primary" value="Tzolk'in: The Mayan Calendar" />"""
        assert extract(document, "title") == "Tzolk'in: The Mayan Calendar"

    def test_title_entities_unescaped(self) -> None:
        document = '<name type="primary" value="Pandemic &amp; Friends" />'
        assert extract(document, "title") == "Pandemic & Friends"


class TestDefaults:
    @pytest.mark.parametrize("document", [None, "", "<items></items>", "not xml at all <<<"])
    def test_empty_or_garbage_documents_never_raise(self, document) -> None:
        fields = parse_thing(document)
        assert fields.title == DEFAULT_TITLE
        assert fields.description is None
        assert fields.image_url is None
        assert fields.min_players == 1
        assert fields.max_players == 4
        assert fields.playing_time == 45
        assert fields.weight == 2.5
        assert fields.min_age is None

    def test_zero_values_mean_unknown(self) -> None:
        document = (
            '<minplayers value="0" /><maxplayers value="0" /><playingtime value="0" />'
            '<averageweight value="0" /><minage value="0" />'
        )
        fields = parse_thing(document)
        assert (fields.min_players, fields.max_players, fields.playing_time) == (1, 4, 45)
        assert fields.weight == 2.5
        assert fields.min_age is None

    def test_non_numeric_values_fall_back(self) -> None:
        document = '<playingtime value="soon" /><averageweight value="nan" />'
        assert extract(document, "playing_time") == 45
        assert extract(document, "weight") == 2.5

    def test_blank_title_falls_back(self) -> None:
        assert extract('<name type="primary" value="   " />', "title") == DEFAULT_TITLE

    def test_unknown_field_name_raises(self) -> None:
        with pytest.raises(KeyError):
            extract(GLOOMHAVEN_THING, "publisher")

    def test_every_field_has_an_extractor(self) -> None:
        for field in FIELDS:
            extract("", field)


class TestSearchResults:
    def test_pairs_in_document_order(self) -> None:
        assert parse_search_results(SEARCH_RESULTS) == [
            ("174430", "Gloomhaven"),
            ("291457", "Gloomhaven: Jaws of the Lion"),
            ("26", "Tzolk'in & Friends"),
        ]

    def test_limit(self) -> None:
        assert len(parse_search_results(SEARCH_RESULTS, limit=2)) == 2

    def test_no_items(self) -> None:
        assert parse_search_results('<items total="0"></items>') == []
