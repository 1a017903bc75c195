"""Unit tests for the model response parser."""

import pytest

from shift_extractor.extraction.parser import ParsedTree, ParseFailure, parse_response


class TestParseResponse:
    """Test suite for parse_response."""

    def test_parses_full_response(self, two_shift_response: str) -> None:
        """Test that a well-formed reply yields shifts, summary and thinking."""
        tree = parse_response(two_shift_response)

        assert isinstance(tree, ParsedTree)
        assert tree.errors == []
        assert len(tree.shifts) == 2
        assert tree.shifts[0]["type"] == "all-day"
        assert tree.shifts[0]["date"] == "2024-10-02"
        assert tree.shifts[0]["notes"] == ""
        assert tree.shifts[1] == {"type": "all-day", "date": "2024-10-06"}
        assert tree.summary == "October 2024 call calendar."
        assert "2nd & the 6th" in tree.thinking

    def test_single_error_is_a_list(self, resident_not_found_response: str) -> None:
        """Test that a lone error element still parses as a one-element list."""
        tree = parse_response(resident_not_found_response)

        assert isinstance(tree, ParsedTree)
        assert tree.errors == ["Resident name not found in the schedule image."]
        assert tree.shifts == []

    def test_single_shift_is_a_list(self) -> None:
        """Test that a lone shift element still parses as a one-element list."""
        tree = parse_response(
            "<errors></errors><schedule><shift><type>timed</type>"
            "<start>2024-10-10T12:00</start><end>2024-10-11T00:00</end></shift></schedule>"
        )

        assert isinstance(tree, ParsedTree)
        assert tree.shifts == [
            {"type": "timed", "start": "2024-10-10T12:00", "end": "2024-10-11T00:00"}
        ]

    def test_error_text_is_stripped(self) -> None:
        """Test that surrounding whitespace is removed from leaf text."""
        tree = parse_response("<errors>\n  <error>\n    Something went wrong.\n  </error>\n</errors>")

        assert isinstance(tree, ParsedTree)
        assert tree.errors == ["Something went wrong."]

    def test_missing_containers_give_empty_lists(self) -> None:
        """Test that absent errors/schedule blocks become empty lists."""
        tree = parse_response("<summary>Nothing here.</summary><schedule></schedule>")

        assert isinstance(tree, ParsedTree)
        assert tree.errors == []
        assert tree.shifts == []
        assert tree.summary == "Nothing here."

    def test_element_error_is_kept_as_mapping(self) -> None:
        """Test that an error with child elements is kept as a mapping."""
        tree = parse_response("<errors><error><message>nested</message></error></errors>")

        assert isinstance(tree, ParsedTree)
        assert tree.errors == [{"message": "nested"}]

    def test_tolerates_code_fences_and_declaration(self) -> None:
        """Test that Markdown fences and an XML declaration are ignored."""
        raw = (
            "```xml\n<?xml version=\"1.0\"?>\n<errors></errors>"
            "<schedule><shift><type>all-day</type><date>2024-10-02</date></shift></schedule>\n```"
        )

        tree = parse_response(raw)

        assert isinstance(tree, ParsedTree)
        assert tree.shifts == [{"type": "all-day", "date": "2024-10-02"}]

    def test_tolerates_surrounding_prose(self) -> None:
        """Test that prose before and after the blocks is ignored."""
        tree = parse_response("Here you go:\n<errors><error>Oops</error></errors>\nThanks!")

        assert isinstance(tree, ParsedTree)
        assert tree.errors == ["Oops"]

    def test_tolerates_tag_like_prose_around_blocks(self) -> None:
        """Test that tag-like text outside errors/schedule does not break parsing."""
        raw = (
            "Result for <resident>:\n"
            "<errors></errors>"
            "<schedule><shift><type>all-day</type><date>2024-10-02</date></shift></schedule>\n"
            "Let me know if you need <anything> else."
        )

        tree = parse_response(raw)

        assert isinstance(tree, ParsedTree)
        assert tree.shifts == [{"type": "all-day", "date": "2024-10-02"}]

    def test_tolerates_bare_ampersand(self) -> None:
        """Test that an unescaped ampersand is kept as literal text."""
        tree = parse_response("<errors><error>Q&A rota is unreadable</error></errors>")

        assert isinstance(tree, ParsedTree)
        assert tree.errors == ["Q&A rota is unreadable"]

    def test_tolerates_html_entities(self) -> None:
        """Test that HTML-only entities such as &nbsp; are kept as literal text."""
        tree = parse_response(
            "<errors></errors><schedule><shift><type>all-day</type><date>2024-10-02</date>"
            "<notes>Home&nbsp;call &mdash; backup</notes></shift></schedule>"
        )

        assert isinstance(tree, ParsedTree)
        assert tree.shifts[0]["notes"] == "Home&nbsp;call &mdash; backup"

    def test_predefined_entities_are_decoded(self) -> None:
        """Test that the five XML entities still decode normally."""
        tree = parse_response("<errors><error>A &amp; B &lt;3</error></errors>")

        assert isinstance(tree, ParsedTree)
        assert tree.errors == ["A & B <3"]

    def test_tolerates_bare_less_than(self) -> None:
        """Test that a bare '<' inside an error message is kept verbatim."""
        tree = parse_response("<errors><error>Image resolution < 200px, unreadable.</error></errors>")

        assert isinstance(tree, ParsedTree)
        assert tree.errors == ["Image resolution < 200px, unreadable."]

    def test_unrelated_children_are_ignored(self) -> None:
        """Test that non-shift children of schedule are not collected."""
        tree = parse_response(
            "<schedule><note>ignore me</note><shift><type>all-day</type>"
            "<date>2024-10-02</date></shift></schedule>"
        )

        assert isinstance(tree, ParsedTree)
        assert len(tree.shifts) == 1

    @pytest.mark.parametrize(
        "raw",
        [
            "I could not find any shifts in this image, sorry.",
            "",
            "<errors><error>unclosed</errors>",
            "<schedule><shift><type>all-day</type>",
            "<errors></errors><schedule><shift><type>all-day</type>",
            "<thinking>truncated reasoning that never closes",
        ],
    )
    def test_unusable_text_is_parse_failure(self, raw: str) -> None:
        """Test that prose, empty text and broken markup give ParseFailure."""
        result = parse_response(raw)

        assert isinstance(result, ParseFailure)
        assert result.reason

    def test_non_text_input_is_parse_failure(self) -> None:
        """Test that non-str input gives ParseFailure instead of raising."""
        assert isinstance(parse_response(None), ParseFailure)
        assert isinstance(parse_response(b"<errors></errors>"), ParseFailure)
