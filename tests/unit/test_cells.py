"""
Unit tests for the cell-level parsing helpers.
"""

import pytest

from scytl_results.exceptions import ParseFailure, SchemaViolation, TypeMismatch
from scytl_results.parsers.cells import (
    merge_across,
    parse_int,
    parse_percent,
    require_string,
    require_vote_count,
)
from scytl_results.types import Tag


def _cells(xml, *cells):
    sheet = xml.sheet_node(xml.row(*cells))
    return list(sheet.child(Tag.TABLE).child(Tag.ROW).children(Tag.CELL))


class TestParseInt:
    """Test strict integer parsing."""

    @pytest.mark.parametrize('text, expected', [
        ('9095', 9095),
        (' 42 ', 42),
        ('-3', -3),
        ('0', 0),
        ('2147483647', 2147483647),
        ('-2147483648', -2147483648),
    ])
    def test_accepts_integers(self, text, expected):
        assert parse_int(text) == expected

    @pytest.mark.parametrize('text', ['', '12.5', '12abc', '1_000', 'abc', None])
    def test_rejects_non_integers(self, text):
        with pytest.raises(ParseFailure):
            parse_int(text)

    @pytest.mark.parametrize('text', ['2147483648', '-2147483649', '99999999999', '9' * 5000])
    def test_rejects_values_outside_32_bit_range(self, text):
        with pytest.raises(ParseFailure):
            parse_int(text)

    def test_error_carries_context(self):
        with pytest.raises(ParseFailure) as exc_info:
            parse_int('x', 'vote count', worksheet='2', row=5, cell_number=3)

        assert exc_info.value.details == {'worksheet': '2', 'row': 5, 'cell': 3}


class TestParsePercent:
    """Test turnout percentage parsing."""

    @pytest.mark.parametrize('text, expected', [
        ('20.87 %', 20.87),
        ('100 %', 100.0),
        ('0.00 %', 0.0),
        ('.5 %', 0.5),
    ])
    def test_accepts_percentages(self, text, expected):
        assert parse_percent(text, ' %') == pytest.approx(expected)

    @pytest.mark.parametrize('text', [
        '20.87%x',
        '20.87',
        '20.87%',
        '20.87  %',
        'abc %',
        ' %',
        '20.87x %',
        'nan %',
        'inf %',
        '1e999 %',
        None,
    ])
    def test_rejects_malformed_percentages(self, text):
        with pytest.raises(ParseFailure):
            parse_percent(text, ' %')


class TestCellChecks:
    """Test style and datum type cross-checks."""

    def test_require_string_returns_text(self, xml):
        cell, = _cells(xml, xml.text('Arkansas'))

        assert require_string(cell, 'region') == 'Arkansas'

    def test_require_string_returns_none_for_empty_datum(self, xml):
        cell, = _cells(xml, xml.text(None, empty_data=True))

        assert require_string(cell, 'candidate') is None

    def test_require_string_rejects_number(self, xml):
        cell, = _cells(xml, xml.number(12))

        with pytest.raises(TypeMismatch, match="found Number"):
            require_string(cell, 'region')

    def test_require_string_rejects_missing_datum(self, xml):
        cell, = _cells(xml, xml.cell())

        with pytest.raises(TypeMismatch, match="no datum"):
            require_string(cell, 'region')

    def test_require_vote_count_reads_value(self, xml):
        cell, = _cells(xml, xml.number(508))

        assert require_vote_count(cell, 'VoteCount', 'votes') == 508

    def test_require_vote_count_rejects_wrong_style(self, xml):
        cell, = _cells(xml, xml.number(508, style=None))

        with pytest.raises(SchemaViolation):
            require_vote_count(cell, 'VoteCount', 'votes')

    def test_require_vote_count_rejects_string_datum(self, xml):
        cell, = _cells(xml, xml.text('508', style='VoteCount'))

        with pytest.raises(SchemaViolation):
            require_vote_count(cell, 'VoteCount', 'votes')

    def test_require_vote_count_rejects_unparsable_number(self, xml):
        cell, = _cells(xml, xml.number('12.5'))

        with pytest.raises(ParseFailure):
            require_vote_count(cell, 'VoteCount', 'votes')


class TestMergeAcross:
    def test_absent_attribute_is_zero(self, xml):
        cell, = _cells(xml, xml.text('x'))

        assert merge_across(cell) == 0

    def test_reads_attribute(self, xml):
        cell, = _cells(xml, xml.text('John Wolfe', merge=1))

        assert merge_across(cell) == 1

    @pytest.mark.parametrize('value', ['-1', 'two'])
    def test_rejects_invalid_values(self, xml, value):
        cell, = _cells(xml, xml.text('x', merge=value))

        with pytest.raises(ParseFailure):
            merge_across(cell)
