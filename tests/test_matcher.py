"""Tests for search classification, rendering and tag listing."""

import pytest

from ftags.codec import decode_database, decode_tag
from ftags.matcher import classify, list_tags, render_search, search
from ftags.models import Record, Scalar, Tag


def q(*texts):
    return [decode_tag(t) for t in texts]


@pytest.fixture
def records():
    return decode_database(
        "b.png: file_type:png, size:small\n"
        "a.jpg: file_type:jpg, img_tags:[solo standing]\n"
        "c.txt: note"
    )


class TestClassify:
    def test_name_only_query_is_full_match(self):
        record = Record("a.jpg", [Tag("file_type", Scalar("jpg"))])
        assert classify(record, q("file_type")) == (True, True)

    def test_value_mismatch_is_partial_only(self):
        record = Record("a.jpg", [Tag("file_type", Scalar("jpg"))])
        assert classify(record, q("file_type:png")) == (False, True)

    def test_valued_query_against_valueless_tag_is_partial(self):
        record = Record("c.txt", [Tag("note")])
        assert classify(record, q("note:x")) == (False, True)

    def test_list_values_need_exact_equality(self):
        record = Record("a.jpg", [Tag("img_tags", decode_tag("x:[solo standing]").value)])
        assert classify(record, q("img_tags:[solo standing]")) == (True, True)
        assert classify(record, q("img_tags:[solo]")) == (False, True)

    def test_no_shared_name(self):
        record = Record("c.txt", [Tag("note")])
        assert classify(record, q("file_type")) == (False, False)


class TestSearch:
    def test_results_are_sorted(self, records):
        result = search(records, q("file_type"))
        assert [r.path for r in result.full] == ["a.jpg", "b.png"]
        assert [r.path for r in result.partial] == ["a.jpg", "b.png"]

    def test_disjunctive_across_query_tags(self, records):
        # a.jpg fails file_type:png but still fully matches via img_tags.
        result = search(records, q("file_type:png", "img_tags"))
        assert [r.path for r in result.full] == ["a.jpg", "b.png"]

    def test_partial_only(self, records):
        result = search(records, q("file_type:gif"))
        assert result.full == []
        assert [r.path for r in result.partial] == ["a.jpg", "b.png"]

    def test_no_match(self, records):
        result = search(records, q("missing"))
        assert not result

    def test_duplicates_are_kept(self):
        records = decode_database("a: x\na: x")
        result = search(records, q("x"))
        assert len(result.full) == 2
        assert len(result.partial) == 2


class TestRenderSearch:
    def test_identical_partial_section_is_suppressed(self, records):
        text = render_search(search(records, q("file_type")))
        assert text == (
            "Full matches:\n"
            "    a.jpg: file_type:jpg, img_tags:[solo standing]\n"
            "    b.png: file_type:png, size:small"
        )

    def test_both_sections(self, records):
        text = render_search(search(records, q("file_type:jpg")))
        assert text == (
            "Full matches:\n"
            "    a.jpg: file_type:jpg, img_tags:[solo standing]\n"
            "\n"
            "Partial Matches:\n"
            "    a.jpg: file_type:jpg, img_tags:[solo standing]\n"
            "    b.png: file_type:png, size:small"
        )

    def test_partial_section_alone(self, records):
        text = render_search(search(records, q("size:large")))
        assert text == "Partial Matches:\n    b.png: file_type:png, size:small"

    def test_empty(self, records):
        assert render_search(search(records, q("missing"))) == ""


class TestListTags:
    def test_sorted_and_deduplicated(self):
        records = decode_database("a: b, a:x, a\nc: a:[x], a:x, b")
        assert [str(t) for t in list_tags(records)] == ["a", "a:x", "a:[x]", "b"]

    def test_shared_tag_listed_once(self):
        records = decode_database("a: shared\nb: shared")
        assert list_tags(records) == [Tag("shared")]

    def test_idempotent(self, records):
        once = list_tags(records)
        assert list_tags([Record("all", once)]) == once

    def test_empty_database(self):
        assert list_tags([]) == []
