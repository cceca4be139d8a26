"""Tests for the Cloze aggregate."""

from __future__ import annotations

import logging

import pytest

from clozemark import Blank, Cloze, MediaElement, MediaType, create_cloze
from clozemark.config import ClozeConfig, get_settings
from clozemark.markup.anchors import anchor_ids, count_placeholders

CAPITAL_HTML = "Paris is the capital of !!France!!. Fill in: ___."


class TestCreateCloze:
    """End-to-end construction: normalise, scan, link."""

    def test_capital_example(self, make_templates) -> None:
        cloze = create_cloze(CAPITAL_HTML, make_templates("France"))

        assert anchor_ids(cloze.html) == [
            "container_highlight_0",
            "container_blank_0",
        ]
        (blank,) = cloze.blanks
        assert cloze.highlights_before(blank) == cloze.highlights
        assert cloze.highlights_before(blank)[0].text == "France"
        assert cloze.highlights_after(blank) == []

    def test_two_markers_one_template(self, make_templates) -> None:
        cloze = create_cloze("___ and ___", make_templates("one"))

        assert [b.id for b in cloze.blanks] == ["blank_0"]
        assert cloze.html == "<span id='container_blank_0'></span> and <span></span>"
        assert cloze.unlinked_blank_markers == 1

    def test_four_underscores_one_blank(self, make_templates) -> None:
        cloze = create_cloze("____", make_templates("a", "b"))

        assert len(cloze.blanks) == 1
        assert cloze.html == "<span id='container_blank_0'></span>"

    def test_no_markers(self) -> None:
        cloze = create_cloze("<p>Nothing to do</p>", [])

        assert cloze.html == "<p>Nothing to do</p>"
        assert cloze.blanks == []
        assert cloze.highlights == []

    def test_empty_html(self, make_templates) -> None:
        cloze = create_cloze("", make_templates("a"))

        assert cloze.html == ""
        assert cloze.blanks == []
        assert cloze.highlights == []

    def test_classmethod_entry_point(self, make_templates) -> None:
        media = [MediaElement(media_type=MediaType.IMAGE, source="map.png")]
        cloze = Cloze.create_cloze(CAPITAL_HTML, make_templates("x"), media)

        assert cloze.media == tuple(media)
        assert len(cloze.blanks) == 1

    def test_templates_not_mutated(self, make_templates) -> None:
        templates = make_templates("France")
        create_cloze(CAPITAL_HTML, templates)

        assert templates[0].id == ""
        assert templates[0].highlights_before == []

    def test_deterministic(self, make_templates) -> None:
        html = "!!a!! ___ !!b!! ______ !!c!!"
        first = create_cloze(html, make_templates("x", "y"))
        second = create_cloze(html, make_templates("x", "y"))

        assert first.html == second.html
        assert first.blanks == second.blanks
        assert first.highlights == second.highlights

    def test_custom_config(self, make_templates) -> None:
        config = ClozeConfig(anchor_tag="mark", id_prefix="gap")
        cloze = create_cloze("!!hi!! ___", make_templates("x"), config=config)

        assert cloze.html == (
            "<mark id='gap_highlight_0'></mark> <mark id='gap_blank_0'></mark>"
        )

    def test_environment_does_not_change_output(
        self, make_templates, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """CLOZE__* settings belong to the application edge, not construction."""
        html = "!!France!! ___ !!abcd!!"
        expected = create_cloze(html, make_templates("x"))

        monkeypatch.setenv("CLOZE__ID_PREFIX", "slot")
        monkeypatch.setenv("CLOZE__MAX_HIGHLIGHT_LENGTH", "3")
        get_settings.cache_clear()
        cloze = create_cloze(html, make_templates("x"))

        assert cloze.html == expected.html
        assert anchor_ids(cloze.html) == [
            "container_highlight_0",
            "container_blank_0",
            "container_highlight_1",
        ]

    def test_invalid_environment_does_not_raise(
        self, make_templates, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("CLOZE__MAX_HIGHLIGHT_LENGTH", "abc")
        get_settings.cache_clear()
        cloze = create_cloze("___", make_templates("x"))

        assert [b.id for b in cloze.blanks] == ["blank_0"]

    def test_unlinked_markers_logged(
        self, make_templates, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="clozemark.cloze"):
            create_cloze("___ ___ ___", make_templates("a"))

        assert "2 blank marker(s) without an answer" in caplog.text

    def test_unlinked_warning_can_be_disabled(
        self, make_templates, caplog: pytest.LogCaptureFixture
    ) -> None:
        config = ClozeConfig(warn_on_unlinked_blanks=False)
        with caplog.at_level(logging.WARNING, logger="clozemark.cloze"):
            cloze = create_cloze("___ ___", make_templates("a"), config=config)

        assert cloze.unlinked_blank_markers == 1
        assert caplog.text == ""


class TestOrderingProperties:
    """Anchors, element lists and links agree on document order."""

    CASES = [
        ("", 0),
        ("plain", 0),
        (CAPITAL_HTML, 1),
        ("!!A!! ___ !!B!! _____ !!C!!", 2),
        ("___ !!x!! ___ ___", 1),
        ("!!a___b!! ___ !!c!!", 3),
        ("<p>!!one!!</p><p>___</p><p>!!two!!</p>", 1),
    ]

    @pytest.mark.parametrize(("html", "n_templates"), CASES)
    def test_anchor_count_matches_elements(
        self, html: str, n_templates: int, make_templates
    ) -> None:
        cloze = create_cloze(html, make_templates(*["x"] * n_templates))
        elements = len(cloze.highlights) + len(cloze.blanks)

        assert len(anchor_ids(cloze.html)) == elements
        assert elements + cloze.unlinked_blank_markers == count_placeholders(cloze.html)

    @pytest.mark.parametrize(("html", "n_templates"), CASES)
    def test_anchor_order_matches_scan_order(
        self, html: str, n_templates: int, make_templates
    ) -> None:
        cloze = create_cloze(html, make_templates(*["x"] * n_templates))

        assert anchor_ids(cloze.html) == [f"container_{e.id}" for e in cloze.elements]

    @pytest.mark.parametrize(("html", "n_templates"), CASES)
    def test_links_respect_position(
        self, html: str, n_templates: int, make_templates
    ) -> None:
        cloze = create_cloze(html, make_templates(*["x"] * n_templates))
        order = [e.id for e in cloze.elements]

        for blank in cloze.blanks:
            p = order.index(blank.id)
            before = [order.index(hid) for hid in blank.highlights_before]
            after = [order.index(hid) for hid in blank.highlights_after]
            assert all(i < p for i in before)
            assert all(i > p for i in after)
            assert before == sorted(before, reverse=True)
            assert after == sorted(after)


class TestCheckCompleteness:
    """Only an all-True set of blanks is complete."""

    def _cloze(self, make_templates) -> Cloze:
        return create_cloze("___ ___", make_templates("a", "b"))

    def test_ungraded_is_incomplete(self, make_templates) -> None:
        assert self._cloze(make_templates).check_completeness() is False

    def test_one_wrong_is_incomplete(self, make_templates) -> None:
        cloze = self._cloze(make_templates)
        cloze.blanks[0].is_correct = True
        cloze.blanks[1].is_correct = False
        assert cloze.check_completeness() is False

    def test_one_unset_is_incomplete(self, make_templates) -> None:
        cloze = self._cloze(make_templates)
        cloze.blanks[0].is_correct = True
        assert cloze.check_completeness() is False

    def test_all_correct(self, make_templates) -> None:
        cloze = self._cloze(make_templates)
        for blank in cloze.blanks:
            blank.is_correct = True
        assert cloze.check_completeness() is True

    def test_no_blanks_is_complete(self) -> None:
        assert create_cloze("!!only highlights!!", []).check_completeness() is True


class TestLookups:
    """Back-references resolve through the Cloze's own collections."""

    def test_get_highlight_and_blank(self, make_templates) -> None:
        cloze = create_cloze(CAPITAL_HTML, make_templates("x"))

        assert cloze.get_highlight("highlight_0") is cloze.highlights[0]
        assert cloze.get_blank("blank_0") is cloze.blanks[0]
        assert cloze.get_highlight("highlight_9") is None
        assert cloze.get_blank("blank_9") is None

    def test_shared_highlight_resolves_to_same_object(self, make_templates) -> None:
        cloze = create_cloze("___ !!mid!! ___", make_templates("a", "b"))
        first, second = cloze.blanks

        assert cloze.highlights_after(first)[0] is cloze.highlights_before(second)[0]


def test_blank_templates_accept_plain_blank() -> None:
    """Templates need not come from from_author_text."""
    cloze = create_cloze("___", [Blank(correct_answers=["x"], hint="h")])
    assert cloze.blanks[0].hint == "h"
