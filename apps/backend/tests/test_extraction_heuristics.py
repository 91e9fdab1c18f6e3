"""
Tests for the layout-agnostic extraction heuristics.
"""
import pytest
from bs4 import BeautifulSoup

from core.extraction_heuristics import (
    absolute_url,
    build_title,
    clean_title,
    extract_date_from_ancestor,
    is_junk_title,
    normalize_title_for_display,
)


def first_link(html: str, selector: str = "a"):
    return BeautifulSoup(html, "lxml").select_one(selector)


class TestJunkTitles:
    @pytest.mark.parametrize("title", [
        "Click Here", "DOWNLOAD", "  read more  ", "Apply Online", "Official Notification",
        "Latest News", "Skip to main content", "Answer Key",
    ])
    def test_known_junk_phrases(self, title):
        assert is_junk_title(title)

    @pytest.mark.parametrize("title", [None, "", "   ", "PDF", "abc12"])
    def test_blank_or_short(self, title):
        assert is_junk_title(title)

    def test_real_title_is_not_junk(self):
        assert not is_junk_title("SSC CGL 2025 Recruitment Notification")

    def test_junk_phrase_inside_longer_title_is_not_junk(self):
        assert not is_junk_title("Click here for Junior Engineer Recruitment 2025")


class TestCleanAndDisplay:
    def test_clean_title_collapses_whitespace(self):
        assert clean_title("  SSC\n\tCGL   2025 ") == "SSC CGL 2025"
        assert clean_title(None) == ""

    @pytest.mark.parametrize("raw,expected", [
        ("Latest: SSC CGL 2025", "SSC CGL 2025"),
        ("NEW: Junior Engineer posts", "Junior Engineer posts"),
        ("Advt: Stenographer Grade C", "Stenographer Grade C"),
        ("Notification:   Group D Recruitment", "Group D Recruitment"),
        ("Recruitment Notice: Clerk", "Recruitment Notice: Clerk"),
    ])
    def test_strips_boilerplate_prefixes(self, raw, expected):
        assert normalize_title_for_display(raw) == expected

    def test_caps_length(self):
        title = normalize_title_for_display("x" * 250)
        assert len(title) == 200
        assert title.endswith("...")

    def test_none(self):
        assert normalize_title_for_display(None) == ""


class TestBuildTitle:
    def test_visible_text_wins(self):
        link = first_link('<a href="/a.pdf" title="Other title for link">SSC CGL 2025 Recruitment Notification</a>')
        assert build_title(link) == "SSC CGL 2025 Recruitment Notification"

    def test_title_attribute_when_text_is_junk(self):
        link = first_link('<a href="/view.aspx" title="Junior Engineer Recruitment 2025">Click here</a>')
        assert build_title(link) == "Junior Engineer Recruitment 2025"

    def test_filename_from_href(self):
        link = first_link('<a href="/docs/SSC_CGL-Exam_Notice-2025.pdf?v=2">Download</a>')
        assert build_title(link) == "SSC CGL Exam Notice 2025"

    def test_url_encoded_filename(self):
        link = first_link('<a href="/files/Recruitment%20of%20Staff%20Nurse.pdf">PDF</a>')
        assert build_title(link) == "Recruitment of Staff Nurse"

    def test_ancestor_row_text(self):
        html = """
        <table>
          <tr><td>Recruitment of Stenographer Grade C 2025</td><td><a href="/a.pdf">PDF</a></td></tr>
        </table>
        """
        assert build_title(first_link(html)) == "Recruitment of Stenographer Grade C 2025 PDF"

    def test_ancestor_row_text_is_truncated(self):
        long_text = "Recruitment of " + "Assistant " * 20
        html = f'<table><tr><td>{long_text}</td><td><a href="/a.pdf">PDF</a></td></tr></table>'
        title = build_title(first_link(html))
        assert len(title) == 121
        assert title.endswith("…")

    def test_does_not_climb_into_body(self):
        html = "<html><body>Lots of page text that is long enough<a href='/x'>View</a></body></html>"
        assert build_title(first_link(html)) == "View"

    def test_falls_back_to_raw_text(self):
        link = first_link('<ul><li><a href="/">Home</a></li></ul>')
        title = build_title(link)
        assert title == "Home"
        assert is_junk_title(title)


class TestExtractDateFromAncestor:
    def test_date_in_same_row(self):
        html = """
        <table>
          <tr><td><a href="/je.pdf">Recruitment of JE</a></td><td>01/02/2025</td><td>15/03/2025</td></tr>
        </table>
        """
        link = first_link(html)
        assert extract_date_from_ancestor(link, 0) == "01/02/2025"
        assert extract_date_from_ancestor(link, 1) == "15/03/2025"

    def test_sibling_row_date_is_not_attributed(self):
        html = """
        <ul>
          <li><a href="/1.pdf">Notice one for the recruitment</a></li>
          <li>Published 12-01-2025 <a href="/2.pdf">Notice two for clerks</a></li>
        </ul>
        """
        soup = BeautifulSoup(html, "lxml")
        first, second = soup.select("a")
        assert extract_date_from_ancestor(first, 0) is None
        assert extract_date_from_ancestor(second, 0) == "12-01-2025"

    def test_sibling_container_date_is_not_attributed(self):
        html = """
        <div>
          <div><a href="/n.pdf">Recruitment notice for clerks</a></div>
          <div>Closing date 05-05-2025</div>
        </div>
        """
        assert extract_date_from_ancestor(first_link(html), 0) is None

    def test_own_text_of_generic_ancestor(self):
        html = """
        <div>Updated 01-01-2025
          <div><a href="/n.pdf">Recruitment notice for clerks</a></div>
        </div>
        """
        assert extract_date_from_ancestor(first_link(html), 0) == "01-01-2025"

    def test_date_in_link_text(self):
        link = first_link('<p><a href="/x">Advt 12/2025 dated 3 March 2025</a></p>')
        assert extract_date_from_ancestor(link, 0) == "3 March 2025"

    def test_missing_index(self):
        html = "<table><tr><td><a href='/x'>Recruitment</a></td><td>01-02-2025</td></tr></table>"
        assert extract_date_from_ancestor(first_link(html), 1) is None


class TestAbsoluteUrl:
    @pytest.mark.parametrize("relative,expected", [
        ("/pdf/notice.pdf", "https://sscnr.nic.in/pdf/notice.pdf"),
        ("pdf/notice.pdf", "https://sscnr.nic.in/pdf/notice.pdf"),
        ("https://other.gov.in/a", "https://other.gov.in/a"),
        ("//cdn.gov.in/a.pdf", "https://cdn.gov.in/a.pdf"),
        ("", "https://sscnr.nic.in"),
        (None, "https://sscnr.nic.in"),
    ])
    def test_resolution(self, relative, expected):
        assert absolute_url("https://sscnr.nic.in", relative) == expected
