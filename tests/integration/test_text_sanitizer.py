import logging
import pytest

from core.text_sanitizer import collapse_whitespace, remove_blank_lines, normalize_article_text


def test_collapse_whitespace():
    """Runs of spaces, tabs, newlines and NBSPs become one space."""
    text = "第一段\n\n\t第二段  结束"
    assert collapse_whitespace(text) == "第一段 第二段 结束"


def test_remove_blank_lines():
    text = "line one\n   \nline two\n\nline three"
    assert remove_blank_lines(text) == "line one\nline two\nline three"


def test_normalize_article_text_trims_and_collapses():
    raw = "\n    关键发现：销售增长显著。  \n\n   这是第二句。\n  "
    assert normalize_article_text(raw) == "关键发现：销售增长显著。 这是第二句。"


def test_normalize_article_text_logs_changes(caplog):
    caplog.set_level(logging.DEBUG, logger="core.text_sanitizer")

    normalize_article_text("  padded   text  ")

    assert "Normalized article text" in caplog.text


def test_normalize_article_text_no_changes_no_log(caplog):
    caplog.set_level(logging.DEBUG, logger="core.text_sanitizer")

    assert normalize_article_text("already clean") == "already clean"
    assert "Normalized article text" not in caplog.text


@pytest.mark.parametrize("raw", ["", "   ", "\n\t\n", None])
def test_blank_inputs_normalize_to_empty(raw):
    assert normalize_article_text(raw) == ""


def test_empty_and_none_inputs():
    assert collapse_whitespace("") == ""
    assert collapse_whitespace(None) is None
    assert remove_blank_lines("") == ""
    assert remove_blank_lines(None) is None
