"""
Name: Markup Sanitization Tests
"""

import pytest
from employee_api.crosscutting.sanitize import clean_text, escape_markup

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("plain", "plain"),
        ("<b>bold</b>", "&lt;b&gt;bold&lt;/b&gt;"),
        ("a < b > c", "a &lt; b &gt; c"),
        ("Tom & Jerry", "Tom & Jerry"),
    ],
)
def test_escape_markup(raw, expected):
    assert escape_markup(raw) == expected


def test_clean_text_strips_and_escapes():
    assert clean_text("  <i>x</i>  ") == "&lt;i&gt;x&lt;/i&gt;"


def test_clean_text_passes_none():
    assert clean_text(None) is None
