from __future__ import annotations

from crm.utils.validators import optional_text, sanitize_text, slugify, strip_tags


def test_sanitize_text_strips_null_and_trims():
    assert sanitize_text("  hello\x00world  ") == "helloworld"
    assert sanitize_text(None) == ""


def test_optional_text_maps_blank_to_none():
    assert optional_text("   ") is None
    assert optional_text(None) is None
    assert optional_text(" Ada ") == "Ada"


def test_slugify_stage_names():
    assert slugify("Contact Made") == "contact-made"
    assert slugify("Proposal  Rejected!") == "proposal-rejected"
    assert slugify("Café Lead") == "cafe-lead"


def test_strip_tags_keeps_text_only():
    assert strip_tags("<p>Call <b>Ada</b></p> ") == "Call Ada"
    assert strip_tags(None) == ""
