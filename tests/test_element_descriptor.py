"""
Tests for expanding element descriptors into verification maps.
"""
import pytest

from pomgen.core.errors import DataShapeError
from pomgen.generators.java_templates import JavaTemplate
from pomgen.recorder.element_descriptor import get_attrs_to_verify, get_tag_name


def test_only_must_entries_are_verified():
    descriptor = {
        "tagName": {"value": "INPUT", "show": "must"},
        "elementText": {"value": "Sign in", "show": "must"},
        "checked": {"value": "false", "show": "ignore"},
        "attributes": {
            "class": {"value": "btn primary", "show": "must"},
            "style": {"value": "color: red", "show": "ignore"},
        },
    }
    attrs = get_attrs_to_verify(descriptor, JavaTemplate.quote, "e1")

    assert attrs == {"elementText": '"Sign in"', "class": '"btn primary"'}


def test_empty_descriptor_gives_empty_map():
    assert get_attrs_to_verify({}, JavaTemplate.quote) == {}
    assert get_attrs_to_verify(None, JavaTemplate.quote) == {}


def test_malformed_descriptor_raises():
    with pytest.raises(DataShapeError):
        get_attrs_to_verify(["elementText"], JavaTemplate.quote, "e1")
    with pytest.raises(DataShapeError):
        get_attrs_to_verify({"elementText": "OK"}, JavaTemplate.quote, "e1")


def test_get_tag_name():
    assert get_tag_name({"tagName": {"value": "A", "show": "ignore"}}) == "A"
    assert get_tag_name({"tagName": "DIV"}) == "DIV"
    assert get_tag_name({}) == ""
