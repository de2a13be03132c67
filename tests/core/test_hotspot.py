"""Unit tests for hotspot entities and document parsing."""

import pytest

from hotspot_reader.core import DocumentFormatError, Hotspot, HotspotDocument, PageRef, default_pages


@pytest.fixture
def exported_data():
    """A document in the exported JSON shape."""
    return {
        "pages": [{"img": "1.png"}, {"img": "2.png"}],
        "hotspots": {
            "1.png": [{"x": 0.1, "y": 0.2, "w": 0.3, "h": 0.05, "text": "Xin chào"}],
        },
    }


class TestHotspot:
    def test_to_dict_has_all_fields(self):
        hotspot = Hotspot(x=0.1, y=0.2, w=0.3, h=0.4, text="hello")

        assert hotspot.to_dict() == {"x": 0.1, "y": 0.2, "w": 0.3, "h": 0.4, "text": "hello"}

    def test_from_dict_accepts_numeric_strings(self):
        hotspot = Hotspot.from_dict({"x": "0.5", "y": 0, "w": 0.1, "h": 0.1, "text": "a"})

        assert hotspot.x == 0.5

    def test_from_dict_rejects_missing_coordinate(self):
        with pytest.raises(DocumentFormatError):
            Hotspot.from_dict({"x": 0.1, "y": 0.2, "w": 0.3, "text": "no height"})

    def test_from_dict_rejects_non_object(self):
        with pytest.raises(DocumentFormatError):
            Hotspot.from_dict([0.1, 0.2, 0.3, 0.4])


class TestHotspotDocument:
    def test_round_trip_preserves_pages_and_hotspots(self, exported_data):
        document = HotspotDocument.from_dict(exported_data)

        assert document.to_dict() == exported_data

    def test_pages_may_be_plain_strings(self):
        document = HotspotDocument.from_dict({"pages": ["a.png", "b.png"]})

        assert document.pages == [PageRef("a.png"), PageRef("b.png")]
        assert document.hotspots == {}

    def test_hotspots_only_document_has_no_pages(self):
        document = HotspotDocument.from_dict({"hotspots": {"3.png": []}})

        assert document.pages is None
        assert document.hotspots == {"3.png": []}
        assert document.to_dict()["pages"] == []

    def test_unrecognized_shape_raises(self):
        with pytest.raises(DocumentFormatError, match="JSON format not recognized"):
            HotspotDocument.from_dict({"something": "else"})

    def test_non_object_raises(self):
        with pytest.raises(DocumentFormatError):
            HotspotDocument.from_dict(["1.png"])

    def test_hotspot_list_must_be_a_list(self):
        with pytest.raises(DocumentFormatError):
            HotspotDocument.from_dict({"hotspots": {"1.png": {"x": 0}}})

    def test_invalid_page_entry_raises(self):
        with pytest.raises(DocumentFormatError):
            HotspotDocument.from_dict({"pages": [{"src": "1.png"}]})


def test_default_pages_are_numbered_from_one():
    assert default_pages(3) == [PageRef("1.png"), PageRef("2.png"), PageRef("3.png")]
