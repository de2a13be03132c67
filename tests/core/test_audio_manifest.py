"""Unit tests for the audio manifest."""

from hotspot_reader.core import AudioManifest, ManifestEntry


def test_find_matches_image_and_index():
    manifest = AudioManifest.from_dict({"3.png": [{"index": 2, "audio": "hotspot_audio\\3_2.wav"}]})

    assert manifest.find("3.png", 2) == ManifestEntry(index=2, audio="hotspot_audio\\3_2.wav")
    assert manifest.find("3.png", 1) is None
    assert manifest.find("4.png", 2) is None


def test_malformed_entries_are_skipped():
    manifest = AudioManifest.from_dict(
        {
            "1.png": [
                {"index": 0, "audio": "a.wav"},
                {"index": "1", "audio": "b.wav"},
                {"index": True, "audio": "c.wav"},
                "not an entry",
            ],
            "2.png": "not a list",
        }
    )

    assert len(manifest) == 1
    assert manifest.find("1.png", 0).audio == "a.wav"


def test_non_object_gives_empty_manifest():
    assert len(AudioManifest.from_dict(["x"])) == 0
