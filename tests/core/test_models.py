import pytest

from municipality_crawler.core.models import ExtractedFacts, MunicipalityRecord, sanitize_filename


@pytest.mark.parametrize(
    "name,expected",
    [
        ("Aarau", "Aarau"),
        ("St. Gallen", "St__Gallen"),
        ("Zürich", "Z_rich"),
        ("Biel/Bienne", "Biel_Bienne"),
    ],
)
def test_sanitize_filename(name, expected):
    assert sanitize_filename(name) == expected


class TestExtractedFacts:
    def test_reads_camel_case_answer(self):
        facts = ExtractedFacts.model_validate(
            {"bfsId": "261", "imagePageUrl": "/wiki/Datei:Z.jpg", "pointsOfInterest": ["Grossmünster"], "extra": 1}
        )

        assert facts.bfs_id == "261"
        assert facts.image_page_url == "/wiki/Datei:Z.jpg"
        assert facts.flag_page_url is None
        assert facts.points_of_interest == ["Grossmünster"]

    def test_numeric_bfs_id_becomes_string(self):
        assert ExtractedFacts.model_validate({"bfsId": 261}).bfs_id == "261"

    def test_blank_points_of_interest_are_dropped(self):
        facts = ExtractedFacts.model_validate({"pointsOfInterest": [" Grossmünster ", "", None, "  "]})
        assert facts.points_of_interest == ["Grossmünster"]


class TestMunicipalityRecord:
    def test_json_dict_uses_aliases_and_omits_none(self):
        record = MunicipalityRecord(name="Bern", bfs_id="351", source_url="https://de.wikipedia.org/wiki/Bern")

        assert record.to_json_dict() == {
            "name": "Bern",
            "bfsId": "351",
            "sourceUrl": "https://de.wikipedia.org/wiki/Bern",
        }

    def test_accepts_stored_camel_case(self):
        record = MunicipalityRecord.model_validate(
            {"name": "Bern", "sourceUrl": "https://x", "stylizedImagePath": "output/images/Bern_stylized.png"}
        )

        assert record.bfs_id == ""
        assert record.stylized_image_path == "output/images/Bern_stylized.png"
