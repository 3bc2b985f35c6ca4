import pytest

from gymlog.services.normalize import normalize_name


def test_case_and_punctuation_insensitive():
    assert normalize_name("Incline DB Press!") == normalize_name("incline db press")
    assert normalize_name("Incline DB Press!") == "incline db press"


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("  Farmer's   Walk ", "farmers walk"),
        ("Farmer’s Walk", "farmers walk"),
        ("Pull-Up (Wide Grip)", "pull up wide grip"),
        ("Développé couché", "developpe couche"),
        ("---", ""),
        ("", ""),
    ],
)
def test_normalize_examples(raw, expected):
    assert normalize_name(raw) == expected


@pytest.mark.parametrize("raw", ["Incline DB Press!", "  Farmer’s -- Walk", "Crème Brûlée Curl", "a__b"])
def test_idempotent(raw):
    once = normalize_name(raw)
    assert normalize_name(once) == once
