import pytest
from legal_intent.intent.slots import (
    justice_kind,
    normalize_desired_output,
    normalize_money_terms,
    normalize_procedure_code,
    procedure_code_short,
)
from legal_intent.intent.types import DESIRED_OUTPUTS, PROCEDURE_CODES, MoneyTerms


@pytest.mark.parametrize(
    ("raw", "code", "short", "kind"),
    [
        ("ЦПК", "ЦПК", "cpc", 1),
        ("crpc", "КПК", "crpc", 2),
        (" гпк ", "ГПК", "gpc", 3),
        ("CAC", "КАС", "cac", 4),
    ],
)
def test_procedure_code_forms(raw: str, code: str, short: str, kind: int) -> None:
    assert normalize_procedure_code(raw) == code
    assert procedure_code_short(raw) == short
    assert justice_kind(raw) == kind


@pytest.mark.parametrize("raw", [None, "", "КК", 4])
def test_unknown_procedure_code_has_no_forms(raw) -> None:
    assert normalize_procedure_code(raw) is None
    assert procedure_code_short(raw) is None
    assert justice_kind(raw) is None


def test_every_canonical_code_has_short_form_and_justice_kind() -> None:
    for code in PROCEDURE_CODES:
        assert procedure_code_short(code) is not None
        assert justice_kind(code) is not None


def test_desired_output_accepts_canonical_and_ukrainian_names() -> None:
    for value in DESIRED_OUTPUTS:
        assert normalize_desired_output(value) == value
    assert normalize_desired_output("Підбірка") == "collection"
    assert normalize_desired_output("poem") is None


def test_money_terms_instance_is_revalidated() -> None:
    raw = MoneyTerms(penalty="yes", inflation=0, legal_fees="no")  # type: ignore[arg-type]

    assert normalize_money_terms(raw) == MoneyTerms(penalty=True)
    assert normalize_money_terms(MoneyTerms()) is None
