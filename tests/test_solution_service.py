from __future__ import annotations

import pytest

from pix_api.models.answer_model import AnswerStatus
from pix_api.schemas.content_schema import Solution
from pix_api.services import solution_service
from pix_api.utils.text_utils import normalize_spaces_case_accents, similarity_ratio, strip_punctuation

ALL_TREATMENTS = ["t1", "t2", "t3"]


def _solution(type_: str, value: str, treatments=None, scoring=None) -> Solution:
    return Solution(
        id="recChallenge",
        type=type_,
        value=value,
        enabled_treatments=ALL_TREATMENTS if treatments is None else treatments,
        scoring=scoring,
    )


def test_abandoned_answer():
    evaluation = solution_service.validate("#ABAND#", _solution("QCU", "1"))
    assert evaluation.result == AnswerStatus.ABAND


@pytest.mark.parametrize("answer, expected", [
    ("1", AnswerStatus.OK),
    (" 1 ", AnswerStatus.OK),
    ("2", AnswerStatus.KO),
])
def test_qcu(answer, expected):
    assert solution_service.validate(answer, _solution("QCU", "1")).result == expected


def test_qcu_details_render_as_yaml_null():
    evaluation = solution_service.validate("1", _solution("QCU", "1"))
    assert evaluation.result_details == "null\n"


@pytest.mark.parametrize("answer, expected", [
    ("1,3", AnswerStatus.OK),
    ("3, 1", AnswerStatus.OK),
    ("1", AnswerStatus.KO),
    ("1,2,3", AnswerStatus.KO),
])
def test_qcm(answer, expected):
    assert solution_service.validate(answer, _solution("QCM", "1, 3")).result == expected


def test_qroc_accepts_any_line_of_the_solution():
    solution = _solution("QROC", "Paris\nLutèce")
    assert solution_service.validate("lutece", solution).result == AnswerStatus.OK
    assert solution_service.validate("Londres", solution).result == AnswerStatus.KO


def test_qroc_punctuation_and_typos_with_treatments():
    solution = _solution("QROC", "Marie Curie")
    assert solution_service.validate("marie-curie !", solution).result == AnswerStatus.OK
    assert solution_service.validate("Mari Curie", solution).result == AnswerStatus.OK


def test_qroc_without_treatments_is_strict():
    solution = _solution("QROC", "Paris", treatments=[])
    assert solution_service.validate("Paris", solution).result == AnswerStatus.OK
    assert solution_service.validate("paris", solution).result == AnswerStatus.KO


def test_qrocm_ind_reports_each_field():
    solution = _solution("QROCM-ind", "prenom:\n- Marie\nnom:\n- Curie\n- Sklodowska")

    evaluation = solution_service.validate("prenom: marie\nnom: Pierre", solution)

    assert evaluation.result == AnswerStatus.KO
    assert evaluation.details == {"prenom": True, "nom": False}
    assert evaluation.result_details == "nom: false\nprenom: true\n"


def test_qrocm_ind_all_fields_right():
    solution = _solution("QROCM-ind", "prenom:\n- Marie\nnom:\n- Curie")
    evaluation = solution_service.validate("prenom: Marie\nnom: Curie", solution)
    assert evaluation.result == AnswerStatus.OK


def test_qrocm_dep_does_not_reuse_a_solution():
    solution = _solution(
        "QROCM-dep",
        "s1:\n- Google\n- Bing\ns2:\n- Google\n- Bing",
        scoring="1: @recherche1\n2: @recherche2",
    )

    assert solution_service.validate("r1: Google\nr2: Bing", solution).result == AnswerStatus.OK
    assert solution_service.validate("r1: Google\nr2: Qwant", solution).result == AnswerStatus.PARTIALLY
    assert solution_service.validate("r1: Qwant\nr2: Yahoo", solution).result == AnswerStatus.KO


def test_qrocm_dep_finds_an_assignment_of_the_solutions():
    # "Paris" doit laisser le groupe s1 à "Lyon"
    solution = _solution("QROCM-dep", "s1:\n- Paris\n- Lyon\ns2:\n- Paris")

    assert solution_service.validate("r1: Paris\nr2: Lyon", solution).result == AnswerStatus.OK
    assert solution_service.validate("r1: Lyon\nr2: Paris", solution).result == AnswerStatus.OK
    assert solution_service.validate("r1: Lyon\nr2: Lyon", solution).result == AnswerStatus.KO


def test_qrocm_dep_requires_every_field():
    solution = _solution("QROCM-dep", "s1:\n- Paris\ns2:\n- Lyon")
    assert solution_service.validate("r1: Paris", solution).result == AnswerStatus.KO

    scored = _solution("QROCM-dep", "s1:\n- Paris\ns2:\n- Lyon", scoring="1: @villes1\n2: @villes2")
    assert solution_service.validate("r1: Paris", scored).result == AnswerStatus.PARTIALLY


def test_unknown_type_is_unimplemented():
    assert solution_service.validate("x", _solution("QRU", "x")).result == AnswerStatus.UNIMPLEMENTED


def test_right_answer_after_timeout_is_timedout():
    evaluation = solution_service.validate("1", _solution("QCU", "1"), timeout=-3)
    assert evaluation.result == AnswerStatus.TIMEDOUT


def test_wrong_answer_after_timeout_stays_ko():
    evaluation = solution_service.validate("2", _solution("QCU", "1"), timeout=-3)
    assert evaluation.result == AnswerStatus.KO


def test_text_utils():
    assert normalize_spaces_case_accents(" Élé phant ") == "elephant"
    assert strip_punctuation("l'été, déjà!") == "lété déjà"
    assert similarity_ratio("maricurie", "mariecurie") > 0.9
    assert similarity_ratio("londres", "paris") < 0.75
