"""Correction of a submitted answer against the expected solution.

Each challenge type has its own comparison rule:

* ``QCU``: single choice, trimmed equality.
* ``QCM``: multiple choices, compared as sets of comma separated values.
* ``QROC``: free text, one accepted answer per line of the solution.
* ``QROCM-ind``: several independent fields, each with its own accepted values.
* ``QROCM-dep``: several fields sharing one pool of accepted values.

Free text is compared after the treatments enabled on the challenge (``t1``
spaces/case/accents, ``t2`` punctuation, ``t3`` typo tolerance).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Iterable, Optional

import yaml

from pix_api.models.answer_model import AnswerStatus
from pix_api.schemas.content_schema import Solution
from pix_api.utils.text_utils import (
    normalize_spaces_case_accents,
    similarity_ratio,
    strip_punctuation,
)

logger = logging.getLogger(__name__)

ABANDON_VALUE = "#ABAND#"
TYPO_MIN_SIMILARITY = 0.75
_SCORING_LINE = re.compile(r"^\s*(\d+)\s*:", flags=re.MULTILINE)


@dataclass(frozen=True)
class Evaluation:
    result: AnswerStatus
    details: Any = None

    @property
    def result_details(self) -> str:
        return dump_result_details(self.details)


def dump_result_details(details: Any) -> str:
    # PyYAML termine les scalaires racine par "...": on garde le format court
    if details is None:
        return "null\n"
    return yaml.safe_dump(details, default_flow_style=False, allow_unicode=True, sort_keys=True)


def _apply_treatments(value: str, treatments: Iterable[str]) -> str:
    # Espaces insécables et espaces de bord sont toujours ignorés
    value = value.replace("\u00a0", " ").strip()
    treatments = set(treatments)
    if "t2" in treatments:
        value = strip_punctuation(value)
    if "t1" in treatments:
        value = normalize_spaces_case_accents(value)
    return value


def _matches(answer: str, accepted: Iterable[str], treatments: list[str]) -> bool:
    candidate = _apply_treatments(answer, treatments)
    normalized = [_apply_treatments(str(item), treatments) for item in accepted]

    if candidate in normalized:
        return True

    if "t3" in treatments and candidate:
        return any(
            similarity_ratio(candidate, expected) >= TYPO_MIN_SIMILARITY
            for expected in normalized
            if expected
        )
    return False


def _load_mapping(raw: Optional[str]) -> Optional[dict[str, Any]]:
    if not raw:
        return None
    try:
        loaded = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        logger.warning("YAML illisible (%s): %r", exc, raw[:120])
        return None
    return loaded if isinstance(loaded, dict) else None


def _as_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, list):
        return [str(item) for item in value]
    return [str(value)]


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _split_choices(value: str) -> set[str]:
    return {part.strip() for part in value.split(",") if part.strip()}


def _validate_qcu(answer: str, solution: Solution) -> Evaluation:
    ok = answer.strip() == (solution.value or "").strip()
    return Evaluation(AnswerStatus.OK if ok else AnswerStatus.KO)


def _validate_qcm(answer: str, solution: Solution) -> Evaluation:
    ok = _split_choices(answer) == _split_choices(solution.value or "")
    return Evaluation(AnswerStatus.OK if ok else AnswerStatus.KO)


def _validate_qroc(answer: str, solution: Solution) -> Evaluation:
    accepted = [line for line in (solution.value or "").splitlines() if line.strip()]
    ok = _matches(answer, accepted, solution.enabled_treatments)
    return Evaluation(AnswerStatus.OK if ok else AnswerStatus.KO)


def _validate_qrocm_ind(answer: str, solution: Solution) -> Evaluation:
    expected = _load_mapping(solution.value)
    if expected is None:
        logger.error("Solution QROCM-ind illisible pour l'épreuve %s", solution.id)
        return Evaluation(AnswerStatus.UNIMPLEMENTED)

    given = _load_mapping(answer) or {}
    details = {
        str(key): _matches(_text(given.get(key)), _as_list(accepted), solution.enabled_treatments)
        for key, accepted in expected.items()
    }
    ok = all(details.values())
    return Evaluation(AnswerStatus.OK if ok else AnswerStatus.KO, details)


def _min_partial_score(scoring: Optional[str]) -> Optional[int]:
    # Lignes "<nb de bonnes réponses>: @acquis" (le "@" interdit un parsing YAML)
    values = [int(match.group(1)) for match in _SCORING_LINE.finditer(scoring or "")]
    return min(values) if values else None


def _count_matched_groups(values: list[str], groups: list[list[str]], treatments: list[str]) -> int:
    """Maximum number of values that can each be given a distinct solution group."""

    candidates = [
        [index for index, accepted in enumerate(groups) if _matches(value, accepted, treatments)]
        for value in values
    ]
    owners: dict[int, int] = {}

    def _assign(value_index: int, seen: set[int]) -> bool:
        # Chemin augmentant: un groupe déjà pris peut être réattribué
        for group_index in candidates[value_index]:
            if group_index in seen:
                continue
            seen.add(group_index)
            if group_index not in owners or _assign(owners[group_index], seen):
                owners[group_index] = value_index
                return True
        return False

    return sum(1 for value_index in range(len(values)) if _assign(value_index, set()))


def _validate_qrocm_dep(answer: str, solution: Solution) -> Evaluation:
    expected = _load_mapping(solution.value)
    if expected is None:
        logger.error("Solution QROCM-dep illisible pour l'épreuve %s", solution.id)
        return Evaluation(AnswerStatus.UNIMPLEMENTED)

    given = _load_mapping(answer) or {}
    groups = [_as_list(accepted) for accepted in expected.values()]
    values = [_text(value) for value in given.values()]

    correct = _count_matched_groups(values, groups, solution.enabled_treatments)

    if correct == len(groups) and groups:
        return Evaluation(AnswerStatus.OK)

    min_partial = _min_partial_score(solution.scoring)
    if min_partial is not None and correct >= min_partial:
        return Evaluation(AnswerStatus.PARTIALLY)
    return Evaluation(AnswerStatus.KO)


_VALIDATORS = {
    "QCU": _validate_qcu,
    "QCUIMG": _validate_qcu,
    "QCM": _validate_qcm,
    "QCMIMG": _validate_qcm,
    "QROC": _validate_qroc,
    "QROCM-ind": _validate_qrocm_ind,
    "QROCM-dep": _validate_qrocm_dep,
}


def validate(answer_value: str, solution: Solution, timeout: Optional[int] = None) -> Evaluation:
    """Return the evaluation of ``answer_value`` for ``solution``.

    A negative ``timeout`` means the learner ran out of time: a right or
    partially right answer is then recorded as ``timedout``.
    """

    if answer_value == ABANDON_VALUE:
        return Evaluation(AnswerStatus.ABAND)

    validator = _VALIDATORS.get(solution.type or "")
    if validator is None:
        logger.warning("Type d'épreuve non géré: %r (épreuve %s)", solution.type, solution.id)
        return Evaluation(AnswerStatus.UNIMPLEMENTED)

    evaluation = validator(answer_value, solution)

    if (
        timeout is not None
        and timeout < 0
        and evaluation.result in (AnswerStatus.OK, AnswerStatus.PARTIALLY)
    ):
        return Evaluation(AnswerStatus.TIMEDOUT, evaluation.details)
    return evaluation
