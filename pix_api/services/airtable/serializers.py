# Fichier: pix_api/services/airtable/serializers.py
"""Conversion des enregistrements Airtable en objets du domaine.

Les noms de colonnes sont ceux du référentiel Airtable (en français).
"""

from __future__ import annotations

from typing import Any, Optional

from pix_api.schemas.content_schema import Challenge, CourseGroup, Solution

TREATMENT_COLUMNS = {
    "t1": "T1 - Espaces, casse & accents",
    "t2": "T2 - Ponctuation",
    "t3": "T3 - Distance d'édition",
}


def _to_int(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class CourseGroupSerializer:

    def deserialize(self, airtable_record: dict[str, Any]) -> CourseGroup:
        fields = airtable_record.get("fields", {})
        return CourseGroup(
            id=airtable_record["id"],
            name=fields.get("Nom", ""),
            course_ids=list(fields.get("Tests") or []),
        )


class ChallengeSerializer:

    def deserialize(self, airtable_record: dict[str, Any]) -> Challenge:
        fields = airtable_record.get("fields", {})

        illustrations = fields.get("Illustration de la consigne") or []
        illustration_url = illustrations[0].get("url") if illustrations else None
        attachments = [item.get("url") for item in fields.get("Pièce jointe") or [] if item.get("url")]

        return Challenge(
            id=airtable_record["id"],
            instruction=fields.get("Consigne"),
            proposals=fields.get("Propositions"),
            type=fields.get("Type d'épreuve"),
            illustration_url=illustration_url,
            attachments=attachments,
            status=fields.get("Statut"),
            timer=_to_int(fields.get("Timer")),
        )


class SolutionSerializer:
    """Extrait la solution d'une épreuve (jamais exposée par l'API)."""

    def deserialize(self, airtable_record: dict[str, Any]) -> Solution:
        fields = airtable_record.get("fields", {})

        # Un traitement est actif sauf s'il est explicitement "Désactivé"
        enabled = [
            treatment
            for treatment, column in TREATMENT_COLUMNS.items()
            if fields.get(column) != "Désactivé"
        ]

        return Solution(
            id=airtable_record["id"],
            type=fields.get("Type d'épreuve"),
            value=fields.get("Bonnes réponses"),
            enabled_treatments=enabled,
            scoring=fields.get("Scoring"),
        )


course_group_serializer = CourseGroupSerializer()
challenge_serializer = ChallengeSerializer()
solution_serializer = SolutionSerializer()
