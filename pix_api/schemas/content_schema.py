# Fichier: pix_api/schemas/content_schema.py
"""Contenus pédagogiques issus d'Airtable (lecture seule)."""

from typing import Any, List, Optional

from pydantic import BaseModel, Field

from pix_api.schemas.jsonapi_schema import document, to_many


class CourseGroup(BaseModel):
    id: str
    name: str
    course_ids: List[str] = Field(default_factory=list)


class Solution(BaseModel):
    id: str
    type: Optional[str] = None
    value: Optional[str] = None
    # Traitements appliqués avant comparaison: "t1", "t2", "t3"
    enabled_treatments: List[str] = Field(default_factory=list)
    scoring: Optional[str] = None


class Challenge(BaseModel):
    id: str
    instruction: Optional[str] = None
    proposals: Optional[str] = None
    type: Optional[str] = None
    illustration_url: Optional[str] = None
    attachments: List[str] = Field(default_factory=list)
    status: Optional[str] = None
    timer: Optional[int] = None


def serialize_course_groups(course_groups: List[CourseGroup]) -> dict[str, Any]:
    return document([
        {
            "type": "course-groups",
            "id": group.id,
            "attributes": {"name": group.name},
            "relationships": {"courses": to_many("courses", group.course_ids)},
        }
        for group in course_groups
    ])


def serialize_challenge(challenge: Challenge) -> dict[str, Any]:
    return document({
        "type": "challenges",
        "id": challenge.id,
        "attributes": {
            "instruction": challenge.instruction,
            "proposals": challenge.proposals,
            "type": challenge.type,
            "illustration-url": challenge.illustration_url,
            "attachments": challenge.attachments,
            "timer": challenge.timer,
        },
    })
