from fastapi import APIRouter

from pix_api.schemas.content_schema import serialize_course_groups
from pix_api.services.content.repositories import course_group_repository

router = APIRouter()


@router.get("")
def list_course_groups():
    return serialize_course_groups(course_group_repository.list())
