"""Application errors rendered as JSON:API error documents.

Every error raised from a router ends up in ``jsonapi_error_handler`` (see
``pix_api.main``) which serialises it as::

    {"errors": [{"status": "400", "title": "...", "detail": "...",
                 "source": {"pointer": "/data/attributes"}}]}
"""

from __future__ import annotations

from typing import Any, Iterable, Optional


def build_error_object(
    status_code: int,
    title: str,
    detail: str,
    pointer: Optional[str] = None,
) -> dict[str, Any]:
    error: dict[str, Any] = {"status": str(status_code), "title": title, "detail": detail}
    if pointer is not None:
        error["source"] = {"pointer": pointer}
    return error


class JsonApiError(Exception):
    status_code = 400
    title = "Bad Request"

    def __init__(
        self,
        detail: str,
        *,
        pointer: Optional[str] = None,
        status_code: Optional[int] = None,
        title: Optional[str] = None,
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        self.pointer = pointer
        if status_code is not None:
            self.status_code = status_code
        if title is not None:
            self.title = title

    def error_objects(self) -> list[dict[str, Any]]:
        return [build_error_object(self.status_code, self.title, self.detail, self.pointer)]

    def to_document(self) -> dict[str, Any]:
        return {"errors": self.error_objects()}


class InvalidPayloadError(JsonApiError):
    status_code = 400
    title = "Invalid Payload"


class InvalidCredentialsError(InvalidPayloadError):
    MESSAGE = "L'adresse e-mail et/ou le mot de passe saisi(s) sont incorrects."

    def __init__(self) -> None:
        super().__init__(self.MESSAGE, pointer="/data/attributes")


class UnauthorizedError(JsonApiError):
    status_code = 401
    title = "Unauthorized"


class NotFoundError(JsonApiError):
    status_code = 404
    title = "Not Found"


class ConflictError(JsonApiError):
    status_code = 409
    title = "Conflict"


class UnprocessableEntityError(JsonApiError):
    """Carries one error object per invalid attribute."""

    status_code = 422
    title = "Invalid data attribute"

    def __init__(self, errors: Iterable[tuple[str, str]]) -> None:
        self.errors = list(errors)
        detail = " ".join(message for _, message in self.errors)
        super().__init__(detail)

    def error_objects(self) -> list[dict[str, Any]]:
        return [
            build_error_object(
                self.status_code,
                f'Invalid data attribute "{attribute}"',
                message,
                f"/data/attributes/{attribute}",
            )
            for attribute, message in self.errors
        ]
