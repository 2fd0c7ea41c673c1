"""Selects the single uploaded file part from a parsed multipart form."""

from __future__ import annotations

from starlette.datastructures import FormData, UploadFile

from .exceptions import InvalidFileFieldError, NoFileUploadedError, TooManyFilesError


def select_upload(form: FormData, field: str = "image") -> UploadFile:
    """Return the only file sent under ``field``.

    Plain (non-file) form values are ignored. Nothing is written to disk here,
    so a rejected request never reaches storage or thumbnail generation.
    """
    matches: list[UploadFile] = []
    for name, value in form.multi_items():
        if not isinstance(value, UploadFile):
            continue
        if name != field:
            raise InvalidFileFieldError(field)
        matches.append(value)

    if not matches:
        raise NoFileUploadedError(field)
    if len(matches) > 1:
        raise TooManyFilesError()
    return matches[0]
