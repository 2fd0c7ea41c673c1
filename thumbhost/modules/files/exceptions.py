"""File serving exceptions."""

from thumbhost.core.errors import InternalError, NotFoundError


class FileNotFoundInStorageError(NotFoundError):
    code = "FILE_NOT_FOUND"
    message = "指定されたファイルが見つかりません。"

    def __init__(self, filename: str) -> None:
        super().__init__(details={"filename": filename})


class FileServeError(InternalError):
    """Raised when a file exists but its metadata cannot be read."""

    code = "FILE_SERVE_ERROR"
    message = "ファイルの配信中にエラーが発生しました。"
