"""Upload domain specific exceptions."""

from thumbhost.core.errors import InternalError, ProcessingError, ValidationError


class NoFileUploadedError(ValidationError):
    """Raised when the request carries no file under the expected field."""

    code = "NO_FILE_UPLOADED"
    message = "アップロードするファイルが指定されていません。"

    def __init__(self, expected_field: str) -> None:
        super().__init__(details={"expectedField": expected_field})


class InvalidFileFieldError(ValidationError):
    """Raised when a file arrives under a field other than the expected one."""

    code = "INVALID_FILE_FIELD"
    message = "無効なファイルフィールドです。"

    def __init__(self, expected_field: str) -> None:
        super().__init__(details={"expectedField": expected_field})


class TooManyFilesError(ValidationError):
    code = "TOO_MANY_FILES"
    message = "アップロードできるファイルは1つだけです。"

    def __init__(self) -> None:
        super().__init__(details={"maxFiles": 1})


class InvalidFileTypeError(ValidationError):
    code = "INVALID_FILE_TYPE"
    message = "無効なファイル形式です。JPEG、PNG、GIF、WebP形式の画像のみアップロード可能です。"

    def __init__(self) -> None:
        super().__init__(details={"allowedTypes": ["JPEG", "PNG", "GIF", "WebP"]})


class FileTooLargeError(ValidationError):
    code = "FILE_TOO_LARGE"

    def __init__(self, max_megabytes: int) -> None:
        super().__init__(
            f"ファイルサイズが大きすぎます。{max_megabytes}MB以下のファイルをアップロードしてください。",
            details={"maxSize": f"{max_megabytes}MB"},
        )


class UploadStorageError(InternalError):
    """Raised when uploaded bytes cannot be persisted."""

    code = "UPLOAD_STORAGE_ERROR"
    message = "ファイルの保存中にエラーが発生しました。"


class ThumbnailGenerationError(ProcessingError):
    """Raised when the image cannot be decoded, resized or re-encoded."""

    code = "IMAGE_PROCESSING_ERROR"
    message = "画像の処理中にエラーが発生しました。"
