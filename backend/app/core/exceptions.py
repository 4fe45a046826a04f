from fastapi import HTTPException


class APIError(HTTPException):
    """HTTP error rendered as `{"error": ..., "code": ...}`."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(status_code=status_code, detail=message, headers=headers)
        self.code = code

    @property
    def message(self) -> str:
        return str(self.detail)
