from fastapi import HTTPException
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_401_UNAUTHORIZED, HTTP_404_NOT_FOUND, HTTP_409_CONFLICT

class BadRequest(HTTPException):
    def __init__(self, detail: str = "Bad request"):
        super().__init__(status_code=HTTP_400_BAD_REQUEST, detail=detail)

class NotFound(HTTPException):
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=HTTP_404_NOT_FOUND, detail=detail)

class Unauthorized(HTTPException):
    def __init__(self, detail: str = "Unauthorized access"):
        super().__init__(status_code=HTTP_401_UNAUTHORIZED, detail=detail)

class DuplicateRecordError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(
            status_code=HTTP_409_CONFLICT,
            detail=detail
        )
class InterviewNotFound(NotFound):
    def __init__(self, identifier: str = None):
        detail = f"Interview '{identifier}' not found." if identifier else "Interview not found."
        super().__init__(detail=detail)
class TranscriptUnavailable(BadRequest):
    def __init__(self, detail: str = "No transcript available. Please wait for the transcript to be processed."):
        super().__init__(detail=detail)
class EvaluationAlreadyPending(DuplicateRecordError):
    def __init__(self, identifier: str = None):
        detail = f"An evaluation for interview '{identifier}' is already in progress." if identifier else "An evaluation is already in progress."
        super().__init__(detail=detail)
