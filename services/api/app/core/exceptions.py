from fastapi import FastAPI, HTTPException, status
from fastapi.responses import JSONResponse

from providers.llm.gemini import AnalysisError, AnalysisErrorKind


class AnalysisBusyError(Exception):
    """已有分析请求在执行中。"""


class MediaStoreError(Exception):
    """上传视频写入临时目录失败。"""


class ShotNotFoundError(Exception):
    def __init__(self, shot_id: int):
        super().__init__(f"Shot {shot_id} not found")
        self.shot_id = shot_id


# 前置校验失败 → 400；其余（上游 / 空响应 / 解析失败）→ 502
_ANALYSIS_STATUS = {
    AnalysisErrorKind.CREDENTIAL_MISSING: status.HTTP_400_BAD_REQUEST,
    AnalysisErrorKind.VIDEO_MISSING: status.HTTP_400_BAD_REQUEST,
}


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(HTTPException)
    async def http_exception_handler(_, exc: HTTPException):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    @app.exception_handler(AnalysisError)
    async def analysis_error_handler(_, exc: AnalysisError):
        code = _ANALYSIS_STATUS.get(exc.kind, status.HTTP_502_BAD_GATEWAY)
        return JSONResponse(status_code=code, content={"detail": exc.message, "kind": exc.kind.value})

    @app.exception_handler(AnalysisBusyError)
    async def analysis_busy_handler(_, exc: AnalysisBusyError):
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": "An analysis is already in progress.", "kind": "busy"},
        )

    @app.exception_handler(MediaStoreError)
    async def media_store_handler(_, exc: MediaStoreError):
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": str(exc), "kind": "media_store"},
        )

    @app.exception_handler(ShotNotFoundError)
    async def shot_not_found_handler(_, exc: ShotNotFoundError):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})
