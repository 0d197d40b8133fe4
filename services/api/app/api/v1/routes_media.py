# -*- coding: utf-8 -*-
"""
媒体与播放路由
- POST   /media             上传视频（替换旧视频，超过阈值仅提示）
- DELETE /media             移除视频
- GET    /media/{token}     播放地址（<video src>，不带鉴权头）
- GET    /playback          当前播放位置 + 激活镜头
- POST   /playback/time     播放器 timeupdate 上报
- POST   /playback/seek     跳转并暂停
"""
import mimetypes
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from fastapi.responses import FileResponse
from pydantic import BaseModel, Field

from providers.llm.gemini import DEFAULT_MIME_TYPE
from services.api.app.core.dependencies import get_workspace
from services.api.app.core.security import verify_api_key
from services.api.app.core.workspace import Workspace

router = APIRouter()


class MediaView(BaseModel):
    filename: str
    mime_type: str
    size: int
    url: str
    warning: Optional[str] = None


class PlaybackView(BaseModel):
    current_time: float
    paused: bool
    active_index: Optional[int] = None


class TimeUpdateReq(BaseModel):
    current_time: float = Field(ge=0)
    paused: bool = False


class SeekReq(BaseModel):
    seconds: float = Field(ge=0)


def _playback(ws: Workspace) -> PlaybackView:
    pb = ws.media.playback
    return PlaybackView(current_time=pb.current_time, paused=pb.paused, active_index=ws.active_index)


@router.post("/media", response_model=MediaView, dependencies=[Depends(verify_api_key)])
def upload_media(file: UploadFile = File(...), ws: Workspace = Depends(get_workspace)):
    filename = file.filename or "video"
    mime_type = file.content_type
    if not mime_type or mime_type == "application/octet-stream":
        mime_type = mimetypes.guess_type(filename)[0] or DEFAULT_MIME_TYPE
    if not mime_type.startswith("video/"):
        raise HTTPException(status.HTTP_415_UNSUPPORTED_MEDIA_TYPE, f"Not a video file: {mime_type}")

    locator = ws.select_file(file.file.read(), filename, mime_type)
    return MediaView(
        filename=locator.filename,
        mime_type=locator.mime_type,
        size=locator.size,
        url=locator.url,
        warning=ws.warning,
    )


@router.delete("/media", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(verify_api_key)])
def remove_media(ws: Workspace = Depends(get_workspace)):
    ws.remove_file()


@router.get("/media/{token}")
def stream_media(token: str, ws: Workspace = Depends(get_workspace)):
    locator = ws.media.resolve(token)
    if locator is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Media not found")
    return FileResponse(
        locator.path,
        media_type=locator.mime_type,
        filename=locator.filename,
        content_disposition_type="inline",
    )


@router.get("/playback", response_model=PlaybackView, dependencies=[Depends(verify_api_key)])
def get_playback(ws: Workspace = Depends(get_workspace)):
    return _playback(ws)


@router.post("/playback/time", response_model=PlaybackView, dependencies=[Depends(verify_api_key)])
def time_update(req: TimeUpdateReq, ws: Workspace = Depends(get_workspace)):
    ws.media.report_time(req.current_time, paused=req.paused)
    return _playback(ws)


@router.post("/playback/seek", response_model=PlaybackView, dependencies=[Depends(verify_api_key)])
def seek(req: SeekReq, ws: Workspace = Depends(get_workspace)):
    ws.media.seek_to(req.seconds)
    return _playback(ws)
