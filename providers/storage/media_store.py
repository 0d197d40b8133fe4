# -*- coding: utf-8 -*-
"""
视频媒体句柄（本地临时文件）
- load：写入临时文件并生成一次性 token（浏览器通过 /api/v1/media/<token> 播放）
- 同一时刻只持有一个 token；替换或关闭时必定释放旧文件
- 播放位置由浏览器 timeupdate 上报，seek 会暂停（定格画面）
"""
import logging
import tempfile
import uuid
from pathlib import Path
from typing import Callable, List, Optional

from pydantic import BaseModel

from schemas.workspace import PlaybackState

logger = logging.getLogger(__name__)

MEDIA_URL_PREFIX = "/api/v1/media"

TimeListener = Callable[[float], None]


class MediaLocator(BaseModel):
    token: str
    filename: str
    mime_type: str
    size: int
    path: Path

    @property
    def url(self) -> str:
        return f"{MEDIA_URL_PREFIX}/{self.token}"


class MediaHandle:
    def __init__(self, root: Optional[Path] = None):
        self.root = Path(root) if root else Path(tempfile.gettempdir()) / "cineprompt_media"
        self.locator: Optional[MediaLocator] = None
        self.playback = PlaybackState()
        self._listeners: List[TimeListener] = []

    # ---------- 资源获取 / 释放 ----------
    def load(self, data: bytes, filename: str, mime_type: str) -> MediaLocator:
        self.release()
        self.root.mkdir(parents=True, exist_ok=True)
        token = uuid.uuid4().hex
        path = self.root / f"{token}{Path(filename).suffix.lower()}"
        path.write_bytes(data)
        self.locator = MediaLocator(
            token=token, filename=filename, mime_type=mime_type, size=len(data), path=path
        )
        self.playback = PlaybackState()
        logger.info("media loaded: %s (%d bytes) -> %s", filename, len(data), token)
        return self.locator

    def release(self) -> None:
        if self.locator is None:
            return
        self.locator.path.unlink(missing_ok=True)
        logger.info("media released: %s", self.locator.token)
        self.locator = None
        self.playback = PlaybackState()

    def close(self) -> None:
        self.release()
        self._listeners.clear()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def resolve(self, token: str) -> Optional[MediaLocator]:
        """只解析当前 token；已释放的旧 token 返回 None。"""
        if self.locator is not None and self.locator.token == token:
            return self.locator
        return None

    def read_bytes(self) -> bytes:
        if self.locator is None:
            return b""
        return self.locator.path.read_bytes()

    # ---------- 播放控制 ----------
    def seek_to(self, seconds: float) -> PlaybackState:
        if seconds < 0:
            raise ValueError("seek position must be non-negative")
        self.playback = PlaybackState(current_time=seconds, paused=True)
        self._notify(seconds)
        return self.playback

    def _notify(self, seconds: float) -> None:
        for listener in list(self._listeners):
            listener(seconds)

    def on_time_update(self, callback: TimeListener) -> Callable[[], None]:
        self._listeners.append(callback)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def report_time(self, seconds: float, paused: bool = False) -> PlaybackState:
        if seconds < 0:
            raise ValueError("playback position must be non-negative")
        self.playback = PlaybackState(current_time=seconds, paused=paused)
        self._notify(seconds)
        return self.playback
