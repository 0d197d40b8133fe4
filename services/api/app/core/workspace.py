# services/api/app/core/workspace.py
"""
会话工作区：把配置、媒体句柄、分析结果与卡片状态串起来。

状态流转:
    选择文件 -> IDLE -> (analyze) ANALYZING -> COMPLETE | ERROR
失败时保留上一次成功的结果，直到下一次成功整体替换。
"""
import logging
import threading
from pathlib import Path
from typing import List, Optional

from providers.llm.gemini import AnalysisError, AnalysisErrorKind, GeminiShotAnalyzer
from providers.storage.media_store import MediaHandle, MediaLocator
from schemas.shot import ShotAnalysis
from schemas.workspace import AppStatus, ModelConfig, PlaybackState

from .cards import CardBoard
from .config import Settings
from .exceptions import AnalysisBusyError, MediaStoreError, ShotNotFoundError
from .timeline import find_active_index

logger = logging.getLogger(__name__)


class Workspace:
    def __init__(
        self,
        config: Optional[ModelConfig] = None,
        media: Optional[MediaHandle] = None,
        cards: Optional[CardBoard] = None,
        large_file_bytes: int = 50 * 1024 * 1024,
    ):
        self.config = config or ModelConfig()
        self.media = media or MediaHandle()
        self.cards = cards or CardBoard()
        self.large_file_bytes = large_file_bytes

        self.status = AppStatus.IDLE
        self.error: Optional[str] = None
        self.warning: Optional[str] = None
        self.shots: List[ShotAnalysis] = []
        self.active_index: Optional[int] = None

        self._analyze_lock = threading.Lock()
        self.media.on_time_update(self._on_time_update)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Workspace":
        return cls(
            config=ModelConfig(
                api_key=settings.default_api_key,
                model_name=settings.DEFAULT_MODEL,
                base_url=settings.DEFAULT_BASE_URL or None,
            ),
            media=MediaHandle(Path(settings.MEDIA_DIR) if settings.MEDIA_DIR else None),
            cards=CardBoard(confirm_seconds=settings.COPY_CONFIRM_SECONDS),
            large_file_bytes=settings.large_file_warning_bytes,
        )

    # ---------- 配置 ----------
    def update_config(
        self,
        api_key: Optional[str] = None,
        model_name: Optional[str] = None,
        base_url: Optional[str] = None,
    ) -> ModelConfig:
        data = self.config.model_dump()
        if api_key is not None:
            data["api_key"] = api_key.strip()
        if model_name is not None:
            data["model_name"] = model_name.strip()
        if base_url is not None:
            data["base_url"] = base_url.strip() or None
        self.config = ModelConfig(**data)
        return self.config

    # ---------- 文件 ----------
    def select_file(self, data: bytes, filename: str, mime_type: str) -> MediaLocator:
        if len(data) > self.large_file_bytes:
            mb = self.large_file_bytes // (1024 * 1024)
            self.warning = (
                f"Warning: File is larger than {mb}MB. Processing might be slow or fail."
            )
        else:
            self.warning = None

        self.status = AppStatus.UPLOADING
        try:
            locator = self.media.load(data, filename, mime_type)
        except OSError as e:
            logger.error("media load failed: %s", e)
            self.status = AppStatus.ERROR
            self.error = f"Failed to store the uploaded video: {e}"
            raise MediaStoreError(self.error) from e
        self._replace_shots([])
        self.error = None
        self.status = AppStatus.IDLE
        return locator

    def remove_file(self) -> None:
        self.media.release()
        self._replace_shots([])
        self.error = None
        self.warning = None
        self.status = AppStatus.IDLE

    # ---------- 分析 ----------
    def analyze(self, analyzer: GeminiShotAnalyzer) -> List[ShotAnalysis]:
        if not self._analyze_lock.acquire(blocking=False):
            raise AnalysisBusyError()
        try:
            locator = self.media.locator
            if locator is None:
                raise AnalysisError("Please upload a video first.", AnalysisErrorKind.VIDEO_MISSING)
            if not self.config.api_key:
                raise AnalysisError(
                    "Please enter an API Key in settings.", AnalysisErrorKind.CREDENTIAL_MISSING
                )
            try:
                video = self.media.read_bytes()
            except OSError as e:
                raise AnalysisError(
                    f"Uploaded video is no longer available: {e}", AnalysisErrorKind.VIDEO_MISSING
                ) from e

            self.status = AppStatus.ANALYZING
            self.error = None
            shots = analyzer.analyze(
                api_key=self.config.api_key,
                model_name=self.config.model_name,
                video=video,
                mime_type=locator.mime_type,
                base_url=self.config.base_url,
            )
            # 结果在持锁期间提交
            self._replace_shots(shots)
            self.status = AppStatus.COMPLETE
            return shots
        except AnalysisError as e:
            logger.warning("analysis failed (%s): %s", e.kind.value, e.message)
            self.status = AppStatus.ERROR
            self.error = e.message
            raise
        finally:
            self._analyze_lock.release()

    def _replace_shots(self, shots: List[ShotAnalysis]) -> None:
        self.shots = list(shots)
        self.cards.reset(self.shots)
        self.active_index = find_active_index(self.shots, self.media.playback.current_time)

    # ---------- 播放 ----------
    def _on_time_update(self, seconds: float) -> None:
        self.active_index = find_active_index(self.shots, seconds)

    def shot(self, shot_id: int) -> ShotAnalysis:
        if 0 <= shot_id < len(self.shots):
            return self.shots[shot_id]
        raise ShotNotFoundError(shot_id)

    def seek_to_shot(self, shot_id: int) -> PlaybackState:
        return self.media.seek_to(self.shot(shot_id).start_time_seconds)

    def close(self) -> None:
        self.media.close()
