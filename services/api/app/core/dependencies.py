# services/api/app/core/dependencies.py

from typing import Optional

from providers.llm.gemini import GeminiShotAnalyzer

from .config import settings
from .workspace import Workspace

_workspace: Optional[Workspace] = None
_analyzer: Optional[GeminiShotAnalyzer] = None


def get_workspace() -> Workspace:
    """进程内唯一的会话工作区（首次使用时按 settings 创建）。"""
    global _workspace
    if _workspace is None:
        _workspace = Workspace.from_settings(settings)
    return _workspace


def get_analyzer() -> GeminiShotAnalyzer:
    global _analyzer
    if _analyzer is None:
        _analyzer = GeminiShotAnalyzer()
    return _analyzer


def close_workspace() -> None:
    global _workspace
    if _workspace is not None:
        _workspace.close()
        _workspace = None
