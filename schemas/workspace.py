from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AppStatus(str, Enum):
    IDLE = "IDLE"
    UPLOADING = "UPLOADING"
    ANALYZING = "ANALYZING"
    COMPLETE = "COMPLETE"
    ERROR = "ERROR"


class ModelConfig(BaseModel):
    """会话内的模型配置（设置面板可改）。"""
    model_config = ConfigDict(protected_namespaces=())

    api_key: str = ""
    model_name: str = "gemini-2.5-flash"
    base_url: Optional[str] = None  # 自定义网关 / 代理地址


class PlaybackState(BaseModel):
    current_time: float = Field(default=0.0, ge=0)
    paused: bool = True
