# services/api/app/core/cards.py
"""
镜头卡片的局部状态：每张卡片独立的语言切换与"已复制"计时。
卡片之间互不影响，随分析结果整体重建。
"""
import time
from typing import Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from schemas.shot import Language, ShotAnalysis

Clock = Callable[[], float]

LABELS: Dict[Language, Dict[str, str]] = {
    Language.EN: {
        "visual": "Visual Description",
        "composition": "Composition",
        "lighting": "Lighting",
        "prompt": "AI Prompt",
        "copy": "Copy Prompt",
        "copied": "Copied!",
    },
    Language.ZH: {
        "visual": "画面描述",
        "composition": "构图镜头",
        "lighting": "光影布局",
        "prompt": "AI 提示词",
        "copy": "复制提示词",
        "copied": "已复制!",
    },
}


class CardState:
    def __init__(self, language: Language = Language.ZH):
        self.language = language
        self.copied_until: Optional[float] = None

    def is_copied(self, now: float) -> bool:
        return self.copied_until is not None and now < self.copied_until


class ShotCardView(BaseModel):
    # 与 ShotAnalysis 线上字段名一致
    model_config = ConfigDict(populate_by_name=True)

    id: int
    timestamp: str
    start_time_seconds: float = Field(alias="startTimeSeconds")
    language: Language
    description: str
    prompt: str
    composition: str
    lighting: str
    labels: Dict[str, str]
    copied: bool
    active: bool


class CardBoard:
    def __init__(self, confirm_seconds: float = 2.0, clock: Clock = time.monotonic):
        self.confirm_seconds = confirm_seconds
        self.clock = clock
        self._states: Dict[int, CardState] = {}

    def reset(self, shots: List[ShotAnalysis]) -> None:
        self._states = {shot.id: CardState() for shot in shots}

    def state(self, shot_id: int) -> CardState:
        return self._states.setdefault(shot_id, CardState())

    def set_language(self, shot_id: int, language: Language) -> CardState:
        card = self.state(shot_id)
        card.language = language
        return card

    def copy_prompt(self, shot: ShotAnalysis) -> str:
        """返回当前语言的提示词，并让该卡片进入 confirm_seconds 的"已复制"状态。"""
        card = self.state(shot.id)
        card.copied_until = self.clock() + self.confirm_seconds
        return shot.localized(card.language)["prompt"]

    def render(self, shot: ShotAnalysis, active: bool) -> ShotCardView:
        card = self.state(shot.id)
        return ShotCardView(
            id=shot.id,
            timestamp=shot.timestamp,
            start_time_seconds=shot.start_time_seconds,
            language=card.language,
            labels=LABELS[card.language],
            copied=card.is_copied(self.clock()),
            active=active,
            **shot.localized(card.language),
        )
