from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class Language(str, Enum):
    EN = "EN"
    ZH = "ZH"


class ShotAnalysis(BaseModel):
    """
    单个镜头的分析结果。
    一次分析整体生成、整体替换，单条记录不可修改。
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int = Field(ge=0)
    timestamp: str
    start_time_seconds: float = Field(alias="startTimeSeconds", ge=0)

    description_en: str = Field(alias="descriptionEN")
    description_zh: str = Field(alias="descriptionZH")
    ai_prompt_en: str = Field(alias="aiPromptEN")
    ai_prompt_zh: str = Field(alias="aiPromptZH")
    composition_en: str = Field(alias="compositionEN")
    composition_zh: str = Field(alias="compositionZH")
    lighting_en: str = Field(alias="lightingEN")
    lighting_zh: str = Field(alias="lightingZH")

    def localized(self, lang: Language) -> Dict[str, str]:
        suffix = "en" if lang == Language.EN else "zh"
        return {
            "description": getattr(self, f"description_{suffix}"),
            "prompt": getattr(self, f"ai_prompt_{suffix}"),
            "composition": getattr(self, f"composition_{suffix}"),
            "lighting": getattr(self, f"lighting_{suffix}"),
        }


# ---- 结构化输出 Schema（由 providers.llm.gemini.build_schema_from_dict 转换）----
SHOT_ANALYSIS_SCHEMA: Dict[str, Any] = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "timestamp": {
                "type": "string",
                "description": "The start and end time of the shot (e.g., '00:00 - 00:05').",
            },
            "startTimeSeconds": {
                "type": "number",
                "description": "The start time in seconds (e.g., 0, 5.5).",
            },
            "descriptionEN": {
                "type": "string",
                "description": "A brief visual description of the action in English.",
            },
            "descriptionZH": {
                "type": "string",
                "description": "Visual description translated into Chinese (中文).",
            },
            "aiPromptEN": {
                "type": "string",
                "description": "High-quality Midjourney/Stable Diffusion prompt in English.",
            },
            "aiPromptZH": {
                "type": "string",
                "description": "High-quality AI prompt translated into Chinese (suitable for Chinese AI models).",
            },
            "compositionEN": {
                "type": "string",
                "description": "Camera angle and framing notes in English.",
            },
            "compositionZH": {
                "type": "string",
                "description": "Camera angle and framing notes in Chinese.",
            },
            "lightingEN": {
                "type": "string",
                "description": "Lighting description in English.",
            },
            "lightingZH": {
                "type": "string",
                "description": "Lighting description in Chinese.",
            },
        },
        "required": [
            "timestamp", "startTimeSeconds",
            "descriptionEN", "descriptionZH",
            "aiPromptEN", "aiPromptZH",
            "compositionEN", "compositionZH",
            "lightingEN", "lightingZH",
        ],
    },
}
