# -*- coding: utf-8 -*-
"""
===========================================================
Gemini Shot Analyzer - 视频镜头拆解（双语 CN/EN）
===========================================================

功能:
    - 把上传的视频（inline bytes + MIME）与固定指令一起发给 Gemini
    - 使用 JSON 结构化输出（response_schema）约束返回为镜头数组
    - 解码为有序的 ShotAnalysis 列表，id 为数组下标（从 0 开始）
    - 可选 base_url：走自定义网关 / 代理

约定:
    - 不重试、不设超时、不保留部分结果：要么整体成功，要么整体失败
    - 所有失败统一抛 AnalysisError（message + kind）

依赖:
    pip install -U google-genai python-dotenv

环境变量(.env):
    API_KEY / GOOGLE_API_KEY : 默认 Gemini API key（可在运行时覆盖）

===========================================================
"""
import json
import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from dotenv import load_dotenv
from google import genai
from google.genai import types
from pydantic import ValidationError

from providers.llm.shot_prompts import SHOT_BREAKDOWN_PROMPT, SYSTEM_INSTRUCTION
from schemas.shot import SHOT_ANALYSIS_SCHEMA, ShotAnalysis

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_MIME_TYPE = "video/mp4"


class AnalysisErrorKind(str, Enum):
    CREDENTIAL_MISSING = "credential_missing"
    VIDEO_MISSING = "video_missing"
    UPSTREAM = "upstream"
    EMPTY_RESPONSE = "empty_response"
    DECODE = "decode"


class AnalysisError(Exception):
    def __init__(self, message: str, kind: AnalysisErrorKind):
        super().__init__(message)
        self.message = message
        self.kind = kind


# ---- JSON Schema 构建器（支持 description / properties / items）----
TYPE_MAP = {
    "string": types.Type.STRING,
    "number": types.Type.NUMBER,
    "integer": types.Type.INTEGER,
    "boolean": types.Type.BOOLEAN,
    "array": types.Type.ARRAY,
    "object": types.Type.OBJECT,
}


def build_schema_from_dict(schema_dict: Dict[str, Any]) -> types.Schema:
    if not isinstance(schema_dict, dict):
        raise ValueError("schema must be a dict")
    t = schema_dict.get("type")
    t_enum = t if isinstance(t, types.Type) else TYPE_MAP.get(str(t).lower())
    if t_enum is None:
        raise ValueError(f"Unsupported schema type: {t}")

    kwargs: Dict[str, Any] = {"type": t_enum}
    if "description" in schema_dict:
        kwargs["description"] = schema_dict["description"]

    if t_enum == types.Type.OBJECT:
        props = schema_dict.get("properties") or {}
        kwargs["properties"] = {k: build_schema_from_dict(v) for k, v in props.items()}
        if "required" in schema_dict:
            kwargs["required"] = list(schema_dict["required"])

    if t_enum == types.Type.ARRAY:
        items = schema_dict.get("items")
        if items:
            kwargs["items"] = build_schema_from_dict(items)

    return types.Schema(**kwargs)


def _extract_text(resp) -> str:
    """
    先拿 resp.text；为空时从 candidates[0].content.parts 拼接 text。
    """
    txt = getattr(resp, "text", "") or ""
    if txt.strip():
        return txt

    cands = getattr(resp, "candidates", None)
    if not cands:
        return ""
    content = getattr(cands[0], "content", None)
    parts = getattr(content, "parts", None) if content else None
    buf = []
    for p in parts or []:
        # google-genai 的 part 可能是对象也可能是 dict
        t = getattr(p, "text", None)
        if t is None and isinstance(p, dict):
            t = p.get("text")
        if t:
            buf.append(t)
    return "".join(buf)


def decode_shots(text: str) -> List[ShotAnalysis]:
    """把模型返回的 JSON 文本解码为 ShotAnalysis 列表，id 按数组位置分配。"""
    if not text or not text.strip():
        raise AnalysisError("No response received from model.", AnalysisErrorKind.EMPTY_RESPONSE)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise AnalysisError(
            f"Failed to parse model response as JSON: {e}", AnalysisErrorKind.DECODE
        ) from e
    if not isinstance(data, list):
        raise AnalysisError(
            f"Expected a JSON array of shots, got {type(data).__name__}.",
            AnalysisErrorKind.DECODE,
        )

    shots: List[ShotAnalysis] = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise AnalysisError(
                f"Shot #{index} is not a JSON object.", AnalysisErrorKind.DECODE
            )
        try:
            shots.append(ShotAnalysis.model_validate({**item, "id": index}))
        except ValidationError as e:
            raise AnalysisError(
                f"Shot #{index} does not match the expected shape: {e.error_count()} error(s).",
                AnalysisErrorKind.DECODE,
            ) from e
    return shots


def make_client(api_key: str, base_url: Optional[str] = None) -> genai.Client:
    http_options = types.HttpOptions(base_url=base_url) if base_url else None
    return genai.Client(api_key=api_key, http_options=http_options)


class GeminiShotAnalyzer:
    def __init__(
        self,
        client_factory: Callable[[str, Optional[str]], Any] = make_client,
        prompt: str = SHOT_BREAKDOWN_PROMPT,
        system_instruction: str = SYSTEM_INSTRUCTION,
    ):
        self.client_factory = client_factory
        self.prompt = prompt
        self.system_instruction = system_instruction
        self.response_schema = build_schema_from_dict(SHOT_ANALYSIS_SCHEMA)

    def _config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=self.response_schema,
            system_instruction=self.system_instruction,
        )

    def analyze(
        self,
        api_key: str,
        model_name: str,
        video: bytes,
        mime_type: Optional[str] = None,
        base_url: Optional[str] = None,
    ) -> List[ShotAnalysis]:
        if not api_key:
            raise AnalysisError("API Key is required", AnalysisErrorKind.CREDENTIAL_MISSING)
        if not video:
            raise AnalysisError("A video file is required", AnalysisErrorKind.VIDEO_MISSING)

        model = model_name or DEFAULT_MODEL
        video_part = types.Part(
            inline_data=types.Blob(data=video, mime_type=mime_type or DEFAULT_MIME_TYPE)
        )
        contents = [
            types.Content(
                role="user",
                parts=[video_part, types.Part.from_text(text=self.prompt)],
            )
        ]

        logger.info("analyze: model=%s bytes=%d base_url=%s", model, len(video), base_url or "-")
        try:
            client = self.client_factory(api_key, base_url or None)
            resp = client.models.generate_content(
                model=model, contents=contents, config=self._config()
            )
        except Exception as e:
            logger.error("Analysis Error: %s", e)
            raise AnalysisError(
                str(e) or "Failed to analyze video. Check your API Key, Model Name, or Base URL.",
                AnalysisErrorKind.UPSTREAM,
            ) from e

        shots = decode_shots(_extract_text(resp))
        logger.info("analyze: %d shots from %s", len(shots), model)
        return shots
