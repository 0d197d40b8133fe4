from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict

from providers.llm.gemini import GeminiShotAnalyzer
from schemas.workspace import AppStatus
from services.api.app.core.dependencies import get_analyzer, get_workspace
from services.api.app.core.security import verify_api_key
from services.api.app.core.workspace import Workspace

router = APIRouter()


class StatusView(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    status: AppStatus
    error: Optional[str] = None
    warning: Optional[str] = None
    filename: Optional[str] = None
    model_name: str
    shot_count: int


class AnalyzeResp(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    status: AppStatus
    model_name: str
    shots: List[Dict[str, Any]]


@router.post("/analyze", response_model=AnalyzeResp, dependencies=[Depends(verify_api_key)])
def analyze(
    ws: Workspace = Depends(get_workspace),
    analyzer: GeminiShotAnalyzer = Depends(get_analyzer),
):
    """
    用当前配置与已上传的视频做一次镜头拆解。
    同一时刻只允许一个请求（否则 409）；失败时保留上一次结果。
    """
    shots = ws.analyze(analyzer)
    return AnalyzeResp(
        status=ws.status,
        model_name=ws.config.model_name,
        shots=[s.model_dump(by_alias=True) for s in shots],
    )


@router.get("/status", response_model=StatusView, dependencies=[Depends(verify_api_key)])
def get_status(ws: Workspace = Depends(get_workspace)):
    locator = ws.media.locator
    return StatusView(
        status=ws.status,
        error=ws.error,
        warning=ws.warning,
        filename=locator.filename if locator else None,
        model_name=ws.config.model_name,
        shot_count=len(ws.shots),
    )
