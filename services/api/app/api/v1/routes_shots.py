from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from schemas.shot import Language
from services.api.app.core.cards import ShotCardView
from services.api.app.core.dependencies import get_workspace
from services.api.app.core.security import verify_api_key
from services.api.app.core.workspace import Workspace

router = APIRouter(prefix="/shots", dependencies=[Depends(verify_api_key)])


class LanguageReq(BaseModel):
    language: Language


class CopyResp(BaseModel):
    id: int
    language: Language
    text: str
    copied: bool


class SeekResp(BaseModel):
    current_time: float
    paused: bool
    active_index: int | None = None


def _card(ws: Workspace, shot_id: int) -> ShotCardView:
    return ws.cards.render(ws.shot(shot_id), active=ws.active_index == shot_id)


@router.get("", response_model=List[ShotCardView])
def list_shots(ws: Workspace = Depends(get_workspace)):
    return [_card(ws, shot.id) for shot in ws.shots]


@router.get("/{shot_id}", response_model=ShotCardView)
def get_shot(shot_id: int, ws: Workspace = Depends(get_workspace)):
    return _card(ws, shot_id)


@router.put("/{shot_id}/language", response_model=ShotCardView)
def set_language(shot_id: int, req: LanguageReq, ws: Workspace = Depends(get_workspace)):
    ws.shot(shot_id)
    ws.cards.set_language(shot_id, req.language)
    return _card(ws, shot_id)


@router.post("/{shot_id}/copy", response_model=CopyResp)
def copy_prompt(shot_id: int, ws: Workspace = Depends(get_workspace)):
    """返回当前语言的提示词供前端写入剪贴板；该卡片进入短暂的"已复制"状态。"""
    shot = ws.shot(shot_id)
    text = ws.cards.copy_prompt(shot)
    return CopyResp(id=shot_id, language=ws.cards.state(shot_id).language, text=text, copied=True)


@router.post("/{shot_id}/seek", response_model=SeekResp)
def seek_to_shot(shot_id: int, ws: Workspace = Depends(get_workspace)):
    pb = ws.seek_to_shot(shot_id)
    return SeekResp(current_time=pb.current_time, paused=pb.paused, active_index=ws.active_index)
