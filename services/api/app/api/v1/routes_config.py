from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict

from schemas.workspace import ModelConfig
from services.api.app.core.dependencies import get_workspace
from services.api.app.core.security import verify_api_key
from services.api.app.core.workspace import Workspace

router = APIRouter()


class ConfigView(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    api_key_set: bool
    api_key_hint: str
    model_name: str
    base_url: Optional[str] = None


class ConfigUpdate(BaseModel):
    api_key: Optional[str] = None
    model_name: Optional[str] = None
    base_url: Optional[str] = None  # 传空字符串表示清除


def _view(cfg: ModelConfig) -> ConfigView:
    # 凭证不回传明文，只给末 4 位
    hint = f"****{cfg.api_key[-4:]}" if len(cfg.api_key) > 4 else ("****" if cfg.api_key else "")
    return ConfigView(
        api_key_set=bool(cfg.api_key),
        api_key_hint=hint,
        model_name=cfg.model_name,
        base_url=cfg.base_url,
    )


@router.get("/config", response_model=ConfigView, dependencies=[Depends(verify_api_key)])
def get_config(ws: Workspace = Depends(get_workspace)):
    return _view(ws.config)


@router.put("/config", response_model=ConfigView, dependencies=[Depends(verify_api_key)])
def update_config(req: ConfigUpdate, ws: Workspace = Depends(get_workspace)):
    return _view(ws.update_config(**req.model_dump()))
