# services/api/app/core/config.py

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """
    统一管理项目的所有配置。
    使用 pydantic-settings，这个类会自动从环境变量或 .env 文件中读取配置。
    """

    # -------------------------------------------------------------------------
    # App 基础配置 (Basic App Settings)
    # -------------------------------------------------------------------------
    APP_NAME: str = "CinePrompt"
    APP_ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # API服务的监听主机和端口 (主要用于Uvicorn命令行，但放在这里保持一致性)
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # -------------------------------------------------------------------------
    # 安全配置 (Security Settings)
    # -------------------------------------------------------------------------
    # 为空时不校验 X-API-Key（本地单人使用）
    SERVICE_API_KEY: Optional[str] = None
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # -------------------------------------------------------------------------
    # 模型默认值 (Model Defaults)
    # -------------------------------------------------------------------------
    # 会话开始时的默认凭证，用户可在设置面板覆盖
    API_KEY: Optional[str] = None
    GOOGLE_API_KEY: Optional[str] = None
    DEFAULT_MODEL: str = "gemini-2.5-flash"
    DEFAULT_BASE_URL: Optional[str] = None

    # -------------------------------------------------------------------------
    # 媒体与界面 (Media & UI)
    # -------------------------------------------------------------------------
    LARGE_FILE_WARNING_MB: int = 50      # 超过即提示，不拦截
    COPY_CONFIRM_SECONDS: float = 2.0    # "已复制" 状态持续时间
    MEDIA_DIR: Optional[str] = None      # 临时视频目录，默认系统 tmp

    # Pydantic-settings 的配置类
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding='utf-8', extra='ignore')

    @property
    def default_api_key(self) -> str:
        return self.API_KEY or self.GOOGLE_API_KEY or ""

    @property
    def large_file_warning_bytes(self) -> int:
        return self.LARGE_FILE_WARNING_MB * 1024 * 1024

# 创建一个全局唯一的settings实例
# from services.api.app.core.config import settings
settings = Settings()
