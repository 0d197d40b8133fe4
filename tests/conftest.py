# tests/conftest.py
import json
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from providers.llm.gemini import GeminiShotAnalyzer
from providers.storage.media_store import MediaHandle
from schemas.shot import ShotAnalysis
from schemas.workspace import ModelConfig
from services.api.app.core.cards import CardBoard
from services.api.app.core.dependencies import get_analyzer, get_workspace
from services.api.app.core.workspace import Workspace
from services.api.app.main import app


def shot_item(start: float, n: int = 0) -> dict:
    """模型返回的单个镜头（线上字段名）。"""
    return {
        "timestamp": f"00:{int(start):02d} - 00:{int(start) + 5:02d}",
        "startTimeSeconds": start,
        "descriptionEN": f"A man walks #{n}",
        "descriptionZH": f"一个男人在走 #{n}",
        "aiPromptEN": f"cinematic shot of a man walking #{n}",
        "aiPromptZH": f"电影感镜头，一个男人在走 #{n}",
        "compositionEN": "wide shot",
        "compositionZH": "远景",
        "lightingEN": "golden hour",
        "lightingZH": "黄金时刻",
    }


def make_shots(starts) -> list[ShotAnalysis]:
    return [
        ShotAnalysis.model_validate({**shot_item(s, i), "id": i})
        for i, s in enumerate(starts)
    ]


class FakeGenAI:
    """替代 genai.Client：记录调用，返回预设文本或抛出预设异常。"""

    def __init__(self):
        self.text = json.dumps([shot_item(0, 0), shot_item(5, 1), shot_item(12, 2)])
        self.exc = None
        self.calls = []
        self.factory_calls = []
        self.models = self

    def factory(self, api_key, base_url=None):
        self.factory_calls.append((api_key, base_url))
        return self

    def generate_content(self, model, contents, config):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.exc is not None:
            raise self.exc
        return SimpleNamespace(text=self.text, candidates=None)


class FakeClock:
    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_genai():
    return FakeGenAI()


@pytest.fixture
def analyzer(fake_genai):
    return GeminiShotAnalyzer(client_factory=fake_genai.factory)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def workspace(tmp_path, clock):
    ws = Workspace(
        config=ModelConfig(api_key="test-key"),
        media=MediaHandle(tmp_path / "media"),
        cards=CardBoard(confirm_seconds=2.0, clock=clock),
    )
    yield ws
    ws.close()


@pytest.fixture
def client(workspace, analyzer):
    app.dependency_overrides[get_workspace] = lambda: workspace
    app.dependency_overrides[get_analyzer] = lambda: analyzer
    yield TestClient(app)
    app.dependency_overrides.clear()
