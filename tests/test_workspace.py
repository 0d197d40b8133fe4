import pytest

from providers.llm.gemini import AnalysisError, AnalysisErrorKind
from schemas.workspace import AppStatus
from services.api.app.core.exceptions import AnalysisBusyError, MediaStoreError


def test_large_file_warning_is_advisory(workspace):
    workspace.large_file_bytes = 10
    workspace.select_file(b"x" * 11, "big.mp4", "video/mp4")
    assert "larger than" in workspace.warning
    assert workspace.status == AppStatus.IDLE
    assert workspace.media.locator is not None

    workspace.select_file(b"x" * 5, "small.mp4", "video/mp4")
    assert workspace.warning is None


def test_analyze_then_track_playback(workspace, analyzer):
    workspace.select_file(b"video", "clip.mp4", "video/mp4")
    shots = workspace.analyze(analyzer)
    assert workspace.status == AppStatus.COMPLETE
    assert [s.id for s in shots] == [0, 1, 2]

    workspace.media.report_time(7)
    assert workspace.active_index == 1
    workspace.media.report_time(12)
    assert workspace.active_index == 2

    state = workspace.seek_to_shot(0)
    assert state.current_time == 0
    assert state.paused is True
    assert workspace.active_index == 0


def test_missing_credential_surfaces_without_network(workspace, analyzer, fake_genai):
    workspace.update_config(api_key="")
    workspace.select_file(b"video", "clip.mp4", "video/mp4")
    with pytest.raises(AnalysisError) as ei:
        workspace.analyze(analyzer)
    assert ei.value.kind == AnalysisErrorKind.CREDENTIAL_MISSING
    assert workspace.status == AppStatus.ERROR
    assert workspace.error == "Please enter an API Key in settings."
    assert fake_genai.calls == []


def test_failed_analysis_keeps_previous_results(workspace, analyzer, fake_genai):
    workspace.select_file(b"video", "clip.mp4", "video/mp4")
    previous = workspace.analyze(analyzer)

    fake_genai.text = "{broken"
    with pytest.raises(AnalysisError) as ei:
        workspace.analyze(analyzer)
    assert ei.value.kind == AnalysisErrorKind.DECODE
    assert workspace.status == AppStatus.ERROR
    assert workspace.shots == previous

    fake_genai.text = "[]"
    workspace.analyze(analyzer)
    assert workspace.shots == []
    assert workspace.status == AppStatus.COMPLETE


def test_concurrent_analyze_refused(workspace, analyzer):
    workspace.select_file(b"video", "clip.mp4", "video/mp4")
    workspace._analyze_lock.acquire()
    try:
        with pytest.raises(AnalysisBusyError):
            workspace.analyze(analyzer)
    finally:
        workspace._analyze_lock.release()


def test_new_file_clears_results(workspace, analyzer):
    first = workspace.select_file(b"video", "clip.mp4", "video/mp4")
    workspace.analyze(analyzer)

    workspace.select_file(b"other", "next.mp4", "video/mp4")
    assert workspace.shots == []
    assert not first.path.exists()

    workspace.remove_file()
    assert workspace.media.locator is None
    assert workspace.status == AppStatus.IDLE


def test_update_config_clears_blank_base_url(workspace):
    workspace.update_config(base_url="https://proxy.example.com")
    assert workspace.config.base_url == "https://proxy.example.com"
    workspace.update_config(base_url="  ")
    assert workspace.config.base_url is None
    assert workspace.config.api_key == "test-key"


def test_results_commit_while_lock_held(workspace, analyzer, monkeypatch):
    workspace.select_file(b"video", "clip.mp4", "video/mp4")
    seen = {}
    commit = workspace._replace_shots

    def spy(shots):
        seen["locked"] = workspace._analyze_lock.locked()
        with pytest.raises(AnalysisBusyError):
            workspace.analyze(analyzer)
        commit(shots)

    monkeypatch.setattr(workspace, "_replace_shots", spy)
    workspace.analyze(analyzer)

    assert seen["locked"] is True
    assert workspace.status == AppStatus.COMPLETE
    assert workspace.error is None
    assert not workspace._analyze_lock.locked()


def test_vanished_video_file_is_terminal_error(workspace, analyzer, fake_genai):
    locator = workspace.select_file(b"video", "clip.mp4", "video/mp4")
    locator.path.unlink()

    with pytest.raises(AnalysisError) as ei:
        workspace.analyze(analyzer)
    assert ei.value.kind == AnalysisErrorKind.VIDEO_MISSING
    assert workspace.status == AppStatus.ERROR
    assert fake_genai.calls == []

    workspace.select_file(b"video", "clip.mp4", "video/mp4")
    workspace.analyze(analyzer)
    assert workspace.status == AppStatus.COMPLETE


def test_failed_media_store_sets_error(workspace, monkeypatch):
    def broken_load(data, filename, mime_type):
        raise OSError("No space left on device")

    monkeypatch.setattr(workspace.media, "load", broken_load)
    with pytest.raises(MediaStoreError):
        workspace.select_file(b"video", "clip.mp4", "video/mp4")
    assert workspace.status == AppStatus.ERROR
    assert "No space left on device" in workspace.error
