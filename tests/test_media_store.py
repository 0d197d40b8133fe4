import pytest

from providers.storage.media_store import MediaHandle


def test_load_replaces_and_releases_previous(tmp_path):
    media = MediaHandle(tmp_path)
    first = media.load(b"one", "a.mp4", "video/mp4")
    assert first.path.exists()
    assert first.url == f"/api/v1/media/{first.token}"

    second = media.load(b"two", "b.mov", "video/quicktime")
    assert not first.path.exists()
    assert second.path.exists()
    assert media.resolve(first.token) is None
    assert media.resolve(second.token) is second
    assert media.read_bytes() == b"two"


def test_close_releases_locator(tmp_path):
    with MediaHandle(tmp_path) as media:
        loc = media.load(b"data", "clip.mp4", "video/mp4")
    assert not loc.path.exists()
    assert media.locator is None


def test_seek_pauses_and_reads_back(tmp_path):
    media = MediaHandle(tmp_path)
    media.load(b"data", "clip.mp4", "video/mp4")
    media.report_time(3.0)
    assert media.playback.paused is False

    state = media.seek_to(12.5)
    assert state.current_time == 12.5
    assert state.paused is True
    assert media.playback.current_time == 12.5


def test_seek_rejects_negative(tmp_path):
    with pytest.raises(ValueError):
        MediaHandle(tmp_path).seek_to(-1)


def test_time_listeners(tmp_path):
    media = MediaHandle(tmp_path)
    seen = []
    unsubscribe = media.on_time_update(seen.append)

    media.report_time(1.0)
    media.seek_to(4.0)
    unsubscribe()
    media.report_time(9.0)

    assert seen == [1.0, 4.0]
