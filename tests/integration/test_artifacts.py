import webbrowser

import pytest

from core.artifacts import Disposition, deliver_document, transient_artifact

DOCUMENT = "<!DOCTYPE html><html><body>摘要</body></html>"


def wait_released(artifact):
    artifact.release_timer.join(timeout=5)
    return artifact.released


def test_opens_in_browser_when_allowed(tmp_path, fake_opener_factory):
    opener = fake_opener_factory(accept=True)

    result = deliver_document(DOCUMENT, download_dir=tmp_path, release_delay=0, opener=opener)

    assert result.disposition is Disposition.OPENED
    assert opener.opened == [result.location]
    assert result.location.startswith("file://")
    assert not (tmp_path / "article-summary.html").exists()
    assert wait_released(result.artifact)


def test_downloads_when_browser_refuses(tmp_path, fake_opener_factory):
    result = deliver_document(DOCUMENT, download_dir=tmp_path, release_delay=0, opener=fake_opener_factory(False))

    target = tmp_path / "article-summary.html"
    assert result.disposition is Disposition.DOWNLOADED
    assert result.location == str(target)
    assert target.read_text(encoding="utf-8") == DOCUMENT
    assert wait_released(result.artifact)


def test_downloads_when_browser_errors(tmp_path):
    def broken_opener(uri):
        raise webbrowser.Error("no runnable browser")

    result = deliver_document(DOCUMENT, download_dir=tmp_path, release_delay=0, opener=broken_opener)

    assert result.disposition is Disposition.DOWNLOADED
    assert wait_released(result.artifact)


def test_no_open_goes_straight_to_download(tmp_path, fake_opener_factory):
    opener = fake_opener_factory(True)

    result = deliver_document(DOCUMENT, open_in_browser=False, download_dir=tmp_path / "nested", release_delay=0,
                              opener=opener)

    assert result.disposition is Disposition.DOWNLOADED
    assert opener.opened == []
    assert (tmp_path / "nested" / "article-summary.html").exists()


def test_transient_artifact_released_on_error():
    with pytest.raises(RuntimeError):
        with transient_artifact(DOCUMENT, release_delay=0) as artifact:
            assert artifact.path.read_text(encoding="utf-8") == DOCUMENT
            raise RuntimeError("display failed")

    assert wait_released(artifact)


def test_release_waits_for_delay():
    with transient_artifact(DOCUMENT, release_delay=30) as artifact:
        pass

    try:
        assert artifact.path.exists()
    finally:
        artifact.release_timer.cancel()
        artifact.release()

    assert artifact.released
    # Releasing twice is harmless
    artifact.release()
