from PIL import Image

from prizewheel.graphics.emblem import AssetState, EmblemAsset
from prizewheel.wheel.component import WheelOptions


def write_png(path, color=(255, 0, 0, 255), size=(12, 8)):
    Image.new("RGBA", size, color).save(path)
    return path


def test_emblem_loads_on_next_frame(scheduler, tmp_path):
    states = []
    asset = EmblemAsset(scheduler, on_change=states.append)
    assert asset.state == AssetState.NOT_REQUESTED

    assert asset.request(write_png(tmp_path / "logo.png"))
    assert asset.state == AssetState.LOADING
    assert asset.image is None

    scheduler.advance(16)
    assert asset.state == AssetState.READY
    assert asset.image.size == (12, 8)
    assert states == [AssetState.LOADING, AssetState.READY]


def test_emblem_missing_file_fails(scheduler, tmp_path):
    asset = EmblemAsset(scheduler)
    asset.request(tmp_path / "missing.png")
    scheduler.advance(16)
    assert asset.state == AssetState.FAILED
    assert isinstance(asset.error, OSError)
    assert asset.image is None


def test_emblem_garbage_file_fails(scheduler, tmp_path):
    path = tmp_path / "logo.png"
    path.write_bytes(b"not an image")
    asset = EmblemAsset(scheduler)
    asset.request(path)
    scheduler.advance(16)
    assert asset.state == AssetState.FAILED


def test_emblem_terminal_state_is_final(scheduler):
    states = []
    asset = EmblemAsset(scheduler, on_change=states.append)
    asset.request("host-managed.png", load=False)
    asset.fail(OSError("offline"))
    asset.resolve(Image.new("RGBA", (4, 4)))
    asset.fail(OSError("again"))

    assert asset.state == AssetState.FAILED
    assert states == [AssetState.LOADING, AssetState.FAILED]
    assert not asset.request("other.png")
    assert scheduler.pending == 0


def test_wheel_redraws_on_emblem_transitions(make_wheel, scheduler, tmp_path, monkeypatch):
    path = write_png(tmp_path / "logo.png")
    wheel = make_wheel(WheelOptions(emblem_source=path))
    assert wheel.asset_state == AssetState.LOADING

    calls = []
    original = wheel.renderer.render
    monkeypatch.setattr(wheel.renderer, "render", lambda *a, **kw: (calls.append(kw.get("emblem")), original(*a, **kw)))

    scheduler.advance(16)
    assert wheel.asset_state == AssetState.READY
    assert len(calls) == 1
    assert calls[0] is not None
