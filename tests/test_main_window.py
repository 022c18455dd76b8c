import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
QtWidgets = pytest.importorskip("PySide6.QtWidgets")

from irishub.icons import IconCatalog  # noqa: E402
from irishub.main_window import MainWindow  # noqa: E402
from irishub.manager import ProcessManager  # noqa: E402
from irishub.settings import Settings  # noqa: E402
from irishub.tile_widget import TileVisual  # noqa: E402
from tests.fakes import FakeTerminator, make_app  # noqa: E402


@pytest.fixture(scope="module")
def qapp():
    return QtWidgets.QApplication.instance() or QtWidgets.QApplication([])


@pytest.fixture
def window(qapp, store, registry, launcher, workdir, tmp_path):
    for app_id in ("a", "b", "c"):
        store.save(make_app(app_id, workdir))
    manager = ProcessManager(store, registry=registry, launcher=launcher, terminator=FakeTerminator())
    settings = Settings(config_dir=tmp_path, poll_interval_ms=60000)
    w = MainWindow(settings, store, manager, IconCatalog(tmp_path / "icons"))
    yield w
    w.poll_timer.stop()
    w.close()


def test_tiles_follow_config_order(window):
    assert window.tiles.keys_in_order() == ["a", "b", "c"]
    assert window.footer.text().startswith("0 running / 3 apps")


def test_reorder_is_saved_without_rebuilding_the_list(window, store, monkeypatch):
    rebuilds = []
    monkeypatch.setattr(window, "refresh", lambda: rebuilds.append("refresh"))
    monkeypatch.setattr(window, "rebuild_tiles", lambda: rebuilds.append("rebuild"))

    item = window.tiles.takeItem(2)
    window.tiles.insertItem(0, item)
    window.persist_order_from_ui()

    assert [a.id for a in store.load_all()] == ["c", "a", "b"]
    assert window.tiles.count() == 3
    assert rebuilds == []


def test_starting_app_is_shown_as_loading(window):
    window.manager.run("a")
    window.rebuild_tiles()

    assert window.manager.is_loading("a")
    assert "1 running / 3 apps" in window.footer.text()
    assert "1 starting" in window.footer.text()


def test_tile_visual_status():
    assert TileVisual("A").badge == "○ Stopped"
    assert TileVisual("A", running=True).badge == "● Running"
    loading = TileVisual("A", running=True, loading=True)
    assert loading.badge == "◌ Starting…"
    assert loading.bg_color != TileVisual("A", running=True).bg_color
