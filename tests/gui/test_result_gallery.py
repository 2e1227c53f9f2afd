"""Tests for the slice preview gallery."""

from pathlib import Path

import pytest

pytest.importorskip("PySide6.QtWidgets", reason="Qt widgets not available", exc_type=ImportError)

from PySide6.QtTest import QSignalSpy  # noqa: E402

from quadsplit.core.cuts import Axis  # noqa: E402
from quadsplit.core.rasterizer import SliceRasterizer  # noqa: E402
from quadsplit.core.source import SourceImage  # noqa: E402
from quadsplit.gui.widgets.result_gallery import ResultGallery  # noqa: E402


@pytest.fixture
def results(striped_image):
    source = SourceImage.from_qimage(striped_image(80, 40))
    return SliceRasterizer().rasterize(source, Axis.ACROSS, (0.25, 0.5, 0.75))


def test_set_results_builds_numbered_cards(qtbot, results):
    gallery = ResultGallery()
    qtbot.addWidget(gallery)

    gallery.set_results(results)

    assert gallery.card_count() == 4
    assert [gallery.card(i).number_label.text() for i in range(4)] == ["1", "2", "3", "4"]
    assert gallery.card(0).preview.pixmap() is not None
    assert gallery.save_all_button.isEnabled()


def test_empty_results_hide_gallery(qtbot, results):
    gallery = ResultGallery()
    qtbot.addWidget(gallery)
    gallery.set_results(results)

    gallery.set_results(())

    assert gallery.card_count() == 0
    assert gallery.isHidden()
    assert not gallery.save_all_button.isEnabled()


def test_card_save_button_writes_slice(qtbot, tmp_path: Path, results):
    requested = []

    def target(filename):
        requested.append(filename)
        return tmp_path / filename

    gallery = ResultGallery(save_target_provider=target)
    qtbot.addWidget(gallery)
    gallery.set_results(results)
    saved = QSignalSpy(gallery.sliceSaved)

    gallery.card(2).save_button.click()

    assert requested == ["split_image_3.png"]
    assert (tmp_path / "split_image_3.png").read_bytes() == results[2].data
    assert saved.count() == 1


def test_cancelled_save_writes_nothing(qtbot, tmp_path: Path, results):
    gallery = ResultGallery(save_target_provider=lambda filename: None)
    qtbot.addWidget(gallery)
    gallery.set_results(results)

    assert gallery.save_slice(0) is None
    assert list(tmp_path.iterdir()) == []


def test_save_unknown_index_is_ignored(qtbot, results):
    gallery = ResultGallery(save_target_provider=lambda filename: pytest.fail("not asked"))
    qtbot.addWidget(gallery)
    gallery.set_results(results)

    assert gallery.save_slice(9) is None


def test_save_all_writes_every_slice(qtbot, tmp_path: Path, results):
    gallery = ResultGallery(directory_provider=lambda: tmp_path)
    qtbot.addWidget(gallery)
    gallery.set_results(results)

    paths = gallery.save_all()

    assert sorted(p.name for p in paths) == [f"split_image_{n}.png" for n in range(1, 5)]


def test_save_failure_is_reported(qtbot, tmp_path: Path, results):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    gallery = ResultGallery(save_target_provider=lambda filename: blocker / filename)
    qtbot.addWidget(gallery)
    gallery.set_results(results)
    failed = QSignalSpy(gallery.saveFailed)

    assert gallery.save_slice(1) is None
    assert failed.count() == 1
