"""Tests for slice rectangle computation and PNG rasterization."""

import base64
from unittest.mock import MagicMock

import pytest
from PySide6.QtGui import QImage

from quadsplit.core.cuts import Axis
from quadsplit.core.rasterizer import (
    SliceRasterizer,
    compute_slice_rects,
    encode_png,
    segment_boundaries,
    slice_filename,
)
from quadsplit.core.source import SourceImage
from quadsplit.errors import RasterizationUnavailableError

DEFAULT = (0.25, 0.5, 0.75)
PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def test_across_rects_for_default_cuts():
    rects = compute_slice_rects(Axis.ACROSS, DEFAULT, 400, 200)
    assert [r.as_tuple() for r in rects] == [
        (0, 0, 100, 200),
        (100, 0, 100, 200),
        (200, 0, 100, 200),
        (300, 0, 100, 200),
    ]
    assert [r.index for r in rects] == [0, 1, 2, 3]


def test_down_rects_for_default_cuts():
    rects = compute_slice_rects(Axis.DOWN, DEFAULT, 400, 200)
    assert [r.as_tuple() for r in rects] == [
        (0, 0, 400, 50),
        (0, 50, 400, 50),
        (0, 100, 400, 50),
        (0, 150, 400, 50),
    ]


def test_unsorted_cuts_are_sorted_first():
    assert segment_boundaries((0.75, 0.25, 0.5)) == [0.0, 0.25, 0.5, 0.75, 1.0]
    rects = compute_slice_rects(Axis.ACROSS, (0.75, 0.25, 0.5), 400, 200)
    assert [r.as_tuple() for r in rects] == [
        r.as_tuple() for r in compute_slice_rects(Axis.ACROSS, DEFAULT, 400, 200)
    ]


def test_zero_width_segment_is_skipped():
    rects = compute_slice_rects(Axis.ACROSS, (0.5, 0.5, 0.75), 400, 200)
    assert [r.index for r in rects] == [0, 2, 3]
    assert [r.sw for r in rects] == [200, 100, 100]


def test_segments_rounding_to_zero_pixels_are_skipped():
    rects = compute_slice_rects(Axis.ACROSS, DEFAULT, 2, 5)
    assert all(r.sw > 0 and r.sh == 5 for r in rects)
    assert sum(r.sw for r in rects) == 2
    assert len(rects) < 4


def test_empty_image_yields_no_rects():
    assert compute_slice_rects(Axis.ACROSS, DEFAULT, 0, 200) == []
    assert compute_slice_rects(Axis.DOWN, DEFAULT, 400, 0) == []


@pytest.mark.parametrize("axis", [Axis.ACROSS, Axis.DOWN])
@pytest.mark.parametrize(
    "cuts,size",
    [
        ((0.1, 0.2, 0.3), (101, 37)),
        ((0.33, 0.5, 0.9), (1000, 999)),
        ((0.05, 0.5, 0.95), (17, 3001)),
    ],
)
def test_rects_tile_the_image_without_overlap(axis, cuts, size):
    width, height = size
    rects = compute_slice_rects(axis, cuts, width, height)
    position = 0
    for rect in rects:
        start = rect.sx if axis is Axis.ACROSS else rect.sy
        assert start == position
        position += rect.sw if axis is Axis.ACROSS else rect.sh
        assert rect.sx + rect.sw <= width
        assert rect.sy + rect.sh <= height
    assert position == (width if axis is Axis.ACROSS else height)


def test_slice_filename_is_one_based():
    assert slice_filename(0) == "split_image_1.png"
    assert slice_filename(3) == "split_image_4.png"


def test_encode_png_produces_png_bytes(striped_image):
    data = encode_png(striped_image(8, 4))
    assert data.startswith(PNG_SIGNATURE)


def test_rasterize_copies_expected_pixels(striped_image):
    source = SourceImage.from_qimage(striped_image(400, 200), name="stripes")
    results = SliceRasterizer().rasterize(source, Axis.ACROSS, DEFAULT)

    assert len(results) == 4
    expected = ["#ff0000", "#008000", "#0000ff", "#ffff00"]
    for result, colour in zip(results, expected):
        assert (result.width, result.height) == (100, 200)
        assert result.data.startswith(PNG_SIGNATURE)
        decoded = result.to_qimage()
        assert (decoded.width(), decoded.height()) == (100, 200)
        assert decoded.pixelColor(0, 0).name() == colour
        assert decoded.pixelColor(99, 199).name() == colour


def test_rasterize_is_idempotent(striped_image):
    source = SourceImage.from_qimage(striped_image(120, 60, vertical=False))
    rasterizer = SliceRasterizer()
    first = rasterizer.rasterize(source, Axis.DOWN, (0.2, 0.6, 0.8))
    second = rasterizer.rasterize(source, Axis.DOWN, (0.2, 0.6, 0.8))
    assert [r.rect for r in first] == [r.rect for r in second]
    assert [r.data for r in first] == [r.data for r in second]


def test_result_exposes_data_url_and_filename(striped_image):
    source = SourceImage.from_qimage(striped_image(40, 20))
    result = SliceRasterizer().rasterize(source, Axis.ACROSS, DEFAULT)[2]
    assert result.filename == "split_image_3.png"
    prefix = "data:image/png;base64,"
    assert result.data_url.startswith(prefix)
    assert base64.b64decode(result.data_url[len(prefix):]) == result.data


def test_rasterize_null_image_raises():
    source = SourceImage.from_qimage(QImage(), name="broken")
    with pytest.raises(RasterizationUnavailableError):
        SliceRasterizer().rasterize(source, Axis.ACROSS, DEFAULT)


def test_request_runs_immediately_for_ready_source(striped_image):
    source = SourceImage.from_qimage(striped_image(40, 20))
    deliver = MagicMock()
    on_error = MagicMock()
    ran = SliceRasterizer().request(source, lambda: (Axis.ACROSS, DEFAULT), deliver, on_error)
    assert ran
    deliver.assert_called_once()
    assert len(deliver.call_args.args[0]) == 4
    on_error.assert_not_called()


def test_request_on_pending_source_waits_for_decode(striped_image):
    source = SourceImage.pending("later.png")
    deliver = MagicMock()
    rasterizer = SliceRasterizer()
    state = {"axis": Axis.ACROSS}

    ran = rasterizer.request(source, lambda: (state["axis"], DEFAULT), deliver, MagicMock())
    assert not ran
    assert rasterizer.has_pending()
    deliver.assert_not_called()

    # State changes while decoding are picked up when the pass finally runs.
    state["axis"] = Axis.DOWN
    source.resolve(striped_image(40, 20))

    deliver.assert_called_once()
    results = deliver.call_args.args[0]
    assert [r.rect.as_tuple() for r in results][0] == (0, 0, 40, 5)
    assert not rasterizer.has_pending()
    assert source.decoded.handler_count == 0


def test_superseded_request_never_delivers(striped_image):
    source = SourceImage.pending("later.png")
    stale = MagicMock()
    fresh = MagicMock()
    rasterizer = SliceRasterizer()
    rasterizer.request(source, lambda: (Axis.ACROSS, DEFAULT), stale, MagicMock())
    rasterizer.request(source, lambda: (Axis.ACROSS, DEFAULT), fresh, MagicMock())

    source.resolve(striped_image(40, 20))

    stale.assert_not_called()
    fresh.assert_called_once()


def test_cancelled_request_never_delivers(striped_image):
    source = SourceImage.pending("later.png")
    deliver = MagicMock()
    rasterizer = SliceRasterizer()
    rasterizer.request(source, lambda: (Axis.ACROSS, DEFAULT), deliver, MagicMock())
    rasterizer.cancel()
    source.resolve(striped_image(40, 20))
    deliver.assert_not_called()


def test_request_on_failed_source_does_nothing():
    source = SourceImage.pending("bad.png")
    source.fail("corrupt header")
    deliver = MagicMock()
    assert not SliceRasterizer().request(source, lambda: (Axis.ACROSS, DEFAULT), deliver, MagicMock())
    deliver.assert_not_called()


def test_request_reports_failure_through_callback():
    source = SourceImage.from_qimage(QImage(), name="broken")
    deliver = MagicMock()
    on_error = MagicMock()
    SliceRasterizer().request(source, lambda: (Axis.ACROSS, DEFAULT), deliver, on_error)
    deliver.assert_not_called()
    on_error.assert_called_once()
    assert isinstance(on_error.call_args.args[0], RasterizationUnavailableError)
