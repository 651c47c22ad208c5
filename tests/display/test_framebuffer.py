# tests/display/test_framebuffer.py
"""
chip8_tracer.display.framebufferモジュールの単体テスト。
"""
import pytest

from chip8_tracer.display.framebuffer import Framebuffer, WIDTH, HEIGHT
from chip8_tracer.core.errors import PixelRangeError

# @intent:test_suite 画素のXOR反転、消去、ダーティフラグの振る舞いを検証します。

class TestFramebuffer:
    def test_default_dimensions(self):
        fb = Framebuffer()
        assert (fb.width, fb.height) == (WIDTH, HEIGHT) == (64, 32)
        assert not fb.dirty
        assert fb.lit_count() == 0

    def test_invalid_dimensions(self):
        with pytest.raises(ValueError):
            Framebuffer(0, 32)

    # @intent:test_case_toggle toggle_pixelが反転前の値を返し、ダーティフラグを立てることを検証します。
    def test_toggle_returns_previous_value(self):
        fb = Framebuffer()
        assert fb.toggle_pixel(3, 4) == 0
        assert fb.get_pixel(3, 4) == 1
        assert fb.dirty
        assert fb.toggle_pixel(3, 4) == 1
        assert fb.get_pixel(3, 4) == 0

    # @intent:test_case_oob 範囲外座標はPixelRangeErrorになることを検証します。
    @pytest.mark.parametrize("x, y", [(64, 0), (0, 32), (-1, 0)])
    def test_out_of_range(self, x, y):
        fb = Framebuffer()
        with pytest.raises(PixelRangeError):
            fb.get_pixel(x, y)
        with pytest.raises(IndexError):
            fb.toggle_pixel(x, y)

    # @intent:test_case_clear clearで全セルが0になりダーティフラグが立つことを検証します。
    def test_clear_sets_dirty(self):
        fb = Framebuffer()
        fb.toggle_pixel(0, 0)
        fb.toggle_pixel(63, 31)
        fb.clear_dirty()
        fb.clear()
        assert fb.lit_count() == 0
        assert all(fb.get_pixel(x, y) == 0 for x in range(64) for y in range(32))
        assert fb.dirty

    # @intent:test_case_reset resetは全消去しつつダーティフラグを下ろすことを検証します。
    def test_reset_clears_dirty(self):
        fb = Framebuffer()
        fb.toggle_pixel(1, 1)
        fb.reset()
        assert fb.lit_count() == 0
        assert not fb.dirty

    # @intent:test_case_snapshot snapshotは行優先の不変コピーであることを検証します。
    def test_snapshot_is_row_major_copy(self):
        fb = Framebuffer(8, 2)
        fb.toggle_pixel(7, 1)
        frame = fb.snapshot()
        assert len(frame) == 2
        assert len(frame[0]) == 8
        assert frame[1][7] == 1
        fb.toggle_pixel(7, 1)
        assert frame[1][7] == 1

    def test_mark_and_clear_dirty(self):
        fb = Framebuffer()
        fb.mark_dirty()
        assert fb.dirty
        fb.clear_dirty()
        assert not fb.dirty
