# chip8_tracer/driver/tick_driver.py
"""
ティックドライバ。

ホスト側のスケジューラ（QTimerやテストのループ）から呼ばれ、1ティックにつき
フェッチ＋実行を1回だけ行います。画面が変化していれば同じティック内で再描画を要求し、
ダーティフラグを下ろします。エンジン側はスレッドやタイマーを持ちません。
"""
import logging
from typing import Callable, Optional

from chip8_tracer.core.snapshot import Snapshot
from chip8_tracer.display.framebuffer import DisplayDevice, FrameData
from chip8_tracer.arch.chip8.cpu import Chip8Cpu

logger = logging.getLogger(__name__)

RedrawCallback = Callable[[FrameData], None]

# @intent:responsibility エンジンの実行ケイデンスと再描画要求を制御します。
class TickDriver:
    def __init__(self, cpu: Chip8Cpu, display: DisplayDevice, on_redraw: Optional[RedrawCallback] = None):
        self._cpu = cpu
        self._display = display
        self._on_redraw = on_redraw
        self._running = False
        self._tick_count = 0

    @property
    def cpu(self) -> Chip8Cpu:
        return self._cpu

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def tick_count(self) -> int:
        return self._tick_count

    def set_redraw_callback(self, on_redraw: Optional[RedrawCallback]) -> None:
        self._on_redraw = on_redraw

    # @intent:responsibility 1ティック分（フェッチ＋実行1回）を進め、必要なら再描画を要求します。
    def tick(self) -> Snapshot:
        snapshot = self._cpu.step()
        self._tick_count += 1
        self._flush_redraw()
        return snapshot

    def _flush_redraw(self) -> None:
        if self._display.dirty:
            if self._on_redraw is not None:
                self._on_redraw(self._display.snapshot())
            self._display.clear_dirty()

    # @intent:responsibility 停止要求か上限に達するまでティックを繰り返します。
    # @intent:post-condition 実行したティック数を返します。例外はそのまま呼び出し元へ伝播します。
    def run(self, max_ticks: int) -> int:
        self._running = True
        executed = 0
        try:
            while self._running and executed < max_ticks:
                self.tick()
                executed += 1
        finally:
            self._running = False
        return executed

    def stop(self) -> None:
        self._running = False

    # @intent:responsibility ティックを止めてから新しいプログラムをロードします。
    # @intent:rationale 古いプログラムの状態が観測されないよう、ロード完了までティックを再開しません。
    def load_program(self, data: bytes) -> None:
        self.stop()
        self._cpu.load_program(data)
        self._tick_count = 0
        logger.info("Program reloaded; tick counter reset")
        # 消去済みの画面を一度描画させる
        self._display.mark_dirty()
        self._flush_redraw()
