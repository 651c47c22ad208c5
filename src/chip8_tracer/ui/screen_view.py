# src/chip8_tracer/ui/screen_view.py
"""
フレームバッファの内容を拡大表示するウィジェット。
ティックドライバから渡された画面スナップショットだけを描画し、エンジンには直接触れません。
"""
from typing import Optional

from PySide6.QtWidgets import QWidget
from PySide6.QtCore import QSize
from PySide6.QtGui import QPainter, QColor, QPaintEvent

from chip8_tracer.display.framebuffer import FrameData, WIDTH, HEIGHT

COLOR_PIXEL_OFF = "#000000"
COLOR_PIXEL_ON = "#FFFFFF"

# @intent:responsibility 1bit画素グリッドをscale倍のブロックで描画します。
class ScreenView(QWidget):
    def __init__(self, width: int = WIDTH, height: int = HEIGHT, scale: int = 12, parent=None):
        super().__init__(parent)
        self._grid_width = width
        self._grid_height = height
        self._scale = scale
        self._frame: Optional[FrameData] = None
        self._off_color = QColor(COLOR_PIXEL_OFF)
        self._on_color = QColor(COLOR_PIXEL_ON)
        self.setFixedSize(self.sizeHint())

    def sizeHint(self) -> QSize:
        return QSize(self._grid_width * self._scale, self._grid_height * self._scale)

    # @intent:responsibility 表示する画面内容を差し替え、再描画を予約します。
    def set_frame(self, frame: FrameData) -> None:
        self._frame = frame
        self.update()

    def frame(self) -> Optional[FrameData]:
        return self._frame

    # @intent:responsibility 画面サイズ・倍率を変更します（設定ファイル読み込み時）。
    def configure(self, width: int, height: int, scale: int) -> None:
        self._grid_width = width
        self._grid_height = height
        self._scale = scale
        self._frame = None
        self.setFixedSize(self.sizeHint())
        self.update()

    def paintEvent(self, event: QPaintEvent):
        painter = QPainter(self)
        painter.fillRect(self.rect(), self._off_color)
        if self._frame is not None:
            s = self._scale
            for y, row in enumerate(self._frame):
                for x, pixel in enumerate(row):
                    if pixel:
                        painter.fillRect(x * s, y * s, s, s, self._on_color)
        painter.end()
