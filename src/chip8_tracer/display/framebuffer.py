# chip8_tracer/display/framebuffer.py
"""
Display Layer (フレームバッファ)

1bit/ピクセルの固定サイズ画素グリッドと、再描画要求を示すダーティフラグを管理します。
エンジンは DisplayDevice インターフェース経由でのみ画面を操作するため、
描画面（Qtウィジェット等）が無くてもテストできます。
"""
from abc import ABC, abstractmethod
from enum import Enum
from typing import Tuple

from chip8_tracer.core.errors import PixelRangeError

WIDTH = 64
HEIGHT = 32

# @intent:data_structure 描画後の画面内容（行優先）の不変コピー。
FrameData = Tuple[Tuple[int, ...], ...]

# @intent:responsibility 画面端をはみ出したスプライト画素の扱いを定義します。
class EdgePolicy(Enum):
    CLIP = "clip"  # はみ出した画素は捨てる
    WRAP = "wrap"  # 反対側の端へ回り込む

# @intent:responsibility エンジンが呼び出す表示デバイスの能力を定義します。
class DisplayDevice(ABC):
    @property
    @abstractmethod
    def width(self) -> int:
        pass

    @property
    @abstractmethod
    def height(self) -> int:
        pass

    @abstractmethod
    def get_pixel(self, x: int, y: int) -> int:
        pass

    # @intent:post-condition 反転前の画素値（0 or 1）を返します。
    @abstractmethod
    def toggle_pixel(self, x: int, y: int) -> int:
        pass

    @abstractmethod
    def clear(self) -> None:
        pass

    @abstractmethod
    def reset(self) -> None:
        pass

    @property
    @abstractmethod
    def dirty(self) -> bool:
        pass

    @abstractmethod
    def mark_dirty(self) -> None:
        pass

    @abstractmethod
    def clear_dirty(self) -> None:
        pass

    @abstractmethod
    def snapshot(self) -> FrameData:
        pass

# @intent:responsibility bytearray上に画素グリッドを保持する標準のフレームバッファ実装。
class Framebuffer(DisplayDevice):
    """
    WIDTH x HEIGHT の単色フレームバッファ。
    画素は XOR 反転か全消去でのみ変化し、変化するとダーティフラグが立ちます。
    """
    # @intent:pre-condition width, heightは正の整数である必要があります。
    def __init__(self, width: int = WIDTH, height: int = HEIGHT):
        if width <= 0 or height <= 0:
            raise ValueError("Framebuffer dimensions must be positive.")
        self._width = width
        self._height = height
        self._pixels = bytearray(width * height)
        self._dirty = False

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise PixelRangeError(f"Pixel ({x}, {y}) out of bounds for {self._width}x{self._height} framebuffer.")
        return y * self._width + x

    def get_pixel(self, x: int, y: int) -> int:
        return self._pixels[self._index(x, y)]

    def toggle_pixel(self, x: int, y: int) -> int:
        idx = self._index(x, y)
        previous = self._pixels[idx]
        self._pixels[idx] = previous ^ 1
        self._dirty = True
        return previous

    # @intent:responsibility 全画素を消去し、再描画を要求します（CLS命令用）。
    def clear(self) -> None:
        self._pixels = bytearray(self._width * self._height)
        self._dirty = True

    # @intent:responsibility 全画素を消去し、ダーティフラグも下ろします（プログラム再ロード用）。
    def reset(self) -> None:
        self._pixels = bytearray(self._width * self._height)
        self._dirty = False

    @property
    def dirty(self) -> bool:
        return self._dirty

    def mark_dirty(self) -> None:
        self._dirty = True

    def clear_dirty(self) -> None:
        self._dirty = False

    def snapshot(self) -> FrameData:
        w = self._width
        return tuple(tuple(self._pixels[row * w:(row + 1) * w]) for row in range(self._height))

    # @intent:responsibility 点灯している画素数を返します（テストやステータス表示用）。
    def lit_count(self) -> int:
        return sum(self._pixels)
