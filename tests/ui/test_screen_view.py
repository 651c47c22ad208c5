import os
import sys
import unittest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
pytest.importorskip("PySide6.QtWidgets")

from PySide6.QtWidgets import QApplication
from PySide6.QtGui import QImage, QColor

from chip8_tracer.ui.screen_view import ScreenView
from chip8_tracer.ui.main_window import MainWindow
from chip8_tracer.ui.app import build_initial_config
from chip8_tracer.config.models import SystemConfig
from chip8_tracer.display.framebuffer import Framebuffer

class TestScreenView(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        if not QApplication.instance():
            cls.app = QApplication(sys.argv)
        else:
            cls.app = QApplication.instance()

    def test_size_follows_scale(self):
        view = ScreenView(64, 32, 10)
        self.assertEqual(view.width(), 640)
        self.assertEqual(view.height(), 320)
        view.configure(128, 64, 4)
        self.assertEqual(view.width(), 512)
        self.assertIsNone(view.frame())

    def test_render_lit_pixel(self):
        """
        点灯画素がscale倍のブロックとして描画されることを検証します。
        """
        fb = Framebuffer()
        fb.toggle_pixel(1, 0)
        view = ScreenView(scale=4)
        view.set_frame(fb.snapshot())

        image = QImage(view.size(), QImage.Format_RGB32)
        view.render(image)
        self.assertEqual(image.pixelColor(5, 1), QColor("#FFFFFF"))
        self.assertEqual(image.pixelColor(1, 1), QColor("#000000"))

class TestMainWindow(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        if not QApplication.instance():
            cls.app = QApplication(sys.argv)
        else:
            cls.app = QApplication.instance()

    def test_step_and_reload(self):
        """
        Stepで1命令が実行され、Reloadで最初の状態に戻ることを検証します。
        """
        import tempfile
        with tempfile.TemporaryDirectory() as tmp:
            rom = os.path.join(tmp, "demo.ch8")
            with open(rom, "wb") as f:
                f.write(bytes([0x60, 0x0A, 0x00, 0xE0]))

            window = MainWindow(SystemConfig(program=rom))
            self.assertFalse(window.is_running())
            window._step()
            self.assertEqual(window.cpu.get_state().v[0], 0x0A)
            self.assertEqual(window.register_view.label_text("V0"), "0x0A")

            window._step()
            self.assertIsNotNone(window.screen_view.frame())

            window._reload()
            self.assertEqual(window.cpu.get_state().pc, 0x200)
            self.assertEqual(window.cpu.get_state().v[0], 0)
            window.close()

    def test_reload_uses_image_read_at_startup(self):
        """
        起動後にROMファイルが書き換わっても、Reloadは起動時に読んだイメージを実行することを検証します。
        """
        import tempfile
        with tempfile.TemporaryDirectory() as tmp:
            rom = os.path.join(tmp, "demo.ch8")
            with open(rom, "wb") as f:
                f.write(bytes([0x60, 0x0A]))

            window = MainWindow(SystemConfig(program=rom))
            with open(rom, "wb") as f:
                f.write(bytes([0x60, 0x55]))

            window._reload()
            window._step()
            self.assertEqual(window.cpu.get_state().v[0], 0x0A)
            window.close()

    def test_build_initial_config(self):
        self.assertEqual(build_initial_config(None), SystemConfig())
        self.assertEqual(build_initial_config("pong.ch8").program, "pong.ch8")
