# src/chip8_tracer/ui/main_window.py
"""
メインウィンドウの実装。
QTimerをティックスケジューラとしてティックドライバを駆動し、画面・レジスタ・コードを表示します。
"""
import logging
from typing import Optional

from PySide6.QtWidgets import (
    QMainWindow, QApplication, QDockWidget, QTabWidget, QToolBar, QFileDialog, QMessageBox
)
from PySide6.QtGui import QPalette, QColor, QAction, QCloseEvent
from PySide6.QtCore import Qt, QTimer, Slot

from chip8_tracer.core.errors import Chip8Error
from chip8_tracer.config.models import SystemConfig
from chip8_tracer.config.loader import ConfigLoader
from chip8_tracer.config.builder import SystemBuilder
from chip8_tracer.loader.loader import BinaryLoader
from chip8_tracer.driver.tick_driver import TickDriver
from chip8_tracer.display.framebuffer import FrameData
from .screen_view import ScreenView
from .register_view import RegisterView
from .code_view import CodeView
from .fonts import get_monospace_font_family

logger = logging.getLogger(__name__)

INSPECTOR_REFRESH_MS = 100 # 連続実行中のレジスタ表示の更新間隔

# @intent:responsibility アプリケーションのメインウィンドウを定義し、UIとバックエンドを組み立てます。
class MainWindow(QMainWindow):
    def __init__(self, config: Optional[SystemConfig] = None, parent=None):
        super(MainWindow, self).__init__(parent)
        self.setWindowTitle("Chip-8 Tracer")
        self.setDockNestingEnabled(True)

        self._config = config or SystemConfig()
        self._program: Optional[bytes] = None

        self.screen_view = ScreenView(self._config.display.width, self._config.display.height,
                                      self._config.display.scale)
        self.setCentralWidget(self.screen_view)

        self._tick_timer = QTimer(self)
        self._tick_timer.timeout.connect(self._on_tick)
        self._inspector_timer = QTimer(self)
        self._inspector_timer.setInterval(INSPECTOR_REFRESH_MS)
        self._inspector_timer.timeout.connect(self._refresh_inspector)

        self._set_dark_theme()
        self._create_toolbar()
        self._create_status_inspector()
        self._create_menus()
        self._setup_backend(self._config)

        self._update_ui_state(False)

    # @intent:responsibility 設定からバス・CPU・フレームバッファを構築し、ティックドライバに接続します。
    def _setup_backend(self, config: SystemConfig) -> None:
        self._config = config
        # 起動時とReloadで同じイメージを使うため、ファイルはここで一度だけ読む
        self._program = BinaryLoader().load_file(config.program) if config.program else None
        self.cpu, self.bus, self.framebuffer = SystemBuilder().build_system(config, self._program)
        self.driver = TickDriver(self.cpu, self.framebuffer, on_redraw=self._on_redraw)
        self._tick_timer.setInterval(config.timing.tick_interval_ms)

        self.screen_view.configure(config.display.width, config.display.height, config.display.scale)
        self.screen_view.set_frame(self.framebuffer.snapshot())
        self.register_view.set_cpu(self.cpu)
        self.code_view.reset_cache()
        self._refresh_inspector()
        self.setWindowTitle(f"Chip-8 Tracer - {config.program}" if config.program else "Chip-8 Tracer")

    def _create_menus(self):
        file_menu = self.menuBar().addMenu("File")

        self.load_rom_action = QAction("Load ROM...", self)
        self.load_rom_action.setShortcut("Ctrl+O")
        self.load_rom_action.triggered.connect(self._load_rom_file)
        file_menu.addAction(self.load_rom_action)

        self.load_config_action = QAction("Load System Config...", self)
        self.load_config_action.triggered.connect(self._load_system_config)
        file_menu.addAction(self.load_config_action)

    # @intent:responsibility 実行制御用のツールバーを作成します。
    def _create_toolbar(self):
        toolbar = QToolBar("Main Toolbar")
        self.addToolBar(toolbar)

        self.run_action = QAction("Run", self)
        self.run_action.triggered.connect(self._run)
        toolbar.addAction(self.run_action)

        self.stop_action = QAction("Stop", self)
        self.stop_action.triggered.connect(self._stop)
        toolbar.addAction(self.stop_action)

        self.step_action = QAction("Step", self)
        self.step_action.triggered.connect(self._step)
        toolbar.addAction(self.step_action)

        self.reload_action = QAction("Reload", self)
        self.reload_action.triggered.connect(self._reload)
        toolbar.addAction(self.reload_action)

    def _create_status_inspector(self):
        status_dock = QDockWidget("Status Inspector", self)
        status_dock.setAllowedAreas(Qt.RightDockWidgetArea)
        tab_widget = QTabWidget()
        self.register_view = RegisterView()
        tab_widget.addTab(self.register_view, "Registers")
        self.code_view = CodeView()
        tab_widget.addTab(self.code_view, "Code")
        status_dock.setWidget(tab_widget)
        self.addDockWidget(Qt.RightDockWidgetArea, status_dock)

    def _update_ui_state(self, is_running: bool):
        self.load_rom_action.setEnabled(not is_running)
        self.load_config_action.setEnabled(not is_running)
        self.run_action.setEnabled(not is_running)
        self.step_action.setEnabled(not is_running)
        self.reload_action.setEnabled(not is_running)
        self.stop_action.setEnabled(is_running)

    def is_running(self) -> bool:
        return self._tick_timer.isActive()

    # @intent:responsibility ティックドライバからの再描画要求を画面ウィジェットへ渡します。
    def _on_redraw(self, frame: FrameData) -> None:
        self.screen_view.set_frame(frame)

    # @intent:responsibility 1ティック分を実行します。致命的エラーでは実行を止めて報告します。
    @Slot()
    def _on_tick(self):
        try:
            self.driver.tick()
        except Chip8Error as e:
            self._stop()
            logger.error("Execution halted: %s", e)
            QMessageBox.critical(self, "Execution Error", f"Execution halted: {e}")

    @Slot()
    def _run(self):
        self._update_ui_state(True)
        self._tick_timer.start()
        self._inspector_timer.start()

    @Slot()
    def _stop(self):
        self._tick_timer.stop()
        self._inspector_timer.stop()
        self._update_ui_state(False)
        self._refresh_inspector()

    @Slot()
    def _step(self):
        self._on_tick()
        self._refresh_inspector()

    # @intent:responsibility 現在のプログラムを新しい状態で最初から実行し直せるようにします。
    @Slot()
    def _reload(self):
        if self._program is None:
            return
        self.driver.load_program(self._program)
        SystemBuilder().apply_initial_state(self.cpu, self._config.initial_state)
        self.code_view.reset_cache()
        self._refresh_inspector()

    @Slot()
    def _refresh_inspector(self):
        self.register_view.update_registers()
        self.code_view.update_code(self.cpu, self.cpu.get_state().pc)

    # @intent:responsibility プログラムを読み込み、ティックを止めた状態で全状態を作り直します。
    def load_rom(self, file_name: str) -> None:
        self._stop()
        data = BinaryLoader().load_file(file_name)
        self.driver.load_program(data)
        SystemBuilder().apply_initial_state(self.cpu, self._config.initial_state)
        self._program = data
        self.code_view.reset_cache()
        self._refresh_inspector()
        self.setWindowTitle(f"Chip-8 Tracer - {file_name}")

    @Slot()
    def _load_rom_file(self):
        file_name, _ = QFileDialog.getOpenFileName(self, "Open CHIP-8 ROM", "", "CHIP-8 ROMs (*.ch8 *.c8);;All Files (*)")
        if file_name:
            try:
                self.load_rom(file_name)
            except (OSError, Chip8Error) as e:
                QMessageBox.critical(self, "Error", f"Failed to load ROM: {e}")

    # @intent:responsibility 設定ファイルからシステムを組み立て直します。
    def load_config(self, file_name: str) -> None:
        self._stop()
        config = ConfigLoader().load_from_file(file_name)
        self._setup_backend(config)

    @Slot()
    def _load_system_config(self):
        file_name, _ = QFileDialog.getOpenFileName(self, "Open System Config", "", "YAML Files (*.yaml *.yml);;All Files (*)")
        if file_name:
            try:
                self.load_config(file_name)
            except (OSError, Chip8Error) as e:
                QMessageBox.critical(self, "Error", f"Failed to load system config: {e}")

    def _set_dark_theme(self):
        dark_palette = QPalette()
        dark_palette.setColor(QPalette.Window, QColor(29, 29, 29))
        dark_palette.setColor(QPalette.WindowText, QColor(224, 224, 224))
        dark_palette.setColor(QPalette.Base, QColor(30, 30, 30))
        dark_palette.setColor(QPalette.Text, QColor(224, 224, 224))
        dark_palette.setColor(QPalette.Button, QColor(53, 53, 53))
        dark_palette.setColor(QPalette.ButtonText, QColor(224, 224, 224))
        dark_palette.setColor(QPalette.Highlight, QColor(42, 130, 218))
        QApplication.setPalette(dark_palette)

        font_family = get_monospace_font_family()
        self.setStyleSheet(f"""
            QWidget {{ font-family: '{font_family}', monospace; font-size: 10pt; }}
            QMainWindow, QToolBar {{ background-color: #1D1D1D; border: none; }}
            QDockWidget::title {{ text-align: left; background: #101010; padding: 4px; font-weight: bold; }}
            QTabWidget::pane {{ border-top: 2px solid #2A82DA; }}
        """)

    # @intent:responsibility ウィンドウを閉じる前にティックを止めます。
    def closeEvent(self, event: QCloseEvent):
        self._tick_timer.stop()
        self._inspector_timer.stop()
        event.accept()
