"""
逆アセンブルコードを表示するウィジェット。
"""
from typing import List, Optional, Tuple

from PySide6.QtWidgets import QWidget, QVBoxLayout, QTableWidget, QTableWidgetItem, QHeaderView
from PySide6.QtGui import QColor
from chip8_tracer.core.cpu import AbstractCpu
from chip8_tracer.ui.fonts import get_monospace_font

COLOR_PC_ROW = "#2A82DA"
WINDOW_INSTRUCTIONS = 32 # PCから表示する命令数

# @intent:responsibility PC周辺の逆アセンブル結果を表形式で表示し、現在のPCをハイライトします。
class CodeView(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.table = QTableWidget()
        self.table.setColumnCount(3)
        self.table.setHorizontalHeaderLabels(["Address", "Opcode", "Mnemonic"])
        self.table.horizontalHeader().setSectionResizeMode(0, QHeaderView.ResizeToContents)
        self.table.horizontalHeader().setSectionResizeMode(1, QHeaderView.ResizeToContents)
        self.table.horizontalHeader().setSectionResizeMode(2, QHeaderView.Stretch)
        self.table.setFont(get_monospace_font(10))
        self.table.verticalHeader().setVisible(False)
        self.table.setEditTriggers(QTableWidget.NoEditTriggers)
        self.table.setSelectionBehavior(QTableWidget.SelectRows)
        self.table.setShowGrid(False)
        self.table.setStyleSheet("background-color: #101010; color: #BBBBBB;")
        layout.addWidget(self.table)

        # 現在表示している逆アセンブルデータ [(addr, hex, mnemonic), ...]
        self.disassembled_data: List[Tuple[int, str, str]] = []
        self._pc_row: Optional[int] = None

    # @intent:responsibility PCが表示範囲外なら逆アセンブルし直し、PC行をハイライトします。
    def update_code(self, cpu: AbstractCpu, pc: int) -> None:
        rows = [addr for addr, _, _ in self.disassembled_data]
        if pc not in rows:
            self.disassembled_data = cpu.disassemble(pc, WINDOW_INSTRUCTIONS)
            self.table.setRowCount(len(self.disassembled_data))
            for row, (addr, hex_dump, mnemonic) in enumerate(self.disassembled_data):
                self.table.setItem(row, 0, QTableWidgetItem(f"{addr:03X}"))
                self.table.setItem(row, 1, QTableWidgetItem(hex_dump))
                self.table.setItem(row, 2, QTableWidgetItem(mnemonic))
            self._pc_row = None
            rows = [addr for addr, _, _ in self.disassembled_data]

        self._highlight(rows.index(pc) if pc in rows else None)

    def _highlight(self, row: Optional[int]) -> None:
        if self._pc_row is not None and self._pc_row < self.table.rowCount():
            for col in range(3):
                item = self.table.item(self._pc_row, col)
                if item:
                    item.setBackground(QColor(0, 0, 0, 0))
        self._pc_row = row
        if row is not None:
            for col in range(3):
                item = self.table.item(row, col)
                if item:
                    item.setBackground(QColor(COLOR_PC_ROW))
            self.table.scrollToItem(self.table.item(row, 0))

    # @intent:responsibility プログラム再ロード時にキャッシュを破棄します。
    def reset_cache(self) -> None:
        self.disassembled_data = []
        self._pc_row = None
        self.table.setRowCount(0)
