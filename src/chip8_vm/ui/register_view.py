# src/chip8_vm/ui/register_view.py
"""
CHIP-8のレジスタを表示するウィジェット。
Chip8Cpuのレイアウト情報を利用してUIを構築します。
"""
from typing import Dict, Optional
from PySide6.QtWidgets import QWidget, QVBoxLayout, QFormLayout, QLabel, QGroupBox
from PySide6.QtGui import QFontDatabase
from PySide6.QtCore import Qt

from chip8_vm.core.cpu import Chip8Cpu

# @intent:responsibility 現在のシステムで利用可能な等幅フォントファミリー名を返します。
def get_monospace_font_family() -> str:
    preferred_fonts = ["Consolas", "Menlo", "Monaco", "Courier New"]
    available_families = QFontDatabase.families()
    for font in preferred_fonts:
        if font in available_families:
            return font
    return QFontDatabase.systemFont(QFontDatabase.FixedFont).family()

# @intent:responsibility CPUのレジスタ値を表示するUIウィジェットを提供します。
class RegisterView(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setStyleSheet("background-color: #121212; color: #BBBBBB;")

        self.layout = QVBoxLayout(self)
        self.layout.setContentsMargins(5, 5, 5, 5)

        self._font_family = get_monospace_font_family()
        self._register_labels: Dict[str, QLabel] = {}
        self._register_widths: Dict[str, int] = {}
        self._cpu: Optional[Chip8Cpu] = None

    # @intent:responsibility 表示対象のCPUを設定し、UIレイアウトを構築します。
    def set_cpu(self, cpu: Chip8Cpu) -> None:
        self._cpu = cpu
        self._setup_ui()
        self.update_registers()

    def _setup_ui(self):
        while self.layout.count():
            item = self.layout.takeAt(0)
            if item.widget():
                item.widget().deleteLater()
        self._register_labels.clear()
        self._register_widths.clear()

        for group in self._cpu.get_register_layout():
            group_box = QGroupBox(group.group_name)
            group_box.setStyleSheet("QGroupBox { font-weight: bold; color: #00AAAA; }")
            group_layout = QFormLayout(group_box)
            group_layout.setLabelAlignment(Qt.AlignLeft)
            group_layout.setSpacing(2)

            for reg in group.registers:
                hex_width = (reg.width + 3) // 4 # 16bit -> 4chars, 8bit -> 2chars
                self._register_widths[reg.name] = hex_width

                label_value = QLabel(f"0x{'0'*hex_width}")
                label_value.setStyleSheet(f"font-family: '{self._font_family}', monospace; color: #FFD700;")
                label_value.setAlignment(Qt.AlignRight)

                group_layout.addRow(QLabel(f"{reg.name}:"), label_value)
                self._register_labels[reg.name] = label_value

            self.layout.addWidget(group_box)

        self.layout.addStretch()

    # @intent:responsibility 現在のCPU状態を取得し、レジスタの表示値を更新します。
    def update_registers(self):
        if not self._cpu:
            return

        for name, value in self._cpu.get_register_map().items():
            if name in self._register_labels:
                width = self._register_widths[name]
                self._register_labels[name].setText(f"0x{value:0{width}X}")

    def get_register_text(self, name: str) -> str:
        return self._register_labels[name].text()
