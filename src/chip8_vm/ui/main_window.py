# src/chip8_vm/ui/main_window.py
"""
メインウィンドウの実装。
フレームタイマーでドライバを駆動し、画面描画とキー入力の橋渡しを行うホストシェルです。
"""
import sys
from typing import Dict, Optional

from PySide6.QtWidgets import QMainWindow, QDockWidget, QFileDialog, QMessageBox, QLabel
from PySide6.QtGui import QAction, QKeyEvent, QCloseEvent
from PySide6.QtCore import Qt, QEvent, QTimer, Slot

from chip8_vm.config.builder import MachineBuilder
from chip8_vm.config.models import MachineConfig
from chip8_vm.core.errors import Chip8Fault
from chip8_vm.loader.loader import RomLoader
from chip8_vm.runtime.driver import MachineDriver
from .display_view import DisplayView
from .register_view import RegisterView

FRAME_INTERVAL_MS = 16

# @intent:utility_function Qtのキー名（"Key_"を除いた部分）を大文字に正規化した索引を返します。
def _qt_key_names() -> Dict[str, int]:
    return {name[4:].upper(): int(member.value)
            for name, member in Qt.Key.__members__.items() if name.startswith("Key_")}

# @intent:utility_function 設定のキー名("1", "Q", "Space"など)をQtのキーコードへ変換します。大文字小文字は区別しません。
def build_qt_key_map(key_map: Dict[str, int]) -> Dict[int, int]:
    names = _qt_key_names()
    qt_map = {}
    for name, chip8_key in key_map.items():
        qt_key = names.get(name.upper())
        if qt_key is None:
            print(f"Warning: Unknown host key '{name}' in key map ignored", file=sys.stderr)
            continue
        qt_map[qt_key] = chip8_key
    return qt_map

# @intent:responsibility アプリケーションのメインウィンドウを定義し、エンジンとUIを組み立てます。
class MainWindow(QMainWindow):
    def __init__(self, config: Optional[MachineConfig] = None, rom_data: Optional[bytes] = None, parent=None):
        super().__init__(parent)
        self.setWindowTitle("CHIP-8 Emulator")
        self._config = config if config is not None else MachineConfig()
        self._rom_data: Optional[bytes] = None
        self._qt_key_map = build_qt_key_map(self._config.key_map)

        self._setup_backend()

        self.display_view = DisplayView(scale=self._config.scale)
        self.setCentralWidget(self.display_view)
        self._create_status_inspector()
        self._create_menus()

        self.status_label = QLabel("No ROM loaded")
        self.statusBar().addWidget(self.status_label)

        self._frame_timer = QTimer(self)
        self._frame_timer.setInterval(FRAME_INTERVAL_MS)
        self._frame_timer.timeout.connect(self._on_frame)

        if rom_data is not None:
            self.load_rom_bytes(rom_data)

    # @intent:responsibility 設定からマシンとドライバを生成します。
    def _setup_backend(self):
        builder = MachineBuilder()
        self.cpu, self.bus, self.keypad = builder.build_machine(self._config)
        self.driver = MachineDriver(
            self.cpu,
            instructions_per_second=self._config.instructions_per_second,
            timer_hz=self._config.timer_hz,
        )

    def _create_menus(self):
        file_menu = self.menuBar().addMenu("File")

        self.load_rom_action = QAction("Load ROM...", self)
        self.load_rom_action.setShortcut("Ctrl+O")
        self.load_rom_action.triggered.connect(self._load_rom_dialog)
        file_menu.addAction(self.load_rom_action)

        self.reset_action = QAction("Reset", self)
        self.reset_action.setShortcut("Ctrl+R")
        self.reset_action.triggered.connect(self._reset_machine)
        file_menu.addAction(self.reset_action)

    def _create_status_inspector(self):
        status_dock = QDockWidget("Registers", self)
        status_dock.setAllowedAreas(Qt.RightDockWidgetArea)
        self.register_view = RegisterView()
        self.register_view.set_cpu(self.cpu)
        status_dock.setWidget(self.register_view)
        self.addDockWidget(Qt.RightDockWidgetArea, status_dock)

    # @intent:responsibility ROMのバイト列を新しいマシン状態へロードし、実行を開始します。
    def load_rom_bytes(self, data: bytes) -> None:
        self._frame_timer.stop()
        self._setup_backend()
        self.register_view.set_cpu(self.cpu)
        self.cpu.load_program(data)
        self._rom_data = bytes(data)
        self.display_view.update_frame(self.cpu.framebuffer.snapshot())
        self.status_label.setText(f"Loaded {len(data)} bytes")
        self._frame_timer.start()

    @property
    def is_running(self) -> bool:
        return self._frame_timer.isActive()

    # @intent:responsibility 1フレーム分マシンを進め、画面とレジスタ表示を更新します。
    @Slot()
    def _on_frame(self):
        try:
            self.driver.advance()
        except Chip8Fault as fault:
            self._report_fault(fault)
            return
        self.display_view.update_frame(self.cpu.framebuffer.snapshot())
        self.register_view.update_registers()
        state = self.cpu.get_state()
        waiting = " (waiting for key)" if state.awaiting_key else ""
        self.status_label.setText(f"PC={state.pc:#06x} I={state.i:#06x}{waiting}")

    # @intent:responsibility フォールト発生時に実行を停止し、ユーザーへ報告します。
    def _report_fault(self, fault: Chip8Fault) -> None:
        self._frame_timer.stop()
        print(f"Fault: {fault}", file=sys.stderr)
        self.status_label.setText(f"Halted: {fault}")
        QMessageBox.critical(self, "CHIP-8 Fault", str(fault))

    @Slot()
    def _load_rom_dialog(self):
        file_name, _ = QFileDialog.getOpenFileName(self, "Open CHIP-8 ROM", "", "CHIP-8 ROMs (*.ch8 *.c8);;All Files (*)")
        if file_name:
            try:
                self.load_rom_bytes(RomLoader().read_file(file_name))
            except (OSError, Chip8Fault) as e:
                QMessageBox.critical(self, "Error", f"Failed to load ROM: {e}")

    @Slot()
    def _reset_machine(self):
        if self._rom_data is not None:
            self.load_rom_bytes(self._rom_data)

    # @intent:responsibility ホストのキー押下をCHIP-8キーパッドへ通知します。
    def keyPressEvent(self, event: QKeyEvent):
        chip8_key = self._qt_key_map.get(event.key())
        if chip8_key is None or event.isAutoRepeat():
            super().keyPressEvent(event)
            return
        self.keypad.press(chip8_key)

    def keyReleaseEvent(self, event: QKeyEvent):
        chip8_key = self._qt_key_map.get(event.key())
        if chip8_key is None or event.isAutoRepeat():
            super().keyReleaseEvent(event)
            return
        self.keypad.release(chip8_key)

    # @intent:responsibility ウィンドウが非アクティブになった場合、押下中のキーを全て離します。
    # @intent:rationale フォーカス喪失中のキー解放イベントはウィンドウへ届きません。
    def changeEvent(self, event: QEvent):
        if event.type() == QEvent.ActivationChange and not self.isActiveWindow():
            self.keypad.release_all()
        super().changeEvent(event)

    def closeEvent(self, event: QCloseEvent):
        self._frame_timer.stop()
        event.accept()
