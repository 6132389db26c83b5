# src/chip8_vm/ui/display_view.py
"""
描画協調者（フレームバッファ表示ウィジェット）。
実行エンジンから受け取った読み取り専用のフレームスナップショットを矩形として描画します。
"""
from PySide6.QtWidgets import QWidget
from PySide6.QtCore import QSize
from PySide6.QtGui import QPainter, QColor, QImage, QPaintEvent

from chip8_vm.core.framebuffer import DISPLAY_WIDTH, DISPLAY_HEIGHT, FrameSnapshot

# --- 色定義 ---
COLOR_BG = "#000000"
COLOR_PIXEL = "#00FF00"

def blank_frame() -> FrameSnapshot:
    return tuple(tuple(False for _ in range(DISPLAY_WIDTH)) for _ in range(DISPLAY_HEIGHT))

# @intent:responsibility 64x32のフレームスナップショットを拡大して表示します。
# @intent:rationale フレームバッファ本体には触れず、フレームごとに受け取ったスナップショットのみを保持します。
class DisplayView(QWidget):
    def __init__(self, scale: int = 12, parent=None):
        super().__init__(parent)
        self._scale = scale
        self._frame: FrameSnapshot = blank_frame()
        self._background = QColor(COLOR_BG)
        self._foreground = QColor(COLOR_PIXEL)
        self.setFixedSize(self.sizeHint())

    def sizeHint(self) -> QSize:
        return QSize(DISPLAY_WIDTH * self._scale, DISPLAY_HEIGHT * self._scale)

    @property
    def frame(self) -> FrameSnapshot:
        return self._frame

    # @intent:responsibility 新しいフレームを受け取り、再描画を要求します。
    def update_frame(self, frame: FrameSnapshot) -> None:
        self._frame = frame
        self.update()

    def _paint(self, painter: QPainter) -> None:
        s = self._scale
        painter.fillRect(0, 0, DISPLAY_WIDTH * s, DISPLAY_HEIGHT * s, self._background)
        for y, row in enumerate(self._frame):
            for x, lit in enumerate(row):
                if lit:
                    painter.fillRect(x * s, y * s, s, s, self._foreground)

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        self._paint(painter)
        painter.end()

    # @intent:responsibility 現在のフレームをQImageへ描画して返します（画面出力を伴わない検証用）。
    def render_to_image(self) -> QImage:
        size = self.sizeHint()
        image = QImage(size.width(), size.height(), QImage.Format_RGB32)
        painter = QPainter(image)
        self._paint(painter)
        painter.end()
        return image
