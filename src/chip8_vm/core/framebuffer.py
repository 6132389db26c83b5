# chip8_vm/core/framebuffer.py
"""
Core Layer (フレームバッファ)

64x32のモノクロ画面を保持します。両軸とも折り返しアドレッシングです。
変更はクリア命令(00E0)と描画命令(Dxyn)のみが行い、描画側の協調者には
不変のスナップショットだけを渡します。
"""
from typing import List, Tuple

DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32

# @intent:data_structure レンダラへ渡す読み取り専用の画面イメージ（行のタプル）。
FrameSnapshot = Tuple[Tuple[bool, ...], ...]

# @intent:responsibility CHIP-8のモノクロ画面状態を保持し、XOR描画を提供します。
class Framebuffer:
    def __init__(self, width: int = DISPLAY_WIDTH, height: int = DISPLAY_HEIGHT):
        self.width = width
        self.height = height
        self._pixels: List[List[bool]] = [[False] * width for _ in range(height)]

    def clear(self) -> None:
        for row in self._pixels:
            row[:] = [False] * self.width

    # @intent:responsibility 座標を折り返した上でピクセル状態を返します。
    def get_pixel(self, x: int, y: int) -> bool:
        return self._pixels[y % self.height][x % self.width]

    # @intent:responsibility ピクセルを反転し、点灯から消灯へ遷移した場合にTrueを返します。
    def xor_pixel(self, x: int, y: int) -> bool:
        row = self._pixels[y % self.height]
        col = x % self.width
        was_on = row[col]
        row[col] = not was_on
        return was_on

    # @intent:responsibility 1バイト分のスプライト行を描画し、衝突の有無を返します。
    # @intent:pre-condition sprite_byteは8bit値。MSBが左端のピクセルに対応します。
    def blit_row(self, x: int, y: int, sprite_byte: int) -> bool:
        collision = False
        for bit in range(8):
            if (sprite_byte >> (7 - bit)) & 1:
                if self.xor_pixel(x + bit, y):
                    collision = True
        return collision

    # @intent:responsibility 描画協調者向けの不変スナップショットを生成します。
    def snapshot(self) -> FrameSnapshot:
        return tuple(tuple(row) for row in self._pixels)
