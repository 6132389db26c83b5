# chip8_vm/core/state.py
"""
Core Layer (マシン状態)

このモジュールは、CHIP-8のマシン状態（レジスタ群、コールスタック、タイマー、
フレームバッファ）を保持するデータ構造を定義します。
メモリ本体はTransport LayerのRAMが保持します。
"""
from dataclasses import dataclass, field
from typing import List

from chip8_vm.core.framebuffer import Framebuffer

MEMORY_SIZE = 0x1000
PROGRAM_START = 0x200
MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START
NUM_REGISTERS = 16
FLAG_REGISTER = 0xF

# @intent:responsibility CHIP-8のレジスタ状態と実行状態を保持します。
# @intent:rationale 命令実装から直接操作される可変データクラスとし、不変条件の維持は命令側が担います。
@dataclass
class Chip8State:
    """
    CHIP-8マシンの状態を保持するデータクラス。
    生成時はPC(0x200)を除き全てゼロです。
    """
    pc: int = PROGRAM_START  # Program Counter
    i: int = 0x0000          # Index Register (16bit)
    v: List[int] = field(default_factory=lambda: [0] * NUM_REGISTERS)  # V0-VF
    stack: List[int] = field(default_factory=list)  # 戻りアドレス
    delay_timer: int = 0
    sound_timer: int = 0
    framebuffer: Framebuffer = field(default_factory=Framebuffer)
    # Fx0A によるキー入力待ち状態
    awaiting_key: bool = False
    key_register: int = 0

    # @intent:accessor フラグレジスタ(VF)へのアクセサ。
    @property
    def vf(self) -> int:
        return self.v[FLAG_REGISTER]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[FLAG_REGISTER] = value & 0xFF

    @property
    def sp(self) -> int:
        """スタックの深さ（表示用）。"""
        return len(self.stack)

    @property
    def sound_active(self) -> bool:
        return self.sound_timer > 0
