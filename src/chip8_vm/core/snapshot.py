# chip8_vm/core/snapshot.py
"""
実行結果のスナップショット

このモジュールは、1命令の実行結果（デコード済み命令、メタデータ、バスアクティビティ）を
記録する不変のデータ構造を定義します。ホストやテストへの情報提供に用いる責務を負います。
"""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from chip8_vm.common.types import OpKind
from chip8_vm.core.state import Chip8State
from chip8_vm.transport.bus import BusAccess

# @intent:responsibility デコードされた命令の詳細を記録します。
@dataclass(frozen=True)
class Operation:
    """
    デコードされた命令（16bit命令語、種別、ニーモニック、オペランド）を記録するデータクラス。
    オペランドのフィールド(x, y, n, kk, nnn)は命令語から直接取り出します。
    """
    word: int # 例: 0x6A05
    kind: OpKind
    mnemonic: str # 例: "LD"
    operands: List[str] = field(default_factory=list) # 例: ["VA", "0x05"]
    cycle_count: int = 1
    length: int = 2 # 命令のバイト長（CHIP-8では常に2）

    @property
    def opcode_hex(self) -> str:
        return f"{self.word:04X}"

    @property
    def nibbles(self) -> Tuple[int, int, int, int]:
        w = self.word
        return ((w >> 12) & 0xF, (w >> 8) & 0xF, (w >> 4) & 0xF, w & 0xF)

    @property
    def x(self) -> int:
        return (self.word >> 8) & 0xF

    @property
    def y(self) -> int:
        return (self.word >> 4) & 0xF

    @property
    def n(self) -> int:
        return self.word & 0xF

    @property
    def kk(self) -> int:
        return self.word & 0xFF

    @property
    def nnn(self) -> int:
        return self.word & 0xFFF

# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True)
class Metadata:
    """
    実行に関するメタデータ（累計命令数、表示用の命令文字列など）を記録するデータクラス。
    """
    cycle_count: int
    symbol_info: Optional[str] = None # 例: "LD VA, 0x05"
    waiting: bool = False # キー入力待ちで命令が進まなかった場合にTrue

# @intent:responsibility ある一時点におけるマシンとバスの状態を記録します。
@dataclass(frozen=True)
class Snapshot:
    """
    1回のstep()の結果を記録したデータ構造。
    stateは実行後のマシン状態への参照です（コピーではありません）。
    """
    state: Chip8State
    operation: Operation
    metadata: Metadata
    bus_activity: List[BusAccess] = field(default_factory=list)
