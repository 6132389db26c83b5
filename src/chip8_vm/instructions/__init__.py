# src/chip8_vm/instructions/__init__.py
"""
CHIP-8命令セット実装パッケージ。
"""
from typing import Optional

from chip8_vm.common.types import OpKind
from chip8_vm.config.models import QuirkConfig
from chip8_vm.core.errors import UnknownInstructionFault
from chip8_vm.core.snapshot import Operation
from chip8_vm.core.state import Chip8State
from chip8_vm.transport.bus import Bus
from .base import ExecutionEnvironment, make_operation
from .control import decode_jp_offset_vx
from .decoder import classify, split_nibbles, join_nibbles
from .maps import DECODE_MAP, EXECUTE_MAP

# @intent:responsibility 16bit命令語をデコードし、Operationオブジェクトを返します。
def decode_instruction(word: int, quirks: Optional[QuirkConfig] = None) -> Operation:
    """
    命令語を種別判定し、種別ごとのデコード関数でOperationを生成します。
    未定義の命令語はOpKind.UNKNOWNのOperationになります（フォールトは実行時）。
    quirksを渡すと、解釈がクワークで変わる命令(Bnnn)の表記を実際の動作に合わせます。
    """
    kind = classify(word)
    if kind == OpKind.JP_OFFSET and quirks is not None and quirks.jump_offset_uses_vx:
        return decode_jp_offset_vx(word)
    decoder = DECODE_MAP.get(kind)
    if decoder:
        return decoder(word)
    return make_operation(word, OpKind.UNKNOWN, "UNKNOWN", f"0x{word:04X}")

# @intent:responsibility デコードされた命令を実行し、マシン状態を更新します。
# @intent:post-condition 実行関数が存在しない命令はUnknownInstructionFaultとなります。
def execute_instruction(operation: Operation, state: Chip8State, bus: Bus, env: ExecutionEnvironment) -> None:
    executor = EXECUTE_MAP.get(operation.kind)
    if executor is None:
        raise UnknownInstructionFault(f"Unknown instruction {operation.opcode_hex}.", instruction=operation.word)
    executor(state, bus, operation, env)

__all__ = [
    "ExecutionEnvironment",
    "decode_instruction",
    "execute_instruction",
    "classify",
    "split_nibbles",
    "join_nibbles",
]
