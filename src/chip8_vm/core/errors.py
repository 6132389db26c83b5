# chip8_vm/core/errors.py
"""
Core Layer (フォールト定義)

実行エンジンが検出する致命的なフォールトの階層を定義します。
いずれも回復不能であり、発生時点の PC と命令語を保持して呼び出し元へ伝播します。
"""
from typing import Optional

# @intent:responsibility 全てのCHIP-8フォールトの基底クラス。
class Chip8Fault(Exception):
    """
    実行を継続できない異常（不正なプログラム、ローダーの誤用）を表す例外。
    """
    def __init__(self, message: str, pc: Optional[int] = None, instruction: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.pc = pc
        self.instruction = instruction

    # @intent:responsibility フォールト発生時の命令コンテキスト（PCと命令語）を付与します。
    # @intent:post-condition 既に付与済みのコンテキストは上書きしません。
    def with_context(self, pc: int, instruction: Optional[int]) -> "Chip8Fault":
        if self.pc is None:
            self.pc = pc
        if self.instruction is None:
            self.instruction = instruction
        return self

    def __str__(self) -> str:
        parts = [self.message]
        if self.pc is not None:
            parts.append(f"pc={self.pc:#06x}")
        if self.instruction is not None:
            parts.append(f"instruction={self.instruction:04X}")
        return " ".join(parts)

# @intent:responsibility アドレス空間外へのメモリアクセス。
class MemoryAccessFault(Chip8Fault, IndexError):
    pass

# @intent:responsibility 空のコールスタックからのリターン。
class StackUnderflowFault(Chip8Fault):
    pass

# @intent:responsibility 上限付きコールスタックの溢れ。
class StackOverflowFault(Chip8Fault):
    pass

# @intent:responsibility デコードできない命令語の実行。
class UnknownInstructionFault(Chip8Fault):
    pass

# @intent:responsibility プログラム領域(0x200-0xFFF)に収まらないROM。
class RomTooLargeError(Chip8Fault, ValueError):
    pass
