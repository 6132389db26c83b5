# src/chip8_vm/instructions/decoder.py
"""
命令語のニブル分解と種別判定。

16bit命令語を4つのニブルに分解し、先頭ニブル（と必要に応じて末尾ニブル/下位バイト）で
命令種別(OpKind)を決定します。副作用はありません。
"""
from typing import Sequence, Tuple

from chip8_vm.common.types import OpKind

Nibbles = Tuple[int, int, int, int]

# @intent:utility_function 16bit命令語を上位から順に4つのニブルへ分解します。
def split_nibbles(word: int) -> Nibbles:
    return ((word >> 12) & 0xF, (word >> 8) & 0xF, (word >> 4) & 0xF, word & 0xF)

# @intent:utility_function ニブル列を上位から連結して整数に戻します（split_nibblesの逆変換）。
def join_nibbles(nibbles: Sequence[int]) -> int:
    value = 0
    for nibble in nibbles:
        value = (value << 4) | (nibble & 0xF)
    return value

# @intent:map 先頭ニブルだけで種別が決まる命令群。
_LEADING_MAP = {
    0x1: OpKind.JP,
    0x2: OpKind.CALL,
    0x3: OpKind.SE_IMM,
    0x4: OpKind.SNE_IMM,
    0x6: OpKind.LD_IMM,
    0x7: OpKind.ADD_IMM,
    0xA: OpKind.LD_I,
    0xB: OpKind.JP_OFFSET,
    0xC: OpKind.RND,
    0xD: OpKind.DRW,
}

# @intent:map 8xyN 系（末尾ニブルで演算を選択）。
_ALU_MAP = {
    0x0: OpKind.LD_REG,
    0x1: OpKind.OR,
    0x2: OpKind.AND,
    0x3: OpKind.XOR,
    0x4: OpKind.ADD_REG,
    0x5: OpKind.SUB,
    0x6: OpKind.SHR,
    0x7: OpKind.SUBN,
    0xE: OpKind.SHL,
}

# @intent:map ExKK 系（下位バイトで選択）。
_KEY_MAP = {
    0x9E: OpKind.SKP,
    0xA1: OpKind.SKNP,
}

# @intent:map FxKK 系（下位バイトで選択）。
_MISC_MAP = {
    0x07: OpKind.LD_VX_DT,
    0x0A: OpKind.LD_VX_K,
    0x15: OpKind.LD_DT_VX,
    0x18: OpKind.LD_ST_VX,
    0x1E: OpKind.ADD_I,
    0x29: OpKind.LD_F,
    0x33: OpKind.BCD,
    0x55: OpKind.STORE,
    0x65: OpKind.LOAD,
}

# @intent:responsibility 命令語から命令種別を判定します。未定義のパターンはOpKind.UNKNOWNを返します。
def classify(word: int) -> OpKind:
    n0, _, _, n3 = split_nibbles(word)
    low_byte = word & 0xFF

    if n0 == 0x0:
        if word == 0x00E0:
            return OpKind.CLS
        if word == 0x00EE:
            return OpKind.RET
        # 0nnn (SYS) は対象外
        return OpKind.UNKNOWN
    if n0 in _LEADING_MAP:
        return _LEADING_MAP[n0]
    if n0 == 0x5:
        return OpKind.SE_REG if n3 == 0x0 else OpKind.UNKNOWN
    if n0 == 0x9:
        return OpKind.SNE_REG if n3 == 0x0 else OpKind.UNKNOWN
    if n0 == 0x8:
        return _ALU_MAP.get(n3, OpKind.UNKNOWN)
    if n0 == 0xE:
        return _KEY_MAP.get(low_byte, OpKind.UNKNOWN)
    if n0 == 0xF:
        return _MISC_MAP.get(low_byte, OpKind.UNKNOWN)
    return OpKind.UNKNOWN
