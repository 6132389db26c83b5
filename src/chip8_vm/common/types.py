"""
共通の型定義を提供するモジュール。
プロジェクト全体で使用される列挙型やNamedTupleを定義します。
"""
from enum import Enum
from typing import List, NamedTuple

# @intent:data_structure デコード済み命令の種別（閉じたバリアント集合）。
# @intent:rationale 命令ごとのクラス階層は作らず、種別とオペランドの組で表現します。
class OpKind(Enum):
    CLS = "CLS"                # 00E0
    RET = "RET"                # 00EE
    JP = "JP"                  # 1nnn
    CALL = "CALL"              # 2nnn
    SE_IMM = "SE_IMM"          # 3xkk
    SNE_IMM = "SNE_IMM"        # 4xkk
    SE_REG = "SE_REG"          # 5xy0
    LD_IMM = "LD_IMM"          # 6xkk
    ADD_IMM = "ADD_IMM"        # 7xkk
    LD_REG = "LD_REG"          # 8xy0
    OR = "OR"                  # 8xy1
    AND = "AND"                # 8xy2
    XOR = "XOR"                # 8xy3
    ADD_REG = "ADD_REG"        # 8xy4
    SUB = "SUB"                # 8xy5
    SHR = "SHR"                # 8xy6
    SUBN = "SUBN"              # 8xy7
    SHL = "SHL"                # 8xyE
    SNE_REG = "SNE_REG"        # 9xy0
    LD_I = "LD_I"              # Annn
    JP_OFFSET = "JP_OFFSET"    # Bnnn
    RND = "RND"                # Cxkk
    DRW = "DRW"                # Dxyn
    SKP = "SKP"                # Ex9E
    SKNP = "SKNP"              # ExA1
    LD_VX_DT = "LD_VX_DT"      # Fx07
    LD_VX_K = "LD_VX_K"        # Fx0A
    LD_DT_VX = "LD_DT_VX"      # Fx15
    LD_ST_VX = "LD_ST_VX"      # Fx18
    ADD_I = "ADD_I"            # Fx1E
    LD_F = "LD_F"              # Fx29
    BCD = "BCD"                # Fx33
    STORE = "STORE"            # Fx55
    LOAD = "LOAD"              # Fx65
    UNKNOWN = "UNKNOWN"

# @intent:data_structure 単一のレジスタの表示定義。UIが動的にフィールドを生成するために使用される。
class RegisterInfo(NamedTuple):
    name: str
    width: int  # ビット幅 (8 or 16)

# @intent:data_structure レジスタグループの表示定義。
class RegisterLayoutInfo(NamedTuple):
    group_name: str
    registers: List[RegisterInfo]
