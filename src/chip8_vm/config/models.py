from dataclasses import dataclass, field
from typing import Dict, Optional

# @intent:data_structure 互換性の分かれる命令(クワーク)の解釈を選択する設定。
# @intent:rationale 単一の「正しい」挙動を決め打ちせず、マシン生成時に切り替え可能にします。
@dataclass(frozen=True)
class QuirkConfig:
    shift_uses_vy: bool = False            # 8xy6/8xyE: True なら Vy をシフトして Vx へ格納
    jump_offset_uses_vx: bool = False      # Bnnn: True なら xnn + Vx、False なら nnn + V0
    vf_set_on_no_borrow: bool = True       # 8xy5/8xy7: True なら借りが無い時 VF=1
    index_overflow_sets_vf: bool = False   # Fx1E: I が 0xFFF を超えたら VF=1
    load_store_increments_i: bool = False  # Fx55/Fx65: 転送後に I += x + 1
    logic_resets_vf: bool = False          # 8xy1/8xy2/8xy3: 演算後に VF=0

DEFAULT_KEY_MAP: Dict[str, int] = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "Q": 0x4, "W": 0x5, "E": 0x6, "R": 0xD,
    "A": 0x7, "S": 0x8, "D": 0x9, "F": 0xE,
    "Z": 0xA, "X": 0x0, "C": 0xB, "V": 0xF,
}

@dataclass
class MachineConfig:
    quirks: QuirkConfig = field(default_factory=QuirkConfig)
    stack_limit: Optional[int] = None  # None = 上限なし
    seed: Optional[int] = None         # Cxkk 用乱数のシード
    instructions_per_second: int = 700
    timer_hz: int = 60
    scale: int = 12
    key_map: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_KEY_MAP))
