"""
レジスタ演算命令（ロード、加減算、論理演算、シフト、乱数）の実装。

フラグ(VF)の書き込みは必ず演算結果の書き込みの後に行います。
x == F の場合でもフラグの値が残ります。
"""
from chip8_vm.common.types import OpKind
from chip8_vm.core.snapshot import Operation
from chip8_vm.core.state import Chip8State
from chip8_vm.transport.bus import Bus
from .base import ExecutionEnvironment, make_operation, reg, imm

def _xy(word: int):
    return reg((word >> 8) & 0xF), reg((word >> 4) & 0xF)

# @intent:utility_function 借りの有無からVFの値を決めます。極性はクワーク設定に従います。
def _borrow_flag(no_borrow: bool, env: ExecutionEnvironment) -> int:
    if env.quirks.vf_set_on_no_borrow:
        return 1 if no_borrow else 0
    return 0 if no_borrow else 1

# --- LD Vx, kk (6xkk) ---
def decode_ld_imm(word: int) -> Operation:
    return make_operation(word, OpKind.LD_IMM, "LD", reg((word >> 8) & 0xF), imm(word & 0xFF))

def execute_ld_imm(state: Chip8State, bus: Bus, op: Operation, env: ExecutionEnvironment) -> None:
    state.v[op.x] = op.kk

# --- ADD Vx, kk (7xkk) ---
def decode_add_imm(word: int) -> Operation:
    return make_operation(word, OpKind.ADD_IMM, "ADD", reg((word >> 8) & 0xF), imm(word & 0xFF))

# @intent:responsibility 即値加算。8bitで折り返し、フラグは変更しません。
def execute_add_imm(state: Chip8State, bus: Bus, op: Operation, env: ExecutionEnvironment) -> None:
    state.v[op.x] = (state.v[op.x] + op.kk) & 0xFF

# --- LD Vx, Vy (8xy0) ---
def decode_ld_reg(word: int) -> Operation:
    return make_operation(word, OpKind.LD_REG, "LD", *_xy(word))

def execute_ld_reg(state: Chip8State, bus: Bus, op: Operation, env: ExecutionEnvironment) -> None:
    state.v[op.x] = state.v[op.y]

# --- OR / AND / XOR (8xy1 / 8xy2 / 8xy3) ---
def decode_or(word: int) -> Operation:
    return make_operation(word, OpKind.OR, "OR", *_xy(word))

def decode_and(word: int) -> Operation:
    return make_operation(word, OpKind.AND, "AND", *_xy(word))

def decode_xor(word: int) -> Operation:
    return make_operation(word, OpKind.XOR, "XOR", *_xy(word))

def execute_or(state: Chip8State, bus: Bus, op: Operation, env: ExecutionEnvironment) -> None:
    state.v[op.x] = state.v[op.x] | state.v[op.y]
    if env.quirks.logic_resets_vf:
        state.vf = 0

def execute_and(state: Chip8State, bus: Bus, op: Operation, env: ExecutionEnvironment) -> None:
    state.v[op.x] = state.v[op.x] & state.v[op.y]
    if env.quirks.logic_resets_vf:
        state.vf = 0

def execute_xor(state: Chip8State, bus: Bus, op: Operation, env: ExecutionEnvironment) -> None:
    state.v[op.x] = state.v[op.x] ^ state.v[op.y]
    if env.quirks.logic_resets_vf:
        state.vf = 0

# --- ADD Vx, Vy (8xy4) ---
def decode_add_reg(word: int) -> Operation:
    return make_operation(word, OpKind.ADD_REG, "ADD", *_xy(word))

# @intent:responsibility レジスタ加算。折り返し前の和が255を超えた場合のみVF=1。
def execute_add_reg(state: Chip8State, bus: Bus, op: Operation, env: ExecutionEnvironment) -> None:
    total = state.v[op.x] + state.v[op.y]
    state.v[op.x] = total & 0xFF
    state.vf = 1 if total > 0xFF else 0

# --- SUB Vx, Vy (8xy5) ---
def decode_sub(word: int) -> Operation:
    return make_operation(word, OpKind.SUB, "SUB", *_xy(word))

def execute_sub(state: Chip8State, bus: Bus, op: Operation, env: ExecutionEnvironment) -> None:
    vx, vy = state.v[op.x], state.v[op.y]
    state.v[op.x] = (vx - vy) & 0xFF
    state.vf = _borrow_flag(vx >= vy, env)

# --- SUBN Vx, Vy (8xy7) ---
def decode_subn(word: int) -> Operation:
    return make_operation(word, OpKind.SUBN, "SUBN", *_xy(word))

def execute_subn(state: Chip8State, bus: Bus, op: Operation, env: ExecutionEnvironment) -> None:
    vx, vy = state.v[op.x], state.v[op.y]
    state.v[op.x] = (vy - vx) & 0xFF
    state.vf = _borrow_flag(vy >= vx, env)

# --- SHR / SHL (8xy6 / 8xyE) ---
def decode_shr(word: int) -> Operation:
    return make_operation(word, OpKind.SHR, "SHR", *_xy(word))

def decode_shl(word: int) -> Operation:
    return make_operation(word, OpKind.SHL, "SHL", *_xy(word))

# @intent:responsibility シフト元レジスタを選択します。既定はVx自身、shift_uses_vy ならVy。
def _shift_source(state: Chip8State, op: Operation, env: ExecutionEnvironment) -> int:
    return state.v[op.y] if env.quirks.shift_uses_vy else state.v[op.x]

def execute_shr(state: Chip8State, bus: Bus, op: Operation, env: ExecutionEnvironment) -> None:
    source = _shift_source(state, op, env)
    state.v[op.x] = source >> 1
    state.vf = source & 0x1

def execute_shl(state: Chip8State, bus: Bus, op: Operation, env: ExecutionEnvironment) -> None:
    source = _shift_source(state, op, env)
    state.v[op.x] = (source << 1) & 0xFF
    state.vf = (source >> 7) & 0x1

# --- RND Vx, kk (Cxkk) ---
def decode_rnd(word: int) -> Operation:
    return make_operation(word, OpKind.RND, "RND", reg((word >> 8) & 0xF), imm(word & 0xFF))

# @intent:responsibility シード指定可能な乱数源から1バイトを取り出し、kkでマスクします。
def execute_rnd(state: Chip8State, bus: Bus, op: Operation, env: ExecutionEnvironment) -> None:
    state.v[op.x] = env.rng.randint(0, 0xFF) & op.kk
