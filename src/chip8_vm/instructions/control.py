"""
制御命令（ジャンプ、サブルーチン、条件スキップ）の実装。
"""
from chip8_vm.common.types import OpKind
from chip8_vm.core.snapshot import Operation
from chip8_vm.core.state import Chip8State
from chip8_vm.transport.bus import Bus
from .base import ExecutionEnvironment, make_operation, reg, imm, addr, skip_next, push_return, pop_return

# --- RET (00EE) ---
def decode_ret(word: int) -> Operation:
    return make_operation(word, OpKind.RET, "RET")

# @intent:responsibility コールスタックから戻りアドレスを取り出してPCに設定します。
def execute_ret(state: Chip8State, bus: Bus, op: Operation, env: ExecutionEnvironment) -> None:
    state.pc = pop_return(state)

# --- JP (1nnn) ---
def decode_jp(word: int) -> Operation:
    return make_operation(word, OpKind.JP, "JP", addr(word & 0xFFF))

def execute_jp(state: Chip8State, bus: Bus, op: Operation, env: ExecutionEnvironment) -> None:
    state.pc = op.nnn

# --- CALL (2nnn) ---
def decode_call(word: int) -> Operation:
    return make_operation(word, OpKind.CALL, "CALL", addr(word & 0xFFF))

# @intent:responsibility 戻りアドレスをプッシュしてからジャンプします。
def execute_call(state: Chip8State, bus: Bus, op: Operation, env: ExecutionEnvironment) -> None:
    # state.pc は step() のフェッチで既に次の命令を指している
    push_return(state, env, state.pc)
    state.pc = op.nnn

# --- SE Vx, kk (3xkk) ---
def decode_se_imm(word: int) -> Operation:
    return make_operation(word, OpKind.SE_IMM, "SE", reg((word >> 8) & 0xF), imm(word & 0xFF))

def execute_se_imm(state: Chip8State, bus: Bus, op: Operation, env: ExecutionEnvironment) -> None:
    if state.v[op.x] == op.kk:
        skip_next(state)

# --- SNE Vx, kk (4xkk) ---
def decode_sne_imm(word: int) -> Operation:
    return make_operation(word, OpKind.SNE_IMM, "SNE", reg((word >> 8) & 0xF), imm(word & 0xFF))

def execute_sne_imm(state: Chip8State, bus: Bus, op: Operation, env: ExecutionEnvironment) -> None:
    if state.v[op.x] != op.kk:
        skip_next(state)

# --- SE Vx, Vy (5xy0) ---
def decode_se_reg(word: int) -> Operation:
    return make_operation(word, OpKind.SE_REG, "SE", reg((word >> 8) & 0xF), reg((word >> 4) & 0xF))

def execute_se_reg(state: Chip8State, bus: Bus, op: Operation, env: ExecutionEnvironment) -> None:
    if state.v[op.x] == state.v[op.y]:
        skip_next(state)

# --- SNE Vx, Vy (9xy0) ---
def decode_sne_reg(word: int) -> Operation:
    return make_operation(word, OpKind.SNE_REG, "SNE", reg((word >> 8) & 0xF), reg((word >> 4) & 0xF))

def execute_sne_reg(state: Chip8State, bus: Bus, op: Operation, env: ExecutionEnvironment) -> None:
    if state.v[op.x] != state.v[op.y]:
        skip_next(state)

# --- JP V0, nnn (Bnnn) ---
def decode_jp_offset(word: int) -> Operation:
    return make_operation(word, OpKind.JP_OFFSET, "JP", "V0", addr(word & 0xFFF))

# jump_offset_uses_vx 有効時の表記 (JP Vx, xnn)
def decode_jp_offset_vx(word: int) -> Operation:
    return make_operation(word, OpKind.JP_OFFSET, "JP", reg((word >> 8) & 0xF), addr(word & 0xFFF))

# @intent:responsibility オフセット付きジャンプ。加算するレジスタはクワーク設定で選択します。
# @intent:rationale 既定は nnn + V0。jump_offset_uses_vx が有効なら nnn の上位ニブル x を使い nnn + Vx。
def execute_jp_offset(state: Chip8State, bus: Bus, op: Operation, env: ExecutionEnvironment) -> None:
    offset_reg = op.x if env.quirks.jump_offset_uses_vx else 0
    state.pc = (op.nnn + state.v[offset_reg]) & 0xFFFF
