"""
命令種別と命令実装のマッピング定義。
"""
from chip8_vm.common.types import OpKind
from . import alu
from . import control
from . import display
from . import keys
from . import load

# @intent:map 命令種別からデコード関数へのマッピングテーブル。
DECODE_MAP = {
    # Control
    OpKind.RET: control.decode_ret,
    OpKind.JP: control.decode_jp,
    OpKind.CALL: control.decode_call,
    OpKind.SE_IMM: control.decode_se_imm,
    OpKind.SNE_IMM: control.decode_sne_imm,
    OpKind.SE_REG: control.decode_se_reg,
    OpKind.SNE_REG: control.decode_sne_reg,
    OpKind.JP_OFFSET: control.decode_jp_offset,

    # ALU
    OpKind.LD_IMM: alu.decode_ld_imm,
    OpKind.ADD_IMM: alu.decode_add_imm,
    OpKind.LD_REG: alu.decode_ld_reg,
    OpKind.OR: alu.decode_or,
    OpKind.AND: alu.decode_and,
    OpKind.XOR: alu.decode_xor,
    OpKind.ADD_REG: alu.decode_add_reg,
    OpKind.SUB: alu.decode_sub,
    OpKind.SHR: alu.decode_shr,
    OpKind.SUBN: alu.decode_subn,
    OpKind.SHL: alu.decode_shl,
    OpKind.RND: alu.decode_rnd,

    # Index / Timers / Memory
    OpKind.LD_I: load.decode_ld_i,
    OpKind.LD_VX_DT: load.decode_ld_vx_dt,
    OpKind.LD_DT_VX: load.decode_ld_dt_vx,
    OpKind.LD_ST_VX: load.decode_ld_st_vx,
    OpKind.ADD_I: load.decode_add_i,
    OpKind.LD_F: load.decode_ld_f,
    OpKind.BCD: load.decode_bcd,
    OpKind.STORE: load.decode_store,
    OpKind.LOAD: load.decode_load,

    # Display
    OpKind.CLS: display.decode_cls,
    OpKind.DRW: display.decode_drw,

    # Keypad
    OpKind.SKP: keys.decode_skp,
    OpKind.SKNP: keys.decode_sknp,
    OpKind.LD_VX_K: keys.decode_ld_vx_k,
}

# @intent:map 命令種別から実行関数へのマッピングテーブル。
EXECUTE_MAP = {
    # Control
    OpKind.RET: control.execute_ret,
    OpKind.JP: control.execute_jp,
    OpKind.CALL: control.execute_call,
    OpKind.SE_IMM: control.execute_se_imm,
    OpKind.SNE_IMM: control.execute_sne_imm,
    OpKind.SE_REG: control.execute_se_reg,
    OpKind.SNE_REG: control.execute_sne_reg,
    OpKind.JP_OFFSET: control.execute_jp_offset,

    # ALU
    OpKind.LD_IMM: alu.execute_ld_imm,
    OpKind.ADD_IMM: alu.execute_add_imm,
    OpKind.LD_REG: alu.execute_ld_reg,
    OpKind.OR: alu.execute_or,
    OpKind.AND: alu.execute_and,
    OpKind.XOR: alu.execute_xor,
    OpKind.ADD_REG: alu.execute_add_reg,
    OpKind.SUB: alu.execute_sub,
    OpKind.SHR: alu.execute_shr,
    OpKind.SUBN: alu.execute_subn,
    OpKind.SHL: alu.execute_shl,
    OpKind.RND: alu.execute_rnd,

    # Index / Timers / Memory
    OpKind.LD_I: load.execute_ld_i,
    OpKind.LD_VX_DT: load.execute_ld_vx_dt,
    OpKind.LD_DT_VX: load.execute_ld_dt_vx,
    OpKind.LD_ST_VX: load.execute_ld_st_vx,
    OpKind.ADD_I: load.execute_add_i,
    OpKind.LD_F: load.execute_ld_f,
    OpKind.BCD: load.execute_bcd,
    OpKind.STORE: load.execute_store,
    OpKind.LOAD: load.execute_load,

    # Display
    OpKind.CLS: display.execute_cls,
    OpKind.DRW: display.execute_drw,

    # Keypad
    OpKind.SKP: keys.execute_skp,
    OpKind.SKNP: keys.execute_sknp,
    OpKind.LD_VX_K: keys.execute_ld_vx_k,
}
