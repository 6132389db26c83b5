"""
chip8_vm.instructions のデコード処理の単体テスト。
"""
import pytest

from chip8_vm.common.types import OpKind
from chip8_vm.instructions import classify, decode_instruction, join_nibbles, split_nibbles
from chip8_vm.instructions.maps import DECODE_MAP, EXECUTE_MAP

class TestNibbles:
    def test_split_order_is_most_significant_first(self):
        assert split_nibbles(0xD12F) == (0xD, 0x1, 0x2, 0xF)

    # @intent:test_case_lossless 全ての16bit命令語でニブル分解が可逆であることを検証します。
    def test_split_join_is_lossless_for_every_word(self):
        for word in range(0x10000):
            assert join_nibbles(split_nibbles(word)) == word

class TestClassify:
    @pytest.mark.parametrize("word, kind", [
        (0x00E0, OpKind.CLS),
        (0x00EE, OpKind.RET),
        (0x1ABC, OpKind.JP),
        (0x2ABC, OpKind.CALL),
        (0x3A12, OpKind.SE_IMM),
        (0x4A12, OpKind.SNE_IMM),
        (0x5AB0, OpKind.SE_REG),
        (0x6A12, OpKind.LD_IMM),
        (0x7A12, OpKind.ADD_IMM),
        (0x8AB0, OpKind.LD_REG),
        (0x8AB1, OpKind.OR),
        (0x8AB2, OpKind.AND),
        (0x8AB3, OpKind.XOR),
        (0x8AB4, OpKind.ADD_REG),
        (0x8AB5, OpKind.SUB),
        (0x8AB6, OpKind.SHR),
        (0x8AB7, OpKind.SUBN),
        (0x8ABE, OpKind.SHL),
        (0x9AB0, OpKind.SNE_REG),
        (0xAABC, OpKind.LD_I),
        (0xBABC, OpKind.JP_OFFSET),
        (0xCA12, OpKind.RND),
        (0xDAB5, OpKind.DRW),
        (0xEA9E, OpKind.SKP),
        (0xEAA1, OpKind.SKNP),
        (0xFA07, OpKind.LD_VX_DT),
        (0xFA0A, OpKind.LD_VX_K),
        (0xFA15, OpKind.LD_DT_VX),
        (0xFA18, OpKind.LD_ST_VX),
        (0xFA1E, OpKind.ADD_I),
        (0xFA29, OpKind.LD_F),
        (0xFA33, OpKind.BCD),
        (0xFA55, OpKind.STORE),
        (0xFA65, OpKind.LOAD),
    ])
    def test_known_patterns(self, word, kind):
        assert classify(word) == kind
        assert decode_instruction(word).kind == kind

    @pytest.mark.parametrize("word", [0x0000, 0x0123, 0x00E1, 0x5121, 0x9AB1, 0x8AB8, 0x8ABF, 0xE000, 0xF000, 0xFAFF])
    def test_undefined_patterns_are_unknown(self, word):
        assert classify(word) == OpKind.UNKNOWN
        op = decode_instruction(word)
        assert op.kind == OpKind.UNKNOWN
        assert op.mnemonic == "UNKNOWN"
        assert op.operands == [f"0x{word:04X}"]

    # @intent:test_case_total 全ての命令語がちょうど1つの種別に分類され、既知の種別は必ず実行可能であることを検証します。
    def test_every_word_classifies_to_exactly_one_kind(self):
        seen = set()
        for word in range(0x10000):
            kind = classify(word)
            assert isinstance(kind, OpKind)
            seen.add(kind)
            if kind != OpKind.UNKNOWN:
                assert kind in DECODE_MAP
                assert kind in EXECUTE_MAP
        assert seen == set(OpKind)

class TestOperationFields:
    def test_operand_fields(self):
        op = decode_instruction(0xD12F)
        assert op.nibbles == (0xD, 0x1, 0x2, 0xF)
        assert (op.x, op.y, op.n) == (1, 2, 0xF)
        assert op.kk == 0x2F
        assert op.nnn == 0x12F
        assert op.length == 2

    def test_mnemonic_and_operands(self):
        op = decode_instruction(0xD12F)
        assert op.mnemonic == "DRW"
        assert op.operands == ["V1", "V2", "15"]
        assert decode_instruction(0xA2F0).operands == ["I", "0x2F0"]
        assert decode_instruction(0xF355).operands == ["[I]", "V3"]
