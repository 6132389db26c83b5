"""
画面命令（00E0, Dxyn）の単体テスト。
"""
import unittest

from chip8_vm.config.builder import MachineBuilder
from chip8_vm.core.state import Chip8State
from chip8_vm.instructions import ExecutionEnvironment, decode_instruction, execute_instruction
from chip8_vm.peripherals.font import glyph_address

class TestDraw(unittest.TestCase):
    def setUp(self):
        self.state = Chip8State()
        self.bus = MachineBuilder().build_bus()
        self.env = ExecutionEnvironment()
        self.state.i = 0x300

    def run_word(self, word):
        execute_instruction(decode_instruction(word), self.state, self.bus, self.env)

    def test_cls(self):
        self.state.framebuffer.xor_pixel(1, 1)
        self.run_word(0x00E0)
        self.assertEqual(sum(map(sum, self.state.framebuffer.snapshot())), 0)

    def test_draw_rows(self):
        self.bus.load(0x300, b"\xFF\x00")
        self.run_word(0xD002)
        fb = self.state.framebuffer
        self.assertTrue(all(fb.get_pixel(x, 0) for x in range(8)))
        self.assertEqual(sum(map(sum, fb.snapshot())), 8)
        self.assertEqual(self.state.vf, 0)

    # @intent:test_case_xor 同じスプライトを同じ位置に2回描画すると元に戻り、2回目はVF=1となることを検証します。
    def test_double_draw_restores_framebuffer(self):
        self.bus.load(self.state.i, b"\x3C\x42\x81")
        self.state.v[1], self.state.v[2] = 10, 5
        before = self.state.framebuffer.snapshot()
        self.run_word(0xD123)
        self.assertEqual(self.state.vf, 0)
        self.assertNotEqual(self.state.framebuffer.snapshot(), before)
        self.run_word(0xD123)
        self.assertEqual(self.state.vf, 1)
        self.assertEqual(self.state.framebuffer.snapshot(), before)

    def test_draw_wraps_both_axes(self):
        self.bus.load(0x300, b"\xC0\xC0")
        self.state.v[1], self.state.v[2] = 63, 31
        self.run_word(0xD122)
        fb = self.state.framebuffer
        for x, y in ((63, 31), (0, 31), (63, 0), (0, 0)):
            self.assertTrue(fb.get_pixel(x, y))
        self.assertEqual(sum(map(sum, fb.snapshot())), 4)

    def test_origin_is_taken_modulo_display(self):
        self.bus.load(0x300, b"\x80")
        self.state.v[1], self.state.v[2] = 64 + 3, 32 + 4
        self.run_word(0xD121)
        self.assertTrue(self.state.framebuffer.get_pixel(3, 4))

    def test_draw_zero_rows_is_noop(self):
        self.state.vf = 1
        self.run_word(0xD120)
        self.assertEqual(sum(map(sum, self.state.framebuffer.snapshot())), 0)
        self.assertEqual(self.state.vf, 0)

    # @intent:test_case_flag_order VFを座標に指定した場合、VFを初期化する前の値が使われることを検証します。
    def test_draw_with_vf_as_coordinate(self):
        self.bus.load(0x300, b"\x80")
        self.state.v[0xF] = 7
        self.state.v[1] = 2
        self.run_word(0xDF11)
        self.assertTrue(self.state.framebuffer.get_pixel(7, 2))
        self.assertEqual(self.state.vf, 0)

    def test_draw_font_glyph(self):
        self.bus.load(glyph_address(0), bytes([0xF0, 0x90, 0x90, 0x90, 0xF0]))
        self.state.i = glyph_address(0)
        self.run_word(0xD005)
        fb = self.state.framebuffer
        self.assertEqual(sum(map(sum, fb.snapshot())), 14)
        self.assertTrue(fb.get_pixel(0, 1))
        self.assertFalse(fb.get_pixel(1, 1))

    def test_collision_only_counts_on_to_off(self):
        self.bus.load(0x300, b"\x80\x40")
        self.run_word(0xD001)
        self.state.i = 0x301
        self.run_word(0xD001)
        self.assertEqual(self.state.vf, 0)
        self.assertEqual(sum(map(sum, self.state.framebuffer.snapshot())), 2)

if __name__ == '__main__':
    unittest.main()
