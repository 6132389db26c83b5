# src/chip8_vm/ui/app.py
"""
PySide6アプリケーションのエントリポイント。
コマンドライン引数からROMとマシン構成を読み込み、メインウィンドウを起動します。
"""
import argparse
import sys
from typing import List, Optional

from PySide6.QtWidgets import QApplication

from chip8_vm.config.loader import ConfigLoader
from chip8_vm.config.models import MachineConfig
from chip8_vm.core.errors import Chip8Fault
from chip8_vm.loader.loader import RomLoader
from .main_window import MainWindow

def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chip8-vm", description="CHIP-8 virtual machine")
    parser.add_argument("rom", nargs="?", help="ROM file to run (read from stdin when omitted)")
    parser.add_argument("-c", "--config", help="machine config YAML file")
    parser.add_argument("-s", "--scale", type=int, help="pixel scale factor (overrides config)")
    return parser

# @intent:responsibility 引数を解釈し、構成とROMを読み込んでからウィンドウを表示します。
# @intent:post-condition 構成・ROMの読み込み失敗は標準エラーへ出力して終了コード1を返します。
def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    try:
        config = ConfigLoader().load_from_file(args.config) if args.config else MachineConfig()
        if args.scale is not None:
            config.scale = args.scale
        loader = RomLoader()
        rom_data = loader.read_file(args.rom) if args.rom else loader.read_stdin()
    except (OSError, ValueError, Chip8Fault) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    app = QApplication.instance() or QApplication(sys.argv[:1])
    main_win = MainWindow(config=config, rom_data=rom_data)
    main_win.show()
    return app.exec()

if __name__ == '__main__':
    sys.exit(main())
