# chip8_tracer/core/errors.py
"""
例外定義モジュール。

実行を継続できない致命的なエラーを表す例外階層を定義します。
未対応オペコードはエラーではなく no-op として扱われるため、ここには含まれません。
"""

# @intent:responsibility 本パッケージが送出する全ての例外の基底クラスです。
class Chip8Error(Exception):
    pass

# @intent:responsibility マップ外のアドレスへのアクセスを表します。
# @intent:rationale 既存の呼び出し側が IndexError として捕捉できるよう多重継承します。
class MemoryRangeError(Chip8Error, IndexError):
    pass

# @intent:responsibility 空のコールスタックからの RET を表します。
class StackUnderflowError(Chip8Error):
    pass

# @intent:responsibility スタック上限を超える CALL を表します。
class StackOverflowError(Chip8Error):
    pass

# @intent:responsibility プログラム領域に収まらないイメージを表します。
class ProgramTooLargeError(Chip8Error, ValueError):
    pass

# @intent:responsibility フレームバッファ範囲外の座標指定を表します。
class PixelRangeError(Chip8Error, IndexError):
    pass

# @intent:responsibility 不正なシステム構成を表します。
class ConfigError(Chip8Error, ValueError):
    pass
