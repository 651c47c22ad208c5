"""
UIフォント管理モジュール。

レジスタ値や逆アセンブル結果を桁揃えで表示するための等幅フォントを選択します。
"""
from PySide6.QtGui import QFont, QFontDatabase

PREFERRED_MONOSPACE_FONTS = ("Consolas", "Menlo", "DejaVu Sans Mono", "Courier New")

# @intent:responsibility 現在のシステムで利用可能な等幅フォントファミリー名を返します。
def get_monospace_font_family() -> str:
    available_families = set(QFontDatabase.families())
    for font in PREFERRED_MONOSPACE_FONTS:
        if font in available_families:
            return font
    # 見つからなければQtのシステム既定の等幅フォント
    return QFontDatabase.systemFont(QFontDatabase.FixedFont).family()

def get_monospace_font(size: int = 10) -> QFont:
    return QFont(get_monospace_font_family(), size)
