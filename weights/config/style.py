"""
weights.config.style

Default dark theme for the editor and the printer.
The `weights` class styles the annotations; everything else colours the
outline source through pygments tokens.
"""

from prompt_toolkit.styles import Style

STYLE_DARK = {
    # ------------------------------
    # BASE
    # ------------------------------
    "": "#d0d0d0",
    "pygments.background": "#1e1e1e",
    "pygments.text": "#d0d0d0",
    # ------------------------------
    # OUTLINE (Markdown, Org, etc.)
    # ------------------------------
    "pygments.generic.heading": "bold #f0d080",
    "pygments.generic.subheading": "#e5c07b",
    "pygments.generic.emphasis": "italic #ce9178",
    "pygments.generic.strong": "bold #ffffff",
    "pygments.keyword": "#c586c0",
    "pygments.literal.string": "#ce9178",
    "pygments.literal.string.backtick": "#9ad5ff",
    "pygments.name.tag": "#4ec9b0",
    "pygments.comment": "italic #6a8e5a",
    # ------------------------------
    # ANNOTATIONS
    # ------------------------------
    "weights": "italic #7f8c98",
    # ------------------------------
    # STATUS BAR
    # ------------------------------
    "status": "#adb5bd",
    "status.position": "#adb5bd",
    "status.message": "italic #84ff84",
}

style_dark = Style.from_dict(STYLE_DARK)
