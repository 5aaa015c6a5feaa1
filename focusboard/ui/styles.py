"""QSS stylesheet and colours for FocusBoard."""

from __future__ import annotations

DEFAULT_PALETTE: dict[str, str] = {
    "bg":           "#1A1A2E",
    "bg_secondary": "#232340",
    "surface":      "#2A2A4A",
    "accent":       "#CBA6F7",
    "break":        "#4ECDC4",
    "text":         "#E2E2F0",
    "text_muted":   "#7A7A9A",
    "border":       "#313154",
}


def build_stylesheet(
    palette: dict[str, str] | None = None,
    font_color: str | None = None,
) -> str:
    p = dict(DEFAULT_PALETTE)
    if palette:
        p.update(palette)
    if font_color:
        p["text"] = font_color
    return f"""
    /* ── global ─────────────────────────────────── */
    QWidget {{
        background-color: {p['bg']};
        color: {p['text']};
        font-family: "Helvetica Neue", Arial;
        font-size: 14px;
    }}

    /* ── timer card ─────────────────────────────── */
    QFrame#card {{
        background-color: {p['bg_secondary']};
        border: 1px solid {p['border']};
        border-radius: 16px;
    }}
    QFrame#card[phase="break"] {{
        border: 2px solid {p['break']};
    }}

    QLineEdit#timeField {{
        background: transparent;
        border: none;
        font-size: 56px;
        font-weight: 300;
    }}
    QLineEdit#timeField[editable="true"] {{
        border-bottom: 1px dashed {p['text_muted']};
    }}
    QLabel#timeColon {{
        background: transparent;
        font-size: 56px;
        font-weight: 300;
    }}

    /* ── buttons ────────────────────────────────── */
    QPushButton {{
        background-color: {p['surface']};
        color: {p['text']};
        border: 1px solid {p['border']};
        border-radius: 10px;
        padding: 8px 20px;
        font-weight: 600;
    }}
    QPushButton:hover {{
        border-color: {p['accent']};
    }}
    QPushButton:disabled {{
        color: {p['text_muted']};
        border-color: {p['bg_secondary']};
    }}
    QPushButton#primaryButton {{
        background-color: {p['accent']};
        color: {p['bg']};
        border: none;
    }}

    /* ── announcement popup ─────────────────────── */
    QFrame#popupBackdrop {{
        background-color: rgba(0, 0, 0, 160);
    }}
    QFrame#popupCard {{
        background-color: {p['surface']};
        border: 1px solid {p['accent']};
        border-radius: 14px;
    }}
    QLabel#popupText {{
        background: transparent;
        font-size: 22px;
        font-weight: 600;
    }}
    """
