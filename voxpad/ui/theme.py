"""Design tokens and stylesheet for the Voxpad window.

The stylesheet template uses {{TOKEN}} placeholders resolved from the
token tables below, so colors stay consistent between QSS and the icons
drawn with QPainter.
"""
import re
import warnings

COLORS_DARK = {
    "BG_PRIMARY": "#0f1115",
    "BG_SECONDARY": "#151922",
    "BG_TERTIARY": "#1d2430",
    "BG_HOVER": "#263247",
    "BG_DISABLED": "#1b2230",
    "BORDER_DEFAULT": "#2a3446",
    "BORDER_FOCUS": "#4c8eff",
    "TEXT_PRIMARY": "#edf2fb",
    "TEXT_SECONDARY": "#b4c0d4",
    "TEXT_DISABLED": "#657389",
    "TEXT_ON_ACCENT": "#ffffff",
    "ACCENT_PRIMARY": "#4c8eff",
    "ACCENT_HOVER": "#63a0ff",
    "SUCCESS": "#34d399",
    "ERROR": "#fb7185",
    "WARNING": "#fbbf24",
    "RECORDING": "#ef4444",
}

COLORS_LIGHT = {
    "BG_PRIMARY": "#f3f6fb",
    "BG_SECONDARY": "#f8fafd",
    "BG_TERTIARY": "#ecf1f8",
    "BG_HOVER": "#e2eaf5",
    "BG_DISABLED": "#f0f4fa",
    "BORDER_DEFAULT": "#cfd8e8",
    "BORDER_FOCUS": "#2f73e4",
    "TEXT_PRIMARY": "#1b2940",
    "TEXT_SECONDARY": "#495a75",
    "TEXT_DISABLED": "#9ba9bd",
    "TEXT_ON_ACCENT": "#ffffff",
    "ACCENT_PRIMARY": "#2f73e4",
    "ACCENT_HOVER": "#2563c9",
    "SUCCESS": "#0f9f6e",
    "ERROR": "#d63a62",
    "WARNING": "#c28b06",
    "RECORDING": "#dc2626",
}

METRICS = {
    "FONT_FAMILY": "'Segoe UI', Inter, 'Helvetica Neue', Arial, sans-serif",
    "FONT_SIZE_BODY": "14px",
    "FONT_SIZE_SMALL": "12px",
    "RADIUS": "8px",
    "SPACING_SMALL": "8px",
    "SPACING_MEDIUM": "16px",
}

STYLESHEET = """
QWidget {
    background-color: {{BG_PRIMARY}};
    color: {{TEXT_PRIMARY}};
    font-family: {{FONT_FAMILY}};
    font-size: {{FONT_SIZE_BODY}};
}
QPushButton {
    background-color: {{BG_TERTIARY}};
    border: 1px solid {{BORDER_DEFAULT}};
    border-radius: {{RADIUS}};
    padding: {{SPACING_SMALL}} {{SPACING_MEDIUM}};
}
QPushButton:hover { background-color: {{BG_HOVER}}; }
QPushButton:disabled {
    background-color: {{BG_DISABLED}};
    color: {{TEXT_DISABLED}};
}
QPushButton#recordButton {
    background-color: {{ACCENT_PRIMARY}};
    color: {{TEXT_ON_ACCENT}};
    border: none;
}
QPushButton#recordButton:hover { background-color: {{ACCENT_HOVER}}; }
QPushButton#stopButton {
    background-color: {{RECORDING}};
    color: {{TEXT_ON_ACCENT}};
    border: none;
}
QPlainTextEdit {
    background-color: {{BG_SECONDARY}};
    border: 1px solid {{BORDER_DEFAULT}};
    border-radius: {{RADIUS}};
    padding: {{SPACING_SMALL}};
}
QPlainTextEdit:focus { border-color: {{BORDER_FOCUS}}; }
QLabel#statusText { color: {{TEXT_SECONDARY}}; }
QLabel#recordingTime {
    color: {{RECORDING}};
    font-size: {{FONT_SIZE_SMALL}};
}
QProgressBar {
    background-color: {{BG_TERTIARY}};
    border: none;
    border-radius: {{RADIUS}};
    text-align: center;
}
QProgressBar::chunk {
    background-color: {{ACCENT_PRIMARY}};
    border-radius: {{RADIUS}};
}
"""


def get_tokens(theme: str = "dark") -> dict:
    """Get all design tokens for "dark" or "light"."""
    colors = COLORS_DARK if theme == "dark" else COLORS_LIGHT
    return {**colors, **METRICS}


def replace_tokens(qss: str, theme: str = "dark") -> str:
    """Replace {{TOKEN}} placeholders in QSS with actual design values."""
    tokens = get_tokens(theme)
    missing = []

    def replacer(match):
        token_name = match.group(1)
        if token_name in tokens:
            return tokens[token_name]
        missing.append(token_name)
        return match.group(0)

    result = re.sub(r"\{\{([A-Z_]+)\}\}", replacer, qss)

    if missing:
        warnings.warn(
            f"Missing theme tokens: {', '.join(sorted(set(missing)))}",
            stacklevel=2,
        )

    return result


def build_stylesheet(theme: str = "dark") -> str:
    return replace_tokens(STYLESHEET, theme)


def get_color(color_name: str, theme: str = "dark") -> str:
    """Get a color value for programmatic drawing. Raises KeyError if unknown."""
    return get_tokens(theme)[color_name]
