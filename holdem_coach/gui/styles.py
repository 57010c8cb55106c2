"""QSS stylesheet constants for the coach GUI."""

APP_STYLESHEET = """
QMainWindow {
    background: #f5f7f4;
}

QGroupBox {
    font-weight: bold;
    font-size: 12px;
    color: #1f2937;
    border: 1px solid #d9e2d5;
    border-radius: 8px;
    margin-top: 12px;
    padding-top: 14px;
}

QGroupBox::title {
    subcontrol-origin: margin;
    subcontrol-position: top left;
    padding: 0 6px;
    color: #166534;
}

QLabel {
    font-size: 12px;
    color: #1f2937;
}

QDoubleSpinBox, QComboBox, QLineEdit {
    padding: 4px 6px;
    border: 1px solid #cbd5c0;
    border-radius: 4px;
    background: white;
}

QDoubleSpinBox {
    min-width: 70px;
}

QComboBox {
    min-width: 80px;
}

QDoubleSpinBox:focus, QComboBox:focus, QLineEdit:focus {
    border-color: #16a34a;
}

QComboBox::drop-down {
    border: none;
    width: 20px;
}

QProgressBar {
    border: 1px solid #cbd5c0;
    border-radius: 4px;
    background: white;
    text-align: center;
    max-height: 16px;
}

QProgressBar::chunk {
    background: #22c55e;
    border-radius: 3px;
}
"""
