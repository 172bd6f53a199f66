"""
Main window - current symbol, typed text and edit buttons.
"""
from typing import Optional
from PyQt5.QtWidgets import QMainWindow, QApplication, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton
from PyQt5.QtCore import Qt, pyqtSignal

DEFAULT_THEME = """
#CentralWidget { background: #ede7e7; }
#StatusLabel { color: #272704; font-size: 28px; font-weight: bold; }
#TextLabel {
    border: 2px solid #FFFFC5;
    border-radius: 12px;
    background: rgba(255, 255, 197, 0.1);
    padding: 10px;
    font-size: 18px;
    color: #210303;
}
#ClearButton { background: red; color: white; border-radius: 8px; padding: 8px 16px; font-weight: bold; }
#BackButton { background: orange; color: white; border-radius: 8px; padding: 8px 16px; font-weight: bold; }
"""

PLACEHOLDER = "Start signing..."


class SignWindow(QMainWindow):
    """
    Shows what the classifier currently sees and the text typed so far.

    Edits are emitted as signals rather than applied here, so the pipeline
    owner stays the only writer of the text.
    """
    backspace_requested = pyqtSignal()
    clear_requested = pyqtSignal()
    space_requested = pyqtSignal()

    def __init__(self, position: str = 'right', stay_on_top: bool = True, parent=None):
        super().__init__(parent)
        self._position = position

        self.setWindowTitle("Fingerspell")
        self.setObjectName("SignWindow")
        if stay_on_top:
            self.setWindowFlags(self.windowFlags() | Qt.WindowStaysOnTopHint)

        self._setup_ui()
        self.setStyleSheet(DEFAULT_THEME)
        self._position_window()

    def _setup_ui(self):
        """Build the UI."""
        central = QWidget()
        central.setObjectName("CentralWidget")
        layout = QVBoxLayout(central)
        layout.setContentsMargins(15, 15, 15, 15)
        self.setCentralWidget(central)

        self.status_label = QLabel("Loading...")
        self.status_label.setObjectName("StatusLabel")
        self.status_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.status_label)

        self.text_label = QLabel(PLACEHOLDER)
        self.text_label.setObjectName("TextLabel")
        self.text_label.setWordWrap(True)
        self.text_label.setMinimumHeight(50)
        self.text_label.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        layout.addWidget(self.text_label)

        buttons = QHBoxLayout()
        self.clear_button = QPushButton("CLEAR")
        self.clear_button.setObjectName("ClearButton")
        self.clear_button.clicked.connect(self.clear_requested.emit)
        buttons.addWidget(self.clear_button)

        self.back_button = QPushButton("BACK")
        self.back_button.setObjectName("BackButton")
        self.back_button.clicked.connect(self.backspace_requested.emit)
        buttons.addWidget(self.back_button)

        for button in (self.clear_button, self.back_button):
            button.setFocusPolicy(Qt.NoFocus)  # Keep Space/Backspace for keyPressEvent
        layout.addLayout(buttons)

    def _position_window(self):
        """Dock next to the screen edge, vertically centered."""
        screen = QApplication.primaryScreen()
        if screen is None:
            return

        geo = screen.availableGeometry()
        w = max(360, int(geo.width() * 0.25))
        h = max(220, int(geo.height() * 0.3))
        margin = int(geo.width() * 0.02)

        if self._position == 'left':
            x = geo.x() + margin
        else:
            x = geo.x() + geo.width() - w - margin
        y = geo.y() + (geo.height() - h) // 2

        self.resize(w, h)
        self.move(x, y)

    def set_status(self, status: str):
        self.status_label.setText(status)

    def set_text(self, text: str):
        self.text_label.setText(text or PLACEHOLDER)

    def show_error(self, message: Optional[str]):
        self.status_label.setText(f"Error: {message}")

    def keyPressEvent(self, event):
        key = event.key()
        if key == Qt.Key_Backspace:
            self.backspace_requested.emit()
        elif key == Qt.Key_Escape:
            self.clear_requested.emit()
        elif key == Qt.Key_Space:
            self.space_requested.emit()
        else:
            super().keyPressEvent(event)
