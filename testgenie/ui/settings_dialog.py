"""Settings dialog for configuring TestGenie preferences."""

from __future__ import annotations

from PySide6.QtWidgets import (
    QDialog,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QSpinBox,
    QPushButton,
    QGroupBox,
)


class SettingsDialog(QDialog):
    """Dialog for font sizes and the API server address."""

    def __init__(
        self,
        parent=None,
        ui_font_size: int = 10,
        question_font_size: int = 14,
        api_url: str = "",
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setModal(True)
        self.setMinimumWidth(420)
        
        self._ui_font_size = ui_font_size
        self._question_font_size = question_font_size
        self._api_url = api_url
        
        self._build_ui()
    
    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)
        
        font_group = QGroupBox("Font Sizes")
        font_layout = QVBoxLayout()
        font_group.setLayout(font_layout)
        
        ui_font_row = QHBoxLayout()
        ui_font_label = QLabel("UI Font Size (buttons, forms):")
        self.ui_font_spinbox = QSpinBox()
        self.ui_font_spinbox.setRange(8, 24)
        self.ui_font_spinbox.setValue(self._ui_font_size)
        self.ui_font_spinbox.setSuffix(" pt")
        ui_font_row.addWidget(ui_font_label)
        ui_font_row.addStretch()
        ui_font_row.addWidget(self.ui_font_spinbox)
        font_layout.addLayout(ui_font_row)
        
        question_font_row = QHBoxLayout()
        question_font_label = QLabel("Question Font Size:")
        question_font_label.setToolTip("Font size for question text, options and the results review")
        self.question_font_spinbox = QSpinBox()
        self.question_font_spinbox.setRange(10, 32)
        self.question_font_spinbox.setValue(self._question_font_size)
        self.question_font_spinbox.setSuffix(" pt")
        question_font_row.addWidget(question_font_label)
        question_font_row.addStretch()
        question_font_row.addWidget(self.question_font_spinbox)
        font_layout.addLayout(question_font_row)
        
        layout.addWidget(font_group)
        
        server_group = QGroupBox("Server")
        server_layout = QVBoxLayout()
        server_group.setLayout(server_layout)
        self.api_url_edit = QLineEdit(self._api_url)
        self.api_url_edit.setPlaceholderText("http://localhost:5000/api")
        self.api_url_edit.setToolTip("Base URL of the TestGenie API. Changing it signs you out.")
        server_layout.addWidget(QLabel("API URL:"))
        server_layout.addWidget(self.api_url_edit)
        layout.addWidget(server_group)
        
        button_row = QHBoxLayout()
        button_row.addStretch()
        
        self.cancel_button = QPushButton("Cancel")
        self.cancel_button.clicked.connect(self.reject)  # type: ignore[arg-type]
        button_row.addWidget(self.cancel_button)
        
        self.apply_button = QPushButton("Apply")
        self.apply_button.clicked.connect(self.accept)  # type: ignore[arg-type]
        self.apply_button.setDefault(True)
        button_row.addWidget(self.apply_button)
        
        layout.addLayout(button_row)
    
    def get_ui_font_size(self) -> int:
        return self.ui_font_spinbox.value()
    
    def get_question_font_size(self) -> int:
        return self.question_font_spinbox.value()

    def get_api_url(self) -> str:
        """Return the entered URL without a trailing slash, or the previous value if blank."""
        url = self.api_url_edit.text().strip().rstrip("/")
        return url or self._api_url
