"""Main Voxpad window: record/stop/copy/clear controls over the controller."""
import threading

from PySide6.QtCore import QObject, QTimer, Signal
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPlainTextEdit,
    QProgressBar,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from voxpad.controller import ControlState, RecorderController, StatusMessage
from voxpad.progress import STATUS_DOWNLOADING, ProgressEvent
from voxpad.ui.icons import render_icon

ICON_SIZE = 20
COPY_FEEDBACK_MS = 2000


class ControllerBridge(QObject):
    """Re-emits controller callbacks as Qt signals.

    The controller fires from worker threads; Qt queues these signals onto
    the GUI thread.
    """

    state_changed = Signal(object)
    status_changed = Signal(object)
    progress_changed = Signal(object)
    transcript_changed = Signal(str)
    copied = Signal()

    def __init__(self, controller: RecorderController):
        super().__init__()
        controller.state_changed.connect(self.state_changed.emit)
        controller.status_changed.connect(self.status_changed.emit)
        controller.progress_changed.connect(self.progress_changed.emit)
        controller.transcript_changed.connect(self.transcript_changed.emit)
        controller.copied.connect(self.copied.emit)


class MainWindow(QMainWindow):
    """Single window: status line, progress bar, buttons, transcript."""

    def __init__(self, controller: RecorderController, theme: str = "dark"):
        super().__init__()
        self.controller = controller
        self.theme = theme
        self._icon_state = controller.status.icon
        self._phase = 0

        self.setWindowTitle("Voxpad")
        self.resize(720, 520)
        self._build_ui()

        self._bridge = ControllerBridge(controller)
        self._bridge.state_changed.connect(self._apply_state)
        self._bridge.status_changed.connect(self._apply_status)
        self._bridge.progress_changed.connect(self._apply_progress)
        self._bridge.transcript_changed.connect(self.transcription_text.setPlainText)
        self._bridge.copied.connect(self._show_copied)

        self._elapsed_timer = QTimer(self)
        self._elapsed_timer.timeout.connect(self._update_recording_time)
        self._animation_timer = QTimer(self)
        self._animation_timer.timeout.connect(self._advance_animation)

        self._apply_state(controller.state)
        self._apply_status(controller.status)

    def _build_ui(self) -> None:
        central = QWidget(self)
        layout = QVBoxLayout(central)

        status_row = QHBoxLayout()
        self.status_icon = QLabel()
        self.status_icon.setFixedSize(ICON_SIZE, ICON_SIZE)
        self.status_text = QLabel()
        self.status_text.setObjectName("statusText")
        self.status_text.setWordWrap(True)
        status_row.addWidget(self.status_icon)
        status_row.addWidget(self.status_text, 1)
        layout.addLayout(status_row)

        self.progress_bar = QProgressBar()
        self.progress_bar.setRange(0, 100)
        self.progress_bar.setFormat("%p%")
        self.progress_bar.hide()
        layout.addWidget(self.progress_bar)

        button_row = QHBoxLayout()
        self.record_button = QPushButton("Start Recording")
        self.record_button.setObjectName("recordButton")
        self.record_button.clicked.connect(lambda: self.controller.start_recording())
        self.stop_button = QPushButton("Stop Recording")
        self.stop_button.setObjectName("stopButton")
        self.stop_button.clicked.connect(lambda: self.controller.stop_recording())
        self.recording_time = QLabel("0:00")
        self.recording_time.setObjectName("recordingTime")
        self.copy_button = QPushButton("Copy")
        self.copy_button.clicked.connect(lambda: self.controller.copy_transcript())
        self.clear_button = QPushButton("Clear")
        self.clear_button.clicked.connect(lambda: self._on_clear_clicked())

        button_row.addWidget(self.record_button)
        button_row.addWidget(self.stop_button)
        button_row.addWidget(self.recording_time)
        button_row.addStretch(1)
        button_row.addWidget(self.copy_button)
        button_row.addWidget(self.clear_button)
        layout.addLayout(button_row)

        self.transcription_text = QPlainTextEdit()
        self.transcription_text.setReadOnly(True)
        self.transcription_text.setPlaceholderText("Your transcription will appear here...")
        layout.addWidget(self.transcription_text, 1)

        self.setCentralWidget(central)

    def start_model_loading(self) -> None:
        """Load the model on a background thread."""
        self.progress_bar.setValue(0)
        self.progress_bar.show()
        threading.Thread(
            target=self.controller.load_model, daemon=True, name="voxpad-model-init"
        ).start()

    # -- controller updates (GUI thread) -----------------------------------

    def _apply_state(self, state: ControlState) -> None:
        self.record_button.setVisible(state.record_visible)
        self.record_button.setEnabled(state.record_enabled)
        self.stop_button.setVisible(state.stop_visible)
        self.stop_button.setEnabled(state.stop_enabled)
        self.copy_button.setEnabled(state.copy_enabled)
        self.clear_button.setEnabled(state.clear_enabled)
        self.recording_time.setVisible(state.recording)

        if state.recording:
            self._update_recording_time()
            if not self._elapsed_timer.isActive():
                self._elapsed_timer.start(1000)
            self._set_icon("recording")
        elif self._elapsed_timer.isActive():
            self._elapsed_timer.stop()

    def _apply_status(self, status: StatusMessage) -> None:
        self.status_text.setText(status.text)
        if status.icon in ("ready", "error"):
            self.progress_bar.hide()
        self._set_icon(status.icon)

    def _apply_progress(self, event: ProgressEvent) -> None:
        if event.status == STATUS_DOWNLOADING and event.percent is not None:
            self.progress_bar.show()
            self.progress_bar.setValue(event.percent)

    def _set_icon(self, state: str) -> None:
        self._icon_state = state
        self._phase = 0
        if state in ("loading", "processing", "recording"):
            if not self._animation_timer.isActive():
                self._animation_timer.start(33)  # 30fps
        elif self._animation_timer.isActive():
            self._animation_timer.stop()
        self._render_icon()

    def _advance_animation(self) -> None:
        if self._icon_state == "recording":
            self._phase = (self._phase + 5) % 101
        else:
            self._phase = (self._phase + 15) % 360
        self._render_icon()

    def _render_icon(self) -> None:
        icon = render_icon(self._icon_state, self._phase, size=ICON_SIZE, theme=self.theme)
        self.status_icon.setPixmap(icon.pixmap(ICON_SIZE, ICON_SIZE))

    def _update_recording_time(self) -> None:
        self.recording_time.setText(self.controller.elapsed_text())

    # -- user actions -----------------------------------------------------

    def _confirm_clear(self) -> bool:
        answer = QMessageBox.question(
            self,
            "Clear transcription",
            "Are you sure you want to clear all transcription text?",
        )
        return answer == QMessageBox.StandardButton.Yes

    def _on_clear_clicked(self) -> None:
        self.controller.clear_transcript(self._confirm_clear)

    def _show_copied(self) -> None:
        self.copy_button.setText("Copied!")
        QTimer.singleShot(COPY_FEEDBACK_MS, lambda: self.copy_button.setText("Copy"))

    def closeEvent(self, event) -> None:
        self.controller.shutdown()
        super().closeEvent(event)
