import logging
import sys
from concurrent.futures import Future
from io import BytesIO
from pathlib import Path
from typing import Any, Optional

from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtGui import QPixmap
from PyQt5.QtWidgets import (
    QApplication,
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMenu,
    QMessageBox,
    QPushButton,
    QSlider,
    QVBoxLayout,
    QWidget,
)

from IF_Libs.constants import (
    APP_TITLE,
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
    EXPORT_FILE_FILTER,
    IMAGE_FILE_FILTER,
    PREVIEW_MAX_HEIGHT_RATIO,
    PREVIEW_MIN_HEIGHT,
    SHARE_FILE_NAME,
    SLIDER_STEPS,
)
from IF_Libs.errors import InstaFilterError
from IF_Libs.FilterLib.filter_executors import get_default_registry
from IF_Libs.FilterLib.filter_kinds import FilterKind
from IF_Libs.FilterLib.parameter_mapper import resolve_filter_parameters
from IF_Libs.ImageEditingLib.image_models import PhotoRecord
from IF_Libs.SessionLib.filter_session import FilterSession, SessionConfig
from IF_Libs.SessionLib.photo_loader import PhotoLoader
from IF_Libs.SessionLib.usage_store import FilterUsageCounter, get_settings_path

logger = logging.getLogger(__name__)


class PhotoLabel(QLabel):
    clicked = pyqtSignal()

    def mousePressEvent(self, event) -> None:
        if event.button() == Qt.LeftButton:
            self.clicked.emit()
        super().mousePressEvent(event)


class InstaFilterWindow(QMainWindow):
    # Emitted from the loader thread; Qt queues it onto the GUI thread
    photo_loaded = pyqtSignal(object)

    def __init__(self, settings_dir: Optional[Path] = None) -> None:
        super().__init__()
        self.setWindowTitle(APP_TITLE)
        self.resize(DEFAULT_WINDOW_WIDTH, DEFAULT_WINDOW_HEIGHT)

        self.registry = get_default_registry()
        self.photo: Optional[PhotoRecord] = None
        self.loader = PhotoLoader()
        self.usage_counter = FilterUsageCounter(
            settings_path=get_settings_path(settings_dir or Path.home()),
            on_review_requested=self.request_review,
        )
        self.session = FilterSession(
            SessionConfig(
                error_handler=self.show_error,
                on_output=self.refresh_preview,
                on_filter_changed=self.usage_counter.record_filter_change,
                registry=self.registry,
            )
        )

        self._build_ui()
        self._connect_signals()
        self._update_controls()

    def _build_ui(self) -> None:
        central = QWidget(self)
        self.setCentralWidget(central)

        root = QVBoxLayout(central)

        self.label_preview = PhotoLabel("No Picture\n\nTap to select a photo")
        self.label_preview.setAlignment(Qt.AlignCenter)
        self.label_preview.setMinimumHeight(PREVIEW_MIN_HEIGHT)
        self.label_preview.setMaximumHeight(int(DEFAULT_WINDOW_HEIGHT * PREVIEW_MAX_HEIGHT_RATIO))
        self.label_preview.setStyleSheet("border: 1px solid #888;")
        self.label_preview.setCursor(Qt.PointingHandCursor)

        self.slider_intensity = QSlider(Qt.Horizontal)
        self.slider_intensity.setRange(0, SLIDER_STEPS)
        # Re-render on release rather than on every tick while dragging
        self.slider_intensity.setTracking(False)
        self.slider_intensity.setValue(int(round(self.session.intensity * SLIDER_STEPS)))

        self.label_filter = QLabel()
        self.btn_change_filter = QPushButton("Change Filter")
        self.btn_share = QPushButton("Share")

        self.menu_filters = QMenu(self)
        for kind in self.registry.list_filter_kinds():
            action = self.menu_filters.addAction(kind.display_name)
            action.setData(kind.value)

        intensity_row = QHBoxLayout()
        intensity_label = QLabel("Intensity")
        intensity_label.setFixedWidth(80)
        intensity_row.addWidget(intensity_label)
        intensity_row.addWidget(self.slider_intensity)

        buttons_row = QHBoxLayout()
        buttons_row.addWidget(self.btn_change_filter)
        buttons_row.addWidget(self.btn_share)
        buttons_row.addStretch(1)

        root.addStretch(1)
        root.addWidget(self.label_preview)
        root.addStretch(1)
        root.addWidget(self.label_filter)
        root.addLayout(intensity_row)
        root.addLayout(buttons_row)

    def _connect_signals(self) -> None:
        self.label_preview.clicked.connect(self.select_photo)
        self.photo_loaded.connect(self.on_photo_loaded)
        self.slider_intensity.valueChanged.connect(self.on_intensity_changed)
        self.btn_change_filter.clicked.connect(self.show_filter_menu)
        self.menu_filters.triggered.connect(self.on_filter_selected)
        self.btn_share.clicked.connect(self.share_image)

    def select_photo(self) -> None:
        file_path, _ = QFileDialog.getOpenFileName(self, "Select a Photo", "", IMAGE_FILE_FILTER)
        if not file_path:
            return

        future = self.loader.load_async(Path(file_path))
        future.add_done_callback(self.photo_loaded.emit)

    def on_photo_loaded(self, future: Future) -> None:
        record = self.loader.deliver(self.session, future)
        if record is not None:
            self.photo = record
        self._update_controls()

    def on_intensity_changed(self, value: int) -> None:
        self.session.set_intensity(value / SLIDER_STEPS)
        self._update_controls()

    def show_filter_menu(self) -> None:
        self.menu_filters.exec_(self.btn_change_filter.mapToGlobal(self.btn_change_filter.rect().bottomLeft()))

    def on_filter_selected(self, action: Any) -> None:
        self.session.set_filter(FilterKind.from_name(action.data()))
        self._update_controls()

    def share_image(self) -> None:
        if self.session.output_image is None:
            return

        stem = Path(self.photo.name).stem if self.photo is not None else SHARE_FILE_NAME
        suggested = f"{stem}_{self.session.filter_kind.value.lower()}.png"
        save_path, _ = QFileDialog.getSaveFileName(self, "Share Image", suggested, EXPORT_FILE_FILTER)
        if not save_path:
            return

        try:
            written = self.session.export_output(save_path)
        except OSError as e:
            QMessageBox.warning(self, "Error", f"Could not save image: {e}")
            return
        self._show_info("Shared", f"Image saved to {written}")

    def refresh_preview(self, image: Any) -> None:
        pixmap = QPixmap()
        if not pixmap.loadFromData(self._to_png_bytes(image), "PNG"):
            self.label_preview.setText("Preview failed")
            return

        scaled = pixmap.scaled(
            self.label_preview.size(),
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.SmoothTransformation,
        )
        self.label_preview.setPixmap(scaled)

    def show_error(self, error: InstaFilterError) -> None:
        QMessageBox.warning(self, "Error", error.message)

    def request_review(self) -> None:
        self._show_info(
            "Enjoying Instafilter?",
            f"You've tried {self.usage_counter.count} filters. Please consider leaving a review!",
        )

    def closeEvent(self, event) -> None:
        self.loader.shutdown(wait=False)
        super().closeEvent(event)

    def _update_controls(self) -> None:
        has_output = self.session.output_image is not None
        self.slider_intensity.setEnabled(has_output)
        self.btn_change_filter.setEnabled(has_output)
        self.btn_share.setVisible(has_output)

        kind = self.session.filter_kind
        parameters = resolve_filter_parameters(kind, self.session.intensity)
        details = ", ".join(f"{key} {value:.2f}" for key, value in parameters.items())
        self.label_filter.setText(f"{kind.display_name}" + (f"  ({details})" if details else ""))

    def _to_png_bytes(self, image: Any) -> bytes:
        buffer = BytesIO()
        image.save(buffer, format="PNG")
        return buffer.getvalue()

    def _show_info(self, title: str, message: str) -> None:
        QMessageBox.information(self, title, message)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = QApplication(sys.argv)
    window = InstaFilterWindow()
    window.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
