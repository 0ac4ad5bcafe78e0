"""Video display widget for Light Tracker."""

import cv2
import numpy as np
from PyQt5 import QtWidgets, QtGui, QtCore
import logging

PLACEHOLDER_TEXT = "Camera not started\n\nPress \"Start Detection\" to begin"


class VideoDisplayLabel(QtWidgets.QLabel):
    """Label that shows BGR frames scaled to fit while keeping aspect ratio."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setMinimumSize(400, 300)
        self.setStyleSheet("border: 1px solid #555; background-color: #1e1e1e;")
        self.setAlignment(QtCore.Qt.AlignCenter)
        self.setScaledContents(False)
        self.setSizePolicy(QtWidgets.QSizePolicy.Ignored, QtWidgets.QSizePolicy.Ignored)
        self.show_placeholder()

    def show_placeholder(self, text: str = PLACEHOLDER_TEXT):
        """Clear the frame and show a hint instead."""
        self.clear()
        self.setText(text)

    def set_frame(self, frame: np.ndarray):
        """Display a BGR video frame."""
        if frame is None:
            self.show_placeholder("No frame")
            return

        try:
            rgb_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
            h, w, ch = rgb_frame.shape
            bytes_per_line = ch * w

            # QImage does not own the buffer, so copy before rgb_frame goes away
            qt_image = QtGui.QImage(rgb_frame.data, w, h, bytes_per_line,
                                    QtGui.QImage.Format_RGB888).copy()
            pixmap = QtGui.QPixmap.fromImage(qt_image)

            scaled_pixmap = pixmap.scaled(
                self.size(), QtCore.Qt.KeepAspectRatio, QtCore.Qt.SmoothTransformation
            )
            self.setPixmap(scaled_pixmap)

        except cv2.error as e:
            logging.error(f"Error displaying frame: {e}")
            self.show_placeholder("Error displaying frame")
