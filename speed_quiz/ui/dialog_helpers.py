"""Helper functions for common dialog patterns in the quiz UI."""

from __future__ import annotations

from PySide6.QtWidgets import QMessageBox, QWidget


def confirm_abandon_quiz(parent: QWidget) -> bool:
    """Ask before leaving a quiz that is still running.

    Args:
        parent: Parent widget for the dialog

    Returns:
        True if user confirmed, False otherwise
    """
    reply = QMessageBox.question(
        parent,
        "Leave Quiz",
        "Leaving now ends the current attempt. Continue?",
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No
    )
    return reply == QMessageBox.Yes


def show_error(parent: QWidget, title: str, message: str) -> None:
    """Show error dialog.

    Args:
        parent: Parent widget for the dialog
        title: Dialog title
        message: Error message
    """
    QMessageBox.critical(parent, title, message)


def show_info(parent: QWidget, title: str, message: str) -> None:
    """Show information dialog."""
    msg_box = QMessageBox(parent)
    msg_box.setIcon(QMessageBox.Information)
    msg_box.setWindowTitle(title)
    msg_box.setText(message)
    msg_box.setStandardButtons(QMessageBox.Ok)
    msg_box.exec()


def show_warning(parent: QWidget, title: str, message: str) -> None:
    """Show warning dialog."""
    QMessageBox.warning(parent, title, message)
