"""Component listing finished attempts, fastest first."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QHeaderView, QLabel, QTableWidget, QTableWidgetItem, QVBoxLayout, QWidget

from speed_quiz.constants.ui_constants import SCOREBOARD_EMPTY_STATE, SCOREBOARD_HEADERS, SCOREBOARD_TITLE
from speed_quiz.core.services.scoreboard import Scoreboard
from speed_quiz.styling.styles import Styles


class ScoreboardPanel(QWidget):
    """Read-only table of scoreboard rankings."""

    def __init__(self, scoreboard: Scoreboard, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.scoreboard = scoreboard
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.title_label = QLabel(SCOREBOARD_TITLE, self)
        self.title_label.setAlignment(Qt.AlignCenter)
        self.title_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.title_label)

        self.table = QTableWidget(0, len(SCOREBOARD_HEADERS), self)
        self.table.setHorizontalHeaderLabels(list(SCOREBOARD_HEADERS))
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        self.table.verticalHeader().setVisible(False)
        self.table.setEditTriggers(QTableWidget.NoEditTriggers)
        self.table.setAlternatingRowColors(True)
        layout.addWidget(self.table, stretch=1)

        self.empty_label = QLabel(SCOREBOARD_EMPTY_STATE, self)
        self.empty_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.empty_label)

    def refresh(self) -> None:
        rows = self.scoreboard.get_rankings()
        self.table.setRowCount(len(rows))
        for row_index, row in enumerate(rows):
            cells = (str(row.rank), row.name, f"{row.time:.3f}s")
            for column, text in enumerate(cells):
                item = QTableWidgetItem(text)
                item.setTextAlignment(Qt.AlignCenter)
                self.table.setItem(row_index, column, item)
        self.empty_label.setVisible(not rows)
