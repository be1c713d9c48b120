"""
Main Application Window
=======================
The primary GUI container: control panel on the left, canvas on the right.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects global actions (menu entries, closing the window) to
   the controller.
"""
from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QCloseEvent
from PySide6.QtWidgets import QMainWindow, QSplitter

from transformviz.application import VISIBLE_APP_NAME
from transformviz.controller.app_controller import AppController
from transformviz.view.widgets.canvas import TransformCanvas
from transformviz.view.widgets.control_panel import ControlPanel


class MainWindow(QMainWindow):
    def __init__(self, controller: AppController) -> None:
        super().__init__()
        self.controller = controller
        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1250, 850)

        splitter = QSplitter(Qt.Orientation.Horizontal)
        self.setCentralWidget(splitter)

        # --- LEFT SIDE: Controls ---
        self.control_panel = ControlPanel(controller)
        splitter.addWidget(self.control_panel)

        # --- RIGHT SIDE: Canvas ---
        self.canvas = TransformCanvas(controller)
        splitter.addWidget(self.canvas)

        splitter.setStretchFactor(1, 1)
        splitter.setSizes([400, 850])

        self._create_actions()
        self._create_menus()

    def _create_actions(self) -> None:
        self.act_autofit = QAction(self.tr("Auto-Fit View"), self)
        self.act_autofit.setShortcut("Ctrl+F")
        self.act_autofit.triggered.connect(self.controller.auto_fit)

        self.act_defaults = QAction(self.tr("Restore Defaults"), self)
        self.act_defaults.triggered.connect(self.controller.reset)

        self.act_exit = QAction(self.tr("Exit"), self)
        self.act_exit.setShortcut("Ctrl+Q")
        self.act_exit.triggered.connect(self.close)

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu(self.tr("&File"))
        file_menu.addAction(self.act_defaults)
        file_menu.addSeparator()
        file_menu.addAction(self.act_exit)

        view_menu = menu_bar.addMenu(self.tr("&View"))
        view_menu.addAction(self.act_autofit)

    def closeEvent(self, event: QCloseEvent) -> None:
        # commit edits still waiting on a debounce timer
        self.controller.flush()
        super().closeEvent(event)
