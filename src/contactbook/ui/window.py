"""
Contact Manager Window - form and table UI.

PyQt6 main window with a three-field form, four actions and a read-only
contact table. All changes go through a ``ContactBook``; the table is
rebuilt from the book after every change.
"""

from typing import Optional

from loguru import logger
from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QAbstractItemView,
    QApplication,
    QFormLayout,
    QHBoxLayout,
    QHeaderView,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from contactbook.config import ConfigManager
from contactbook.contacts import (
    ChangeResult,
    ContactBook,
    ContactIndexError,
    ContactValidationError,
)
from contactbook.ui.affordances import affordances_for

COLUMNS = ("Name", "Phone", "Email")


class ContactManagerWindow(QMainWindow):
    """Main window for viewing and editing contacts."""

    def __init__(self, book: ContactBook, config: Optional[ConfigManager] = None):
        super().__init__()
        self._book = book
        self._config = config
        self._selected_id: Optional[str] = None
        self._setup_ui()
        self._refresh_table()
        self._apply_affordances()

    def _cfg(self, key: str, default):
        return self._config.get(key, default) if self._config else default

    def _setup_ui(self) -> None:
        """Set up the UI components."""
        self.setWindowTitle(self._cfg("ui.title", "Contact Manager"))
        self.resize(int(self._cfg("ui.width", 600)), int(self._cfg("ui.height", 400)))

        main_widget = QWidget()
        self.setCentralWidget(main_widget)
        layout = QVBoxLayout(main_widget)
        layout.setContentsMargins(10, 10, 10, 10)
        layout.setSpacing(8)

        # Form
        form = QFormLayout()
        form.setLabelAlignment(Qt.AlignmentFlag.AlignRight)
        self.name_field = QLineEdit()
        self.phone_field = QLineEdit()
        self.email_field = QLineEdit()
        form.addRow("Name:", self.name_field)
        form.addRow("Phone:", self.phone_field)
        form.addRow("Email:", self.email_field)
        layout.addLayout(form)

        # Actions
        buttons = QHBoxLayout()
        self.add_button = QPushButton("Add Contact")
        self.update_button = QPushButton("Update Contact")
        self.delete_button = QPushButton("Delete Contact")
        self.clear_button = QPushButton("Clear Fields")
        for btn in (self.add_button, self.update_button, self.delete_button, self.clear_button):
            buttons.addWidget(btn)
        layout.addLayout(buttons)

        self.add_button.clicked.connect(self._add_contact)
        self.update_button.clicked.connect(self._update_contact)
        self.delete_button.clicked.connect(self._delete_contact)
        self.clear_button.clicked.connect(self._clear_fields)

        # Table
        self.table = QTableWidget(0, len(COLUMNS))
        self.table.setHorizontalHeaderLabels(list(COLUMNS))
        self.table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Stretch)
        self.table.verticalHeader().setVisible(False)
        self.table.itemSelectionChanged.connect(self._on_selection_changed)
        layout.addWidget(self.table, stretch=1)

    def center_on_screen(self) -> None:
        """Center window on screen."""
        screen = QApplication.primaryScreen()
        if screen is None:
            return
        geometry = screen.geometry()
        x = (geometry.width() - self.width()) // 2
        y = (geometry.height() - self.height()) // 2
        self.move(x, y)

    def show_load_error(self) -> None:
        """Tell the user the contacts file was unreadable and the list starts empty."""
        if self._book.load_error is not None:
            self._error("Load Error", f"Error loading contacts: {self._book.load_error}")

    # Actions

    def _form_values(self):
        return (
            self.name_field.text().strip(),
            self.phone_field.text().strip(),
            self.email_field.text().strip(),
        )

    def _add_contact(self) -> None:
        try:
            result = self._book.add(*self._form_values())
        except ContactValidationError as e:
            self._input_error(e)
            return
        self._after_change(result, "Contact added successfully!")

    def _update_contact(self) -> None:
        if not self._selected_id:
            self._info("Please select a contact to update.")
            return
        try:
            result = self._book.update_by_id(self._selected_id, *self._form_values())
        except ContactValidationError as e:
            self._input_error(e)
            return
        except ContactIndexError as e:
            logger.warning(f"Update on stale selection: {e}")
            self._info("Please select a contact to update.")
            self._refresh_table()
            return
        self._after_change(result, "Contact updated successfully!")

    def _delete_contact(self) -> None:
        if not self._selected_id:
            self._info("Please select a contact to delete.")
            return

        confirm = QMessageBox.question(
            self,
            "Confirm Delete",
            "Are you sure you want to delete the selected contact?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        )
        if confirm != QMessageBox.StandardButton.Yes:
            return

        try:
            result = self._book.delete_by_id(self._selected_id)
        except ContactIndexError as e:
            logger.warning(f"Delete on stale selection: {e}")
            self._info("Please select a contact to delete.")
            self._refresh_table()
            return
        self._after_change(result, "Contact deleted successfully!")

    def _after_change(self, result: ChangeResult, message: str) -> None:
        self._refresh_table()
        self._clear_fields()
        if not result.saved:
            self._error("Save Error", str(result.error))
        self._info(message)

    def _clear_fields(self) -> None:
        self.name_field.clear()
        self.phone_field.clear()
        self.email_field.clear()
        self.table.clearSelection()
        self._selected_id = None
        self._apply_affordances()

    # Table

    def _refresh_table(self) -> None:
        contacts = self._book.list()
        self.table.blockSignals(True)
        try:
            self.table.clearSelection()
            self.table.setRowCount(len(contacts))
            for row, contact in enumerate(contacts):
                for col, value in enumerate(contact.as_row()):
                    item = QTableWidgetItem(value)
                    item.setData(Qt.ItemDataRole.UserRole, contact.contact_id)
                    self.table.setItem(row, col, item)
        finally:
            self.table.blockSignals(False)
        self._selected_id = None
        self._apply_affordances()

    def _on_selection_changed(self) -> None:
        rows = self.table.selectionModel().selectedRows()
        row = rows[0].row() if rows else -1
        if row < 0:
            self._clear_fields()
            return

        contact_id = self.table.item(row, 0).data(Qt.ItemDataRole.UserRole)
        try:
            contact = self._book.store.get(self._book.store.index_of(contact_id))
        except ContactIndexError:
            self._clear_fields()
            return

        self._selected_id = contact.contact_id
        self.name_field.setText(contact.name)
        self.phone_field.setText(contact.phone)
        self.email_field.setText(contact.email)
        self._apply_affordances()

    def _apply_affordances(self) -> None:
        flags = affordances_for(self._selected_id)
        self.add_button.setEnabled(flags.add)
        self.update_button.setEnabled(flags.update)
        self.delete_button.setEnabled(flags.delete)
        self.clear_button.setEnabled(flags.clear)

    # Dialogs

    def _info(self, message: str) -> None:
        QMessageBox.information(self, self.windowTitle(), message)

    def _input_error(self, error: ContactValidationError) -> None:
        logger.debug(f"Rejected input ({error.rule.value}): {error}")
        QMessageBox.critical(self, "Input Error", str(error))

    def _error(self, title: str, message: str) -> None:
        QMessageBox.critical(self, title, message)

    def closeEvent(self, event):
        """Try once more to persist unsaved changes before closing."""
        if self._book.has_unsaved_changes:
            error = self._book.save()
            if error is not None:
                self._error("Save Error", f"{error}\nRecent changes were not saved.")
        super().closeEvent(event)

    def keyPressEvent(self, event):
        """Handle key press events."""
        if event.key() == Qt.Key.Key_Escape:
            self._clear_fields()
        else:
            super().keyPressEvent(event)
