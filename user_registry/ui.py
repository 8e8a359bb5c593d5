"""
Design (ui.py)
- Purpose: Build and manage the Tkinter main page: a read-only table of registered users.
- Inputs: Data file path; Data snapshots delivered by DataFileMonitor.
- Outputs: None (renders UI). The GUI never mutates the registry; the CLI does.
- Side effects: Creates windows; shows desktop notifications when the file changes.
- Thread-safety: UI code runs on main thread; the monitor calls schedule_refresh to update safely.
"""

import logging
import tkinter as tk
from pathlib import Path
from tkinter import ttk
from typing import List

from .config import WINDOW_TITLE
from .errors import GuiError, RegistryError
from .monitor import DataFileMonitor
from .repository import Data
from .storage import read_data
from .utils import describe_change, notify_change, sorted_by_id

logger = logging.getLogger(__name__)


class AppUI:
    """
    Design (AppUI)
    - Purpose: Encapsulate all UI creation and behavior.
    - Public attributes:
        enable_notifications (tk.BooleanVar): toggles desktop notifications on file changes
    - Public methods:
        schedule_refresh(data): thread-safe way to repaint from the monitor thread
        schedule_error(err): thread-safe way to show a load error in the status line
        notify(added, removed): monitor callback for ID changes
    """

    def __init__(self, root: tk.Tk, data_file: Path):
        self.root = root
        self.data_file = Path(data_file)
        self.data = Data()

        self.enable_notifications = tk.BooleanVar(value=True)
        self.sort_state = {"column": "id", "order": "asc"}

        # Window
        self.root.title(WINDOW_TITLE)
        self.root.rowconfigure(0, weight=1)
        self.root.columnconfigure(0, weight=1)
        self.root.configure(bg="#1e1e1e")

        # Style
        style = ttk.Style(self.root)
        style.theme_use("default")
        style.configure(
            "Treeview",
            background="#2b2b2b",
            foreground="#f0f0f0",
            fieldbackground="#2b2b2b",
            rowheight=24,
            font=("Segoe UI", 10),
        )
        style.configure(
            "Treeview.Heading",
            background="#1e1e1e",
            foreground="#ffffff",
            font=("Segoe UI", 10, "bold"),
        )
        style.map("Treeview", background=[('selected', '#444')], foreground=[])

        # Treeview
        self.columns = ("id", "first_name", "last_name", "email", "phone_number")
        self.tree = ttk.Treeview(self.root, columns=self.columns, show="headings")
        self.tree.grid(row=0, column=0, sticky="nsew", padx=10, pady=(10, 5))

        headers = {
            "id": "ID",
            "first_name": "First Name",
            "last_name": "Last Name",
            "email": "Email",
            "phone_number": "Phone Number",
        }
        for col in self.columns:
            self.tree.heading(col, text=headers[col], command=lambda c=col: self.sort_by_column(c))

        # Status line: file path, user count, or the last load error
        self.status = tk.StringVar(value=str(self.data_file))
        tk.Label(self.root, textvariable=self.status, fg="gray", bg="#1e1e1e", anchor="w").grid(
            row=1, column=0, sticky="ew", padx=10
        )

        button_frame = tk.Frame(self.root, bg="#1e1e1e")
        button_frame.grid(row=2, column=0, sticky="ew", padx=10, pady=(0, 10))

        ttk.Button(button_frame, text="Refresh", command=self.reload).pack(side=tk.LEFT, padx=5)

        tk.Checkbutton(
            button_frame,
            text="Enable Notifications",
            variable=self.enable_notifications,
            fg="white",
            bg="#1e1e1e",
            selectcolor="#2b2b2b",
            activebackground="#1e1e1e",
            activeforeground="white",
        ).pack(side=tk.LEFT, padx=5)

        self.refresh_ui()

    # ---------- Public API for monitor ----------

    def schedule_refresh(self, data: Data) -> None:
        """Thread-safe: store the new snapshot and repaint on the main thread."""
        self.root.after(0, lambda: self._set_data(data))

    def schedule_error(self, err: RegistryError) -> None:
        self.root.after(0, lambda: self.status.set(f"Couldn't load {self.data_file}: {err}"))

    def notify(self, added: List[int], removed: List[int]) -> None:
        """Thread-safe: the toggle is read on the main thread."""
        self.root.after(0, lambda: self._notify(added, removed))

    def _notify(self, added: List[int], removed: List[int]) -> None:
        if not self.enable_notifications.get():
            return
        message = describe_change(added, removed)
        if message:
            notify_change(message)

    # ---------- UI callbacks & utilities ----------

    def _set_data(self, data: Data) -> None:
        self.data = data
        self.status.set(f"{self.data_file} ({len(data)} users)")
        self.refresh_ui()

    def reload(self) -> None:
        """Reload the file on the main thread (Refresh button)."""
        try:
            self._set_data(read_data(self.data_file))
        except RegistryError as err:
            logger.warning("refresh failed: %s", err)
            self.status.set(f"Couldn't load {self.data_file}: {err}")

    def refresh_ui(self) -> None:
        """
        Purpose: Rebuild the Tree rows from the current snapshot and apply sorting.
        Thread-safety: Must run on main thread (use schedule_refresh from other threads).
        """
        entries = [
            (user_id, u.first_name, u.last_name, u.email, u.phone_number)
            for user_id, u in sorted_by_id(self.data.users())
        ]

        col, order = self.sort_state["column"], self.sort_state["order"]
        if col:
            idx = self.columns.index(col)
            entries.sort(key=lambda x: x[idx], reverse=(order == "desc"))

        self.tree.delete(*self.tree.get_children())
        for values in entries:
            self.tree.insert("", "end", values=values)

    def sort_by_column(self, col: str) -> None:
        """
        Purpose: Toggle header sort order and refresh. A third click goes back to ID order.
        Inputs: col (column key from self.columns).
        """
        order = "asc"
        if self.sort_state["column"] == col and self.sort_state["order"] == "asc":
            order = "desc"
        elif self.sort_state["column"] == col and self.sort_state["order"] == "desc":
            col, order = "id", "asc"
        self.sort_state["column"] = col
        self.sort_state["order"] = order
        self.refresh_ui()


def run(data_file: Path) -> None:
    """Open the main window and block until it is closed."""
    try:
        root = tk.Tk()
    except tk.TclError as err:
        raise GuiError(str(err)) from err

    ui = AppUI(root, data_file)
    monitor = DataFileMonitor(
        data_file,
        on_any_change=ui.schedule_refresh,
        notify=ui.notify,
        on_error=ui.schedule_error,
    )
    monitor.start()
    try:
        root.mainloop()
    finally:
        monitor.stop()
