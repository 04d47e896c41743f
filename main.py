"""Entry point — a small window with two independent date-picker fields."""

import logging
import tkinter as tk
from datetime import date, timedelta

from date_picker import DatePickerButton
from picker_window import DatePickerField
from selection import DateRef
from settings import PickerOptions, load_settings
from state_store import JsonFileStore

logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s",
                    level=logging.INFO)
logger = logging.getLogger(__name__)


def _bound_changed(field: DatePickerField, key: str, value: date) -> None:
    logger.debug("%s set to %s", key, value)
    field.refresh_button()


def main() -> None:
    options = PickerOptions.from_settings(load_settings())
    store = JsonFileStore()

    root = tk.Tk()
    root.title("Mini Date Picker")
    frame = tk.Frame(root, padx=12, pady=8)
    frame.pack()

    today = date.today()
    fields: list[DatePickerField] = []
    for row, (label, key, initial) in enumerate([
        ("Start:", "start", today),
        ("End:", "end", today + timedelta(days=7)),
    ]):
        ref = DateRef(initial)
        tk.Label(frame, text=label).grid(row=row, column=0, sticky="w", pady=4)
        field = DatePickerField(frame, DatePickerButton(ref, store, key, options))
        field.frame.grid(row=row, column=1, sticky="w", padx=(8, 0), pady=4)
        ref.on_change = lambda value, f=field, k=key: _bound_changed(f, k, value)
        fields.append(field)

    def on_exit() -> None:
        # Leave no session open in the state file for the next start
        for field in fields:
            if field.button.picker_visible:
                field.popup.close()
        logger.info("Dates on exit: %s", ", ".join(f.button.text() for f in fields))
        root.destroy()

    root.protocol("WM_DELETE_WINDOW", on_exit)
    root.mainloop()


if __name__ == "__main__":
    main()
