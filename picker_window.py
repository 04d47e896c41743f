"""tkinter date-picker field: button with the bound date plus a popup."""

import tkinter as tk
from tkinter import font as tkfont
from tkinter import ttk

from PIL import ImageTk

from calendar_logic import DAY_ABBR, month_name
from date_picker import DatePickerButton, DayCell
from icon_gen import create_icon_image
from selection import WorkingSelection

# Colours
ACCENT = "#0078D4"
SEL_BG = "#B3D7F2"
WEEKEND_BG = "#FFD6D6"
GRID_BG = "white"
WN_FG = "#888888"
OUT_FG = "#AAAAAA"

_ARROWS = [
    ("<<<", "year", -1),
    ("«", "month", -1),
    ("<", "day", -1),
    (">", "day", 1),
    ("»", "month", 1),
    (">>>", "year", 1),
]


class _GridPanel:
    """Pre-allocated widget pool for the day grid (6 weeks max)."""

    __slots__ = ("frame", "wk_header", "week_nums", "day_cells")

    def __init__(self, parent: tk.Widget, fonts: dict, show_week: bool, on_click) -> None:
        self.frame = tk.Frame(parent, bg=GRID_BG)
        offset = 1 if show_week else 0

        self.wk_header = tk.Label(
            self.frame, text="W", font=fonts["bold"], bg=GRID_BG, fg=WN_FG, width=3,
        )
        if show_week:
            self.wk_header.grid(row=0, column=0)

        for col, abbr in enumerate(DAY_ABBR):
            fg = "#CC0000" if col >= 5 else "#333333"
            tk.Label(
                self.frame, text=abbr, font=fonts["bold"], bg=GRID_BG, fg=fg, width=3,
            ).grid(row=0, column=col + offset)

        self.week_nums: list[tk.Label] = []
        self.day_cells: list[list[tk.Label]] = []
        for r in range(6):
            wn = tk.Label(self.frame, font=fonts["wn"], bg=GRID_BG, fg=WN_FG, width=3)
            if show_week:
                wn.grid(row=r + 1, column=0)
            self.week_nums.append(wn)

            row_cells: list[tk.Label] = []
            for c in range(7):
                cell = tk.Label(
                    self.frame, font=fonts["normal"], width=3, cursor="hand2",
                    borderwidth=1, relief="flat",
                )
                cell.grid(row=r + 1, column=c + offset, padx=1, pady=1)
                cell.bind("<Button-1>", on_click)
                row_cells.append(cell)
            self.day_cells.append(row_cells)


class DatePickerField:
    """A button showing the bound date that opens the picker popup."""

    def __init__(self, parent: tk.Widget, button: DatePickerButton) -> None:
        self.parent = parent
        self.button = button
        self.popup = button.popup
        self._setup_fonts()

        self.frame = tk.Frame(parent)
        self._icon: ImageTk.PhotoImage | None = None
        self._button = tk.Button(
            self.frame, compound="left", font=self.font_normal, padx=6,
            command=self.toggle,
        )
        self._button.pack()

        self._top: tk.Toplevel | None = None
        self._grid: _GridPanel | None = None
        self._cell_days: dict[int, DayCell] = {}
        self._year_var = tk.StringVar()
        self._month_var = tk.StringVar()
        self._day_var = tk.StringVar()
        self._day_box: ttk.Combobox | None = None

        self.refresh_button()

    # ------------------------------------------------------------------
    # Fonts
    # ------------------------------------------------------------------
    def _setup_fonts(self) -> None:
        families = tkfont.families(self.parent)
        base = "Segoe UI" if "Segoe UI" in families else "TkDefaultFont"
        self.font_normal = tkfont.Font(family=base, size=9)
        self.font_bold = tkfont.Font(family=base, size=9, weight="bold")
        self.font_wn = tkfont.Font(family=base, size=8)
        self._fonts = {"normal": self.font_normal, "bold": self.font_bold, "wn": self.font_wn}

    # ------------------------------------------------------------------
    # Button
    # ------------------------------------------------------------------
    def refresh_button(self) -> None:
        self._icon = ImageTk.PhotoImage(create_icon_image(self.button.ref.get().day))
        self._button.configure(text=self.button.text(), image=self._icon)

    def toggle(self) -> None:
        self.button.toggle()
        if self.button.picker_visible:
            self._show()
        else:
            self._destroy_popup()

    # ------------------------------------------------------------------
    # Popup
    # ------------------------------------------------------------------
    def _show(self) -> None:
        opts = self.popup.options
        top = tk.Toplevel(self.parent)
        top.wm_overrideredirect(True)
        top.attributes("-topmost", True)
        top.configure(bg=GRID_BG)
        self._top = top

        outer = tk.Frame(top, bg=GRID_BG, borderwidth=1, relief="solid")
        outer.pack(padx=0, pady=0)
        body = tk.Frame(outer, bg=GRID_BG)
        body.pack(padx=4, pady=4)

        if opts.combo_boxes:
            self._build_combos(body)
        if opts.arrows:
            self._build_arrows(body)
        if opts.calendar:
            self._grid = _GridPanel(body, self._fonts, opts.calendar_week, self._on_cell_click)
            self._grid.frame.pack(pady=(2, 0))
        if not opts.live_commit:
            self._build_confirm(body)

        top.bind("<Escape>", lambda _e: self._cancel())
        self.refresh()

        self.parent.update_idletasks()
        x = self._button.winfo_rootx()
        y = self._button.winfo_rooty() + self._button.winfo_height() + 2
        top.wm_geometry(f"+{x}+{y}")
        top.focus_force()

    def _build_combos(self, parent: tk.Frame) -> None:
        row = tk.Frame(parent, bg=GRID_BG)
        row.pack(fill="x", pady=(0, 2))

        years = ttk.Combobox(
            row, textvariable=self._year_var, width=6, state="readonly",
            values=[str(y) for y in self.popup.year_choices()],
        )
        years.pack(side="left", padx=2)
        years.bind("<<ComboboxSelected>>",
                   lambda _e: self._after(self.popup.select_year(int(self._year_var.get()))))

        months = ttk.Combobox(
            row, textvariable=self._month_var, width=5, state="readonly",
            values=[name for _m, name in self.popup.month_choices()],
        )
        months.pack(side="left", padx=2)
        months.bind("<<ComboboxSelected>>",
                    lambda _e: self._after(self.popup.select_month(months.current() + 1)))

        self._day_box = ttk.Combobox(row, textvariable=self._day_var, width=4, state="readonly")
        self._day_box.pack(side="left", padx=2)
        self._day_box.bind("<<ComboboxSelected>>",
                           lambda _e: self._after(self.popup.select_day(int(self._day_var.get()))))

    def _build_arrows(self, parent: tk.Frame) -> None:
        row = tk.Frame(parent, bg=GRID_BG)
        row.pack(fill="x", pady=(0, 2))
        steps = {
            "year": self.popup.step_year,
            "month": self.popup.step_month,
            "day": self.popup.step_day,
        }
        for text, unit, delta in _ARROWS:
            tk.Button(
                row, text=text, font=self.font_bold, width=3,
                command=lambda fn=steps[unit], d=delta: self._after(fn(d)),
            ).pack(side="left", padx=1)

    def _build_confirm(self, parent: tk.Frame) -> None:
        row = tk.Frame(parent, bg=GRID_BG)
        row.pack(fill="x", pady=(4, 0))
        tk.Button(row, text="Save", width=8, command=self._save).pack(side="right", padx=2)
        tk.Button(row, text="Cancel", width=8, command=self._cancel).pack(side="right", padx=2)

    # ------------------------------------------------------------------
    # Refresh from controller state
    # ------------------------------------------------------------------
    def _after(self, sel: WorkingSelection) -> None:
        self.refresh(sel)

    def refresh(self, sel: WorkingSelection | None = None) -> None:
        if sel is None:
            sel = self.popup.open()
        year, month, day = sel.as_tuple()
        self._year_var.set(str(year))
        self._month_var.set(month_name(month))
        self._day_var.set(str(day))
        if self._day_box is not None:
            self._day_box.configure(values=[str(d) for d in self.popup.day_choices(sel)])
        if self._grid is not None:
            self._fill_grid(sel)

    def _fill_grid(self, sel: WorkingSelection) -> None:
        grid = self._grid
        self._cell_days.clear()
        rows = self.popup.cells(sel)
        for r in range(6):
            if r < len(rows):
                number, cells = rows[r]
                grid.week_nums[r].configure(text=str(number))
                for c, info in enumerate(cells):
                    label = grid.day_cells[r][c]
                    bg, fg = self._day_colors(info)
                    label.configure(
                        text=str(info.day.day), bg=bg, fg=fg,
                        font=self.font_bold if info.is_today else self.font_normal,
                        relief="solid" if info.is_today else "flat",
                        cursor="hand2" if info.day.selectable else "",
                    )
                    self._cell_days[id(label)] = info
            else:
                grid.week_nums[r].configure(text="")
                for label in grid.day_cells[r]:
                    label.configure(text="", bg=GRID_BG, relief="flat", cursor="")

    @staticmethod
    def _day_colors(info: DayCell) -> tuple[str, str]:
        fg = "black" if info.in_month else OUT_FG
        if info.is_selected:
            return SEL_BG, fg
        if info.is_weekend:
            return WEEKEND_BG, fg
        return GRID_BG, fg

    def _on_cell_click(self, event: tk.Event) -> None:
        info = self._cell_days.get(id(event.widget))
        if info is not None:
            self._after(self.popup.pick(info.day))

    # ------------------------------------------------------------------
    # Close
    # ------------------------------------------------------------------
    def _save(self) -> None:
        self.popup.save()
        self._destroy_popup()

    def _cancel(self) -> None:
        self.popup.cancel()
        self._destroy_popup()

    def _destroy_popup(self) -> None:
        if self._top is not None:
            self._top.destroy()
        self._top = None
        self._grid = None
        self._day_box = None
        self._cell_days.clear()
