"""A window showing an entry, a check box, a slider and a progress bar."""

from __future__ import annotations

import sys

DEFAULT_STEP = 0.01
TIMER_MS = 50
SCALE_MAX = 100.0
CHECKED_TEXT = "Checkbox: ON"


def advance_fraction(fraction: float, step: float = DEFAULT_STEP) -> float:
    """Move a progress fraction forward by step, wrapping to 0 past 1.0."""
    fraction += step
    if fraction > 1.0:
        return 0.0
    return fraction


def scale_to_fraction(value: float) -> float:
    """Map a slider value in 0..100 to a progress fraction."""
    return value / SCALE_MAX


def _label_updates(entry_text: str, checked: bool) -> tuple[str, ...]:
    """Texts the label is set to, in order, when the button is clicked."""
    updates = [CHECKED_TEXT] if checked else []
    updates.append(entry_text)
    return tuple(updates)


def label_text_for(entry_text: str, checked: bool) -> str:
    """Text the label shows after the button is clicked.

    A checked box sets a notice first, but the entry text is set last and stays.
    """
    return _label_updates(entry_text, checked)[-1]


class WidgetDemo:
    """Entry, button, check box, slider, progress bar and label in one grid."""

    def __init__(self, master=None) -> None:
        import tkinter as tk
        from tkinter import ttk

        self.root = tk.Tk() if master is None else master
        self.fraction = 0.0

        frame = tk.Frame(self.root, padx=15, pady=15)
        frame.grid()

        self.entry = tk.Entry(frame)
        self.entry.grid(row=0, column=0, columnspan=2, padx=5, pady=5, sticky="ew")

        tk.Button(frame, text="Apply text", command=self.on_button_clicked).grid(
            row=1, column=0, padx=5, pady=5
        )
        self.checked = tk.BooleanVar(master=self.root, value=False)
        tk.Checkbutton(frame, text="Checkbox", variable=self.checked).grid(
            row=1, column=1, padx=5, pady=5
        )

        self.scale = tk.Scale(
            frame,
            from_=0,
            to=SCALE_MAX,
            resolution=1,
            orient=tk.HORIZONTAL,
            command=self.on_scale_changed,
        )
        self.scale.grid(row=2, column=0, columnspan=2, padx=5, pady=5, sticky="ew")

        self.progress = ttk.Progressbar(frame, maximum=1.0, mode="determinate")
        self.progress.grid(row=3, column=0, columnspan=2, padx=5, pady=5, sticky="ew")

        self.label = tk.Label(frame, text="Results are shown here")
        self.label.grid(row=4, column=0, columnspan=2, padx=5, pady=5)

        self.root.after(TIMER_MS, self.on_timer_tick)

    def _set_fraction(self, fraction: float) -> None:
        self.fraction = min(max(fraction, 0.0), 1.0)
        self.progress.config(value=self.fraction)

    def on_button_clicked(self) -> None:
        for text in _label_updates(self.entry.get(), self.checked.get()):
            self.label.config(text=text)

    def on_scale_changed(self, value) -> None:
        self._set_fraction(scale_to_fraction(float(value)))

    def on_timer_tick(self) -> None:
        self._set_fraction(advance_fraction(self.fraction))
        self.root.after(TIMER_MS, self.on_timer_tick)


def main(argv=None) -> int:
    import tkinter as tk

    try:
        root = tk.Tk()
    except tk.TclError as exc:
        print(f"widgets: {exc}", file=sys.stderr)
        return 1
    root.title("GUI widget demo")
    root.geometry("400x250")
    WidgetDemo(root)
    root.mainloop()
    return 0


if __name__ == "__main__":
    sys.exit(main())