"""A two-number calculator with a small Tk window."""

from __future__ import annotations

import argparse
import re
import sys
from enum import Enum
from functools import partial
from typing import Iterable, Optional

RESULT_PREFIX = "Result:"
DIVIDE_BY_ZERO_MESSAGE = "Error: cannot divide by zero"

_NUMBER = re.compile(
    r"""\s*(?P<num>[+-]?(?:
        0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)(?:[pP][+-]?\d+)?
      | (?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?
      | inf(?:inity)?
      | nan
    ))""",
    re.VERBOSE | re.IGNORECASE,
)


class Operation(Enum):
    """An arithmetic operation offered by a calculator button."""

    ADD = "Add"
    SUBTRACT = "Subtract"
    MULTIPLY = "Multiply"
    DIVIDE = "Divide"

    @property
    def label(self) -> str:
        return self.value

    def apply(self, a: float, b: float) -> float:
        """Combine a and b; dividing by zero raises ZeroDivisionError."""
        if self is Operation.ADD:
            return a + b
        if self is Operation.SUBTRACT:
            return a - b
        if self is Operation.MULTIPLY:
            return a * b
        return a / b


def parse_number(text: str) -> float:
    """Read the longest leading number of text, or 0.0 if there is none.

    Leading whitespace is skipped and trailing text ignored; hexadecimal,
    infinity and NaN spellings are accepted.
    """
    match = _NUMBER.match(text)
    if match is None:
        return 0.0
    number = match.group("num")
    digits = number.lstrip("+-")
    if digits[:2].lower() == "0x":
        return float.fromhex(number)
    return float(number)


def calculate(operation: Operation, text1: str, text2: str) -> str:
    """Apply operation to the two entry texts and return the text to display."""
    a = parse_number(text1)
    b = parse_number(text2)
    try:
        result = operation.apply(a, b)
    except ZeroDivisionError:
        return DIVIDE_BY_ZERO_MESSAGE
    return f"{RESULT_PREFIX} {result:.2f}"


class CalculatorWindow:
    """Two number entries, a button per operation and a result label."""

    def __init__(self, master=None, operations: Iterable[Operation] = tuple(Operation)) -> None:
        import tkinter as tk

        self.operations = tuple(operations)
        self.root = tk.Tk() if master is None else master
        frame = tk.Frame(self.root, padx=10, pady=10)
        frame.grid()

        tk.Label(frame, text="Number 1:").grid(row=0, column=0, padx=2, pady=2)
        self.entry1 = tk.Entry(frame)
        self.entry1.grid(row=0, column=1, columnspan=2, padx=2, pady=2)
        tk.Label(frame, text="Number 2:").grid(row=1, column=0, padx=2, pady=2)
        self.entry2 = tk.Entry(frame)
        self.entry2.grid(row=1, column=1, columnspan=2, padx=2, pady=2)

        for column, operation in enumerate(self.operations):
            tk.Button(
                frame, text=operation.label, command=partial(self.on_operation, operation)
            ).grid(row=2, column=column, padx=2, pady=2)

        self.result_label = tk.Label(frame, text=RESULT_PREFIX)
        self.result_label.grid(
            row=3, column=0, columnspan=max(3, len(self.operations)), padx=2, pady=2
        )

    def on_operation(self, operation: Operation) -> None:
        """Show the result of operation on the current entries."""
        self.result_label.config(
            text=calculate(operation, self.entry1.get(), self.entry2.get())
        )


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="simple calculator window")
    parser.add_argument(
        "--basic", action="store_true", help="offer only addition and subtraction"
    )
    args = parser.parse_args(argv)

    import tkinter as tk

    try:
        root = tk.Tk()
    except tk.TclError as exc:
        print(f"calculator: {exc}", file=sys.stderr)
        return 1
    if args.basic:
        root.title("Simple calculator")
        root.geometry("300x150")
        operations: Optional[tuple] = (Operation.ADD, Operation.SUBTRACT)
    else:
        root.title("Calculator (four operations)")
        root.geometry("350x180")
        operations = tuple(Operation)
    CalculatorWindow(root, operations)
    root.mainloop()
    return 0


if __name__ == "__main__":
    sys.exit(main())