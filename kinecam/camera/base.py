from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class ViewController(Protocol):
    """Anything that advances over time and writes a view transform."""

    def update(self, dt: float): ...

    def compose(self, out: np.ndarray) -> np.ndarray: ...
