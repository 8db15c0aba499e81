"""Console progress bars using tqdm.

Each step gets its own bar, labelled with the step name; ``set_total``
resizes the current bar once the total becomes known.
"""

from __future__ import annotations

import sys
from typing import IO

from tqdm import tqdm

from harvester.interfaces.progress_sink import IProgressSink


class TqdmProgressSink(IProgressSink):
    """Renders one tqdm bar per step to *file* (stderr by default).

    Parameters
    ----------
    disable:
        Suppress all rendering (``--no-progress``); calls become no-ops.
    """

    def __init__(self, file: IO[str] | None = None, disable: bool = False) -> None:
        self._file = file if file is not None else sys.stderr
        self._disable = disable
        self._bar: tqdm | None = None

    def begin_step(self, label: str) -> None:
        self.finish()
        self._bar = tqdm(
            total=None,
            desc=label,
            unit="it",
            file=self._file,
            disable=self._disable,
            leave=True,
        )

    def set_total(self, total: int) -> None:
        if self._bar is None:
            return
        self._bar.total = total
        self._bar.refresh()

    def tick(self) -> None:
        if self._bar is not None:
            self._bar.update(1)

    def finish(self) -> None:
        if self._bar is not None:
            self._bar.close()
            self._bar = None
