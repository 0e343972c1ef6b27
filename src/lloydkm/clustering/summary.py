from __future__ import annotations

from dataclasses import astuple, dataclass

import pandas as pd

SUMMARY_HEADERS: tuple[str, ...] = ("Iter. #", "Converged", "Max TSS", "Min TSS", "End WSS", "End BSS", "Wall")


@dataclass(frozen=True)
class SummaryRecord:
    iteration: int
    converged: bool
    max_tss: float
    min_tss: float
    end_wss: float
    end_bss: float
    wall: float


class FitSummary:
    """Append-only log of per-iteration fit snapshots (diagnostic only)."""

    headers = SUMMARY_HEADERS

    def __init__(self) -> None:
        self._records: list[SummaryRecord] = []

    def append(self, record: SummaryRecord) -> None:
        self._records.append(record)

    @property
    def records(self) -> tuple[SummaryRecord, ...]:
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(self._records)

    def __getitem__(self, idx: int) -> SummaryRecord:
        return self._records[idx]

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame([astuple(r) for r in self._records], columns=list(SUMMARY_HEADERS))
