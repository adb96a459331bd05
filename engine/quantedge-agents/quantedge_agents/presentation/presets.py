# quantedge_agents/presentation/presets.py
# Purpose: Example inputs offered next to the ticker field. Selecting one fills the field; it never submits.

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, List


@dataclass(frozen=True)
class Preset:
    label: str
    tickers: str

    def as_dict(self) -> Dict[str, str]:
        return asdict(self)


PRESETS: List[Preset] = [
    Preset(label="Big Tech Batch", tickers="AAPL, NVDA, MSFT"),
    Preset(label="EV Sector", tickers="TSLA, RIVN, LCID"),
]
