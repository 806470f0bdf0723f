from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Wallet:
    balance: float = 0.0
    rate: float = 0.0                      # BTC/USD, 0 when unknown
    last_update: Optional[datetime] = None  # aware; None when unknown

    @property
    def has_rate(self) -> bool:
        return self.rate > 0 and self.last_update is not None
