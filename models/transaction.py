from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Transaction:
    id: int
    amount: float           # BTC; > 0 income, < 0 expense
    type: str               # 'income' | 'expense'
    category: Optional[str]  # expense category id, None for income
    date: datetime          # local time of creation

    @property
    def is_income(self) -> bool:
        return self.type == "income"

    @property
    def title(self) -> str:
        return self.category.title() if self.category else self.type.title()
