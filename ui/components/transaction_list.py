import customtkinter as ctk

from models.transaction import Transaction
from services.transaction_feed import TransactionFeed
from utils.currency import format_signed_btc
from utils.date_helpers import format_day_header, format_time

# Presentation-only mapping; the core only knows the category ids.
CATEGORY_ICONS = {
    "groceries":   ("🧺", "#F44336"),
    "taxi":        ("🚕", "#FFC107"),
    "electronics": ("💻", "#FF9800"),
    "restaurant":  ("🍴", "#2196F3"),
    "other":       ("📦", "#795548"),
}
INCOME_ICON = ("⬇", "#4CAF50")


class TransactionList(ctk.CTkScrollableFrame):
    """Renders the feed's day sections with a Load more control at the end."""

    def __init__(self, master, feed: TransactionFeed, on_load_more, **kwargs):
        super().__init__(master, **kwargs)
        self._feed = feed
        self._on_load_more = on_load_more
        self.grid_columnconfigure(0, weight=1)

    def render(self):
        for w in self.winfo_children():
            w.destroy()

        if not self._feed.sections:
            ctk.CTkLabel(
                self, text="No transactions yet.", text_color="gray60",
            ).grid(row=0, column=0, pady=20)
            return

        r = 0
        for section in self._feed.sections:
            ctk.CTkLabel(
                self, text=format_day_header(section.headline).upper(),
                text_color="gray60", anchor="w",
                font=ctk.CTkFont(size=11, weight="bold"),
            ).grid(row=r, column=0, padx=6, pady=(10, 2), sticky="w")
            r += 1
            for idx, tx in enumerate(section.rows):
                self._add_row(r, idx, tx)
                r += 1

        if self._feed.can_load_more:
            ctk.CTkButton(
                self, text="Load more", width=120,
                fg_color="transparent", border_width=1,
                text_color=("gray10", "gray90"),
                command=self._on_load_more,
            ).grid(row=r, column=0, pady=8)

    def _add_row(self, grid_row: int, idx: int, tx: Transaction):
        bg = ("gray92", "gray17") if idx % 2 == 0 else ("gray88", "gray21")
        row = ctk.CTkFrame(self, fg_color=bg, corner_radius=4)
        row.grid(row=grid_row, column=0, sticky="ew", pady=1, padx=2)
        row.grid_columnconfigure(1, weight=1)

        icon, color = INCOME_ICON if tx.is_income else CATEGORY_ICONS.get(
            tx.category, CATEGORY_ICONS["other"]
        )
        ctk.CTkLabel(row, text=icon, width=28, text_color=color).grid(
            row=0, column=0, rowspan=2, padx=(6, 4), pady=4
        )
        ctk.CTkLabel(row, text=tx.title, anchor="w").grid(
            row=0, column=1, sticky="w"
        )
        ctk.CTkLabel(
            row, text=format_time(tx.date), anchor="w",
            text_color="gray60", font=ctk.CTkFont(size=11),
        ).grid(row=1, column=1, sticky="w")
        ctk.CTkLabel(
            row, text=format_signed_btc(tx.amount), anchor="e",
            text_color="#4CAF50" if tx.is_income else ("gray10", "gray90"),
        ).grid(row=0, column=2, rowspan=2, padx=(4, 8))
