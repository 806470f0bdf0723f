import customtkinter as ctk

from models.wallet import Wallet
from utils.currency import format_btc


class BalanceView(ctk.CTkFrame):
    """Balance headline with the Replenish and Add transaction actions."""

    def __init__(self, master, on_replenish, on_add_transaction, **kwargs):
        super().__init__(master, fg_color=("gray88", "gray18"), corner_radius=8, **kwargs)
        self.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            self, text="Balance", text_color="gray60",
            font=ctk.CTkFont(size=12), anchor="w",
        ).grid(row=0, column=0, padx=16, pady=(12, 0), sticky="w")

        self._amount_label = ctk.CTkLabel(
            self, text="0 BTC", anchor="w",
            font=ctk.CTkFont(size=22, weight="bold"),
        )
        self._amount_label.grid(row=1, column=0, padx=16, pady=(0, 12), sticky="w")

        ctk.CTkButton(
            self, text="Replenish", width=120, command=on_replenish,
        ).grid(row=1, column=1, padx=16, pady=(0, 12))

        ctk.CTkButton(
            self, text="+ Add transaction", command=on_add_transaction,
        ).grid(row=2, column=0, columnspan=2, padx=16, pady=(0, 12), sticky="ew")

    def show(self, wallet: Wallet):
        self._amount_label.configure(text=f"{format_btc(wallet.balance)} BTC")
