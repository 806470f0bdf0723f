import threading

import customtkinter as ctk

from services.ledger_service import LedgerService
from services.price_service import PriceService
from services.transaction_feed import IDLE, TransactionFeed
from ui.components.balance_view import BalanceView
from ui.components.message_dialog import MessageDialog
from ui.components.transaction_form import TransactionForm
from ui.components.transaction_list import TransactionList
from utils.constants import APP_NAME, APP_WIDTH, APP_HEIGHT
from utils.currency import format_rate, parse_amount
from utils.errors import PersistenceError, ValidationError


class AppWindow(ctk.CTk):
    def __init__(
        self,
        ledger: LedgerService,
        feed: TransactionFeed,
        price_service: PriceService,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._ledger = ledger
        self._feed = feed
        self._price_svc = price_service
        self._price_gen = 0

        self.title(APP_NAME)
        self.minsize(APP_WIDTH, APP_HEIGHT)
        self.geometry(f"{APP_WIDTH}x{APP_HEIGHT}")

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self._build_top_bar()
        self._build_balance()
        self._build_list()

        self.after(100, self._on_appear)

    # ── Layout builders ───────────────────────────────────────────────────────

    def _build_top_bar(self):
        bar = ctk.CTkFrame(self, fg_color=("gray85", "gray15"), corner_radius=0, height=44)
        bar.grid(row=0, column=0, sticky="ew")
        bar.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            bar, text="Transactions", anchor="w",
            font=ctk.CTkFont(size=16, weight="bold"),
        ).grid(row=0, column=0, padx=12, pady=8, sticky="w")

        self._rate_label = ctk.CTkLabel(bar, text="", anchor="e")
        self._rate_label.grid(row=0, column=1, padx=12, pady=8, sticky="e")

    def _build_balance(self):
        self._balance_view = BalanceView(
            self,
            on_replenish=self._open_replenish,
            on_add_transaction=self._open_add_form,
        )
        self._balance_view.grid(row=1, column=0, sticky="ew", padx=8, pady=8)

    def _build_list(self):
        self._list = TransactionList(self, self._feed, on_load_more=self._load_more)
        self._list.grid(row=2, column=0, sticky="nsew", padx=8, pady=(0, 8))

    # ── Appearance ────────────────────────────────────────────────────────────

    def _on_appear(self):
        """Runs on launch and whenever the add form closes."""
        if self._feed.state == IDLE:
            self._run(self._feed.load_first_page)
            self._list.render()
        self._refresh_header()
        try:
            stale = self._price_svc.needs_refresh()
        except PersistenceError as e:
            self._show_error(e)
            return
        if stale:
            self._refresh_price()

    def _refresh_header(self):
        try:
            wallet = self._ledger.get_wallet()
        except PersistenceError as e:
            self._show_error(e)
            return
        self._balance_view.show(wallet)
        if wallet.has_rate:
            self._rate_label.configure(text=format_rate(wallet.rate))

    # ── Price refresh ─────────────────────────────────────────────────────────

    def _refresh_price(self):
        self._price_gen += 1
        gen = self._price_gen
        self._rate_label.configure(text="Updating…")

        def fetch():
            quote = self._price_svc.try_fetch_quote()
            self.after(0, lambda: self._on_quote_ready(gen, quote))

        threading.Thread(target=fetch, daemon=True).start()

    def _on_quote_ready(self, gen: int, quote):
        if gen != self._price_gen:
            return
        if not self.winfo_exists():
            return
        try:
            self._price_svc.record(quote)
        except PersistenceError as e:
            self._show_error(e)
        if quote is None:
            self._rate_label.configure(text="Failure")
        else:
            self._rate_label.configure(text=format_rate(quote.rate))

    # ── Transactions ──────────────────────────────────────────────────────────

    def _open_add_form(self):
        form = TransactionForm(self, on_submit=self._add_transaction)
        self.wait_window(form)
        self._on_appear()

    def _open_replenish(self):
        dialog = ctk.CTkInputDialog(text="Enter amount in BTC", title="Replenish")
        text = dialog.get_input()
        if text is None:
            return
        try:
            self._ledger.replenish(parse_amount(text))
        except ValidationError as e:
            MessageDialog(self, "Invalid amount", str(e))
            return
        except PersistenceError as e:
            self._show_error(e)
            return
        self._after_insert()

    def _add_transaction(self, amount: float, type_: str, category: str | None):
        try:
            self._ledger.add_transaction(amount, type_, category)
        except (ValidationError, PersistenceError) as e:
            self._show_error(e)
            return
        self._after_insert()

    def _after_insert(self):
        self._list.render()
        self._refresh_header()

    def _load_more(self):
        self._run(self._feed.load_more)
        self._list.render()

    # ── Helpers ───────────────────────────────────────────────────────────────

    def _run(self, action):
        try:
            return action()
        except PersistenceError as e:
            self._show_error(e)
            return None

    def _show_error(self, error: Exception):
        MessageDialog(self, "Error", str(error) or error.__class__.__name__)
