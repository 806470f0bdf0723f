import customtkinter as ctk

from services.ledger_service import validate_transaction
from utils.constants import EXPENSE_CATEGORIES
from utils.currency import parse_amount
from utils.errors import ValidationError

_ERROR_COLOR = "#F44336"
_CATEGORY_PROMPT = "Category"


class TransactionForm(ctk.CTkToplevel):
    """Collects an expense: amount in BTC plus a category.

    ``on_submit(amount, type_, category)`` is called with the signed amount
    once both fields validate; the form then closes.
    """

    def __init__(self, master, on_submit, **kwargs):
        super().__init__(master, **kwargs)
        self._on_submit = on_submit

        self.title("Add transaction")
        self.resizable(False, False)
        self.grid_columnconfigure(0, weight=1)

        self._amount_entry = ctk.CTkEntry(
            self, placeholder_text="Enter amount in BTC", width=260,
        )
        self._amount_entry.bind("<KeyRelease>", lambda _: self._on_amount_edit())
        self._amount_entry.grid(row=0, column=0, padx=16, pady=(16, 8), sticky="ew")
        self._default_border = self._amount_entry.cget("border_color")

        self._cat_var = ctk.StringVar(value=_CATEGORY_PROMPT)
        self._cat_menu = ctk.CTkOptionMenu(
            self, variable=self._cat_var,
            values=[c.title() for c in EXPENSE_CATEGORIES],
            command=lambda _: self._validate_category(),
            width=260,
        )
        self._cat_menu.grid(row=1, column=0, padx=16, pady=8, sticky="ew")
        self._default_menu_color = self._cat_menu.cget("fg_color")

        self._error_var = ctk.StringVar()
        ctk.CTkLabel(
            self, textvariable=self._error_var,
            text_color=_ERROR_COLOR, wraplength=260, anchor="w",
        ).grid(row=2, column=0, padx=16, sticky="ew")

        ctk.CTkButton(self, text="Add", command=self._on_add).grid(
            row=3, column=0, padx=16, pady=(8, 16), sticky="ew"
        )

        self.transient(master)
        self.grab_set()
        self._center()

    def _amount(self) -> float | None:
        return parse_amount(self._amount_entry.get())

    def _category(self) -> str | None:
        value = self._cat_var.get().lower()
        return value if value in EXPENSE_CATEGORIES else None

    def _on_amount_edit(self):
        text = self._amount_entry.get()
        if "," in text:
            self._amount_entry.delete(0, "end")
            self._amount_entry.insert(0, text.replace(",", "."))
        self._validate_amount()

    def _validate_amount(self) -> bool:
        amount = self._amount()
        ok = amount is not None and amount > 0
        self._amount_entry.configure(
            border_color=self._default_border if ok else _ERROR_COLOR
        )
        return ok

    def _validate_category(self) -> bool:
        ok = self._category() is not None
        self._cat_menu.configure(
            fg_color=self._default_menu_color if ok else _ERROR_COLOR
        )
        return ok

    def _on_add(self):
        amount_ok = self._validate_amount()
        category_ok = self._validate_category()
        if not (amount_ok and category_ok):
            return
        try:
            validate_transaction(-self._amount(), "expense", self._category())
        except ValidationError as e:
            self._error_var.set(str(e))
            return
        self.destroy()
        self._on_submit(-self._amount(), "expense", self._category())

    def _center(self):
        self.update_idletasks()
        mw = self.master.winfo_x() + self.master.winfo_width() // 2
        mh = self.master.winfo_y() + self.master.winfo_height() // 2
        w, h = self.winfo_reqwidth(), self.winfo_reqheight()
        self.geometry(f"+{mw - w//2}+{mh - h//2}")
