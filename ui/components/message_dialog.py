import customtkinter as ctk


class MessageDialog(ctk.CTkToplevel):
    """Blocking alert with a single OK button."""

    def __init__(self, master, title: str, message: str, **kwargs):
        super().__init__(master, **kwargs)
        self.title(title)
        self.resizable(False, False)

        self.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            self, text=message, wraplength=320, justify="left", padx=20, pady=16
        ).grid(row=0, column=0, sticky="ew")

        ctk.CTkButton(
            self, text="OK", width=90, command=self.destroy,
        ).grid(row=1, column=0, pady=(0, 16), padx=20, sticky="e")

        self.transient(master)
        self.grab_set()
        self._center()
        self.wait_window()

    def _center(self):
        self.update_idletasks()
        mw = self.master.winfo_x() + self.master.winfo_width() // 2
        mh = self.master.winfo_y() + self.master.winfo_height() // 2
        w, h = self.winfo_width(), self.winfo_height()
        self.geometry(f"+{mw - w//2}+{mh - h//2}")
