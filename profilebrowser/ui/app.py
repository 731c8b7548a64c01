"""Interface Tkinter principale."""

from __future__ import annotations

import io
import logging
import os
import subprocess
import sys
import tkinter as tk
import webbrowser
from concurrent.futures import Future, ThreadPoolExecutor
from tkinter import ttk
from urllib.request import urlopen

import sv_ttk
from PIL import Image, ImageDraw, ImageTk

from profilebrowser.browser import Callback, Job, ProfileBrowser
from profilebrowser.config import BrowserConfig
from profilebrowser.render import CardView, PageView, render
from profilebrowser.services import GitHubService
from profilebrowser.state import Mode, ViewState

logger = logging.getLogger(__name__)

ACCENT_COLOR = "#2F81F7"
BACKGROUND_COLOR = "#0D1117"
CARD_COLOR = "#161B22"
STATUS_NEUTRAL_COLOR = "#8B949E"
STATUS_ERROR_COLOR = "#F87171"
WINDOW_VERTICAL_MARGIN = 80
HEADER_HEIGHT_RATIO = 0.08
CARD_COLUMNS = 3
AVATAR_SIZE = 96
FUTURE_POLL_MS = 50
AVATAR_TIMEOUT = 5
MAX_WORKERS = 4


def open_in_browser(url: str) -> None:
    """Ouvre une URL avec l'outil système adapté à l'environnement."""
    if "WSL_DISTRO_NAME" in os.environ:
        try:
            subprocess.run(["wslview", url], check=False)
            return
        except FileNotFoundError:
            pass

    if sys.platform.startswith("linux"):
        try:
            subprocess.run(["xdg-open", url], check=False)
            return
        except FileNotFoundError:
            pass

    try:
        webbrowser.open(url)
    except webbrowser.Error:
        logger.warning("Impossible d'ouvrir %s", url)


def load_avatar(url: str) -> Image.Image:
    """Télécharge un avatar et le découpe en disque (hors du fil Tk)."""
    with urlopen(url, timeout=AVATAR_TIMEOUT) as response:
        buffer = io.BytesIO(response.read())

    image = Image.open(buffer).convert("RGBA")
    image = image.resize((AVATAR_SIZE, AVATAR_SIZE), Image.LANCZOS)
    mask = Image.new("L", image.size, 0)
    drawer = ImageDraw.Draw(mask)
    drawer.ellipse((0, 0, image.size[0], image.size[1]), fill=255)
    image.putalpha(mask)
    return image


class MainWindow:
    """Fenêtre principale de l'application."""

    def __init__(self, service: GitHubService, config: BrowserConfig | None = None) -> None:
        self._service = service
        self._executor = ThreadPoolExecutor(
            max_workers=MAX_WORKERS, thread_name_prefix="profilebrowser"
        )
        # les avatars ne doivent pas retarder les requêtes de l'API
        self._avatar_executor = ThreadPoolExecutor(
            max_workers=MAX_WORKERS, thread_name_prefix="profilebrowser-avatar"
        )

        self.root = tk.Tk()
        self.root.title("GitHub Profile Finder")
        self.root.protocol("WM_DELETE_WINDOW", self.close)

        self._browser = ProfileBrowser(service, config, runner=self._run_in_background)
        self._browser.subscribe(self._on_state_changed)

        screen_width = self.root.winfo_screenwidth()
        screen_height = self.root.winfo_screenheight()
        self._target_width = max(screen_width // 2, 900)
        self._target_height = max(screen_height - WINDOW_VERTICAL_MARGIN, 600)

        self.root.geometry(f"{self._target_width}x{self._target_height}+0+0")
        self.root.minsize(720, 480)

        sv_ttk.set_theme("dark")
        self.root.configure(bg=BACKGROUND_COLOR)
        self._configure_styles()

        self._count_var = tk.StringVar(value=str(self._browser.state.requested_count))
        self._username_var = tk.StringVar()
        self._status_var = tk.StringVar()
        self._error_var = tk.StringVar()
        self._loading_var = tk.StringVar()
        self._rendered_cards: tuple[CardView, ...] | None = None
        self._rendered_count: int | None = None
        self._card_generation = 0
        self._avatar_labels: dict[int, ttk.Label] = {}
        self._avatar_photos: dict[int, ImageTk.PhotoImage] = {}

        self.root.columnconfigure(0, weight=1)
        self.root.rowconfigure(0, weight=0)
        self.root.rowconfigure(1, weight=1)

        self._build_header()
        self._build_main_area()
        self._apply(render(self._browser.state))

    # --------------------------------------------------------------------- UI -
    def _configure_styles(self) -> None:
        style = ttk.Style()
        style.configure("Main.TFrame", background=BACKGROUND_COLOR)
        style.configure("Header.TFrame", background=BACKGROUND_COLOR)
        style.configure("Card.TFrame", background=CARD_COLOR)
        style.configure(
            "HeaderTitle.TLabel",
            background=BACKGROUND_COLOR,
            foreground="#FFFFFF",
            font=("Helvetica", 20, "bold"),
        )
        style.configure(
            "Subtitle.TLabel",
            background=BACKGROUND_COLOR,
            foreground=STATUS_NEUTRAL_COLOR,
            font=("Helvetica", 11),
        )
        style.configure(
            "Status.TLabel",
            background=BACKGROUND_COLOR,
            foreground=STATUS_NEUTRAL_COLOR,
            font=("Helvetica", 11),
        )
        style.configure(
            "Error.TLabel",
            background=BACKGROUND_COLOR,
            foreground=STATUS_ERROR_COLOR,
            font=("Helvetica", 11, "bold"),
        )
        style.configure(
            "CardTitle.TLabel",
            background=CARD_COLOR,
            foreground="#FFFFFF",
            font=("Helvetica", 13, "bold"),
        )
        style.configure(
            "CardText.TLabel",
            background=CARD_COLOR,
            foreground=STATUS_NEUTRAL_COLOR,
            font=("Helvetica", 10),
        )
        style.configure(
            "CardLink.TLabel",
            background=CARD_COLOR,
            foreground=ACCENT_COLOR,
            font=("Helvetica", 10, "underline"),
        )
        style.configure("Avatar.TLabel", background=CARD_COLOR, font=("Helvetica", 36))
        style.configure("Accent.TButton", font=("Helvetica", 11, "bold"))
        style.configure("TButton", padding=(16, 8))
        style.map("TButton", background=[("disabled", "#2B2B2B")])
        self.root.option_add("*Font", "Helvetica 11")

    def _build_header(self) -> None:
        header_height = max(int(self._target_height * HEADER_HEIGHT_RATIO), 72)
        frame = ttk.Frame(self.root, style="Header.TFrame", padding=(24, 8))
        frame.grid(row=0, column=0, sticky="nwe")
        frame.columnconfigure(0, weight=1)
        frame.configure(height=header_height)
        frame.grid_propagate(False)

        ttk.Label(frame, text="GitHub Profile Finder", style="HeaderTitle.TLabel").grid(
            row=0, column=0, sticky="w"
        )
        ttk.Label(
            frame,
            text="Parcourez des profils GitHub au hasard ou cherchez un identifiant précis.",
            style="Subtitle.TLabel",
        ).grid(row=1, column=0, sticky="w")

    def _build_main_area(self) -> None:
        main_frame = ttk.Frame(self.root, padding=(24, 8, 24, 16), style="Main.TFrame")
        main_frame.grid(row=1, column=0, sticky="nsew")
        main_frame.columnconfigure(0, weight=1)
        main_frame.rowconfigure(5, weight=1)

        self._build_mode_toggle(main_frame)
        self._build_search_bars(main_frame)

        ttk.Label(main_frame, textvariable=self._status_var, style="Status.TLabel").grid(
            row=2, column=0, sticky="w", pady=(12, 0)
        )
        self._error_label = ttk.Label(
            main_frame, textvariable=self._error_var, style="Error.TLabel"
        )
        self._error_label.grid(row=3, column=0, sticky="w", pady=(8, 0))
        self._loading_frame = ttk.Frame(main_frame, style="Main.TFrame")
        self._loading_frame.grid(row=4, column=0, sticky="w", pady=(8, 0))
        self._loading_bar = ttk.Progressbar(self._loading_frame, mode="indeterminate", length=120)
        self._loading_bar.pack(side=tk.LEFT)
        ttk.Label(
            self._loading_frame, textvariable=self._loading_var, style="Status.TLabel"
        ).pack(side=tk.LEFT, padx=(12, 0))

        self._build_results_section(main_frame)

    def _build_mode_toggle(self, parent: tk.Misc) -> None:
        frame = ttk.Frame(parent, style="Main.TFrame")
        frame.grid(row=0, column=0, sticky="w", pady=(0, 12))

        self._random_tab = ttk.Button(frame, command=lambda: self._browser.set_mode(Mode.RANDOM))
        self._random_tab.pack(side=tk.LEFT)
        self._username_tab = ttk.Button(
            frame, command=lambda: self._browser.set_mode(Mode.USERNAME)
        )
        self._username_tab.pack(side=tk.LEFT, padx=(8, 0))

    def _build_search_bars(self, parent: tk.Misc) -> None:
        self._random_bar = ttk.Frame(parent, style="Main.TFrame")
        self._random_bar.grid(row=1, column=0, sticky="ew")
        self._random_hint = ttk.Label(self._random_bar, style="Status.TLabel")
        self._random_hint.grid(row=0, column=0, columnspan=3, sticky="w", pady=(0, 4))
        self._count_entry = ttk.Spinbox(
            self._random_bar,
            from_=1,
            to=100,
            textvariable=self._count_var,
            width=8,
            command=self._commit_count,
        )
        self._count_entry.grid(row=1, column=0, sticky="w", ipady=4)
        self._count_entry.bind("<Return>", lambda _: self._submit())
        self._count_entry.bind("<FocusOut>", lambda _: self._commit_count())
        self._search_button = ttk.Button(
            self._random_bar, command=self._search_profiles, style="Accent.TButton"
        )
        self._search_button.grid(row=1, column=1, padx=(12, 0))
        self._random_button = ttk.Button(
            self._random_bar, command=self._browser.fetch_random_with_random_count
        )
        self._random_button.grid(row=1, column=2, padx=(8, 0))

        self._username_bar = ttk.Frame(parent, style="Main.TFrame")
        self._username_bar.grid(row=1, column=0, sticky="ew")
        self._username_hint = ttk.Label(self._username_bar, style="Status.TLabel")
        self._username_hint.grid(row=0, column=0, columnspan=3, sticky="w", pady=(0, 4))
        self._username_entry = ttk.Entry(
            self._username_bar, textvariable=self._username_var, width=32
        )
        self._username_entry.grid(row=1, column=0, sticky="w", ipady=4)
        self._username_entry.bind("<Return>", lambda _: self._submit())
        self._username_var.trace_add("write", self._on_username_var_changed)
        self._user_search_button = ttk.Button(
            self._username_bar,
            command=lambda: self._browser.fetch_single_user(self._username_var.get()),
            style="Accent.TButton",
        )
        self._user_search_button.grid(row=1, column=1, padx=(12, 0))
        self._clear_button = ttk.Button(self._username_bar, command=self._browser.clear)
        self._clear_button.grid(row=1, column=2, padx=(8, 0))

    def _build_results_section(self, parent: tk.Misc) -> None:
        container = ttk.Frame(parent, style="Main.TFrame")
        container.grid(row=5, column=0, sticky="nsew", pady=(16, 0))
        container.columnconfigure(0, weight=1)
        container.rowconfigure(0, weight=1)

        self._canvas = tk.Canvas(container, bg=BACKGROUND_COLOR, highlightthickness=0)
        self._canvas.grid(row=0, column=0, sticky="nsew")
        scrollbar = ttk.Scrollbar(container, orient=tk.VERTICAL, command=self._canvas.yview)
        scrollbar.grid(row=0, column=1, sticky="ns")
        self._canvas.configure(yscrollcommand=scrollbar.set)

        self._cards_frame = ttk.Frame(self._canvas, style="Main.TFrame")
        for column in range(CARD_COLUMNS):
            self._cards_frame.columnconfigure(column, weight=1, uniform="cards")
        self._cards_window = self._canvas.create_window(
            (0, 0), window=self._cards_frame, anchor="nw"
        )
        self._cards_frame.bind(
            "<Configure>",
            lambda _: self._canvas.configure(scrollregion=self._canvas.bbox("all")),
        )
        self._canvas.bind(
            "<Configure>",
            lambda event: self._canvas.itemconfigure(self._cards_window, width=event.width),
        )
        for sequence in ("<MouseWheel>", "<Button-4>", "<Button-5>"):
            self._canvas.bind_all(sequence, self._on_mouse_wheel)

    def _build_card(self, card: CardView, index: int) -> None:
        frame = ttk.Frame(self._cards_frame, style="Card.TFrame", padding=(16, 14))
        frame.grid(
            row=index // CARD_COLUMNS,
            column=index % CARD_COLUMNS,
            sticky="nsew",
            padx=8,
            pady=8,
        )
        wraplength = max(self._target_width // CARD_COLUMNS - 80, 160)

        avatar = ttk.Label(frame, text="🙂", style="Avatar.TLabel")
        avatar.pack(pady=(0, 8))
        self._avatar_labels[card.key] = avatar
        ttk.Label(frame, text=card.title, style="CardTitle.TLabel").pack()
        ttk.Label(frame, text=card.id_text, style="CardText.TLabel").pack()
        for line in card.lines:
            ttk.Label(
                frame, text=line.text, style="CardText.TLabel", wraplength=wraplength
            ).pack(anchor="w", pady=(4, 0))
        link = ttk.Label(frame, text=card.link_label, style="CardLink.TLabel", cursor="hand2")
        link.pack(pady=(10, 0))
        link.bind("<Button-1>", lambda _, url=card.profile_url: open_in_browser(url))

        generation = self._card_generation
        self._submit_job(
            self._avatar_executor,
            lambda url=card.avatar_url: load_avatar(url),
            lambda future, key=card.key: self._on_avatar_loaded(generation, key, future),
        )

    # ------------------------------------------------------------- Rendu -
    def _on_state_changed(self, state: ViewState) -> None:
        self._apply(render(state))

    def _apply(self, page: PageView) -> None:
        active = page.toggle.active
        self._random_tab.configure(
            text=page.toggle.random_label,
            style="Accent.TButton" if active is Mode.RANDOM else "TButton",
        )
        self._username_tab.configure(
            text=page.toggle.username_label,
            style="Accent.TButton" if active is Mode.USERNAME else "TButton",
        )

        bar = page.search_bar
        if bar.mode is Mode.RANDOM:
            self._username_bar.grid_remove()
            self._random_bar.grid()
            self._random_hint.configure(text=bar.placeholder)
            count = self._browser.state.requested_count
            if count != self._rendered_count:
                self._count_var.set(bar.input_value)
                self._rendered_count = count
            self._search_button.configure(
                text=bar.submit_label, state=tk.NORMAL if bar.submit_enabled else tk.DISABLED
            )
            self._random_button.configure(
                text=bar.secondary_label,
                state=tk.NORMAL if bar.secondary_enabled else tk.DISABLED,
            )
        else:
            self._random_bar.grid_remove()
            self._username_bar.grid()
            self._username_hint.configure(text=bar.placeholder)
            if self._username_var.get() != bar.input_value:
                self._username_var.set(bar.input_value)
            self._user_search_button.configure(
                text=bar.submit_label, state=tk.NORMAL if bar.submit_enabled else tk.DISABLED
            )
            self._clear_button.configure(
                text=bar.secondary_label,
                state=tk.NORMAL if bar.secondary_enabled else tk.DISABLED,
            )

        self._status_var.set(page.status_text)

        if page.error_text is None:
            self._error_label.grid_remove()
        else:
            self._error_var.set(f"⚠️ {page.error_text}")
            self._error_label.grid()

        if page.loading_text is None:
            self._loading_bar.stop()
            self._loading_frame.grid_remove()
        else:
            self._loading_var.set(page.loading_text)
            self._loading_frame.grid()
            self._loading_bar.start(12)

        if page.cards_differ(self._rendered_cards):
            self._render_cards(page)

    def _render_cards(self, page: PageView) -> None:
        for child in self._cards_frame.winfo_children():
            child.destroy()
        self._card_generation += 1
        self._avatar_labels.clear()
        self._avatar_photos.clear()

        for index, card in enumerate(page.cards):
            self._build_card(card, index)
        self._rendered_cards = page.cards
        self._canvas.yview_moveto(0)

    def _on_avatar_loaded(self, generation: int, key: int, future: Future) -> None:
        if generation != self._card_generation:
            return
        try:
            image = future.result()
        except Exception as exc:  # noqa: BLE001
            logger.debug("Avatar indisponible pour %s : %s", key, exc)
            return

        label = self._avatar_labels.get(key)
        if label is None:
            return
        photo = ImageTk.PhotoImage(image)
        self._avatar_photos[key] = photo
        label.configure(image=photo, text="")

    # --------------------------------------------------------------- Callbacks -
    def _run_in_background(self, job: Job, callback: Callback) -> None:
        """Exécute ``job`` dans le pool puis rappelle ``callback`` sur le fil Tk."""
        self._submit_job(self._executor, job, callback)

    def _submit_job(self, executor: ThreadPoolExecutor, job: Job, callback: Callback) -> None:
        future = executor.submit(job)

        def poll() -> None:
            if future.done():
                callback(future)
            else:
                self.root.after(FUTURE_POLL_MS, poll)

        self.root.after(FUTURE_POLL_MS, poll)

    def _on_username_var_changed(self, *_: object) -> None:
        value = self._username_var.get()
        if value != self._browser.state.username_query:
            self._browser.set_username(value)

    def _commit_count(self) -> None:
        self._browser.set_count(self._count_var.get())
        # la saisie est remplacée par la valeur bornée
        self._count_var.set(str(self._browser.state.requested_count))
        self._rendered_count = self._browser.state.requested_count

    def _search_profiles(self) -> None:
        self._commit_count()
        self._browser.fetch_random_batch(self._browser.state.requested_count)

    def _submit(self) -> None:
        if self._browser.state.is_loading:
            return
        if self._browser.state.mode is Mode.RANDOM:
            self._commit_count()
        self._browser.submit()

    def _on_mouse_wheel(self, event: tk.Event) -> None:
        if event.num == 4 or event.delta > 0:
            self._canvas.yview_scroll(-1, "units")
        elif event.num == 5 or event.delta < 0:
            self._canvas.yview_scroll(1, "units")

    # ----------------------------------------------------------------- Public -
    def close(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)
        self._avatar_executor.shutdown(wait=False, cancel_futures=True)
        self._service.close()
        self.root.destroy()

    def run(self) -> None:
        self._browser.mount()
        self.root.mainloop()
