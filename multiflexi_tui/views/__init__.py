"""View models for every screen of the dashboard."""

from __future__ import annotations

from .actions import EncryptionView, PruneView
from .base import ViewModel
from .commands import CommandsView
from .confirm import ConfirmView
from .detail import DetailView
from .editor import EDITOR_FIELDS, EditorView
from .home import GLANCE_REQUESTS, HomeView
from .listing import ListingView
from .viewer import HelpView

__all__ = [
    "CommandsView",
    "ConfirmView",
    "DetailView",
    "EDITOR_FIELDS",
    "EditorView",
    "EncryptionView",
    "GLANCE_REQUESTS",
    "HelpView",
    "HomeView",
    "ListingView",
    "PruneView",
    "ViewModel",
]
