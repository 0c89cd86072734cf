from dataclasses import dataclass
from typing import Optional

# Confirmation dialog flavours
DIALOG_TYPES = ("danger", "warning", "info")

@dataclass
class Modal:
    """Open/closed state of a titled dialog"""
    title: str = ""
    is_open: bool = False

    def open(self, title: Optional[str] = None) -> None:
        if title is not None:
            self.title = title
        self.is_open = True

    def close(self) -> None:
        self.is_open = False

@dataclass
class ConfirmationModal(Modal):
    """Yes/no dialog; buttons are disabled while is_loading"""
    message: str = ""
    confirm_text: str = "Confirm"
    cancel_text: str = "Cancel"
    type: str = "danger"
    is_loading: bool = False

    def __post_init__(self):
        if self.type not in DIALOG_TYPES:
            raise ValueError(f"Unknown dialog type: {self.type}")

    @property
    def confirm_label(self) -> str:
        return "Processing..." if self.is_loading else self.confirm_text

    @property
    def buttons_enabled(self) -> bool:
        return not self.is_loading
