"""
Fingerspell UI Module

PyQt5 window showing the current sign and the typed text.
"""
from .sign_window import SignWindow

__all__ = [
    'SignWindow',
]
