"""State management submodules for ringframe."""

from .view import ViewState
from .input import InputState
from .session import EditorSession

__all__ = [
    'ViewState',
    'InputState',
    'EditorSession',
]
