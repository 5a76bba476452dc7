"""Services package."""

from .settings_manager import (
    SettingsManager,
    AppSettings,
    EditorSettings,
    UISettings,
)
from .tools import (
    MouseInteraction,
    Tool,
    ToolKind,
    ToolAction,
    ToolActionKind,
)
from .actions import (
    Idle,
    Panning,
    MovingSelection,
    DrawingSelection,
    Erasing,
    DrawingBond,
)
from .viewport import Viewport
from .interpreter import (
    InteractionTracker,
    PointerEvent,
    PointerEventKind,
    KeyEvent,
    Key,
    handle_event,
    handle_scrolling,
)
from .editor import Editor, RenderCache, RenameAtom

__all__ = [
    "SettingsManager",
    "AppSettings",
    "EditorSettings",
    "UISettings",
    "MouseInteraction",
    "Tool",
    "ToolKind",
    "ToolAction",
    "ToolActionKind",
    "Idle",
    "Panning",
    "MovingSelection",
    "DrawingSelection",
    "Erasing",
    "DrawingBond",
    "Viewport",
    "InteractionTracker",
    "PointerEvent",
    "PointerEventKind",
    "KeyEvent",
    "Key",
    "handle_event",
    "handle_scrolling",
    "Editor",
    "RenderCache",
    "RenameAtom",
]
