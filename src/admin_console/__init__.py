"""Admin Console: notes/todo editor, network monitor, reminders and a command launcher in one terminal dashboard."""

__version__ = "0.1.0"
