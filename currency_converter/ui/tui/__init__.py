"""Rich-based terminal UI for the currency converter.

Modules:
- app.py: Menu loop and actions
- display.py: Rich renderables for panels/tables
- renderer.py: Formatting utilities
- input_handler.py: Input channel and validated prompts
- config.py: Styles, menu and constants
"""

__all__ = [
    "app",
    "display",
    "renderer",
    "input_handler",
    "config",
]
