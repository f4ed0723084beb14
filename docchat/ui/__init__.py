"""NiceGUI interface - thin visualization layer for the session controllers.

Responsibilities:
    - Upload area (click or drag-and-drop) with per-attempt progress
    - Chat transcript with markdown answers and source excerpts
    - Input disabled while an answer is pending

Contains no state rules of its own. Subscribes to the controllers and
re-renders on every notification.
"""
