# DragGesture - Freehand drawing over an image with a flip-card preview
# Version: 1.0.0

"""
Core modules for the drawing demo:
- canvas: Stroke recording, color palette and undo
- controls: Bounded slider and stepper controls, style profiles
- render: Stroke rasterization
- capture: Render-to-bitmap of a window region
- scheduler: Next-cycle deferral of layout updates
- flip: Flip-card animation
- assets: Background and card back images
- config: Settings from environment and command line
- ui: Main application interface
"""

__version__ = "1.0.0"
