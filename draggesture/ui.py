"""
UI Module - Main Application Interface
======================================
OpenCV window with the drawing canvas over an image and a control panel
beneath it. "Present" captures the canvas region and opens a second
window with the capture on a flip card.
"""

import cv2
import numpy as np
from typing import Callable, List, Optional, Tuple
from dataclasses import dataclass

from draggesture.assets import load_or_placeholder
from draggesture.canvas import Canvas
from draggesture.capture import CaptureError, CapturedImage, Rect, capture_region
from draggesture.config import AppConfig, ConfigError, load_config
from draggesture.flip import FlipAnimator, FlipCard
from draggesture.render import draw_strokes
from draggesture.scheduler import FrameScheduler


@dataclass(frozen=True)
class Button:
    """Clickable region of the control panel."""
    name: str
    label: str
    rect: Rect
    action: Callable[[], object]


@dataclass(frozen=True)
class Layout:
    """Positions computed for one rendered frame."""
    window_size: Tuple[int, int]
    canvas_rect: Rect
    panel_rect: Rect
    buttons: Tuple[Button, ...]


class OverlayApp:
    """
    Drawing canvas with style controls, undo and a flip-card preview.

    All state lives here and is changed only from OpenCV callbacks and
    the main loop. Layout measured while rendering is stored through the
    frame scheduler once the frame is finished.
    """

    WINDOW_NAME = "DragGesture"
    CARD_WINDOW_NAME = "DragGesture - Card"

    # Layout
    MARGIN = 20
    PANEL_MIN_WIDTH = 360
    ROW_HEIGHT = 46
    SWATCH_SIZE = 30

    # UI Colors (BGR)
    UI_BG_COLOR = (255, 255, 255)
    UI_TEXT_COLOR = (142, 142, 142)
    UI_ACCENT_COLOR = (255, 122, 0)
    UI_BUTTON_COLOR = (242, 242, 242)
    UI_ERROR_COLOR = (48, 59, 255)

    OPACITY_TRACKBAR_STEPS = 100

    def __init__(self, config: Optional[AppConfig] = None):
        """
        Initialize the application.

        Args:
            config: Application settings (defaults for everything if None)
        """
        self.config = config or AppConfig()
        self.profile = self.config.style_profile

        self.canvas = Canvas(
            width=self.config.canvas_width,
            height=self.config.canvas_height,
            profile=self.profile
        )
        canvas_size = self.config.canvas_size
        self.background = load_or_placeholder(
            self.config.background_path, canvas_size, kind="background"
        )
        self.back_image = load_or_placeholder(
            self.config.back_image_path, canvas_size, kind="back"
        )

        self.scheduler = FrameScheduler()

        # Layout measured during the previous render
        self._canvas_rect = Rect.zero()
        self._buttons: Tuple[Button, ...] = ()
        self._last_frame: Optional[np.ndarray] = None

        # Presentation state
        self.captured: Optional[CapturedImage] = None
        self.card: Optional[FlipCard] = None
        self._card_window_open = False

        self._running = False
        self._trackbars_created = False
        self.status = ""

    # State access
    @property
    def canvas_rect(self) -> Rect:
        return self._canvas_rect

    @property
    def buttons(self) -> Tuple[Button, ...]:
        return self._buttons

    @property
    def is_presenting(self) -> bool:
        return self.card is not None

    # Actions
    def change_color(self) -> int:
        index = self.canvas.next_color()
        self.status = f"Color: {self.canvas.color_name}"
        return index

    def undo(self) -> bool:
        if self.canvas.undo():
            self.status = "Undo"
            return True
        self.status = "Nothing to undo"
        return False

    def step_thickness(self, direction: int) -> float:
        """Move thickness one step up (direction > 0) or down."""
        control = self.canvas.thickness_control
        value = control.increment() if direction > 0 else control.decrement()
        self._sync_trackbars()
        self.status = f"Thickness: {int(value)}"
        return value

    def present(self) -> bool:
        """
        Capture the canvas region and show it on the flip card.

        Returns:
            True if the card was opened, False if there was nothing to capture
        """
        if self._last_frame is None:
            self.status = "Nothing to present yet"
            print("[WARN] Present requested before the first frame was drawn")
            return False

        try:
            captured = capture_region(self._last_frame, self._canvas_rect)
        except CaptureError as e:
            self.status = "Capture failed"
            print(f"[ERROR] {e}")
            return False

        self.captured = captured
        self.card = FlipCard(
            captured,
            self.back_image,
            self.config.canvas_size,
            FlipAnimator(duration=self.config.flip_duration)
        )
        self.status = "Presented"
        print(f"[INFO] Captured {captured.width}x{captured.height} at {captured.rect.origin}")
        return True

    def flip_card(self) -> bool:
        if self.card is None:
            return False
        self.card.tap()
        return True

    def close_card(self):
        """Dismiss the flip card; the capture goes with it."""
        if self._card_window_open:
            cv2.destroyWindow(self.CARD_WINDOW_NAME)
            self._card_window_open = False
            print("[INFO] Card closed")
        self.card = None
        self.captured = None

    # Layout and rendering
    def compute_layout(self) -> Layout:
        """Place the canvas, panel rows and buttons."""
        cw, ch = self.config.canvas_size
        content_w = max(cw, self.PANEL_MIN_WIDTH)
        win_w = content_w + 2 * self.MARGIN

        canvas_rect = Rect((win_w - cw) // 2, self.MARGIN, cw, ch)

        panel_x = self.MARGIN
        panel_y = canvas_rect.y + ch + self.MARGIN
        row = self.ROW_HEIGHT

        def row_rect(i: int, x: int = panel_x, width: int = content_w) -> Rect:
            return Rect(x, panel_y + i * row, width, row - 6)

        buttons: List[Button] = []
        rows = 0

        # Thickness row (stepper buttons on the right for stepper controls)
        if self.canvas.thickness_control.is_stepper:
            right = panel_x + content_w
            buttons.append(Button(
                "thickness_down", "-", row_rect(rows, right - 2 * row, row - 6),
                lambda: self.step_thickness(-1)
            ))
            buttons.append(Button(
                "thickness_up", "+", row_rect(rows, right - row, row - 6),
                lambda: self.step_thickness(1)
            ))
        rows += 1

        if self.profile.has_opacity:
            rows += 1

        buttons.append(Button("color", "Color", row_rect(rows), self.change_color))
        rows += 1
        buttons.append(Button("undo", "Undo Drawing", row_rect(rows), self.undo))
        rows += 1
        buttons.append(Button("present", "present", row_rect(rows), self.present))
        rows += 1

        # Status line
        rows += 1
        panel_rect = Rect(0, panel_y, win_w, rows * row)
        win_h = panel_y + rows * row + self.MARGIN

        return Layout(
            window_size=(win_w, win_h),
            canvas_rect=canvas_rect,
            panel_rect=panel_rect,
            buttons=tuple(buttons)
        )

    def _apply_layout(self, layout: Layout):
        self._canvas_rect = layout.canvas_rect
        self._buttons = layout.buttons

    def compose_frame(self) -> np.ndarray:
        """
        Render the main window.

        Returns:
            BGR frame for the main window
        """
        layout = self.compute_layout()
        win_w, win_h = layout.window_size
        frame = np.full((win_h, win_w, 3), self.UI_BG_COLOR, dtype=np.uint8)

        # Background image, then strokes (which may run past its edges)
        rect = layout.canvas_rect
        frame[rect.y:rect.y + rect.height, rect.x:rect.x + rect.width] = self.background
        draw_strokes(frame, self.canvas.all_strokes(), offset=rect.origin)

        frame = self._draw_panel(frame, layout)

        # Store the measured layout after this render pass
        self.scheduler.defer(self._apply_layout, layout)

        self._last_frame = frame
        return frame

    def _put_text(
        self,
        frame: np.ndarray,
        text: str,
        origin: Tuple[int, int],
        color: Tuple[int, int, int] = UI_TEXT_COLOR,
        scale: float = 0.6
    ):
        cv2.putText(
            frame, text, origin, cv2.FONT_HERSHEY_SIMPLEX,
            scale, color, 1, cv2.LINE_AA
        )

    def _draw_panel(self, frame: np.ndarray, layout: Layout) -> np.ndarray:
        """Draw labels, buttons and the status line."""
        panel = layout.panel_rect
        frame[panel.y:panel.y + panel.height, panel.x:panel.x + panel.width] = self.UI_BG_COLOR

        row = self.ROW_HEIGHT
        text_x = self.MARGIN + 10
        baseline = panel.y + row // 2 + 5

        self._put_text(frame, f"Thickness:{int(self.canvas.thickness)}", (text_x, baseline))
        if self.profile.has_opacity:
            baseline += row
            self._put_text(frame, f"Opacity:{self.canvas.opacity:.1f}", (text_x, baseline))

        for button in layout.buttons:
            self._draw_button(frame, button)

        if self.status:
            color = self.UI_ERROR_COLOR if "fail" in self.status.lower() else self.UI_ACCENT_COLOR
            status_y = panel.y + panel.height - row // 2 + 5
            self._put_text(frame, self.status, (text_x, status_y), color, 0.5)

        return frame

    def _draw_button(self, frame: np.ndarray, button: Button):
        r = button.rect
        cv2.rectangle(
            frame, (r.x, r.y), (r.x + r.width - 1, r.y + r.height - 1),
            self.UI_BUTTON_COLOR, -1
        )
        text_y = r.y + r.height // 2 + 6

        if button.name == "color":
            self._put_text(frame, f"Color:{self.canvas.color_name}", (r.x + 10, text_y))
            s = self.SWATCH_SIZE
            sx = r.x + r.width - s - 10
            sy = r.y + (r.height - s) // 2
            cv2.rectangle(frame, (sx, sy), (sx + s, sy + s), self.canvas.color, -1)
            cv2.rectangle(frame, (sx, sy), (sx + s, sy + s), self.UI_TEXT_COLOR, 1)

        elif button.name == "undo":
            self._put_text(frame, button.label, (r.x + 10, text_y))
            s = self.SWATCH_SIZE
            sx = r.x + r.width - s - 10
            sy = r.y + (r.height - s) // 2
            cv2.rectangle(frame, (sx, sy), (sx + s, sy + s), self.UI_TEXT_COLOR, -1)
            cv2.arrowedLine(
                frame, (sx + s - 8, sy + s - 8), (sx + 7, sy + 10),
                self.UI_BG_COLOR, 2, cv2.LINE_AA, tipLength=0.4
            )

        else:
            (tw, _), _ = cv2.getTextSize(button.label, cv2.FONT_HERSHEY_SIMPLEX, 0.6, 1)
            self._put_text(
                frame, button.label, (r.x + (r.width - tw) // 2, text_y), self.UI_ACCENT_COLOR
            )

    # Input handling
    def _button_at(self, x: int, y: int) -> Optional[Button]:
        for button in self._buttons:
            if button.rect.contains(x, y):
                return button
        return None

    def _on_mouse(self, event, x, y, flags, param):
        """Handle mouse events on the main window."""
        # The card is modal while it is shown
        if self.is_presenting:
            return

        if event == cv2.EVENT_LBUTTONDOWN:
            if self._canvas_rect.contains(x, y):
                self.canvas.begin_gesture(self._canvas_rect.to_local(x, y))
                return
            button = self._button_at(x, y)
            if button is not None:
                button.action()

        elif event == cv2.EVENT_MOUSEMOVE:
            if not self.canvas.is_drawing:
                return
            # Button released outside the window
            if not flags & cv2.EVENT_FLAG_LBUTTON:
                self.canvas.end_gesture()
                return
            self.canvas.continue_gesture(self._canvas_rect.to_local(x, y))

        elif event == cv2.EVENT_LBUTTONUP:
            if self.canvas.is_drawing:
                self.canvas.end_gesture()

    def _on_card_mouse(self, event, x, y, flags, param):
        if event == cv2.EVENT_LBUTTONDOWN:
            self.flip_card()

    def _on_thickness_trackbar(self, pos: int):
        self.canvas.set_thickness(pos)

    def _on_opacity_trackbar(self, pos: int):
        self.canvas.opacity_control.from_fraction(pos / self.OPACITY_TRACKBAR_STEPS)

    def _create_trackbars(self):
        """Create sliders for slider-type controls."""
        thickness = self.canvas.thickness_control
        if not thickness.is_stepper:
            cv2.createTrackbar(
                "Thickness", self.WINDOW_NAME, int(thickness.value),
                int(thickness.maximum), self._on_thickness_trackbar
            )
            cv2.setTrackbarMin("Thickness", self.WINDOW_NAME, int(thickness.minimum))

        if self.profile.has_opacity:
            cv2.createTrackbar(
                "Opacity %", self.WINDOW_NAME,
                int(round(self.canvas.opacity_control.fraction * self.OPACITY_TRACKBAR_STEPS)),
                self.OPACITY_TRACKBAR_STEPS, self._on_opacity_trackbar
            )
        self._trackbars_created = True

    def _sync_trackbars(self):
        thickness = self.canvas.thickness_control
        if self._trackbars_created and not thickness.is_stepper:
            cv2.setTrackbarPos("Thickness", self.WINDOW_NAME, int(thickness.value))

    def _handle_keyboard(self, key: int) -> bool:
        """
        Handle keyboard input.

        Returns:
            False if should quit, True otherwise
        """
        if key == 255:
            return True

        # Keys go to the card while it is shown
        if self.is_presenting:
            if key == ord('q') or key == 27:
                self.close_card()
            elif key == ord(' ') or key == ord('f'):
                self.flip_card()
            return True

        if key == ord('q') or key == 27:  # Q or Escape
            return False

        elif key == ord('c'):
            self.change_color()

        elif key == ord('u'):
            self.undo()

        elif key == ord('p'):
            self.present()

        elif key == ord('+') or key == ord('='):
            self.step_thickness(1)

        elif key == ord('-'):
            self.step_thickness(-1)

        return True

    def _window_closed(self, name: str) -> bool:
        return cv2.getWindowProperty(name, cv2.WND_PROP_VISIBLE) < 1

    def _show_card(self):
        if not self._card_window_open:
            cv2.namedWindow(self.CARD_WINDOW_NAME, cv2.WINDOW_AUTOSIZE)
            cv2.setMouseCallback(self.CARD_WINDOW_NAME, self._on_card_mouse)
            self._card_window_open = True
            print("[INFO] Card opened (click to flip, Q to close)")
        cv2.imshow(self.CARD_WINDOW_NAME, self.card.render())

    def run(self):
        """Run the main application loop."""
        print("\n" + "=" * 60)
        print("  DragGesture - Draw over an image, flip it like a card")
        print("=" * 60)
        print(f"\nProfile: {self.profile.name}")
        print("\nMouse:")
        print("  Drag on the image      -> Draw a stroke")
        print("  Click panel buttons    -> Color / Undo / Present")
        print("\nKeyboard:")
        print("  [C] Next color | [U] Undo | [P] Present")
        print("  [+/-] Thickness | [Q] Quit")
        print("\nCard window:")
        print("  Click or [Space] -> Flip | [Q] Close")
        print("\n" + "=" * 60)

        self._running = True
        cv2.namedWindow(self.WINDOW_NAME, cv2.WINDOW_AUTOSIZE)
        cv2.setMouseCallback(self.WINDOW_NAME, self._on_mouse)
        self._create_trackbars()

        try:
            while self._running:
                frame = self.compose_frame()
                cv2.imshow(self.WINDOW_NAME, frame)
                self.scheduler.run_pending()

                if self.card is not None:
                    self._show_card()

                key = cv2.waitKey(15) & 0xFF
                if not self._handle_keyboard(key):
                    break

                if self._card_window_open and self._window_closed(self.CARD_WINDOW_NAME):
                    self._card_window_open = False
                    self.close_card()

                if self._window_closed(self.WINDOW_NAME):
                    break

        finally:
            self._running = False
            cv2.destroyAllWindows()
            print("\n[INFO] Application closed")


def main(argv=None):
    """Main entry point."""
    try:
        config = load_config(argv)
    except ConfigError as e:
        print(f"[ERROR] {e}")
        raise SystemExit(2)

    app = OverlayApp(config)
    app.run()


if __name__ == "__main__":
    main()
