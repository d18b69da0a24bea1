"""
Console stand-ins for the compass display.
"""

import threading
from typing import Optional

from compass.interfaces import Renderer, TextSink, CalibrationPrompt

class ConsoleDisplay(Renderer, TextSink, CalibrationPrompt):
    """Keeps the latest display values for the status printout."""
    
    def __init__(self):
        self._lock = threading.Lock()
        self.heading = 0.0
        self.label = None
        self.location_text = ""
        self.prompt_visible = False
        self.redraws = 0
    
    def set_heading(self, degrees: float):
        with self._lock:
            self.heading = degrees
            self.redraws += 1
    
    def set_direction_label(self, label):
        with self._lock:
            self.label = label
    
    def set_location_text(self, text: str):
        with self._lock:
            self.location_text = text
    
    def show_calibration_prompt(self):
        print("\n*** Calibration: please calibrate your compass ***")
        with self._lock:
            self.prompt_visible = True
    
    def dismiss_calibration_prompt(self):
        print("\n*** Calibration prompt dismissed ***")
        with self._lock:
            self.prompt_visible = False
    
    def render(self, true_heading: Optional[float] = None) -> str:
        """One-line summary of the display."""
        with self._lock:
            label = self.label.text if self.label is not None else "--"
            line = f"Dial: {self.heading:6.1f}°  Label: {label:<8}  {self.location_text}"
            if true_heading is not None:
                line += f"  (device {true_heading:5.1f}°)"
            if self.prompt_visible:
                line += "  [CALIBRATE]"
        return line
