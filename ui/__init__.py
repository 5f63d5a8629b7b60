# UI module for Pomodoro Timer application
from .main_window import MainWindow
from .timer_page import TimerPage

__all__ = ['MainWindow', 'TimerPage']
