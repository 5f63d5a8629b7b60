# Core module for Pomodoro Timer application
from .errors import TimerError
from .models import Phase, Status, TimerState, AppSettings
from .timer_engine import TimerEngine
from .timer_service import TimerService, create_timer_service, parse_phase

__all__ = [
    'TimerError', 'Phase', 'Status', 'TimerState', 'AppSettings',
    'TimerEngine', 'TimerService', 'create_timer_service', 'parse_phase',
]
