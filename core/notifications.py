"""
Notification module for the Pomodoro Timer application.
Plays the completion chime and shows a desktop notification when an
interval finishes.
"""

import io
import logging
import math
import os
import struct
import subprocess
import sys
import tempfile
import wave
from typing import Optional

from PySide6.QtCore import QObject, Slot
from PySide6.QtWidgets import QSystemTrayIcon

from .models import Phase, TimerState


logger = logging.getLogger(__name__)

CHIME_FREQUENCY_HZ = 880  # A5
CHIME_DURATION_SEC = 3.0


def generate_chime_wav(
    frequency: int = CHIME_FREQUENCY_HZ,
    duration_sec: float = CHIME_DURATION_SEC,
    sample_rate: int = 44100,
    start_volume: float = 0.3,
    end_volume: float = 0.01
) -> bytes:
    """
    Generate a sine chime with an exponential fade as WAV data.

    Args:
        frequency: Frequency of the tone in Hz.
        duration_sec: Length of the chime in seconds.
        sample_rate: Sample rate (44100 is CD quality).
        start_volume: Volume at the start of the chime (0.0 to 1.0).
        end_volume: Volume the fade reaches at the end (must be > 0).

    Returns:
        WAV file data as bytes.
    """
    num_samples = int(sample_rate * duration_sec)
    decay = math.log(end_volume / start_volume)

    samples = []
    for i in range(num_samples):
        t = i / sample_rate
        gain = start_volume * math.exp(decay * i / max(1, num_samples - 1))
        samples.append(int(32767 * gain * math.sin(2 * math.pi * frequency * t)))

    # Create WAV file in memory
    buffer = io.BytesIO()
    with wave.open(buffer, 'wb') as wav:
        wav.setnchannels(1)  # Mono
        wav.setsampwidth(2)  # 16-bit
        wav.setframerate(sample_rate)
        wav.writeframes(struct.pack(f'<{len(samples)}h', *samples))

    return buffer.getvalue()


class SoundPlayer:
    """
    Cross-platform sound player.
    Hands a temporary WAV file to the platform's command-line player.
    """

    def __init__(self, enabled: bool = True):
        self._enabled = enabled
        self._temp_file: Optional[str] = None

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool):
        self._enabled = value

    def _ensure_temp_file(self) -> Optional[str]:
        """Write the chime to a temporary file on first use."""
        if self._temp_file is None:
            fd, path = tempfile.mkstemp(suffix='.wav')
            with os.fdopen(fd, 'wb') as f:
                f.write(generate_chime_wav())
            self._temp_file = path
        return self._temp_file

    def play(self):
        """Play the completion chime."""
        if not self._enabled:
            return

        try:
            self._play_sound(self._ensure_temp_file())
        except OSError as e:
            logger.warning("Could not play sound: %s", e)

    def _play_sound(self, path: str):
        """Platform-specific sound playback."""
        system = sys.platform.lower()

        if system == 'darwin':
            subprocess.Popen(
                ['afplay', path],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL
            )
        elif system.startswith('linux'):
            # Try paplay (PulseAudio), then aplay (ALSA)
            for cmd in ['paplay', 'aplay']:
                try:
                    subprocess.Popen(
                        [cmd, path],
                        stdout=subprocess.DEVNULL,
                        stderr=subprocess.DEVNULL
                    )
                    return
                except FileNotFoundError:
                    continue
            logger.warning("No audio player found (tried paplay, aplay)")
        elif system == 'win32':
            import winsound
            winsound.PlaySound(path, winsound.SND_FILENAME | winsound.SND_ASYNC)

    def cleanup(self):
        """Clean up temporary files."""
        if self._temp_file and os.path.exists(self._temp_file):
            try:
                os.remove(self._temp_file)
            except OSError as e:
                logger.debug("Could not remove %s: %s", self._temp_file, e)
        self._temp_file = None


class NotificationManager(QObject):
    """
    Manages the completion cue: chime plus desktop notification.
    Uses the system tray for notifications when available.
    """

    def __init__(
        self,
        sound_enabled: bool = True,
        notification_enabled: bool = True,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)

        self._sound_player = SoundPlayer(enabled=sound_enabled)
        self._tray_icon: Optional[QSystemTrayIcon] = None
        self._notification_enabled = notification_enabled

    def set_tray_icon(self, tray_icon: QSystemTrayIcon):
        """Set the system tray icon for showing notifications."""
        self._tray_icon = tray_icon

    @property
    def notification_enabled(self) -> bool:
        return self._notification_enabled

    @notification_enabled.setter
    def notification_enabled(self, value: bool):
        self._notification_enabled = value

    @property
    def sound_enabled(self) -> bool:
        return self._sound_player.enabled

    @sound_enabled.setter
    def sound_enabled(self, value: bool):
        self._sound_player.enabled = value

    @Slot(object)
    def notify_complete(self, state: TimerState):
        """Signal that the interval in ``state`` has just completed."""
        self._sound_player.play()
        if state.phase is Phase.WORK:
            message = "Work completed. Switch to a break when you are ready."
        else:
            message = "Break completed. Ready for another work interval?"
        self._show_notification(state.state_label, message)

    def _show_notification(self, title: str, message: str):
        """Show a desktop notification."""
        if not self._notification_enabled:
            return

        if self._tray_icon is not None and QSystemTrayIcon.isSystemTrayAvailable():
            self._tray_icon.showMessage(
                title, message, QSystemTrayIcon.MessageIcon.Information, 3000
            )
        else:
            self._show_native_notification(title, message)

    def _show_native_notification(self, title: str, message: str):
        """Show notification using native OS commands."""
        system = sys.platform.lower()

        try:
            if system == 'darwin':
                script = f'display notification "{message}" with title "{title}"'
                subprocess.run(
                    ['osascript', '-e', script],
                    capture_output=True,
                    timeout=5
                )
            elif system.startswith('linux'):
                subprocess.run(
                    ['notify-send', title, message],
                    capture_output=True,
                    timeout=5
                )
            # Windows notifications handled by tray icon
        except (OSError, subprocess.SubprocessError) as e:
            logger.warning("Could not show notification: %s", e)

    def cleanup(self):
        """Clean up resources."""
        self._sound_player.cleanup()
