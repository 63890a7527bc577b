"""
Speech Recognizer Boundary

The session controller never talks to a microphone directly. A recognizer
adapter (the browser over a WebSocket, or a fake in tests) implements
Recognizer and forwards its events to the controller's handle_* methods.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from config.constants import (
    DESKTOP_RESTART_DELAY_SECONDS,
    MIN_FINAL_CONFIDENCE,
    MOBILE_INTERIM_THROTTLE_SECONDS,
    MOBILE_RESTART_DELAY_SECONDS,
)


@dataclass
class RecognitionEvent:
    """One interim or final result from the recognizer."""
    transcript: str
    confidence: float = 1.0
    is_final: bool = False


class RecognizerErrorCode(str, Enum):
    """Error codes reported by the platform recognizer."""
    NO_SPEECH = "no-speech"
    ABORTED = "aborted"
    AUDIO_CAPTURE = "audio-capture"
    NETWORK = "network"
    NOT_ALLOWED = "not-allowed"
    SERVICE_NOT_ALLOWED = "service-not-allowed"


# Errors that end the session until the user starts it again
FATAL_ERROR_CODES = {
    RecognizerErrorCode.NOT_ALLOWED.value,
    RecognizerErrorCode.SERVICE_NOT_ALLOWED.value,
}

# Errors that are expected during normal listening and not worth logging
SILENT_ERROR_CODES = {
    RecognizerErrorCode.NO_SPEECH.value,
}


class Recognizer(ABC):
    """
    Platform speech recognizer capability.

    start/stop/abort are fire-and-forget: the controller never waits on
    them and treats its own listening flag as authoritative.
    """

    language: str = "ar-JO"
    alternate_languages: Tuple[str, ...] = ()

    @property
    def supported(self) -> bool:
        """False when the platform has no speech recognition."""
        return True

    @abstractmethod
    def start(self) -> None:
        """Begin a recognition run."""
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stop after delivering any pending final result."""
        pass

    def abort(self) -> None:
        """Stop immediately, discarding pending results."""
        self.stop()


class DeviceClass(str, Enum):
    """Client device classes with different recognizer behaviour."""
    DESKTOP = "desktop"
    MOBILE = "mobile"


_MOBILE_AGENT = re.compile(r"Android|iPhone|iPad|iPod", re.IGNORECASE)


def detect_device_class(user_agent: Optional[str]) -> DeviceClass:
    """Classify a client from its user agent string."""
    if user_agent and _MOBILE_AGENT.search(user_agent):
        return DeviceClass.MOBILE
    return DeviceClass.DESKTOP


@dataclass
class DeviceProfile:
    """
    Recognition tuning for one device class.

    Attributes:
        min_confidence: Finals below this are dropped (never below 0.75)
        interim_throttle_seconds: Minimum gap between live transcript updates
        restart_delay_seconds: Delay before restarting after a platform stop
        stop_after_final: Stop the recognizer after each applied final
    """
    device_class: DeviceClass = DeviceClass.DESKTOP
    min_confidence: float = MIN_FINAL_CONFIDENCE
    interim_throttle_seconds: float = 0.0
    restart_delay_seconds: float = DESKTOP_RESTART_DELAY_SECONDS
    stop_after_final: bool = False

    def __post_init__(self):
        # Thresholds may be tightened per device, never loosened
        self.min_confidence = max(self.min_confidence, MIN_FINAL_CONFIDENCE)

    @classmethod
    def for_device(
        cls,
        device_class: DeviceClass,
        min_confidence: float = MIN_FINAL_CONFIDENCE
    ) -> "DeviceProfile":
        """Build the default profile for a device class."""
        if DeviceClass(device_class) == DeviceClass.MOBILE:
            return cls(
                device_class=DeviceClass.MOBILE,
                min_confidence=min_confidence,
                interim_throttle_seconds=MOBILE_INTERIM_THROTTLE_SECONDS,
                restart_delay_seconds=MOBILE_RESTART_DELAY_SECONDS,
                stop_after_final=True,
            )
        return cls(device_class=DeviceClass.DESKTOP, min_confidence=min_confidence)
