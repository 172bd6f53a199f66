"""
Fingerspell Core

Hand-landmark fingerspelling classifier and the temporal typing pipeline.
"""
from .config import Config, ConfigError, load_config
from .landmarks import HandLandmarks
from .classifier import SignClassifier
from .wave import WaveDetector
from .smoothing import GestureSmoother
from .stabilizer import CommitTracker, PresenceTracker
from .text_buffer import TextBuffer
from .pipeline import SignTyper, FrameResult

__all__ = [
    'Config',
    'ConfigError',
    'load_config',
    'HandLandmarks',
    'SignClassifier',
    'WaveDetector',
    'GestureSmoother',
    'CommitTracker',
    'PresenceTracker',
    'TextBuffer',
    'SignTyper',
    'FrameResult',
]
