"""
Fingerspell Webcam Module

Camera capture and hand landmark detection using MediaPipe.
"""
from .hand_tracker import HandTracker
from .worker import WebcamWorker

__all__ = [
    'HandTracker',
    'WebcamWorker',
]
