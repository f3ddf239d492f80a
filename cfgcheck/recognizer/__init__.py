"""Backtracking recursive-descent recognizer over the rule graph."""

from .engine import END, Recognizer, RecognizerOptions
from .runtime import recognize
