"""
Models package - Gemini API integration.
Model loading and configuration for AI-generated content.
"""

from .config import GeminiConfig, GeminiVariant
from .loader import ModelLoader, GeminiModel, ModelLoadError

__all__ = [
    "GeminiConfig",
    "GeminiVariant",
    "GeminiModel",
    "ModelLoader",
    "ModelLoadError",
]
