"""
Model configuration with strong typing.
Centralized settings for the Gemini API.
"""

from enum import Enum
import os
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class GeminiVariant(str, Enum):
    """Available Gemini model variants."""

    FLASH_EXP = "gemini-2.0-flash-exp"  # Latest experimental Flash (default)
    FLASH = "gemini-1.5-flash"
    PRO = "gemini-1.5-pro"
    FLASH_8B = "gemini-1.5-flash-8b"


class GeminiConfig(BaseModel):
    """Type-safe Gemini API configuration."""

    model_config = ConfigDict(frozen=True, use_enum_values=True, protected_namespaces=())

    # Model selection
    model_name: str = Field(default=GeminiVariant.FLASH_EXP.value)
    api_key: str | None = Field(default=None)

    # Generation parameters
    temperature: float = Field(default=0.4, ge=0.0, le=2.0)
    max_tokens: int = Field(default=4096, ge=1, le=8192)
    top_p: float = Field(default=0.95, ge=0.0, le=1.0)
    top_k: int = Field(default=40, ge=1, le=100)

    @model_validator(mode="before")
    @classmethod
    def api_key_from_env(cls, data: Any) -> Any:
        """Fall back to GEMINI_API_KEY / GOOGLE_API_KEY when no key is given."""
        if isinstance(data, dict) and not data.get("api_key"):
            return {**data, "api_key": os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")}
        return data

    @property
    def is_flash_model(self) -> bool:
        """Check if using a Flash model variant."""
        return "flash" in self.model_name.lower()

    @property
    def is_experimental(self) -> bool:
        return "exp" in self.model_name.lower()
