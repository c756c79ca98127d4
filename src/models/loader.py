"""
Gemini model wrapper and process-wide loader.
JSON-mode generation for studio content prompts.
"""

from typing import Any, Optional

import google.generativeai as genai

from core import get_logger
from .config import GeminiConfig


logger = get_logger(__name__)

JSON_MIME_TYPE = "application/json"


class ModelLoadError(Exception):
    """The Gemini SDK rejected the configuration."""
    pass


class GeminiModel:
    """One configured Gemini generative model."""

    def __init__(self, config: GeminiConfig):
        self.config = config
        genai.configure(api_key=config.api_key)
        self.model = genai.GenerativeModel(
            model_name=config.model_name,
            generation_config=self._generation_config(top_p=config.top_p, top_k=config.top_k),
        )
        logger.info(
            "gemini_ready",
            model=config.model_name,
            flash=config.is_flash_model,
            experimental=config.is_experimental,
        )

    @property
    def name(self) -> str:
        return self.config.model_name

    def _generation_config(self, **extra: Any) -> Any:
        return genai.GenerationConfig(
            temperature=self.config.temperature,
            max_output_tokens=self.config.max_tokens,
            **extra,
        )

    def generate_json(self, prompt: str, response_schema: dict[str, Any] | None = None) -> str:
        """
        Completion in JSON mode.

        Args:
            prompt: Instruction text
            response_schema: Optional Gemini schema the output must follow

        Returns:
            Raw JSON text, not yet parsed
        """
        config = self._generation_config(
            response_mime_type=JSON_MIME_TYPE,
            response_schema=response_schema,
        )
        try:
            response = self.model.generate_content(prompt, generation_config=config)
        except Exception as e:
            logger.error("gemini_json_failed", model=self.name, prompt_chars=len(prompt), error=str(e))
            raise
        return response.text


class ModelLoader:
    """Holds the model built from the most recent configuration."""

    _instance: Optional[GeminiModel] = None

    @classmethod
    def load(cls, config: GeminiConfig) -> GeminiModel:
        try:
            cls._instance = GeminiModel(config)
        except Exception as e:
            logger.error("gemini_load_failed", model=config.model_name, error=str(e))
            raise ModelLoadError(f"Could not initialise Gemini model {config.model_name}") from e
        return cls._instance

    @classmethod
    def unload(cls) -> None:
        if cls._instance is not None:
            logger.info("gemini_unloaded", model=cls._instance.name)
        cls._instance = None
