"""Dependency Injection Container."""

from injector import Injector, Module, provider, singleton

from clients.ai import ListItemGenerator
from clients.projects import ProjectStore
from clients.sync import SyncHub
from codegen.exporter import CodeExporter
from models.config import GeminiConfig
from models.loader import GeminiModel, ModelLoader
from .config import Settings, get_settings


class CoreModule(Module):
    """Core dependencies."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        return self.settings

    @singleton
    @provider
    def provide_sync_hub(self) -> SyncHub:
        """Provide the in-process sync hub."""
        return SyncHub(
            max_payload_size=self.settings.max_payload_size,
            max_tree_depth=self.settings.max_tree_depth,
            max_tree_nodes=self.settings.max_tree_nodes,
        )

    @singleton
    @provider
    def provide_project_store(self) -> ProjectStore:
        return ProjectStore(self.settings.projects_path)

    @singleton
    @provider
    def provide_code_exporter(self) -> CodeExporter:
        return CodeExporter(
            enable_cache=self.settings.enable_export_cache,
            cache_size=self.settings.export_cache_size,
        )

    @singleton
    @provider
    def provide_gemini_model(self) -> GeminiModel:
        """Provide Gemini model for list generation."""
        config = GeminiConfig(
            model_name=self.settings.gemini_model,
            api_key=self.settings.gemini_api_key or None,
            temperature=self.settings.gemini_temperature,
            max_tokens=self.settings.gemini_max_tokens,
        )
        return ModelLoader.load(config)

    @singleton
    @provider
    def provide_list_generator(self, model: GeminiModel) -> ListItemGenerator:
        return ListItemGenerator(model)


def create_container(settings: Settings | None = None) -> Injector:
    """Create configured injector."""
    return Injector([CoreModule(settings)])
