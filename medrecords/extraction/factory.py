from typing import ClassVar

from medrecords.config.settings import Settings
from medrecords.extraction.base import BaseExtractor
from medrecords.extraction.client_base import BaseExtractionClient
from medrecords.extraction.example_client_adapter import ExampleClientAdapter
from medrecords.extraction.extractor import Extractor
from medrecords.extraction.gemini_client_adapter import GeminiClientAdapter
from medrecords.extraction.openai_client_adapter import OpenAIClientAdapter
from medrecords.pdf.pymupdf_adapter import PyMuPdfRasterizer


class ExtractorFactory:
    """Creates the configured extractor."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseExtractor:
        """Create a configured extractor from application settings."""
        provider = settings.extraction_provider.lower()
        if provider == "example":
            return Extractor(client=ExampleClientAdapter(), model="example", temperature=0.0)
        client, model = cls._create_client(provider, settings)
        return Extractor(
            client=client,
            model=model,
            temperature=settings.extraction_temperature,
        )

    @classmethod
    def _create_client(
        cls, provider: str, settings: Settings
    ) -> tuple[BaseExtractionClient, str]:
        rasterizer = (
            PyMuPdfRasterizer(dpi=settings.pdf_render_dpi) if settings.pdf_as_images else None
        )
        if provider == "gemini":
            client: BaseExtractionClient = GeminiClientAdapter(
                api_key=settings.gemini_api_key,
                timeout_seconds=settings.gemini_timeout_seconds,
            )
            return client, settings.gemini_model_name
        if provider == "openai":
            client = OpenAIClientAdapter(
                api_key=settings.openai_api_key,
                timeout_seconds=settings.openai_timeout_seconds,
                base_url=None,
                pdf_rasterizer=rasterizer,
            )
            return client, settings.openai_model_name
        client = OpenAIClientAdapter(
            api_key=settings.openai_compatible_api_key,
            timeout_seconds=settings.openai_compatible_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
            pdf_rasterizer=rasterizer,
        )
        return client, settings.openai_compatible_model_name

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str:
        if provider == "openai_compatible":
            url = settings.openai_compatible_base_url.strip()
            if not url:
                raise ValueError(
                    "openai_compatible_base_url is required for "
                    "extraction_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return settings.openai_compatible_base_url.strip() or default_base_url
        supported = [
            "example",
            "gemini",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(
            f"Unknown extraction provider '{provider}'. Choose from: {supported}"
        )
