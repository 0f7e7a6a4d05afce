from abc import ABC, abstractmethod


class BaseExtractionClient(ABC):
    """Contract for provider-specific multimodal AI clients."""

    @abstractmethod
    async def generate(
        self,
        *,
        model: str,
        temperature: float,
        prompt: str,
        payload: str,
        media_type: str,
        json_schema: dict[str, object],
    ) -> str:
        """Send the document and instructions, return the raw response text."""
