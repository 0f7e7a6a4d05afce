from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    extraction_provider: str = "gemini"
    extraction_temperature: float = 0.1

    gemini_api_key: str = ""
    gemini_model_name: str = "gemini-2.5-flash"
    gemini_timeout_seconds: int = 60

    openai_api_key: str = ""
    openai_model_name: str = ""
    openai_timeout_seconds: int = 30

    openai_compatible_api_key: str = ""
    openai_compatible_model_name: str = ""
    openai_compatible_base_url: str = ""
    openai_compatible_timeout_seconds: int = 30

    pdf_as_images: bool = False
    pdf_render_dpi: int = 150

    export_format: str = "xlsx"
    export_file_name: str = "Tibbi_Analiz_Raporu.xlsx"
    export_sheet_name: str = "Tıbbi Kayıtlar"
