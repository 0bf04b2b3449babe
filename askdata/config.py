from pydantic_settings import BaseSettings, SettingsConfigDict


class AzureOpenAIConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ASKDATA_AZURE_OPENAI__",
        env_file=".env",
        extra="ignore",
    )

    # Empty until configured; llm.get_client() refuses to start without them.
    endpoint: str = ""
    api_key: str = ""
    deployment: str = "gpt-4o-mini"
    # Cheaper deployment for the short data summaries.
    summary_deployment: str = "gpt-4.1-mini"
    api_version: str = "2024-12-01-preview"
    max_tokens: int = 2048
    summary_max_tokens: int = 300

    @property
    def is_configured(self) -> bool:
        return bool(self.endpoint and self.api_key)


class AnalysisConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ASKDATA_ANALYSIS__",
        env_file=".env",
        extra="ignore",
    )

    type_sample_rows: int = 1000  # 0 scans the whole table
    numeric_threshold: float = 0.8
    anomaly_threshold: float = 2.0
    sql_sample_rows: int = 50
    text_sample_rows: int = 20
    prompt_sample_rows: int = 10


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ASKDATA_",
        env_file=".env",
        extra="ignore",
    )

    environment: str = "development"
    azure_openai: AzureOpenAIConfig = AzureOpenAIConfig()
    analysis: AnalysisConfig = AnalysisConfig()

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"


settings = Settings()
