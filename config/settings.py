from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Starknet RPC (read-only contract calls)
    starknet_rpc_url: str = "https://free-rpc.nethermind.io/mainnet-juno"
    rpc_timeout_sec: float = 15.0

    # AI agent (OpenAI-compatible chat completions endpoint)
    agent_api_key: str = ""  # NEVER LOG THIS
    llm_api_key: str = ""  # NEVER LOG THIS
    agent_base_url: str = "https://api.openai.com/v1"
    agent_model: str = "gpt-4"
    agent_temperature: float = 0.0

    # Upper bound for one assessor call (agent responses can hang)
    request_timeout_sec: float = 30.0

    # HTTP API
    api_host: str = "0.0.0.0"
    api_port: int = 8080
    api_rate_limit: str = "10/minute"
    api_debug: bool = False

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False


settings = Settings()
