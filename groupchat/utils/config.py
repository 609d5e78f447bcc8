"""Configuration management for the group chat."""

import os
import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from .errors import ConfigurationError

DEFAULT_SYSTEM_PROMPT = "You are a helpful AI assistant."
DEFAULT_MAX_ITERATIONS = 10


@dataclass
class BedrockConfig:
    """AWS Bedrock configuration."""
    model_id: str
    timeout: int = 3600
    temperature: float = 0.0
    max_tokens: int = 2048


@dataclass
class AgentConfig:
    """Optional name/instructions override for one participant."""
    name: Optional[str] = None
    instructions: Optional[str] = None


@dataclass
class ChatConfig:
    """Group chat control settings."""
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    max_iterations: int = DEFAULT_MAX_ITERATIONS


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: Optional[str] = None


@dataclass
class Config:
    """Main configuration class."""
    aws_region: str
    bedrock: BedrockConfig
    chat: ChatConfig = field(default_factory=ChatConfig)
    writer: AgentConfig = field(default_factory=AgentConfig)
    reviewer: AgentConfig = field(default_factory=AgentConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, config_path: str = "config.yaml") -> "Config":
        """
        Load configuration from file and environment variables.

        A .env file is read first. Environment variables override config
        file values:
        - AWS_REGION (required)
        - BEDROCK_MODEL_ID (required)
        - BEDROCK_TIMEOUT, BEDROCK_TEMPERATURE, BEDROCK_MAX_TOKENS
        - CHAT_SYSTEM_PROMPT
        - CHAT_MAX_ITERATIONS
        - LOG_LEVEL, LOG_FILE

        The config file is optional; without it every required value must
        come from the environment.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            Config instance with loaded settings

        Raises:
            ConfigurationError: If a required value is missing or a value is invalid
        """
        load_dotenv()

        config_data: Dict[str, Any] = {}
        if Path(config_path).exists():
            with open(config_path, 'r') as f:
                config_data = yaml.safe_load(f) or {}

        aws = config_data.get("aws", {}) or {}
        bedrock = aws.get("bedrock", {}) or {}
        chat = config_data.get("chat", {}) or {}
        agents = config_data.get("agents", {}) or {}
        log = config_data.get("logging", {}) or {}

        aws_region = _required("AWS_REGION", aws.get("region"))

        bedrock_config = BedrockConfig(
            model_id=_required("BEDROCK_MODEL_ID", bedrock.get("model_id")),
            timeout=_as_int("BEDROCK_TIMEOUT", os.getenv("BEDROCK_TIMEOUT", bedrock.get("timeout", 3600))),
            temperature=_as_float(
                "BEDROCK_TEMPERATURE", os.getenv("BEDROCK_TEMPERATURE", bedrock.get("temperature", 0.0))
            ),
            max_tokens=_as_int("BEDROCK_MAX_TOKENS", os.getenv("BEDROCK_MAX_TOKENS", bedrock.get("max_tokens", 2048))),
        )

        max_iterations = _as_int(
            "CHAT_MAX_ITERATIONS",
            os.getenv("CHAT_MAX_ITERATIONS", chat.get("max_iterations", DEFAULT_MAX_ITERATIONS)),
        )
        if max_iterations < 1:
            raise ConfigurationError.invalid_value("CHAT_MAX_ITERATIONS", max_iterations, "must be at least 1")

        chat_config = ChatConfig(
            system_prompt=os.getenv("CHAT_SYSTEM_PROMPT") or chat.get("system_prompt") or DEFAULT_SYSTEM_PROMPT,
            max_iterations=max_iterations,
        )

        writer = agents.get("writer", {}) or {}
        reviewer = agents.get("reviewer", {}) or {}

        logging_config = LoggingConfig(
            level=os.getenv("LOG_LEVEL", log.get("level", "INFO")),
            format=log.get("format", LoggingConfig.format),
            file=os.getenv("LOG_FILE", log.get("file")),
        )

        return cls(
            aws_region=aws_region,
            bedrock=bedrock_config,
            chat=chat_config,
            writer=AgentConfig(name=writer.get("name"), instructions=writer.get("instructions")),
            reviewer=AgentConfig(name=reviewer.get("name"), instructions=reviewer.get("instructions")),
            logging=logging_config,
        )


def _required(key: str, file_value: Optional[str]) -> str:
    value = os.getenv(key) or file_value
    if not value:
        raise ConfigurationError.missing_value(key)
    return str(value)


def _as_int(key: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigurationError.invalid_value(key, value, "expected an integer")


def _as_float(key: str, value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ConfigurationError.invalid_value(key, value, "expected a number")
