"""AWS Bedrock completion provider."""

import asyncio
import logging
import os
from typing import Dict, List, Optional, Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from .errors import BedrockAPIError, ErrorType, ErrorContext

logger = logging.getLogger(__name__)


class BedrockClient:
    """
    Wrapper for the AWS Bedrock Runtime Converse API.

    Implements the completion provider contract used by agents and by the
    selection/termination strategies. Each call is a single attempt: failures
    are wrapped in BedrockAPIError and propagate to the caller.
    """

    def __init__(
        self,
        region: str = "us-east-1",
        model_id: str = "amazon.nova-pro-v1:0",
        timeout: int = 3600,
        temperature: float = 0.0,
        max_tokens: int = 2048,
        runtime: Optional[Any] = None,
    ):
        """
        Initialize Bedrock client.

        Args:
            region: AWS region for Bedrock service
            model_id: Model ID used for every completion
            timeout: Connect/read timeout in seconds
            temperature: Sampling temperature (0.0 = deterministic)
            max_tokens: Maximum tokens to generate per completion
            runtime: Pre-built bedrock-runtime client (tests inject a fake)
        """
        self.region = region
        self.model_id = model_id
        self.temperature = temperature
        self.max_tokens = max_tokens

        if runtime is not None:
            self.runtime = runtime
        else:
            config_kwargs: Dict[str, Any] = {
                "region_name": region,
                "connect_timeout": timeout,
                "read_timeout": timeout,
                # max_attempts counts retries, not calls: 0 means one request only
                "retries": {"max_attempts": 0},
            }

            # botocore honours AWS_BEARER_TOKEN_BEDROCK for bedrock-runtime; the
            # BEDROCK_API_KEY alias is copied over so either name works.
            token = self._resolve_bearer_token()
            if token:
                os.environ.setdefault("AWS_BEARER_TOKEN_BEDROCK", token)
                config_kwargs["signature_version"] = "bearer"
                logger.info("BedrockClient configured to use Amazon Bedrock API key authentication")
            else:
                logger.info("BedrockClient configured to use AWS IAM credentials (SigV4)")

            self.runtime = boto3.client("bedrock-runtime", config=Config(**config_kwargs))

        logger.info(f"Initialized BedrockClient: region={region}, model={model_id}")

    @staticmethod
    def _resolve_bearer_token() -> Optional[str]:
        token = os.getenv("AWS_BEARER_TOKEN_BEDROCK") or os.getenv("BEDROCK_API_KEY")
        return token.strip() if token and token.strip() else None

    async def complete(self, instructions: str, context: str) -> str:
        """
        Generate text for the given instructions and conversation context.

        Args:
            instructions: System instructions for the role
            context: Prompt text (usually the rendered conversation)

        Returns:
            Generated text

        Raises:
            BedrockAPIError: If the Converse call fails
        """
        result = await self.invoke_converse(
            messages=[{"role": "user", "content": [{"text": context}]}],
            system_prompts=[{"text": instructions}] if instructions else None,
        )
        return result["text"]

    async def invoke_converse(
        self,
        messages: List[Dict[str, Any]],
        system_prompts: Optional[List[Dict[str, Any]]] = None,
    ) -> Dict[str, Any]:
        """
        Invoke the configured model via the Converse API.

        Args:
            messages: List of message dicts with 'role' and 'content'
            system_prompts: Optional system prompts

        Returns:
            Dict containing 'text', 'content', 'stop_reason' and 'usage'
        """
        params: Dict[str, Any] = {
            "modelId": self.model_id,
            "messages": messages,
            "inferenceConfig": {
                "temperature": self.temperature,
                "maxTokens": self.max_tokens
            }
        }

        if system_prompts:
            params["system"] = system_prompts

        try:
            response = await asyncio.to_thread(self.runtime.converse, **params)
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            logger.error(f"Bedrock Converse call failed: {error_code} - {e}")
            raise BedrockAPIError.from_client_error(error=e, operation="converse")
        except BotoCoreError as e:
            logger.error(f"Bedrock Converse call failed before a response: {e}")
            raise BedrockAPIError(
                ErrorContext(
                    error_type=ErrorType.BEDROCK_SERVICE_ERROR,
                    message=f"Bedrock API error during converse: {e}",
                    recoverable=True,
                    details={"operation": "converse"},
                    original_exception=e
                )
            )

        logger.debug(
            f"Converse call successful: stop_reason={response.get('stopReason')}, "
            f"usage={response.get('usage')}"
        )

        return self._parse_converse_response(response)

    def _parse_converse_response(self, response: Dict[str, Any]) -> Dict[str, Any]:
        """Parse a Converse API response into a simplified format."""
        message = response.get("output", {}).get("message", {})
        content = message.get("content", [])

        text_parts = [block["text"] for block in content if isinstance(block, dict) and "text" in block]

        return {
            "content": content,
            "text": "\n".join(text_parts),
            "stop_reason": response.get("stopReason", "unknown"),
            "usage": response.get("usage", {}),
        }
