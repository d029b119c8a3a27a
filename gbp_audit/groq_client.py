"""
Groq API client for profile audits and email summaries.
Audits use a JSON-schema response format for structured output.
"""
import os
import re
import json
import asyncio
import logging
from typing import Any, Dict, List, Mapping, Optional, Union

import httpx
from groq import APIError, AsyncGroq
from dotenv import load_dotenv

from .errors import GenerationError
from .input_handler import AuditRequest, validate_audit_request
from .models import AuditResult
from .prompts import AUDIT_RESPONSE_SCHEMA, SYSTEM_PROMPT, build_audit_prompt, build_email_prompt
from .score_validator import parse_audit_result

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

# Configuration
GROQ_API_KEY = os.getenv("GROQ_API_KEY")
MODEL_NAME = os.getenv("MODEL_NAME", "openai/gpt-oss-120b")
TEMPERATURE = float(os.getenv("TEMPERATURE", "0.7"))
MAX_TOKENS = int(os.getenv("MAX_TOKENS", "4096"))
TIMEOUT_SECONDS = float(os.getenv("TIMEOUT_SECONDS", "60"))
CONNECT_TIMEOUT_SECONDS = 10.0


class GroqAuditClient:
    """
    Async client for calling the Groq API to generate audits.

    One attempt per call. Retrying is left to whoever asked for the audit.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        client: Optional[Any] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        timeout: Optional[float] = None,
        strict_minimums: Optional[bool] = None,
        base_url: Optional[str] = None,
    ):
        self.model = model or MODEL_NAME
        self.temperature = TEMPERATURE if temperature is None else temperature
        if self.temperature <= 0:
            raise ValueError("temperature must be greater than zero")
        self.timeout = timeout or TIMEOUT_SECONDS
        self.strict_minimums = strict_minimums

        if client is None:
            api_key = api_key or GROQ_API_KEY
            if not api_key:
                raise GenerationError("GROQ_API_KEY is required")
            # base_url=None lets the SDK fall back to GROQ_BASE_URL
            client = AsyncGroq(
                api_key=api_key,
                base_url=base_url,
                max_retries=0,
                timeout=httpx.Timeout(self.timeout, connect=CONNECT_TIMEOUT_SECONDS),
            )
        self.client = client

    async def request_audit(self, business: Union[AuditRequest, Mapping[str, str]]) -> AuditResult:
        """
        Generate a profile audit for one business.

        Args:
            business: Validated input, or raw form fields to validate

        Returns:
            A fully validated AuditResult

        Raises:
            ValidationError: If a required field is empty (no request is sent)
            GenerationError: If the call fails or the response breaks the contract
        """
        if not isinstance(business, AuditRequest):
            business = validate_audit_request(dict(business))

        prompt = build_audit_prompt(business.business_name, business.location, business.phone_number)
        logger.info("Requesting audit for %r in %r", business.business_name, business.location)

        content = await self._complete(
            [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            temperature=self.temperature,
            max_tokens=MAX_TOKENS,
            response_format={
                "type": "json_schema",
                "json_schema": {"name": "gbp_audit_result", "schema": AUDIT_RESPONSE_SCHEMA},
            },
        )

        audit_data = self._parse_response(content)
        result = parse_audit_result(audit_data, self.strict_minimums)
        logger.info("Audit for %r scored %d", business.business_name, result.overall_score)
        return result

    async def summarize(self, result: AuditResult, business_name: str) -> str:
        """
        Ask for a plain-text email body summarizing an audit.

        The text comes back exactly as the service wrote it.
        """
        prompt = build_email_prompt(result, business_name)
        return await self._complete([{"role": "user", "content": prompt}])

    async def aclose(self):
        """Close the SDK's connection pool. Must run on the loop that used it."""
        close = getattr(self.client, "close", None)
        if close is not None:
            await close()

    async def _complete(self, messages: List[Dict[str, str]], **options) -> str:
        """Make the actual API call to Groq."""
        try:
            chat_completion = await asyncio.wait_for(
                self.client.chat.completions.create(
                    model=self.model,
                    messages=messages,
                    **options,
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            logger.warning("Groq request timed out after %ss", self.timeout)
            raise GenerationError(f"Request timed out after {self.timeout}s") from e
        except (APIError, httpx.HTTPError) as e:
            logger.warning("Groq request failed: %s", e)
            raise GenerationError(f"API error: {e}") from e

        if not chat_completion.choices:
            raise GenerationError("Empty response from API")
        content = chat_completion.choices[0].message.content
        if content is None:
            raise GenerationError("Empty response from API")
        return content

    def _parse_response(self, response: str) -> Any:
        """Parse the JSON payload. Shape checks happen in the score validator."""
        text = response.strip()
        if not text:
            raise GenerationError("Empty response from API")

        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            # Some models still wrap JSON in a markdown fence
            json_match = re.search(r'```(?:json)?\s*(.*?)\s*```', text, re.DOTALL)
            if json_match:
                try:
                    return json.loads(json_match.group(1))
                except json.JSONDecodeError:
                    pass
            raise GenerationError(f"Failed to parse JSON: {e}") from e


# Synchronous wrapper for non-async contexts
class GroqAuditClientSync:
    """
    Synchronous wrapper for GroqAuditClient.

    Every call runs on one private event loop: the SDK's pooled connections
    belong to the loop that opened them. Call close() when done.
    """

    def __init__(self, *args, **kwargs):
        self.async_client = GroqAuditClient(*args, **kwargs)
        self._loop = asyncio.new_event_loop()

    def request_audit(self, business: Union[AuditRequest, Mapping[str, str]]) -> AuditResult:
        """Generate audit synchronously."""
        return self._loop.run_until_complete(self.async_client.request_audit(business))

    def summarize(self, result: AuditResult, business_name: str) -> str:
        """Generate email summary synchronously."""
        return self._loop.run_until_complete(self.async_client.summarize(result, business_name))

    def close(self):
        if self._loop.is_closed():
            return
        try:
            self._loop.run_until_complete(self.async_client.aclose())
        finally:
            self._loop.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
