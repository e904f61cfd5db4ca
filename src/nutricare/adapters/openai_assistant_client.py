"""OpenAI Responses API client for the nutrition assistant."""

from collections.abc import Callable
from dataclasses import dataclass, field

import httpx
import openai
from openai import AsyncOpenAI

from nutricare.services.assistant import (
    AssistantClient,
    AssistantCredentialsError,
    AssistantError,
)
from nutricare.services.images import ImagePayload


@dataclass
class OpenAIAssistantClient(AssistantClient):
    """Assistant client backed by the OpenAI Responses API.

    Only the configured key keeps a long-lived SDK client. A key sent with a
    request gets its own client, closed as soon as the call returns.
    """

    client_factory: Callable[[str], AsyncOpenAI]
    store: bool = False
    default_api_key: str | None = None
    close_request_clients: bool = True
    _default_client: AsyncOpenAI | None = field(default=None, init=False)

    @classmethod
    def create(
        cls,
        *,
        timeout_seconds: float,
        store: bool = False,
        default_api_key: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> "OpenAIAssistantClient":
        """Create a client that builds SDK clients with retries disabled."""

        def factory(api_key: str) -> AsyncOpenAI:
            return AsyncOpenAI(
                api_key=api_key,
                timeout=timeout_seconds,
                max_retries=0,
                http_client=http_client,
            )

        return cls(
            client_factory=factory,
            store=store,
            default_api_key=default_api_key.strip() if default_api_key else None,
            close_request_clients=http_client is None,
        )

    async def generate(
        self,
        *,
        api_key: str,
        model: str,
        prompt: str,
        image: ImagePayload | None,
    ) -> str:
        """Call the Responses API with text and an optional inline image."""
        if api_key == self.default_api_key:
            return await self._request(self._shared_client(), model, prompt, image)
        client = self.client_factory(api_key)
        try:
            return await self._request(client, model, prompt, image)
        finally:
            # A shared http_client is owned by the caller and must stay open.
            if self.close_request_clients:
                await client.close()

    async def close(self) -> None:
        """Close the client kept for the configured key."""
        if self._default_client is not None:
            await self._default_client.close()
            self._default_client = None

    async def _request(
        self,
        client: AsyncOpenAI,
        model: str,
        prompt: str,
        image: ImagePayload | None,
    ) -> str:
        content: list[dict[str, object]] = [{"type": "input_text", "text": prompt}]
        if image is not None:
            content.append({"type": "input_image", "image_url": image.to_data_url()})

        try:
            response = await client.responses.create(
                model=model,
                input=[{"role": "user", "content": content}],
                store=self.store,
            )
        except (openai.AuthenticationError, openai.PermissionDeniedError) as exc:
            raise AssistantCredentialsError(str(exc)) from exc
        except openai.OpenAIError as exc:
            raise AssistantError(str(exc)) from exc

        output_text = response.output_text
        if not output_text:
            raise AssistantError("OpenAI returned an empty response")
        return output_text

    def _shared_client(self) -> AsyncOpenAI:
        if self._default_client is None:
            self._default_client = self.client_factory(self.default_api_key or "")
        return self._default_client
