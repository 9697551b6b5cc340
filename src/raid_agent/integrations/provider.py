"""
Copilot-backed inference provider.

Each completion runs in a fresh Copilot session: the agent replays the
whole transcript in every prompt, so no server-side history is kept.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Optional

from raid_agent.copilot_client import create_client
from raid_agent.core.exceptions import ProviderError
from raid_agent.models.config import Config
from raid_agent.utils.logging import get_logger
from raid_agent.utils.protocols import CopilotClientProtocol, SessionProtocol

logger = get_logger(__name__)

ClientFactory = Callable[[Config], CopilotClientProtocol]


def extract_content(response: Any) -> str:
	"""Return the assistant text of a send_and_wait response, or ''."""
	data = getattr(response, "data", None) if response else None
	content = getattr(data, "content", None) if data else None
	return content or ""


class CopilotProvider:
	"""
	InferenceProvider implementation over the Copilot SDK.

	Use as an async context manager so the client is started and stopped
	around the session:

		async with CopilotProvider(config) as provider:
			reply = await provider.complete(prompt)
	"""

	def __init__(
	    self,
	    config: Config,
	    client: Optional[CopilotClientProtocol] = None,
	    client_factory: ClientFactory = create_client,
	) -> None:
		self.config = config
		self._client = client
		self._client_factory = client_factory
		self._owns_client = client is None
		self.requests = 0

	async def __aenter__(self) -> "CopilotProvider":
		await self.start()
		return self

	async def __aexit__(self, exc_type, exc, tb) -> None:
		await self.stop()

	async def start(self) -> None:
		"""Create (if needed) and start the underlying client."""
		if self._client is None:
			self._client = self._client_factory(self.config)
		if self._owns_client:
			logger.info("starting copilot client (native=%s)",
			            self.config.use_native_cli)
			await self._client.start()

	async def stop(self) -> None:
		"""Stop the client if this provider started it."""
		if self._client is not None and self._owns_client:
			try:
				await self._client.stop()
			except Exception:
				logger.debug("failed to stop copilot client", exc_info=True)

	def session_config(self) -> dict:
		"""Session configuration passed to create_session()."""
		return {"model": self.config.model, "streaming": False}

	async def complete(self, prompt: str) -> str:
		"""
		Send prompt in a fresh session and return the assistant reply.

		Raises:
			ProviderError: On timeout, transport failure or empty reply.
		"""
		if self._client is None:
			raise ProviderError("provider not started")
		self.requests += 1
		timeout = self.config.provider_timeout_seconds
		session: SessionProtocol | None = None
		try:
			session = await self._client.create_session(self.session_config())
			response = await session.send_and_wait({"prompt": prompt},
			                                       timeout=timeout)
		except asyncio.TimeoutError as exc:
			logger.warning("inference timed out after %ss", timeout)
			if session is not None:
				await self._abort(session)
			raise ProviderError(
			    f"inference timed out after {timeout}s") from exc
		except Exception as exc:
			logger.exception("inference request failed")
			raise ProviderError(f"inference request failed: {exc}") from exc
		finally:
			await self._destroy(session)

		content = extract_content(response)
		if not content.strip():
			raise ProviderError("inference returned an empty reply")
		return content

	@staticmethod
	async def _abort(session: SessionProtocol) -> None:
		try:
			await session.abort()
		except Exception:
			logger.debug("failed to abort session", exc_info=True)

	@staticmethod
	async def _destroy(session: SessionProtocol | None) -> None:
		if session is None:
			return
		try:
			await session.destroy()
		except Exception:
			logger.debug("failed to destroy session", exc_info=True)


__all__ = ["CopilotProvider", "extract_content"]
