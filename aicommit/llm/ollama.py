"""Ollama LLM Client for local and Ollama Cloud models"""

import http.client
import json
import socket
import urllib.error
import urllib.request

from aicommit.config import Config
from aicommit.llm.base import LLMClient, BackendUnavailable, BackendStatusError, UnexpectedResponse
from aicommit.output import print_debug
from aicommit.prompts import build_messages

UNEXPECTED_RESPONSE = 'Unexpected response from Ollama: missing "message.content"'


class OllamaClient(LLMClient):
    """Ollama /api/chat client. Local needs `ollama serve`; cloud needs OLLAMA_API_KEY."""

    def __init__(self, config: Config):
        self.config = config

    def _payload(self, diff: str) -> dict:
        return {
            "model": self.config.model,
            "messages": build_messages(diff),
            "stream": False,
        }

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.config.api_key:
            headers["Authorization"] = f"Bearer {self.config.api_key}"
        return headers

    def _unavailable(self, cause) -> BackendUnavailable:
        return BackendUnavailable(
            f"Could not connect to Ollama: {cause}. Make sure it is running with: ollama serve"
        )

    def _call_api(self, payload: dict) -> bytes:
        """Make a single POST to the chat endpoint and return the raw body."""
        data = json.dumps(payload).encode('utf-8')
        req = urllib.request.Request(self.config.url, data=data, headers=self._headers(), method='POST')

        try:
            with urllib.request.urlopen(req, timeout=self.config.timeout) as response:
                return response.read()
        except urllib.error.HTTPError as e:
            # HTTPError must come before URLError (it's a subclass)
            message = f"Ollama returned an error: {e.code} {e.reason}"
            if e.code == 404 and not self.config.is_cloud:
                message += f". Model '{self.config.model}' may be missing, run: ollama pull {self.config.model}"
            raise BackendStatusError(message, e.code)
        except urllib.error.URLError as e:
            raise self._unavailable(e.reason)
        except socket.timeout:
            raise self._unavailable(f"timed out after {self.config.timeout}s")
        except http.client.HTTPException as e:
            raise self._unavailable(f"incomplete response ({e!r})")
        except OSError as e:
            raise self._unavailable(e)

    def generate(self, diff: str) -> str:
        """Call the chat API once. No retries."""
        payload = self._payload(diff)
        if self.config.debug:
            print_debug("Request body", payload)

        raw = self._call_api(payload)
        text = raw.decode('utf-8', errors='replace')

        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            if self.config.debug:
                print_debug("Raw response", json.dumps(text, ensure_ascii=False))
            raise UnexpectedResponse(UNEXPECTED_RESPONSE)
        if self.config.debug:
            print_debug("Raw response", data)

        message = data.get("message") if isinstance(data, dict) else None
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str):
            raise UnexpectedResponse(UNEXPECTED_RESPONSE)

        content = content.strip()
        if not content:
            raise UnexpectedResponse("Ollama returned an empty commit message")
        return content
