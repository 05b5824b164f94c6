#!/usr/bin/env python3
"""
OpenRouter Client for diagnosing CI failures
"""

from typing import Optional

import requests
from constants import OPENROUTER_BASE_URL, USER_AGENT
from errors import BackendError


class OpenRouterClient:
    """Client for interacting with OpenRouter API"""

    def __init__(self, api_key: str, model: str, title: str = USER_AGENT, referer: Optional[str] = None):
        self.api_key = api_key
        self.model = model
        self.title = title
        self.referer = referer
        self.base_url = OPENROUTER_BASE_URL

    def diagnose(self, prompt: str) -> str:
        """Send the rendered prompt as a single user message and return the answer"""
        response = self._post_completion(self._create_headers(), self._create_data(prompt))
        print(f"🤖 OpenRouter responded with status: {response.status_code}")

        if not response.ok:
            raise BackendError(response.status_code, response.reason, response.text)

        try:
            result = response.json()
        except ValueError:
            raise BackendError(response.status_code, response.reason, message="OpenRouter returned a non-JSON response.") from None

        content = self._extract_content(result)
        if not content:
            raise BackendError(response.status_code, response.reason, message="OpenRouter response missing message content.")
        return content

    def _create_headers(self) -> dict:
        """Create headers for the HTTP request"""
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "X-Title": self.title,
        }
        if self.referer:
            headers["HTTP-Referer"] = self.referer
        return headers

    def _create_data(self, prompt: str) -> dict:
        """Create data payload for the HTTP request"""
        return {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
        }

    def _post_completion(self, headers: dict, data: dict) -> requests.Response:
        try:
            return requests.post(
                url=f"{self.base_url}/chat/completions",
                headers=headers,
                json=data,
                timeout=60
            )
        except requests.RequestException as e:
            raise BackendError(None, message=f"OpenRouter request failed: {type(e).__name__}: {e}") from None

    @staticmethod
    def _extract_content(result) -> str:
        try:
            content = result["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            return ""
        return str(content).strip() if content else ""
