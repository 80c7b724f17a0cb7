"""Flavor-text system logs from the Gemini REST API.

Best-effort only: every failure collapses into a fixed fallback string and
never reaches the simulation.
"""
import http.client
import json
import logging
import math
import urllib.parse
import urllib.request

from neon_grid.config import Config

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = "SYSTEM: AI Module Offline. (Missing API Key)"
FAILURE_MESSAGE = "SYSTEM: Connection intercepted. Retrying..."

PROMPT_TEMPLATE = """
You are the AI operating system of a cyberpunk city grid called "The Sprawl".
The user is a Netrunner managing resources.
Current status: {summary}.

Generate a short, cryptic, 1-sentence system log message about the current state of the grid.
Use technical jargon (packets, voltage, syntax, daemon, protocol).
Do not include greetings. Be atmospheric.
"""


def resource_summary(resources):
    """Render the ledger as ``ENERGY: 12, DATA: 3, ...`` with amounts floored."""
    return ', '.join(f"{resource}: {math.floor(amount)}" for resource, amount in resources.items())


class SystemLogGenerator:
    """Generates one-line atmospheric system logs via Gemini ``generateContent``."""

    def __init__(self, api_key=None, model=None, base_url=None, timeout=None):
        self._api_key = api_key if api_key is not None else Config.GEMINI_API_KEY
        self._model = model or Config.GEMINI_MODEL
        self._base_url = (base_url or Config.GEMINI_BASE_URL).rstrip('/')
        self._timeout = timeout if timeout is not None else Config.AI_TIMEOUT_SECONDS

    @property
    def enabled(self):
        return bool(self._api_key)

    def _query(self, prompt):
        payload = json.dumps({
            'contents': [{'parts': [{'text': prompt}]}],
        }).encode('utf-8')

        url = f"{self._base_url}/models/{urllib.parse.quote(self._model)}:generateContent"
        req = urllib.request.Request(
            url,
            data=payload,
            headers={
                'Content-Type': 'application/json',
                'x-goog-api-key': self._api_key,
            },
            method='POST',
        )
        with urllib.request.urlopen(req, timeout=self._timeout) as resp:
            body = json.loads(resp.read().decode('utf-8'))

        return body['candidates'][0]['content']['parts'][0]['text']

    def generate(self, resources):
        """Return a short log line for ``resources``, or a fallback message."""
        if not self.enabled:
            return MISSING_KEY_MESSAGE

        prompt = PROMPT_TEMPLATE.format(summary=resource_summary(resources))
        try:
            text = self._query(prompt).strip()
        except (OSError, http.client.HTTPException, ValueError, LookupError, TypeError, AttributeError) as e:
            logger.warning("System log generation failed: %s", e)
            return FAILURE_MESSAGE

        return text or FAILURE_MESSAGE
