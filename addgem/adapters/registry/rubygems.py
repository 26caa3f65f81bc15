"""
RubyGems registry adapter — one GET per lookup against the gems API.

    GET https://rubygems.org/api/v1/gems/<name>.json

No retries, no caching. The timeout is the transport default unless
one is configured.
"""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.parse
import urllib.request

from addgem import __version__
from addgem.adapters.base import GemRegistry
from addgem.core.models.gem import GemInfo, GemNotFound, RegistryError
from addgem.core.models.settings import DEFAULT_REGISTRY_URL

logger = logging.getLogger(__name__)


class RubyGemsRegistry(GemRegistry):
    """Look up gems on RubyGems (or any server exposing the same JSON API)."""

    def __init__(
        self,
        base_url: str = DEFAULT_REGISTRY_URL,
        timeout: float | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    @property
    def name(self) -> str:
        return "rubygems"

    def url_for(self, gem_name: str) -> str:
        return f"{self._base_url}/{urllib.parse.quote(gem_name, safe='')}.json"

    def lookup(self, gem_name: str) -> GemInfo | GemNotFound | RegistryError:
        url = self.url_for(gem_name)
        logger.debug("GET %s", url)

        kwargs = {} if self._timeout is None else {"timeout": self._timeout}
        try:
            req = urllib.request.Request(
                url,
                headers={"Accept": "application/json", "User-Agent": f"add-gem/{__version__}"},
            )
            with urllib.request.urlopen(req, **kwargs) as resp:
                body = resp.read()
        except urllib.error.HTTPError as e:
            if e.code == 404:
                logger.debug("Registry has no gem %r", gem_name)
                return GemNotFound(name=gem_name)
            logger.debug("Registry answered %s %s for %r", e.code, e.reason, gem_name)
            return RegistryError(
                name=gem_name,
                message=f"{e.code} - {e.reason}",
                status=e.code,
                reason=str(e.reason),
            )
        except urllib.error.URLError as e:
            logger.debug("Registry unreachable for %r: %s", gem_name, e.reason)
            return RegistryError(name=gem_name, message=str(e.reason))
        except OSError as e:
            logger.debug("Registry transport error for %r: %s", gem_name, e)
            return RegistryError(name=gem_name, message=str(e))
        except ValueError as e:
            # urllib rejects URLs without a usable scheme
            logger.debug("Bad registry URL %s: %s", url, e)
            return RegistryError(name=gem_name, message=f"Invalid registry URL: {e}")

        return _parse_gem_info(gem_name, body)


def _parse_gem_info(gem_name: str, body: bytes) -> GemInfo | RegistryError:
    """Decode the JSON body and project it onto ``GemInfo``."""
    try:
        data = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        return RegistryError(name=gem_name, message=f"Invalid registry response: {e}")

    if not isinstance(data, dict) or not isinstance(data.get("name"), str):
        return RegistryError(name=gem_name, message="Invalid registry response: missing 'name'")

    description = _one_line(data.get("description"))
    if description is None:
        # RubyGems itself publishes the summary as "info"
        description = _one_line(data.get("info"))
    return GemInfo(name=data["name"], description=description)


def _one_line(value: object) -> str | None:
    """Collapse whitespace so the text fits on a single Gemfile comment line."""
    if not isinstance(value, str):
        return None
    text = " ".join(value.split())
    return text or None
