"""Client for the remote Scheme parser/analyzer service."""

import asyncio
import json
import logging
import os
import ssl
import sys
from typing import Any

import aiohttp
import certifi

from scmviz.scmviz_config import ParserServiceSettings
from scmviz.scmviz_error import SchemeVizServiceError
from scmviz.scmviz_parsing_mode import ParsingMode


class SchemeParserClient:
    """
    Sends Scheme source to the parser service and returns its raw JSON response.

    The service runs the front end up to the requested stage and answers with a
    JSON array holding one node per top-level form.  No decoding is done here.
    """

    def __init__(self, settings: ParserServiceSettings) -> None:
        """
        Initialize the client.

        Args:
            settings: Where the service lives and how long to wait for it
        """
        self._settings = settings
        self._logger = logging.getLogger("SchemeParserClient")

        if getattr(sys, "frozen", False) and hasattr(sys, '_MEIPASS'):
            cert_path = os.path.join(sys._MEIPASS, "certifi", "cacert.pem")  # pylint: disable=protected-access

        else:
            cert_path = certifi.where()

        self._ssl_context = ssl.create_default_context(cafile=cert_path)

    async def fetch(self, code: str, mode: ParsingMode) -> Any:
        """
        Run the service on `code` up to the stage selected by `mode`.

        Args:
            code: Scheme source text
            mode: Stage whose output is wanted

        Returns:
            The decoded JSON response body

        Raises:
            SchemeVizServiceError: If the service cannot be reached, times out, returns
                a non-200 status or returns a body that is not JSON
        """
        url = self._settings.url
        post_timeout = aiohttp.ClientTimeout(total=self._settings.timeout)
        self._logger.debug("POST %s mode=%s (%d chars)", url, mode.value, len(code))

        try:
            async with aiohttp.ClientSession(connector=aiohttp.TCPConnector(ssl=self._ssl_context)) as session:
                async with session.post(
                    url,
                    headers={'Content-Type': 'application/json'},
                    json={'mode': mode.value, 'code': code},
                    timeout=post_timeout
                ) as response:
                    if response.status != 200:
                        response_message = await response.text()
                        self._logger.warning("Parser service error %d: %s", response.status, response_message)
                        raise SchemeVizServiceError(
                            f"Parser service returned HTTP {response.status}",
                            status=response.status,
                            details=response_message
                        )

                    try:
                        return await response.json(content_type=None)

                    except (json.JSONDecodeError, UnicodeDecodeError) as e:
                        self._logger.warning("Unable to parse service response: %s", str(e))
                        raise SchemeVizServiceError(
                            "Parser service response is not valid JSON",
                            status=response.status,
                            details=str(e)
                        ) from e

        except aiohttp.ClientError as e:
            self._logger.warning("Cannot reach parser service at %s: %s", url, str(e))
            raise SchemeVizServiceError(f"Cannot reach parser service at {url}", details=str(e)) from e

        except asyncio.TimeoutError as e:
            self._logger.warning("Parser service at %s timed out after %ss", url, self._settings.timeout)
            raise SchemeVizServiceError(
                f"Parser service at {url} timed out after {self._settings.timeout} seconds"
            ) from e
