"""Settings for reaching the remote Scheme parser service."""

from dataclasses import dataclass
import json

from scmviz.scmviz_error import SchemeVizConfigError


DEFAULT_HOST = "localhost:8000"
DEFAULT_ENDPOINT = "parse"
DEFAULT_TIMEOUT = 30.0


@dataclass
class ParserServiceSettings:
    """
    Parser service connection settings.

    The configuration file looks like:

        {"parser": {"host": "localhost:8000", "endPoint": "parse", "timeout": 30}}
    """
    host: str = DEFAULT_HOST
    endpoint: str = DEFAULT_ENDPOINT
    timeout: float = DEFAULT_TIMEOUT

    @property
    def url(self) -> str:
        """Full URL that requests are posted to."""
        return f"http://{self.host}/{self.endpoint.lstrip('/')}"

    @classmethod
    def create_default(cls) -> "ParserServiceSettings":
        """Create settings pointing at a local parser service."""
        return cls(host=DEFAULT_HOST, endpoint=DEFAULT_ENDPOINT, timeout=DEFAULT_TIMEOUT)

    @classmethod
    def load(cls, path: str) -> "ParserServiceSettings":
        """
        Load settings from a JSON configuration file.

        Keys missing from the file keep their default values.

        Args:
            path: Path to the configuration file

        Returns:
            ParserServiceSettings with loaded values

        Raises:
            SchemeVizConfigError: If the file cannot be read or is not valid configuration
        """
        settings = cls.create_default()

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)

        except OSError as e:
            raise SchemeVizConfigError(
                f"Cannot read configuration file: {path}",
                context=str(e)
            ) from e

        except json.JSONDecodeError as e:
            raise SchemeVizConfigError(
                f"Configuration file is not valid JSON: {path}",
                context=str(e)
            ) from e

        parser = data.get("parser", {}) if isinstance(data, dict) else None
        if not isinstance(parser, dict):
            raise SchemeVizConfigError(
                f"Configuration file has no valid 'parser' section: {path}",
                expected='{"parser": {"host": ..., "endPoint": ...}}'
            )

        host = parser.get("host", settings.host)
        if not isinstance(host, str) or not host:
            raise SchemeVizConfigError(
                f"Invalid parser host in {path}",
                received=repr(host),
                expected='a non-empty "host:port" string'
            )

        endpoint = parser.get("endPoint", settings.endpoint)
        if not isinstance(endpoint, str):
            raise SchemeVizConfigError(
                f"Invalid parser endPoint in {path}",
                received=repr(endpoint),
                expected="a URL path string"
            )

        settings.host = host
        settings.endpoint = endpoint

        timeout = parser.get("timeout", settings.timeout)
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise SchemeVizConfigError(
                f"Invalid parser timeout in {path}",
                received=repr(timeout),
                expected="a positive number of seconds"
            )

        settings.timeout = float(timeout)
        return settings
