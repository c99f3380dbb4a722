# Copyright (c) Syntropy Systems
"""HTTP client fetching and decoding payloads from a Jenkins server."""
from __future__ import annotations

from typing import TYPE_CHECKING, cast
from urllib.parse import quote

import httpx
from typing_extensions import Self

from jenkins_api.errors import InvalidUrl, JenkinsClientError
from jenkins_api.log import get_logger
from jenkins_api.models.build import BUILDS
from jenkins_api.models.records import decode_build_record

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType

    from jenkins_api.config import JenkinsConfig
    from jenkins_api.models.base import JSONValue
    from jenkins_api.models.build import BuildShape, BuildView, ShortBuild, UnknownBuild
    from jenkins_api.models.records import CommonBuild

logger = get_logger(__name__)

API_SUFFIX = "api/json"


class JenkinsClient:
    """HTTP client for the Jenkins JSON API."""

    server_url: str
    timeout: float
    _client: httpx.Client

    def __init__(
        self,
        server_url: str,
        user: str | None = None,
        token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            server_url: Base URL of the Jenkins server (e.g., "http://ci:8080/jenkins")
            user: User name for basic authentication
            token: API token (or password) for basic authentication
            timeout: Request timeout in seconds
            transport: Custom httpx transport, mostly for tests

        """
        self.server_url = server_url.rstrip("/")
        self.timeout = timeout
        auth = (user, token) if user is not None and token is not None else None
        self._client = httpx.Client(timeout=timeout, auth=auth, transport=transport)

    @classmethod
    def from_config(
        cls, config: JenkinsConfig, transport: httpx.BaseTransport | None = None
    ) -> Self:
        """Create a client from loaded configuration."""
        if not config.url:
            msg = "No Jenkins url configured. Set 'url' in config.yaml or JENKINS_URL."
            raise JenkinsClientError(msg)
        return cls(
            config.url,
            user=config.user,
            token=config.token,
            timeout=config.timeout,
            transport=transport,
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> Self:
        """Enter the client context and return self."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the client context and close the HTTP client."""
        self.close()

    def _get(self, path: str, params: Mapping[str, str] | None = None) -> httpx.Response:
        url = f"{self.server_url}/{path.lstrip('/')}"
        logger.debug("GET", url=url)
        try:
            response = self._client.get(url, params=params)
            _ = response.raise_for_status()
        except httpx.HTTPStatusError as e:
            msg = f"Server error: {e.response.status_code} for {url}"
            raise JenkinsClientError(msg) from e
        except httpx.RequestError as e:
            msg = f"Connection error: {e}"
            raise JenkinsClientError(msg) from e
        return response

    # --- Paths ---

    def url_to_path(self, url: str) -> str:
        """Return the path of ``url`` relative to the server, with a trailing slash.

        Raises:
            InvalidUrl: If ``url`` is not on the configured server

        """
        prefix = f"{self.server_url}/"
        if not url.startswith(prefix):
            raise InvalidUrl(url, "Jenkins object")
        path = url[len(prefix):]
        return path if path.endswith("/") else f"{path}/"

    def build_path(self, build_url: str) -> str:
        """Return the path of a build url.

        Raises:
            InvalidUrl: If the url does not end with a build number

        """
        path = self.url_to_path(build_url)
        segments = path.rstrip("/").split("/")
        if "job" not in segments[:-1] or not segments[-1].isdigit():
            raise InvalidUrl(build_url, "Build")
        return path

    # --- Raw payloads ---

    def get_json(self, path: str, tree: str | None = None) -> JSONValue:
        """Fetch the JSON payload of an API path.

        Args:
            path: Object path relative to the server (e.g., "job/app/12/")
            tree: Optional Jenkins ``tree`` filter

        """
        params = {"tree": tree} if tree else None
        response = self._get(f"{path.rstrip('/')}/{API_SUFFIX}", params=params)
        try:
            return cast("JSONValue", response.json())
        except ValueError as e:
            msg = f"Invalid JSON from {path}: {e}"
            raise JenkinsClientError(msg) from e

    # --- Builds ---

    def get_build(self, job_name: str, number: int) -> BuildShape | UnknownBuild:
        """Get a build from a job name and build number.

        Builds of job types that are not modelled come back as
        ``UnknownBuild`` instead of failing.
        """
        return BUILDS.decode(self.get_json(job_build_path(job_name, number)))

    def get_build_record(self, job_name: str, number: int) -> CommonBuild:
        """Get a build as an open record, specialized through the class registry."""
        return decode_build_record(self.get_json(job_build_path(job_name, number)))

    def get_full_build(self, short_build: ShortBuild) -> BuildShape | UnknownBuild:
        """Get the full details of the build a ``ShortBuild`` points to."""
        return BUILDS.decode(self.get_json(self.build_path(short_build.url)))

    def get_console(self, build: BuildView) -> str:
        """Get the console output of a build.

        Raises:
            InvalidObjectType: If the build's url cannot be read
            InvalidUrl: If the build's url is not on this server

        """
        path = self.build_path(build.url)
        return self._get(f"{path}consoleText").text

    def get_job_payload(self, build: BuildView) -> JSONValue:
        """Get the raw payload of the job a build belongs to."""
        path = self.build_path(build.url)
        job_path = path.rstrip("/").rsplit("/", 1)[0]
        return self.get_json(job_path)


def job_build_path(job_name: str, number: int) -> str:
    """Return the path of build ``number`` of ``job_name``.

    Folders may be given with slashes ("team/app").
    """
    segments = "/".join(f"job/{quote(part, safe='')}" for part in job_name.split("/"))
    return f"{segments}/{number}/"


# Convenience function
def get_client(config: JenkinsConfig) -> JenkinsClient:
    """Create a JenkinsClient from configuration."""
    return JenkinsClient.from_config(config)
