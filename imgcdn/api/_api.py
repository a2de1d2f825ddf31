# coding: utf-8
"""Minimal HTTP client for the asset metadata API."""

from __future__ import annotations

import logging
import time
from typing import Dict, Optional

import requests

logger = logging.getLogger(__name__)


class _Api:
    """
    Connection to the asset metadata API. Only read requests are needed.
    """

    def __init__(
        self,
        server_address: str,
        token: Optional[str] = None,
        retry_count: Optional[int] = 3,
        retry_sleep_sec: Optional[float] = 1,
        timeout: Optional[float] = 10,
    ):
        # authorization
        self._token = token
        self._server_address = server_address.rstrip("/")
        self._headers = {"Authorization": f"Bearer {self._token}"} if self._token else {}

        # logger
        self.logger = logger

        # retry settings
        self._retry_count = max(int(retry_count or 1), 1)
        self._retry_sleep_sec = retry_sleep_sec if retry_sleep_sec is not None else 1
        self._timeout = timeout

    def get(
        self,
        method: str,
        params: Optional[Dict] = None,
        retries: Optional[int] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> requests.Response:
        """
        Performs GET request to server with given parameters.

        Client errors (4xx) are raised right away. Connection problems and
        server errors are retried with exponential backoff.

        :param method: Endpoint path relative to the server address.
        :type method: str
        :param params: Query parameters.
        :type params: dict, optional
        :param retries: The number of attempts to connect to the server.
        :type retries: int, optional
        :return: Response object
        :rtype: :class:`Response<Response>`
        """
        if retries is None:
            retries = self._retry_count

        url = self._prepare_url(method)
        logger.info(f"GET {url}")
        if headers is not None:
            headers = {**self._headers, **headers}
        else:
            headers = dict(self._headers)

        last_exc: Optional[Exception] = None
        for retry_idx in range(retries):
            response = None
            try:
                response = requests.get(url, params=params, headers=headers, timeout=self._timeout)
                if response.status_code != requests.codes.ok:  # pylint: disable=no-member
                    _Api._raise_for_status(response)
                return response
            except requests.RequestException as exc:
                if response is not None and 400 <= response.status_code < 500:
                    raise
                last_exc = exc
                if retry_idx + 1 < retries:
                    sleep_sec = min(self._retry_sleep_sec * (2**retry_idx), 60)
                    self.logger.warning(
                        f"GET {url} failed ({exc}); retry {retry_idx + 1}/{retries - 1} "
                        f"in {sleep_sec}s"
                    )
                    time.sleep(sleep_sec)
        raise requests.exceptions.RetryError(
            "Retry limit exceeded ({!r})".format(url)
        ) from last_exc

    def _prepare_url(self, method: str) -> str:
        """
        Prepares the API endpoint URL.
        """
        return f"{self._server_address}/{method.lstrip('/')}"

    @staticmethod
    def _raise_for_status(response: requests.Response):
        """
        Raise error and show message with error code if given response can not connect to server.
        :param response: Request class object
        """
        http_error_msg = ""
        if isinstance(response.reason, bytes):
            try:
                reason = response.reason.decode("utf-8")
            except UnicodeDecodeError:
                reason = response.reason.decode("iso-8859-1")
        else:
            reason = response.reason

        if 400 <= response.status_code < 500:
            http_error_msg = "%s Client Error: %s for url: %s" % (
                response.status_code,
                reason,
                response.url,
            )
        elif 500 <= response.status_code < 600:
            http_error_msg = "%s Server Error: %s for url: %s" % (
                response.status_code,
                reason,
                response.url,
            )

        if http_error_msg:
            raise requests.exceptions.HTTPError(http_error_msg, response=response)
