#!/usr/bin/python3
# pylint: disable=line-too-long
"""
RestFUL Webclient to use B2 native API, only the calls needed to get an upload url
"""
import logging
from dataclasses import dataclass

# non std modules
import requests

from .config import DEFAULTS


class B2Error(Exception):
    """
    some B2 API call failed

    response_text holds the remote response body as received, if there is any
    """

    def __init__(self, message: str, response_text: str = None):
        super(B2Error, self).__init__(message)
        self.response_text = response_text


@dataclass(frozen=True)
class UploadTarget:
    """upload url and its token, valid for one upload"""

    upload_url: str
    authorization_token: str


class B2Client:
    """
    authorize with account id and application key, resolve bucket and
    fetch upload url
    """

    def __init__(self, account_id: str, application_key: str, api_url: str = DEFAULTS["API_URL"], timeout: int = DEFAULTS["TIMEOUT"], session=None):
        self._logger = logging.getLogger(self.__class__.__name__)
        self._account_id = account_id
        self._application_key = application_key
        self._auth_url = api_url.rstrip("/")
        self._timeout = timeout
        self._session = session if session is not None else requests.Session()
        self._api_url = None  # set by authorize_account
        self._authorization_token = None  # set by authorize_account

    def _call(self, method: str, url: str, **kwargs) -> dict:
        """
        single point of calling B2, returning parsed json

        :param method <str>: GET or POST
        :param url <str>: full url of API call
        :return <dict>: parsed json response
        """
        self._logger.debug(f"{method} {url}")
        try:
            response = self._session.request(method, url, timeout=self._timeout, **kwargs)
        except requests.exceptions.RequestException as exc:
            raise B2Error(f"error calling {url}: {exc}") from exc
        if not 200 <= response.status_code < 300:
            self._logger.debug(f"{url} returned status {response.status_code}")
            raise B2Error(f"{url} returned status {response.status_code}", response.text)
        try:
            return response.json()
        except ValueError as exc:
            raise B2Error(f"invalid response from {url}", response.text) from exc

    def _api_call(self, name: str, data: dict) -> dict:
        if self._authorization_token is None:
            raise B2Error(f"{name} called before authorize_account")
        return self._call(
            "POST",
            f"{self._api_url}/b2api/v1/{name}",
            json=data,
            headers={"Authorization": self._authorization_token},
        )

    def authorize_account(self) -> dict:
        """
        get authorization token and api url for following calls
        """
        data = self._call(
            "GET",
            f"{self._auth_url}/b2api/v1/b2_authorize_account",
            auth=(self._account_id, self._application_key),
        )
        try:
            self._authorization_token = data["authorizationToken"]
            self._api_url = data["apiUrl"].rstrip("/")
        except (KeyError, TypeError, AttributeError) as exc:
            raise B2Error("authorizationToken or apiUrl missing in response") from exc
        self._logger.debug(f"authorized, using api url {self._api_url}")
        return data

    def list_buckets(self) -> list:
        """return list of buckets of this account"""
        data = self._api_call("b2_list_buckets", {"accountId": self._account_id})
        return data.get("buckets", [])

    def get_bucket_id(self, bucket_name: str) -> str:
        """
        return bucketId of first bucket with this name

        :param bucket_name <str>: name of bucket
        :return <str>: bucketId
        """
        for bucket in self.list_buckets():
            if bucket.get("bucketName") == bucket_name:
                return bucket["bucketId"]
        raise B2Error(f"bucket {bucket_name} not found")

    def get_upload_url(self, bucket_id: str) -> UploadTarget:
        """
        get upload url and token to use for exactly one upload

        :param bucket_id <str>: bucketId
        :return <UploadTarget>:
        """
        data = self._api_call("b2_get_upload_url", {"bucketId": bucket_id})
        try:
            return UploadTarget(data["uploadUrl"], data["authorizationToken"])
        except KeyError as exc:
            raise B2Error("uploadUrl or authorizationToken missing in response") from exc
