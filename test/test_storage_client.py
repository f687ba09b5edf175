#!/usr/bin/python3
import dataclasses
import json
import unittest
from unittest import mock

import requests

# own modules
from b2upload.storage_client_b2 import B2Client, B2Error, UploadTarget

AUTHORIZE = {
    "accountId": "a30f20426f0b",
    "apiUrl": "https://api001.backblazeb2.com",
    "authorizationToken": "3_20160409004829_42b8f80ba60fb4323dcaad98_acct",
    "downloadUrl": "https://f001.backblazeb2.com",
}
BUCKETS = {
    "buckets": [
        {"bucketId": "4a48fe8875c6214145260818", "bucketName": "photos", "bucketType": "allPrivate"},
        {"bucketId": "5b232e8875c6214145260818", "bucketName": "backups", "bucketType": "allPrivate"},
    ]
}
UPLOAD_URL = {
    "bucketId": "5b232e8875c6214145260818",
    "uploadUrl": "https://pod-000-1005-03.backblaze.com/b2api/v1/b2_upload_file/5b232e8875c6214145260818/c001_v0001005_t0027",
    "authorizationToken": "2_20151009170037_f504a0f39a0f4e657337e624_upld",
}


def make_response(status_code, data):
    response = requests.Response()
    response.status_code = status_code
    response._content = (data if isinstance(data, str) else json.dumps(data)).encode("utf-8")
    response.encoding = "utf-8"
    return response


class Test(unittest.TestCase):

    def setUp(self):
        self.session = mock.Mock(spec=requests.Session)
        self.client = B2Client("a30f20426f0b", "secret", session=self.session)

    def _authorize(self):
        self.session.request.return_value = make_response(200, AUTHORIZE)
        self.client.authorize_account()

    def test_authorize_account(self):
        self._authorize()
        self.session.request.assert_called_once_with(
            "GET",
            "https://api.backblaze.com/b2api/v1/b2_authorize_account",
            timeout=600,
            auth=("a30f20426f0b", "secret"),
        )
        self.assertEqual(self.client.authorize_account()["apiUrl"], AUTHORIZE["apiUrl"])

    def test_authorize_failed(self):
        """
        error body of B2 is kept as received
        """
        body = '{"code": "unauthorized", "message": "", "status": 401}'
        self.session.request.return_value = make_response(401, body)
        with self.assertRaises(B2Error) as context:
            self.client.authorize_account()
        self.assertEqual(context.exception.response_text, body)
        with self.assertRaises(B2Error):
            self.client.list_buckets()
        self.session.request.assert_called_once()

    def test_connection_error(self):
        self.session.request.side_effect = requests.exceptions.ConnectionError("name resolution failed")
        with self.assertRaises(B2Error) as context:
            self.client.authorize_account()
        self.assertIsNone(context.exception.response_text)
        self.assertIn("name resolution failed", str(context.exception))

    def test_not_json(self):
        self.session.request.return_value = make_response(200, "<html></html>")
        with self.assertRaises(B2Error) as context:
            self.client.authorize_account()
        self.assertEqual(context.exception.response_text, "<html></html>")

    def test_call_before_authorize(self):
        with self.assertRaises(B2Error):
            self.client.list_buckets()
        self.session.request.assert_not_called()

    def test_list_buckets(self):
        self._authorize()
        self.session.request.return_value = make_response(200, BUCKETS)
        buckets = self.client.list_buckets()
        self.assertEqual(len(buckets), 2)
        self.session.request.assert_called_with(
            "POST",
            "https://api001.backblazeb2.com/b2api/v1/b2_list_buckets",
            timeout=600,
            json={"accountId": "a30f20426f0b"},
            headers={"Authorization": AUTHORIZE["authorizationToken"]},
        )

    def test_get_bucket_id(self):
        self._authorize()
        self.session.request.return_value = make_response(200, BUCKETS)
        self.assertEqual(self.client.get_bucket_id("backups"), "5b232e8875c6214145260818")

    def test_bucket_not_found(self):
        self._authorize()
        self.session.request.return_value = make_response(200, BUCKETS)
        with self.assertRaises(B2Error) as context:
            self.client.get_bucket_id("music")
        self.assertIn("music", str(context.exception))

    def test_get_upload_url(self):
        self._authorize()
        self.session.request.return_value = make_response(200, UPLOAD_URL)
        target = self.client.get_upload_url("5b232e8875c6214145260818")
        self.assertEqual(target, UploadTarget(UPLOAD_URL["uploadUrl"], UPLOAD_URL["authorizationToken"]))
        self.session.request.assert_called_with(
            "POST",
            "https://api001.backblazeb2.com/b2api/v1/b2_get_upload_url",
            timeout=600,
            json={"bucketId": "5b232e8875c6214145260818"},
            headers={"Authorization": AUTHORIZE["authorizationToken"]},
        )

    def test_get_upload_url_failed(self):
        self._authorize()
        body = '{"code": "bad_request", "message": "Invalid bucketId", "status": 400}'
        self.session.request.return_value = make_response(400, body)
        with self.assertRaises(B2Error) as context:
            self.client.get_upload_url("nonsense")
        self.assertEqual(context.exception.response_text, body)

    def test_upload_target_immutable(self):
        target = UploadTarget("https://example", "token")
        with self.assertRaises(dataclasses.FrozenInstanceError):
            target.upload_url = "https://elsewhere"

    def test_custom_api_url(self):
        client = B2Client("id", "key", api_url="http://localhost:8080/", timeout=5, session=self.session)
        self.session.request.return_value = make_response(200, AUTHORIZE)
        client.authorize_account()
        self.session.request.assert_called_once_with(
            "GET",
            "http://localhost:8080/b2api/v1/b2_authorize_account",
            timeout=5,
            auth=("id", "key"),
        )


if __name__ == "__main__":
    unittest.main()
