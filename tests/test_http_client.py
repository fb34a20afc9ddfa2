import unittest

import requests

from fake_ddragon import FakeResponse, FakeSession
from http_client import get_json

URL = "https://ddragon.test/api/versions.json"


class GetJsonTests(unittest.TestCase):
    def test_returns_decoded_payload(self) -> None:
        session = FakeSession({URL: ["14.24.1"]})
        self.assertEqual(["14.24.1"], get_json(session, URL, retries=0))
        self.assertEqual(1, session.count(URL))

    def test_retries_timeouts_then_succeeds(self) -> None:
        session = FakeSession({URL: [
            requests.exceptions.Timeout("slow"),
            requests.exceptions.ConnectionError("reset"),
            FakeResponse(["14.24.1"]),
        ]})
        self.assertEqual(["14.24.1"], get_json(session, URL, retries=2))
        self.assertEqual(3, session.count(URL))

    def test_retryable_status_is_raised_after_last_attempt(self) -> None:
        session = FakeSession({URL: FakeResponse(status_code=503)})
        with self.assertRaises(requests.HTTPError):
            get_json(session, URL, retries=2)
        self.assertEqual(3, session.count(URL))

    def test_not_found_is_not_retried(self) -> None:
        session = FakeSession({})
        with self.assertRaises(requests.HTTPError):
            get_json(session, URL, retries=3)
        self.assertEqual(1, session.count(URL))

    def test_bad_json_is_not_retried(self) -> None:
        session = FakeSession({URL: FakeResponse(text_body=True)})
        with self.assertRaises(ValueError):
            get_json(session, URL, retries=3)
        self.assertEqual(1, session.count(URL))


if __name__ == "__main__":
    unittest.main()
