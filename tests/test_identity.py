from __future__ import annotations

import unittest

from server_directory.app import app
from server_directory.identity import (
    client_address,
    get_client_address,
    get_client_id,
    hash_address,
    normalize_address,
)


class ClientAddressTests(unittest.TestCase):
    def test_normalize_address(self) -> None:
        self.assertEqual(normalize_address("203.0.113.9"), "203.0.113.9")
        self.assertEqual(normalize_address(" ::ffff:10.0.0.1 "), "10.0.0.1")
        self.assertEqual(normalize_address("2001:DB8::1"), "2001:db8::1")
        self.assertEqual(normalize_address("garbage"), "unknown")
        self.assertEqual(normalize_address(None), "unknown")

    def test_proxy_headers_are_preferred(self) -> None:
        headers = {"X-Forwarded-For": "203.0.113.9, 10.0.0.1"}
        self.assertEqual(client_address(headers, "10.0.0.1"), "203.0.113.9")

        headers["Client-IP"] = "198.51.100.2"
        self.assertEqual(client_address(headers, "10.0.0.1"), "198.51.100.2")

    def test_untrusted_proxy_headers_are_ignored(self) -> None:
        headers = {"X-Forwarded-For": "203.0.113.9"}
        self.assertEqual(client_address(headers, "10.0.0.1", trust_proxy=False), "10.0.0.1")

    def test_invalid_forwarded_address_is_unknown(self) -> None:
        self.assertEqual(client_address({"X-Forwarded-For": "nope"}, "10.0.0.1"), "unknown")

    def test_hash_address(self) -> None:
        digest = hash_address("203.0.113.9", "salt")
        self.assertEqual(len(digest), 64)
        self.assertEqual(digest, hash_address("203.0.113.9", "salt"))
        self.assertNotEqual(digest, hash_address("203.0.113.9", "pepper"))
        self.assertNotEqual(digest, hash_address("203.0.113.10", "salt"))

    def test_request_helpers(self) -> None:
        with app.test_request_context("/", headers={"X-Forwarded-For": "203.0.113.9"},
                environ_base={"REMOTE_ADDR": "10.0.0.1"}):
            self.assertEqual(get_client_address(), "203.0.113.9")
            self.assertEqual(get_client_id(),
                hash_address("203.0.113.9", app.config["IP_SALT"]))


if __name__ == "__main__":
    unittest.main()
