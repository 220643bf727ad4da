from __future__ import annotations

import json
from pathlib import Path
import tempfile
import unittest

from server_directory.app import app
from server_directory.store import MemoryStore


def stored_server(server_id, votes=0):
    return {
        "id": server_id,
        "name": server_id.title(),
        "ip": f"{server_id}.example.com",
        "description": "B" * 30,
        "tags": [],
        "votes": votes,
        "votesAllTime": votes,
        "featured": False,
        "verified": False,
        "createdAt": 0,
    }


class CommandTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = MemoryStore({"servers.json": [
            stored_server("alpha", votes=10),
            stored_server("bravo", votes=2),
        ]})
        old_store = app.extensions["store"]
        app.extensions["store"] = self.store
        self.addCleanup(app.extensions.__setitem__, "store", old_store)
        self.runner = app.test_cli_runner()

    def test_list_servers(self) -> None:
        result = self.runner.invoke(args=["list-servers"])
        self.assertEqual(result.exit_code, 0, result.output)
        lines = result.output.splitlines()
        self.assertIn("1. alpha", lines[0])
        self.assertIn("10 votes", lines[0])
        self.assertIn("2. bravo", lines[1])

    def test_set_flag(self) -> None:
        result = self.runner.invoke(args=["set-flag", "bravo", "featured"])
        self.assertEqual(result.exit_code, 0, result.output)

        servers = {s["id"]: s for s in self.store.read("servers.json", list)}
        self.assertTrue(servers["bravo"]["featured"])

        result = self.runner.invoke(args=["list-servers"])
        self.assertIn("1. bravo", result.output.splitlines()[0])
        self.assertIn("[featured]", result.output)

        result = self.runner.invoke(args=["set-flag", "bravo", "featured", "--off"])
        self.assertEqual(result.exit_code, 0, result.output)
        servers = {s["id"]: s for s in self.store.read("servers.json", list)}
        self.assertFalse(servers["bravo"]["featured"])

    def test_set_flag_unknown_server(self) -> None:
        result = self.runner.invoke(args=["set-flag", "missing", "verified"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Server not found.", result.output)

    def test_set_flag_rejects_other_fields(self) -> None:
        result = self.runner.invoke(args=["set-flag", "alpha", "votes"])
        self.assertNotEqual(result.exit_code, 0)

    def test_load_json(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "servers.json"
            path.write_text(json.dumps({"servers": [
                stored_server("alpha"),
                stored_server("charlie", votes=3),
            ]}), encoding="utf-8")

            result = self.runner.invoke(args=["load-json", str(path)])
            self.assertEqual(result.exit_code, 0, result.output)
            self.assertIn("Loaded 1 of 2 servers", result.output)

            result = self.runner.invoke(args=["load-json", str(path), "--replace"])
            self.assertIn("Loaded 2 of 2 servers", result.output)

        ids = [s["id"] for s in self.store.read("servers.json", list)]
        self.assertEqual(ids, ["alpha", "charlie"])


if __name__ == "__main__":
    unittest.main()
