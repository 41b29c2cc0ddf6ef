import sys
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

_BACKEND_ROOT = Path(__file__).resolve().parents[1] / "backend"
if str(_BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(_BACKEND_ROOT))

from fastapi.testclient import TestClient

from graph_store_stub import InMemoryGraphStore, StepClock

from application.memory_builder import MemoryGraphService
from infrastructure.providers import neo4jdb
from infrastructure.providers.neo4jdb import Neo4jGraphStore
from memory_graph.config.settings import MAX_QUERY_LIMIT
from server.api.rest import dependencies as deps
from server.main import app


class _ApiTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.store = InMemoryGraphStore()
        clock = StepClock()
        app.dependency_overrides[deps.get_memory_graph_service] = lambda: MemoryGraphService(
            store=self.store, clock=clock
        )
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides = {}


class TestWriteApi(_ApiTestCase):
    def test_write_defaults(self) -> None:
        resp = self.client.post("/write", json={"text": "A"})
        self.assertEqual(resp.status_code, 200, resp.text)
        data = resp.json()
        self.assertEqual(data["status"], "ok")
        self.assertEqual(data["label"], "Memory")
        self.assertEqual(data["mode"], "create")
        self.assertTrue(data["nodeId"])

    def test_skip_example(self) -> None:
        self.client.post("/write", json={"text": "A"})
        self.client.post("/write", json={"text": "B"})
        resp = self.client.post(
            "/write",
            json={
                "text": "A",
                "relationships": [{"from": "A", "to": "B", "type": "LIKES"}],
                "mode": "skip",
            },
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json(), {"status": "skipped", "node": "A"})

        graph = self.client.post("/graph", json={}).json()
        self.assertNotIn("LIKES", [link["type"] for link in graph["links"]])

    def test_relationships_and_graph(self) -> None:
        self.client.post("/write", json={"text": "Acme", "label": "Company", "context": {"hq": "Basel"}})
        resp = self.client.post(
            "/write",
            json={
                "text": "Ada",
                "label": "Person",
                "relationships": [
                    {"from": "Ada", "to": "Acme", "type": "works at"},
                    {"from": "Ada", "type": "IGNORED"},
                ],
            },
        )
        self.assertEqual(resp.status_code, 200, resp.text)

        graph = self.client.post("/graph", json={"limit": "10", "filterLabel": "Person"})
        self.assertEqual(graph.status_code, 200, graph.text)
        data = graph.json()
        self.assertEqual(data["links"], [{"source": "Ada", "target": "Acme", "type": "WORKS_AT"}])
        nodes = {n["id"]: n for n in data["nodes"]}
        self.assertEqual(nodes["Acme"], {"id": "Acme", "label": "Company", "text": "Acme", "context": {"hq": "Basel"}})

    def test_validation_errors_are_400(self) -> None:
        for body in ({}, {"text": ""}, {"text": "A", "mode": "upsert"}, {"text": "A", "relationships": "nope"}):
            with self.subTest(body=body):
                resp = self.client.post("/write", json=body)
                self.assertEqual(resp.status_code, 400, resp.text)
                self.assertEqual(resp.json()["error"], "Invalid request body")

    def test_store_failure_is_500_with_store_message(self) -> None:
        self.store.fail_on = "CREATE (n:"
        resp = self.client.post("/write", json={"text": "A"})
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"error": "simulated failure on CREATE (n:"})


class TestQueryApi(_ApiTestCase):
    def test_round_trip_json_format(self) -> None:
        context = {"source": "crm", "score": 0.75, "tags": ["vip"], "nested": {"ok": True}}
        self.client.post("/write", json={"text": "A", "context": context})
        resp = self.client.post(
            "/query",
            json={"cypher": "MATCH (n:Memory {text: $text}) RETURN n", "params": {"text": "A"}, "format": "json"},
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        data = resp.json()
        self.assertEqual(data["status"], "ok")
        self.assertEqual(data["records"], 1)
        self.assertEqual(data["format"], "json")
        self.assertEqual(data["preset"], "custom")
        self.assertEqual(data["results"][0]["n"]["context"], context)

    def test_preset(self) -> None:
        self.store.canned_records = [{"c": {"text": "Acme"}}]
        resp = self.client.post("/query", json={"preset": "getAllCompanies", "limit": 5})
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["preset"], "getAllCompanies")
        self.assertEqual(self.store.statements[-1][1], {"limit": 5})

    def test_destructive_keywords_rejected(self) -> None:
        for cypher in ("MATCH (n) DETACH DELETE n", "drop constraint foo", "MATCH (n) SET n.x = 'Deleted' RETURN n"):
            with self.subTest(cypher=cypher):
                resp = self.client.post("/query", json={"cypher": cypher})
                self.assertEqual(resp.status_code, 400)
                self.assertIn("DELETE/DROP not allowed", resp.json()["error"])
        self.assertEqual(self.store.statements, [])

    def test_missing_query_and_unknown_preset(self) -> None:
        resp = self.client.post("/query", json={})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"error": "Missing Cypher query or invalid type."})

        resp = self.client.post("/query", json={"preset": "dropEverything"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"error": "Unknown preset 'dropEverything'"})

    def test_bad_format_rejected(self) -> None:
        resp = self.client.post("/query", json={"cypher": "RETURN 1", "format": "csv"})
        self.assertEqual(resp.status_code, 400)

    def test_huge_limit_is_clamped(self) -> None:
        resp = self.client.post("/query", json={"cypher": "MATCH (n) RETURN n LIMIT $limit", "limit": 1e30})
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(self.store.statements[-1][1], {"limit": MAX_QUERY_LIMIT})

    def test_unencodable_params_give_json_500(self) -> None:
        raw_session = MagicMock()
        raw_session.run.side_effect = OverflowError("Integer 1267650600228229401496703205376 out of range")
        driver = MagicMock()
        driver.session.return_value = raw_session
        with patch.object(neo4jdb.GraphDatabase, "driver", return_value=driver):
            store = Neo4jGraphStore(uri="neo4j://db:7687", username="neo4j", password="x")
            app.dependency_overrides[deps.get_memory_graph_service] = lambda: MemoryGraphService(store=store)
            resp = self.client.post("/query", json={"cypher": "RETURN $big", "params": {"big": 2**100}})
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"error": "Integer 1267650600228229401496703205376 out of range"})
        raw_session.close.assert_called_once()


class TestHealthApi(_ApiTestCase):
    def test_ping(self) -> None:
        resp = self.client.get("/ping")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.text, "pong")

    def test_health_ok(self) -> None:
        resp = self.client.get("/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"status": "ok"})

    def test_health_error(self) -> None:
        self.store.connectivity_error = "Couldn't connect to localhost:7687"
        resp = self.client.get("/health")
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"status": "error", "error": "Couldn't connect to localhost:7687"})


class TestStaticApi(_ApiTestCase):
    def test_plugin_manifest(self) -> None:
        resp = self.client.get("/.well-known/ai-plugin.json")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["api"]["url"], "/openapi.yaml")

    def test_openapi_yaml(self) -> None:
        resp = self.client.get("/openapi.yaml")
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.headers["content-type"].startswith("text/yaml"))
        self.assertIn("/write:", resp.text)

    def test_missing_manifest(self) -> None:
        resp = self.client.get("/.well-known/missing.json")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.text, "missing.json not found")

    def test_cors_header(self) -> None:
        resp = self.client.get("/ping", headers={"Origin": "https://chat.example.com"})
        self.assertEqual(resp.headers.get("access-control-allow-origin"), "*")
