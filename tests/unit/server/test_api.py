"""Tests for the HTTP endpoints."""

import json

from fastapi.testclient import TestClient

from scriptflow import __version__
from scriptflow.compiler.script_compiler import FINISH_NODE_ID
from scriptflow.script.fallback import default_script


def test_health(test_client: TestClient):
    response = test_client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["version"] == __version__


class TestCompileEndpoint:
    """Tests for POST /scripts/compile."""

    def test_compiles_builder_document(self, test_client, print_shop_document):
        # Act
        response = test_client.post("/scripts/compile", json=print_shop_document)

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["usable"] is True
        assert body["problems"] == []
        assert body["script"]["startNodeId"] == "node_2"
        assert FINISH_NODE_ID in body["script"]["nodes"]

    def test_empty_document_is_unusable(self, test_client):
        response = test_client.post("/scripts/compile", json={})

        assert response.status_code == 200
        assert response.json()["usable"] is False


class TestResolveEndpoint:
    """Tests for POST /scripts/resolve."""

    def test_missing_script_resolves_to_fallback(self, test_client):
        # Act
        response = test_client.post(
            "/scripts/resolve", json={"serviceName": "Printing", "businessName": "Copy Corner"}
        )

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["fallback"] is True
        assert body["script"] == default_script("Printing", "Copy Corner").to_document()

    def test_builder_script_as_string(self, test_client, print_shop_document):
        response = test_client.post(
            "/scripts/resolve", json={"script": json.dumps(print_shop_document)}
        )

        body = response.json()
        assert body["fallback"] is False
        assert body["script"]["startNodeId"] == "node_2"


class TestTurnEndpoint:
    """Tests for POST /sessions/turn."""

    def test_first_turn(self, test_client, print_shop_script):
        # Act
        response = test_client.post(
            "/sessions/turn", json={"script": print_shop_script.to_document()}
        )

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["prompt"]["text"] == "What service?"
        assert [o["label"] for o in body["prompt"]["options"]] == [
            "Printing",
            "Scanning",
            "Binding",
        ]
        assert body["transcript"] == []
        assert body["complete"] is False

    def test_answer_advances_session(self, test_client, print_shop_script):
        # Arrange
        request = {
            "script": print_shop_script.to_document(),
            "transcript": [{"question": "What service?", "answer": "Printing", "type": "choice"}],
            "answer": "Color",
        }

        # Act
        response = test_client.post("/sessions/turn", json=request)

        # Assert
        body = response.json()
        assert body["prompt"]["text"] == "How many copies?"
        assert body["prompt"]["input_type"] == "number"
        assert [e["answer"] for e in body["transcript"]] == ["Printing", "Color"]

    def test_invalid_answer_is_422(self, test_client, print_shop_script):
        response = test_client.post(
            "/sessions/turn",
            json={"script": print_shop_script.to_document(), "answer": "Laminating"},
        )

        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "That answer is not one of the choices. Please try again."
        assert body["reference"].startswith("ERR-")

    def test_answer_after_completion_is_409(self, test_client):
        script = {"startNodeId": "a", "nodes": {"a": {"text": "Closed", "isFinal": True}}}

        response = test_client.post("/sessions/turn", json={"script": script, "answer": "hi"})

        assert response.status_code == 409

    def test_unusable_script_is_400(self, test_client):
        response = test_client.post("/sessions/turn", json={"script": {}})

        assert response.status_code == 400
        assert response.json()["error"] == "The service script could not be read."

    def test_malformed_script_is_400(self, test_client):
        response = test_client.post(
            "/sessions/turn", json={"script": {"startNodeId": "a", "nodes": {"a": {"options": 1}}}}
        )

        assert response.status_code == 400

    def test_broken_script_hides_details(self, test_client):
        """
        GIVEN a stored script whose option has no continuation
        WHEN the option is chosen
        THEN the respondent gets a generic message, not the node id
        """
        # Arrange
        script = {
            "startNodeId": "a",
            "nodes": {"a": {"text": "Pick", "options": [{"label": "X", "value": "X"}]}},
        }

        # Act
        response = test_client.post("/sessions/turn", json={"script": script, "answer": "X"})

        # Assert
        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "This service script is broken. Please contact the business."
        assert set(body) == {"error", "reference", "message"}


class TestLineItemEndpoint:
    """Tests for POST /orders/line-item."""

    def test_structured_answers(self, test_client):
        # Act
        response = test_client.post(
            "/orders/line-item",
            json={
                "serviceName": "Printing",
                "servicePrice": 0.5,
                "answers": [
                    {"question": "How many copies?", "answer": "4", "type": "number"},
                    {"question": "Color?", "answer": "Blue"},
                ],
            },
        )

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["quantity"] == 4
        assert body["details"] == "How many copies?: 4; Color?: Blue"
        assert body["lineItem"]["name"] == "Printing (How many copies?: 4; Color?: Blue)"
        assert body["totalAmount"] == 2.0

    def test_legacy_summary(self, test_client):
        response = test_client.post(
            "/orders/line-item",
            json={"serviceName": "Printing", "servicePrice": 1, "summary": "Black and White, 3"},
        )

        assert response.json()["quantity"] == 3

    def test_invalid_request_is_rejected(self, test_client):
        response = test_client.post(
            "/orders/line-item", json={"serviceName": "", "servicePrice": -1}
        )

        assert response.status_code == 422
