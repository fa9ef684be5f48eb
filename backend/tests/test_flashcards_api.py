import uuid

from fastapi.testclient import TestClient


def create_card(client, headers, **overrides):
    payload = {
        "question": "What is a cell?",
        "answer": "The basic unit of life",
        "category": "biology",
        "difficulty_level": "Easy",
    }
    payload.update(overrides)
    return client.post("/api/flashcards/", json=payload, headers=headers)


class TestFlashcardCrud:
    def test_create_normalizes_category(self, client: TestClient, auth_headers):
        response = create_card(client, auth_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["category"] == "Biology"
        assert data["difficulty_level"] == "Easy"
        assert data["username"] == "testuser"
        assert data["is_auto"] is False

    def test_create_registers_category(self, client: TestClient, auth_headers):
        create_card(client, auth_headers)
        create_card(client, auth_headers, question="Second")

        response = client.get("/api/categories/", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == [{"username": "testuser", "category": "Biology"}]

    def test_create_rejects_unknown_difficulty(self, client: TestClient, auth_headers):
        response = create_card(client, auth_headers, difficulty_level="Impossible")
        assert response.status_code == 422

    def test_list_filters_by_category_and_difficulty(self, client: TestClient, auth_headers):
        create_card(client, auth_headers)
        create_card(client, auth_headers, difficulty_level="Hard")
        create_card(client, auth_headers, category="history")

        by_category = client.get("/api/flashcards/?category=biology", headers=auth_headers)
        by_both = client.get(
            "/api/flashcards/?category=Biology&difficulty_level=Hard", headers=auth_headers
        )

        assert len(by_category.json()) == 2
        assert len(by_both.json()) == 1

    def test_get_foreign_card_is_not_found(self, client: TestClient, auth_headers, other_user, make_flashcards):
        foreign = make_flashcards("Biology", 1, username=other_user.username)[0]

        response = client.get(f"/api/flashcards/{foreign.id}", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["error"] == "NotFound"

    def test_update_moves_card_to_new_category(self, client: TestClient, auth_headers):
        card_id = create_card(client, auth_headers).json()["id"]

        response = client.put(
            f"/api/flashcards/{card_id}",
            json={"category": "chemistry", "difficulty_level": "Medium"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["category"] == "Chemistry"
        assert response.json()["difficulty_level"] == "Medium"
        categories = client.get("/api/categories/", headers=auth_headers).json()
        # the old category had no other card left
        assert [c["category"] for c in categories] == ["Chemistry"]

    def test_update_keeps_category_still_in_use(self, client: TestClient, auth_headers):
        card_id = create_card(client, auth_headers).json()["id"]
        create_card(client, auth_headers, question="Other")

        client.put(f"/api/flashcards/{card_id}", json={"category": "chemistry"}, headers=auth_headers)

        categories = client.get("/api/categories/", headers=auth_headers).json()
        assert [c["category"] for c in categories] == ["Biology", "Chemistry"]

    def test_delete_last_card_removes_category(self, client: TestClient, auth_headers):
        card_id = create_card(client, auth_headers).json()["id"]

        response = client.delete(f"/api/flashcards/{card_id}", headers=auth_headers)

        assert response.status_code == 200
        assert client.get(f"/api/flashcards/{card_id}", headers=auth_headers).status_code == 404
        assert client.get("/api/categories/", headers=auth_headers).json() == []

    def test_delete_missing_card(self, client: TestClient, auth_headers):
        response = client.delete(f"/api/flashcards/{uuid.uuid4()}", headers=auth_headers)
        assert response.status_code == 404

    def test_requires_authentication(self, client: TestClient):
        assert client.get("/api/flashcards/").status_code == 401
