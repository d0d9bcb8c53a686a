"""
Tests for split and settlement endpoints.
"""
import pytest
from fastapi.testclient import TestClient
from tripsplit.main import app

client = TestClient(app)


def test_health():
    """Test health check endpoints."""
    assert client.get("/").status_code == 200
    response = client.get("/health")
    assert response.json() == {"status": "healthy"}


def test_equal_split():
    """Test equal split endpoint."""
    response = client.post(
        "/api/splits/equal",
        json={"amount": 100, "participantIds": ["u1", "u2", "u3"]}
    )
    assert response.status_code == 200
    assert response.json() == [
        {"participantId": "u1", "amount": 33.33},
        {"participantId": "u2", "amount": 33.33},
        {"participantId": "u3", "amount": 33.34},
    ]


def test_equal_split_negative_total():
    """Test a negative total is reported as a validation error."""
    response = client.post(
        "/api/splits/equal",
        json={"amount": -5, "participantIds": ["u1"]}
    )
    assert response.status_code == 422
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_equal_split_amount_too_large():
    """Test an amount beyond cent precision is a validation error, not a crash."""
    response = client.post(
        "/api/splits/equal",
        json={"amount": 1e30, "participantIds": ["u1", "u2"]}
    )
    assert response.status_code == 422
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_percentage_split():
    """Test percentage split endpoint."""
    response = client.post(
        "/api/splits/percentage",
        json={
            "amount": 100,
            "shares": [
                {"participantId": "u1", "percentage": 10},
                {"participantId": "u2", "percentage": 40},
                {"participantId": "u3", "percentage": 50},
            ]
        }
    )
    assert response.status_code == 200
    assert [s["amount"] for s in response.json()] == [10.0, 40.0, 50.0]


def test_expense_split_custom():
    """Test custom expense split passes amounts through."""
    response = client.post(
        "/api/splits/calculate",
        json={
            "amount": 25.5,
            "splitType": "CUSTOM",
            "customSplits": [
                {"participantId": "u1", "amount": 20},
                {"participantId": "u2", "amount": 5.5},
            ]
        }
    )
    assert response.status_code == 200
    assert response.json() == [
        {"participantId": "u1", "amount": 20.0},
        {"participantId": "u2", "amount": 5.5},
    ]


@pytest.mark.parametrize("body", [
    {"amount": 10, "splitType": "CUSTOM", "customSplits": [{"participantId": "u1", "amount": 9}]},
    {"amount": 10, "splitType": "PERCENTAGE", "percentageSplits": [{"participantId": "u1", "percentage": 90}]},
    {"amount": 10, "splitType": "EQUAL"},
    {"amount": 10, "splitType": "EQUAL", "splitWith": []},
    {"amount": 0, "splitWith": ["u1"]},
    {"amount": 10.005, "splitWith": ["u1"]},
])
def test_expense_split_rejects_invalid_configuration(body):
    """Test the request validation layer."""
    response = client.post("/api/splits/calculate", json=body)
    assert response.status_code == 422


def test_settlement():
    """Test settlement endpoint output shape."""
    response = client.post(
        "/api/settlements/calculate",
        json={
            "balances": [
                {"userId": "a", "userName": "Alice", "balance": "100.00"},
                {"userId": "b", "userName": "Bob", "balance": -60},
                {"userId": "c", "userName": "Charlie", "balance": "-40"},
            ]
        }
    )
    assert response.status_code == 200
    assert response.json() == {
        "settlements": [
            {
                "from": {"userId": "b", "userName": "Bob"},
                "to": {"userId": "a", "userName": "Alice"},
                "amount": "60.00",
            },
            {
                "from": {"userId": "c", "userName": "Charlie"},
                "to": {"userId": "a", "userName": "Alice"},
                "amount": "40.00",
            },
        ],
        "summary": {"totalTransactions": 2, "totalAmount": "100.00"},
    }


def test_settlement_empty():
    response = client.post("/api/settlements/calculate", json={"balances": []})
    assert response.status_code == 200
    assert response.json() == {
        "settlements": [],
        "summary": {"totalTransactions": 0, "totalAmount": "0.00"},
    }


def test_settlement_malformed_balance():
    response = client.post(
        "/api/settlements/calculate",
        json={"balances": [{"userId": "a", "userName": "Alice", "balance": "oops"}]}
    )
    assert response.status_code == 422


def test_balances_from_totals():
    response = client.post(
        "/api/settlements/balances",
        json={
            "members": [
                {"userId": "a", "userName": "Alice", "totalPaid": "100", "totalOwed": "33.33"},
                {"userId": "b", "userName": "Bob", "totalPaid": None, "totalOwed": "66.67"},
            ]
        }
    )
    assert response.status_code == 200
    assert response.json() == [
        {"userId": "a", "userName": "Alice", "totalPaid": "100.00", "totalOwed": "33.33", "balance": "66.67"},
        {"userId": "b", "userName": "Bob", "totalPaid": "0.00", "totalOwed": "66.67", "balance": "-66.67"},
    ]
