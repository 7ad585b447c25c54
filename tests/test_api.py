import uuid

from fintrack.core.security import get_current_user


def income(client, amount, category="salary"):
    resp = client.post("/transactions/income", json={"category": category, "amount": amount})
    assert resp.status_code == 201
    return resp.json()


def expense(client, amount, category):
    resp = client.post("/transactions/expense", json={"category": category, "amount": amount})
    assert resp.status_code == 201
    return resp.json()


def create_budget(client, name, amount, category):
    return client.post(
        "/budgets",
        json={"budgetName": name, "allocatedAmount": amount, "relatedCategory": category},
    )


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_budget_lifecycle(client):
    income(client, 1000.0)
    expense(client, 650.0, "food")

    resp = create_budget(client, "Groceries", 800.0, "food")
    assert resp.status_code == 201
    body = resp.json()
    assert body["status"] == "exceeded"
    assert body["allocatedAmount"] == 800.0
    budget_id = body["id"]

    resp = client.post(f"/budgets/{budget_id}/close")
    assert resp.status_code == 200
    assert resp.json()["status"] == "completed"

    resp = client.post(f"/budgets/{budget_id}/use", json={"amount": 10.0})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Completed budgets cannot be used"

    resp = client.put(
        f"/budgets/{budget_id}",
        json={"budgetName": "Groceries", "allocatedAmount": 100.0, "relatedCategory": "food"},
    )
    assert resp.status_code == 400

    [listed] = client.get("/budgets").json()
    assert listed["status"] == "completed"


def test_create_budget_over_income(client):
    income(client, 1000.0)
    resp = create_budget(client, "Holiday", 1200.0, "travel")
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Allocated amount exceeds total income"


def test_create_budget_validates_payload(client):
    income(client, 1000.0)
    assert create_budget(client, "X", 100.0, "food").status_code == 422
    assert create_budget(client, "Groceries", 0, "food").status_code == 422
    assert create_budget(client, "Groceries", 100.0, "").status_code == 422


def test_use_budget(client):
    income(client, 1000.0)
    budget_id = create_budget(client, "Groceries", 800.0, "food").json()["id"]

    assert client.post(f"/budgets/{budget_id}/use", json={"amount": 0}).status_code == 400
    assert client.post(f"/budgets/{budget_id}/use", json={"amount": 700.0}).status_code == 204

    assert client.get(f"/budgets/{budget_id}").json()["status"] == "exceeded"
    food = client.get("/transactions/category", params={"category": "food"}).json()
    assert [t["amount"] for t in food] == [700.0]


def test_budget_not_found_and_forbidden(client, app, other_user):
    income(client, 1000.0)
    budget_id = create_budget(client, "Groceries", 500.0, "food").json()["id"]

    assert client.get(f"/budgets/{uuid.uuid4()}").status_code == 404

    app.dependency_overrides[get_current_user] = lambda: other_user
    assert client.get(f"/budgets/{budget_id}").status_code == 403
    assert client.delete(f"/budgets/{budget_id}").status_code == 403
    assert client.post(f"/budgets/{budget_id}/close").status_code == 403
    assert client.post(f"/budgets/{budget_id}/use", json={"amount": 5.0}).status_code == 403
    resp = client.put(
        f"/budgets/{budget_id}",
        json={"budgetName": "Mine now", "allocatedAmount": 5.0, "relatedCategory": "food"},
    )
    assert resp.status_code == 403


def test_budget_summary(client):
    income(client, 1000.0)
    expense(client, 150.0, "food")
    create_budget(client, "Groceries", 400.0, "food")

    summary = client.get("/budgets/summary").json()
    assert summary["totalIncome"] == 1000.0
    assert summary["totalExpenses"] == 150.0
    assert summary["totalAllocated"] == 400.0
    assert summary["remainingBudget"] == 600.0
    breakdown = summary["categoryBreakdown"]
    assert breakdown["Groceries"] == breakdown["food"] == {
        "allocated": 400.0,
        "spent": 150.0,
        "remaining": 250.0,
    }


def test_dashboard_summary(client):
    income(client, 1000.0)
    expense(client, 250.0, "food")

    summary = client.get("/dashboard/summary").json()
    assert summary["balance"] == 750.0
    assert summary["spendingPercentage"] == 25.0
    assert [t["type"] for t in summary["recentTransactions"]] == ["expense", "income"]
    assert "createdAt" in summary["recentTransactions"][0]


def test_transaction_update_and_balance(client):
    tx = expense(client, 20.0, "food")
    income(client, 100.0)

    resp = client.put(f"/transactions/{tx['id']}", json={"amount": 30.0})
    assert resp.status_code == 200
    assert resp.json()["category"] == "food"
    assert client.get("/balance").json() == {"balance": 70.0}

    resp = client.put(f"/transactions/{tx['id']}", json={"type": "transfer"})
    assert resp.status_code == 400

    assert client.delete(f"/transactions/{tx['id']}").status_code == 204
    assert client.get(f"/transactions/{tx['id']}").status_code == 404


def test_transactions_by_date_range(client):
    client.post("/transactions/expense", json={"category": "food", "amount": 5.0, "date": "2026-01-10T12:00:00Z"})
    client.post("/transactions/expense", json={"category": "food", "amount": 7.0, "date": "2026-02-10T12:00:00Z"})

    resp = client.get(
        "/transactions/date-range",
        params={"startDate": "2026-02-01T00:00:00Z", "endDate": "2026-02-28T23:59:59Z"},
    )
    assert resp.status_code == 200
    assert [t["amount"] for t in resp.json()] == [7.0]


def test_ai_chat(client, chat_provider):
    income(client, 1000.0)
    resp = client.post("/ai/chat", json={"userMessage": "Can I afford a trip?"})
    assert resp.status_code == 200
    assert resp.json() == {"reply": chat_provider.reply}
    system_prompt, message = chat_provider.calls[0]
    assert message == "Can I afford a trip?"
    assert "Total Income: $1000.00" in system_prompt


def post_raw(client, url, body):
    # 1e309 is valid JSON but overflows to inf in Python
    return client.post(url, content=body, headers={"Content-Type": "application/json"})


def test_overflowing_amounts_are_rejected(client):
    income(client, 1000.0)
    budget_id = create_budget(client, "Groceries", 800.0, "food").json()["id"]

    for url in ("/transactions/income", "/transactions/expense"):
        resp = post_raw(client, url, '{"category": "salary", "amount": 1e309}')
        assert resp.status_code == 422
    resp = post_raw(client, f"/budgets/{budget_id}/use", '{"amount": 1e309}')
    assert resp.status_code == 422
    resp = post_raw(
        client,
        "/budgets",
        '{"budgetName": "Holiday", "allocatedAmount": 1e309, "relatedCategory": "travel"}',
    )
    assert resp.status_code == 422

    summary = client.get("/dashboard/summary").json()
    assert summary["totalIncome"] == 1000.0
    assert summary["totalExpenses"] == 0
    assert summary["balance"] == 1000.0
    assert client.get("/budgets/summary").json()["categoryBreakdown"]["food"]["spent"] == 0


def test_budget_use_and_close_not_found(client):
    missing = uuid.uuid4()
    assert client.post(f"/budgets/{missing}/use", json={"amount": 5.0}).status_code == 404
    assert client.post(f"/budgets/{missing}/close").status_code == 404
    resp = client.put(
        f"/budgets/{missing}",
        json={"budgetName": "Groceries", "allocatedAmount": 5.0, "relatedCategory": "food"},
    )
    assert resp.status_code == 404
