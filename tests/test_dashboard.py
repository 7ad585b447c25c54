from fintrack.services.dashboard import DashboardService


def test_summary_returns_five_newest_descending(repo, user, add_tx):
    created = [
        add_tx("income", "salary", 1000.0),
        add_tx("expense", "food", 100.0),
        add_tx("expense", "rent", 300.0),
        add_tx("expense", "fun", 50.0),
        add_tx("income", "gift", 200.0),
        add_tx("expense", "food", 30.0),
        add_tx("expense", "travel", 120.0),
    ]

    summary = DashboardService(repo).get_summary(user.id)

    assert [t.id for t in summary.recent_transactions] == [t.id for t in reversed(created)][:5]
    assert summary.total_income == 1200.0
    assert summary.total_expenses == 600.0
    assert summary.balance == 600.0
    assert summary.spending_percentage == 50.0


def test_summary_ignores_other_users(repo, user, other_user, add_tx):
    add_tx("income", "salary", 500.0, owner=other_user)
    summary = DashboardService(repo).get_summary(user.id)
    assert summary.balance == 0
    assert summary.spending_percentage == 0
    assert summary.recent_transactions == []
