"""
Tests for the dashboard stats endpoint.
"""

from conftest import make_post


def test_stats_counts_pending_posts(client, db_session, admin_headers,
                                    student_user):
    make_post(db_session, student_user)
    make_post(db_session, student_user)

    response = client.get("/api/admin/cms/stats", headers=admin_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["moderation"]["pendingForums"] == 2
    assert data["users"]["total"] == 2
    assert data["users"]["admins"] == 1
    assert data["users"]["students"] == 1


def test_stats_require_admin(client):
    response = client.get("/api/admin/cms/stats")
    assert response.status_code == 401
