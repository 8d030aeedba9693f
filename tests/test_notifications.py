"""
Tests for in-app notifications.
"""

from skillshub.db.database import get_db_session
from skillshub.models.enums import NotificationType
from skillshub.services.notification_service import notify


def _notify(user_id, n=1):
    with get_db_session() as db:
        for i in range(n):
            notify(db, user_id, NotificationType.system, title=f"Notice {i}", message="Welcome to SkillsHub")


class TestListNotifications:

    def test_newest_first_with_unread_count(self, seeker):
        _notify(seeker.user_id, 3)

        body = seeker.get("/api/notifications").json()

        assert [n["title"] for n in body["notifications"]] == ["Notice 2", "Notice 1", "Notice 0"]
        assert body["unreadCount"] == 3
        assert body["notifications"][0]["type"] == "SYSTEM"
        assert body["notifications"][0]["read"] is False

    def test_capped_at_fifty(self, seeker):
        _notify(seeker.user_id, 55)

        body = seeker.get("/api/notifications").json()

        assert len(body["notifications"]) == 50
        assert body["unreadCount"] == 55

    def test_only_own_notifications(self, seeker, employer):
        _notify(employer.user_id, 2)

        assert seeker.get("/api/notifications").json() == {"notifications": [], "unreadCount": 0}

    def test_unread_only(self, seeker):
        _notify(seeker.user_id, 2)
        first_id = seeker.get("/api/notifications").json()["notifications"][0]["id"]
        seeker.patch("/api/notifications", json={"notificationId": first_id})

        unread = seeker.get("/api/notifications", params={"unreadOnly": "true"}).json()

        assert len(unread["notifications"]) == 1
        assert unread["unreadCount"] == 1


class TestUpdateNotifications:

    def test_mark_one_read_and_unread(self, seeker):
        _notify(seeker.user_id)
        notification_id = seeker.get("/api/notifications").json()["notifications"][0]["id"]

        read = seeker.patch("/api/notifications", json={"notificationId": notification_id})
        assert read.status_code == 200
        assert seeker.get("/api/notifications").json()["unreadCount"] == 0

        seeker.patch("/api/notifications", json={"notificationId": notification_id, "read": False})
        assert seeker.get("/api/notifications").json()["unreadCount"] == 1

    def test_mark_all_read(self, seeker, employer):
        _notify(seeker.user_id, 3)
        _notify(employer.user_id, 1)

        response = seeker.patch("/api/notifications", json={"markAllAsRead": True})

        assert response.status_code == 200
        assert response.json()["message"] == "All notifications marked as read"
        assert seeker.get("/api/notifications").json()["unreadCount"] == 0
        assert employer.get("/api/notifications").json()["unreadCount"] == 1

    def test_cannot_touch_other_users_notification(self, seeker, employer):
        _notify(employer.user_id)
        notification_id = employer.get("/api/notifications").json()["notifications"][0]["id"]

        response = seeker.patch("/api/notifications", json={"notificationId": notification_id})

        assert response.status_code == 404
        assert employer.get("/api/notifications").json()["unreadCount"] == 1

    def test_requires_target(self, seeker):
        response = seeker.patch("/api/notifications", json={})

        assert response.status_code == 400

    def test_requires_login(self, anon_client):
        assert anon_client.get("/api/notifications").status_code == 401
