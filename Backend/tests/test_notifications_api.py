"""Notifications raised by referral and messaging activity."""


def _notifications(client, account):
    resp = client.get("/api/notifications", headers=account.headers)
    assert resp.status_code == 200
    return resp.json()


def _request_referral(client, seeker, referrer, job_id="3"):
    resp = client.post("/api/referrals", headers=seeker.headers, json={"job_id": job_id, "referrer_id": referrer.id})
    assert resp.status_code == 201
    return resp.json()["data"]["referralRequest"]


def test_referrer_is_notified_of_new_request(client, seeker, referrer):
    referral = _request_referral(client, seeker, referrer)

    body = _notifications(client, referrer)
    assert body["data"]["unread_count"] == 1
    notification = body["data"]["notifications"][0]
    assert notification["type"] == "referral_request"
    assert notification["related_entity_id"] == referral["id"]
    assert notification["related_entity_type"] == "referral"
    assert "Sam Seeker" in notification["message"]
    assert "Frontend Developer" in notification["message"]

    assert _notifications(client, seeker)["results"] == 0


def test_seeker_is_notified_of_status_changes(client, seeker, referrer):
    referral = _request_referral(client, seeker, referrer)
    client.put(f"/api/referrals/requests/{referral['id']}/approve", headers=referrer.headers)
    client.put(f"/api/referrals/requests/{referral['id']}/complete", headers=referrer.headers)

    types = [n["type"] for n in _notifications(client, seeker)["data"]["notifications"]]
    assert sorted(types) == ["referral_approved", "referral_completed"]


def test_no_notification_for_no_op_transition(client, seeker, referrer):
    referral = _request_referral(client, seeker, referrer)
    client.put(f"/api/referrals/requests/{referral['id']}/reject", headers=referrer.headers)
    client.put(f"/api/referrals/requests/{referral['id']}/reject", headers=referrer.headers)

    assert _notifications(client, seeker)["results"] == 1


def test_message_notifies_the_other_participant(client, seeker, referrer):
    conv = client.post("/api/conversations", headers=seeker.headers, json={"recipient_id": referrer.id})
    conv_id = conv.json()["data"]["conversation"]["id"]
    client.post(f"/api/conversations/{conv_id}/messages", headers=seeker.headers, json={"content": "hello"})

    notifications = _notifications(client, referrer)["data"]["notifications"]
    assert [n["type"] for n in notifications] == ["new_message"]
    assert notifications[0]["related_entity_id"] == conv_id
    assert _notifications(client, seeker)["results"] == 0


def test_mark_one_read(client, seeker, referrer):
    _request_referral(client, seeker, referrer)
    notification_id = _notifications(client, referrer)["data"]["notifications"][0]["id"]

    resp = client.put(f"/api/notifications/{notification_id}/read", headers=referrer.headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["notification"]["read"] is True
    assert _notifications(client, referrer)["data"]["unread_count"] == 0


def test_cannot_mark_someone_elses_notification(client, seeker, referrer):
    _request_referral(client, seeker, referrer)
    notification_id = _notifications(client, referrer)["data"]["notifications"][0]["id"]

    resp = client.put(f"/api/notifications/{notification_id}/read", headers=seeker.headers)
    assert resp.status_code == 404
    assert _notifications(client, referrer)["data"]["unread_count"] == 1


def test_mark_all_read(client, seeker, referrer):
    _request_referral(client, seeker, referrer)
    _request_referral(client, seeker, referrer, job_id="4")

    resp = client.put("/api/notifications/read-all", headers=referrer.headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["updated"] == 2
    assert _notifications(client, referrer)["data"]["unread_count"] == 0


def test_notifications_require_login(client):
    assert client.get("/api/notifications").status_code == 401
