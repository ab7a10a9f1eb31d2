def test_create_issue_applies_defaults(client, alice, create_issue):
    resp = client.post(
        "/api/issues",
        json={
            "title": "Login broken",
            "description": "Cannot log in with valid credentials",
            "priority": "High",
        },
        headers=alice,
    )
    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["message"] == "Issue created successfully"

    issue = body["data"]["issue"]
    assert issue["status"] == "Open"
    assert issue["priority"] == "High"
    assert issue["severity"] == "Medium"
    assert issue["owner"]["email"] == "alice@example.com"
    assert set(issue["owner"]) == {"id", "email", "name"}
    assert issue["ownerId"] == issue["owner"]["id"]
    assert "createdAt" in issue and "updatedAt" in issue


def test_create_trims_text_fields(client, alice):
    resp = client.post(
        "/api/issues",
        json={"title": "   Padded title   ", "description": "   Padded description   "},
        headers=alice,
    )
    assert resp.status_code == 201
    issue = resp.json()["data"]["issue"]
    assert issue["title"] == "Padded title"
    assert issue["description"] == "Padded description"


def test_create_title_length_boundary(client, alice):
    too_short = client.post(
        "/api/issues",
        json={"title": "ab", "description": "Long enough description"},
        headers=alice,
    )
    assert too_short.status_code == 400
    assert too_short.json()["message"] == "Title must be at least 3 characters long"

    just_right = client.post(
        "/api/issues",
        json={"title": "abc", "description": "Long enough description"},
        headers=alice,
    )
    assert just_right.status_code == 201


def test_create_validation_errors(client, alice):
    cases = [
        ({"title": "Only a title"}, "Title and description are required"),
        ({"title": "x" * 256, "description": "Long enough description"}, "Title must not exceed 255 characters"),
        ({"title": "Title", "description": "short"}, "Description must be at least 10 characters long"),
        ({"title": "Title", "description": "y" * 5001}, "Description must not exceed 5000 characters"),
        (
            {"title": "Title", "description": "Long enough description", "status": "Done"},
            "Invalid status. Must be one of: Open, InProgress, Resolved, Closed",
        ),
        (
            {"title": "Title", "description": "Long enough description", "priority": "Urgent"},
            "Invalid priority. Must be one of: Low, Medium, High, Critical",
        ),
        (
            {"title": "Title", "description": "Long enough description", "severity": "low"},
            "Invalid severity. Must be one of: Low, Medium, High, Critical",
        ),
    ]
    for payload, message in cases:
        resp = client.post("/api/issues", json=payload, headers=alice)
        assert resp.status_code == 400, payload
        assert resp.json()["message"] == message


def test_create_rejects_non_string_title(client, alice):
    resp = client.post(
        "/api/issues",
        json={"title": 12345, "description": "Long enough description"},
        headers=alice,
    )
    assert resp.status_code == 400
    assert resp.json()["error"] == "validation_error"


def test_owner_is_taken_from_token_not_body(client, alice, bob, create_issue):
    issue = create_issue(alice, ownerId=999, userId=999)
    resp = client.get(f"/api/issues/{issue['id']}", headers=alice)
    assert resp.status_code == 200
    assert resp.json()["data"]["issue"]["owner"]["email"] == "alice@example.com"


def test_issue_routes_require_token(client):
    assert client.get("/api/issues").status_code == 401
    assert client.get("/api/issues/stats").status_code == 401
    assert client.get("/api/issues/1").status_code == 401
    assert client.post("/api/issues", json={}).status_code == 401
    assert client.put("/api/issues/1", json={}).status_code == 401
    assert client.delete("/api/issues/1").status_code == 401


def test_get_issue_by_id(client, alice, create_issue):
    issue = create_issue(alice)
    resp = client.get(f"/api/issues/{issue['id']}", headers=alice)
    assert resp.status_code == 200
    assert resp.json()["data"]["issue"]["title"] == "Login broken"


def test_get_issue_checks_existence_then_ownership(client, alice, bob, create_issue):
    issue = create_issue(alice)

    forbidden = client.get(f"/api/issues/{issue['id']}", headers=bob)
    assert forbidden.status_code == 403
    assert forbidden.json()["message"] == "You do not have permission to view this issue"

    missing = client.get("/api/issues/424242", headers=bob)
    assert missing.status_code == 404
    assert missing.json()["message"] == "Issue not found"

    bad_id = client.get("/api/issues/abc", headers=bob)
    assert bad_id.status_code == 400
    assert bad_id.json()["message"] == "Invalid issue ID"


def test_update_only_touches_supplied_fields(client, alice, create_issue):
    issue = create_issue(alice, priority="High", severity="Critical")

    resp = client.put(f"/api/issues/{issue['id']}", json={"status": "Closed"}, headers=alice)
    assert resp.status_code == 200
    assert resp.json()["message"] == "Issue updated successfully"

    updated = resp.json()["data"]["issue"]
    assert updated["status"] == "Closed"
    for field in ("title", "description", "priority", "severity", "ownerId", "createdAt"):
        assert updated[field] == issue[field]


def test_update_trims_and_validates(client, alice, create_issue):
    issue = create_issue(alice)

    resp = client.put(f"/api/issues/{issue['id']}", json={"title": "  Renamed  "}, headers=alice)
    assert resp.status_code == 200
    assert resp.json()["data"]["issue"]["title"] == "Renamed"

    resp = client.put(
        f"/api/issues/{issue['id']}",
        json={"description": "tiny", "severity": "Bogus"},
        headers=alice,
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "Description must be at least 10 characters long"

    # nothing from the rejected update was applied
    current = client.get(f"/api/issues/{issue['id']}", headers=alice).json()["data"]["issue"]
    assert current["description"] == issue["description"]
    assert current["severity"] == issue["severity"]


def test_update_reports_first_failing_field_in_order(client, alice, create_issue):
    issue = create_issue(alice)
    resp = client.put(
        f"/api/issues/{issue['id']}",
        json={"severity": "Bogus", "status": "Bogus", "priority": "Bogus"},
        headers=alice,
    )
    assert resp.status_code == 400
    assert resp.json()["message"].startswith("Invalid status.")


def test_any_status_transition_is_allowed(client, alice, create_issue):
    issue = create_issue(alice)
    for status in ("Closed", "Open", "Resolved", "InProgress", "Open"):
        resp = client.put(f"/api/issues/{issue['id']}", json={"status": status}, headers=alice)
        assert resp.status_code == 200
        assert resp.json()["data"]["issue"]["status"] == status


def test_update_ownership_and_existence(client, alice, bob, create_issue):
    issue = create_issue(alice)

    forbidden = client.put(f"/api/issues/{issue['id']}", json={"status": "Closed"}, headers=bob)
    assert forbidden.status_code == 403
    assert forbidden.json()["message"] == "You do not have permission to update this issue"

    assert client.put("/api/issues/999", json={"status": "Closed"}, headers=alice).status_code == 404
    assert client.put("/api/issues/x1", json={"status": "Closed"}, headers=alice).status_code == 400

    unchanged = client.get(f"/api/issues/{issue['id']}", headers=alice).json()["data"]["issue"]
    assert unchanged["status"] == "Open"


def test_delete_issue(client, alice, bob, create_issue):
    issue = create_issue(alice)

    forbidden = client.delete(f"/api/issues/{issue['id']}", headers=bob)
    assert forbidden.status_code == 403
    assert forbidden.json()["message"] == "You do not have permission to delete this issue"

    resp = client.delete(f"/api/issues/{issue['id']}", headers=alice)
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "Issue deleted successfully"}

    assert client.get(f"/api/issues/{issue['id']}", headers=alice).status_code == 404
    assert client.delete(f"/api/issues/{issue['id']}", headers=alice).status_code == 404
    assert client.delete("/api/issues/nope", headers=alice).status_code == 400

    # the owner is untouched
    assert client.get("/api/auth/me", headers=alice).status_code == 200


def test_ids_beyond_column_range_are_not_found(client, alice, create_issue):
    create_issue(alice)
    huge = "99999999999999999999999"

    assert client.get(f"/api/issues/{huge}", headers=alice).status_code == 404
    assert client.put(f"/api/issues/{huge}", json={"status": "Closed"}, headers=alice).status_code == 404
    assert client.delete(f"/api/issues/{huge}", headers=alice).status_code == 404
    assert client.get(f"/api/issues/{2**31}", headers=alice).status_code == 404
    assert client.get("/api/issues/0", headers=alice).status_code == 404


def test_ids_with_underscores_or_non_ascii_digits_are_invalid(client, alice, create_issue):
    for _ in range(10):
        create_issue(alice)

    for raw in ("1_0", "١٠"):
        resp = client.get(f"/api/issues/{raw}", headers=alice)
        assert resp.status_code == 400, raw
        assert resp.json()["message"] == "Invalid issue ID"
