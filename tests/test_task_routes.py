from sqlalchemy import text

from task_service.app.models.user import User


def create_task(client, payload):
    response = client.post("/tasks/", json=payload)
    assert response.status_code == 200, response.text
    return response.json()


def without_users(task):
    return {k: v for k, v in task.items() if k != "users"}


def add_user(app, **fields):
    db = app.state.database.session()
    try:
        user = User(**fields)
        db.add(user)
        db.commit()
        return user.id
    finally:
        db.close()


def test_create_fetch_delete_scenario(task_client, dishes):
    created = create_task(task_client, dishes)

    assert isinstance(created["id"], int)
    for field, value in dishes.items():
        assert created[field] == value

    fetched = task_client.get(f"/tasks/findById/{created['id']}")
    assert fetched.status_code == 200
    assert created["users"] == []
    assert fetched.json() == created

    removed = task_client.request("DELETE", "/tasks/", json={"id": created["id"]})
    assert removed.status_code == 200
    assert removed.json() == without_users(created)

    assert task_client.get(f"/tasks/findById/{created['id']}").status_code == 404


def test_created_ids_are_unique(task_client, dishes):
    ids = {create_task(task_client, {**dishes, "name": f"task {i}"})["id"] for i in range(5)}
    assert len(ids) == 5


def test_list_tasks(task_client, dishes):
    assert task_client.get("/tasks/").json() == []

    first = create_task(task_client, dishes)
    second = create_task(task_client, {**dishes, "name": "Take out trash"})

    response = task_client.get("/tasks/")
    assert response.status_code == 200
    assert sorted(response.json(), key=lambda t: t["id"]) == [without_users(first), without_users(second)]


def test_find_by_name_is_exact_and_case_sensitive(task_client, dishes):
    created = create_task(task_client, dishes)

    response = task_client.get("/tasks/findByName/Do the dishes")
    assert response.status_code == 200
    assert response.json() == without_users(created)

    assert task_client.get("/tasks/findByName/do the dishes").status_code == 404
    assert task_client.get("/tasks/findByName/Do the").status_code == 404


def test_find_by_id_non_numeric_is_not_found(task_client):
    response = task_client.get("/tasks/findById/abc")
    assert response.status_code == 404
    assert "not found" in response.json()["detail"]

    assert task_client.get("/tasks/findById/1.5").status_code == 404


def test_find_by_id_rejects_forms_outside_plain_digits(task_client, dishes):
    for i in range(10):
        create_task(task_client, {**dishes, "name": f"t{i}"})

    assert task_client.get("/tasks/findById/10").status_code == 200
    for raw_id in ("1_0", " 10", "+10", "\u0661\u0660"):
        assert task_client.get(f"/tasks/findById/{raw_id}").status_code == 404, raw_id


def test_find_by_id_out_of_range_is_not_found(task_client):
    response = task_client.get("/tasks/findById/99999999999999999999")
    assert response.status_code == 404
    assert response.headers["content-type"] == "application/json"
    assert "not found" in response.json()["detail"]


def test_collection_routes_answer_without_trailing_slash(task_client, dishes):
    created = task_client.post("/tasks", json=dishes, follow_redirects=False)
    assert created.status_code == 200
    task = created.json()

    listed = task_client.get("/tasks", follow_redirects=False)
    assert listed.status_code == 200
    assert listed.json() == [without_users(task)]

    updated = task_client.put("/tasks", json={"id": task["id"], "status": "Done"}, follow_redirects=False)
    assert updated.status_code == 200
    assert updated.json()["status"] == "Done"

    removed = task_client.request("DELETE", "/tasks", json={"id": task["id"]}, follow_redirects=False)
    assert removed.status_code == 200
    assert task_client.get("/tasks", follow_redirects=False).json() == []


def test_update_changes_only_sent_fields(task_client, dishes):
    created = create_task(task_client, dishes)

    response = task_client.put("/tasks/", json={"id": created["id"], "status": "Done"})
    assert response.status_code == 200
    assert response.json() == {**without_users(created), "status": "Done"}

    fetched = task_client.get(f"/tasks/findById/{created['id']}").json()
    assert fetched["status"] == "Done"
    assert fetched["name"] == dishes["name"]


def test_update_unknown_id_is_not_found_and_changes_nothing(task_client, dishes):
    created = create_task(task_client, dishes)

    response = task_client.put("/tasks/", json={"id": created["id"] + 100, "status": "Done"})
    assert response.status_code == 404

    assert task_client.get("/tasks/").json() == [without_users(created)]


def test_delete_unknown_id_is_not_found(task_client):
    response = task_client.request("DELETE", "/tasks/", json={"id": 42})
    assert response.status_code == 404


def test_create_missing_column_is_server_error(task_client, dishes):
    payload = dict(dishes)
    del payload["status"]

    response = task_client.post("/tasks/", json=payload)
    assert response.status_code == 500
    assert task_client.get("/tasks/").json() == []


def test_persistence_failure_is_server_error_on_every_route(task_app, task_client, dishes):
    created = create_task(task_client, dishes)
    with task_app.state.database.engine.begin() as connection:
        connection.execute(text("DROP TABLE task_users_user"))
        connection.execute(text("DROP TABLE task"))

    assert task_client.get("/tasks/").status_code == 500
    assert task_client.get(f"/tasks/findById/{created['id']}").status_code == 500
    assert task_client.get("/tasks/findByName/Do the dishes").status_code == 500
    assert task_client.post("/tasks/", json=dishes).status_code == 500
    assert task_client.put("/tasks/", json={"id": created["id"], "status": "Done"}).status_code == 500
    assert task_client.request("DELETE", "/tasks/", json={"id": created["id"]}).status_code == 500


def test_assign_users_on_create(task_app, task_client, dishes):
    user_id = add_user(task_app, email="ann@example.com", firstname="Ann", surname="Lee", role="admin")

    created = create_task(task_client, {**dishes, "users": [{"id": user_id}]})
    assert created["users"] == [
        {"id": user_id, "email": "ann@example.com", "firstname": "Ann", "surname": "Lee", "role": "admin"}
    ]

    fetched = task_client.get(f"/tasks/findById/{created['id']}").json()
    assert [user["id"] for user in fetched["users"]] == [user_id]

    # Other reads leave the relation unloaded
    listed = task_client.get("/tasks/").json()
    assert "users" not in listed[0]


def test_assign_unknown_user_is_server_error(task_client, dishes):
    response = task_client.post("/tasks/", json={**dishes, "users": [{"id": 999}]})
    assert response.status_code == 500
    assert "999" in response.json()["detail"]


def test_update_replaces_assignees(task_app, task_client, dishes):
    ann = add_user(task_app, email="ann@example.com", firstname="Ann", surname="Lee", role="admin")
    bob = add_user(task_app, email="bob@example.com", firstname="Bob", surname="Ray", role="user")
    created = create_task(task_client, {**dishes, "users": [{"id": ann}]})

    response = task_client.put("/tasks/", json={"id": created["id"], "users": [{"id": bob}]})
    assert response.status_code == 200
    assert [user["id"] for user in response.json()["users"]] == [bob]

    fetched = task_client.get(f"/tasks/findById/{created['id']}").json()
    assert [user["id"] for user in fetched["users"]] == [bob]


def test_delete_task_with_assignees(task_app, task_client, dishes):
    ann = add_user(task_app, email="ann@example.com", firstname="Ann", surname="Lee", role="admin")
    created = create_task(task_client, {**dishes, "users": [{"id": ann}]})

    response = task_client.request("DELETE", "/tasks/", json={"id": created["id"]})
    assert response.status_code == 200

    with task_app.state.database.engine.connect() as connection:
        rows = connection.execute(text("SELECT COUNT(*) FROM task_users_user")).scalar()
    assert rows == 0


def test_health_and_root(task_client):
    assert task_client.get("/").json()["service"] == "task_service"

    health = task_client.get("/health").json()
    assert health["status"] == "healthy"
    assert health["database"] == "connected"
