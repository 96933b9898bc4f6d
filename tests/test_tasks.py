import pytest

from app.core.errors import NotFound
from app.models.daily_completion import DailyCompletion
from app.models.focus_entry import FocusEntry
from app.models.task import Task
from app.services import focus_service, progress_service, task_service


# ========== TEST CREATE TASK ==========
def test_create_task_success(client, auth_headers):
    """Tester la création réussie d'une tâche"""
    response = client.post("/tasks", headers=auth_headers, json={"title": "Lire 20 pages", "priority": "high"})
    assert response.status_code == 201
    data = response.json()
    assert data["title"] == "Lire 20 pages"
    assert data["priority"] == "high"
    assert data["isCompleted"] is False


def test_create_task_defaults_and_trim(client, auth_headers):
    response = client.post("/tasks", headers=auth_headers, json={"title": "  Méditer  ", "description": " 10 min "})
    assert response.status_code == 201
    data = response.json()
    assert data["title"] == "Méditer"
    assert data["description"] == "10 min"
    assert data["priority"] == "medium"


def test_create_task_empty_title(client, auth_headers):
    response = client.post("/tasks", headers=auth_headers, json={"title": "   "})
    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"

    response = client.post("/tasks", headers=auth_headers, json={})
    assert response.status_code == 400


def test_create_task_invalid_priority(client, auth_headers):
    response = client.post("/tasks", headers=auth_headers, json={"title": "X", "priority": "urgent"})
    assert response.status_code == 400


# ========== TEST LIST / GET ==========
def test_list_tasks_newest_first(client, auth_headers):
    for title in ["Tâche 1", "Tâche 2", "Tâche 3"]:
        client.post("/tasks", headers=auth_headers, json={"title": title})

    response = client.get("/tasks", headers=auth_headers)
    assert response.status_code == 200
    titles = [t["title"] for t in response.json()]
    assert titles == ["Tâche 3", "Tâche 2", "Tâche 1"]


def test_tasks_are_isolated_per_owner(client, auth_headers, other_headers):
    task_id = client.post("/tasks", headers=auth_headers, json={"title": "Privée"}).json()["id"]

    assert client.get("/tasks", headers=other_headers).json() == []
    assert client.get(f"/tasks/{task_id}", headers=other_headers).status_code == 404
    assert client.put(f"/tasks/{task_id}", headers=other_headers, json={"title": "Hack"}).status_code == 404
    assert client.delete(f"/tasks/{task_id}", headers=other_headers).status_code == 404


def test_get_task_not_found(client, auth_headers):
    response = client.get("/tasks/9999", headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


# ========== TEST UPDATE ==========
def test_update_task_partial(client, auth_headers):
    task_id = client.post("/tasks", headers=auth_headers,
                          json={"title": "Originale", "description": "desc", "priority": "low"}).json()["id"]

    response = client.put(f"/tasks/{task_id}", headers=auth_headers, json={"priority": "high"})
    assert response.status_code == 200
    data = response.json()
    assert data["priority"] == "high"
    assert data["title"] == "Originale"
    assert data["description"] == "desc"


def test_update_task_rejects_empty_title(client, auth_headers):
    task_id = client.post("/tasks", headers=auth_headers, json={"title": "Ok"}).json()["id"]
    response = client.put(f"/tasks/{task_id}", headers=auth_headers, json={"title": ""})
    assert response.status_code == 400
    assert client.get(f"/tasks/{task_id}", headers=auth_headers).json()["title"] == "Ok"


# ========== TEST DELETE (CASCADE) ==========
def test_delete_task_cascades(db, test_user):
    """La suppression retire les DailyCompletion et FocusEntry de la tâche"""
    task = task_service.create_task(db, test_user.id, "Courir")
    keep = task_service.create_task(db, test_user.id, "Dormir")
    progress_service.toggle(db, test_user.id, task.id)
    progress_service.toggle(db, test_user.id, keep.id)
    focus_service.add(db, test_user.id, task.id)
    focus_service.add(db, test_user.id, keep.id)

    deleted_progress, deleted_focus = task_service.delete_task(db, test_user.id, task.id)
    assert deleted_progress == 1
    assert deleted_focus == 1

    assert db.query(Task).filter(Task.id == task.id).first() is None
    assert db.query(DailyCompletion).filter(DailyCompletion.task_id == task.id).count() == 0
    assert db.query(FocusEntry).filter(FocusEntry.task_id == task.id).count() == 0

    # l'entrée restante est renumérotée à 1
    remaining = focus_service.list_entries(db, test_user.id)
    assert [(e.task_id, e.order) for e in remaining] == [(keep.id, 1)]

    # plus rien à nettoyer
    assert task_service.cleanup_orphans(db, test_user.id) == (0, 0)


def test_delete_task_endpoint(client, auth_headers):
    task_id = client.post("/tasks", headers=auth_headers, json={"title": "À supprimer"}).json()["id"]
    client.post(f"/tasks/{task_id}/toggle", headers=auth_headers)

    response = client.delete(f"/tasks/{task_id}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["deletedProgressRecords"] == 1
    assert client.get("/tasks", headers=auth_headers).json() == []
    assert client.delete(f"/tasks/{task_id}", headers=auth_headers).status_code == 404


# ========== TEST CLEANUP ==========
def test_cleanup_orphans(db, test_user, other_user):
    """Un batch interrompu laisse des orphelins, cleanup les supprime"""
    task = task_service.create_task(db, test_user.id, "Orpheline")
    alive = task_service.create_task(db, test_user.id, "Vivante")
    other_task = task_service.create_task(db, other_user.id, "Autre")
    progress_service.toggle(db, test_user.id, task.id)
    progress_service.toggle(db, test_user.id, alive.id)
    progress_service.toggle(db, other_user.id, other_task.id)
    focus_service.add(db, test_user.id, task.id)
    focus_service.add(db, test_user.id, alive.id)

    # suppression brute de la tâche, sans cascade
    db.query(Task).filter(Task.id == task.id).delete()
    db.commit()

    assert task_service.cleanup_orphans(db, test_user.id) == (1, 1)
    assert db.query(DailyCompletion).filter(DailyCompletion.user_id == test_user.id).count() == 1
    assert db.query(DailyCompletion).filter(DailyCompletion.user_id == other_user.id).count() == 1
    assert [e.order for e in focus_service.list_entries(db, test_user.id)] == [1]

    assert task_service.cleanup_orphans(db, test_user.id) == (0, 0)


def test_cleanup_endpoint(client, auth_headers):
    response = client.post("/tasks/cleanup", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["deletedOrphanedRecords"] == 0
    assert data["deletedOrphanedFocusEntries"] == 0


def test_delete_missing_task_raises(db, test_user):
    with pytest.raises(NotFound):
        task_service.delete_task(db, test_user.id, 12345)


# ========== TEST DEBUG DATE ==========
def test_server_date(client, auth_headers):
    response = client.get("/tasks/debug/date", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["utcOffsetMinutes"] == 330
    assert data["referenceTime"].endswith("+05:30")
