import inspect
import threading
import uuid

from app.models import Ticket, TicketStatusEnum


def _status_value(value):
    return value.value if hasattr(value, "value") else str(value)


def test_root_redirects_to_admin(client):
    response = client.get("/", follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/admin"


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_issue_ticket_renders_number_and_code(client, admin_headers, db_session):
    response = client.post("/admin/front/tickets", data={"group_size": "3"}, headers=admin_headers)

    assert response.status_code == 200
    assert "No. 1" in response.text
    assert "<svg" in response.text
    ticket = db_session.query(Ticket).one()
    assert f"https://venue.example/guest/{ticket.id}" in response.text
    assert ticket.group_size == 3


def test_issue_ticket_rejects_bad_group_size(client, admin_headers, db_session):
    response = client.post("/admin/front/tickets", data={"group_size": "0"}, headers=admin_headers)

    assert response.status_code == 400
    assert "Group size must be at least 1." in response.text
    assert db_session.query(Ticket).count() == 0


def test_call_page_lists_active_tickets(client, admin_headers, add_ticket):
    add_ticket(1)
    add_ticket(2, TicketStatusEnum.CALLED)
    add_ticket(3, TicketStatusEnum.COMPLETED)

    response = client.get("/admin/call", headers=admin_headers)

    assert response.status_code == 200
    assert "<td>1</td>" in response.text
    assert "<td>2</td>" in response.text
    assert "<td>3</td>" not in response.text


def test_update_status_redirects_to_call_page(client, admin_headers, add_ticket, db_session):
    ticket = add_ticket(1)

    response = client.post(
        "/admin/call/update",
        data={"id": str(ticket.id), "status": "called"},
        headers=admin_headers,
        follow_redirects=False,
    )

    assert response.status_code == 303
    assert response.headers["location"] == "/admin/call"
    db_session.refresh(ticket)
    assert _status_value(ticket.status) == TicketStatusEnum.CALLED.value


def test_update_status_unknown_status(client, admin_headers, add_ticket, db_session):
    ticket = add_ticket(1)

    response = client.post(
        "/admin/call/update",
        data={"id": str(ticket.id), "status": "done"},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert "Unknown status" in response.text
    db_session.refresh(ticket)
    assert _status_value(ticket.status) == TicketStatusEnum.WAITING.value


def test_update_status_unknown_ticket(client, admin_headers):
    response = client.post(
        "/admin/call/update",
        data={"id": str(uuid.uuid4()), "status": "called"},
        headers=admin_headers,
    )

    assert response.status_code == 404
    assert "Ticket not found" in response.text


def test_active_tickets_json(client, admin_headers, add_ticket):
    add_ticket(2)
    add_ticket(1, TicketStatusEnum.CALLED)

    response = client.get("/admin/tickets", headers=admin_headers)

    assert response.status_code == 200
    assert [row["number"] for row in response.json()] == [1, 2]
    assert response.json()[0]["status"] == "called"


def test_admin_index_shows_counts(client, admin_headers, add_ticket):
    add_ticket(1)
    add_ticket(2)

    response = client.get("/admin", headers=admin_headers)

    assert response.status_code == 200
    assert "Waiting: <strong>2</strong>" in response.text


def test_reset_clears_queue(client, admin_headers, add_ticket, db_session):
    add_ticket(5)

    response = client.post("/admin/reset", headers=admin_headers, follow_redirects=False)

    assert response.status_code == 303
    assert db_session.query(Ticket).count() == 0
    response = client.post("/admin/front/tickets", data={"group_size": "2"}, headers=admin_headers)
    assert "No. 1" in response.text


def test_guest_page_shows_waiting_count(client, add_ticket):
    add_ticket(1)
    add_ticket(2)
    ticket = add_ticket(3)

    response = client.get(f"/guest/{ticket.id}")

    assert response.status_code == 200
    assert "No. 3" in response.text
    assert "Groups ahead of you: <strong>2</strong>" in response.text
    assert f'hx-get="/guest/{ticket.id}/content"' in response.text


def test_guest_content_for_called_ticket(client, add_ticket):
    ticket = add_ticket(1, TicketStatusEnum.CALLED)

    response = client.get(f"/guest/{ticket.id}/content")

    assert response.status_code == 200
    assert "It's your turn" in response.text


def test_guest_unknown_ticket(client):
    for path in (f"/guest/{uuid.uuid4()}", "/guest/not-a-uuid", "/guest/not-a-uuid/content"):
        response = client.get(path)
        assert response.status_code == 404
        assert "Ticket not found" in response.text


def test_guest_status_json(client, add_ticket):
    add_ticket(1)
    ticket = add_ticket(2, group_size=4)

    response = client.get(f"/guest/{ticket.id}/status")

    assert response.status_code == 200
    assert response.json() == {
        "id": str(ticket.id),
        "number": 2,
        "group_size": 4,
        "status": "waiting",
        "waiting_count": 1,
    }
    assert client.get(f"/guest/{uuid.uuid4()}/status").status_code == 404


def test_store_failure_renders_error_page(client, admin_headers, monkeypatch):
    from app.services.exceptions import StoreFailure
    from app.services.store import TicketStore

    def broken(self):
        raise StoreFailure("Ticket store list_active failed")

    monkeypatch.setattr(TicketStore, "list_active", broken)

    response = client.get("/admin/call", headers=admin_headers)

    assert response.status_code == 500
    assert "Something went wrong" in response.text


def test_form_handlers_run_in_worker_threads():
    from app.routes import admin

    assert not inspect.iscoroutinefunction(admin.front_issue_ticket)
    assert not inspect.iscoroutinefunction(admin.call_update_status)


def test_issue_ticket_with_blank_group_size(client, admin_headers):
    response = client.post("/admin/front/tickets", data={"group_size": ""}, headers=admin_headers)

    assert response.status_code == 400
    assert "Group size must be a whole number." in response.text


def test_issue_ticket_does_not_block_other_requests(client, admin_headers, monkeypatch):
    from app.services.store import TicketStore

    original = TicketStore.lock_numbering
    started = threading.Event()
    release = threading.Event()

    def slow_lock(self):
        started.set()
        results["released"] = release.wait(5)
        original(self)

    monkeypatch.setattr(TicketStore, "lock_numbering", slow_lock)
    results = {}

    def issue():
        results["issue"] = client.post(
            "/admin/front/tickets", data={"group_size": "2"}, headers=admin_headers
        )

    thread = threading.Thread(target=issue)
    thread.start()
    assert started.wait(5)
    try:
        assert client.get("/health").status_code == 200
    finally:
        release.set()
        thread.join()

    assert results["released"] is True
    assert results["issue"].status_code == 200
