from http import HTTPStatus

import pytest

from silverbrain.http import (
    ROOT_GREETING,
    STORE_NAME_HEADER,
    ServerState,
    create_app,
    status_for_error,
)
from silverbrain.ksuid import ksuid_timestamp
from silverbrain.service import (
    BadArgumentsError,
    InvalidAttachmentFilePathError,
    InvalidStoreNameError,
    NotFoundError,
    ServiceError,
)


@pytest.fixture
def state(tmp_path):
    return ServerState(tmp_path / "data")


@pytest.fixture
def client(state):
    return create_app(state).test_client()


def _header(name="notes"):
    return {STORE_NAME_HEADER: name}


def _make_store(client, name="notes"):
    response = client.post("/api/v2/stores", headers=_header(name))
    assert response.status_code == HTTPStatus.CREATED
    return name


def test_root_greets(client):
    response = client.get("/")
    assert response.status_code == HTTPStatus.OK
    assert response.get_data(as_text=True) == ROOT_GREETING


def test_create_store_without_header_is_bad_request(client):
    response = client.post("/api/v2/stores")
    assert response.status_code == HTTPStatus.BAD_REQUEST


def test_create_and_list_stores(client):
    _make_store(client, "alpha")
    _make_store(client, "beta")
    response = client.get("/api/v2/stores")
    assert response.status_code == HTTPStatus.OK
    assert response.get_json() == ["alpha", "beta"]


def test_create_store_twice_keeps_one(client):
    _make_store(client, "alpha")
    _make_store(client, "alpha")
    assert client.get("/api/v2/stores").get_json() == ["alpha"]


def test_list_stores_without_store_directory_fails(client):
    response = client.get("/api/v2/stores")
    assert response.status_code == HTTPStatus.INTERNAL_SERVER_ERROR


def test_delete_store(client):
    _make_store(client, "alpha")
    response = client.delete("/api/v2/stores", headers=_header("alpha"))
    assert response.status_code == HTTPStatus.NO_CONTENT
    assert client.get("/api/v2/stores").get_json() == []


def test_delete_store_without_header_is_bad_request(client):
    response = client.delete("/api/v2/stores")
    assert response.status_code == HTTPStatus.BAD_REQUEST


def test_create_entry_then_get_it(client):
    store = _make_store(client)
    response = client.post(
        "/api/v2/entries",
        json={"name": "Vim", "content_type": "text/md", "content": "Vi IMproved"},
        headers=_header(store),
    )
    assert response.status_code == HTTPStatus.CREATED
    entry_id = response.get_data(as_text=True)
    assert ksuid_timestamp(entry_id).year >= 2023

    fetched = client.get(
        f"/api/v2/entries/{entry_id}?load=contents,times", headers=_header(store)
    )
    assert fetched.status_code == HTTPStatus.OK
    body = fetched.get_json()
    assert body["id"] == entry_id
    assert body["name"] == "Vim"
    assert body["content_type"] == "text/md"
    assert body["content"] == "Vi IMproved"
    assert body["create_time"] == body["update_time"]
    assert "attachments" not in body


def test_get_entry_without_load_omits_optional_parts(client):
    store = _make_store(client)
    entry_id = client.post(
        "/api/v2/entries", json={"name": "Emacs"}, headers=_header(store)
    ).get_data(as_text=True)
    body = client.get(f"/api/v2/entries/{entry_id}", headers=_header(store)).get_json()
    assert body == {"id": entry_id, "name": "Emacs"}


def test_get_entry_with_attachments_lists_none(client):
    store = _make_store(client)
    entry_id = client.post(
        "/api/v2/entries", json={"name": "Emacs"}, headers=_header(store)
    ).get_data(as_text=True)
    body = client.get(
        f"/api/v2/entries/{entry_id}?load=attachments", headers=_header(store)
    ).get_json()
    assert body["attachments"] == []


def test_get_missing_entry_is_not_found(client):
    store = _make_store(client)
    response = client.get("/api/v2/entries/missing", headers=_header(store))
    assert response.status_code == HTTPStatus.NOT_FOUND


def test_create_entry_with_invalid_json_is_bad_request(client):
    store = _make_store(client)
    response = client.post(
        "/api/v2/entries",
        data="{not json",
        content_type="application/json",
        headers=_header(store),
    )
    assert response.status_code == HTTPStatus.BAD_REQUEST


def test_create_entry_without_name_is_bad_request(client):
    store = _make_store(client)
    response = client.post("/api/v2/entries", json={"content": "x"}, headers=_header(store))
    assert response.status_code == HTTPStatus.BAD_REQUEST


def test_create_entry_without_header_is_bad_request(client):
    response = client.post("/api/v2/entries", json={"name": "Vim"})
    assert response.status_code == HTTPStatus.BAD_REQUEST


def test_reserved_routes_answer_empty_success(client):
    response = client.patch("/api/v2/links/abc")
    assert response.status_code == HTTPStatus.OK
    assert response.get_data(as_text=True) == ""


@pytest.mark.parametrize(
    ("error", "status"),
    [
        (NotFoundError("x"), HTTPStatus.NOT_FOUND),
        (BadArgumentsError("x"), HTTPStatus.BAD_REQUEST),
        (InvalidStoreNameError("x"), HTTPStatus.BAD_REQUEST),
        (InvalidAttachmentFilePathError("x"), HTTPStatus.BAD_REQUEST),
        (ServiceError("x"), HTTPStatus.INTERNAL_SERVER_ERROR),
        (RuntimeError("x"), HTTPStatus.INTERNAL_SERVER_ERROR),
    ],
)
def test_status_for_error(error, status):
    assert status_for_error(error) == status


def test_server_state_creates_data_directory(tmp_path):
    path = tmp_path / "fresh"
    state = ServerState(path)
    assert path.is_dir()
    assert state.entry_service.store is state.store