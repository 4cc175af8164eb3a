"""HTTP API over the store and entry services."""

from __future__ import annotations

import logging
import os
from http import HTTPStatus

from flask import Flask, Response, jsonify, request

from silverbrain.entry_service import SqlEntryService
from silverbrain.service import (
    BadArgumentsError,
    EntryCreateRequest,
    EntryLoadOptions,
    InvalidAttachmentFilePathError,
    InvalidStoreNameError,
    NotFoundError,
    RequestContext,
    ServiceError,
)
from silverbrain.store import SqliteStore

_log = logging.getLogger(__name__)

STORE_NAME_HEADER = "X-SB-StoreName"
ROOT_GREETING = "Silver Brain v2"

_BAD_REQUEST_ERRORS = (
    BadArgumentsError,
    InvalidStoreNameError,
    InvalidAttachmentFilePathError,
)

_RESERVED_ROUTES = (
    ("/api/v2/entries/<item_id>", ("PATCH", "DELETE")),
    ("/api/v2/links", ("POST",)),
    ("/api/v2/links/<item_id>", ("GET", "PATCH", "DELETE")),
    ("/api/v2/attachments", ("POST",)),
    ("/api/v2/attachments/<item_id>", ("GET", "PATCH", "DELETE")),
)


class ServerState:
    """The services shared by every request."""

    def __init__(self, data_path: str | os.PathLike[str]) -> None:
        self.store = SqliteStore(data_path)
        self.entry_service = SqlEntryService(self.store)


def status_for_error(error: BaseException) -> HTTPStatus:
    """Return the HTTP status that answers a failed operation."""
    if isinstance(error, NotFoundError):
        return HTTPStatus.NOT_FOUND
    if isinstance(error, _BAD_REQUEST_ERRORS):
        return HTTPStatus.BAD_REQUEST
    return HTTPStatus.INTERNAL_SERVER_ERROR


def _store_name() -> str:
    name = request.headers.get(STORE_NAME_HEADER)
    if name is None:
        raise InvalidStoreNameError(f"missing header {STORE_NAME_HEADER}")
    return name


def _request_context() -> RequestContext:
    return RequestContext(store_name=_store_name())


def _plain(text: str, status: HTTPStatus = HTTPStatus.OK) -> Response:
    return Response(text, status=status, mimetype="text/plain")


def create_app(state: ServerState) -> Flask:
    """Build the web application serving the v2 API."""
    app = Flask(__name__)

    @app.before_request
    def _log_request() -> None:
        _log.debug("started %s %s", request.method, request.path)

    @app.errorhandler(ServiceError)
    def _service_error(error: ServiceError) -> Response:
        status = status_for_error(error)
        if status is HTTPStatus.INTERNAL_SERVER_ERROR:
            _log.error("internal error: %s", error)
        else:
            _log.debug("request failed: %s", error)
        return _plain("", status)

    @app.get("/")
    def root() -> Response:
        return _plain(ROOT_GREETING)

    @app.post("/api/v2/stores")
    def create_store() -> Response:
        name = _store_name()
        _log.info("Creating store %s", name)
        state.store.create_store(name)
        return _plain("", HTTPStatus.CREATED)

    @app.get("/api/v2/stores")
    def list_stores() -> Response:
        return jsonify(state.store.list_stores())

    @app.delete("/api/v2/stores")
    def delete_store() -> Response:
        state.store.delete_store(_store_name())
        return _plain("", HTTPStatus.NO_CONTENT)

    @app.post("/api/v2/entries")
    def create_entry() -> Response:
        data = request.get_json(silent=True)
        if data is None:
            raise BadArgumentsError("request body must be JSON")
        create_request = EntryCreateRequest.from_json(data)
        context = _request_context()
        entry_id = state.entry_service.create_entry(context, create_request)
        return _plain(entry_id, HTTPStatus.CREATED)

    @app.get("/api/v2/entries/<entry_id>")
    def get_entry(entry_id: str) -> Response:
        context = _request_context()
        options = EntryLoadOptions.from_load_param(request.args.get("load"))
        entry = state.entry_service.get_entry(context, entry_id, options)
        return jsonify(entry.to_dict())

    def reserved(**_params: str) -> Response:
        """Routes the API names without behaviour yet; they answer with empty success."""
        return _plain("")

    for rule, methods in _RESERVED_ROUTES:
        endpoint = "reserved:" + rule + ":" + ",".join(methods)
        app.add_url_rule(rule, endpoint=endpoint, view_func=reserved, methods=list(methods))

    return app


def start(data_path: str | os.PathLike[str], port: int) -> None:
    """Serve the API on 127.0.0.1 at ``port`` until interrupted."""
    app = create_app(ServerState(data_path))
    app.run(host="127.0.0.1", port=port)