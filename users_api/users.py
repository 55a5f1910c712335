"""users: CRUD handlers over the ``users`` table."""

import json
import uuid
from typing import Optional

from users_api import StatusCode
from users_api.proxy import API
from users_api.storage import Database, Storage
from users_api.types import Request, Response

TABLE = "users"


def _empty(status_code: StatusCode) -> Response:
    return Response(status_code=status_code, content_type="application/json", body="")


def _bad_request(message: str) -> Response:
    return Response(
        status_code=StatusCode.BAD_REQUEST,
        content_type="application/json",
        body=json.dumps({"errorMessage": message}),
    )


def create_app(database: Optional[Storage] = None, debug: bool = False) -> API:
    """Build the users API on top of ``database``."""
    app = API(name="users_api", debug=debug)
    db: Storage = database if database is not None else Database()

    @app.get("/users")
    def list_users(request: Request) -> Response:
        """List users, optionally filtered by name or email."""
        search = request.query.get("search")
        users = db.select(TABLE, {"name": search, "email": search} if search else None)
        return Response(
            status_code=StatusCode.OK,
            content_type="application/json",
            body=json.dumps(users),
        )

    @app.post("/users")
    def create_user(request: Request) -> Response:
        """Create a user."""
        if not isinstance(request.body, dict):
            return _bad_request("Request body must be a JSON object")

        user = {
            "id": str(uuid.uuid4()),
            "name": request.body.get("name"),
            "email": request.body.get("email"),
        }
        db.insert(TABLE, user)
        return _empty(StatusCode.CREATED)

    @app.put("/users/:id")
    def update_user(request: Request) -> Response:
        """Replace the name and email of a user."""
        if not isinstance(request.body, dict):
            return _bad_request("Request body must be a JSON object")

        data = {"name": request.body.get("name"), "email": request.body.get("email")}
        if not db.update(TABLE, request.params["id"], data):
            return _empty(StatusCode.NOT_FOUND)
        return _empty(StatusCode.NO_CONTENT)

    @app.delete("/users/:id")
    def delete_user(request: Request) -> Response:
        """Delete a user."""
        if not db.delete(TABLE, request.params["id"]):
            return _empty(StatusCode.NOT_FOUND)
        return _empty(StatusCode.NO_CONTENT)

    return app
