"""Test the HTTP host."""

import http.client
import json
import threading

import pytest

from users_api.server import make_server


@pytest.fixture
def server(app):
    httpd = make_server(app, "127.0.0.1", 0)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield httpd

    httpd.shutdown()
    httpd.server_close()
    thread.join()


def _request(server, method, path, body=None):
    host, port = server.server_address[:2]
    conn = http.client.HTTPConnection(host, port, timeout=5)
    headers = {"Content-Type": "application/json"} if body is not None else {}
    conn.request(method, path, body=body, headers=headers)
    res = conn.getresponse()
    payload = res.read()
    conn.close()
    return res, payload


def test_crud_over_http(server):
    res, payload = _request(
        server, "POST", "/users", json.dumps({"name": "John", "email": "j@x.com"})
    )
    assert res.status == 201
    assert payload == b""

    res, payload = _request(server, "GET", "/users?search=john")
    assert res.status == 200
    assert res.getheader("Content-Type") == "application/json"
    users = json.loads(payload)
    assert [u["name"] for u in users] == ["John"]
    user_id = users[0]["id"]

    res, _ = _request(
        server, "PUT", f"/users/{user_id}", json.dumps({"name": "Jo", "email": None})
    )
    assert res.status == 204

    res, _ = _request(server, "DELETE", f"/users/{user_id}")
    assert res.status == 204

    res, payload = _request(server, "GET", "/users")
    assert json.loads(payload) == []


def test_not_found_over_http(server):
    res, payload = _request(server, "GET", "/unknown")
    assert res.status == 404
    assert json.loads(payload) == {
        "errorMessage": "No view function for: GET - /unknown"
    }


def test_concurrent_requests(server):
    """Requests served from several threads share one route table."""
    statuses = []

    def worker(n):
        res, _ = _request(
            server, "POST", "/users", json.dumps({"name": f"user{n}", "email": None})
        )
        statuses.append(res.status)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(10)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert statuses == [201] * 10
    _, payload = _request(server, "GET", "/users")
    assert len(json.loads(payload)) == 10


@pytest.mark.parametrize("method", ["PATCH", "OPTIONS"])
def test_unregistered_method_over_http(server, method):
    """Methods with no route reach the router and answer 404."""
    res, payload = _request(server, method, "/users")
    assert res.status == 404
    assert json.loads(payload) == {
        "errorMessage": f"No view function for: {method} - /users"
    }


def test_head_over_http(server):
    res, payload = _request(server, "HEAD", "/users")
    assert res.status == 404
    assert payload == b""


def test_invalid_content_length(server):
    host, port = server.server_address[:2]
    conn = http.client.HTTPConnection(host, port, timeout=5)
    conn.putrequest("POST", "/users")
    conn.putheader("Content-Length", "abc")
    conn.endheaders()
    res = conn.getresponse()
    payload = res.read()
    conn.close()

    assert res.status == 400
    assert json.loads(payload) == {"errorMessage": "Invalid Content-Length"}
