"""Files routes — upload/delete forwarded to the file handler.

Invariants:
    - Upload sends base64 content, filename and the header identity
    - Upload uses the 30s upload timeout; delete uses the 10s read timeout
    - Any upstream failure → 500 "Failed to process file"
"""

import base64
import json

import httpx

from tests.upstream_stub import FILES_URL, USER_ID, timeout


def _upload_ok(request: httpx.Request) -> httpx.Response:
    payload = json.loads(request.content)
    return httpx.Response(200, json={
        "message": "File uploaded successfully",
        "fileKey": f"uploads/{payload['userId']}/{payload['filename']}",
        "url": f"https://files.example/{payload['filename']}",
    })


async def test_upload_forwards_base64_payload(client, upstream_stub):
    upstream_stub.reply(FILES_URL, _upload_ok)

    res = await client.post(
        "/api/files/upload",
        files={"file": ("helmet.png", b"\x89PNG-bytes", "image/png")},
    )

    assert res.status_code == 200
    assert res.json() == {
        "message": "File uploaded successfully",
        "fileId": f"uploads/{USER_ID}/helmet.png",
        "url": "https://files.example/helmet.png",
    }
    [call] = upstream_stub.calls_to(FILES_URL)
    assert call.method == "POST"
    assert call.headers["x-api-key"] == "secret-file_handler"
    assert json.loads(call.content) == {
        "action": "upload",
        "file": base64.b64encode(b"\x89PNG-bytes").decode("ascii"),
        "filename": "helmet.png",
        "userId": USER_ID,
    }


async def test_upload_uses_upload_timeout(client, upstream_stub):
    upstream_stub.reply(FILES_URL, _upload_ok)

    await client.post(
        "/api/files/upload", files={"file": ("a.txt", b"hello", "text/plain")},
    )

    [call] = upstream_stub.calls_to(FILES_URL)
    assert call.extensions["timeout"]["read"] == 30.0


async def test_empty_upload_is_400_without_upstream_call(client, upstream_stub):
    res = await client.post(
        "/api/files/upload", files={"file": ("a.txt", b"", "text/plain")},
    )

    assert res.status_code == 400
    assert upstream_stub.calls == []


async def test_upload_without_file_is_400(client, upstream_stub):
    res = await client.post("/api/files/upload", data={"note": "nothing"})

    assert res.status_code == 400
    assert upstream_stub.calls == []


async def test_upload_failure_is_500_generic(client, upstream_stub):
    upstream_stub.reply(FILES_URL, httpx.Response(502, text="bucket exploded"))

    res = await client.post(
        "/api/files/upload", files={"file": ("a.txt", b"hello", "text/plain")},
    )

    assert res.status_code == 500
    assert res.json()["error"]["message"] == "Failed to process file"
    assert "bucket" not in res.text


async def test_upload_timeout_is_500(client, upstream_stub):
    upstream_stub.reply(FILES_URL, timeout)

    res = await client.post(
        "/api/files/upload", files={"file": ("a.txt", b"hello", "text/plain")},
    )

    assert res.status_code == 500


async def test_upload_requires_identity(anon_client, upstream_stub):
    res = await anon_client.post(
        "/api/files/upload", files={"file": ("a.txt", b"hello", "text/plain")},
    )

    assert res.status_code == 401
    assert upstream_stub.calls == []


async def test_delete_forwards_file_key(client, upstream_stub):
    upstream_stub.reply(FILES_URL, httpx.Response(200, json={"ok": True}))

    res = await client.delete("/api/files/abc123")

    assert res.status_code == 200
    assert res.json() == {"message": "File deleted successfully"}
    [call] = upstream_stub.calls_to(FILES_URL)
    assert json.loads(call.content) == {
        "action": "delete", "fileKey": "abc123", "userId": USER_ID,
    }
    assert call.extensions["timeout"]["read"] == 10.0


async def test_delete_failure_is_500(client, upstream_stub):
    upstream_stub.reply(FILES_URL, httpx.Response(404))

    res = await client.delete("/api/files/abc123")

    assert res.status_code == 500
    assert res.json()["error"]["message"] == "Failed to process file"
