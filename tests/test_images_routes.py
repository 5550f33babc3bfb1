import io
import os
import shutil

from conftest import BASE_URL, make_image_bytes


def _upload(client, name="cat.jpg"):
    data = {"file": (io.BytesIO(make_image_bytes("JPEG", size=(320, 240))), name, "image/jpeg")}
    res = client.post("/upload/single", data=data, content_type="multipart/form-data")
    assert res.status_code == 200
    return res.get_json()["url"]


def test_index_is_live(client):
    res = client.get("/")
    assert res.status_code == 200
    assert b"Live" in res.data


def test_health(client):
    assert client.get("/health").get_json() == {"status": "ok"}


def test_listing_empty(client):
    assert client.get("/images").get_json() == {"success": True, "images": []}


def test_listing_tracks_directory(client, upload_dir):
    with open(os.path.join(upload_dir, "1-outside.txt"), "wb") as fh:
        fh.write(b"dropped in by hand")
    assert client.get("/images").get_json()["images"] == [f"{BASE_URL}/1-outside.txt"]

    os.remove(os.path.join(upload_dir, "1-outside.txt"))
    assert client.get("/images").get_json()["images"] == []


def test_listing_unreadable_dir(client, upload_dir):
    shutil.rmtree(upload_dir)
    res = client.get("/images")
    assert res.status_code == 500
    body = res.get_json()
    assert body["success"] is False
    assert body["message"]


def test_upload_list_delete_cycle(client):
    url = _upload(client, "cat.jpg")
    stored = url.rsplit("/", 1)[1]
    assert url in client.get("/images").get_json()["images"]

    res = client.delete(f"/images/{stored}")
    assert res.status_code == 200
    assert res.get_json() == {"success": True, "message": "Deleted successfully"}

    assert url not in client.get("/images").get_json()["images"]
    assert client.get(f"/uploads/{stored}").status_code == 404


def test_delete_missing_file(client):
    res = client.delete("/images/12345-nothing.png")
    assert res.status_code == 404
    assert res.get_json() == {"success": False, "message": "File not found or already deleted"}
    assert client.get("/metrics").get_json()["deletion_misses"] == 1


def test_static_cache_headers(client):
    stored = _upload(client).rsplit("/", 1)[1]
    res = client.get(f"/uploads/{stored}")

    assert res.status_code == 200
    assert res.headers["Cache-Control"] == "public, max-age=5184000, immutable"
    assert res.headers.get("ETag")
    assert res.mimetype == "image/jpeg"


def test_static_conditional_request(client):
    stored = _upload(client).rsplit("/", 1)[1]
    etag = client.get(f"/uploads/{stored}").headers["ETag"]

    res = client.get(f"/uploads/{stored}", headers={"If-None-Match": etag})
    assert res.status_code == 304


def test_static_unknown_file(client):
    assert client.get("/uploads/does-not-exist.png").status_code == 404


def test_request_id_header(client):
    res = client.get("/images")
    assert len(res.headers["X-Request-ID"]) == 12
