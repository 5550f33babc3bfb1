import time

from imagecdn.services.naming import stored_filename


def test_prefixes_timestamp():
    assert stored_filename("cat.jpg", now_ms=170000000000) == "170000000000-cat.jpg"


def test_uses_current_millis():
    before = int(time.time() * 1000)
    name = stored_filename("dog.png")
    after = int(time.time() * 1000)
    stamp, rest = name.split("-", 1)
    assert rest == "dog.png"
    assert before <= int(stamp) <= after


def test_original_name_kept_verbatim():
    assert stored_filename("my photo-1.JPG", now_ms=5) == "5-my photo-1.JPG"
