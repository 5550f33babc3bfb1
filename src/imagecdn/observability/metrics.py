import threading

METRICS = {
    "upload_batches": 0,
    "upload_files_total": 0,
    "upload_rejections": 0,
    "upload_failures": 0,
    "deletions": 0,
    "deletion_misses": 0,
}

_lock = threading.Lock()

def inc(key, value=1):
    with _lock:
        METRICS[key] = METRICS.get(key, 0) + value

def snapshot():
    with _lock:
        return dict(METRICS)

def reset():
    with _lock:
        for key in METRICS:
            METRICS[key] = 0
