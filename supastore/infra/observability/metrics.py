import re

from prometheus_client import Counter, Histogram

# 低基数标签：endpoint 使用模板（如 /bucket/{id}），避免 bucket 名与对象路径导致高基数
REQUESTS = Counter(
    "storage_client_requests_total",
    "Total storage API requests issued by the client",
    ["method", "endpoint", "status"],
)

LATENCY = Histogram(
    "storage_client_request_duration_seconds",
    "Storage API request latency in seconds",
    ["method", "endpoint"],
)

_STORAGE_ROOT = re.compile(r"^.*?/storage/v1")

_OBJECT_ACTIONS = {
    "list",
    "move",
    "copy",
    "sign",
    "public",
    "authenticated",
}


def endpoint_template(path: str) -> str:
    """Collapse a request path into a low-cardinality template.

    ``/storage/v1/bucket/avatars/empty`` -> ``/bucket/{id}/empty``
    ``/storage/v1/object/sign/avatars/a/b.png`` -> ``/object/sign/{id}``
    """
    path = _STORAGE_ROOT.sub("", path)
    segments = [s for s in path.split("/") if s]
    if not segments:
        return "/"
    head = segments[0]
    if head == "bucket":
        if len(segments) == 1:
            return "/bucket"
        if len(segments) >= 3 and segments[2] == "empty":
            return "/bucket/{id}/empty"
        return "/bucket/{id}"
    if head == "object":
        if len(segments) == 1:
            return "/object"
        if segments[1] in _OBJECT_ACTIONS:
            if len(segments) == 2:
                return f"/object/{segments[1]}"
            return f"/object/{segments[1]}/{{id}}"
        return "/object/{id}"
    if head == "render" and len(segments) >= 3:
        return f"/render/{segments[1]}/{segments[2]}/{{id}}"
    return f"/{head}"
