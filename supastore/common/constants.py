from typing import Final, Mapping

CLIENT_NAME: Final[str] = "supastore"
CLIENT_VERSION: Final[str] = "0.1.0"


def default_headers() -> dict[str, str]:
    """Headers sent with every storage request.

    A new dict is built on each call so callers can merge into it freely.
    """
    return {
        "Content-Type": "application/json",
        "X-Client-Info": f"{CLIENT_NAME}/{CLIENT_VERSION}",
    }


def merge_headers(*sources: Mapping[str, str] | None) -> dict[str, str]:
    """Merge header mappings left to right; later sources win.

    Header names compare case-insensitively, so ``content-type`` replaces
    ``Content-Type``.
    """
    merged: dict[str, str] = {}
    for source in sources:
        if not source:
            continue
        for key, value in source.items():
            for existing in [k for k in merged if k.lower() == key.lower()]:
                del merged[existing]
            merged[key] = value
    return merged
