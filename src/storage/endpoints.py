"""Data-plane endpoint helpers for a storage account."""


def _normalize_base_uri(base_uri: str) -> str:
    base = base_uri.strip()
    for scheme in ("https://", "http://"):
        if base.startswith(scheme):
            base = base[len(scheme):]
    return base.strip("./")


def get_file_endpoint(base_uri: str, account_name: str) -> str:
    """Return e.g. ``https://mystorage.file.core.windows.net``."""
    return f"https://{account_name}.file.{_normalize_base_uri(base_uri)}"
