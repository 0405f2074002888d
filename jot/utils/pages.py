"""HTML pages for the browser side of device authorization."""

import html
from pathlib import Path
from string import Template
from urllib.parse import quote

WEB_DIR = Path(__file__).resolve().parent.parent / "web"


def _render(name: str, **values: str) -> str:
    template = Template((WEB_DIR / name).read_text(encoding="utf-8"))
    return template.safe_substitute({k: html.escape(v, quote=True) for k, v in values.items()})


def device_auth_page(code: str, email: str = "") -> str:
    return _render("device_auth.html", code=code, code_path=quote(code, safe=""), email=email)


def device_auth_error_page(code: str, error: str, email: str) -> str:
    """Error page; shows the code, the error and the submitted email, never secrets."""
    return _render(
        "device_auth_error.html",
        code=code,
        code_path=quote(code, safe=""),
        error=error,
        email=email,
    )


def device_auth_success_page() -> str:
    return _render("device_auth_success.html")
