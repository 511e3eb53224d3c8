from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel

from pytriple._format import describe_triple, summarize_for_log
from pytriple.models.triple import Triple


class _Credentials(BaseModel):
    user: str
    api_key: str


@dataclass
class _Session:
    access_token: str
    scopes: list[str]


def test_summarize_redacts_sensitive_keys() -> None:
    payload = {
        "user": "alice",
        "password": "pw",
        "nested": {"Refresh-Token": "r"},
        "items": [{"token": "t"}],
    }

    summarized = summarize_for_log(payload)
    assert summarized["user"] == "alice"
    assert summarized["password"] == "<redacted>"
    assert summarized["nested"]["Refresh-Token"] == "<redacted>"
    assert summarized["items"][0]["token"] == "<redacted>"


def test_summarize_handles_models_and_dataclasses() -> None:
    assert summarize_for_log(_Credentials(user="bob", api_key="k")) == {"user": "bob", "api_key": "<redacted>"}
    assert summarize_for_log(_Session(access_token="a", scopes=["read"])) == {
        "access_token": "<redacted>",
        "scopes": ["read"],
    }


def test_summarize_truncates_long_strings_and_bytes() -> None:
    assert summarize_for_log("x" * 50, max_string=10) == "x" * 10 + "…<truncated>"
    assert summarize_for_log(b"\x00\x01\x02") == "<bytes:3b>"


def test_summarize_renders_exceptions() -> None:
    assert summarize_for_log(ValueError("bad")) == "ValueError(bad)"


def test_describe_triple() -> None:
    text = describe_triple(Triple(state={"token": "t", "n": 1}).with_error("boom"))
    assert text.startswith("event=error loading=False")
    assert "'<redacted>'" in text
    assert "error='boom'" in text
