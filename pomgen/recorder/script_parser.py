"""Lexer for recorded test scripts.

A recorded script is plain text, one command per line::

    click(getElem("Click-Sign-in-1"));
    redirectTo("http://www.example.com/home");
    verifyNot(getElem("Verify-Error-2"));

Only two kinds of lines matter to the generator: step lines, which carry a
step id inside ``getElem(...)``, and redirect lines, which start with
``redirectTo`` and quote a target URL. Everything else is kept as an
ignored token so that line indexes stay aligned with the source.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Union

REDIRECT_TO = "redirectTo"
MODULE_MARKERS = ("@type module", "@type Module")

_STEP_ID_RE = re.compile(r"getElem\(\s*[\"']([^\"']+)[\"']\s*\)")
_REDIRECT_URL_RE = re.compile(r"^redirectTo\s*\(\s*([\"'])(.*?)\1")


@dataclass(frozen=True)
class StepToken:
    line_no: int
    step_id: str
    # Text before the first "(": the action as written in the script.
    action: str


@dataclass(frozen=True)
class RedirectToken:
    line_no: int
    url: str


@dataclass(frozen=True)
class OtherToken:
    line_no: int
    text: str


ScriptToken = Union[StepToken, RedirectToken, OtherToken]


def get_step_id(line: str) -> Optional[str]:
    m = _STEP_ID_RE.search(line)
    return m.group(1) if m else None


def get_redirect_url(line: str) -> Optional[str]:
    if not line.startswith(REDIRECT_TO):
        return None
    m = _REDIRECT_URL_RE.search(line)
    return m.group(2) if m and m.group(2) else None


def is_module(script: str) -> bool:
    """Return True when the script is marked as a composite (module) test."""
    return any(marker in script for marker in MODULE_MARKERS)


def tokenize_line(line_no: int, raw_line: str) -> ScriptToken:
    line = raw_line.strip()
    step_id = get_step_id(line)
    if step_id:
        return StepToken(line_no=line_no, step_id=step_id, action=line.split("(")[0].strip())
    url = get_redirect_url(line)
    if url is not None:
        return RedirectToken(line_no=line_no, url=url)
    return OtherToken(line_no=line_no, text=line)


def tokenize_script(script: str) -> List[ScriptToken]:
    return [tokenize_line(idx, line) for idx, line in enumerate(script.split("\n"))]


def following_redirects(tokens: List[ScriptToken]) -> List[Optional[RedirectToken]]:
    """For each index, the last redirect after it and before the next step.

    Single backward pass: ``tail`` holds the answer for the token just
    processed and is reset whenever a step token closes the window.
    """
    result: List[Optional[RedirectToken]] = [None] * len(tokens)
    tail: Optional[RedirectToken] = None
    for idx in range(len(tokens) - 1, -1, -1):
        result[idx] = tail
        token = tokens[idx]
        if isinstance(token, StepToken):
            tail = None
        elif isinstance(token, RedirectToken) and tail is None:
            tail = token
    return result
