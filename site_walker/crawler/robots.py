# File: site_walker/crawler/robots.py
"""
Parser and checker for robots.txt rules (RFC 9309).
"""
from __future__ import annotations

import re
from typing import Dict, List, Optional, Tuple
from urllib.parse import urlsplit

DEFAULT_AGENT = "*"


class RobotsPolicy:
    """
    Immutable ruleset parsed once from a robots.txt body.
    An empty Disallow allows every path.
    """
    _WILDCARD_RE = re.compile(r"(\*|\$)")

    def __init__(self, text: str = "") -> None:
        self._groups: List[Dict[str, list]] = []
        self._regex_cache: Dict[str, re.Pattern[str]] = {}
        self._parse(text)

    @classmethod
    def allow_all(cls) -> RobotsPolicy:
        return cls("")

    def allowed(self, url: str, user_agent: str = DEFAULT_AGENT) -> bool:
        """Return True if ``user_agent`` may fetch ``url``."""
        parts = urlsplit(url)
        path = parts.path or "/"
        if parts.query:
            path = f"{path}?{parts.query}"
        return self.can_fetch(user_agent, path)

    def can_fetch(self, user_agent: str, path: str) -> bool:
        group = self._match_group(user_agent)
        if group is None:
            return True
        best_len = -1
        allow: Optional[bool] = None
        for directive, pattern in group["directives"]:
            if not self._match_path(path, pattern):
                continue
            length = self._rule_len(pattern)
            if length > best_len or (length == best_len and directive == "allow" and allow is False):
                best_len = length
                allow = directive == "allow"
        return True if allow is None else allow

    def _parse(self, text: str) -> None:
        current: Optional[Dict[str, list]] = None
        for raw in text.splitlines():
            line = raw.split("#", 1)[0].strip()
            if not line:
                continue
            key, _, val = line.partition(":")
            key = key.lower().strip()
            val = val.strip()
            if key == "user-agent":
                # consecutive user-agent lines share one group
                if current is None or current["directives"]:
                    current = {"agents": [], "directives": []}
                    self._groups.append(current)
                current["agents"].append(val.lower())
            elif key in ("allow", "disallow"):
                if key == "disallow" and val == "":
                    continue
                if current is None:
                    current = {"agents": ["*"], "directives": []}
                    self._groups.append(current)
                current["directives"].append((key, val))

    def _match_group(self, user_agent: str) -> Optional[Dict[str, list]]:
        ua = user_agent.lower()
        for group in self._groups:
            if any(a != "*" and ua.startswith(a) for a in group["agents"]):
                return group
        for group in self._groups:
            if "*" in group["agents"]:
                return group
        return None

    def _match_path(self, path: str, pattern: str) -> bool:
        if pattern not in self._regex_cache:
            esc = re.escape(pattern).replace(r"\*", ".*")
            if pattern.endswith("$"):
                esc = esc[:-2] + "$"
            self._regex_cache[pattern] = re.compile(f"^{esc}")
        return bool(self._regex_cache[pattern].match(path))

    @classmethod
    def _rule_len(cls, pattern: str) -> int:
        return len(cls._WILDCARD_RE.sub("", pattern))


def is_allowed(robots_txt: str, user_agent: str, url: str) -> bool:
    """One-shot check of ``url`` against a robots.txt body."""
    return RobotsPolicy(robots_txt).allowed(url, user_agent)
