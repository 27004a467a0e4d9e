"""Hallucinated URL evaluator -- flags malformed or unverifiable links.

Performs structural validation by default. A caller-supplied
``verifier`` enables live checks (e.g. an HTTP HEAD request); this
module never touches the network itself.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Awaitable, Callable, Iterable
from typing import Union
from urllib.parse import urlsplit

from llmassert.evaluation.evaluators.base import CallbackEvaluator, resolve_awaitable
from llmassert.models.context import EvaluationContext
from llmassert.models.result import EvaluationResult, Severity

logger = logging.getLogger(__name__)

UrlVerifier = Callable[[str], Union[bool, Awaitable[bool]]]

_URL_PATTERN = re.compile(r"https?://[^\s<>\"{}|\\^`\[\]]+")
# Sentence punctuation that trails a URL in prose
_TRAILING_PUNCTUATION = re.compile(r"[.,;:!?)]+$")

REASON_MALFORMED = "malformed URL"
REASON_UNREACHABLE = "unreachable"
REASON_VERIFICATION_FAILED = "verification failed"


def extract_urls(text: str) -> list[str]:
    """Extract http(s) URLs from text, stripping trailing punctuation."""
    return [_TRAILING_PUNCTUATION.sub("", url) for url in _URL_PATTERN.findall(text)]


def _hostname(url: str) -> str | None:
    try:
        return urlsplit(url).hostname
    except ValueError:
        return None


def is_structurally_valid(url: str) -> bool:
    """True when the URL parses and its hostname contains a dot.

    The dot requirement filters ``localhost``-style hosts.
    """
    hostname = _hostname(url)
    return bool(hostname) and "." in hostname


class NoHallucinatedUrlsEvaluator(CallbackEvaluator):
    """Evaluates whether every URL in a response is plausible.

    Score is the fraction of accepted URLs; any flagged URL fails.
    """

    name = "no_hallucinated_urls"
    category = "guardrail"

    def __init__(
        self,
        severity: Severity = "error",
        allowed_domains: Iterable[str] = (),
        verifier: UrlVerifier | None = None,
    ) -> None:
        super().__init__(severity)
        self.allowed_domains = [domain.lower() for domain in allowed_domains]
        self.verifier = verifier

    def _is_allowed(self, url: str) -> bool:
        hostname = _hostname(url)
        if not hostname:
            return False
        return any(
            hostname == domain or hostname.endswith(f".{domain}")
            for domain in self.allowed_domains
        )

    async def _check(self, url: str) -> str | None:
        """Return the flag reason for *url*, or None if it is accepted."""
        if self._is_allowed(url):
            return None

        if not is_structurally_valid(url):
            return REASON_MALFORMED

        if self.verifier is None:
            return None

        try:
            reachable = await resolve_awaitable(self.verifier(url))
        except Exception:
            logger.debug("URL verifier raised for %s", url, exc_info=True)
            return REASON_VERIFICATION_FAILED

        return None if reachable else REASON_UNREACHABLE

    async def evaluate_async(
        self, response: str, context: EvaluationContext | None = None
    ) -> EvaluationResult:
        urls = extract_urls(response)
        verification_enabled = self.verifier is not None

        if not urls:
            return self._result(
                passed=True,
                score=1.0,
                threshold=1.0,
                details="No URLs found in response",
                metadata={
                    "urls_found": 0,
                    "valid": [],
                    "flagged": [],
                    "verification_enabled": verification_enabled,
                },
            )

        valid: list[str] = []
        flagged: list[dict[str, str]] = []
        for url in urls:
            reason = await self._check(url)
            if reason is None:
                valid.append(url)
            else:
                flagged.append({"url": url, "reason": reason})

        passed = not flagged
        if passed:
            details = f"All {len(urls)} URL(s) passed validation"
        else:
            listing = ", ".join(f"{f['url']} ({f['reason']})" for f in flagged)
            details = f"{len(flagged)} of {len(urls)} URL(s) flagged: {listing}"

        return self._result(
            passed=passed,
            score=len(valid) / len(urls),
            threshold=1.0,
            details=details,
            metadata={
                "urls_found": len(urls),
                "valid": valid,
                "flagged": flagged,
                "verification_enabled": verification_enabled,
            },
        )


def no_hallucinated_urls(
    *,
    severity: Severity = "error",
    allowed_domains: Iterable[str] = (),
    verifier: UrlVerifier | None = None,
) -> NoHallucinatedUrlsEvaluator:
    """Create an evaluator detecting hallucinated URLs in a response.

    Args:
        severity: Severity of a failure.
        allowed_domains: Domains (and their subdomains) accepted without
            any checks.
        verifier: Optional ``url -> bool`` reachability check, sync or
            async. False flags the URL as unreachable; an exception flags
            it as verification failed.
    """
    return NoHallucinatedUrlsEvaluator(
        severity=severity, allowed_domains=allowed_domains, verifier=verifier
    )
